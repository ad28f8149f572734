"""FastAPI application for the healthmate JSON API."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..clients import OpenRouterClient
from ..config import Settings, configure_logging
from ..db import HealthLogRepository, UserProfileRepository, init_db
from ..errors import NotFoundError, PersistenceConflict, ValidationError
from ..services import HealthAssistant, HealthLogService
from .routers import ai, health, profile

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler - runs on startup and shutdown."""
    settings: Settings = app.state.settings
    await init_db(settings.db_path)
    logger.info("Database ready at %s", settings.db_path)
    yield


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    if settings is None:
        settings = Settings.from_env()
        configure_logging(settings.log_level)

    app = FastAPI(
        title="healthmate",
        description="Personal health tracking API with an AI assistant",
        version=__version__,
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    log_repo = HealthLogRepository(settings.db_path)
    profile_repo = UserProfileRepository(settings.db_path)
    client = OpenRouterClient(settings) if settings.ai_configured else None

    app.state.settings = settings
    app.state.profile_repo = profile_repo
    app.state.log_service = HealthLogService(log_repo, profile_repo)
    app.state.assistant = HealthAssistant(client, log_repo, profile_repo)

    @app.exception_handler(ValidationError)
    async def validation_error(request: Request, exc: ValidationError):
        return JSONResponse(status_code=422, content=exc.to_dict())

    @app.exception_handler(NotFoundError)
    async def not_found(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content={"message": str(exc)})

    @app.exception_handler(PersistenceConflict)
    async def conflict(request: Request, exc: PersistenceConflict):
        logger.error("Write conflict on %s: %s", request.url.path, exc)
        return JSONResponse(status_code=409, content={"message": str(exc)})

    app.include_router(health.router)
    app.include_router(ai.router)
    app.include_router(profile.router)

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    return app

"""Runtime configuration for healthmate.

Settings are resolved once at process start (CLI entry point or web app
factory) and handed to the components that need them.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Default data directory
DATA_DIR = Path(__file__).parent.parent.parent / "data"

DEFAULT_API_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_MODEL = "minimax/minimax-m2:free"


@dataclass
class Settings:
    """Process-wide configuration."""

    data_dir: Path = DATA_DIR
    api_key: str | None = None
    api_base_url: str = DEFAULT_API_BASE_URL
    model: str = DEFAULT_MODEL
    app_url: str = "http://localhost:3000"
    app_title: str = "HealthMate"
    cors_origins: list[str] = field(default_factory=lambda: ["http://localhost:3000"])
    log_level: str = "INFO"

    @property
    def db_path(self) -> Path:
        """Path of the SQLite database inside the data directory."""
        return self.data_dir / "healthmate.db"

    @property
    def ai_configured(self) -> bool:
        return bool(self.api_key)

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the environment (and a .env file if present)."""
        load_dotenv()

        origins = os.getenv("HEALTHMATE_CORS_ORIGINS")
        data_dir = os.getenv("HEALTHMATE_DATA_DIR")

        settings = cls(
            api_key=os.getenv("OPENROUTER_API_KEY"),
            api_base_url=os.getenv("HEALTHMATE_API_BASE_URL", DEFAULT_API_BASE_URL),
            model=os.getenv("HEALTHMATE_MODEL", DEFAULT_MODEL),
            app_url=os.getenv("HEALTHMATE_APP_URL", "http://localhost:3000"),
            app_title=os.getenv("HEALTHMATE_APP_TITLE", "HealthMate"),
            log_level=os.getenv("HEALTHMATE_LOG_LEVEL", "INFO").upper(),
        )
        if data_dir:
            settings.data_dir = Path(data_dir)
        if origins:
            settings.cors_origins = [o.strip() for o in origins.split(",") if o.strip()]
        return settings


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # Keep third-party HTTP chatter out of the application log
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("openai").setLevel(logging.WARNING)

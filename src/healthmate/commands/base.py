"""Shared CLI utilities."""

import asyncio
from functools import wraps

import click

from ..clients import OpenRouterClient
from ..config import Settings
from ..db import HealthLogRepository, UserProfileRepository
from ..errors import HealthMateError
from ..services import HealthAssistant, HealthLogService


def async_command(f):
    """Decorator to run async Click commands."""

    @wraps(f)
    def wrapper(*args, **kwargs):
        return asyncio.run(f(*args, **kwargs))

    return wrapper


def get_settings(ctx: click.Context) -> Settings:
    """Settings resolved by the root command, or from the environment."""
    root = ctx.find_root()
    if not isinstance(root.obj, Settings):
        root.obj = Settings.from_env()
    return root.obj


def ensure_initialized(ctx: click.Context) -> None:
    """Ensure the database is initialized."""
    settings = get_settings(ctx)
    if not settings.db_path.exists():
        click.echo(
            click.style("Error: ", fg="red")
            + "Project not initialized. Run 'healthmate init' first."
        )
        ctx.exit(1)


def build_log_service(settings: Settings) -> HealthLogService:
    return HealthLogService(
        HealthLogRepository(settings.db_path),
        UserProfileRepository(settings.db_path),
    )


def build_assistant(settings: Settings) -> HealthAssistant:
    client = OpenRouterClient(settings) if settings.ai_configured else None
    return HealthAssistant(
        client,
        HealthLogRepository(settings.db_path),
        UserProfileRepository(settings.db_path),
    )


async def resolve_user_id(ctx: click.Context, user_id: int | None) -> int:
    """Use the given user ID, or fall back to the most recent profile."""
    if user_id is not None:
        return user_id
    settings = get_settings(ctx)
    profile = await UserProfileRepository(settings.db_path).get_latest()
    if profile is None:
        echo_error("No profile found. Create one with 'healthmate profile setup'")
        ctx.exit(1)
    return profile.id


def fail(ctx: click.Context, error: HealthMateError) -> None:
    """Report a core error and exit with status 1."""
    echo_error(str(error))
    ctx.exit(1)


def echo_success(message: str) -> None:
    """Print a success message."""
    click.echo(click.style("[OK] ", fg="green") + message)


def echo_error(message: str) -> None:
    """Print an error message."""
    click.echo(click.style("[ERROR] ", fg="red") + message)


def echo_info(message: str) -> None:
    """Print an info message."""
    click.echo(click.style("[INFO] ", fg="blue") + message)


def echo_warning(message: str) -> None:
    """Print a warning message."""
    click.echo(click.style("[WARN] ", fg="yellow") + message)


def format_table(headers: list[str], rows: list[list[str]], padding: int = 2) -> str:
    """Format data as a simple table."""
    if not rows:
        return ""

    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(str(cell)))

    lines = ["".join(h.ljust(widths[i] + padding) for i, h in enumerate(headers))]
    lines.append("".join("-" * w + " " * padding for w in widths))
    for row in rows:
        lines.append(
            "".join(str(cell).ljust(widths[i] + padding) for i, cell in enumerate(row))
        )

    return "\n".join(line.rstrip() for line in lines)

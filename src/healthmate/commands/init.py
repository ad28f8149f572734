"""Initialize project command."""

import click

from ..db import init_db
from .base import async_command, echo_info, echo_success, echo_warning, get_settings


@click.command()
@click.pass_context
@async_command
async def init(ctx):
    """Initialize the healthmate data directory and database.

    Creates the data directory and the SQLite schema. Safe to run again
    on an existing database.
    """
    settings = get_settings(ctx)

    echo_info(f"Initializing healthmate in {settings.data_dir}")
    settings.data_dir.mkdir(parents=True, exist_ok=True)

    await init_db(settings.db_path)
    echo_success(f"Database initialized at {settings.db_path}")

    if not settings.ai_configured:
        echo_warning("OPENROUTER_API_KEY is not set; AI features will return fallback text")

    click.echo()
    click.echo("healthmate is ready to use!")
    click.echo()
    click.echo("Next steps:")
    click.echo("  1. Create your profile:")
    click.echo("     healthmate profile setup")
    click.echo()
    click.echo("  2. Log your day:")
    click.echo("     healthmate log update --steps 8000 --sleep 7.5 --mood happy")
    click.echo('     healthmate log meal "Oatmeal" --type breakfast --calories 350')

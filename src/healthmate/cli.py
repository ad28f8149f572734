"""CLI entry point for healthmate."""

import click

from . import __version__
from .commands import ai, analytics, clear, init, log, profile, serve
from .config import Settings, configure_logging


@click.group()
@click.version_option(version=__version__, prog_name="healthmate")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx, verbose: bool):
    """healthmate: personal health tracking with an AI assistant.

    Log steps, sleep, meals, exercise, mood, body composition and blood
    pressure, then review trends or ask the assistant for advice.

    Example usage:

        # Initialize the database
        healthmate init

        # Create your profile
        healthmate profile setup

        # Log your day
        healthmate log update --steps 9000 --sleep 7 --mood happy
        healthmate log activity running 30 --intensity high

        # Review
        healthmate analytics report --days 14
        healthmate ai summary
    """
    settings = Settings.from_env()
    configure_logging("DEBUG" if verbose else settings.log_level)
    ctx.obj = settings


main.add_command(init)
main.add_command(profile)
main.add_command(log)
main.add_command(analytics)
main.add_command(ai)
main.add_command(clear)
main.add_command(serve)


def run():
    """Run the CLI."""
    main()


if __name__ == "__main__":
    run()

"""Bulk clear command."""

import click

from .base import (
    async_command,
    build_log_service,
    echo_info,
    echo_success,
    ensure_initialized,
    get_settings,
)


@click.command()
@click.option("--force", "-f", is_flag=True, help="Skip confirmation")
@click.pass_context
@async_command
async def clear(ctx, force: bool):
    """Delete every health log for every user.

    User profiles are kept.
    """
    ensure_initialized(ctx)

    if not force and not click.confirm("Delete ALL health logs? This cannot be undone"):
        echo_info("Cancelled")
        return

    deleted = await build_log_service(get_settings(ctx)).clear_all()
    echo_success(f"Deleted {deleted} health log(s)")

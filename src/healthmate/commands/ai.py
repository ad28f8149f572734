"""AI assistant commands."""

import click
import questionary

from ..errors import HealthMateError
from ..models.assistant import ChatRole, ChatTurn
from ..services.validation import parse_datetime
from .base import (
    async_command,
    build_assistant,
    echo_info,
    echo_success,
    echo_warning,
    ensure_initialized,
    fail,
    get_settings,
    resolve_user_id,
)

user_option = click.option(
    "--user", "-u", "user_id", type=int, help="Profile ID (default: latest profile)"
)


@click.group()
@click.pass_context
def ai(ctx):
    """Daily summaries, chat and predictions."""
    ensure_initialized(ctx)
    if not get_settings(ctx).ai_configured:
        echo_warning("OPENROUTER_API_KEY is not set; answers will be fallback text")


@ai.command()
@user_option
@click.option("--date", help="Day to summarize (ISO date, default: today)")
@click.pass_context
@async_command
async def summary(ctx, user_id: int | None, date: str | None):
    """Summarize a day and suggest what to do next."""
    user_id = await resolve_user_id(ctx, user_id)
    try:
        result = await build_assistant(get_settings(ctx)).daily_summary(
            user_id, parse_datetime("date", date)
        )
    except HealthMateError as e:
        fail(ctx, e)

    click.echo()
    click.echo(result.summary)
    click.echo()
    click.echo(f"Health score: {result.health_score}/100")
    for metric, direction in result.trends.items():
        click.echo(f"  {metric}: {direction}")
    if result.recommendations:
        click.echo()
        echo_success(f"Saved {len(result.recommendations)} recommendation(s) to the log")


@ai.command()
@user_option
@click.argument("message", required=False)
@click.pass_context
@async_command
async def chat(ctx, user_id: int | None, message: str | None):
    """Ask the assistant a question.

    Without MESSAGE, starts an interactive conversation. Submit an empty
    line to stop.
    """
    user_id = await resolve_user_id(ctx, user_id)
    health_assistant = build_assistant(get_settings(ctx))

    if message:
        try:
            reply = await health_assistant.chat(user_id, message)
        except HealthMateError as e:
            fail(ctx, e)
        click.echo(reply.response)
        return

    history: list[ChatTurn] = []
    while True:
        text = await questionary.text("You:").ask_async()
        if not text or not text.strip():
            echo_info("Bye")
            return
        reply = await health_assistant.chat(user_id, text, history)
        click.echo(click.style("HealthMate: ", fg="green") + reply.response)
        history.append(ChatTurn(ChatRole.USER, text))
        history.append(ChatTurn(ChatRole.ASSISTANT, reply.response))


@ai.command()
@user_option
@click.option("--days", "-d", type=int, default=30, help="History to analyze in days")
@click.pass_context
@async_command
async def predict(ctx, user_id: int | None, days: int):
    """Forecast sleep and activity risks from recent history."""
    user_id = await resolve_user_id(ctx, user_id)
    result = await build_assistant(get_settings(ctx)).predictions(user_id, days)

    if not result.sufficient_data:
        echo_info(result.message)
        return
    if not result.predictions:
        echo_success("No concerning patterns found")
        return

    for prediction in result.predictions:
        click.echo()
        click.echo(click.style(f"[{prediction.severity.upper()}] ", fg="yellow") + prediction.message)
        click.echo(f"  -> {prediction.recommendation}")

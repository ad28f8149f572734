"""Analytics commands."""

import click

from .base import (
    async_command,
    build_log_service,
    echo_info,
    ensure_initialized,
    format_table,
    get_settings,
    resolve_user_id,
)

user_option = click.option(
    "--user", "-u", "user_id", type=int, help="Profile ID (default: latest profile)"
)
days_option = click.option("--days", "-d", type=int, default=7, help="Window size in days")


def _counts(counts: dict[str, int]) -> str:
    return ", ".join(f"{key} x{value}" for key, value in counts.items()) or "none"


@click.group()
@click.pass_context
def analytics(ctx):
    """Trends, calorie balance and health scores."""
    ensure_initialized(ctx)


@analytics.command()
@user_option
@days_option
@click.pass_context
@async_command
async def report(ctx, user_id: int | None, days: int):
    """Averages and distributions over the last DAYS days."""
    user_id = await resolve_user_id(ctx, user_id)
    result = await build_log_service(get_settings(ctx)).analytics(user_id, days)

    if not result.steps_trend:
        echo_info(f"No logs in the last {days} days")
        return

    click.echo()
    click.echo(f"Last {days} days ({len(result.steps_trend)} logged)")
    click.echo("-" * 40)
    click.echo(f"Average steps:     {result.average_steps}")
    click.echo(f"Average sleep:     {result.average_sleep} h")
    click.echo(f"Average calories:  {result.average_calories} kcal")
    click.echo(f"Average energy:    {result.average_energy}/10")
    click.echo(f"Moods:             {_counts(result.mood_distribution)}")

    if result.body_fat_trend or result.muscle_mass_trend:
        click.echo(f"Average body fat:  {result.average_body_fat}%")
        click.echo(f"Average muscle:    {result.average_muscle_mass} kg")
        click.echo(f"Fitness levels:    {_counts(result.fitness_level_counts)}")
    if result.systolic_trend:
        click.echo(
            f"Average BP:        {result.average_systolic}/{result.average_diastolic}"
        )
        click.echo(f"BP categories:     {_counts(result.bp_category_counts)}")

    headers = ["Date", "Steps", "Sleep", "Calories", "Energy"]
    rows = [
        [
            steps.date.strftime("%Y-%m-%d"),
            str(steps.value),
            str(sleep.value),
            str(calories.value),
            str(energy.value),
        ]
        for steps, sleep, calories, energy in zip(
            result.steps_trend, result.sleep_trend, result.calories_trend, result.energy_trend
        )
    ]
    click.echo()
    click.echo(format_table(headers, rows))


@analytics.command()
@user_option
@days_option
@click.pass_context
@async_command
async def balance(ctx, user_id: int | None, days: int):
    """Calorie intake versus step burn over the last DAYS days."""
    user_id = await resolve_user_id(ctx, user_id)
    result = await build_log_service(get_settings(ctx)).calorie_balance(user_id, days)

    if not result.daily_balances:
        echo_info(f"No logs in the last {days} days")
        return

    headers = ["Date", "Intake", "Burned", "Balance"]
    rows = [
        [b.date.strftime("%Y-%m-%d"), str(b.intake), str(b.burned), f"{b.balance:+d}"]
        for b in result.daily_balances
    ]
    click.echo()
    click.echo(format_table(headers, rows))
    click.echo()
    click.echo(f"Average intake:     {result.average_calorie_intake} kcal")
    click.echo(f"Average burned:     {result.average_calories_burned} kcal")
    click.echo(f"Average balance:    {result.average_calorie_balance:+d} kcal")
    click.echo(f"Exercise minutes:   {result.total_exercise_minutes}")
    click.echo(f"Exercise frequency: {result.exercise_frequency}% of days")
    click.echo()
    click.echo(result.recommendation)


@analytics.command()
@user_option
@click.pass_context
@async_command
async def score(ctx, user_id: int | None):
    """Health score (0-100) of your most recent log."""
    user_id = await resolve_user_id(ctx, user_id)
    value = await build_log_service(get_settings(ctx)).dashboard_score(user_id)
    click.echo(f"Health score: {value}/100")

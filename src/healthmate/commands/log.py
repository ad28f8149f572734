"""Daily log commands."""

import click

from ..errors import HealthMateError
from ..models.health_log import DailyLog, ExerciseType, Intensity, MealType, Mood, SleepQuality
from ..services.validation import parse_activity, parse_datetime, parse_log_update, parse_meal
from ..utils.metrics import blood_pressure_interpretation
from .base import (
    async_command,
    build_log_service,
    echo_info,
    echo_success,
    ensure_initialized,
    fail,
    format_table,
    get_settings,
    resolve_user_id,
)

user_option = click.option(
    "--user", "-u", "user_id", type=int, help="Profile ID (default: latest profile)"
)


def _choice(enum_type) -> click.Choice:
    return click.Choice([e.value for e in enum_type])


def build_update_payload(options: dict) -> dict:
    """Map CLI options onto a daily-log update payload, skipping unset ones."""
    sections = {
        "steps": {"count": "steps", "goal": "steps_goal"},
        "sleep": {"duration": "sleep", "quality": "sleep_quality"},
        "diet": {"water_intake": "water"},
        "body_composition": {
            "body_fat_percentage": "body_fat",
            "muscle_mass": "muscle_mass",
            "bone_density": "bone_density",
        },
        "blood_pressure": {"systolic": "systolic", "diastolic": "diastolic", "pulse": "pulse"},
    }

    payload = {}
    for section, fields in sections.items():
        values = {key: options[opt] for key, opt in fields.items() if options.get(opt) is not None}
        if values:
            payload[section] = values
    for key in ("date", "mood", "energy", "weight", "notes"):
        if options.get(key) is not None:
            payload[key] = options[key]
    return payload


def format_log(log: DailyLog) -> str:
    """Render a day's log for the terminal."""
    lines = [
        f"Date:        {log.day.isoformat()}",
        f"Steps:       {log.steps.count} / {log.steps.goal} ({log.steps.calories_burned} kcal)",
    ]
    if log.sleep.duration is not None:
        quality = log.sleep.quality.value if log.sleep.quality else "n/a"
        lines.append(f"Sleep:       {log.sleep.duration} h ({quality})")
    lines.append(
        f"Diet:        {log.diet.total_calories} kcal in {len(log.diet.meals)} meal(s), "
        f"{log.diet.water_intake} glass(es) of water"
    )
    lines.append(
        f"Exercise:    {log.exercise.total_duration} min, "
        f"{log.exercise.total_calories_burned} kcal in {len(log.exercise.activities)} activity(ies)"
    )
    lines.append(f"Balance:     {log.calorie_balance:+d} kcal")
    lines.append(f"Mood:        {log.mood.value if log.mood else 'n/a'}")
    lines.append(f"Energy:      {log.energy}/10")
    if log.weight:
        lines.append(f"Weight:      {log.weight} kg")

    composition = log.body_composition
    if composition:
        parts = []
        if composition.body_fat_percentage is not None:
            parts.append(f"{composition.body_fat_percentage}% fat")
        if composition.muscle_mass is not None:
            parts.append(f"{composition.muscle_mass} kg muscle")
        if composition.bmi is not None:
            parts.append(f"BMI {composition.bmi:.1f}")
        if composition.fitness_level:
            parts.append(f"fitness {composition.fitness_level.value}")
        lines.append(f"Body:        {', '.join(parts) or 'n/a'}")

    pressure = log.blood_pressure
    if pressure and pressure.systolic and pressure.diastolic:
        label = blood_pressure_interpretation(pressure.category)["label"]
        lines.append(f"BP:          {pressure.systolic}/{pressure.diastolic} ({label})")

    if log.notes:
        lines.append(f"Notes:       {log.notes}")
    if log.ai_summary:
        lines.append("")
        lines.append("AI summary:")
        lines.append(log.ai_summary)
    return "\n".join(lines)


@click.group()
@click.pass_context
def log(ctx):
    """Record and view daily health logs."""
    ensure_initialized(ctx)


@log.command()
@user_option
@click.option("--date", help="Day to update (ISO date, default: today)")
@click.option("--steps", type=int, help="Step count")
@click.option("--steps-goal", type=int, help="Daily step goal")
@click.option("--sleep", type=float, help="Hours slept")
@click.option("--sleep-quality", type=_choice(SleepQuality))
@click.option("--water", type=int, help="Glasses of water")
@click.option("--mood", type=_choice(Mood))
@click.option("--energy", type=int, help="Energy level 1-10")
@click.option("--weight", type=float, help="Body weight in kg")
@click.option("--body-fat", type=float, help="Body fat percentage")
@click.option("--muscle-mass", type=float, help="Muscle mass in kg")
@click.option("--bone-density", type=float, help="Bone density in g/cm^2")
@click.option("--systolic", type=int, help="Systolic blood pressure")
@click.option("--diastolic", type=int, help="Diastolic blood pressure")
@click.option("--pulse", type=int, help="Pulse in bpm")
@click.option("--notes", help="Free-text notes for the day")
@click.pass_context
@async_command
async def update(ctx, user_id: int | None, **options):
    """Merge values into a day's log.

    Only the options given are changed; everything else already logged
    for the day is kept.
    """
    payload = build_update_payload(options)
    if not payload or list(payload) == ["date"]:
        echo_info("Nothing to update. See 'healthmate log update --help'")
        return

    user_id = await resolve_user_id(ctx, user_id)
    try:
        saved = await build_log_service(get_settings(ctx)).save_update(
            user_id, parse_log_update(payload)
        )
    except HealthMateError as e:
        fail(ctx, e)

    echo_success(f"Log saved for {saved.day.isoformat()}")
    click.echo()
    click.echo(format_log(saved))


@log.command()
@user_option
@click.argument("name")
@click.option("--type", "meal_type", type=_choice(MealType), default=MealType.SNACK.value)
@click.option("--calories", type=int, default=0, help="Calories (kcal)")
@click.option("--protein", type=int, default=0, help="Protein (g)")
@click.pass_context
@async_command
async def meal(ctx, user_id: int | None, name: str, meal_type: str, calories: int, protein: int):
    """Add a meal to today's log."""
    user_id = await resolve_user_id(ctx, user_id)
    try:
        entry = parse_meal(
            {"name": name, "type": meal_type, "calories": calories, "protein": protein}
        )
        saved = await build_log_service(get_settings(ctx)).add_meal(user_id, entry)
    except HealthMateError as e:
        fail(ctx, e)

    echo_success(
        f"Added {entry.name} ({entry.calories} kcal). "
        f"Today's total: {saved.diet.total_calories} kcal"
    )


@log.command()
@user_option
@click.argument("exercise_type", type=_choice(ExerciseType))
@click.argument("duration", type=int)
@click.option("--intensity", type=_choice(Intensity), default=Intensity.MODERATE.value)
@click.option("--name", help="Activity name (default: the exercise type)")
@click.option("--calories", type=int, help="Calories burned (default: estimated)")
@click.pass_context
@async_command
async def activity(
    ctx,
    user_id: int | None,
    exercise_type: str,
    duration: int,
    intensity: str,
    name: str | None,
    calories: int | None,
):
    """Add an exercise activity (DURATION in minutes) to today's log."""
    user_id = await resolve_user_id(ctx, user_id)
    try:
        entry = parse_activity(
            {
                "type": exercise_type,
                "duration": duration,
                "intensity": intensity,
                "name": name,
                "calories_burned": calories,
            }
        )
        saved = await build_log_service(get_settings(ctx)).add_activity(user_id, entry)
    except HealthMateError as e:
        fail(ctx, e)

    echo_success(
        f"Added {entry.name}: {entry.duration} min, {entry.calories_burned} kcal. "
        f"Today's exercise: {saved.exercise.total_duration} min"
    )


@log.command()
@user_option
@click.pass_context
@async_command
async def today(ctx, user_id: int | None):
    """Show today's log."""
    user_id = await resolve_user_id(ctx, user_id)
    current = await build_log_service(get_settings(ctx)).get_today(user_id)
    click.echo()
    click.echo(format_log(current))


@log.command(name="list")
@user_option
@click.option("--start", help="First day (ISO date)")
@click.option("--end", help="Last day (ISO date)")
@click.option("--limit", "-n", type=int, default=30, help="Maximum logs to show")
@click.pass_context
@async_command
async def list_logs(ctx, user_id: int | None, start: str | None, end: str | None, limit: int):
    """List logs, newest first."""
    user_id = await resolve_user_id(ctx, user_id)
    try:
        start_at = parse_datetime("start", start)
        end_at = parse_datetime("end", end)
    except HealthMateError as e:
        fail(ctx, e)

    logs = await build_log_service(get_settings(ctx)).list_logs(user_id, start_at, end_at, limit)
    if not logs:
        echo_info("No logs found. Start with 'healthmate log update'")
        return

    headers = ["Date", "Steps", "Sleep", "Calories", "Exercise", "Mood", "Energy"]
    rows = []
    for entry in logs:
        rows.append([
            entry.day.isoformat(),
            str(entry.steps.count),
            f"{entry.sleep.duration}h" if entry.sleep.duration is not None else "-",
            str(entry.diet.total_calories),
            f"{entry.exercise.total_duration} min",
            entry.mood.value if entry.mood else "-",
            str(entry.energy),
        ])

    click.echo()
    click.echo(format_table(headers, rows))
    click.echo()
    click.echo(f"Total: {len(logs)} log(s)")

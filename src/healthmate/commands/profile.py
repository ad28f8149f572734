"""User profile commands."""

import click
import questionary
from questionary import Style

from ..db import UserProfileRepository
from ..errors import ValidationError
from ..models.user_profile import ActivityLevel, Gender, HealthGoal, UserProfile
from ..services.validation import parse_profile
from .base import (
    async_command,
    echo_error,
    echo_info,
    echo_success,
    ensure_initialized,
    fail,
    get_settings,
)

custom_style = Style(
    [
        ("qmark", "fg:#2e7d32 bold"),
        ("question", "bold"),
        ("answer", "fg:#1565c0 bold"),
        ("pointer", "fg:#2e7d32 bold"),
        ("highlighted", "fg:#2e7d32 bold"),
        ("selected", "fg:#1565c0"),
        ("instruction", ""),
        ("text", ""),
    ]
)

GOAL_LABELS = {
    HealthGoal.WEIGHT_LOSS: "Lose weight",
    HealthGoal.WEIGHT_GAIN: "Gain weight",
    HealthGoal.MUSCLE_GAIN: "Build muscle",
    HealthGoal.MAINTAIN_WEIGHT: "Maintain weight",
    HealthGoal.IMPROVE_FITNESS: "Improve fitness",
    HealthGoal.BETTER_SLEEP: "Sleep better",
}

ACTIVITY_LABELS = {
    ActivityLevel.SEDENTARY: "Sedentary (little or no exercise)",
    ActivityLevel.LIGHT: "Light (1-3 days a week)",
    ActivityLevel.MODERATE: "Moderate (3-5 days a week)",
    ActivityLevel.ACTIVE: "Active (6-7 days a week)",
    ActivityLevel.VERY_ACTIVE: "Very active (hard daily training)",
}


def _blank_to_none(value):
    if value is None or str(value).strip() == "":
        return None
    return value


async def collect_profile(existing: UserProfile | None = None) -> dict:
    """Run the interactive questionnaire and return a profile payload."""
    click.echo("\n=== Health Profile ===\n")

    name = await questionary.text(
        "What's your name?",
        default=existing.name if existing else "",
        style=custom_style,
    ).ask_async()

    age = await questionary.text(
        "Your age (optional):",
        default=str(existing.age) if existing and existing.age else "",
        style=custom_style,
    ).ask_async()

    gender = await questionary.select(
        "Gender:",
        choices=[
            questionary.Choice("Male", Gender.MALE.value),
            questionary.Choice("Female", Gender.FEMALE.value),
            questionary.Choice("Other", Gender.OTHER.value),
            questionary.Choice("Prefer not to say", ""),
        ],
        style=custom_style,
    ).ask_async()

    height = await questionary.text(
        "Height in cm (optional):",
        default=str(existing.height) if existing and existing.height else "",
        style=custom_style,
    ).ask_async()

    weight = await questionary.text(
        "Weight in kg (optional):",
        default=str(existing.weight) if existing and existing.weight else "",
        style=custom_style,
    ).ask_async()

    activity_level = await questionary.select(
        "How active are you?",
        choices=[
            questionary.Choice(label, level.value) for level, label in ACTIVITY_LABELS.items()
        ],
        default=ActivityLevel.MODERATE.value,
        style=custom_style,
    ).ask_async()

    goals = await questionary.checkbox(
        "What are your health goals? (Select all that apply)",
        choices=[questionary.Choice(label, goal.value) for goal, label in GOAL_LABELS.items()],
        style=custom_style,
    ).ask_async()

    return {
        "name": name,
        "age": _blank_to_none(age),
        "gender": _blank_to_none(gender),
        "height": _blank_to_none(height),
        "weight": _blank_to_none(weight),
        "activity_level": activity_level,
        "health_goals": goals or [],
    }


def format_profile(profile: UserProfile) -> str:
    """Render a profile for the terminal."""
    goals = ", ".join(GOAL_LABELS[g] for g in profile.health_goals) or "None"
    lines = [
        f"Name:           {profile.name} (ID: {profile.id})",
        f"Age:            {profile.age or 'N/A'}",
        f"Gender:         {profile.gender.value if profile.gender else 'N/A'}",
        f"Height:         {f'{profile.height} cm' if profile.height else 'N/A'}",
        f"Weight:         {f'{profile.weight} kg' if profile.weight else 'N/A'}",
        f"Activity level: {profile.activity_level.value}",
        f"Health goals:   {goals}",
    ]
    return "\n".join(lines)


@click.group()
@click.pass_context
def profile(ctx):
    """Manage your health profile."""
    ensure_initialized(ctx)


@profile.command()
@click.option("--new", "create_new", is_flag=True, help="Create a new profile instead of editing")
@click.pass_context
@async_command
async def setup(ctx, create_new: bool):
    """Create or edit your profile interactively."""
    repo = UserProfileRepository(get_settings(ctx).db_path)
    existing = None if create_new else await repo.get_latest()

    payload = await collect_profile(existing)
    if not payload.get("name"):
        echo_info("Cancelled")
        return

    try:
        new_profile = parse_profile(payload)
    except ValidationError as e:
        fail(ctx, e)

    if existing:
        new_profile.id = existing.id
        await repo.update(new_profile)
        echo_success(f"Profile {existing.id} updated")
    else:
        new_profile.id = await repo.create(new_profile)
        echo_success(f"Profile created (ID: {new_profile.id})")


@profile.command()
@click.option("--user", "-u", "user_id", type=int, help="Profile ID (default: latest)")
@click.pass_context
@async_command
async def show(ctx, user_id: int | None):
    """Show a profile."""
    repo = UserProfileRepository(get_settings(ctx).db_path)
    found = await repo.get(user_id) if user_id is not None else await repo.get_latest()

    if not found:
        echo_error("No profile found. Create one with 'healthmate profile setup'")
        ctx.exit(1)

    click.echo()
    click.echo(format_profile(found))

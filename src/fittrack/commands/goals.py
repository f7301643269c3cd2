"""Goal management commands."""

import click
import questionary
from questionary import Style

from .base import (
    async_command,
    current_user_id,
    echo_error,
    echo_success,
    ensure_initialized,
    format_table,
    get_service,
)

custom_style = Style(
    [
        ("qmark", "fg:#1a56db bold"),
        ("question", "bold"),
        ("answer", "fg:#15803d bold"),
        ("instruction", ""),
        ("text", ""),
    ]
)


def _number_or_default(text: str | None, default, cast):
    if text is None or not text.strip():
        return default
    return cast(text)


async def ask_goals(current) -> dict:
    """Prompt for each target, keeping the current value on empty input."""
    print("\n=== Goals ===\n")

    def valid(text: str) -> bool | str:
        if not text.strip():
            return True
        try:
            return float(text) >= 0 or "Enter a non-negative number"
        except ValueError:
            return "Enter a number"

    answers = {}
    for field, label, default, cast in (
        ("target_weight", "Target weight (kg)", current.weight_goal, float),
        ("target_daily_calories", "Daily calories", current.calorie_goal, int),
        ("target_daily_protein", "Daily protein (g)", current.protein_goal, float),
        ("target_weekly_workouts", "Workouts per week", current.workout_goal, int),
    ):
        text = await questionary.text(
            f"{label} [{default:g}]:",
            validate=valid,
            style=custom_style,
        ).ask_async()
        answers[field] = _number_or_default(text, default, lambda v: cast(float(v)))
    return answers


@click.group()
@click.pass_context
def goals(ctx):
    """View and change your targets."""
    ensure_initialized(ctx)


@goals.command()
@async_command
async def show():
    """Show the active goal set."""
    current = await get_service().get_goals(current_user_id())
    rows = [
        ["Weight", f"{current.weight_goal:g} kg"],
        ["Calories", f"{current.calorie_goal} kcal/day"],
        ["Protein", f"{current.protein_goal:g} g/day"],
        ["Workouts", f"{current.workout_goal}/week"],
    ]
    click.echo()
    click.echo(format_table(["Goal", "Target"], rows))


@goals.command(name="set")
@click.option("--weight", type=float, help="Target weight in kg")
@click.option("--calories", type=int, help="Daily calorie target")
@click.option("--protein", type=float, help="Daily protein target in grams")
@click.option("--workouts", type=int, help="Workouts per week")
@click.pass_context
@async_command
async def set_goals(ctx, weight, calories, protein, workouts):
    """Save a new goal set.

    With no options, asks for each target interactively.
    """
    service = get_service()
    user_id = current_user_id()
    current = await service.get_goals(user_id)

    if all(v is None for v in (weight, calories, protein, workouts)):
        targets = await ask_goals(current)
    else:
        targets = {
            "target_weight": current.weight_goal if weight is None else weight,
            "target_daily_calories": current.calorie_goal if calories is None else calories,
            "target_daily_protein": current.protein_goal if protein is None else protein,
            "target_weekly_workouts": current.workout_goal if workouts is None else workouts,
        }

    try:
        saved = await service.set_goals(user_id, **targets)
    except ValueError as e:
        echo_error(str(e))
        ctx.exit(1)
    echo_success(f"Goals saved (ID: {saved.id})")

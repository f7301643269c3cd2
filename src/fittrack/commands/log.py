"""Entry logging commands."""

import re

import click

from ..models.entries import (
    ExerciseEntry,
    MealType,
    NutritionEntry,
    WeightEntry,
    WorkoutEntry,
    WorkoutType,
    parse_datetime,
)
from .base import (
    async_command,
    current_user_id,
    echo_error,
    echo_success,
    ensure_initialized,
    get_service,
)

# "Bench Press:3x5@80" -> name, sets, reps, optional weight in kg
EXERCISE_PATTERN = re.compile(
    r"^\s*(?P<name>[^:]+?)\s*:\s*(?P<sets>\d+)\s*x\s*(?P<reps>\d+)"
    r"(?:\s*@\s*(?P<weight>\d+(?:\.\d+)?))?\s*$",
    re.IGNORECASE,
)


def parse_exercise(text: str) -> ExerciseEntry:
    """Parse an exercise given as ``NAME:SETSxREPS[@WEIGHT]``."""
    match = EXERCISE_PATTERN.match(text)
    if not match:
        raise click.BadParameter(
            f"'{text}' is not NAME:SETSxREPS[@WEIGHT], e.g. 'Squat:5x5@100'"
        )
    weight = match.group("weight")
    return ExerciseEntry(
        name=match.group("name"),
        sets=int(match.group("sets")),
        reps=int(match.group("reps")),
        weight=float(weight) if weight else None,
    )


def _parse_exercises(ctx, param, values):
    return [parse_exercise(v) for v in values]


@click.group()
@click.pass_context
def log(ctx):
    """Log weight readings, meals and workouts."""
    ensure_initialized(ctx)


@log.command()
@click.argument("weight", type=float)
@click.option("--date", "when", help="ISO date/time (default: now)")
@click.option("--notes", default="", help="Free-text notes")
@click.pass_context
@async_command
async def weight(ctx, weight: float, when: str | None, notes: str):
    """Log a body-weight reading in kg."""
    entry = WeightEntry(
        user_id=current_user_id(),
        weight=weight,
        date=parse_datetime(when),
        notes=notes,
    )
    try:
        entry = await get_service().add_weight(entry)
    except ValueError as e:
        echo_error(str(e))
        ctx.exit(1)
    echo_success(f"Logged {weight:g} kg (ID: {entry.id})")


@log.command()
@click.argument("name")
@click.option("--calories", type=int, required=True)
@click.option(
    "--meal-type",
    type=click.Choice([m.value for m in MealType]),
    default=MealType.SNACK.value,
    show_default=True,
)
@click.option("--protein", type=float, default=0.0)
@click.option("--carbs", type=float, default=0.0)
@click.option("--fat", type=float, default=0.0)
@click.option("--serving", default="", help="Serving size, e.g. '1 cup'")
@click.option("--date", "when", help="ISO date/time (default: now)")
@click.pass_context
@async_command
async def meal(
    ctx,
    name: str,
    calories: int,
    meal_type: str,
    protein: float,
    carbs: float,
    fat: float,
    serving: str,
    when: str | None,
):
    """Log a food item."""
    entry = NutritionEntry(
        user_id=current_user_id(),
        name=name,
        calories=calories,
        meal_type=MealType(meal_type),
        protein=protein,
        carbs=carbs,
        fat=fat,
        serving_size=serving,
        date=parse_datetime(when),
    )
    try:
        entry = await get_service().add_meal(entry)
    except ValueError as e:
        echo_error(str(e))
        ctx.exit(1)
    echo_success(f"Logged {name}: {calories} kcal (ID: {entry.id})")


@log.command()
@click.argument("name")
@click.option(
    "--type",
    "workout_type",
    type=click.Choice([t.value for t in WorkoutType]),
    default=WorkoutType.STRENGTH.value,
    show_default=True,
)
@click.option("--duration", type=int, required=True, help="Minutes")
@click.option(
    "--exercise",
    "-e",
    "exercises",
    multiple=True,
    required=True,
    callback=_parse_exercises,
    help="NAME:SETSxREPS[@WEIGHT]; repeat for each exercise",
)
@click.option("--notes", default="")
@click.option("--date", "when", help="ISO date/time (default: now)")
@click.pass_context
@async_command
async def workout(
    ctx,
    name: str,
    workout_type: str,
    duration: int,
    exercises: list[ExerciseEntry],
    notes: str,
    when: str | None,
):
    """Log a workout with its exercises.

    Example:

        fittrack log workout "Leg day" --duration 60 -e "Squat:5x5@100" -e "Lunge:3x10"
    """
    entry = WorkoutEntry(
        user_id=current_user_id(),
        name=name,
        type=WorkoutType(workout_type),
        duration=duration,
        date=parse_datetime(when),
        notes=notes,
        exercises=exercises,
    )
    try:
        entry = await get_service().add_workout(entry)
    except ValueError as e:
        echo_error(str(e))
        ctx.exit(1)
    echo_success(f"Logged {name} with {len(exercises)} exercise(s) (ID: {entry.id})")
    for exercise in entry.exercises:
        click.echo(f"  {exercise.name}: {exercise.get_display()}")

"""Statistics command."""

import click

from ..analytics.reports import PERIODS
from .base import async_command, current_user_id, ensure_initialized, format_table, get_service


@click.command()
@click.option(
    "--period",
    type=click.Choice(list(PERIODS)),
    default="3m",
    show_default=True,
    help="Range for trend and consistency",
)
@click.pass_context
@async_command
async def stats(ctx, period: str):
    """Show long-range statistics and goal progress."""
    ensure_initialized(ctx)
    service = get_service()
    user_id = current_user_id()

    totals = await service.statistics_summary(user_id)
    click.echo()
    click.echo(f"Total workouts:       {totals['total_workouts']}")
    click.echo(f"Weight change:        {totals['weight_change']:+g} kg")
    click.echo(f"Avg daily calories:   {totals['avg_calories']} (last 7 days)")
    click.echo(f"Avg daily protein:    {totals['avg_protein']} g")

    progress = await service.goal_progress(user_id)
    click.echo()
    click.echo(
        format_table(
            ["Goal", "Current", "Target", "Progress"],
            [
                [name.capitalize(), f"{p['current']:g}", f"{p['goal']:g}", f"{p['progress']}%"]
                for name, p in progress.items()
            ],
        )
    )

    consistency = await service.workout_consistency(user_id, period)
    if any(week["workouts"] for week in consistency):
        click.echo()
        click.echo(
            format_table(
                ["Week", "Workouts", "Goal"],
                [[w["week"], str(w["workouts"]), str(w["goal"])] for w in consistency],
            )
        )

"""Dashboard summary command."""

import click

from .base import async_command, current_user_id, ensure_initialized, format_table, get_service


@click.command()
@click.pass_context
@async_command
async def summary(ctx):
    """Show today's numbers and this week's progress against your goals."""
    ensure_initialized(ctx)
    service = get_service()
    user_id = current_user_id()

    dashboard = await service.dashboard_metrics(user_id)
    metrics, targets, progress = (
        dashboard["metrics"],
        dashboard["goals"],
        dashboard["progress"],
    )
    rows = [
        ["Calories today", str(metrics["calories"]), str(targets["calories"]), f"{progress['calories']}%"],
        ["Weight (kg)", f"{metrics['weight']:g}", f"{targets['weight']:g}", f"{progress['weight']}%"],
        ["Workouts this week", str(metrics["workouts"]), str(targets["workouts"]), f"{progress['workouts']}%"],
    ]
    click.echo()
    click.echo(format_table(["Metric", "Current", "Goal", "Progress"], rows))

    week = await service.weekly_progress(user_id)
    click.echo()
    click.echo("This week:")
    click.echo(
        format_table(
            ["Day", "Calories", "Weight"],
            [[d["day"], str(d["calories"]), f"{d['weight']:g}"] for d in week],
        )
    )

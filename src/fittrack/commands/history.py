"""Activity history command."""

from datetime import datetime

import click

from .base import (
    async_command,
    current_user_id,
    echo_info,
    ensure_initialized,
    format_table,
    get_service,
)


@click.command()
@click.option(
    "--type",
    "activity_type",
    type=click.Choice(["all", "weight", "nutrition", "workout"]),
    default="all",
)
@click.option("--from", "date_from", type=click.DateTime(["%Y-%m-%d"]), help="First day (inclusive)")
@click.option("--to", "date_to", type=click.DateTime(["%Y-%m-%d"]), help="Last day (inclusive)")
@click.option("--page", type=int, default=1, show_default=True)
@click.option("--limit", type=int, default=10, show_default=True, help="Entries per page")
@click.pass_context
@async_command
async def history(
    ctx,
    activity_type: str,
    date_from: datetime | None,
    date_to: datetime | None,
    page: int,
    limit: int,
):
    """List logged activities, newest first."""
    ensure_initialized(ctx)
    result = await get_service().history(
        current_user_id(),
        activity_type,
        date_from.date() if date_from else None,
        date_to.date() if date_to else None,
        page=page,
        per_page=limit,
    )

    if not result["entries"]:
        echo_info("No activities found")
        return

    rows = [
        [e["date"], e["time"], e["type"], e["title"], f"{e['metric']}: {e['value']}"]
        for e in result["entries"]
    ]
    click.echo()
    click.echo(format_table(["Date", "Time", "Type", "Activity", "Value"], rows))
    click.echo()
    pages = max(1, -(-result["total"] // result["per_page"]))
    click.echo(f"Page {result['page']} of {pages} ({result['total']} total)")

"""Export history command."""

from datetime import datetime

import click

from .base import (
    async_command,
    current_user_id,
    echo_error,
    echo_success,
    ensure_initialized,
    get_service,
)


@click.command()
@click.option(
    "--type",
    "activity_type",
    type=click.Choice(["all", "weight", "nutrition", "workout"]),
    default="all",
)
@click.option("--from", "date_from", type=click.DateTime(["%Y-%m-%d"]))
@click.option("--to", "date_to", type=click.DateTime(["%Y-%m-%d"]))
@click.option("--clipboard", "-c", is_flag=True, help="Copy to clipboard instead of printing")
@click.option("--output", "-o", type=click.Path(), help="Write to this file")
@click.option("--save", "-s", is_flag=True, help="Write to the default dated file name")
@click.pass_context
@async_command
async def export(
    ctx,
    activity_type: str,
    date_from: datetime | None,
    date_to: datetime | None,
    clipboard: bool,
    output: str | None,
    save: bool,
):
    """Export activity history as CSV.

    Examples:

        fittrack export --save

        fittrack export --type workout -o workouts.csv

        fittrack export --clipboard
    """
    ensure_initialized(ctx)
    filename, content = await get_service().export_history(
        current_user_id(),
        activity_type,
        date_from.date() if date_from else None,
        date_to.date() if date_to else None,
    )

    if clipboard:
        try:
            import pyperclip

            pyperclip.copy(content)
            echo_success("Copied to clipboard!")
        except ImportError:
            echo_error("pyperclip not installed. Install with: pip install pyperclip")
            ctx.exit(1)

    elif output or save:
        path = output or filename
        with open(path, "w", newline="") as f:
            f.write(content)
        echo_success(f"Exported to {path}")

    else:
        click.echo(content, nl=False)

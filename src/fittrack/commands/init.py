"""Initialize database command."""

import click

from .. import config
from ..db import UserRepository, get_db_path, init_db
from .base import async_command, echo_info, echo_success, echo_warning, get_service


@click.command()
@click.option("--username", default="me", show_default=True, help="Account to create")
@click.option(
    "--password",
    prompt=True,
    hide_input=True,
    confirmation_prompt=True,
    help="Password for the new account",
)
@async_command
async def init(username: str, password: str):
    """Initialize the fit-track database and the default account.

    Creates the SQLite schema, registers the account the CLI and API act
    on, and saves a starting goal set from the configured defaults.
    """
    db_path = get_db_path()
    echo_info(f"Initializing fit-track in {db_path.parent}")

    await init_db(db_path)
    echo_success("Database initialized")

    service = get_service()
    users = await UserRepository(db_path).list_all()
    if users:
        echo_warning(f"Account already exists: {users[0].username}")
    else:
        user = await service.register_user(username, password)
        await service.set_goals(
            user.id,
            target_weight=config.DEFAULT_WEIGHT_GOAL,
            target_daily_calories=config.DEFAULT_CALORIE_GOAL,
            target_daily_protein=config.DEFAULT_PROTEIN_GOAL,
            target_weekly_workouts=config.DEFAULT_WORKOUT_GOAL,
        )
        echo_success(f"Created account '{user.username}' (ID: {user.id}) with default goals")

    click.echo()
    click.echo("fit-track is ready to use!")
    click.echo()
    click.echo("Next steps:")
    click.echo("  fittrack log weight 80.5")
    click.echo('  fittrack log meal "Oatmeal" --calories 350 --meal-type breakfast')
    click.echo("  fittrack goals set")
    click.echo("  fittrack serve")

"""CLI entry point for fit-track."""

import click

from . import config
from .commands import export, goals, history, init, log, serve, stats, summary


@click.group()
@click.version_option(version=config.APP_VERSION, prog_name="fittrack")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def main(verbose: bool):
    """fit-track: personal weight, nutrition and workout tracker.

    Example usage:

        # Create the database and your account
        fittrack init

        # Log entries
        fittrack log weight 80.5
        fittrack log workout "Push day" --duration 45 -e "Bench Press:3x5@80"

        # Review progress
        fittrack summary
        fittrack history --type workout
        fittrack export --save
    """
    config.configure_logging("DEBUG" if verbose else None)


main.add_command(init)
main.add_command(log)
main.add_command(goals)
main.add_command(summary)
main.add_command(history)
main.add_command(stats)
main.add_command(export)
main.add_command(serve)


def run():
    """Run the CLI."""
    main()


if __name__ == "__main__":
    run()

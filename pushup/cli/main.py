"""Main CLI entry point for PushUP."""

import logging
import click
from colorama import init

from pushup import __version__
from pushup.core.config import get_config
from pushup.core.errors import PushupError
from pushup.core.repository import Repository
from pushup.cli.output import BANNER
from pushup.cli.commands import (init_cmd, add_cmd, commit_cmd, log_cmd, show_cmd, status_cmd,
                                 branch_cmd, delete_branch_cmd, checkout_cmd, merge_cmd,
                                 reset_cmd, diff_cmd, config_cmd)

# Initialize colorama for cross-platform colored output
init(autoreset=True)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(verbose: bool = False) -> None:
    """
    Configure logging to stderr.

    Level comes from --verbose (DEBUG), then PUSHUP_LOG_LEVEL, then the
    log.level config key, defaulting to WARNING. An unreadable config file
    also gives WARNING; the command itself reports the problem.
    """
    if verbose:
        level = 'DEBUG'
    else:
        try:
            level = get_config(Repository.find_repository()).log_level
        except PushupError:
            level = 'WARNING'

    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format=LOG_FORMAT,
    )


class PushupGroup(click.Group):
    """Custom Group class to display banner before help."""

    def format_help(self, ctx, formatter):
        """Override to add banner before help text."""
        click.echo(BANNER)
        super().format_help(ctx, formatter)


@click.group(cls=PushupGroup)
@click.version_option(version=__version__)
@click.option('-v', '--verbose', is_flag=True, help='Log debug details to stderr')
def cli(verbose):
    setup_logging(verbose)


# Register commands
cli.add_command(init_cmd)
cli.add_command(add_cmd)
cli.add_command(commit_cmd)
cli.add_command(log_cmd)
cli.add_command(show_cmd)
cli.add_command(status_cmd)
cli.add_command(branch_cmd)
cli.add_command(delete_branch_cmd)
cli.add_command(checkout_cmd)
cli.add_command(merge_cmd)
cli.add_command(reset_cmd)
cli.add_command(diff_cmd)
cli.add_command(config_cmd)


def main():
    """Main entry point."""
    cli()


if __name__ == '__main__':
    main()

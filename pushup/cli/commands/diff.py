"""Diff command - show staged changes against HEAD."""

import click
from pushup.cli.context import open_ops, handle_errors
from pushup.cli.output import warning, info


@click.command('diff')
@click.option('--no-color', is_flag=True, help='Disable colored output')
@handle_errors
def diff_cmd(no_color):
    """
    Show staged changes.

    Each staged file is compared with its version in the HEAD commit.
    Files HEAD does not have are reported as new.

    Examples:
        pushup diff
        pushup diff --no-color
    """
    ops = open_ops()
    diffs = ops.diff()

    if not diffs:
        click.echo(warning("No staged changes"))
        return

    click.echo(info("Staged changes:"))
    click.echo()
    click.echo(ops.repo.diff.format_diff(diffs, color=not no_color))

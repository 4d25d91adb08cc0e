"""Reset command - move the current branch to a commit."""

import click
from pushup.cli.context import open_ops, handle_errors
from pushup.cli.output import success, info, warning


@click.command('reset')
@click.argument('commit')
@handle_errors
def reset_cmd(commit):
    """
    Reset HEAD and the current branch to a commit.

    The staging area is always emptied; staged changes are discarded.

    Examples:
        pushup reset abc1234
        pushup reset HEAD
    """
    ops = open_ops()
    result = ops.reset(commit)

    click.echo(success(f"Reset HEAD to {result.commit_hash[:7]}"))
    click.echo(info(f"Branch '{result.branch}' now points to {result.commit_hash[:7]}"))
    if result.discarded:
        click.echo(warning(f"Discarded {result.discarded} staged file(s)"))

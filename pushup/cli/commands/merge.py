"""Merge command for PushUP."""

import click
from pushup.cli.context import open_ops, handle_errors
from pushup.cli.output import success, warning, info


@click.command('merge')
@click.argument('branch')
@handle_errors
def merge_cmd(branch):
    """
    Merge a branch into the current branch.

    The merge commit takes the other branch's files as they are at its
    tip; files that only exist on the current branch are not carried
    over. No conflict detection is done.

    Examples:
        pushup merge feature
    """
    ops = open_ops()
    result = ops.merge(branch)

    if result.up_to_date:
        click.echo(warning("Already up to date"))
        return

    click.echo(success(f"Merged branch '{result.branch}' into '{result.into}'"))
    click.echo(success(f"New merge commit created: {result.commit_hash}"))
    click.echo(info(f"{len(result.files)} file(s) taken from '{result.branch}'"))

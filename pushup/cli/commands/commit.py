"""Commit command - create a commit from staged changes."""

import click
from pushup.cli.context import open_ops, handle_errors
from pushup.cli.output import success, error, info


@click.command('commit')
@click.argument('message', required=False)
@click.option('-m', '--message', 'message_opt', help='Commit message')
@handle_errors
def commit_cmd(message, message_opt):
    """
    Record changes to the repository.

    Creates a commit from the staged files, advances the current
    branch to it and empties the staging area.

    Examples:
        pushup commit "Initial commit"
        pushup commit -m "Add feature"
    """
    message = message_opt or message
    if not message:
        click.echo(error("Commit message required"))
        raise click.Abort()

    ops = open_ops()
    result = ops.commit(message)

    click.echo(success(f"Created commit {result.commit_hash[:7]} on '{result.branch}'"))
    click.echo(info(f"Message: {result.message}"))
    if result.parent:
        click.echo(info(f"Parent: {result.parent[:7]}"))
    else:
        click.echo(info("(root commit)"))
    click.echo(info(f"{len(result.files)} file(s) committed"))

"""Add command - stage files for commit."""

import click
from pushup.core.errors import PushupError
from pushup.cli.context import open_ops
from pushup.cli.output import success, error, info


@click.command('add')
@click.argument('paths', nargs=-1, required=True)
def add_cmd(paths):
    """
    Add file contents to the staging area.

    Stage files for the next commit. Modified files must be added
    again to stage the new changes.

    Examples:
        pushup add file.txt
        pushup add notes.txt todo.txt
    """
    ops = open_ops()

    added = []
    failed = []

    for path in paths:
        try:
            entry = ops.add(path)
            added.append(entry)
        except PushupError as e:
            failed.append((path, str(e)))

    if added:
        click.echo(success(f"Added {len(added)} file(s) to staging area"))
        for entry in added:
            click.echo(info(f"  {entry.path} ({entry.digest[:7]})"))

    if failed:
        click.echo(error(f"Failed to add {len(failed)} file(s):"))
        for path, reason in failed:
            click.echo(error(f"  {path}: {reason}"))
        raise click.Abort()

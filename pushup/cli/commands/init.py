"""Initialize a new PushUP repository."""

import click
from pathlib import Path
from pushup.operations.porcelain import Porcelain
from pushup.cli.context import handle_errors
from pushup.cli.output import success, info


@click.command('init')
@click.argument('path', default='.')
@handle_errors
def init_cmd(path):
    """
    Initialize a new PushUP repository.

    Creates a .pushup directory with the object store, branch refs,
    HEAD, the current-branch pointer and an empty staging area.

    Examples:
        pushup init                 # Initialize in current directory
        pushup init my-project      # Initialize in my-project directory
    """
    repo_path = Path(path).resolve()

    if not repo_path.exists():
        repo_path.mkdir(parents=True)
        click.echo(info(f"Created directory {repo_path}"))

    ops = Porcelain.init(str(repo_path))

    click.echo(success(f"Initialized empty PushUP repository in {ops.repo.repo_dir}"))
    click.echo(info("Start tracking files with:"))
    click.echo(info("  pushup add <file>"))
    click.echo(info("  pushup commit \"message\""))

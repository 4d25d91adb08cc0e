"""Status command - show the staging area."""

import click
from colorama import Fore, Style
from pushup.cli.context import open_ops, handle_errors
from pushup.cli.output import success, info


@click.command('status')
@handle_errors
def status_cmd():
    """
    Show the current branch and the staged files.

    Examples:
        pushup status
    """
    ops = open_ops()
    result = ops.status()

    click.echo(f"On branch {Fore.CYAN}{result.branch}{Style.RESET_ALL}")
    if not result.head:
        click.echo(info("No commits yet"))
    click.echo()

    if result.clean:
        click.echo(success("Nothing staged for commit"))
        return

    click.echo(Fore.GREEN + "Changes staged for commit:" + Style.RESET_ALL)
    click.echo()
    for entry in result.staged:
        click.echo(f"  {Fore.GREEN}{entry.label + ':':<12}{entry.path}{Style.RESET_ALL}")
    click.echo()

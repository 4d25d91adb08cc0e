"""Branch commands - list, create and delete branches."""

import click
from colorama import Fore, Style
from pushup.core.errors import NotFound
from pushup.cli.context import open_ops, handle_errors
from pushup.cli.output import success, warning, short


def get_commit_summary(repo, commit_hash):
    """Get the first line of a commit message, shortened."""
    if not commit_hash:
        return "(no commits)"
    try:
        message = repo.get_commit(commit_hash).message.split('\n')[0]
    except NotFound:
        return "Invalid commit"
    if len(message) > 50:
        message = message[:47] + "..."
    return message


@click.command('branch')
@click.option('-v', '--verbose', is_flag=True, help='Show commit hash and message')
@click.argument('branch_name', required=False)
@handle_errors
def branch_cmd(verbose, branch_name):
    """
    List or create branches.

    With no arguments, lists all branches. Current branch is marked with *.
    With one argument, creates a new branch at HEAD.

    Examples:
        pushup branch                 # List branches
        pushup branch -v              # List branches with commit info
        pushup branch feature         # Create 'feature' branch at HEAD
    """
    ops = open_ops()

    if branch_name:
        tip = ops.branch(branch_name)
        click.echo(success(f"Created branch '{branch_name}' at {short(tip)}"))
        return

    branches = ops.branch()
    if not branches:
        click.echo(warning("No branches found"))
        return

    for branch in branches:
        if branch.is_current:
            prefix = f"{Fore.GREEN}* {Style.RESET_ALL}"
            name_color = Fore.GREEN
        else:
            prefix = "  "
            name_color = ""

        if verbose:
            summary = get_commit_summary(ops.repo, branch.tip)
            click.echo(f"{prefix}{name_color}{branch.name:<20}{Style.RESET_ALL} {short(branch.tip):<7} {summary}")
        else:
            click.echo(f"{prefix}{name_color}{branch.name}{Style.RESET_ALL}")


@click.command('delete-branch')
@click.argument('branch_name')
@handle_errors
def delete_branch_cmd(branch_name):
    """
    Delete a branch.

    The current branch and main cannot be deleted.

    Examples:
        pushup delete-branch feature
    """
    ops = open_ops()
    ops.delete_branch(branch_name)
    click.echo(success(f"Deleted branch '{branch_name}'"))

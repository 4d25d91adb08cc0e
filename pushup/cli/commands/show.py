"""Show command - display commit details with diff."""

import click
from colorama import Fore, Style
from pushup.cli.context import open_ops, handle_errors
from pushup.cli.output import format_timestamp


@click.command('show')
@click.option('--no-color', is_flag=True, help='Disable colored output')
@click.argument('commit', required=False, default='HEAD')
@handle_errors
def show_cmd(no_color, commit):
    """
    Show commit details with diff.

    Each file of the commit is compared with the same path in the
    parent commit. Files the parent does not have are reported as new.

    Examples:
        pushup show                # Show HEAD commit
        pushup show abc123         # Show commit by digest prefix
        pushup show feature        # Show the tip of a branch
    """
    use_color = not no_color

    ops = open_ops()
    result = ops.show(commit)
    commit_obj = result.commit

    header = f"commit {result.commit_hash}"
    click.echo(f"{Fore.YELLOW}{header}{Style.RESET_ALL}" if use_color else header)

    if commit_obj.is_merge:
        click.echo(f"Merge: {commit_obj.parent[:7] if commit_obj.parent else '(none)'} {commit_obj.merge_parent[:7]}")

    click.echo(f"Date:   {format_timestamp(commit_obj.timestamp)}")
    click.echo()
    for line in commit_obj.message.split('\n'):
        click.echo(f"    {line}")
    click.echo()

    click.echo(ops.repo.diff.format_diff(result.files, color=use_color))

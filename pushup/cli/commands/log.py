"""Log command - show commit history."""

import click
from colorama import Fore, Style
from pushup.cli.context import open_ops, handle_errors
from pushup.cli.output import warning, info, format_timestamp


def format_commit(commit, oneline=False):
    """Render one commit for log output."""
    if oneline:
        summary = commit.message.split('\n')[0]
        return f"{Fore.YELLOW}{commit.digest[:7]}{Style.RESET_ALL} {summary}"

    lines = [f"{Fore.YELLOW}commit {commit.digest}{Style.RESET_ALL}"]
    if commit.is_merge:
        lines.append(f"Merge: {commit.parent[:7] if commit.parent else '(none)'} {commit.merge_parent[:7]}")
    lines.append(f"Date:   {format_timestamp(commit.timestamp)}")
    lines.append("")
    for line in commit.message.split('\n'):
        lines.append(f"    {line}")
    lines.append("")
    return '\n'.join(lines)


@click.command('log')
@click.option('-n', '--max-count', type=int, help='Limit number of commits to show')
@click.option('--oneline', is_flag=True, help='Show each commit on a single line')
@handle_errors
def log_cmd(max_count, oneline):
    """
    Show commit history.

    Follows first parents from HEAD. The merged side of a merge commit
    is not listed.

    Examples:
        pushup log
        pushup log -n 5
        pushup log --oneline
    """
    ops = open_ops()
    result = ops.log(max_count=max_count)

    if not result.commits:
        click.echo(warning(f"No commits found on branch '{result.branch}'"))
        return

    if not oneline:
        click.echo(info(f"Commit history for branch '{result.branch}':"))
        click.echo()

    for commit in result.commits:
        click.echo(format_commit(commit, oneline=oneline))

"""Checkout command - switch branches."""

import click
from pushup.core.errors import NotFound, InvalidOperation
from pushup.cli.context import open_ops, handle_errors
from pushup.cli.output import success, error, info


@click.command('checkout')
@click.argument('branch_name')
@handle_errors
def checkout_cmd(branch_name):
    """
    Switch to a different branch.

    Refused while anything is staged: commit or reset first.

    Examples:
        pushup checkout feature
        pushup checkout main
    """
    ops = open_ops()

    try:
        result = ops.checkout(branch_name)
    except NotFound as e:
        click.echo(error(str(e)))
        click.echo(info(f"Use 'pushup branch {branch_name}' to create it"))
        raise click.Abort()
    except InvalidOperation as e:
        click.echo(error(str(e)))
        click.echo(info("Please commit or reset your changes first"))
        raise click.Abort()

    click.echo(success(f"Switched to branch '{result.branch}'"))

"""Shared helpers for CLI commands."""

import functools
import logging
import click
from pushup.core.errors import PushupError, EmptyOperation
from pushup.operations.porcelain import Porcelain
from pushup.cli.output import error, warning

logger = logging.getLogger(__name__)


def open_ops() -> Porcelain:
    """Open the repository containing the current directory, or abort."""
    try:
        return Porcelain.open()
    except PushupError as e:
        click.echo(error(str(e)))
        raise click.Abort()


def handle_errors(func):
    """
    Turn PushupError into a user-facing report.

    EmptyOperation is a notice, not a failure: it prints a warning and the
    command exits 0. Every other PushupError prints an error and aborts
    with a non-zero status.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except EmptyOperation as e:
            click.echo(warning(str(e)))
        except PushupError as e:
            logger.debug("%s failed: %r", func.__name__, e)
            click.echo(error(str(e)))
            raise click.Abort()
    return wrapper

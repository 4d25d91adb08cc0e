"""Config command - manage repository configuration."""

import click
from pushup.core.config import Config, get_config, split_key
from pushup.core.repository import Repository
from pushup.cli.context import handle_errors
from pushup.cli.output import success, error, info


def load_config(is_global):
    """Config for the current repository, or the global config."""
    if is_global:
        return Config()
    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not a pushup repository (use --global for global config)"))
        raise click.Abort()
    return get_config(repo)


@click.group('config')
def config_cmd():
    """Get and set repository or global options."""
    pass


@config_cmd.command('set')
@click.argument('key')
@click.argument('value')
@click.option('--global', 'is_global', is_flag=True, help='Set global config')
@handle_errors
def config_set(key, value, is_global):
    """
    Set a config value.

    Examples:
        pushup config set core.lock false
        pushup config set --global log.level INFO
    """
    section, option = split_key(key)
    load_config(is_global).set(section, option, value, global_config=is_global)

    scope = "global" if is_global else "repository"
    click.echo(success(f"Set {scope} config: {section}.{option} = {value}"))


@config_cmd.command('get')
@click.argument('key')
@handle_errors
def config_get(key):
    """
    Get a config value.

    Environment variables (PUSHUP_<SECTION>_<KEY>) take precedence over
    the repository config, which takes precedence over the global one.

    Examples:
        pushup config get core.lock
    """
    repo = Repository.find_repository()
    config = get_config(repo)

    section, option = split_key(key)
    value = config.get(section, option)
    if value is None:
        click.echo(error(f"Config key not found: {key}"))
        raise click.Abort()
    click.echo(value)


@config_cmd.command('list')
@click.option('--global', 'is_global', is_flag=True, help='List global config only')
@handle_errors
def config_list(is_global):
    """
    List all config values.

    Examples:
        pushup config list
        pushup config list --global
    """
    repo = None if is_global else Repository.find_repository()
    values = get_config(repo).list_all(global_only=is_global)

    if not values:
        click.echo(info("No configuration set"))
        return

    for section, items in values.items():
        for key, value in items.items():
            click.echo(f"{section}.{key}={value}")

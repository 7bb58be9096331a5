"""
CLI entry point for the Picado client.

Provides command-line access to authentication, groups, players and
matches on a Picado backend.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from picado._version import __version__
from picado.config.settings import get_default_config_path, load_config
from picado.exceptions import InvalidConfigurationError
from picado.logging_config import setup_logging
from picado.cli.context import CLIContext, pass_context


@click.group()
@click.option(
    '--config',
    '-c',
    type=click.Path(exists=False, dir_okay=False, path_type=Path),
    default=None,
    help=f'Path to configuration file (default: {get_default_config_path()})',
)
@click.option(
    '--log-level',
    '-l',
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'], case_sensitive=False),
    default=None,
    help='Set logging level (overrides configuration)',
)
@click.option(
    '--verbose',
    '-v',
    is_flag=True,
    help='Enable verbose output',
)
@click.version_option(version=__version__, prog_name='picado')
@pass_context
def cli(ctx: CLIContext, config: Optional[Path], log_level: Optional[str], verbose: bool):
    """
    Picado - client for the Picado pick-up football backend.

    Manages your session, groups, players and matches.
    """
    ctx.verbose = verbose
    ctx.config_path = str(config) if config else None

    try:
        ctx.config = load_config(ctx.config_path)
    except InvalidConfigurationError as e:
        click.echo(f"Error: Invalid configuration: {e}", err=True)
        sys.exit(1)

    effective_log_level = log_level.upper() if log_level else ctx.config.logging.level
    log_file = Path(ctx.config.logging.file).expanduser() if ctx.config.logging.file else None
    setup_logging(
        level=effective_log_level,
        log_file=log_file,
        json_format=ctx.config.logging.format == "json",
    )

    if verbose:
        logger = logging.getLogger("picado")
        logger.info(f"Loaded configuration from: {ctx.config_path or 'defaults'}")
        logger.info(f"Log level: {effective_log_level}")


@cli.group()
def auth():
    """Sign in, sign out and manage accounts."""
    pass


from picado.cli.auth import forgot, login, logout, register, status
auth.add_command(login)
auth.add_command(register)
auth.add_command(forgot)
auth.add_command(logout)
auth.add_command(status)


@cli.group()
def groups():
    """Browse and create groups."""
    pass


from picado.cli.groups import create as create_group, get as get_group, list_groups
groups.add_command(list_groups, name='list')
groups.add_command(get_group)
groups.add_command(create_group)


@cli.group()
def players():
    """Browse players."""
    pass


from picado.cli.players import get as get_player, list_players
players.add_command(list_players, name='list')
players.add_command(get_player)


@cli.group()
def matches():
    """Browse matches."""
    pass


from picado.cli.matches import list_matches
matches.add_command(list_matches, name='list')


def main():
    """Console script entry point."""
    cli()


if __name__ == '__main__':
    main()

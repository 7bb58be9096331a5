"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Picado, a product of Garudex Labs

CLI commands for players.
"""

from typing import Optional

import click

from picado.cli.context import echo_json, run_client_call


@click.command('list')
@click.option('--space-id', '-s', default=None, help='Group whose membership data to include')
@click.pass_context
def list_players(ctx, space_id: Optional[str]):
    """List players."""
    echo_json(
        run_client_call(ctx.obj, lambda client: client.players.list(space_id), location="/players")
    )


@click.command('get')
@click.argument('player_id')
@click.pass_context
def get(ctx, player_id: str):
    """Show a single player."""
    echo_json(
        run_client_call(
            ctx.obj, lambda client: client.players.get(player_id), location=f"/players/{player_id}"
        )
    )

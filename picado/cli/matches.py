"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Picado, a product of Garudex Labs

CLI commands for matches.
"""

import click

from picado.cli.context import echo_json, run_client_call


@click.command('list')
@click.option('--group-id', '-g', required=True, help='Group whose matches to list')
@click.pass_context
def list_matches(ctx, group_id: str):
    """List a group's matches."""
    echo_json(
        run_client_call(ctx.obj, lambda client: client.matches.list_by_group(group_id), location="/")
    )

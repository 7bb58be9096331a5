"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Picado, a product of Garudex Labs

CLI commands for groups.
"""

from typing import Optional

import click

from picado.cli.context import echo_json, run_client_call


@click.command('list')
@click.pass_context
def list_groups(ctx):
    """List groups visible to the current user."""
    echo_json(run_client_call(ctx.obj, lambda client: client.groups.list(), location="/groups"))


@click.command('get')
@click.argument('group_id')
@click.pass_context
def get(ctx, group_id: str):
    """Show a single group."""
    echo_json(
        run_client_call(ctx.obj, lambda client: client.groups.get(group_id), location="/groups")
    )


@click.command('create')
@click.option('--name', '-n', required=True, help='Group name')
@click.option('--description', '-d', default=None, help='Optional description')
@click.pass_context
def create(ctx, name: str, description: Optional[str]):
    """Create a new group."""
    echo_json(
        run_client_call(
            ctx.obj, lambda client: client.groups.create(name, description), location="/groups"
        )
    )

"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Picado, a product of Garudex Labs

CLI commands for authentication.
"""

import click

from picado.cli.context import echo_json, run_client_call


@click.command('login')
@click.option('--email', '-e', required=True, help='Account email')
@click.password_option('--password', '-p', confirmation_prompt=False, help='Account password')
@click.pass_context
def login(ctx, email: str, password: str):
    """
    Sign in and store the session token.

    Examples:

        picado auth login --email ana@example.com
    """
    run_client_call(
        ctx.obj,
        lambda client: client.auth.login(email, password),
        location="/login",
    )
    click.echo("✓ Logged in")


@click.command('register')
@click.option('--email', '-e', required=True, help='Account email')
@click.password_option('--password', '-p', help='Account password')
@click.pass_context
def register(ctx, email: str, password: str):
    """Create a new account."""
    result = run_client_call(
        ctx.obj,
        lambda client: client.auth.register(email, password),
        location="/register",
    )
    click.echo(f"✓ Account created (via {result.endpoint})")


@click.command('forgot')
@click.option('--email', '-e', required=True, help='Account email')
@click.pass_context
def forgot(ctx, email: str):
    """Request a password reset message."""
    run_client_call(
        ctx.obj,
        lambda client: client.auth.request_password_reset(email),
        location="/forgot",
    )
    click.echo("✓ Password reset requested")


@click.command('logout')
@click.pass_context
def logout(ctx):
    """Remove the stored session token."""
    async def _logout(client):
        client.auth.logout()

    run_client_call(ctx.obj, _logout)
    click.echo("✓ Logged out")


@click.command('status')
@click.pass_context
def status(ctx):
    """Show whether a session token is stored."""
    async def _status(client):
        return client.auth.is_authenticated

    authenticated = run_client_call(ctx.obj, _status)
    echo_json({"authenticated": authenticated})

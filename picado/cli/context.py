"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Picado, a product of Garudex Labs

CLI context for the Picado client.

Provides shared context object, navigator and helpers for CLI commands.
"""

import asyncio
import json
import sys
from typing import Any, Awaitable, Callable, Optional

import click

from picado.exceptions import PicadoError, RequestError
from picado.sdk.adapters.base import BaseAdapter
from picado.sdk.client import PicadoClient
from picado.sdk.session import Navigator


class CliNavigator(Navigator):
    """Treats the running command as the current screen.

    A redirect to the entry point becomes a hint on stderr.
    """

    def __init__(self, location: Optional[str] = None):
        self.location = location

    def current_location(self) -> Optional[str]:
        return self.location

    def navigate(self, destination: str) -> None:
        click.echo(
            "Session expired or invalid. Run 'picado auth login' to sign in again.",
            err=True,
        )


class CLIContext:
    """Context object for CLI commands."""

    def __init__(self):
        self.config = None
        self.config_path = None
        self.verbose = False
        # Transport override, used by tests
        self.adapter: Optional[BaseAdapter] = None

    def make_client(self, location: Optional[str] = None) -> PicadoClient:
        return PicadoClient.from_config(
            self.config,
            adapter=self.adapter,
            navigator=CliNavigator(location),
        )


pass_context = click.make_pass_decorator(CLIContext, ensure=True)


def echo_json(data: Any) -> None:
    click.echo(json.dumps(data, indent=2, ensure_ascii=False, default=str))


def run_client_call(
    cli_ctx: CLIContext,
    call: Callable[[PicadoClient], Awaitable[Any]],
    location: Optional[str] = None,
) -> Any:
    """
    Run one client coroutine to completion, reporting failures on stderr.

    Exits with status 1 on any Picado error.
    """
    async def _run():
        async with cli_ctx.make_client(location) as client:
            return await call(client)

    try:
        return asyncio.run(_run())
    except RequestError as e:
        status = f" (status {e.status})" if e.status else ""
        click.echo(f"Error: {e.message}{status}", err=True)
        sys.exit(1)
    except PicadoError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

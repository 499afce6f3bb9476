"""agentlify router-config -- show the configuration of the current router."""

from __future__ import annotations

import click

from agentlify.cli.formatting import format_json


@click.command("router-config")
@click.pass_context
def router_config(ctx: click.Context) -> None:
    """Show the router configuration."""
    from agentlify.cli import _client_session

    with _client_session(ctx) as (client, console):
        format_json(client.get_router_config(), console)

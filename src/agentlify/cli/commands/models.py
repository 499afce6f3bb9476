"""agentlify models -- list the models available to the router."""

from __future__ import annotations

import click

from agentlify.cli.formatting import format_json, format_models


@click.command()
@click.option("--json", "as_json", is_flag=True, help="Print raw JSON.")
@click.pass_context
def models(ctx: click.Context, as_json: bool) -> None:
    """List available models."""
    from agentlify.cli import _client_session

    with _client_session(ctx) as (client, console):
        result = client.get_models()
        if as_json or not isinstance(result, list):
            format_json(result, console)
        else:
            format_models(result, console)

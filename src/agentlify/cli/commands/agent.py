"""agentlify agent -- run an agent once with a user prompt."""

from __future__ import annotations

import json

import click

from agentlify.cli.formatting import format_reply


@click.command()
@click.argument("agent_id")
@click.argument("prompt")
@click.option(
    "--options",
    "options_json",
    default=None,
    help="Agent options as a JSON object.",
)
@click.pass_context
def agent(
    ctx: click.Context,
    agent_id: str,
    prompt: str,
    options_json: str | None,
) -> None:
    """Execute AGENT_ID with PROMPT and print the response.

    Tool calls requested by the agent are printed, not executed.
    """
    from agentlify.cli import _client_session

    options = None
    if options_json:
        try:
            options = json.loads(options_json)
        except json.JSONDecodeError as exc:
            raise click.BadParameter(f"not valid JSON: {exc}", param_hint="--options")

    with _client_session(ctx) as (client, console):
        response = client.agents.execute(
            agent_id,
            [{"role": "user", "content": prompt}],
            options=options,
        )
        format_reply(response, console)

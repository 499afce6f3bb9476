"""agentlify chat -- send a single prompt through the router."""

from __future__ import annotations

import click

from agentlify.cli.formatting import format_reply


@click.command()
@click.argument("prompt")
@click.option("--model", default=None, help="Model to use (default: router decides).")
@click.option("--system", default=None, help="Optional system prompt.")
@click.option("--stream", is_flag=True, help="Print the reply as it is generated.")
@click.pass_context
def chat(
    ctx: click.Context,
    prompt: str,
    model: str | None,
    system: str | None,
    stream: bool,
) -> None:
    """Send PROMPT as a user message and print the reply."""
    from agentlify.cli import _client_session

    messages = []
    if system:
        messages.append({"role": "system", "content": system})
    messages.append({"role": "user", "content": prompt})

    with _client_session(ctx) as (client, console):
        if not stream:
            format_reply(client.chat.create(messages, model=model), console)
            return

        with client.chat.create(messages, model=model, stream=True) as chunks:
            for chunk in chunks:
                for choice in chunk.get("choices") or []:
                    content = (choice.get("delta") or {}).get("content")
                    if content:
                        console.print(content, end="", markup=False, highlight=False)
        console.print()

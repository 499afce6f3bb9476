"""Agentlify CLI -- terminal interface for the Agentlify API.

This module is NEVER imported from agentlify/__init__.py.
It is only loaded via the ``agentlify`` entry point defined in pyproject.toml.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING

try:
    import click
except ImportError:
    raise ImportError(
        "CLI dependencies not installed. Install with: pip install agentlify[cli]"
    ) from None

from agentlify.cli.formatting import format_error, get_console

if TYPE_CHECKING:
    from collections.abc import Iterator

    from rich.console import Console

    from agentlify.client import Agentlify


@click.group()
@click.option(
    "--api-key",
    default=None,
    envvar="AGENTLIFY_API_KEY",
    help="Agentlify API key (mp_...).",
)
@click.option(
    "--router-id",
    default=None,
    envvar="AGENTLIFY_ROUTER_ID",
    help="Router ID to send requests through.",
)
@click.option(
    "--base-url",
    default=None,
    envvar="AGENTLIFY_BASE_URL",
    help="API base URL.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    api_key: str | None,
    router_id: str | None,
    base_url: str | None,
) -> None:
    """Agentlify: OpenAI-compatible model routing and agents."""
    ctx.ensure_object(dict)
    ctx.obj["api_key"] = api_key
    ctx.obj["router_id"] = router_id
    ctx.obj["base_url"] = base_url


def _get_client(ctx: click.Context) -> Agentlify:
    """Build an Agentlify client from Click context.

    Tests may place a ready client under ``ctx.obj["client"]``.
    """
    from agentlify.client import Agentlify

    if ctx.obj.get("client") is not None:
        return ctx.obj["client"]
    return Agentlify(
        api_key=ctx.obj["api_key"],
        router_id=ctx.obj["router_id"],
        base_url=ctx.obj["base_url"],
    )


@contextmanager
def _client_session(ctx: click.Context) -> Iterator[tuple[Agentlify, Console]]:
    """Context manager that builds a client, yields (client, console), and handles cleanup.

    Ensures the client is closed on exit and formats exceptions as CLI errors.
    """
    console = get_console()
    try:
        client = _get_client(ctx)
        try:
            yield client, console
        finally:
            client.close()
    except SystemExit:
        raise
    except Exception as e:
        format_error(str(e), console)
        raise SystemExit(1) from None


# Register subcommands after cli group is defined
from agentlify.cli.commands.agent import agent  # noqa: E402
from agentlify.cli.commands.chat import chat  # noqa: E402
from agentlify.cli.commands.models import models  # noqa: E402
from agentlify.cli.commands.router import router_config  # noqa: E402

cli.add_command(agent)
cli.add_command(chat)
cli.add_command(models)
cli.add_command(router_config)

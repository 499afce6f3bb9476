"""Rich formatting helpers for the Agentlify CLI.

Provides functions that format API responses for terminal display.
Rich auto-detects TTY and degrades gracefully when piped (no ANSI codes).
"""

from __future__ import annotations

import json
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table


def get_console() -> Console:
    """Create a Rich Console that auto-detects TTY for graceful pipe degradation."""
    return Console(stderr=False)


def format_models(models: list[dict], console: Console) -> None:
    """Display available models as a table."""
    if not models:
        console.print("[dim]No models.[/dim]")
        return

    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("ID", style="yellow")
    table.add_column("Provider", style="cyan")
    table.add_column("Available", justify="center")
    table.add_column("Capabilities", style="dim")

    for model in models:
        capabilities = model.get("capabilities") or {}
        caps = ", ".join(name for name, enabled in capabilities.items() if enabled)
        available = model.get("available")
        table.add_row(
            escape(str(model.get("id", ""))),
            escape(str(model.get("provider", ""))),
            "[green]yes[/green]" if available else "[red]no[/red]" if available is not None else "",
            escape(caps),
        )

    console.print(table)


def format_json(data: Any, console: Console) -> None:
    """Pretty-print a JSON-compatible value."""
    console.print_json(json.dumps(data, default=str))


def format_reply(response: dict, console: Console) -> None:
    """Display the assistant message of a chat or agent response."""
    try:
        message = response["choices"][0]["message"]
    except (KeyError, IndexError, TypeError):
        format_json(response, console)
        return

    content = message.get("content")
    if content:
        console.print(escape(content), highlight=False)
    for tc in message.get("tool_calls") or []:
        func = tc.get("function") or {}
        console.print(
            f"[cyan]tool call[/cyan] {escape(str(func.get('name', '')))}"
            f"({escape(str(func.get('arguments', '')))})",
            highlight=False,
        )

    usage = response.get("usage")
    if isinstance(usage, dict) and usage.get("total_tokens") is not None:
        console.print(f"[dim]{usage['total_tokens']} tokens[/dim]")


def format_error(message: str, console: Console) -> None:
    """Display an error message."""
    console.print(f"[red]Error:[/red] {escape(message)}", highlight=False)

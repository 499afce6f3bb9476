"""Tool resolver: runs local callbacks for the tool calls an agent requested.

Tool-level failures never raise. A missing callback, undecodable
arguments, or an exception inside a callback all become an
``{"error": ...}`` result so the agent can see and react to them.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import TYPE_CHECKING, Any

from agentlify.types import ToolCall, ToolResult

if TYPE_CHECKING:
    from collections.abc import Awaitable, Iterable

    from agentlify.tools import CallbackRegistry

logger = logging.getLogger(__name__)


async def _await(awaitable: Awaitable[Any]) -> Any:
    return await awaitable


def _run_awaitable(awaitable: Awaitable[Any]) -> Any:
    """Drive an async callback result to completion on a fresh event loop."""
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(_await(awaitable))
    if inspect.iscoroutine(awaitable):
        awaitable.close()
    raise RuntimeError(
        "Async tool callbacks cannot be awaited from inside a running event loop; "
        "call run() from synchronous code or use a synchronous callback"
    )


def resolve_tool_call(tool_call: ToolCall, registry: CallbackRegistry) -> ToolResult:
    """Execute one tool call against the registry.

    Args:
        tool_call: The parsed tool call.
        registry: Mapping of tool name -> callback.

    Returns:
        ToolResult whose content is the callback's return value, or an
        ``{"error": message}`` dict.
    """
    callback = registry.get(tool_call.name)
    if callback is None:
        logger.debug("No callback registered for tool %s", tool_call.name)
        return ToolResult(
            tool_call_id=tool_call.id,
            content={"error": f"No callback registered for tool: {tool_call.name}"},
        )

    try:
        args = tool_call.arguments.decode()
        result = callback(args)
        if inspect.isawaitable(result):
            result = _run_awaitable(result)
    except Exception as exc:
        logger.debug("Tool %s failed: %s", tool_call.name, exc, exc_info=True)
        return ToolResult(tool_call_id=tool_call.id, content={"error": str(exc)})

    return ToolResult(tool_call_id=tool_call.id, content=result)


def resolve_tool_calls(
    tool_calls: Iterable[ToolCall],
    registry: CallbackRegistry,
) -> list[ToolResult]:
    """Execute tool calls strictly in order, one result per call.

    Callbacks run sequentially so side effects happen in the order the
    agent asked for them.
    """
    return [resolve_tool_call(tc, registry) for tc in tool_calls]

"""Tool definitions and the callback registry.

Tools may be given as plain dicts in the OpenAI function-calling shape
(with an optional local ``callback`` key) or as FunctionTool instances.
extract_callbacks() separates the local callbacks from the definitions
that are safe to send to the API.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Optional, Union

from agentlify.exceptions import InvalidRequestError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from agentlify.types import ToolDict

logger = logging.getLogger(__name__)

ToolCallback = Callable[[Any], Any]
CallbackRegistry = dict[str, ToolCallback]


@dataclass(frozen=True)
class FunctionTool:
    """A function tool, optionally backed by a local callback.

    Attributes:
        name: Tool name, unique within one call.
        description: When/why the agent should use this tool.
        parameters: JSON Schema dict describing the arguments.
        callback: Local function called with the decoded arguments.
            None for tools executed server-side.
        webhook_url: Server-side webhook (agent config only).
        timeout: Webhook timeout in milliseconds.
        headers: Webhook request headers.

    Example::

        calc = FunctionTool(
            name="calc",
            description="Evaluate arithmetic",
            parameters={"type": "object", "properties": {"expr": {"type": "string"}}},
            callback=lambda args: {"result": eval_expr(args["expr"])},
        )
    """

    name: str
    description: str = ""
    parameters: dict = field(default_factory=lambda: {"type": "object", "properties": {}})
    callback: Optional[ToolCallback] = None
    webhook_url: Optional[str] = None
    timeout: Optional[int] = None
    headers: Optional[dict[str, str]] = None

    def to_dict(self) -> ToolDict:
        """Convert to the API tool shape, without the callback."""
        d: ToolDict = {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters,
            },
        }
        if self.webhook_url is not None:
            d["webhookUrl"] = self.webhook_url
        if self.timeout is not None:
            d["timeout"] = self.timeout
        if self.headers is not None:
            d["headers"] = dict(self.headers)
        return d


ToolLike = Union[FunctionTool, dict]


def _split(tool: ToolLike) -> tuple[dict, Any, Optional[str]]:
    """Return (definition without callback, callback, function name)."""
    if isinstance(tool, FunctionTool):
        return dict(tool.to_dict()), tool.callback, tool.name
    if isinstance(tool, dict):
        definition = {k: v for k, v in tool.items() if k != "callback"}
        func = tool.get("function")
        name = func.get("name") if isinstance(func, dict) else None
        return definition, tool.get("callback"), name
    raise InvalidRequestError(
        f"Tools must be dicts or FunctionTool instances, got {type(tool).__name__}",
        "tools",
    )


def extract_callbacks(
    tools: Iterable[ToolLike] | None,
) -> tuple[list[dict], CallbackRegistry]:
    """Split tools into API-safe definitions and a name -> callback registry.

    The input is never mutated. Every tool appears in the returned list, in
    order, without a ``callback`` key; tools without a callback (server-side
    or webhook tools) pass through unchanged. If two tools share a name the
    later callback replaces the earlier one.

    Args:
        tools: Tool dicts and/or FunctionTool instances.

    Returns:
        Tuple of (clean tool dicts, callback registry).

    Raises:
        InvalidRequestError: If an entry is neither a dict nor a FunctionTool.
    """
    clean: list[dict] = []
    registry: CallbackRegistry = {}

    for tool in tools or ():
        definition, callback, name = _split(tool)
        if callable(callback) and name:
            if name in registry:
                logger.warning(
                    "Duplicate callback for tool %r; the later definition wins", name
                )
            registry[name] = callback
        clean.append(definition)

    return clean, registry


def strip_callbacks(tools: Iterable[ToolLike] | None) -> list[dict]:
    """Return API-safe tool definitions, dropping any local callbacks."""
    clean, _ = extract_callbacks(tools)
    return clean

"""Agents API: execute server-side agents with local tool callbacks.

``run()`` drives the tool loop: call the agent, and while the response asks
for tool execution, run the matching local callbacks, append the assistant
turn and the tool results to the conversation, and call the agent again.
``execute()`` is a single round trip for callers that resolve tool calls
themselves.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from agentlify.exceptions import InvalidRequestError, ToolIterationLimitError
from agentlify.resolver import resolve_tool_calls
from agentlify.tools import extract_callbacks, strip_callbacks
from agentlify.types import ToolCall, message_to_dict

if TYPE_CHECKING:
    from collections.abc import Sequence

    from agentlify.tools import ToolLike
    from agentlify.transport import Transport
    from agentlify.types import AgentResponseDict, Message

logger = logging.getLogger(__name__)

AGENTS_ENDPOINT = "/agents"
DEFAULT_MAX_TOOL_ITERATIONS = 10


@dataclass
class RunState:
    """Working set of one ``run()`` call.

    Attributes:
        messages: Conversation so far; only ever appended to.
        iteration: Number of requests sent.
        last_response: Most recent agent response.
    """

    messages: list[dict] = field(default_factory=list)
    iteration: int = 0
    last_response: dict | None = None


def _validate(agent_id: Any, messages: Any) -> None:
    if not agent_id or not isinstance(agent_id, str):
        raise InvalidRequestError("agentId is required", "agentId")
    if not isinstance(messages, (list, tuple)):
        raise InvalidRequestError("messages array is required", "messages")


def _first_choice(response: Any) -> dict:
    if not isinstance(response, dict):
        return {}
    choices = response.get("choices")
    if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
        return {}
    return choices[0]


def needs_tool_execution(response: Any) -> bool:
    """Whether an agent response asks the caller to execute tools.

    True when the first choice finished with ``"tool_calls"`` or the agent
    metadata sets ``requires_tool_execution``.
    """
    if _first_choice(response).get("finish_reason") == "tool_calls":
        return True
    metadata = response.get("agent_metadata") if isinstance(response, dict) else None
    return isinstance(metadata, dict) and bool(metadata.get("requires_tool_execution"))


def pending_tool_calls(response: Any) -> list[dict]:
    """Return the raw tool calls of the first choice (empty if none)."""
    message = _first_choice(response).get("message")
    if not isinstance(message, dict):
        return []
    tool_calls = message.get("tool_calls")
    return list(tool_calls) if isinstance(tool_calls, list) else []


class Agents:
    """Agents API bound to one client's transport.

    Usage::

        response = client.agents.run(
            "my-agent",
            [{"role": "user", "content": "What is the weather in NYC?"}],
            tools=[FunctionTool(name="get_weather", callback=lookup_weather)],
        )
        print(response["choices"][0]["message"]["content"])
    """

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    def run(
        self,
        agent_id: str,
        messages: Sequence[Message | dict],
        tools: Sequence[ToolLike] | None = None,
        *,
        options: dict[str, Any] | None = None,
        max_tool_iterations: int = DEFAULT_MAX_TOOL_ITERATIONS,
    ) -> AgentResponseDict:
        """Execute an agent, resolving tool calls with local callbacks.

        Loop: send the conversation, and while the agent asks for tools,
        run the callbacks (in call order), append one assistant message and
        one ``tool`` message per call, and send again. Callback failures are
        reported to the agent as ``{"error": ...}`` tool content.

        Args:
            agent_id: ID of the agent to execute.
            messages: Conversation messages (dicts or Message). Not modified.
            tools: Tool dicts or FunctionTool instances; callbacks are kept
                local and never sent.
            options: Additional agent options.
            max_tool_iterations: Maximum number of requests to send.

        Returns:
            The first agent response that does not ask for tool execution,
            unchanged.

        Raises:
            InvalidRequestError: On invalid arguments (nothing is sent).
            ToolIterationLimitError: If the agent still asks for tools after
                ``max_tool_iterations`` requests.
            APIError: On API failures (see Transport).
        """
        _validate(agent_id, messages)
        if (
            isinstance(max_tool_iterations, bool)
            or not isinstance(max_tool_iterations, int)
            or max_tool_iterations < 1
        ):
            raise InvalidRequestError(
                "maxToolIterations must be a positive integer", "maxToolIterations"
            )

        clean_tools, registry = extract_callbacks(tools)
        state = RunState(messages=[message_to_dict(m) for m in messages])

        while state.iteration < max_tool_iterations:
            state.iteration += 1
            logger.debug(
                "Agent %s: request %d/%d", agent_id, state.iteration, max_tool_iterations
            )
            state.last_response = self._post(agent_id, state.messages, clean_tools, options)
            response = state.last_response

            if not needs_tool_execution(response):
                return response

            raw_calls = pending_tool_calls(response)
            if not raw_calls:
                logger.debug(
                    "Agent %s flagged tool execution without tool calls", agent_id
                )
                return response

            tool_calls = [ToolCall.from_openai(tc) for tc in raw_calls]
            logger.info(
                "Agent %s requested %d tool call(s): %s",
                agent_id,
                len(tool_calls),
                ", ".join(tc.name for tc in tool_calls),
            )
            results = resolve_tool_calls(tool_calls, registry)

            assistant = _first_choice(response).get("message") or {}
            state.messages.append({
                "role": "assistant",
                "content": assistant.get("content") or None,
                "tool_calls": copy.deepcopy(raw_calls),
            })
            state.messages.extend(result.to_message() for result in results)

        raise ToolIterationLimitError(max_tool_iterations)

    def execute(
        self,
        agent_id: str,
        messages: Sequence[Message | dict],
        tools: Sequence[ToolLike] | None = None,
        *,
        options: dict[str, Any] | None = None,
    ) -> AgentResponseDict:
        """Execute an agent once, without resolving tool calls.

        Use this to drive tool calls manually: the response is returned even
        if it asks for tool execution. Callbacks are stripped from ``tools``.

        Raises:
            InvalidRequestError: On invalid arguments (nothing is sent).
            APIError: On API failures (see Transport).
        """
        _validate(agent_id, messages)
        return self._post(
            agent_id,
            [message_to_dict(m) for m in messages],
            strip_callbacks(tools),
            options,
        )

    def _post(
        self,
        agent_id: str,
        messages: list[dict],
        tools: list[dict],
        options: dict[str, Any] | None,
    ) -> Any:
        payload: dict[str, Any] = {"agentId": agent_id, "messages": messages}
        if tools:
            payload["tools"] = tools
        payload["options"] = options or {}
        return self._transport.request("POST", AGENTS_ENDPOINT, json=payload)

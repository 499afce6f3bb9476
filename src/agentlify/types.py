"""Wire shapes and domain dataclasses for Agentlify.

TypedDicts document the JSON the API sends and accepts; responses are
returned to callers as plain dicts with these shapes. The frozen
dataclasses (Message, ToolCall, ToolResult) are the local representation
used by the agent tool loop.
"""

from __future__ import annotations

import json as _json
from dataclasses import dataclass, field
from typing import Any, Literal, Optional, TypedDict, Union

from agentlify.exceptions import InvalidRequestError

Role = Literal["system", "user", "assistant", "tool"]


class FunctionCallDict(TypedDict):
    """OpenAI function sub-object of a tool call."""

    name: str
    arguments: str


class ToolCallDict(TypedDict, total=False):
    """OpenAI wire format for a single tool call."""

    id: str
    type: str
    function: FunctionCallDict


class MessageDict(TypedDict, total=False):
    """A chat message as sent to and received from the API."""

    role: str
    content: Optional[str]
    name: str
    tool_calls: list[ToolCallDict]
    tool_call_id: str


class FunctionDefinitionDict(TypedDict, total=False):
    name: str
    description: str
    parameters: dict[str, Any]


class ToolDict(TypedDict, total=False):
    """A tool definition as accepted by the API.

    ``callback`` is local only and is stripped before sending. The webhook
    fields describe server-side tools and are passed through untouched.
    """

    type: str
    function: FunctionDefinitionDict
    callback: Any
    webhookUrl: str
    timeout: int
    headers: dict[str, str]


class UsageDict(TypedDict, total=False):
    prompt_tokens: int
    completion_tokens: int
    total_tokens: int


class ChoiceDict(TypedDict, total=False):
    index: int
    message: MessageDict
    finish_reason: Optional[str]


class ChatCompletionDict(TypedDict, total=False):
    """Response of ``POST /chat/completions``."""

    id: str
    object: str
    created: int
    model: str
    choices: list[ChoiceDict]
    usage: UsageDict
    _meta: dict[str, Any]


class ChunkChoiceDict(TypedDict, total=False):
    index: int
    delta: MessageDict
    finish_reason: Optional[str]


class ChatCompletionChunkDict(TypedDict, total=False):
    """One server-sent event of a streamed chat completion."""

    id: str
    object: str
    created: int
    model: str
    choices: list[ChunkChoiceDict]


class AgentMetadataDict(TypedDict, total=False):
    agent_id: str
    agent_name: str
    execution_id: str
    steps_executed: int
    skills_invoked: int
    total_latency: float
    requires_tool_execution: bool


class AgentResponseDict(TypedDict, total=False):
    """Response of ``POST /agents``."""

    id: str
    object: str
    created: int
    model: str
    choices: list[ChoiceDict]
    usage: UsageDict
    cost: float
    costBreakdown: dict[str, Any]
    agent_metadata: AgentMetadataDict


@dataclass(frozen=True)
class Message:
    """A single conversation message.

    Callers may pass these or plain dicts wherever messages are accepted.
    """

    role: Role
    content: Optional[str] = None
    name: Optional[str] = None
    tool_calls: Optional[list[ToolCallDict]] = None
    tool_call_id: Optional[str] = None

    def to_dict(self) -> MessageDict:
        """Serialize to the API message shape, omitting unset fields."""
        d: MessageDict = {"role": self.role, "content": self.content}
        if self.name is not None:
            d["name"] = self.name
        if self.tool_calls:
            d["tool_calls"] = list(self.tool_calls)
        if self.tool_call_id is not None:
            d["tool_call_id"] = self.tool_call_id
        return d


@dataclass(frozen=True)
class RawArguments:
    """Tool-call arguments received as JSON text."""

    text: str

    def decode(self) -> Any:
        if not self.text.strip():
            return {}
        return _json.loads(self.text)


@dataclass(frozen=True)
class StructuredArguments:
    """Tool-call arguments received already decoded."""

    value: Any

    def decode(self) -> Any:
        return self.value


ToolArguments = Union[RawArguments, StructuredArguments]


@dataclass(frozen=True)
class ToolCall:
    """A tool invocation requested by the agent.

    The arguments keep the form the server sent them in; decoding happens
    once, in the resolver, so a malformed payload becomes an in-band error
    for that call only.
    """

    id: str
    name: str
    arguments: ToolArguments = field(default_factory=lambda: StructuredArguments({}))

    @classmethod
    def from_openai(cls, tc: Any) -> ToolCall:
        """Parse from the OpenAI tool-call wire format.

        Malformed entries parse to a call with an empty name, which the
        resolver answers with a missing-callback error.
        """
        if not isinstance(tc, dict):
            tc = {}
        func = tc.get("function")
        if not isinstance(func, dict):
            func = {}
        raw_args = func.get("arguments")
        if isinstance(raw_args, str):
            arguments: ToolArguments = RawArguments(raw_args)
        else:
            arguments = StructuredArguments(raw_args if raw_args is not None else {})
        return cls(
            id=str(tc.get("id") or ""),
            name=str(func.get("name") or ""),
            arguments=arguments,
        )


@dataclass(frozen=True)
class ToolResult:
    """Outcome of one tool call, ready to be sent back as a ``tool`` message.

    Attributes:
        tool_call_id: ID of the tool call this answers.
        content: Callback return value, or ``{"error": ...}`` on failure.
    """

    tool_call_id: str
    content: Any

    @property
    def is_error(self) -> bool:
        return isinstance(self.content, dict) and set(self.content) == {"error"}

    def to_message(self) -> MessageDict:
        """Build the ``tool`` message; non-string content is compact JSON."""
        content = self.content
        if not isinstance(content, str):
            content = _json.dumps(content, separators=(",", ":"), default=str)
        return {"role": "tool", "tool_call_id": self.tool_call_id, "content": content}


def message_to_dict(message: Message | dict) -> dict:
    """Normalize a Message or message dict to a dict (dicts are copied).

    Raises:
        InvalidRequestError: If the entry is neither.
    """
    if isinstance(message, Message):
        return dict(message.to_dict())
    if not isinstance(message, dict):
        raise InvalidRequestError(
            f"messages must contain dicts or Message objects, got {type(message).__name__}",
            "messages",
        )
    return dict(message)

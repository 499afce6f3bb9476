"""Chat completions API (OpenAI-compatible, routed by the configured router)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from agentlify.exceptions import InvalidRequestError
from agentlify.streaming import ChatCompletionStream
from agentlify.tools import strip_callbacks
from agentlify.types import message_to_dict

if TYPE_CHECKING:
    from collections.abc import Sequence

    from agentlify.tools import ToolLike
    from agentlify.transport import Transport
    from agentlify.types import ChatCompletionDict, Message

logger = logging.getLogger(__name__)

CHAT_COMPLETIONS_ENDPOINT = "/chat/completions"


class ChatCompletions:
    """Chat completions bound to one client's transport and router.

    Usage::

        response = client.chat.create([{"role": "user", "content": "Hello"}])
        print(response["choices"][0]["message"]["content"])
    """

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    @property
    def completions(self) -> ChatCompletions:
        """OpenAI-style alias: ``client.chat.completions.create(...)``."""
        return self

    def create(
        self,
        messages: Sequence[Message | dict],
        *,
        model: str | None = None,
        stream: bool = False,
        tools: Sequence[ToolLike] | None = None,
        **params: Any,
    ) -> ChatCompletionDict | ChatCompletionStream:
        """Create a chat completion.

        Args:
            messages: Conversation messages (dicts or Message).
            model: Model to use. Omit to let the router choose.
            stream: Return a ChatCompletionStream instead of a response dict.
            tools: Tool definitions; local callbacks are stripped.
            **params: Additional OpenAI parameters (temperature, max_tokens,
                tool_choice, ...). ``None`` values are omitted.

        Returns:
            Response dict, or a ChatCompletionStream when ``stream=True``.

        Raises:
            InvalidRequestError: If messages is not a list.
            APIError: On API failures (see Transport).
        """
        if not isinstance(messages, (list, tuple)):
            raise InvalidRequestError("messages array is required", "messages")

        payload: dict[str, Any] = {
            "routerId": self._transport.config.router_id,
            "messages": [message_to_dict(m) for m in messages],
        }
        if model is not None:
            payload["model"] = model
        clean_tools = strip_callbacks(tools)
        if clean_tools:
            payload["tools"] = clean_tools
        payload.update({k: v for k, v in params.items() if v is not None})

        if stream:
            payload["stream"] = True
            response = self._transport.stream(
                "POST", CHAT_COMPLETIONS_ENDPOINT, json=payload
            )
            return ChatCompletionStream(response)

        return self._transport.request("POST", CHAT_COMPLETIONS_ENDPOINT, json=payload)

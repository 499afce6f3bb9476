"""Streamed chat completions.

ChatCompletionStream turns a server-sent-events response into a lazy,
single-pass iterator of chunk dicts. Stopping early and calling close()
(or leaving the ``with`` block) releases the connection, which is how a
stream is cancelled.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from agentlify.exceptions import APIError

if TYPE_CHECKING:
    from collections.abc import Iterator

    import httpx

    from agentlify.types import ChatCompletionChunkDict

logger = logging.getLogger(__name__)

DONE_MARKER = "[DONE]"


class ChatCompletionStream:
    """Iterator over the chunks of a streamed chat completion.

    Usage::

        with client.chat.create(messages, stream=True) as stream:
            for chunk in stream:
                print(chunk["choices"][0]["delta"].get("content", ""), end="")
    """

    def __init__(self, response: httpx.Response) -> None:
        self._response = response
        self._chunks = self._iter_chunks()

    def __iter__(self) -> Iterator[ChatCompletionChunkDict]:
        return self

    def __next__(self) -> ChatCompletionChunkDict:
        return next(self._chunks)

    def _iter_chunks(self) -> Iterator[ChatCompletionChunkDict]:
        try:
            for line in self._response.iter_lines():
                line = line.strip()
                # Blank separators, ':' comments and event/id fields carry no chunk.
                if not line.startswith("data:"):
                    continue
                data = line[5:].strip()
                if data == DONE_MARKER:
                    break
                try:
                    chunk = json.loads(data)
                except json.JSONDecodeError:
                    logger.warning("Skipping undecodable stream event: %r", data[:200])
                    continue
                if isinstance(chunk, dict) and chunk.get("error"):
                    error = chunk["error"]
                    message = error.get("message") if isinstance(error, dict) else str(error)
                    raise APIError(
                        message or "Stream error",
                        self._response.status_code,
                        chunk,
                        self._response.headers.get("x-request-id"),
                    )
                yield chunk
        finally:
            self._response.close()

    def to_list(self) -> list[ChatCompletionChunkDict]:
        """Consume the rest of the stream and return the chunks."""
        return list(self)

    def get_text(self) -> str:
        """Consume the rest of the stream and return the concatenated content."""
        parts: list[str] = []
        for chunk in self:
            for choice in chunk.get("choices") or []:
                delta = choice.get("delta") or {}
                content = delta.get("content")
                if isinstance(content, str):
                    parts.append(content)
        return "".join(parts)

    def close(self) -> None:
        """Stop the stream and release the connection."""
        self._chunks.close()
        self._response.close()

    def __enter__(self) -> ChatCompletionStream:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

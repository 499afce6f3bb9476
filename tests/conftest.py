"""Shared test fixtures for Agentlify.

Provides realistic response builders, a scripted httpx.MockTransport
handler, and a client factory that never touches the network or sleeps.
"""

from __future__ import annotations

import json

import httpx
import pytest
from hypothesis import HealthCheck, settings

from agentlify import Agentlify

API_KEY = "mp_test_key"
ROUTER_ID = "router-test"
BASE_URL = "http://test-api"

# The first run builds Hypothesis's Unicode charmap cache, which trips the
# too_slow health check on a cold start.
settings.register_profile("agentlify", suppress_health_check=[HealthCheck.too_slow])
settings.load_profile("agentlify")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep real AGENTLIFY_* variables out of every test."""
    for name in ("AGENTLIFY_API_KEY", "AGENTLIFY_ROUTER_ID", "AGENTLIFY_BASE_URL"):
        monkeypatch.delenv(name, raising=False)


def tool_call(name: str, arguments: dict | str | None = None, call_id: str = "call_1") -> dict:
    """Build an OpenAI-format tool call; dict arguments are JSON-encoded."""
    if arguments is None:
        arguments = {}
    if not isinstance(arguments, str):
        arguments = json.dumps(arguments)
    return {
        "id": call_id,
        "type": "function",
        "function": {"name": name, "arguments": arguments},
    }


def chat_response(
    content: str | None = "Hello!",
    *,
    finish_reason: str | None = "stop",
    tool_calls: list[dict] | None = None,
) -> dict:
    """Build a realistic chat completion response dict."""
    message: dict = {"role": "assistant", "content": content}
    if tool_calls is not None:
        message["tool_calls"] = tool_calls
    return {
        "id": "chatcmpl-test123",
        "object": "chat.completion",
        "created": 1700000000,
        "model": "gpt-4o-mini",
        "choices": [{"index": 0, "message": message, "finish_reason": finish_reason}],
        "usage": {"prompt_tokens": 10, "completion_tokens": 5, "total_tokens": 15},
    }


def agent_response(
    content: str | None = "Done.",
    *,
    finish_reason: str | None = "stop",
    tool_calls: list[dict] | None = None,
    requires_tool_execution: bool | None = None,
) -> dict:
    """Build a realistic agent execution response dict."""
    response = chat_response(content, finish_reason=finish_reason, tool_calls=tool_calls)
    response["model"] = "Test Agent"
    response["agent_metadata"] = {
        "agent_id": "agent-1",
        "agent_name": "Test Agent",
        "execution_id": "exec-1",
        "steps_executed": 1,
        "skills_invoked": 0,
        "total_latency": 12,
    }
    if requires_tool_execution is not None:
        response["agent_metadata"]["requires_tool_execution"] = requires_tool_execution
    return response


class ScriptedAPI:
    """MockTransport handler that replays scripted replies and records requests.

    Each reply may be a dict (sent as a 200 JSON body), an httpx.Response,
    or an exception to raise. The last reply repeats once the script runs out.
    """

    def __init__(self, *replies: object) -> None:
        self._replies = list(replies)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        reply = self._replies.pop(0) if len(self._replies) > 1 else self._replies[0]
        if isinstance(reply, BaseException):
            raise reply
        if isinstance(reply, httpx.Response):
            return reply
        return httpx.Response(200, json=reply)

    @property
    def payloads(self) -> list[dict]:
        return [json.loads(r.content) if r.content else None for r in self.requests]


def make_client(
    handler,
    *,
    max_retries: int = 3,
    sleeps: list[float] | None = None,
    **kwargs,
) -> Agentlify:
    """Create an Agentlify client wired to a mock transport.

    Retry waits are recorded into ``sleeps`` (if given) instead of sleeping.
    """
    return Agentlify(
        api_key=kwargs.pop("api_key", API_KEY),
        router_id=kwargs.pop("router_id", ROUTER_ID),
        base_url=kwargs.pop("base_url", BASE_URL),
        max_retries=max_retries,
        transport=httpx.MockTransport(handler),
        sleep=sleeps.append if sleeps is not None else (lambda _seconds: None),
        **kwargs,
    )

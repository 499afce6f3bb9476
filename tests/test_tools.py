"""Tests for tool definitions and the callback registry."""

from __future__ import annotations

import copy
import logging

import pytest
from hypothesis import given
from hypothesis import strategies as st

from agentlify import FunctionTool, InvalidRequestError, extract_callbacks, strip_callbacks
from tests.strategies import tool_lists


def _tool(name: str, callback=None, **extra) -> dict:
    tool = {
        "type": "function",
        "function": {
            "name": name,
            "description": f"The {name} tool",
            "parameters": {"type": "object", "properties": {}},
        },
        **extra,
    }
    if callback is not None:
        tool["callback"] = callback
    return tool


def _calc(args):
    return {"result": 4}


class TestExtractCallbacks:
    def test_registry_keyed_by_function_name(self):
        clean, registry = extract_callbacks([_tool("calc", _calc)])
        assert registry == {"calc": _calc}
        assert clean == [
            {
                "type": "function",
                "function": {
                    "name": "calc",
                    "description": "The calc tool",
                    "parameters": {"type": "object", "properties": {}},
                },
            }
        ]

    def test_tools_without_callback_pass_through(self):
        webhook = _tool("lookup", webhookUrl="https://hooks.example/lookup", timeout=5000)
        clean, registry = extract_callbacks([webhook, _tool("calc", _calc)])
        assert registry == {"calc": _calc}
        assert clean[0] == webhook
        assert [t["function"]["name"] for t in clean] == ["lookup", "calc"]

    def test_input_not_mutated(self):
        tools = [_tool("calc", _calc), _tool("search")]
        snapshot = copy.copy(tools)
        snapshot_items = [dict(t) for t in tools]

        extract_callbacks(tools)

        assert tools == snapshot
        assert [dict(t) for t in tools] == snapshot_items
        assert tools[0]["callback"] is _calc

    def test_duplicate_names_last_wins(self, caplog):
        def first(args):
            return 1

        def second(args):
            return 2

        with caplog.at_level(logging.WARNING, logger="agentlify.tools"):
            clean, registry = extract_callbacks([_tool("dup", first), _tool("dup", second)])

        assert registry["dup"] is second
        assert len(clean) == 2
        assert any("Duplicate callback" in r.getMessage() for r in caplog.records)

    def test_non_callable_callback_is_stripped_not_registered(self):
        clean, registry = extract_callbacks([_tool("calc", "not a function")])
        assert registry == {}
        assert "callback" not in clean[0]

    def test_tool_without_function_name(self):
        clean, registry = extract_callbacks([{"type": "function", "callback": _calc}])
        assert registry == {}
        assert clean == [{"type": "function"}]

    def test_none_and_empty(self):
        assert extract_callbacks(None) == ([], {})
        assert extract_callbacks([]) == ([], {})

    def test_invalid_entry_rejected(self):
        with pytest.raises(InvalidRequestError) as exc_info:
            extract_callbacks(["calc"])
        assert exc_info.value.param == "tools"

    def test_strip_callbacks(self):
        assert strip_callbacks([_tool("calc", _calc)]) == [
            {k: v for k, v in _tool("calc").items()}
        ]

    @given(tools=tool_lists)
    def test_clean_tools_match_input_length_and_order(self, tools):
        clean, registry = extract_callbacks(tools)
        assert len(clean) == len(tools)
        assert [t.get("function", {}).get("name") for t in clean] == [
            t.get("function", {}).get("name") for t in tools
        ]
        assert all("callback" not in t for t in clean)
        assert set(registry) <= {
            t["function"]["name"] for t in tools if callable(t.get("callback"))
        }

    @given(names=st.lists(st.sampled_from(["a", "b", "c"]), max_size=8))
    def test_registry_holds_last_callback_per_name(self, names):
        tools = []
        for index, name in enumerate(names):
            tools.append(_tool(name, lambda args, index=index: index))
        _, registry = extract_callbacks(tools)
        for name in set(names):
            last = max(i for i, n in enumerate(names) if n == name)
            assert registry[name]({}) == last


class TestFunctionTool:
    def test_to_dict(self):
        tool = FunctionTool(
            name="get_weather",
            description="Get the weather",
            parameters={"type": "object", "properties": {"location": {"type": "string"}}},
            callback=_calc,
        )
        assert tool.to_dict() == {
            "type": "function",
            "function": {
                "name": "get_weather",
                "description": "Get the weather",
                "parameters": {
                    "type": "object",
                    "properties": {"location": {"type": "string"}},
                },
            },
        }

    def test_webhook_fields(self):
        tool = FunctionTool(
            name="notify",
            webhook_url="https://hooks.example/notify",
            timeout=3000,
            headers={"X-Key": "k"},
        )
        d = tool.to_dict()
        assert d["webhookUrl"] == "https://hooks.example/notify"
        assert d["timeout"] == 3000
        assert d["headers"] == {"X-Key": "k"}

    def test_default_parameters(self):
        assert FunctionTool(name="noop").to_dict()["function"]["parameters"] == {
            "type": "object",
            "properties": {},
        }

    def test_mixed_with_dicts(self):
        clean, registry = extract_callbacks(
            [FunctionTool(name="calc", callback=_calc), _tool("search")]
        )
        assert registry == {"calc": _calc}
        assert [t["function"]["name"] for t in clean] == ["calc", "search"]

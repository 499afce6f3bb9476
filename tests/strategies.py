"""Hypothesis strategies for Agentlify tool definitions.

Provides strategies for tool dicts in the OpenAI function-calling shape,
with and without local callbacks, plus a combined `tool_lists` strategy.
"""

from hypothesis import strategies as st

tool_names = st.text(
    min_size=1,
    max_size=30,
    alphabet=st.characters(whitelist_categories=("L", "N"), whitelist_characters="_-"),
)

json_schemas = st.fixed_dictionaries(
    {"type": st.just("object")},
    optional={
        "properties": st.dictionaries(
            keys=st.text(min_size=1, max_size=10),
            values=st.fixed_dictionaries(
                {"type": st.sampled_from(["string", "number", "boolean"])}
            ),
            max_size=4,
        ),
    },
)

function_definitions = st.fixed_dictionaries(
    {"name": tool_names},
    optional={
        "description": st.text(max_size=100),
        "parameters": json_schemas,
    },
)

callbacks = st.sampled_from([
    lambda args: {"ok": True},
    lambda args: "text result",
    lambda args: None,
])

tool_dicts = st.fixed_dictionaries(
    {"type": st.just("function"), "function": function_definitions},
    optional={
        "callback": st.one_of(callbacks, st.just("not callable")),
        "webhookUrl": st.just("https://hooks.example/tool"),
        "timeout": st.integers(min_value=1, max_value=60000),
    },
)

tool_lists = st.lists(tool_dicts, max_size=10)

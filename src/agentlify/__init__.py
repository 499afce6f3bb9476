"""Agentlify: Python client for the Agentlify model-routing API.

OpenAI-compatible chat completions plus agents that call back into your
own Python functions for tool execution.
"""

from agentlify._version import __version__

# Client entry point
from agentlify.client import Agentlify
from agentlify.config import ClientConfig

# APIs
from agentlify.agents import Agents, RunState
from agentlify.chat import ChatCompletions
from agentlify.streaming import ChatCompletionStream

# Tools
from agentlify.tools import FunctionTool, extract_callbacks, strip_callbacks
from agentlify.resolver import resolve_tool_call, resolve_tool_calls
from agentlify.types import (
    Message,
    RawArguments,
    StructuredArguments,
    ToolCall,
    ToolResult,
)

# Errors
from agentlify.exceptions import (
    AgentlifyError,
    APIConnectionError,
    APIError,
    APIResponseError,
    APITimeoutError,
    AuthenticationError,
    BadRequestError,
    ConfigurationError,
    ConflictError,
    InternalServerError,
    InvalidRequestError,
    NotFoundError,
    PermissionDeniedError,
    RateLimitError,
    ToolIterationLimitError,
    UnprocessableEntityError,
)

__all__ = [
    "__version__",
    # Client
    "Agentlify",
    "ClientConfig",
    # APIs
    "Agents",
    "RunState",
    "ChatCompletions",
    "ChatCompletionStream",
    # Tools
    "FunctionTool",
    "extract_callbacks",
    "strip_callbacks",
    "resolve_tool_call",
    "resolve_tool_calls",
    "Message",
    "RawArguments",
    "StructuredArguments",
    "ToolCall",
    "ToolResult",
    # Errors
    "AgentlifyError",
    "APIConnectionError",
    "APIError",
    "APIResponseError",
    "APITimeoutError",
    "AuthenticationError",
    "BadRequestError",
    "ConfigurationError",
    "ConflictError",
    "InternalServerError",
    "InvalidRequestError",
    "NotFoundError",
    "PermissionDeniedError",
    "RateLimitError",
    "ToolIterationLimitError",
    "UnprocessableEntityError",
]

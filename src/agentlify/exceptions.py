"""Agentlify exception hierarchy.

All Agentlify-specific exceptions inherit from AgentlifyError.
HTTP failures carry the status code and decoded body; local validation
failures name the offending parameter.
"""

from __future__ import annotations

from typing import Any


class AgentlifyError(Exception):
    """Base exception for all Agentlify errors."""


class ConfigurationError(AgentlifyError):
    """Missing or invalid client configuration (e.g., no API key)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        self.field = field
        super().__init__(message)


class InvalidRequestError(AgentlifyError):
    """A request failed local validation before anything was sent.

    Attributes:
        param: Name of the offending request parameter.
    """

    def __init__(self, message: str, param: str | None = None) -> None:
        self.param = param
        super().__init__(message)


class APIConnectionError(AgentlifyError):
    """No response was received (DNS, refused connection, reset, ...)."""


class APITimeoutError(APIConnectionError):
    """The request timed out before a response was received."""


class APIResponseError(AgentlifyError):
    """The API answered successfully but the body could not be decoded."""


class ToolIterationLimitError(AgentlifyError):
    """An agent kept requesting tools past the configured iteration budget."""

    def __init__(self, max_iterations: int) -> None:
        self.max_iterations = max_iterations
        super().__init__(
            f"Agent tool execution exceeded maximum iterations ({max_iterations})"
        )


class APIError(AgentlifyError):
    """The API returned an error status code.

    Attributes:
        status: HTTP status code.
        body: Decoded JSON body, raw text, or None.
        request_id: Value of the ``x-request-id`` response header, if any.
    """

    def __init__(
        self,
        message: str,
        status: int,
        body: Any = None,
        request_id: str | None = None,
    ) -> None:
        self.message = message
        self.status = status
        self.body = body
        self.request_id = request_id
        super().__init__(message)

    def __str__(self) -> str:
        text = f"HTTP {self.status}: {self.message}"
        if self.request_id:
            text += f" (request id: {self.request_id})"
        return text


class BadRequestError(APIError):
    """Client error (4xx) without a more specific class."""


class AuthenticationError(APIError):
    """Authentication failed (401). Never retried."""


class PermissionDeniedError(APIError):
    """The credential is valid but not allowed to do this (403). Never retried."""


class NotFoundError(APIError):
    """The requested resource does not exist (404)."""


class ConflictError(APIError):
    """The request conflicts with the current server state (409)."""


class UnprocessableEntityError(APIError):
    """The request was well-formed but semantically invalid (422)."""


class RateLimitError(APIError):
    """Rate limited by the API (429).

    Attributes:
        retry_after: Seconds to wait before retrying (from Retry-After header),
            or None if not provided.
    """

    def __init__(
        self,
        message: str,
        status: int = 429,
        body: Any = None,
        request_id: str | None = None,
        retry_after: float | None = None,
    ) -> None:
        self.retry_after = retry_after
        super().__init__(message, status, body, request_id)

    def __str__(self) -> str:
        text = super().__str__()
        if self.retry_after is not None:
            text += f" (retry after {self.retry_after}s)"
        return text


class InternalServerError(APIError):
    """The API failed on its side (5xx)."""

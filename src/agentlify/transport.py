"""HTTP transport for the Agentlify API: httpx with tenacity retry.

Sends authenticated JSON requests, classifies error responses into the
Agentlify exception hierarchy, and retries transient failures with
exponential backoff. Each Transport owns its own httpx client and retry
policy; nothing is configured at module level.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any, Callable

import httpx
import tenacity

from agentlify._version import __version__
from agentlify.exceptions import (
    APIConnectionError,
    APIError,
    APIResponseError,
    APITimeoutError,
    AuthenticationError,
    BadRequestError,
    ConflictError,
    InternalServerError,
    NotFoundError,
    PermissionDeniedError,
    RateLimitError,
    UnprocessableEntityError,
)

if TYPE_CHECKING:
    from agentlify.config import ClientConfig

logger = logging.getLogger(__name__)

_MIN_BACKOFF = 1.0
_MAX_BACKOFF = 10.0

_STATUS_ERRORS: dict[int, type[APIError]] = {
    401: AuthenticationError,
    403: PermissionDeniedError,
    404: NotFoundError,
    409: ConflictError,
    422: UnprocessableEntityError,
}

_exponential = tenacity.wait_exponential(multiplier=1, min=_MIN_BACKOFF, max=_MAX_BACKOFF)


def _is_retryable(exc: BaseException) -> bool:
    """Check if an exception is retryable.

    Retryable: 429, 5xx, connection errors and timeouts.
    Not retryable: 401, 403, any other status below 500, local errors.
    """
    if isinstance(exc, (AuthenticationError, PermissionDeniedError)):
        return False
    if isinstance(exc, (RateLimitError, InternalServerError)):
        return True
    return isinstance(exc, APIConnectionError)


def _backoff(retry_state: tenacity.RetryCallState) -> float:
    """Exponential delay (1s, 2s, 4s, ... capped), stretched to honor Retry-After."""
    delay = _exponential(retry_state)
    outcome = retry_state.outcome
    exc = outcome.exception() if outcome is not None else None
    if isinstance(exc, RateLimitError) and exc.retry_after is not None:
        delay = max(delay, exc.retry_after)
    return min(delay, _MAX_BACKOFF)


def _decode_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def _error_message(body: Any) -> str:
    """Pull a human-readable message out of an error body.

    Understands the OpenAI-compatible ``{"error": {"message": ...}}`` shape
    and the legacy ``{"message": ...}`` / ``{"error": "..."}`` shapes.
    """
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if body.get("message"):
            return str(body["message"])
        if isinstance(error, str) and error:
            return error
    elif isinstance(body, str) and body.strip():
        return body.strip()
    return "Unknown error"


def _parse_retry_after(value: str | None) -> float | None:
    if value is None:
        return None
    try:
        return float(value)
    except (ValueError, TypeError):
        return None


def raise_for_status(response: httpx.Response) -> None:
    """Raise the matching APIError subclass for a non-2xx response.

    The response body must already be read.
    """
    if response.is_success:
        return

    status = response.status_code
    body = _decode_body(response)
    message = _error_message(body)
    request_id = response.headers.get("x-request-id")

    if status == 429:
        raise RateLimitError(
            message,
            status,
            body,
            request_id,
            retry_after=_parse_retry_after(response.headers.get("Retry-After")),
        )

    error_cls = _STATUS_ERRORS.get(status)
    if error_cls is None:
        if status >= 500:
            error_cls = InternalServerError
        elif status >= 400:
            error_cls = BadRequestError
        else:
            error_cls = APIError
    raise error_cls(message, status, body, request_id)


class Transport:
    """Authenticated JSON transport with retry for one client instance.

    Implements the retry policy: 5xx, 429 and network failures are retried
    up to ``max_retries`` times with exponential backoff (1s doubling,
    capped at 10s); authentication failures and other client errors are
    raised after a single attempt.

    Usage::

        with Transport(config) as transport:
            data = transport.request("GET", "/getModels")
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        transport: httpx.BaseTransport | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Initialize the transport.

        Args:
            config: Validated client configuration.
            transport: Optional httpx transport (e.g. ``httpx.MockTransport``).
            sleep: Function used to wait between retries.
        """
        self._config = config
        self._sleep = sleep
        self._client = httpx.Client(
            base_url=config.base_url,
            timeout=config.timeout,
            headers=self._build_headers(),
            transport=transport,
        )

    @property
    def config(self) -> ClientConfig:
        return self._config

    def _build_headers(self) -> httpx.Headers:
        headers = httpx.Headers({
            "Content-Type": "application/json",
            "User-Agent": f"agentlify-python/{__version__}",
        })
        headers.update(self._config.default_headers)
        # Credentials always win over caller-supplied defaults.
        headers["Authorization"] = f"Bearer {self._config.api_key}"
        return headers

    def _retrying(self) -> tenacity.Retrying:
        return tenacity.Retrying(
            retry=tenacity.retry_if_exception(_is_retryable),
            wait=_backoff,
            stop=tenacity.stop_after_attempt(self._config.max_retries + 1),
            sleep=self._sleep,
            before_sleep=tenacity.before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )

    def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Send a request with retry and return the decoded JSON body.

        Args:
            method: HTTP method.
            path: Path relative to the configured base URL.
            json: JSON-serializable request body.
            params: Query string parameters.

        Returns:
            The decoded JSON body, or None for an empty body.

        Raises:
            AuthenticationError: On 401 (no retry).
            RateLimitError: On 429 after all retries exhausted.
            InternalServerError: On 5xx after all retries exhausted.
            APIConnectionError: On network failure after all retries exhausted.
            APIError: On other error statuses (no retry).
            APIResponseError: If a successful body is not valid JSON.
        """
        response = self._retrying()(
            self._send, method, path, json=json, params=params, stream=False
        )
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise APIResponseError(
                f"Unexpected response from {path}: body is not valid JSON"
            ) from exc

    def stream(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
    ) -> httpx.Response:
        """Open a streaming response with the same retry policy as request().

        Only establishing the stream is retried. The caller owns the
        returned response and must close it.
        """
        return self._retrying()(
            self._send, method, path, json=json, params=None, stream=True
        )

    def _send(
        self,
        method: str,
        path: str,
        *,
        json: Any,
        params: dict[str, Any] | None,
        stream: bool,
    ) -> httpx.Response:
        """Execute a single request (no retry) and classify failures."""
        logger.debug("%s %s", method, path)
        request = self._client.build_request(method, path, json=json, params=params)
        try:
            response = self._client.send(request, stream=stream)
        except httpx.TimeoutException as exc:
            raise APITimeoutError(f"Request to {path} timed out: {exc}") from exc
        except httpx.TransportError as exc:
            raise APIConnectionError(
                f"Network error: no response received from {path}: {exc}"
            ) from exc

        if not response.is_success:
            if stream:
                try:
                    response.read()
                finally:
                    response.close()
            raise_for_status(response)
        return response

    def close(self) -> None:
        """Close the underlying httpx client."""
        self._client.close()

    def __enter__(self) -> Transport:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

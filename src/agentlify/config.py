"""Client configuration for Agentlify.

ClientConfig holds everything a client instance needs to talk to the API.
Each Agentlify client owns its own ClientConfig; nothing is shared at
module level.
"""

from __future__ import annotations

import os
from typing import Optional

from pydantic import BaseModel, ValidationError, field_validator

from agentlify.exceptions import ConfigurationError

DEFAULT_BASE_URL = "https://modelpilot.co/api"
DEFAULT_TIMEOUT = 30.0
DEFAULT_MAX_RETRIES = 3

API_KEY_PREFIX = "mp_"

API_KEY_ENV = "AGENTLIFY_API_KEY"
ROUTER_ID_ENV = "AGENTLIFY_ROUTER_ID"
BASE_URL_ENV = "AGENTLIFY_BASE_URL"


class ClientConfig(BaseModel):
    """Validated, immutable settings for one client instance.

    Example::

        from agentlify.config import ClientConfig
        config = ClientConfig(api_key="mp_...", router_id="router-1")
    """

    model_config = {"frozen": True}

    api_key: str
    router_id: str
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT  # seconds
    default_headers: dict[str, str] = {}
    max_retries: int = DEFAULT_MAX_RETRIES

    @field_validator("api_key")
    @classmethod
    def _check_api_key(cls, value: str) -> str:
        value = value.strip()
        if not value.startswith(API_KEY_PREFIX):
            raise ValueError(
                f'Invalid API key format. API key must start with "{API_KEY_PREFIX}". '
                "Get your API key from https://modelpilot.co"
            )
        return value

    @field_validator("router_id")
    @classmethod
    def _check_router_id(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError(
                "Router ID is required. Get your Router ID from https://modelpilot.co"
            )
        return value

    @field_validator("base_url")
    @classmethod
    def _strip_base_url(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if not value:
            raise ValueError("base_url must not be empty")
        return value

    @field_validator("timeout")
    @classmethod
    def _check_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("timeout must be positive")
        return value

    @field_validator("max_retries")
    @classmethod
    def _check_max_retries(cls, value: int) -> int:
        if value < 0:
            raise ValueError("max_retries must be zero or more")
        return value

    @classmethod
    def resolve(
        cls,
        api_key: Optional[str] = None,
        router_id: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        default_headers: Optional[dict[str, str]] = None,
        max_retries: Optional[int] = None,
    ) -> ClientConfig:
        """Build a config from arguments, falling back to environment variables.

        Args:
            api_key: API key. Falls back to AGENTLIFY_API_KEY.
            router_id: Router ID. Falls back to AGENTLIFY_ROUTER_ID.
            base_url: API base URL. Falls back to AGENTLIFY_BASE_URL, then
                to https://modelpilot.co/api.
            timeout: Per-request timeout in seconds.
            default_headers: Extra headers sent with every request.
            max_retries: Retries for retryable failures (total attempts is
                ``max_retries + 1``).

        Raises:
            ConfigurationError: If a value is missing or invalid.
        """
        api_key = api_key or os.environ.get(API_KEY_ENV, "")
        if not api_key:
            raise ConfigurationError(
                f"No API key provided. Pass api_key= or set {API_KEY_ENV} "
                "environment variable.",
                field="api_key",
            )
        router_id = router_id or os.environ.get(ROUTER_ID_ENV, "")
        if not router_id:
            raise ConfigurationError(
                f"No router ID provided. Pass router_id= or set {ROUTER_ID_ENV} "
                "environment variable.",
                field="router_id",
            )

        values: dict = {
            "api_key": api_key,
            "router_id": router_id,
            "base_url": base_url or os.environ.get(BASE_URL_ENV) or DEFAULT_BASE_URL,
        }
        if timeout is not None:
            values["timeout"] = timeout
        if default_headers is not None:
            values["default_headers"] = dict(default_headers)
        if max_retries is not None:
            values["max_retries"] = max_retries

        try:
            return cls(**values)
        except ValidationError as exc:
            first = exc.errors()[0]
            field = ".".join(str(part) for part in first["loc"]) or None
            raise ConfigurationError(
                f"Invalid configuration for {field}: {first['msg']}", field=field
            ) from exc

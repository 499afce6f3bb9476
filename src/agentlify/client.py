"""Agentlify client: OpenAI-compatible interface for intelligent model routing."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable

from agentlify.agents import Agents
from agentlify.chat import ChatCompletions
from agentlify.config import ClientConfig
from agentlify.transport import Transport

if TYPE_CHECKING:
    import httpx


class Agentlify:
    """Client for the Agentlify API.

    Every instance carries its own configuration, credential, HTTP client
    and retry policy.

    Usage::

        with Agentlify(api_key="mp_...", router_id="router-1") as client:
            reply = client.chat.create([{"role": "user", "content": "Hello"}])
            models = client.get_models()
    """

    def __init__(
        self,
        api_key: str | None = None,
        *,
        router_id: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        default_headers: dict[str, str] | None = None,
        max_retries: int | None = None,
        transport: httpx.BaseTransport | None = None,
        sleep: Callable[[float], None] | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            api_key: API key (``mp_...``). Falls back to AGENTLIFY_API_KEY.
            router_id: Router ID. Falls back to AGENTLIFY_ROUTER_ID.
            base_url: API base URL. Falls back to AGENTLIFY_BASE_URL, then
                to https://modelpilot.co/api.
            timeout: Request timeout in seconds (default 30).
            default_headers: Extra headers sent with every request.
            max_retries: Retries for 429/5xx/network failures (default 3).
            transport: Optional httpx transport, e.g. ``httpx.MockTransport``.
            sleep: Optional function used to wait between retries.

        Raises:
            ConfigurationError: If the configuration is missing or invalid.
        """
        self.config = ClientConfig.resolve(
            api_key=api_key,
            router_id=router_id,
            base_url=base_url,
            timeout=timeout,
            default_headers=default_headers,
            max_retries=max_retries,
        )
        transport_kwargs: dict[str, Any] = {"transport": transport}
        if sleep is not None:
            transport_kwargs["sleep"] = sleep
        self._transport = Transport(self.config, **transport_kwargs)

        self.chat = ChatCompletions(self._transport)
        self.agents = Agents(self._transport)

    def request(
        self,
        endpoint: str,
        *,
        method: str = "POST",
        json: Any = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Make an authenticated request with retry and return the JSON body."""
        return self._transport.request(method, endpoint, json=json, params=params)

    def get_router_config(self) -> dict:
        """Return the configuration of this client's router."""
        return self.request(
            f"/getRouterConfig/{self.config.router_id}", method="GET"
        )

    def get_models(self) -> list[dict] | Any:
        """Return the available models.

        OpenAI-style ``{"object": "list", "data": [...]}`` bodies are
        unwrapped to the ``data`` list; anything else is returned as is.
        """
        response = self.request("/getModels", method="GET")
        if (
            isinstance(response, dict)
            and response.get("object") == "list"
            and isinstance(response.get("data"), list)
        ):
            return response["data"]
        return response

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._transport.close()

    def __enter__(self) -> Agentlify:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

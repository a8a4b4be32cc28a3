"""Errors shared by trip tools and the async JSON client the venue directory uses."""

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)


class ToolError(Exception):
    """A collaborator (completion provider, directory) could not answer."""

    def __init__(self, message: str, tool_name: str, details: dict | None = None):
        self.message = message
        self.tool_name = tool_name
        self.details = details or {}
        super().__init__(self.message)


class APIClientError(ToolError):
    """The remote API failed or answered with an error status."""


class RateLimitError(ToolError):
    """The remote API answered 429; not retried."""


class BaseAsyncAPIClient:
    """Async JSON-over-HTTP client used as ``async with client: ...``.

    Server errors and network failures are retried up to ``max_retries``
    attempts in total; client errors fail on the first attempt.
    """

    default_headers: dict[str, str] = {"Accept": "application/json"}

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        max_retries: int = 2,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_retries = max(1, max_retries)
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def name(self) -> str:
        return self.__class__.__name__

    async def __aenter__(self) -> "BaseAsyncAPIClient":
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            headers=self.default_headers,
            transport=self._transport,
        )
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    async def _send_once(self, method: str, path: str, params: dict | None) -> Any:
        response = await self._client.request(method, path, params=params)

        if response.status_code == 429:
            raise RateLimitError("Rate limit exceeded", tool_name=self.name)
        if response.is_client_error:
            raise APIClientError(
                f"HTTP error: {response.status_code}",
                tool_name=self.name,
                details={"status_code": response.status_code, "retryable": False},
            )
        if response.is_server_error:
            raise APIClientError(
                f"HTTP error: {response.status_code}",
                tool_name=self.name,
                details={"status_code": response.status_code, "retryable": True},
            )
        return response.json()

    async def _request(self, method: str, endpoint: str, params: dict | None = None) -> Any:
        """Send a request, retrying server and network errors."""
        if self._client is None:
            raise APIClientError(
                "Client not opened; use it as an async context manager",
                tool_name=self.name,
            )

        path = endpoint if endpoint.startswith("/") else f"/{endpoint}"
        error: APIClientError | None = None

        for attempt in range(1, self.max_retries + 1):
            try:
                return await self._send_once(method, path, params)
            except APIClientError as e:
                if not e.details.get("retryable"):
                    raise
                error = e
            except httpx.RequestError as e:
                error = APIClientError(f"Request error: {e}", tool_name=self.name)
            logger.warning(f"{self.name} {method} {path} attempt {attempt}/{self.max_retries} failed: {error}")

        raise error

    async def get(self, endpoint: str, params: dict | None = None) -> Any:
        return await self._request("GET", endpoint, params=params)

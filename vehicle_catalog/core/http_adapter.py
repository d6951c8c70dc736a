"""
HTTP access to the upstream catalog.

``fetch_with_timeout`` performs exactly one bounded GET and classifies every
failure into the error taxonomy. It never retries; callers wrap it with the
retry policy.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urljoin

import httpx

from vehicle_catalog.core.exceptions import NetworkError, is_retryable_error

DEFAULT_TIMEOUT = 30.0


@dataclass
class HttpConfig:
    """Configuration for HTTP client behavior."""

    base_url: str
    timeout: float = DEFAULT_TIMEOUT
    user_agent: str = "vehicle-catalog/0.1.0"
    headers: dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        """Validate HTTP configuration."""
        if not self.base_url:
            raise ValueError("base_url cannot be empty")
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")
        if not self.base_url.endswith("/"):
            self.base_url += "/"


async def fetch_with_timeout(
    client: httpx.AsyncClient,
    url: str,
    timeout: float = DEFAULT_TIMEOUT,
    **kwargs: Any,
) -> str:
    """Issue a single GET and return the response body as text.

    Raises:
        NetworkError: status >= 400 (retryable only for 5xx), timeout
            (retryable), or any other transport failure (retryability decided
            by ``is_retryable_error``)
    """
    try:
        response = await client.get(url, timeout=timeout, **kwargs)
    except httpx.TimeoutException as exc:
        raise NetworkError(f"Request timeout after {timeout}s", retryable=True) from exc
    except Exception as exc:
        status_code = exc.response.status_code if isinstance(exc, httpx.HTTPStatusError) else None
        raise NetworkError(
            str(exc) or type(exc).__name__,
            status_code=status_code,
            retryable=is_retryable_error(exc),
        ) from exc

    if response.status_code >= 400:
        raise NetworkError(
            f"HTTP {response.status_code}: {response.reason_phrase}",
            status_code=response.status_code,
            retryable=response.status_code >= 500,
            details={"url": str(response.request.url)},
        )
    return response.text


class HttpClient:
    """Async HTTP client owning one connection pool for the whole run."""

    def __init__(
        self,
        http_config: HttpConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.http_config = http_config
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> HttpClient:
        await self._ensure_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            headers = {"User-Agent": self.http_config.user_agent, **self.http_config.headers}
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.http_config.timeout),
                follow_redirects=True,
                headers=headers,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close HTTP client and cleanup resources."""
        if self._client:
            await self._client.aclose()
            self._client = None

    def build_url(self, path: str) -> str:
        return urljoin(self.http_config.base_url, path.lstrip("/"))

    async def get_text(self, path: str, params: dict[str, Any] | None = None) -> str:
        """GET ``path`` relative to the configured base URL."""
        client = await self._ensure_client()
        return await fetch_with_timeout(
            client,
            self.build_url(path),
            timeout=self.http_config.timeout,
            params=params,
        )


__all__ = ["DEFAULT_TIMEOUT", "HttpClient", "HttpConfig", "fetch_with_timeout"]

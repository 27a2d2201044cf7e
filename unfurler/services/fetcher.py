"""Single-shot HTTP GET used to fetch the resource being unfurled.

httpx exceptions are translated into a small hierarchy so callers only
need to know about connect, timeout and TLS failures.
"""

from __future__ import annotations

import logging
import ssl
from dataclasses import dataclass

import httpx

from unfurler.config import Settings, settings as default_settings

logger = logging.getLogger(__name__)


class FetchError(Exception):
    """Base class for transport failures."""

    def __init__(self, url: str, message: str):
        self.url = url
        super().__init__(message)


class FetchConnectError(FetchError):
    pass


class FetchTimeoutError(FetchError):
    pass


class FetchTLSError(FetchError):
    pass


@dataclass
class FetchResult:
    status_code: int
    headers: httpx.Headers
    content: bytes

    @property
    def content_type(self) -> str | None:
        # First value wins when the header is repeated
        values = self.headers.get_list("content-type")
        return values[0] if values else None


def _is_tls_failure(exc: BaseException) -> bool:
    seen = set()
    while exc is not None and id(exc) not in seen:
        seen.add(id(exc))
        if isinstance(exc, ssl.SSLError):
            return True
        exc = exc.__cause__ or exc.__context__
    return False


def _translate(url: str, exc: httpx.HTTPError) -> FetchError:
    if isinstance(exc, httpx.TimeoutException):
        return FetchTimeoutError(url, f"Timeout fetching {url}: {exc}")
    if _is_tls_failure(exc):
        return FetchTLSError(url, f"TLS error fetching {url}: {exc}")
    if isinstance(exc, httpx.ConnectError):
        return FetchConnectError(url, f"Unable to connect to {url}: {exc}")
    return FetchError(url, f"Transport error fetching {url}: {exc}")


def build_headers(config: Settings) -> dict[str, str]:
    return {"User-Agent": config.USER_AGENT, "Accept": config.ACCEPT}


def build_client(config: Settings | None = None) -> httpx.Client:
    config = config or default_settings
    return httpx.Client(
        follow_redirects=config.FOLLOW_REDIRECTS,
        timeout=config.FETCH_TIMEOUT,
        headers=build_headers(config),
    )


def build_async_client(config: Settings | None = None) -> httpx.AsyncClient:
    config = config or default_settings
    return httpx.AsyncClient(
        follow_redirects=config.FOLLOW_REDIRECTS,
        timeout=config.FETCH_TIMEOUT,
        headers=build_headers(config),
    )


def fetch(url: str, client: httpx.Client) -> FetchResult:
    """GET ``url`` once and buffer the whole body.

    Raises:
        FetchError: on connect, timeout, TLS or other transport failures.
    """
    try:
        response = client.get(url)
    except httpx.HTTPError as e:
        raise _translate(url, e) from e
    logger.debug(f"GET {url} -> {response.status_code}")
    return FetchResult(response.status_code, response.headers, response.content)


async def afetch(url: str, client: httpx.AsyncClient) -> FetchResult:
    """Async counterpart of :func:`fetch`."""
    try:
        response = await client.get(url)
    except httpx.HTTPError as e:
        raise _translate(url, e) from e
    logger.debug(f"GET {url} -> {response.status_code}")
    return FetchResult(response.status_code, response.headers, response.content)


# ---------------------------------------------------------------------------
# Shared async client for the HTTP API, reused across requests
# ---------------------------------------------------------------------------
_shared_async_client: httpx.AsyncClient | None = None


def get_shared_async_client() -> httpx.AsyncClient:
    """Get or create the process-wide async client used by the API."""
    global _shared_async_client
    if _shared_async_client is None or _shared_async_client.is_closed:
        _shared_async_client = build_async_client()
    return _shared_async_client


async def close_shared_async_client() -> None:
    """Close the shared client. Called on application shutdown."""
    global _shared_async_client
    if _shared_async_client is not None:
        await _shared_async_client.aclose()
        _shared_async_client = None

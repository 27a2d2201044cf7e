"""Shared fixtures: stubbed HTTP transports and a tiny PNG."""

import io
from typing import Callable

import httpx
import pytest
from PIL import Image

PAGE_URL = "http://localhost:6300/foo/bar"

OG_PAGE = (
    "<html><head>"
    '<meta property="og:title" content="T">'
    '<meta property="og:description" content="D">'
    '<meta property="og:image" content="http://a.com/i.jpg">'
    '<link rel="canonical" href="http://a.com/c">'
    "</head></html>"
)


def html_response(body: str | bytes, status: int = 200, content_type: str | None = "text/html; charset=utf-8"):
    """Build a handler that answers every request with ``body``."""
    headers = {"content-type": content_type} if content_type else {}
    content = body.encode("utf-8") if isinstance(body, str) else body

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status, headers=headers, content=content)

    return handler


@pytest.fixture
def make_client() -> Callable[..., httpx.Client]:
    """Factory for sync clients whose requests are answered by ``handler``."""
    clients = []

    def _make(handler) -> httpx.Client:
        client = httpx.Client(transport=httpx.MockTransport(handler))
        clients.append(client)
        return client

    yield _make
    for client in clients:
        client.close()


@pytest.fixture
async def make_async_client():
    """Factory for async clients whose requests are answered by ``handler``."""
    clients = []

    def _make(handler) -> httpx.AsyncClient:
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        clients.append(client)
        return client

    yield _make
    for client in clients:
        await client.aclose()


@pytest.fixture
def png_bytes() -> bytes:
    """A 3x2 PNG."""
    buf = io.BytesIO()
    Image.new("RGB", (3, 2), (255, 0, 0)).save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
async def client():
    """API client talking to the FastAPI app in-process."""
    from unfurler.main import app

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

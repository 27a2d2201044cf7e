"""Unfurl a URL into a preview.

Preference is given first to Open Graph, then Twitter Card, then generic
HTML meta tags (see ``unfurler.services.metadata`` for the exact order).
Nothing here raises: unreachable pages, non-200 responses and pages
without metadata all produce an ``Unfurled`` whose fields are empty.
"""

from __future__ import annotations

import logging
import time

import httpx

from unfurler.config import Settings
from unfurler.core.metrics import observe_unfurl
from unfurler.schemas.unfurl import Media, Unfurled, UnfurlType
from unfurler.services.content_type import ContentKind, charset_of, classify
from unfurler.services.fetcher import (
    FetchError,
    FetchResult,
    afetch,
    build_async_client,
    build_client,
    fetch,
)
from unfurler.services.images import ImageDecodeError, decode_dimensions
from unfurler.services.metadata import (
    CANONICAL_URL_MATCHERS,
    DESCRIPTION_MATCHERS,
    IMAGE_MATCHERS,
    TITLE_MATCHERS,
    VIDEO_MATCHERS,
    extract_field,
    extract_media,
    parse_head,
)
from unfurler.services.uri_parser import EMPTY_URI, ParsedUri, parse_uri_safe

logger = logging.getLogger(__name__)


def build_from_image(uri: str, content: bytes) -> Unfurled:
    """Build an Unfurled for a raw image. The URI stands in for every value."""
    filename = parse_uri_safe(uri).filename
    try:
        width, height = decode_dimensions(content)
    except ImageDecodeError as e:
        logger.info(f"Could not read image dimensions: {e}", extra={"unfurl_url": uri})
        width, height = 0, 0

    return Unfurled(
        url=uri,
        canonical_url=uri,
        type=UnfurlType.IMAGE,
        title=filename,
        description=filename,
        image=Media(url=uri, width=width, height=height),
    )


def fill_canonical_url(candidate: ParsedUri, uri: str) -> str:
    """Substitute the requested URI's scheme and host where ``candidate`` lacks them.

    A blank candidate falls back to ``uri`` itself.
    """
    if candidate.is_empty():
        return uri

    requested = parse_uri_safe(uri)
    if not candidate.scheme:
        candidate = candidate.replace(scheme=requested.scheme)
    if not candidate.host:
        path = candidate.path
        if path and not path.startswith("/"):
            path = f"/{path}"
        candidate = candidate.replace(host=requested.host, path=path)
    return str(candidate)


def build_from_markup(uri: str, content: bytes, charset: str | None = None) -> Unfurled:
    """Build an Unfurled for an HTML page.

    ``charset`` comes from the Content-Type header; when it is absent or
    unknown the page's own declaration is used.
    """
    if not content.strip():
        return Unfurled(url=uri)

    head = parse_head(content, charset)
    page = parse_uri_safe(uri)

    title = extract_field(head, TITLE_MATCHERS, "title")
    description = extract_field(head, DESCRIPTION_MATCHERS, "description")
    image = extract_media(head, IMAGE_MATCHERS, page, "image")
    video = extract_media(head, VIDEO_MATCHERS, page, "video")

    raw_canonical = extract_field(head, CANONICAL_URL_MATCHERS, "canonicalUrl")
    canonical = parse_uri_safe(raw_canonical) if raw_canonical else EMPTY_URI

    return Unfurled(
        url=uri,
        canonical_url=fill_canonical_url(canonical, uri),
        type=UnfurlType.VIDEO if video is not None else UnfurlType.TEXT,
        title=title,
        description=description,
        image=image,
        video=video,
    )


def build_unfurled(uri: str, result: FetchResult) -> Unfurled:
    """Turn a fetched response into an Unfurled, branching on its content type."""
    if result.status_code != 200:
        logger.info(
            f"Upstream returned HTTP {result.status_code}",
            extra={"unfurl_url": uri},
        )
        return Unfurled(url=uri)

    content_type = result.content_type
    if classify(content_type) is ContentKind.IMAGE:
        return build_from_image(uri, result.content)
    return build_from_markup(uri, result.content, charset_of(content_type))


def _outcome(result: FetchResult, unfurled: Unfurled) -> str:
    if result.status_code != 200:
        return "http_error"
    return "empty" if unfurled.is_empty() else "ok"


def _record(outcome: str, start: float) -> None:
    observe_unfurl(outcome, time.perf_counter() - start)


def unfurl(
    uri: str,
    client: httpx.Client | None = None,
    config: Settings | None = None,
) -> Unfurled:
    """Unfurl ``uri`` with a single blocking GET.

    Args:
        uri: Absolute URL to preview.
        client: Optional shared client; one is created and closed per call
            otherwise, configured from ``config`` (or the global settings).

    Returns:
        The preview. Empty (but never an exception) when the page could not
        be fetched or did not answer 200 OK.
    """
    start = time.perf_counter()
    outcome = "error"
    try:
        if client is None:
            with build_client(config) as own_client:
                result = fetch(uri, own_client)
        else:
            result = fetch(uri, client)
        unfurled = build_unfurled(uri, result)
        outcome = _outcome(result, unfurled)
        return unfurled
    except FetchError as e:
        outcome = "fetch_error"
        logger.warning(f"Failed to get summary: {e}", extra={"unfurl_url": uri})
    except Exception as e:
        logger.warning(
            f"Failed to handle exception case: {e}",
            exc_info=True,
            extra={"unfurl_url": uri},
        )
    finally:
        _record(outcome, start)

    return Unfurled(url=uri)


async def unfurl_async(
    uri: str,
    client: httpx.AsyncClient | None = None,
    config: Settings | None = None,
) -> Unfurled:
    """Async counterpart of :func:`unfurl` built on ``httpx.AsyncClient``.

    Parsing and extraction run inline; they are bounded and do no I/O.
    """
    start = time.perf_counter()
    outcome = "error"
    try:
        if client is None:
            async with build_async_client(config) as own_client:
                result = await afetch(uri, own_client)
        else:
            result = await afetch(uri, client)
        unfurled = build_unfurled(uri, result)
        outcome = _outcome(result, unfurled)
        return unfurled
    except FetchError as e:
        outcome = "fetch_error"
        logger.warning(f"Failed to get summary: {e}", extra={"unfurl_url": uri})
    except Exception as e:
        logger.warning(
            f"Failed to handle exception case: {e}",
            exc_info=True,
            extra={"unfurl_url": uri},
        )
    finally:
        _record(outcome, start)

    return Unfurled(url=uri)

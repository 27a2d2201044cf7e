"""Metadata extraction from an HTML ``<head>``.

Every field is read through a *matcher chain*: an ordered tuple of
(selector, accessor) pairs. The first selector that matches an element whose
accessor yields a value wins, which encodes the source priority
Open Graph > Twitter Card > generic meta > fallback element. Attribute
values in selectors compare case-insensitively (the `` i`` flag), so
``name="Description"`` matches ``meta[name="description" i]``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from bs4 import BeautifulSoup, Tag

from unfurler.schemas.unfurl import Media
from unfurler.services.uri_parser import ParsedUri
from unfurler.services.url_resolver import fix_url

logger = logging.getLogger(__name__)

Accessor = Callable[[Tag], "str | None"]


def attribute(name: str) -> Accessor:
    """Accessor reading attribute ``name``; ``None`` when it is missing."""

    def _read(el: Tag) -> str | None:
        value = el.get(name)
        if value is None:
            return None
        return value if isinstance(value, str) else " ".join(value)

    return _read


def text(el: Tag) -> str:
    """Accessor returning the element text with whitespace collapsed."""
    return " ".join(el.get_text().split())


@dataclass(frozen=True)
class Matcher:
    selector: str
    accessor: Accessor


@dataclass(frozen=True)
class MediaMatchers:
    url: tuple[Matcher, ...]
    width: tuple[Matcher, ...]
    height: tuple[Matcher, ...]


_content = attribute("content")
_href = attribute("href")

TITLE_MATCHERS = (
    Matcher('meta[property="og:title" i]', _content),
    Matcher('meta[name="twitter:title" i]', _content),
    Matcher('meta[name="title" i]', _content),
    Matcher("title", text),
)

DESCRIPTION_MATCHERS = (
    Matcher('meta[property="og:description" i]', _content),
    Matcher('meta[name="twitter:description" i]', _content),
    Matcher('meta[name="description" i]', _content),
)

CANONICAL_URL_MATCHERS = (
    Matcher('link[rel="canonical" i]', _href),
)

IMAGE_MATCHERS = MediaMatchers(
    url=(
        Matcher('meta[property="og:image" i]', _content),
        Matcher('meta[name="twitter:image:src" i]', _content),
        Matcher('meta[name="twitter:image" i]', _content),
        Matcher('link[rel="icon" i]', _href),
        Matcher('link[rel="apple-touch-icon-precomposed" i][sizes="144x144" i]', _href),
        Matcher('link[rel="apple-touch-icon-precomposed" i][sizes="114x114" i]', _href),
        Matcher('link[rel="apple-touch-icon-precomposed" i][sizes="72x72" i]', _href),
        Matcher('link[rel="apple-touch-icon-precomposed" i]', _href),
        Matcher('link[rel="shortcut icon" i]', _href),
    ),
    width=(
        Matcher('meta[property="og:image:width" i]', _content),
        Matcher('meta[name="twitter:image:width" i]', _content),
    ),
    height=(
        Matcher('meta[property="og:image:height" i]', _content),
        Matcher('meta[name="twitter:image:height" i]', _content),
    ),
)

VIDEO_MATCHERS = MediaMatchers(
    url=(
        Matcher('meta[property="og:video:secure_url" i]', _content),
        Matcher('meta[property="og:video:url" i]', _content),
        Matcher('meta[property="og:video" i]', _content),
        Matcher('meta[name="twitter:player" i]', _content),
    ),
    width=(
        Matcher('meta[property="og:video:width" i]', _content),
        Matcher('meta[name="twitter:player:width" i]', _content),
    ),
    height=(
        Matcher('meta[property="og:video:height" i]', _content),
        Matcher('meta[name="twitter:player:height" i]', _content),
    ),
)


def parse_head(markup: str | bytes, encoding: str | None = None) -> Tag:
    """Parse an HTML document and return its ``<head>`` (empty if it has none).

    Raw bytes are decoded by BeautifulSoup: ``encoding`` (the response charset)
    is tried first, then the document's own ``<meta charset>`` declaration,
    then sniffing.
    """
    soup = BeautifulSoup(markup, "lxml", from_encoding=encoding)
    return soup.head or soup.new_tag("head")


def extract_field(head: Tag, matchers: tuple[Matcher, ...], field: str) -> str:
    """Return the first value produced by ``matchers``, or ``""``."""
    for matcher in matchers:
        element = head.select_one(matcher.selector)
        if element is None:
            continue
        value = matcher.accessor(element)
        if value is not None:
            return value

    logger.debug(f"Value not found for {field}")
    return ""


def extract_int(head: Tag, matchers: tuple[Matcher, ...], field: str) -> int:
    """Like :func:`extract_field` for integers; ``0`` when missing or malformed."""
    raw = extract_field(head, matchers, field)
    try:
        return int(raw.strip())
    except ValueError:
        logger.info(f"{field} isn't an integer: {raw!r}")
        return 0


def extract_media(
    head: Tag,
    matchers: MediaMatchers,
    page: ParsedUri,
    field: str,
) -> Media | None:
    """Extract an image or video, resolving its URL against ``page``.

    Returns ``None`` when no URL is declared or it cannot be parsed.
    """
    raw_url = extract_field(head, matchers.url, f"{field}Url")
    if not raw_url:
        return None

    url = fix_url(raw_url, page.scheme or "", page.authority or "", page.path)
    if url.is_empty():
        return None

    return Media(
        url=str(url),
        width=extract_int(head, matchers.width, f"{field}Width"),
        height=extract_int(head, matchers.height, f"{field}Height"),
    )

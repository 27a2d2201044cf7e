"""Unfurler -- link previews from Open Graph, Twitter Card and HTML metadata."""

__version__ = "0.1.0"

from unfurler.schemas.unfurl import Media, Unfurled, UnfurlType
from unfurler.services.unfurl import unfurl, unfurl_async
from unfurler.services.uri_parser import (
    EMPTY_URI,
    ParsedUri,
    UriSyntaxError,
    parse_uri,
    parse_uri_safe,
)
from unfurler.services.url_resolver import fix_url

__all__ = [
    "__version__",
    # Entry points
    "unfurl",
    "unfurl_async",
    # Models
    "Unfurled",
    "Media",
    "UnfurlType",
    # URI handling
    "ParsedUri",
    "EMPTY_URI",
    "UriSyntaxError",
    "parse_uri",
    "parse_uri_safe",
    "fix_url",
]

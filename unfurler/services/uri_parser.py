"""Lenient URI decomposition.

Pages routinely emit canonical and image URLs that strict parsers refuse
(unescaped braces in queries, stray angle brackets, odd ports). This module
splits a string into scheme / authority / path / query / fragment with the
generic-syntax regex from RFC 3986 Appendix B and only rejects input that
cannot be turned back into anything useful.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, replace as _dc_replace

logger = logging.getLogger(__name__)

# Groups: 2=scheme, 3=//authority, 4=authority, 5=path, 7=query, 9=fragment
URI_PATTERN = re.compile(r"^(([^:/?#]+):)?(//([^/?#]*))?([^?#]*)(\?([^#]*))?(#(.*))?$", re.DOTALL)
USERINFO_PATTERN = re.compile(r"^([^\[\]]*)@")
PORT_PATTERN = re.compile(r":([^:@\[\]]*?)$")

# Characters that can never appear raw in a host or path
_ILLEGAL_HOST_CHARS = re.compile(r'["\s\x00-\x1f\x7f]')
_ILLEGAL_PATH_CHARS = re.compile(r'["\x00-\x1f\x7f]')

NO_PORT = -1


class UriSyntaxError(ValueError):
    """Raised when a string cannot be decomposed into a usable URI."""

    def __init__(self, reason: str, text: str):
        self.reason = reason
        self.text = text
        super().__init__(f"{reason}: {text!r}")


@dataclass(frozen=True)
class ParsedUri:
    """Components of a leniently parsed URI.

    ``host`` is ``None`` when the input had no ``//authority`` part, and
    ``port`` is ``-1`` when absent or not an integer.
    """

    scheme: str | None = None
    userinfo: str | None = None
    host: str | None = None
    port: int = NO_PORT
    path: str = ""
    query: str | None = None
    fragment: str | None = None

    @property
    def authority(self) -> str | None:
        if self.host is None:
            return None
        authority = self.host
        if self.userinfo is not None:
            authority = f"{self.userinfo}@{authority}"
        if self.port != NO_PORT:
            authority = f"{authority}:{self.port}"
        return authority

    @property
    def origin(self) -> str:
        """``scheme://authority``, or an empty string when either is missing."""
        if not self.scheme or self.authority is None:
            return ""
        return f"{self.scheme}://{self.authority}"

    @property
    def filename(self) -> str:
        """Last path segment."""
        return self.path.rstrip("/").rsplit("/", 1)[-1] if self.path else ""

    def replace(self, **changes) -> "ParsedUri":
        return _dc_replace(self, **changes)

    def is_empty(self) -> bool:
        return str(self) == ""

    def __str__(self) -> str:
        parts = []
        if self.scheme is not None:
            parts.append(f"{self.scheme}:")
        authority = self.authority
        if authority is not None:
            parts.append(f"//{authority}")
        parts.append(self.path)
        if self.query is not None:
            parts.append(f"?{self.query}")
        if self.fragment is not None:
            parts.append(f"#{self.fragment}")
        return "".join(parts)


EMPTY_URI = ParsedUri()


def _parse_port(authority: str) -> int:
    match = PORT_PATTERN.search(authority)
    if not match:
        return NO_PORT
    try:
        return int(match.group(1))
    except ValueError:
        return NO_PORT


def parse_uri(text: str) -> ParsedUri:
    """Decompose ``text`` into URI components without validating them.

    Raises:
        UriSyntaxError: if there is neither a host nor a path, or the host
            or path contains a quote, whitespace or a control character.
    """
    match = URI_PATTERN.match(text)
    if match is None:
        raise UriSyntaxError("Unparsable URI", text)

    scheme = match.group(2)
    authority = match.group(4)
    path = match.group(5) or ""
    query = match.group(7)
    fragment = match.group(9)

    userinfo = None
    host = None
    port = NO_PORT
    if authority is not None:
        userinfo_match = USERINFO_PATTERN.match(authority)
        if userinfo_match:
            userinfo = userinfo_match.group(1)
        host = PORT_PATTERN.sub("", USERINFO_PATTERN.sub("", authority))
        port = _parse_port(authority)

    if not host and not path:
        raise UriSyntaxError("Expected authority", text)
    if host and _ILLEGAL_HOST_CHARS.search(host):
        raise UriSyntaxError("Illegal character in hostname", text)
    if _ILLEGAL_PATH_CHARS.search(path):
        raise UriSyntaxError("Illegal character in path", text)

    return ParsedUri(
        scheme=scheme,
        userinfo=userinfo,
        host=host,
        port=port,
        path=path,
        query=query,
        fragment=fragment,
    )


def parse_uri_safe(text: str) -> ParsedUri:
    """Parse ``text``, returning :data:`EMPTY_URI` instead of raising."""
    try:
        return parse_uri(text)
    except Exception as e:
        logger.warning(
            f"Problem while parsing URI <{text}>: {e}",
            extra={"unfurl_url": text},
        )
        return EMPTY_URI

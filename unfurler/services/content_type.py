"""Content-Type header parsing and image/markup classification."""

from __future__ import annotations

import enum
import logging
import re
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

_TOKEN = r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+"
_QUOTED = r'"(?:[^"\\]|\\.)*"'
MEDIA_TYPE_PATTERN = re.compile(rf"^\s*({_TOKEN})/({_TOKEN})\s*((?:;\s*{_TOKEN}=(?:{_TOKEN}|{_QUOTED})\s*)*)$")
PARAMETER_PATTERN = re.compile(rf";\s*({_TOKEN})=({_TOKEN}|{_QUOTED})")


class MediaTypeError(ValueError):
    """Raised when a header value is not a valid ``type/subtype[;params]``."""


class ContentKind(str, enum.Enum):
    IMAGE = "image"
    MARKUP = "markup"


@dataclass(frozen=True)
class MediaType:
    type: str
    subtype: str
    parameters: dict[str, str] = field(default_factory=dict)

    @property
    def charset(self) -> str | None:
        return self.parameters.get("charset")


def parse_media_type(value: str) -> MediaType:
    """Parse a media type per the ``type/subtype *(;param=value)`` grammar.

    Type, subtype and parameter names are lower-cased; quoted parameter
    values are unquoted.
    """
    match = MEDIA_TYPE_PATTERN.match(value)
    if match is None:
        raise MediaTypeError(f"Invalid media type {value!r}")

    parameters = {}
    for name, raw in PARAMETER_PATTERN.findall(match.group(3)):
        if raw.startswith('"'):
            raw = re.sub(r"\\(.)", r"\1", raw[1:-1])
        parameters[name.lower()] = raw
    return MediaType(match.group(1).lower(), match.group(2).lower(), parameters)


def _parse_or_none(header_value: str | None) -> MediaType | None:
    if not header_value:
        return None
    try:
        return parse_media_type(header_value)
    except MediaTypeError:
        logger.info(f"Invalid media type header {header_value!r}")
        return None


def classify(header_value: str | None) -> ContentKind:
    """Decide whether a response is a raw image or something to parse as markup.

    Absent and malformed headers fall through to markup.
    """
    media_type = _parse_or_none(header_value)
    if media_type is not None and media_type.type == "image":
        return ContentKind.IMAGE
    return ContentKind.MARKUP


def charset_of(header_value: str | None) -> str | None:
    # classify() has already logged a malformed header
    if not header_value:
        return None
    try:
        return parse_media_type(header_value).charset
    except MediaTypeError:
        return None

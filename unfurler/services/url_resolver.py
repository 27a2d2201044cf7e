"""Absolutize URLs found in page metadata against the page they came from."""

import logging

from unfurler.services.uri_parser import EMPTY_URI, ParsedUri, parse_uri_safe

logger = logging.getLogger(__name__)


def fix_url(subject: str, scheme: str, authority: str, path: str) -> ParsedUri:
    """Add the page origin to an ambiguous reference if necessary.

    This is plain string prepending, not RFC 3986 reference resolution:
    the page path is reused verbatim for relative references and no
    dot-segments are removed.

    Args:
        subject: A filename, path + filename, or full URL to a resource.
        scheme: Scheme of the page the reference was found on.
        authority: Authority (host[:port]) of that page.
        path: Path of that page, prepended to relative references.
    """
    if not subject:
        return EMPTY_URI

    origin = f"{scheme}://{authority}"

    # Protocol-relative: every "//" in the reference collapses to "/"
    if subject.startswith("//"):
        return parse_uri_safe(origin + subject.replace("//", "/"))

    if subject.startswith("/"):
        return parse_uri_safe(origin + subject)

    if parse_uri_safe(subject).scheme is None:
        logger.debug(f"Relative path {subject!r}, prepending {origin}{path}")
        return parse_uri_safe(origin + path + subject)

    return parse_uri_safe(subject)

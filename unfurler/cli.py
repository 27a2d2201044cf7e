"""CLI tool for Unfurler: preview one or more URLs from the command line.

Usage:
    python -m unfurler.cli https://example.com
    python -m unfurler.cli https://example.com https://example.org --output text
    python -m unfurler.cli example.com --timeout 5 -v
"""

import argparse
import asyncio
import json
import logging
import sys

from unfurler.config import Settings, settings
from unfurler.core.logging_config import configure_logging
from unfurler.schemas.unfurl import UnfurlRequest, Unfurled
from unfurler.services.fetcher import build_async_client
from unfurler.services.unfurl import unfurl_async


def _setup_logging(verbose: bool = False):
    configure_logging(
        log_format="text",
        log_level="DEBUG" if verbose else "WARNING",
        stream=sys.stderr,
    )


async def _unfurl_all(urls: list[str], config: Settings) -> list[Unfurled]:
    """Unfurl every URL concurrently over one connection pool."""
    async with build_async_client(config) as client:
        return await asyncio.gather(
            *(unfurl_async(url, client=client) for url in urls)
        )


def _print_text(unfurled: Unfurled) -> None:
    print(f"{unfurled.title or unfurled.url}")
    print(f"   URL:         {unfurled.url}")
    print(f"   Canonical:   {unfurled.canonical_url}")
    print(f"   Type:        {unfurled.type.value}")
    if unfurled.description:
        print(f"   Description: {unfurled.description[:300]}")
    for label, media in (("Image", unfurled.image), ("Video", unfurled.video)):
        if media is not None:
            print(f"   {label}:       {media.url} ({media.width}x{media.height})")
    if unfurled.is_empty():
        print("   (nothing found)")
    print()


def main(argv: list[str] | None = None):
    parser = argparse.ArgumentParser(
        description="Unfurler CLI: link previews from Open Graph, Twitter Card and HTML metadata",
    )
    parser.add_argument("urls", nargs="+", help="URLs to unfurl")
    parser.add_argument(
        "--timeout", type=float, default=settings.FETCH_TIMEOUT,
        help=f"Fetch timeout in seconds (default: {settings.FETCH_TIMEOUT})",
    )
    parser.add_argument(
        "-o", "--output", default="json",
        choices=["json", "text"],
        help="Output format: one JSON object per line, or a readable card (default: json)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    args = parser.parse_args(argv)

    _setup_logging(args.verbose)

    config = settings.model_copy(update={"FETCH_TIMEOUT": args.timeout})
    urls = [UnfurlRequest(url=url).url for url in args.urls]
    results = asyncio.run(_unfurl_all(urls, config))

    for unfurled in results:
        if args.output == "json":
            print(json.dumps(unfurled.model_dump(mode="json", by_alias=True), ensure_ascii=False))
        else:
            _print_text(unfurled)

    logging.getLogger(__name__).debug(
        f"Unfurled {len(results)} URLs, {sum(r.is_empty() for r in results)} empty"
    )


if __name__ == "__main__":
    main()

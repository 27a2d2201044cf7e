"""Structured logging configuration.

Supports two modes via LOG_FORMAT env var:
- "json" (production): JSON-formatted log lines with the URL being unfurled
- "text" (development): Human-readable log lines

The unfurled URL is attached at each call site with
``extra={"unfurl_url": ...}``; records without it get "-".
"""

import logging
import sys

from pythonjsonlogger.json import JsonFormatter

TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s [%(unfurl_url)s] %(message)s"


class UnfurlURLFilter(logging.Filter):
    """Default the unfurl_url field for records logged without one."""

    def filter(self, record):
        if not hasattr(record, "unfurl_url"):
            record.unfurl_url = "-"
        return True


def configure_logging(log_format: str = "json", log_level: str = "INFO", stream=None):
    """Configure root logger with the specified format.

    Args:
        log_format: "json" or "text"
        log_level: Python log level name
        stream: Output stream, stdout by default
    """
    root = logging.getLogger()
    root.handlers.clear()

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.addFilter(UnfurlURLFilter())

    if log_format == "json":
        formatter = JsonFormatter(
            fmt="%(asctime)s %(name)s %(levelname)s %(message)s %(unfurl_url)s",
            rename_fields={
                "levelname": "level",
                "name": "logger",
                "asctime": "timestamp",
            },
        )
    else:
        formatter = logging.Formatter(TEXT_FORMAT)

    handler.setFormatter(formatter)
    root.addHandler(handler)
    root.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

"""Tests for log formatting."""

import io
import json
import logging

import pytest

from unfurler.core.logging_config import configure_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


class TestConfigureLogging:
    def test_json_lines_carry_unfurl_url(self, restore_root_logger):
        """JSON lines carry renamed fields and the unfurled URL."""
        stream = io.StringIO()
        configure_logging(log_format="json", log_level="INFO", stream=stream)

        logging.getLogger("unfurler.test").info("fetched", extra={"unfurl_url": "http://a.com"})

        record = json.loads(stream.getvalue().splitlines()[-1])
        assert record["message"] == "fetched"
        assert record["level"] == "INFO"
        assert record["logger"] == "unfurler.test"
        assert record["unfurl_url"] == "http://a.com"

    def test_text_format_defaults_missing_url(self, restore_root_logger):
        """Records logged without a URL show "-"."""
        stream = io.StringIO()
        configure_logging(log_format="text", log_level="DEBUG", stream=stream)

        logging.getLogger("unfurler.test").debug("no url here")

        assert "unfurler.test [-] no url here" in stream.getvalue()

    def test_httpx_is_quietened(self, restore_root_logger):
        """httpx request logs are raised to WARNING."""
        configure_logging(log_format="text", log_level="DEBUG", stream=io.StringIO())
        assert logging.getLogger("httpx").level == logging.WARNING

"""
Tests for logging configuration.
"""

import json
import logging
import sys
from unittest.mock import patch

from portfolio.core.logging import (
    EventFormatter,
    JSONFormatter,
    get_logger,
    log_event,
    setup_logging,
)


class TestJSONFormatter:
    """Test JSONFormatter output."""

    def test_basic_record(self):
        record = logging.LogRecord(
            "portfolio.test", logging.INFO, __file__, 1, "hello %s", ("world",), None
        )

        data = json.loads(JSONFormatter().format(record))

        assert data["level"] == "INFO"
        assert data["logger"] == "portfolio.test"
        assert data["message"] == "hello world"

    def test_exception_single_line(self):
        """Test exception traces are kept on one line."""
        try:
            raise ValueError("bad value")
        except ValueError:
            exc_info = sys.exc_info()
        record = logging.LogRecord(
            "portfolio.test", logging.ERROR, __file__, 1, "failed", (), exc_info
        )

        output = JSONFormatter().format(record)
        data = json.loads(output)

        assert "\n" not in output
        assert data["exc_type"] == "ValueError"
        assert "bad value" in data["exception"]

    def test_event_fields_merged(self):
        """Test log_event fields land at the top level of the JSON record."""
        logger = logging.getLogger("portfolio.test.json")
        records = []
        handler = logging.Handler()
        handler.emit = records.append
        logger.addHandler(handler)
        try:
            log_event(logger, logging.WARNING, "contact_handoff_failed", url_length=42)
        finally:
            logger.removeHandler(handler)

        data = json.loads(JSONFormatter().format(records[0]))

        assert data["message"] == "contact_handoff_failed"
        assert data["event"] == "contact_handoff_failed"
        assert data["url_length"] == 42
        assert data["level"] == "WARNING"


class TestEventFormatter:
    """Test the development formatter."""

    def test_fields_appended(self):
        record = logging.LogRecord(
            "portfolio.test", logging.INFO, __file__, 1, "contact_handoff_opened", (), None
        )
        record.extra = {"event": "contact_handoff_opened", "url_length": 7}

        output = EventFormatter(fmt="%(message)s").format(record)

        assert output == "contact_handoff_opened [url_length=7]"

    def test_plain_record(self):
        record = logging.LogRecord(
            "portfolio.test", logging.INFO, __file__, 1, "hello", (), None
        )

        assert EventFormatter(fmt="%(message)s").format(record) == "hello"


class TestSetupLogging:
    """Test setup_logging handler configuration."""

    def setup_method(self):
        self.original_level = logging.getLogger().level

    def teardown_method(self):
        root_logger = logging.getLogger()
        root_logger.setLevel(self.original_level)
        for handler in root_logger.handlers[:]:
            root_logger.removeHandler(handler)

    @patch("portfolio.core.logging.settings")
    def test_json_in_production(self, mock_settings):
        mock_settings.DEBUG = False
        mock_settings.LOG_LEVEL = "WARNING"

        setup_logging()

        root_logger = logging.getLogger()
        assert root_logger.level == logging.WARNING
        assert len(root_logger.handlers) == 1
        assert isinstance(root_logger.handlers[0].formatter, JSONFormatter)

    @patch("portfolio.core.logging.settings")
    def test_plain_format_in_debug(self, mock_settings):
        mock_settings.DEBUG = True
        mock_settings.LOG_LEVEL = "DEBUG"

        setup_logging()
        setup_logging()

        root_logger = logging.getLogger()
        assert root_logger.level == logging.DEBUG
        assert len(root_logger.handlers) == 1
        assert isinstance(root_logger.handlers[0].formatter, EventFormatter)

    @patch("portfolio.core.logging.settings")
    def test_explicit_level(self, mock_settings):
        mock_settings.DEBUG = False

        setup_logging("error")

        assert logging.getLogger().level == logging.ERROR

    def test_get_logger(self):
        assert get_logger("portfolio.x") is logging.getLogger("portfolio.x")


class TestContactEventLogs:
    """Test structured events emitted by the contact services."""

    def test_validation_failure_logs_field_names_only(self, controller, caplog):
        controller.update_field("name", "Al")
        controller.update_field("email", "secret-address")
        controller.update_field("message", "short")

        with caplog.at_level(logging.INFO, logger="portfolio"):
            controller.submit()

        events = [
            r.extra
            for r in caplog.records
            if r.name == "portfolio.services.contact_controller"
        ]
        assert events == [
            {"event": "contact_validation_failed", "fields": ["email", "message"]}
        ]
        assert "secret-address" not in caplog.text

    def test_handoff_events(self, caplog):
        """Test hand-off outcomes are logged as structured events."""
        from portfolio.services.handoff_service import HandoffService

        with caplog.at_level(logging.INFO, logger="portfolio"):
            HandoffService(opener=lambda url: True).hand_off("https://wa.me/1?text=x")

        assert caplog.records[-1].extra == {
            "event": "contact_handoff_opened",
            "url_length": len("https://wa.me/1?text=x"),
        }

#!/usr/bin/env python3
"""
Tests for the structured logging helpers.
"""

import json
import logging
import unittest
from unittest.mock import MagicMock, patch

from aio_openai.utils import setup_logging
from aio_openai.utils.logging import (
    log_api_error,
    log_request_event,
    log_stream_retry,
    log_stream_terminated,
)


def _payload(message: str, prefix: str) -> dict:
    return json.loads(message.split(f"{prefix}: ", 1)[1])


class TestStructuredLogging(unittest.TestCase):
    """Test cases for the event logging helpers."""

    def setUp(self):
        """Set up a mock logger with DEBUG enabled."""
        self.mock_logger = MagicMock()
        self.mock_logger.isEnabledFor.return_value = True

    def test_log_request_event(self):
        log_request_event("POST", "https://api.test/v1/chat/completions", 200, 0.12345, logger=self.mock_logger)

        self.mock_logger.debug.assert_called_once()
        record = _payload(self.mock_logger.debug.call_args[0][0], "API_REQUEST")
        self.assertEqual(record["event_type"], "api_request")
        self.assertEqual(record["method"], "POST")
        self.assertEqual(record["status"], 200)
        self.assertEqual(record["duration_seconds"], 0.123)

    def test_log_request_event_skipped_without_debug(self):
        self.mock_logger.isEnabledFor.return_value = False

        log_request_event("GET", "https://api.test/v1/models", 200, 0.1, logger=self.mock_logger)

        self.mock_logger.debug.assert_not_called()

    def test_log_api_error(self):
        log_api_error("https://api.test/v1/models", 429, "insufficient_quota", "insufficient_quota",
                      "You exceeded your current quota", logger=self.mock_logger)

        self.mock_logger.warning.assert_called_once()
        record = _payload(self.mock_logger.warning.call_args[0][0], "API_ERROR")
        self.assertEqual(record["status"], 429)
        self.assertEqual(record["code"], "insufficient_quota")

    def test_log_stream_retry(self):
        log_stream_retry("https://api.test/v1/chat/completions", "server", 2, 0.75, "HTTP 503",
                         logger=self.mock_logger)

        record = _payload(self.mock_logger.warning.call_args[0][0], "STREAM_RETRY")
        self.assertEqual(record["event_type"], "stream_retry")
        self.assertEqual(record["error_kind"], "server")
        self.assertEqual(record["retry_number"], 2)
        self.assertEqual(record["delay_seconds"], 0.75)

    def test_log_stream_terminated(self):
        log_stream_terminated("https://api.test/v1/chat/completions", "quota", 0, "HTTP 429",
                              logger=self.mock_logger)

        record = _payload(self.mock_logger.error.call_args[0][0], "STREAM_TERMINATED")
        self.assertEqual(record["error_kind"], "quota")
        self.assertEqual(record["retries"], 0)


class TestSetupLogging(unittest.TestCase):
    """Test cases for setup_logging."""

    @patch("logging.basicConfig")
    def test_levels(self, mock_basic_config):
        setup_logging(verbose=True)

        self.assertEqual(mock_basic_config.call_args.kwargs["level"], logging.DEBUG)
        self.assertEqual(logging.getLogger("httpx").level, logging.WARNING)

        setup_logging(verbose=False)

        self.assertEqual(mock_basic_config.call_args.kwargs["level"], logging.INFO)


if __name__ == "__main__":
    unittest.main()

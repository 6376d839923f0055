"""
Utilities module for the aio_openai client.

This module provides logging configuration, structured event records and
helpers for saving generated files.
"""

from .logging import (
    setup_logging,
    log_request_event,
    log_api_error,
    log_stream_retry,
    log_stream_terminated,
)
from .download import download_url, save_b64, random_file_name

__all__ = [
    "setup_logging",
    "log_request_event",
    "log_api_error",
    "log_stream_retry",
    "log_stream_terminated",
    "download_url",
    "save_b64",
    "random_file_name",
]

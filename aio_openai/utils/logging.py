"""
Logging utilities for the aio_openai client.

This module provides logging configuration and structured, machine-readable
event records for requests, API errors and stream reconnections.
"""

import json
import logging
import time
from typing import Any, Optional


def setup_logging(verbose: bool = False):
    """Setup logging configuration with appropriate level and format."""
    level = logging.DEBUG if verbose else logging.INFO
    format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(level=level, format=format_string, datefmt="%Y-%m-%d %H:%M:%S")

    # Set specific logger levels
    logging.getLogger("httpx").setLevel(logging.WARNING)  # Reduce HTTP client noise
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def log_request_event(
    method: str,
    url: str,
    status: Optional[int] = None,
    duration: Optional[float] = None,
    logger: Optional[logging.Logger] = None,
):
    """
    Log a structured record of one completed HTTP round trip.

    Args:
        method: HTTP method
        url: Request url (never includes credentials)
        status: Response status code, None if the transport failed
        duration: Round trip time in seconds
        logger: Logger instance to use (defaults to current module logger)
    """
    if logger is None:
        logger = logging.getLogger(__name__)

    if not logger.isEnabledFor(logging.DEBUG):
        return

    request_record = {
        "event_type": "api_request",
        "timestamp": time.time(),
        "method": method,
        "url": url,
        "status": status,
        "duration_seconds": round(duration, 3) if duration is not None else None,
    }

    logger.debug(f"API_REQUEST: {json.dumps(request_record, ensure_ascii=False)}")


def log_api_error(
    url: str,
    status: Optional[int],
    error_type: Optional[str],
    code: Any = None,
    message: str = "",
    logger: Optional[logging.Logger] = None,
):
    """
    Log a structured record of an error returned by the API.

    Args:
        url: Request url
        status: HTTP status code
        error_type: ``error.type`` from the envelope, if any
        code: ``error.code`` from the envelope, if any
        message: Error message
        logger: Logger instance to use (defaults to current module logger)
    """
    if logger is None:
        logger = logging.getLogger(__name__)

    error_record = {
        "event_type": "api_error",
        "timestamp": time.time(),
        "url": url,
        "status": status,
        "error_type": error_type,
        "code": code,
        "message": message,
    }

    logger.warning(f"API_ERROR: {json.dumps(error_record, ensure_ascii=False, default=str)}")


def log_stream_retry(
    url: str,
    error_kind: str,
    retry_number: int,
    delay: float,
    error: str = "",
    logger: Optional[logging.Logger] = None,
):
    """
    Log a structured stream reconnection event.

    Args:
        url: Stream url
        error_kind: Classification of the error (rate_limit, server, protocol)
        retry_number: 1-based count of consecutive reconnections
        delay: Seconds waited before reconnecting
        error: Description of the error that caused the reconnection
        logger: Logger instance to use (defaults to current module logger)
    """
    if logger is None:
        logger = logging.getLogger(__name__)

    retry_record = {
        "event_type": "stream_retry",
        "timestamp": time.time(),
        "url": url,
        "error_kind": error_kind,
        "retry_number": retry_number,
        "delay_seconds": round(delay, 3),
        "error": error,
    }

    logger.warning(f"STREAM_RETRY: {json.dumps(retry_record, ensure_ascii=False)}")


def log_stream_terminated(
    url: str,
    error_kind: str,
    retries: int,
    error: str = "",
    logger: Optional[logging.Logger] = None,
):
    """
    Log a structured record for a stream that failed for good.

    Args:
        url: Stream url
        error_kind: Classification of the terminal error
        retries: Reconnections attempted before giving up
        error: Description of the terminal error
        logger: Logger instance to use (defaults to current module logger)
    """
    if logger is None:
        logger = logging.getLogger(__name__)

    terminated_record = {
        "event_type": "stream_terminated",
        "timestamp": time.time(),
        "url": url,
        "error_kind": error_kind,
        "retries": retries,
        "error": error,
    }

    logger.error(f"STREAM_TERMINATED: {json.dumps(terminated_record, ensure_ascii=False)}")

"""
Streaming retry policy.

This module provides the backoff configuration, the error classification
used to decide whether a failed stream connection is retried, and the
StreamingBackoff policy applied by the event source.

Backoff progression (no randomization):
- first retry waits ``initial_interval``
- every following retry waits the previous delay times ``multiplier``,
  clamped to ``max_elapsed_time`` when set
"""

import email.utils
import logging
import time
from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass, replace
from typing import Any, Dict, Mapping, Optional, Tuple

from ..constants import (
    DEFAULT_INITIAL_INTERVAL,
    DEFAULT_MAX_ELAPSED_TIME,
    DEFAULT_MULTIPLIER,
    QUOTA_ERROR_CODES,
)
from ..errors import parse_error_envelope
from .errors import TransportError

logger = logging.getLogger(__name__)

# (number of consecutive retries so far, delay of the previous retry in seconds)
LastRetry = Tuple[int, float]


@dataclass(frozen=True)
class ExponentialBackoff:
    """
    Backoff configuration for stream reconnections.

    Attributes:
        initial_interval: Seconds to wait before the first reconnection
        multiplier: Factor applied to the previous wait on every reconnection
        max_elapsed_time: Upper bound for a single wait, None for no bound
        max_retries: Consecutive reconnections allowed, None for unlimited
    """

    initial_interval: float = DEFAULT_INITIAL_INTERVAL
    multiplier: float = DEFAULT_MULTIPLIER
    max_elapsed_time: Optional[float] = DEFAULT_MAX_ELAPSED_TIME
    max_retries: Optional[int] = None

    def __post_init__(self):
        """Validate backoff parameters."""
        if self.initial_interval < 0:
            raise ValueError("initial_interval must be non-negative")
        if self.multiplier < 1.0:
            raise ValueError("multiplier must be at least 1.0")
        if self.max_elapsed_time is not None and self.max_elapsed_time <= 0:
            raise ValueError("max_elapsed_time must be positive or None")
        if self.max_retries is not None and self.max_retries < 0:
            raise ValueError("max_retries must be non-negative or None")

    @classmethod
    def from_env(cls, env) -> "ExponentialBackoff":
        """Build from the OPENAI_STREAM_* settings of an Env."""
        return cls(
            initial_interval=env.OPENAI_STREAM_INITIAL_INTERVAL,
            multiplier=env.OPENAI_STREAM_MULTIPLIER,
            max_elapsed_time=env.OPENAI_STREAM_MAX_ELAPSED_TIME,
            max_retries=env.OPENAI_STREAM_MAX_RETRIES,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return asdict(self)


@dataclass
class ErrorClassification:
    """
    Classification of stream errors for retry strategy.

    Attributes:
        kind: Type of error ('rate_limit', 'quota', 'server', 'client', 'network', 'protocol')
        retry_after: Retry-After header value in seconds (None if not present)
        should_retry: Whether this error type should be retried
    """
    kind: str
    retry_after: Optional[float]
    should_retry: bool

    def __post_init__(self):
        """Validate error classification."""
        valid_kinds = {"rate_limit", "quota", "server", "client", "network", "protocol"}
        if self.kind not in valid_kinds:
            raise ValueError(f"kind must be one of {valid_kinds}")
        if self.retry_after is not None and self.retry_after < 0:
            raise ValueError("retry_after must be non-negative")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return asdict(self)


def parse_retry_after(headers: Optional[Mapping[str, str]]) -> Optional[float]:
    """
    Read the server's requested delay from ``retry-after-ms`` or ``Retry-After``.

    ``Retry-After`` may be a number of seconds or an HTTP date.

    Returns:
        Seconds to wait, or None if no usable header is present
    """
    if not headers:
        return None

    lowered = {key.lower(): value for key, value in headers.items()}

    retry_ms = lowered.get("retry-after-ms")
    if retry_ms is not None:
        try:
            return max(0.0, float(retry_ms) / 1000)
        except ValueError:
            pass

    retry_after = lowered.get("retry-after")
    if retry_after is None:
        return None
    try:
        return max(0.0, float(retry_after))
    except ValueError:
        pass

    retry_date = email.utils.parsedate_tz(retry_after)
    if retry_date is None:
        return None
    return max(0.0, float(email.utils.mktime_tz(retry_date) - time.time()))


def classify_error(error: Exception) -> ErrorClassification:
    """Classify a stream error using HTTP status and the error envelope.

    Connection level errors (TransportError) are retried only for 5xx and
    429 statuses; a 429 whose error code or type signals billing quota
    exhaustion is not retried. Errors without a status are not retried.
    Every other stream error (decoding, content type, premature end) is
    retried.
    """
    if not isinstance(error, TransportError):
        return ErrorClassification(kind="protocol", retry_after=None, should_retry=True)

    status = error.status
    retry_after = parse_retry_after(error.headers)

    if status is None:
        return ErrorClassification(kind="network", retry_after=None, should_retry=False)

    # 429 rate limit vs quota depletion
    if status == 429:
        envelope = parse_error_envelope(error.body)
        if envelope is not None and (envelope.code in QUOTA_ERROR_CODES or envelope.type in QUOTA_ERROR_CODES):
            return ErrorClassification(kind="quota", retry_after=retry_after, should_retry=False)
        return ErrorClassification(kind="rate_limit", retry_after=retry_after, should_retry=True)

    # 5xx server errors
    if 500 <= status <= 599:
        return ErrorClassification(kind="server", retry_after=retry_after, should_retry=True)

    return ErrorClassification(kind="client", retry_after=retry_after, should_retry=False)


class RetryPolicy(ABC):
    """Decides whether and when an event source reconnects."""

    @abstractmethod
    def retry(self, error: Exception, last_retry: Optional[LastRetry]) -> Optional[float]:
        """
        Decide on reconnection after an error.

        Args:
            error: The error that ended the connection
            last_retry: (retry count, previous delay) since the last successful
                connection, None if this is the first failure

        Returns:
            Seconds to wait before reconnecting, None to give up
        """

    @abstractmethod
    def set_reconnection_time(self, seconds: float) -> None:
        """Apply a reconnection time requested by the server."""


class StreamingBackoff(RetryPolicy):
    """
    Exponential backoff without randomization for SSE reconnections.

    Each event source owns its own instance: ``set_reconnection_time`` only
    affects the stream whose server requested it.
    """

    def __init__(self, backoff: Optional[ExponentialBackoff] = None):
        self._backoff = backoff if backoff is not None else ExponentialBackoff()

    @property
    def backoff(self) -> ExponentialBackoff:
        return self._backoff

    def should_retry(self, error: Exception) -> bool:
        return classify_error(error).should_retry

    def retry(self, error: Exception, last_retry: Optional[LastRetry]) -> Optional[float]:
        if not self.should_retry(error):
            return None

        retry_num = last_retry[0] if last_retry is not None else 0
        if self._backoff.max_retries is not None and retry_num >= self._backoff.max_retries:
            logger.debug(f"Giving up after {retry_num} reconnections (max_retries={self._backoff.max_retries})")
            return None

        if last_retry is None:
            return self._backoff.initial_interval

        last_delay = last_retry[1]

        delay = last_delay * self._backoff.multiplier
        if self._backoff.max_elapsed_time is not None:
            delay = min(delay, self._backoff.max_elapsed_time)
        return delay

    def set_reconnection_time(self, seconds: float) -> None:
        max_elapsed = self._backoff.max_elapsed_time
        if max_elapsed is not None:
            max_elapsed = max(max_elapsed, seconds)
        self._backoff = replace(self._backoff, initial_interval=seconds, max_elapsed_time=max_elapsed)

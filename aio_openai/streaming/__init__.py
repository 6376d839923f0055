"""
Streaming support for the aio_openai client.

This module provides the Server-Sent Events decoder, the reconnecting
event source with its retry policy, and typed chunk streams.
"""

from .backoff import (
    ErrorClassification,
    ExponentialBackoff,
    RetryPolicy,
    StreamingBackoff,
    classify_error,
    parse_retry_after,
)
from .errors import (
    EventSourceError,
    InvalidContentTypeError,
    ParseError,
    StreamEndedError,
    TransportError,
)
from .event_source import EventSource
from .sse import SSEDecoder, SseEvent
from .stream import Stream

__all__ = [
    "ErrorClassification",
    "ExponentialBackoff",
    "RetryPolicy",
    "StreamingBackoff",
    "classify_error",
    "parse_retry_after",
    "EventSourceError",
    "InvalidContentTypeError",
    "ParseError",
    "StreamEndedError",
    "TransportError",
    "EventSource",
    "SSEDecoder",
    "SseEvent",
    "Stream",
]

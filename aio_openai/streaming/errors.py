"""
Errors raised inside an event source.

These never reach callers directly: the event source hands them to its
retry policy and either reconnects or converts them into ApiError or
StreamError.
"""

from typing import Mapping, Optional


class EventSourceError(Exception):
    """Base class for failures of a single SSE connection."""
    pass


class TransportError(EventSourceError):
    """
    The connection failed or the server answered with a non-2xx status.

    Attributes:
        status: HTTP status, None when no response was received
        body: Response body, if one was read
        headers: Response headers, if any
    """

    def __init__(self, message: str, status: Optional[int] = None, body: bytes = b"",
                 headers: Optional[Mapping[str, str]] = None):
        super().__init__(message)
        self.status = status
        self.body = body
        self.headers = headers or {}


class InvalidContentTypeError(EventSourceError):
    """The response is not ``text/event-stream``."""

    def __init__(self, content_type: str, body: bytes = b""):
        super().__init__(f"invalid content type: {content_type or '<missing>'}")
        self.content_type = content_type
        self.body = body


class ParseError(EventSourceError):
    """The event stream could not be decoded."""
    pass


class StreamEndedError(EventSourceError):
    """The server closed the stream before the consumer finished."""

    def __init__(self):
        super().__init__("stream ended")

"""
Reconnecting Server-Sent Events source.

EventSource opens a streaming request through an HttpTransport and yields
SseEvents until the consumer stops. Failed connections are handed to a
RetryPolicy; retryable failures reconnect after the policy's delay,
terminal failures raise ApiError (when the server sent an error envelope)
or StreamError.
"""

import asyncio
import logging
from dataclasses import replace
from typing import AsyncIterator, Mapping, Optional

from ..api.transport import HttpRequest, HttpTransport, StreamingResponse
from ..constants import LAST_EVENT_ID_HEADER
from ..errors import ApiError, HttpError, OpenAIError, StreamError, parse_error_envelope
from ..utils.logging import log_stream_retry, log_stream_terminated
from .backoff import LastRetry, RetryPolicy, StreamingBackoff, classify_error
from .errors import EventSourceError, InvalidContentTypeError, ParseError, StreamEndedError, TransportError
from .sse import SSEDecoder, SseEvent

logger = logging.getLogger(__name__)

EVENT_STREAM_CONTENT_TYPE = "text/event-stream"


async def _wait(seconds: float) -> None:
    await asyncio.sleep(seconds)


class EventSource:
    """
    Async iterator over the events of a (re)connecting SSE stream.

    By default the iterator never ends on its own: when the server closes the
    stream the source reconnects, so consumers stop on an application level
    terminator (``[DONE]``) and call ``aclose()``. With ``ends_on_close`` a
    cleanly closed stream ends the iteration instead; image and transcription
    event streams carry no terminator.

    Example:
        source = EventSource(transport, request, StreamingBackoff())
        async for event in source:
            if event.data == "[DONE]":
                break
        await source.aclose()
    """

    def __init__(self, transport: HttpTransport, request: HttpRequest, retry_policy: Optional[RetryPolicy] = None,
                 ends_on_close: bool = False):
        self._transport = transport
        self._request = request
        self._policy = retry_policy if retry_policy is not None else StreamingBackoff()
        self._ends_on_close = ends_on_close
        self._last_event_id: Optional[str] = None
        self._last_retry: Optional[LastRetry] = None
        self._events: Optional[AsyncIterator[SseEvent]] = None
        self._closed = False

    @property
    def url(self) -> str:
        return self._request.url

    @property
    def last_event_id(self) -> Optional[str]:
        return self._last_event_id

    def __aiter__(self) -> "EventSource":
        return self

    async def __anext__(self) -> SseEvent:
        if self._closed:
            raise StopAsyncIteration
        if self._events is None:
            self._events = self._run()
        return await self._events.__anext__()

    async def aclose(self) -> None:
        """Stop the source and close the current connection."""
        self._closed = True
        if self._events is not None:
            await self._events.aclose()

    async def _run(self) -> AsyncIterator[SseEvent]:
        while True:
            try:
                async with self._transport.stream(self._prepare_request()) as response:
                    await self._check_response(response)
                    self._last_retry = None

                    decoder = SSEDecoder(self._last_event_id)
                    async for chunk in response.chunks:
                        for event in self._decode(decoder, chunk):
                            self._last_event_id = decoder.last_event_id
                            if event.retry is not None:
                                self._policy.set_reconnection_time(event.retry / 1000)
                            if event.data:
                                yield event
                        self._last_event_id = decoder.last_event_id
                    try:
                        decoder.flush()
                    except UnicodeDecodeError as e:
                        raise ParseError(f"invalid UTF-8 in event stream: {e}") from e

                if self._ends_on_close:
                    logger.debug(f"Stream from {self.url} closed by the server")
                    return
                raise StreamEndedError()
            except HttpError as e:
                error: EventSourceError = TransportError(e.message, status=e.status)
                error.__cause__ = e
            except EventSourceError as e:
                error = e

            await self._reconnect_or_raise(error)

    def _prepare_request(self) -> HttpRequest:
        headers = dict(self._request.headers)
        headers["Accept"] = EVENT_STREAM_CONTENT_TYPE
        headers["Cache-Control"] = "no-store"
        if self._last_event_id:
            headers[LAST_EVENT_ID_HEADER] = self._last_event_id
        return replace(self._request, headers=headers)

    async def _check_response(self, response: StreamingResponse) -> None:
        if not response.is_success:
            body = await response.aread()
            raise TransportError(f"HTTP {response.status}", status=response.status, body=body,
                                 headers=response.headers)

        content_type = _header(response.headers, "content-type")
        if content_type.split(";")[0].strip().lower() != EVENT_STREAM_CONTENT_TYPE:
            body = await response.aread()
            raise InvalidContentTypeError(content_type, body)

    def _decode(self, decoder: SSEDecoder, chunk: bytes):
        try:
            return list(decoder.feed(chunk))
        except UnicodeDecodeError as e:
            raise ParseError(f"invalid UTF-8 in event stream: {e}") from e

    async def _reconnect_or_raise(self, error: EventSourceError) -> None:
        classification = classify_error(error)

        if classification.should_retry and classification.retry_after is not None:
            self._policy.set_reconnection_time(classification.retry_after)

        delay = self._policy.retry(error, self._last_retry)
        retries = self._last_retry[0] if self._last_retry else 0

        if delay is None:
            log_stream_terminated(self.url, classification.kind, retries, str(error), logger=logger)
            raise self._terminal_error(error) from error

        self._last_retry = (retries + 1, delay)
        log_stream_retry(self.url, classification.kind, retries + 1, delay, str(error), logger=logger)
        await _wait(delay)

    def _terminal_error(self, error: EventSourceError) -> OpenAIError:
        body = getattr(error, "body", b"")
        status = getattr(error, "status", None)

        envelope = parse_error_envelope(body)
        if envelope is not None:
            return ApiError(envelope, status)

        message = str(error)
        if body:
            message = f"{message}: {body.decode('utf-8', errors='replace')}"
        return StreamError(message, cause=error)


def _header(headers: Mapping[str, str], name: str) -> str:
    value = headers.get(name)
    if value is None:
        for key, candidate in headers.items():
            if key.lower() == name:
                return candidate
        return ""
    return value

"""
Typed stream of response chunks.

Wraps an EventSource: stops at the ``data: [DONE]`` frame, raises ApiError
for frames carrying an error object and deserializes every other frame into
the item type.
"""

import logging
from typing import Any, Generic, TypeVar

from ..api.byot import deserialize
from ..constants import STREAM_DONE_MARKER
from ..errors import ApiError, parse_error_envelope
from .event_source import EventSource

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Stream(Generic[T]):
    """
    Async iterator of typed chunks.

    Use as an async context manager, or call ``aclose()``, to release the
    connection when leaving the loop early.

    Example:
        stream = await client.chat.create_stream(request)
        async with stream:
            async for chunk in stream:
                print(chunk.choices[0].delta.content or "", end="")
    """

    def __init__(self, source: EventSource, response_model: Any):
        self._source = source
        self._response_model = response_model
        self._done = False

    @property
    def response_model(self) -> Any:
        return self._response_model

    def __aiter__(self) -> "Stream[T]":
        return self

    async def __anext__(self) -> T:
        if self._done:
            raise StopAsyncIteration

        while True:
            try:
                event = await self._source.__anext__()
            except BaseException:
                self._done = True
                raise

            data = event.data
            if data == STREAM_DONE_MARKER:
                logger.debug(f"Stream from {self._source.url} finished")
                await self.aclose()
                raise StopAsyncIteration
            if not data.strip():
                continue

            error = parse_error_envelope(data)
            if error is not None:
                await self.aclose()
                raise ApiError(error)

            try:
                return deserialize(data, self._response_model)
            except Exception:
                await self.aclose()
                raise

    async def aclose(self) -> None:
        """Stop the stream and close the connection."""
        self._done = True
        await self._source.aclose()

    async def __aenter__(self) -> "Stream[T]":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

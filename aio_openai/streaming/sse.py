"""
Server-Sent Events decoding.

Implements the event stream interpretation rules of the HTML living
standard: ``field: value`` lines, ``:`` comments, multi-line ``data``
joined with newlines and dispatch on a blank line.
"""

import codecs
from dataclasses import dataclass
from typing import Iterator, List, Optional


@dataclass
class SseEvent:
    """
    One dispatched server-sent event.

    Attributes:
        data: Data lines joined with "\\n"
        event: Event type, "message" when the server sent none
        id: Last event id seen on the stream
        retry: Reconnection time in milliseconds, if sent with this event
    """

    data: str
    event: str = "message"
    id: Optional[str] = None
    retry: Optional[int] = None


class SSEDecoder:
    """
    Incremental decoder turning response body chunks into SseEvents.

    Lines may end in CRLF, LF or CR; chunks may split lines and multi-byte
    UTF-8 sequences anywhere.

    Example:
        decoder = SSEDecoder()
        for chunk in chunks:
            for event in decoder.feed(chunk):
                ...
    """

    def __init__(self, last_event_id: Optional[str] = None):
        self._utf8 = codecs.getincrementaldecoder("utf-8")(errors="strict")
        self._buffer = ""
        self._pending_cr = False

        self._event = ""
        self._data: List[str] = []
        self._last_event_id = last_event_id
        self._retry: Optional[int] = None

    @property
    def last_event_id(self) -> Optional[str]:
        return self._last_event_id

    def feed(self, chunk: bytes) -> Iterator[SseEvent]:
        """
        Decode a chunk and yield every event it completes.

        Raises:
            UnicodeDecodeError: If the stream is not valid UTF-8
        """
        text = self._utf8.decode(chunk)
        if self._pending_cr and text.startswith("\n"):
            text = text[1:]
        self._pending_cr = False

        self._buffer += text
        for line in self._split_lines():
            event = self.decode_line(line)
            if event is not None:
                yield event

    def flush(self) -> None:
        """
        Finish the stream.

        An incomplete trailing event is discarded, as the standard requires.

        Raises:
            UnicodeDecodeError: If the stream ends inside a UTF-8 sequence
        """
        self._utf8.decode(b"", final=True)
        self._buffer = ""
        self._event = ""
        self._data = []
        self._retry = None

    def _split_lines(self) -> Iterator[str]:
        while True:
            cr = self._buffer.find("\r")
            lf = self._buffer.find("\n")
            positions = [p for p in (cr, lf) if p != -1]
            if not positions:
                return
            end = min(positions)

            if self._buffer[end] == "\r":
                if end + 1 == len(self._buffer):
                    # CR at the chunk edge may be the first half of CRLF
                    self._pending_cr = True
                    line, self._buffer = self._buffer[:end], ""
                    yield line
                    return
                skip = 2 if self._buffer[end + 1] == "\n" else 1
            else:
                skip = 1

            line, self._buffer = self._buffer[:end], self._buffer[end + skip:]
            yield line

    def decode_line(self, line: str) -> Optional[SseEvent]:
        """Process one line, returning an event when the line dispatches one."""
        if not line:
            return self._dispatch()

        if line.startswith(":"):
            return None

        name, sep, value = line.partition(":")
        if sep and value.startswith(" "):
            value = value[1:]

        if name == "event":
            self._event = value
        elif name == "data":
            self._data.append(value)
        elif name == "id":
            if "\0" not in value:
                self._last_event_id = value
        elif name == "retry":
            if value.isascii() and value.isdigit():
                self._retry = int(value)
        # Unknown fields are ignored

        return None

    def _dispatch(self) -> Optional[SseEvent]:
        data = "\n".join(self._data)

        # Events with an empty data buffer are not dispatched; a pending
        # retry is still reported through an empty event.
        if not data and self._retry is None:
            self._event = ""
            self._data = []
            return None

        event = SseEvent(
            data=data,
            event=self._event or "message",
            id=self._last_event_id,
            retry=self._retry,
        )

        self._event = ""
        self._data = []
        self._retry = None
        return event

#!/usr/bin/env python3
"""
Tests for the Server-Sent Events decoder.
"""

import unittest

from aio_openai.streaming import SSEDecoder, SseEvent


def decode(*chunks: bytes):
    decoder = SSEDecoder()
    events = []
    for chunk in chunks:
        events.extend(decoder.feed(chunk))
    return events


class TestSSEDecoder(unittest.TestCase):
    """Test cases for SSEDecoder."""

    def test_single_event(self):
        """Test a data line followed by a blank line dispatches one event."""
        events = decode(b"data: hello\n\n")

        self.assertEqual(events, [SseEvent(data="hello", event="message", id=None, retry=None)])

    def test_multiline_data_joined_with_newline(self):
        """Test consecutive data lines are joined with a newline."""
        events = decode(b"data: first\ndata: second\n\n")

        self.assertEqual(len(events), 1)
        self.assertEqual(events[0].data, "first\nsecond")

    def test_no_event_without_blank_line(self):
        """Test nothing is dispatched until the blank line arrives."""
        decoder = SSEDecoder()

        self.assertEqual(list(decoder.feed(b"data: pending\n")), [])
        self.assertEqual([e.data for e in decoder.feed(b"\n")], ["pending"])

    def test_line_endings(self):
        """Test LF, CRLF and CR line endings are all accepted."""
        for body in (b"data: x\n\n", b"data: x\r\n\r\n", b"data: x\r\r"):
            with self.subTest(body=body):
                self.assertEqual([e.data for e in decode(body)], ["x"])

    def test_crlf_split_across_chunks(self):
        """Test a CRLF split between two chunks counts as one line ending."""
        events = decode(b"data: x\r", b"\n\r\n")

        self.assertEqual([e.data for e in events], ["x"])

    def test_line_split_across_chunks(self):
        """Test a field split at arbitrary byte boundaries."""
        events = decode(b"da", b"ta: hel", b"lo\n", b"\n")

        self.assertEqual([e.data for e in events], ["hello"])

    def test_multibyte_character_split_across_chunks(self):
        """Test UTF-8 sequences split between chunks decode correctly."""
        encoded = "data: café ☕\n\n".encode("utf-8")
        split = encoded.index("☕".encode("utf-8")) + 1

        events = decode(encoded[:split], encoded[split:])

        self.assertEqual(events[0].data, "café ☕")

    def test_comments_are_ignored(self):
        """Test lines starting with a colon are skipped."""
        events = decode(b": keep-alive\n\n: another\ndata: x\n\n")

        self.assertEqual([e.data for e in events], ["x"])

    def test_single_leading_space_is_stripped(self):
        """Test only one space after the colon is removed."""
        events = decode(b"data:x\n\ndata:  y\n\n")

        self.assertEqual([e.data for e in events], ["x", " y"])

    def test_event_type_and_id(self):
        """Test the event field and the id persisting across events."""
        decoder = SSEDecoder()

        first = list(decoder.feed(b"event: update\nid: 42\ndata: one\n\n"))
        second = list(decoder.feed(b"data: two\n\n"))

        self.assertEqual(first[0].event, "update")
        self.assertEqual(first[0].id, "42")
        self.assertEqual(second[0].event, "message")
        self.assertEqual(second[0].id, "42")
        self.assertEqual(decoder.last_event_id, "42")

    def test_initial_last_event_id(self):
        """Test the decoder starts from a previously seen id."""
        decoder = SSEDecoder(last_event_id="7")

        events = list(decoder.feed(b"data: x\n\n"))

        self.assertEqual(events[0].id, "7")

    def test_id_with_nul_is_ignored(self):
        """Test an id containing NUL does not replace the last event id."""
        decoder = SSEDecoder()

        list(decoder.feed(b"id: 1\ndata: a\n\nid: 2\x003\ndata: b\n\n"))

        self.assertEqual(decoder.last_event_id, "1")

    def test_retry_field(self):
        """Test retry values are reported even without data."""
        events = decode(b"retry: 3000\n\n")

        self.assertEqual(len(events), 1)
        self.assertEqual(events[0].retry, 3000)
        self.assertEqual(events[0].data, "")

    def test_invalid_retry_is_ignored(self):
        """Test non-numeric retry values are ignored."""
        self.assertEqual(decode(b"retry: 3s\n\n"), [])
        self.assertEqual(decode("retry: ３\n\n".encode("utf-8")), [])

    def test_empty_data_is_not_dispatched(self):
        """Test blank lines and events with only a type produce nothing."""
        self.assertEqual(decode(b"\n\nevent: ping\n\n"), [])

    def test_unknown_fields_are_ignored(self):
        """Test fields outside the standard set are skipped."""
        events = decode(b"foo: bar\ndata: x\n\n")

        self.assertEqual([e.data for e in events], ["x"])

    def test_flush_discards_incomplete_event(self):
        """Test an event without its terminating blank line is dropped."""
        decoder = SSEDecoder()
        self.assertEqual(list(decoder.feed(b"data: partial")), [])

        self.assertIsNone(decoder.flush())
        self.assertEqual(list(decoder.feed(b"\n\n")), [])

    def test_invalid_utf8_raises(self):
        """Test invalid UTF-8 input raises UnicodeDecodeError."""
        with self.assertRaises(UnicodeDecodeError):
            decode(b"data: \xff\n\n")

    def test_flush_inside_utf8_sequence_raises(self):
        """Test a stream ending in the middle of a character is an error."""
        decoder = SSEDecoder()
        list(decoder.feed(b"data: \xc3"))

        with self.assertRaises(UnicodeDecodeError):
            decoder.flush()


if __name__ == "__main__":
    unittest.main()

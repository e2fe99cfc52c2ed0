"""
Tests for the XML event stream.

Tests tokenization, namespace handling, chunk boundaries and error wrapping.
"""

import pytest

from src.local_weather.api.xml_stream import (
    END_TAG,
    START_TAG,
    TEXT,
    XmlEvent,
    XmlEventReducer,
    iter_xml_events,
)
from src.local_weather.core.exceptions import ParseError


class TestIterXmlEvents:
    """Test cases for iter_xml_events."""

    def test_start_text_end_sequence(self):
        """Test that a simple document yields start, text and end events."""
        events = list(iter_xml_events([b"<root><city>Paris</city></root>"]))

        assert events == [
            XmlEvent.start("root"),
            XmlEvent.start("city"),
            XmlEvent.characters("Paris"),
            XmlEvent.end("city"),
            XmlEvent.end("root"),
        ]

    def test_attributes_are_reported(self):
        """Test attributes on start tags."""
        events = list(iter_xml_events([b'<root><admin1 type="Region" woeid="7153319"/></root>']))

        start = events[1]
        assert start.kind == START_TAG
        assert start.name == "admin1"
        assert start.attributes == {"type": "Region", "woeid": "7153319"}

    def test_namespaces_are_stripped(self):
        """Test that namespaced elements and attributes use local names."""
        document = (
            b'<rss xmlns:yweather="http://xml.weather.yahoo.com/ns/rss/1.0">'
            b'<yweather:condition yweather:extra="1" temp="61"/></rss>'
        )
        events = list(iter_xml_events([document]))

        condition = events[1]
        assert condition.name == "condition"
        assert condition.attributes == {"extra": "1", "temp": "61"}
        assert events[2] == XmlEvent.end("condition")

    def test_default_namespace_is_stripped(self):
        """Test elements in a default namespace."""
        document = b'<places xmlns="http://where.yahooapis.com/v1/schema.rng"><place/></places>'
        names = [event.name for event in iter_xml_events([document]) if event.kind == START_TAG]

        assert names == ["places", "place"]

    def test_text_split_across_chunks_is_coalesced(self):
        """Test that text arriving in several chunks forms one event."""
        chunks = [b"<root><city>Par", b"is &amp; ", b"Co</city></root>"]
        texts = [event.text for event in iter_xml_events(chunks) if event.kind == TEXT]

        assert texts == ["Paris & Co"]

    def test_events_are_yielded_before_document_ends(self):
        """Test that events from early chunks are available immediately."""
        def chunks():
            yield b"<root><city>Paris</city>"
            raise AssertionError("second chunk must not be read yet")

        events = iter_xml_events(chunks())

        assert next(events) == XmlEvent.start("root")
        assert next(events) == XmlEvent.start("city")

    def test_empty_chunks_are_skipped(self):
        """Test that keep-alive empty chunks are ignored."""
        events = list(iter_xml_events([b"", b"<root/>", b""]))

        assert [event.kind for event in events] == [START_TAG, END_TAG]

    def test_malformed_xml_raises_parse_error(self):
        """Test that expat errors are wrapped."""
        with pytest.raises(ParseError):
            list(iter_xml_events([b"<root><city>Paris</root>"]))

    def test_truncated_document_raises_parse_error(self):
        """Test that an unterminated document is reported at the end."""
        with pytest.raises(ParseError):
            list(iter_xml_events([b"<root><city>Paris"]))

    def test_empty_document_raises_parse_error(self):
        """Test that an empty body is not silently accepted."""
        with pytest.raises(ParseError):
            list(iter_xml_events([]))


class RecordingReducer(XmlEventReducer):
    def __init__(self):
        self.seen = []
        self.finished = False

    def start_tag(self, name, attributes):
        self.seen.append(("start", name, attributes))

    def text(self, text):
        self.seen.append(("text", text))

    def end_tag(self, name):
        self.seen.append(("end", name))

    def finish(self):
        self.finished = True


class TestXmlEventReducer:
    """Test cases for the reducer base class."""

    def test_consume_dispatches_every_event(self):
        """Test dispatch by event kind."""
        reducer = RecordingReducer().consume([
            XmlEvent.start("a", {"k": "v"}),
            XmlEvent.characters("x"),
            XmlEvent.end("a"),
        ])

        assert reducer.seen == [("start", "a", {"k": "v"}), ("text", "x"), ("end", "a")]
        assert reducer.finished

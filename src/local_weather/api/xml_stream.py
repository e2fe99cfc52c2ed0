"""
Forward-only XML token stream.

Provider responses are read as start-tag / text / end-tag events while the
body is still arriving; no document tree is built. Extractors are small
reducers that keep a few "currently inside element X" flags.
"""

import xml.parsers.expat
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Dict, Iterable, Iterator, List, Optional

from ..core.exceptions import ParseError

START_TAG = "start"
TEXT = "text"
END_TAG = "end"

# Expat joins namespace URI and local name with this; a space never occurs in either
_NAMESPACE_SEPARATOR = " "


@dataclass(frozen=True)
class XmlEvent:
    """A single token of the XML stream."""

    kind: str
    name: Optional[str] = None  # Local element name for START_TAG / END_TAG
    attributes: Dict[str, str] = field(default_factory=dict)
    text: Optional[str] = None  # Character data for TEXT

    @classmethod
    def start(cls, name: str, attributes: Optional[Dict[str, str]] = None) -> "XmlEvent":
        return cls(START_TAG, name=name, attributes=dict(attributes or {}))

    @classmethod
    def characters(cls, text: str) -> "XmlEvent":
        return cls(TEXT, text=text)

    @classmethod
    def end(cls, name: str) -> "XmlEvent":
        return cls(END_TAG, name=name)


def _local_name(name: str) -> str:
    return name.rsplit(_NAMESPACE_SEPARATOR, 1)[-1]


def iter_xml_events(chunks: Iterable[bytes]) -> Iterator[XmlEvent]:
    """
    Parse XML incrementally and yield events as soon as they are complete.

    Element and attribute names are reported without their namespace, so
    "yweather:condition" arrives as "condition". Adjacent character data is
    coalesced into one TEXT event.

    Args:
        chunks: Raw body chunks, e.g. from Response.iter_content

    Yields:
        XmlEvent tokens in document order

    Raises:
        ParseError: If the document is malformed or empty
    """
    pending: Deque[XmlEvent] = deque()
    text_parts: List[str] = []

    def flush_text() -> None:
        if text_parts:
            pending.append(XmlEvent.characters("".join(text_parts)))
            text_parts.clear()

    def on_start(name: str, attributes: Dict[str, str]) -> None:
        flush_text()
        pending.append(XmlEvent.start(
            _local_name(name),
            {_local_name(key): value for key, value in attributes.items()}
        ))

    def on_end(name: str) -> None:
        flush_text()
        pending.append(XmlEvent.end(_local_name(name)))

    parser = xml.parsers.expat.ParserCreate(namespace_separator=_NAMESPACE_SEPARATOR)
    parser.StartElementHandler = on_start
    parser.EndElementHandler = on_end
    parser.CharacterDataHandler = text_parts.append

    try:
        for chunk in chunks:
            if not chunk:
                continue
            parser.Parse(chunk, False)
            while pending:
                yield pending.popleft()
        parser.Parse(b"", True)
    except xml.parsers.expat.ExpatError as e:
        raise ParseError(f"Malformed XML response: {e}") from e

    while pending:
        yield pending.popleft()


class XmlEventReducer:
    """
    Base class for single-pass extractors over an XML event stream.

    Subclasses implement start_tag, text and end_tag; consume drives them.
    """

    def feed(self, event: XmlEvent) -> None:
        if event.kind == START_TAG:
            self.start_tag(event.name, event.attributes)
        elif event.kind == TEXT:
            self.text(event.text)
        elif event.kind == END_TAG:
            self.end_tag(event.name)

    def consume(self, events: Iterable[XmlEvent]) -> "XmlEventReducer":
        for event in events:
            self.feed(event)
        self.finish()
        return self

    def start_tag(self, name: str, attributes: Dict[str, str]) -> None:
        pass

    def text(self, text: str) -> None:
        pass

    def end_tag(self, name: str) -> None:
        pass

    def finish(self) -> None:
        """Called once after the last event."""

"""Translation of XML tokens into OPML parse events.

``EventReader`` pulls tokens one at a time and produces exactly one ``Event``
per structural transition. It stops after ``END_DOCUMENT`` or the first
error and cannot be restarted; build a new reader to parse again.
"""

import logging
from typing import IO, Iterable, Iterator, List, Mapping, Optional

from tunein_opml.events.classifier import U8_MAX, U32_MAX, classify_outline, parse_unsigned
from tunein_opml.events.event import Event, EventType
from tunein_opml.shared.config import ReaderConfig
from tunein_opml.shared.errors import ErrorKind, OpmlError
from tunein_opml.shared.logging import get_logger
from tunein_opml.tokenization import Token, TokenType, XMLTokenizer

# Elements whose event is emitted when they close, carrying their text
_CONTENT_ELEMENTS = frozenset(("title", "status"))

_SIMPLE_START_EVENTS = {
    "head": EventType.START_HEAD,
    "body": EventType.START_BODY,
}

_SIMPLE_END_EVENTS = {
    "head": EventType.END_HEAD,
    "body": EventType.END_BODY,
    "opml": EventType.END_DOCUMENT,
    "outline": EventType.END_OUTLINE,
}


class EventReader:
    """Lazy, single-pass stream of parse events."""

    def __init__(
        self,
        tokens: Iterable[Token],
        correlation_id: Optional[str] = None,
    ) -> None:
        """Initialize event reader.

        Args:
            tokens: Token stream, typically an ``XMLTokenizer``
            correlation_id: Optional correlation ID for request tracking
        """
        self._tokens = iter(tokens)
        self._finished = False
        self.events_emitted = 0
        self.logger = get_logger(__name__, correlation_id, "event_reader")

    @classmethod
    def from_source(
        cls, source: IO, config: Optional[ReaderConfig] = None
    ) -> "EventReader":
        """Create a reader over a binary source using lxml tokenization."""
        config = config or ReaderConfig()
        tokenizer = XMLTokenizer(
            source, chunk_size=config.chunk_size, huge_tree=config.huge_tree
        )
        return cls(tokenizer, correlation_id=config.correlation_id)

    @property
    def finished(self) -> bool:
        """True once END_DOCUMENT or an error has been produced."""
        return self._finished

    def __iter__(self) -> Iterator[Event]:
        return self

    def __next__(self) -> Event:
        return self.next_event()

    def next_event(self) -> Event:
        """Produce the next event.

        Raises:
            OpmlError: On malformed XML or content outside the dialect
            StopIteration: If the reader has already finished
        """
        if self._finished:
            raise StopIteration

        try:
            event = self._read_event()
        except OpmlError as e:
            self._finished = True
            self.logger.debug(
                "Event translation failed",
                extra={"error_kind": e.kind.name, "events_emitted": self.events_emitted},
            )
            raise

        if event.type is EventType.END_DOCUMENT:
            self._finished = True
        self.events_emitted += 1
        if self.logger.is_enabled_for(logging.DEBUG):
            self.logger.debug(
                "Event emitted", extra={"event_type": event.type.name, "line": event.line}
            )
        return event

    def _read_event(self) -> Event:
        content: List[str] = []
        for token in self._tokens:
            if token.type is TokenType.START:
                event = self._handle_start(token)
                if event is not None:
                    return event
            elif token.type is TokenType.TEXT:
                content.append(token.text)
            elif token.type is TokenType.END:
                return self._handle_end(token, "".join(content))
            elif token.type is TokenType.END_OF_STREAM:
                break

        raise OpmlError(
            ErrorKind.TOKEN_ERROR, "Unexpected end of document before </opml>"
        )

    def _handle_start(self, token: Token) -> Optional[Event]:
        name = token.name
        if name in _SIMPLE_START_EVENTS:
            return Event(_SIMPLE_START_EVENTS[name], line=token.line)
        if name in _CONTENT_ELEMENTS:
            return None
        try:
            if name == "opml":
                version = _parse_version(token.attributes)
                return Event(EventType.START_DOCUMENT, version, line=token.line)
            if name == "outline":
                outline = classify_outline(token.attributes)
                return Event(EventType.START_OUTLINE, outline, line=token.line)
        except OpmlError as e:
            e.line = token.line
            raise
        raise OpmlError(
            ErrorKind.UNEXPECTED_ELEMENT, f"Unexpected element <{name}>", line=token.line
        )

    def _handle_end(self, token: Token, content: str) -> Event:
        name = token.name
        if name in _SIMPLE_END_EVENTS:
            return Event(_SIMPLE_END_EVENTS[name], line=token.line)
        if name == "title":
            return Event(EventType.TITLE, content, line=token.line)
        if name == "status":
            # A malformed status degrades to None instead of failing the parse
            return Event(EventType.STATUS, parse_unsigned(content, U32_MAX), line=token.line)
        raise OpmlError(
            ErrorKind.UNEXPECTED_ELEMENT, f"Unexpected element </{name}>", line=token.line
        )


def _parse_version(attributes: Mapping[str, str]) -> int:
    if "version" not in attributes:
        raise OpmlError(ErrorKind.MISSING_VERSION_ATTR)
    version = parse_unsigned(attributes["version"], U8_MAX)
    if version is None:
        raise OpmlError(
            ErrorKind.INVALID_VERSION_FORMAT,
            f"Invalid version format: {attributes['version']!r}",
        )
    return version

"""Document assembly from a flat event stream.

The event stream carries nesting only implicitly, as balanced START_OUTLINE /
END_OUTLINE pairs. ``DocumentAssembler`` rebuilds the tree with an explicit
stack of open outlines, so nesting depth is bounded by memory rather than by
the interpreter's recursion limit.
"""

import time
from typing import IO, Iterable, List, Optional

from tunein_opml.events import Event, EventReader, EventType, to_outline
from tunein_opml.model import Document, Group, Outline
from tunein_opml.shared import (
    ErrorKind,
    OpmlError,
    ReaderConfig,
    ReadMetrics,
    get_logger,
)


class DocumentAssembler:
    """Builds a ``Document`` from parse events.

    A fresh document and stack are used for every ``assemble`` call; nothing
    built by a failed call is ever returned.
    """

    def __init__(self, config: Optional[ReaderConfig] = None) -> None:
        """Initialize document assembler.

        Args:
            config: Reader configuration; ``max_depth`` bounds the stack
        """
        self.config = config or ReaderConfig()
        self.logger = get_logger(__name__, self.config.correlation_id, "document_assembler")
        self.metrics = ReadMetrics()

    def assemble(self, events: Iterable[Event]) -> Document:
        """Consume ``events`` until END_DOCUMENT and return the document.

        Raises:
            OpmlError: The first error from the event stream, or an
                unbalanced/invalid nesting detected here
        """
        self.metrics = ReadMetrics()
        start_time = time.perf_counter()
        document = Document()
        stack: List[Outline] = []

        try:
            for event in events:
                self.metrics.events_processed += 1
                if event.type is EventType.END_DOCUMENT:
                    if stack:
                        raise OpmlError(
                            ErrorKind.UNBALANCED_ELEMENTS,
                            f"Document closed with {len(stack)} open outline(s)",
                            line=event.line,
                        )
                    break
                self._apply(event, document, stack)
            else:
                raise OpmlError(
                    ErrorKind.UNBALANCED_ELEMENTS, "Event stream ended before END_DOCUMENT"
                )
        finally:
            self.metrics.processing_time_ms = (time.perf_counter() - start_time) * 1000

        self.logger.debug("Document assembled", extra=self.metrics.to_dict())
        return document

    def _apply(self, event: Event, document: Document, stack: List[Outline]) -> None:
        if event.type is EventType.START_DOCUMENT:
            document.version.major = event.value
        elif event.type is EventType.TITLE:
            document.head.title = event.value
        elif event.type is EventType.STATUS:
            document.head.status = event.value
        elif event.type is EventType.START_OUTLINE:
            max_depth = self.config.max_depth
            if max_depth is not None and len(stack) >= max_depth:
                raise OpmlError(
                    ErrorKind.DEPTH_LIMIT_EXCEEDED,
                    f"Outline nesting exceeds max_depth={max_depth}",
                    line=event.line,
                )
            stack.append(to_outline(event.value))
            self.metrics.outlines_created += 1
            self.metrics.record_depth(len(stack))
        elif event.type is EventType.END_OUTLINE:
            if not stack:
                raise OpmlError(ErrorKind.UNBALANCED_ELEMENTS, line=event.line)
            outline = stack.pop()
            if not stack:
                document.outlines.append(outline)
                return
            parent = stack[-1]
            if not isinstance(parent, Group):
                raise OpmlError(
                    ErrorKind.UNEXPECTED_ELEMENT,
                    f"Outline nested inside a non-group {type(parent).__name__.lower()}",
                    line=event.line,
                )
            parent.add_child(outline)
        # START/END of head and body carry no tree structure


def read(source: IO, config: Optional[ReaderConfig] = None) -> Document:
    """Read a complete document from a binary source.

    Args:
        source: Object with a ``read(size)`` method returning bytes
        config: Optional reader configuration

    Returns:
        The fully assembled ``Document``

    Raises:
        OpmlError: If the source is not a valid document of this dialect
    """
    config = config or ReaderConfig()
    events = EventReader.from_source(source, config)
    return DocumentAssembler(config).assemble(events)

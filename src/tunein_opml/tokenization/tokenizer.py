"""Streaming XML tokenization on top of lxml's pull parser.

This module turns a byte source into a flat stream of start-tag, text and
end-tag tokens. lxml does the actual XML work; the adapter only reads the
source one chunk at a time, normalizes names to their local part and reports
well-formedness problems as ``OpmlError`` with ``ErrorKind.TOKEN_ERROR``.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import IO, Dict, Iterator, List, Optional, Union

from lxml import etree

from tunein_opml.shared.config import DEFAULT_CHUNK_SIZE
from tunein_opml.shared.errors import ErrorKind, OpmlError

logger = logging.getLogger(__name__)


class TokenType(Enum):
    """XML token types produced by the tokenizer."""

    START = auto()          # Opening tag with attributes
    TEXT = auto()           # Character content of a childless element
    END = auto()            # Closing tag (explicit or self-closing)
    END_OF_STREAM = auto()  # Source exhausted and document closed cleanly


@dataclass
class Token:
    """Represents a single XML token."""

    type: TokenType
    name: str = ""
    attributes: Dict[str, str] = field(default_factory=dict)
    text: str = ""
    line: Optional[int] = None


def _local_name(name: Union[str, bytes]) -> str:
    return etree.QName(name).localname


class XMLTokenizer:
    """Lazy token stream over a binary source.

    Iterating the tokenizer reads from the source only when every token from
    the previous chunk has been consumed, so a caller pulling one token at a
    time never forces the whole document into memory.
    """

    def __init__(
        self,
        source: IO,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        huge_tree: bool = False,
    ) -> None:
        """Initialize tokenizer.

        Args:
            source: Object with a ``read(size)`` method returning bytes
            chunk_size: Number of bytes requested per read
            huge_tree: Disable lxml's security limits for huge documents
        """
        if chunk_size <= 0:
            raise ValueError("chunk_size must be > 0")
        self._source = source
        self._chunk_size = chunk_size
        self._huge_tree = huge_tree
        self.bytes_read = 0

    def _make_parser(self) -> etree.XMLPullParser:
        return etree.XMLPullParser(
            events=("start", "end"),
            resolve_entities=False,
            no_network=True,
            remove_comments=True,
            remove_pis=True,
            huge_tree=self._huge_tree,
        )

    def __iter__(self) -> Iterator[Token]:
        parser = self._make_parser()

        while True:
            chunk = self._source.read(self._chunk_size)
            if not chunk:
                break
            if isinstance(chunk, str):
                chunk = chunk.encode("utf-8")
            self.bytes_read += len(chunk)
            try:
                parser.feed(chunk)
            except etree.XMLSyntaxError as e:
                raise self._wrap(e) from e
            yield from self._drain(parser)

        if self.bytes_read == 0:
            raise OpmlError(ErrorKind.TOKEN_ERROR, "no element found: empty source")

        try:
            parser.close()
        except etree.XMLSyntaxError as e:
            raise self._wrap(e) from e
        yield from self._drain(parser)

        logger.debug("Token stream finished", extra={"bytes_read": self.bytes_read})
        yield Token(TokenType.END_OF_STREAM)

    def _drain(self, parser: etree.XMLPullParser) -> Iterator[Token]:
        """Yield tokens for every event lxml has buffered so far."""
        try:
            events = list(parser.read_events())
        except etree.XMLSyntaxError as e:
            raise self._wrap(e) from e

        for action, element in events:
            if action == "start":
                yield Token(
                    TokenType.START,
                    name=_local_name(element.tag),
                    attributes={
                        _local_name(key): value for key, value in element.attrib.items()
                    },
                    line=element.sourceline,
                )
            else:
                yield from self._end_tokens(element)

    def _end_tokens(self, element: etree._Element) -> List[Token]:
        name = _local_name(element.tag)
        tokens = []
        if len(element) == 0 and element.text:
            tokens.append(Token(TokenType.TEXT, name=name, text=element.text,
                                line=element.sourceline))
        tokens.append(Token(TokenType.END, name=name, line=element.sourceline))

        # Everything needed from the element has been copied into tokens
        element.clear(keep_tail=True)
        parent = element.getparent()
        if parent is not None:
            while element.getprevious() is not None:
                del parent[0]
        return tokens

    @staticmethod
    def _wrap(error: etree.XMLSyntaxError) -> OpmlError:
        line = error.lineno if error.lineno else None
        return OpmlError(ErrorKind.TOKEN_ERROR, str(error), line=line)


def tokenize(source: IO, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Iterator[Token]:
    """Convenience wrapper returning a token iterator for ``source``."""
    return iter(XMLTokenizer(source, chunk_size=chunk_size))

"""Tests for the lxml-backed tokenizer."""

import io
from typing import List

import pytest

from tunein_opml.shared import ErrorKind, OpmlError
from tunein_opml.tokenization import Token, TokenType, XMLTokenizer, tokenize


def _tokens(data: bytes, chunk_size: int = 8192) -> List[Token]:
    return list(XMLTokenizer(io.BytesIO(data), chunk_size=chunk_size))


class CountingSource(io.BytesIO):
    """Binary source that records how many reads were made."""

    def __init__(self, data: bytes) -> None:
        super().__init__(data)
        self.reads = 0

    def read(self, size: int = -1) -> bytes:
        self.reads += 1
        return super().read(size)


class TestXMLTokenizer:
    """Test token production from byte sources."""

    def test_minimal_document(self) -> None:
        """Test start, end and end-of-stream tokens for an empty root."""
        tokens = _tokens(b'<opml version="1"></opml>')

        assert [t.type for t in tokens] == [
            TokenType.START,
            TokenType.END,
            TokenType.END_OF_STREAM,
        ]
        assert tokens[0].name == "opml"
        assert tokens[0].attributes == {"version": "1"}
        assert tokens[1].name == "opml"

    def test_text_precedes_end_of_childless_element(self) -> None:
        """Test that character data is reported just before the closing tag."""
        tokens = _tokens(b"<opml><head><title>Browse</title></head></opml>")

        kinds = [(t.type, t.name) for t in tokens]
        assert kinds == [
            (TokenType.START, "opml"),
            (TokenType.START, "head"),
            (TokenType.START, "title"),
            (TokenType.TEXT, "title"),
            (TokenType.END, "title"),
            (TokenType.END, "head"),
            (TokenType.END, "opml"),
            (TokenType.END_OF_STREAM, ""),
        ]
        assert tokens[3].text == "Browse"

    def test_entities_are_part_of_text(self) -> None:
        """Test that text split around entity references arrives whole."""
        tokens = _tokens(b"<title>Rock &amp; Roll</title>")

        text = [t for t in tokens if t.type is TokenType.TEXT]
        assert len(text) == 1
        assert text[0].text == "Rock & Roll"

    def test_self_closing_element_yields_start_and_end(self) -> None:
        """Test that a self-closing element produces a balanced pair."""
        tokens = _tokens(b'<body><outline type="text" text="hi"/></body>')

        assert [(t.type, t.name) for t in tokens[1:3]] == [
            (TokenType.START, "outline"),
            (TokenType.END, "outline"),
        ]
        assert tokens[1].attributes == {"type": "text", "text": "hi"}

    def test_namespaces_are_stripped(self) -> None:
        """Test that element and attribute names are reported as local names."""
        tokens = _tokens(
            b'<o:opml xmlns:o="urn:x" xmlns:e="urn:e" e:version="1"></o:opml>'
        )

        assert tokens[0].name == "opml"
        assert tokens[0].attributes == {"version": "1"}

    def test_line_numbers_are_reported(self) -> None:
        """Test that tokens carry the source line of their element."""
        tokens = _tokens(b'<opml version="1">\n<head/>\n</opml>')

        head = next(t for t in tokens if t.name == "head")
        assert head.line == 2

    def test_small_chunks_produce_same_tokens(self) -> None:
        """Test that chunking the source does not change the token stream."""
        data = (
            b'<opml version="1"><head><title>'
            + "Kraków".encode("utf-8")
            + b"</title></head></opml>"
        )

        whole = [(t.type, t.name, t.text) for t in _tokens(data)]
        chunked = [(t.type, t.name, t.text) for t in _tokens(data, chunk_size=3)]

        assert whole == chunked
        assert "Kraków" in [text for _, _, text in whole]

    def test_reads_lazily(self) -> None:
        """Test that the source is not read ahead of the consumer."""
        data = (
            b'<opml version="1"><body>'
            + b'<outline type="text" text="x"/>' * 500
            + b"</body></opml>"
        )
        source = CountingSource(data)
        tokens = iter(XMLTokenizer(source, chunk_size=64))

        first = next(tokens)

        assert first.name == "opml"
        assert source.reads <= 10
        assert source.reads * 64 < len(data)

    def test_bytes_read_is_counted(self) -> None:
        """Test that the tokenizer tracks consumed input."""
        data = b'<opml version="1"></opml>'
        tokenizer = XMLTokenizer(io.BytesIO(data))
        list(tokenizer)

        assert tokenizer.bytes_read == len(data)

    def test_text_mode_source_is_accepted(self) -> None:
        """Test that sources returning str are encoded as UTF-8."""
        tokens = list(tokenize(io.StringIO('<opml version="1"></opml>')))

        assert tokens[0].name == "opml"

    def test_invalid_chunk_size_raises_error(self) -> None:
        """Test that a zero chunk size is rejected."""
        with pytest.raises(ValueError, match="chunk_size must be > 0"):
            XMLTokenizer(io.BytesIO(b""), chunk_size=0)


class TestTokenizerErrors:
    """Test well-formedness errors surfaced as TOKEN_ERROR."""

    def test_empty_source(self) -> None:
        """Test that an empty source is an error."""
        with pytest.raises(OpmlError) as exc:
            _tokens(b"")

        assert exc.value.kind is ErrorKind.TOKEN_ERROR

    def test_unclosed_elements(self) -> None:
        """Test that unclosed elements at end of stream are an error."""
        with pytest.raises(OpmlError) as exc:
            _tokens(b'<?xml version="1.0" encoding="UTF-8"?><opml version="1"><head>')

        assert exc.value.kind is ErrorKind.TOKEN_ERROR
        assert isinstance(exc.value.__cause__, Exception)

    def test_mismatched_tags(self) -> None:
        """Test that mismatched closing tags are an error."""
        with pytest.raises(OpmlError) as exc:
            _tokens(b"<opml><head></body></opml>")

        assert exc.value.kind is ErrorKind.TOKEN_ERROR

    def test_tokens_before_error_are_delivered(self) -> None:
        """Test that the stream yields everything valid before failing."""
        tokens = iter(XMLTokenizer(io.BytesIO(b'<opml version="1"><head>')))

        assert next(tokens).name == "opml"
        assert next(tokens).name == "head"
        with pytest.raises(OpmlError):
            next(tokens)

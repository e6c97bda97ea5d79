"""Public reading API.

This module provides the entry points most callers need: ``read`` detects
the input type (bytes, text, path or binary file-like object) and routes it
to the core reader; ``read_bytes``, ``read_string`` and ``read_file`` are
dedicated variants for callers that already know what they hold.
"""

import io
import time
from pathlib import Path
from typing import IO, Optional, Union

from tunein_opml.model import Document
from tunein_opml.shared import OpmlError, ReaderConfig, get_logger
from tunein_opml.tree import assembler

# Type definitions for input data
InputType = Union[str, bytes, bytearray, Path, IO]

MS_PER_SECOND = 1000


def _with_correlation_id(
    config: Optional[ReaderConfig], correlation_id: Optional[str]
) -> ReaderConfig:
    config = config or ReaderConfig()
    if correlation_id is not None:
        config = config.override(correlation_id=correlation_id)
    return config


def _read_stream(source: IO, config: ReaderConfig, operation: str) -> Document:
    logger = get_logger(__name__, config.correlation_id, operation)
    start_time = time.perf_counter()
    try:
        document = assembler.read(source, config)
    except OpmlError as e:
        logger.info(
            "Document read failed",
            extra={"error_kind": e.kind.name, "error": str(e)},
        )
        raise

    logger.info(
        "Document read",
        extra={
            "title": document.head.title,
            "outline_count": len(document.outlines),
            "processing_time_ms": (time.perf_counter() - start_time) * MS_PER_SECOND,
        },
    )
    return document


def read(
    input_data: InputType,
    config: Optional[ReaderConfig] = None,
    correlation_id: Optional[str] = None,
) -> Document:
    """Read a document from bytes, text, a path or a binary file-like object.

    Examples:
        >>> document = read(b'<opml version="1"></opml>')
        >>> document.version.major
        1

    Raises:
        OpmlError: If the input is not a valid document
        TypeError: If the input type is not supported
    """
    if isinstance(input_data, (bytes, bytearray)):
        return read_bytes(bytes(input_data), config, correlation_id)
    if isinstance(input_data, str):
        return read_string(input_data, config, correlation_id)
    if isinstance(input_data, Path):
        return read_file(input_data, config, correlation_id)
    if hasattr(input_data, "read"):
        config = _with_correlation_id(config, correlation_id)
        return _read_stream(input_data, config, "read")
    raise TypeError(f"Unsupported input type: {type(input_data).__name__}")


def read_bytes(
    data: bytes,
    config: Optional[ReaderConfig] = None,
    correlation_id: Optional[str] = None,
) -> Document:
    """Read a document held in memory as bytes."""
    config = _with_correlation_id(config, correlation_id)
    return _read_stream(io.BytesIO(data), config, "read_bytes")


def read_string(
    xml_string: str,
    config: Optional[ReaderConfig] = None,
    correlation_id: Optional[str] = None,
) -> Document:
    """Read a document held as text.

    The text is encoded as UTF-8 before tokenization, so an XML declaration
    naming a different encoding will not match; pass bytes in that case.
    """
    config = _with_correlation_id(config, correlation_id)
    return _read_stream(io.BytesIO(xml_string.encode("utf-8")), config, "read_string")


def read_file(
    file_path: Union[str, Path],
    config: Optional[ReaderConfig] = None,
    correlation_id: Optional[str] = None,
) -> Document:
    """Read a document from a file on disk.

    Raises:
        OpmlError: If the file content is not a valid document
        OSError: If the file cannot be opened
    """
    config = _with_correlation_id(config, correlation_id)
    with Path(file_path).open("rb") as f:
        return _read_stream(f, config, "read_file")

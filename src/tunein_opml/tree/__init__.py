"""Tree assembly for OPML reading.

Key Components:
    DocumentAssembler: Rebuilds the outline tree from a flat event stream
    read: Reads a complete document from a binary source
"""

from .assembler import DocumentAssembler, read

__all__ = [
    "DocumentAssembler",
    "read",
]

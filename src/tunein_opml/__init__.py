"""Station directory OPML reader.

Parses the OPML dialect served by a radio station directory into a typed
tree of groups, links, audio stations and text notices.

Progressive API Disclosure:
- Level 1: Simple functions - read(), read_bytes(), read_string(), read_file()
- Level 2: Configured reading - ReaderConfig, DocumentAssembler
- Level 3: Event stream - EventReader
"""

__version__ = "0.1.0"
__author__ = "tunein-opml developers"

from .api import read, read_bytes, read_file, read_string
from .events import Event, EventReader, EventType
from .model import Audio, Document, Format, Group, Head, Link, Outline, Text, Version
from .shared import ErrorKind, OpmlError, ReaderConfig
from .tree import DocumentAssembler

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple reading functions
    "read",
    "read_bytes",
    "read_file",
    "read_string",

    # Level 2: Configured reading
    "DocumentAssembler",
    "ReaderConfig",

    # Level 3: Event stream
    "Event",
    "EventReader",
    "EventType",

    # Document model
    "Audio",
    "Document",
    "Format",
    "Group",
    "Head",
    "Link",
    "Outline",
    "Text",
    "Version",

    # Errors
    "ErrorKind",
    "OpmlError",
]

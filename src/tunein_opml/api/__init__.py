"""Public API for OPML reading.

Provides the reading entry points for in-memory, file and stream input, and
helpers for the directory service's browse and search endpoints.
"""

from .reader import read, read_bytes, read_file, read_string
from .request import BROWSE_URI, fetch, fetch_document, search_uri

__all__ = [
    "BROWSE_URI",
    "fetch",
    "fetch_document",
    "read",
    "read_bytes",
    "read_file",
    "read_string",
    "search_uri",
]

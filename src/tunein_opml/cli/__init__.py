"""Command-line interface module for tunein-opml.

This module provides the ``tunein-opml`` tool for browsing and searching the
station directory and for reading local OPML files.
"""

from .main import main

__all__ = ["main"]

"""Shared utilities for OPML reading.

This module provides the error taxonomy, configuration objects, metrics and
logging helpers used across the tokenizer, event and tree layers.
"""

from .config import (
    ConfigError,
    ConfigValidationError,
    ReaderConfig,
)
from .errors import (
    ErrorKind,
    OpmlError,
)
from .logging import (
    CorrelationLogger,
    get_logger,
)
from .result import ReadMetrics

__all__ = [
    "ConfigError",
    "ConfigValidationError",
    "CorrelationLogger",
    "ErrorKind",
    "OpmlError",
    "ReadMetrics",
    "ReaderConfig",
    "get_logger",
]

"""Configuration classes for OPML reading.

``ReaderConfig`` controls how a document source is consumed and how deep the
assembled tree may grow. It is immutable so one instance can be shared by
parses running in different threads.
"""

import json
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict, List, Optional

DEFAULT_CHUNK_SIZE = 8192
DEFAULT_FETCH_TIMEOUT_SECONDS = 5.0


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


@dataclass(frozen=True)
class ReaderConfig:
    """Settings for reading one OPML document.

    Attributes:
        chunk_size: Bytes read from the source per tokenizer feed
        max_depth: Maximum outline nesting depth, ``None`` for unlimited
        huge_tree: Lift lxml's safety limits on very large text nodes
        fetch_timeout_seconds: Timeout passed to HTTP requests
        correlation_id: Optional correlation ID attached to log records
    """

    chunk_size: int = DEFAULT_CHUNK_SIZE
    max_depth: Optional[int] = None
    huge_tree: bool = False
    fetch_timeout_seconds: float = DEFAULT_FETCH_TIMEOUT_SECONDS
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate reader configuration."""
        if self.chunk_size <= 0:
            raise ConfigValidationError(
                "chunk_size must be > 0",
                field_name="chunk_size",
                suggestions=[f"Use the default of {DEFAULT_CHUNK_SIZE}"],
            )
        if self.max_depth is not None and self.max_depth <= 0:
            raise ConfigValidationError(
                "max_depth must be > 0 or None",
                field_name="max_depth",
                suggestions=["Use None to allow unlimited nesting"],
            )
        if self.fetch_timeout_seconds <= 0:
            raise ConfigValidationError(
                "fetch_timeout_seconds must be > 0",
                field_name="fetch_timeout_seconds",
            )

    def override(self, **kwargs: Any) -> "ReaderConfig":
        """Create a copy with the given fields replaced.

        Raises:
            ConfigError: If an unknown field name is given
        """
        known = {f.name for f in fields(self)}
        unknown = sorted(set(kwargs) - known)
        if unknown:
            raise ConfigError(f"Unknown configuration fields: {', '.join(unknown)}")
        return replace(self, **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to a plain dictionary."""
        return asdict(self)

    def to_json(self, indent: int = 2) -> str:
        """Serialize configuration to JSON."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ReaderConfig":
        """Build configuration from a dictionary, ignoring unknown keys."""
        if not isinstance(data, dict):
            raise ConfigError("Configuration data must be a JSON object")
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in known})

    @classmethod
    def from_json(cls, json_str: str) -> "ReaderConfig":
        """Build configuration from a JSON string."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON configuration: {e}") from e
        return cls.from_dict(data)

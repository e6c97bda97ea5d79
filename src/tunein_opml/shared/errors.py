"""Error taxonomy shared by the tokenizer, event translator and assembler.

Every failure while reading a document is reported as a single exception
type, ``OpmlError``, tagged with a flat ``ErrorKind``. Errors are fatal to the
current parse; callers decide whether to retry with a fresh source.
"""

from enum import Enum, auto
from typing import Optional


class ErrorKind(Enum):
    """Kinds of parse failure."""

    TOKEN_ERROR = auto()                 # Malformed XML reported by the tokenizer
    UNEXPECTED_ELEMENT = auto()          # Element outside the dialect's vocabulary
    MISSING_VERSION_ATTR = auto()        # <opml> without a version attribute
    INVALID_VERSION_FORMAT = auto()      # version is not a small unsigned integer
    INVALID_OUTLINE_TYPE = auto()        # outline type other than link/audio/text
    INVALID_BITRATE_FORMAT = auto()      # audio bitrate is not a u16
    INVALID_RELIABILITY_FORMAT = auto()  # audio reliability is not a u16
    UNBALANCED_ELEMENTS = auto()         # start/end events do not pair up
    DEPTH_LIMIT_EXCEEDED = auto()        # nesting deeper than the configured limit


_DEFAULT_MESSAGES = {
    ErrorKind.TOKEN_ERROR: "Malformed XML",
    ErrorKind.UNEXPECTED_ELEMENT: "Unexpected element",
    ErrorKind.MISSING_VERSION_ATTR: "Missing version attribute",
    ErrorKind.INVALID_VERSION_FORMAT: "Invalid version format",
    ErrorKind.INVALID_OUTLINE_TYPE: "Invalid outline type",
    ErrorKind.INVALID_BITRATE_FORMAT: "Invalid bitrate format",
    ErrorKind.INVALID_RELIABILITY_FORMAT: "Invalid reliability format",
    ErrorKind.UNBALANCED_ELEMENTS: "End/start elements don't match",
    ErrorKind.DEPTH_LIMIT_EXCEEDED: "Outline nesting too deep",
}


class OpmlError(Exception):
    """Raised when a document cannot be read.

    Attributes:
        kind: Classification of the failure
        message: Human-readable description
        line: Source line the failure relates to, when known
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: Optional[str] = None,
        line: Optional[int] = None,
    ) -> None:
        self.kind = kind
        self.message = message or _DEFAULT_MESSAGES[kind]
        self.line = line
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.line is not None:
            return f"{self.message} (line {self.line})"
        return self.message

    def __repr__(self) -> str:
        return f"OpmlError({self.kind.name}, {self.message!r})"

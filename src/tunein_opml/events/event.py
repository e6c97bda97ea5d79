"""Domain-level parse events.

The event translator reduces the XML token stream to one ``Event`` per
structural transition of the document. Outline events carry the classified
outline without any children; children arrive as later events.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Optional, Union

from tunein_opml.model import Audio, Group, Link, Outline, Text


class EventType(Enum):
    """Structural transitions of an OPML document."""

    START_DOCUMENT = auto()  # value: major version (int)
    END_DOCUMENT = auto()
    START_HEAD = auto()
    END_HEAD = auto()
    START_BODY = auto()
    END_BODY = auto()
    TITLE = auto()           # value: title text (str)
    STATUS = auto()          # value: status code or None
    START_OUTLINE = auto()   # value: OutlineEvent
    END_OUTLINE = auto()


@dataclass(frozen=True)
class GroupStart:
    """Opening of a group outline, before any of its children are read."""

    text: str = ""
    key: str = ""


OutlineEvent = Union[GroupStart, Link, Audio, Text]


@dataclass(frozen=True)
class Event:
    """A single parse event.

    Attributes:
        type: Which transition this is
        value: Payload for START_DOCUMENT, TITLE, STATUS and START_OUTLINE
        line: Source line of the element that produced the event, if known
    """

    type: EventType
    value: Any = None
    line: Optional[int] = None


def to_outline(outline_event: OutlineEvent) -> Outline:
    """Turn an outline event into a tree node.

    Groups get a fresh, empty children list; other shapes are already
    complete and are returned as they are.
    """
    if isinstance(outline_event, GroupStart):
        return Group(text=outline_event.text, key=outline_event.key)
    if isinstance(outline_event, (Link, Audio, Text)):
        return outline_event
    raise TypeError(f"Not an outline event: {outline_event!r}")

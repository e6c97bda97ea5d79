"""Event layer for OPML reading.

Key Components:
    EventReader: Translates XML tokens into a lazy stream of parse events
    Event / EventType: Structural transitions of a document
    classify_outline: Maps outline attributes to one outline shape
"""

from .classifier import classify_outline, parse_unsigned
from .event import Event, EventType, GroupStart, OutlineEvent, to_outline
from .translator import EventReader

__all__ = [
    "Event",
    "EventReader",
    "EventType",
    "GroupStart",
    "OutlineEvent",
    "classify_outline",
    "parse_unsigned",
    "to_outline",
]

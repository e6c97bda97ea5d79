"""Document model for the station directory OPML dialect.

An ``Outline`` is one of four shapes: ``Group`` (a category that nests other
outlines), ``Link`` (navigation to another directory page), ``Audio`` (a
playable station) and ``Text`` (a plain notice). Only ``Group`` owns
children.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union


class Format(Enum):
    """Stream formats advertised by audio outlines."""

    UNKNOWN = "unknown"
    MP3 = "mp3"


@dataclass
class Version:
    """Document format version. Only ``major`` is read from the source."""

    major: int = 0
    minor: int = 0


@dataclass
class Head:
    """Document head: title and service status code."""

    title: str = ""
    status: Optional[int] = None


@dataclass
class Link:
    """Navigational outline pointing at another directory page."""

    text: str = ""
    url: str = ""
    key: str = ""
    guide_id: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "link",
            "text": self.text,
            "url": self.url,
            "key": self.key,
            "guide_id": self.guide_id,
        }


@dataclass
class Audio:
    """Playable station outline."""

    text: str = ""
    subtext: str = ""
    url: str = ""
    bitrate: int = 0
    reliability: int = 0
    format: Format = Format.UNKNOWN
    item: str = ""
    image: str = ""
    guide_id: str = ""
    genre_id: str = ""
    now_playing_id: str = ""
    preset_id: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "audio",
            "text": self.text,
            "subtext": self.subtext,
            "url": self.url,
            "bitrate": self.bitrate,
            "reliability": self.reliability,
            "format": self.format.value,
            "item": self.item,
            "image": self.image,
            "guide_id": self.guide_id,
            "genre_id": self.genre_id,
            "now_playing_id": self.now_playing_id,
            "preset_id": self.preset_id,
        }


@dataclass
class Text:
    """Plain text notice."""

    text: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "text", "text": self.text}


@dataclass
class Group:
    """Category outline holding nested outlines in source order."""

    text: str = ""
    key: str = ""
    children: List["Outline"] = field(default_factory=list)

    def add_child(self, child: "Outline") -> None:
        """Append a child outline."""
        self.children.append(child)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the group and all descendants to dictionaries.

        Uses an explicit stack so arbitrarily deep groups do not hit the
        interpreter's recursion limit.
        """
        root = {"type": "group", "text": self.text, "key": self.key, "children": []}
        pending: List[Tuple[Group, List[Dict[str, Any]]]] = [(self, root["children"])]
        while pending:
            group, out = pending.pop()
            for child in group.children:
                if isinstance(child, Group):
                    converted = {
                        "type": "group",
                        "text": child.text,
                        "key": child.key,
                        "children": [],
                    }
                    pending.append((child, converted["children"]))
                else:
                    converted = child.to_dict()
                out.append(converted)
        return root


Outline = Union[Group, Link, Audio, Text]


@dataclass
class Document:
    """Root container produced by one parse."""

    version: Version = field(default_factory=Version)
    head: Head = field(default_factory=Head)
    outlines: List[Outline] = field(default_factory=list)

    def walk(self) -> Iterator[Tuple[int, Outline]]:
        """Yield ``(depth, outline)`` pairs in document order.

        Top-level outlines have depth 0.
        """
        stack: List[Tuple[int, Outline]] = [(0, o) for o in reversed(self.outlines)]
        while stack:
            depth, outline = stack.pop()
            yield depth, outline
            if isinstance(outline, Group):
                stack.extend((depth + 1, child) for child in reversed(outline.children))

    @property
    def outline_count(self) -> int:
        """Number of outlines at every depth."""
        return sum(1 for _ in self.walk())

    def to_dict(self) -> Dict[str, Any]:
        """Convert document to a JSON-ready dictionary."""
        outlines = []
        for outline in self.outlines:
            outlines.append(outline.to_dict())
        return {
            "version": {"major": self.version.major, "minor": self.version.minor},
            "head": {"title": self.head.title, "status": self.head.status},
            "outlines": outlines,
        }

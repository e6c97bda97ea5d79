"""Outline classification.

Maps the attributes of an ``<outline>`` element to exactly one outline shape
according to its ``type`` attribute. Attributes the dialect does not define
are ignored.
"""

from typing import Mapping, Optional

from tunein_opml.events.event import GroupStart, OutlineEvent
from tunein_opml.model import Audio, Format, Link, Text
from tunein_opml.shared.errors import ErrorKind, OpmlError

U8_MAX = 0xFF
U16_MAX = 0xFFFF
U32_MAX = 0xFFFFFFFF


def parse_unsigned(value: str, maximum: int) -> Optional[int]:
    """Parse an unsigned decimal integer no larger than ``maximum``.

    Accepts an optional leading ``+`` followed by ASCII digits only; no
    whitespace, sign, or underscores. Returns ``None`` when ``value`` is not
    such a number or is out of range.
    """
    digits = value[1:] if value.startswith("+") else value
    if not digits or not all("0" <= c <= "9" for c in digits):
        return None
    number = int(digits)
    if number > maximum:
        return None
    return number


def _parse_group(attributes: Mapping[str, str]) -> GroupStart:
    return GroupStart(
        text=attributes.get("text", ""),
        key=attributes.get("key", ""),
    )


def _parse_link(attributes: Mapping[str, str]) -> Link:
    return Link(
        text=attributes.get("text", ""),
        url=attributes.get("URL", ""),
        key=attributes.get("key", ""),
        guide_id=attributes.get("guide_id", ""),
    )


def _parse_audio(attributes: Mapping[str, str]) -> Audio:
    bitrate = 0
    if "bitrate" in attributes:
        bitrate = parse_unsigned(attributes["bitrate"], U16_MAX)
        if bitrate is None:
            raise OpmlError(
                ErrorKind.INVALID_BITRATE_FORMAT,
                f"Invalid bitrate format: {attributes['bitrate']!r}",
            )

    reliability = 0
    if "reliability" in attributes:
        reliability = parse_unsigned(attributes["reliability"], U16_MAX)
        if reliability is None:
            raise OpmlError(
                ErrorKind.INVALID_RELIABILITY_FORMAT,
                f"Invalid reliability format: {attributes['reliability']!r}",
            )

    return Audio(
        text=attributes.get("text", ""),
        subtext=attributes.get("subtext", ""),
        url=attributes.get("URL", ""),
        bitrate=bitrate,
        reliability=reliability,
        format=Format.MP3 if attributes.get("formats") == "mp3" else Format.UNKNOWN,
        item=attributes.get("item", ""),
        image=attributes.get("image", ""),
        guide_id=attributes.get("guide_id", ""),
        genre_id=attributes.get("genre_id", ""),
        now_playing_id=attributes.get("now_playing_id", ""),
        preset_id=attributes.get("preset_id", ""),
    )


def _parse_text(attributes: Mapping[str, str]) -> Text:
    return Text(text=attributes.get("text", ""))


_PARSERS = {
    "link": _parse_link,
    "audio": _parse_audio,
    "text": _parse_text,
}


def classify_outline(attributes: Mapping[str, str]) -> OutlineEvent:
    """Classify an outline element by its attributes.

    Args:
        attributes: Attribute names (local, case-sensitive) mapped to values

    Returns:
        ``GroupStart`` when there is no ``type`` attribute, otherwise the
        ``Link``, ``Audio`` or ``Text`` described by the attributes

    Raises:
        OpmlError: INVALID_OUTLINE_TYPE for an unknown ``type``, or a numeric
            format error for a malformed audio bitrate/reliability
    """
    outline_type = attributes.get("type")
    if outline_type is None:
        return _parse_group(attributes)

    parser = _PARSERS.get(outline_type)
    if parser is None:
        raise OpmlError(
            ErrorKind.INVALID_OUTLINE_TYPE,
            f"Invalid outline type: {outline_type!r}",
        )
    return parser(attributes)

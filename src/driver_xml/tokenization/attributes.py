"""Name, attribute and processing-instruction extraction from tag chunks.

These helpers work on the bytes of a single chunk with their own index and
never touch the document cursor.
"""

from typing import Iterator, Optional, Tuple

from driver_xml.character.classifier import (
    CLOSE_TAG_OPEN,
    GT,
    LT,
    PI_CLOSE,
    PI_OPEN,
    SLASH,
    is_name_char,
    is_name_start_char,
    is_tag_terminator,
    is_whitespace,
)
from driver_xml.shared.errors import InvalidArgument, MalformedMarkup

EQUALS = ord("=")
QUOTES = (ord('"'), ord("'"))


def _read_name(data: bytes, pos: int, what: str) -> int:
    """Return the offset just past the name starting at ``pos``."""
    if pos >= len(data) or not is_name_start_char(data[pos]):
        found = data[pos:pos + 1] or b"end of tag"
        raise MalformedMarkup(f"Invalid first character in {what}: {found!r}", position=pos)
    end = pos + 1
    while end < len(data) and is_name_char(data[end]):
        end += 1
    return end


def _skip_whitespace(data: bytes, pos: int) -> int:
    while pos < len(data) and is_whitespace(data[pos]):
        pos += 1
    return pos


def get_tag_name(chunk: bytes) -> Tuple[str, int]:
    """Extract the element name from a tag chunk.

    Works for open, empty and close tags alike.

    Args:
        chunk: Raw tag bytes starting with '<'

    Returns:
        Tuple of the name and the offset just past it

    Raises:
        MalformedMarkup: The name is missing or contains an invalid character
    """
    if not chunk or chunk[0] != LT:
        raise MalformedMarkup("Tag does not start with '<'", position=0)
    start = 2 if chunk[1:2] == bytes((SLASH,)) else 1
    end = _read_name(chunk, start, "tag name")
    if end < len(chunk) and not (is_whitespace(chunk[end]) or is_tag_terminator(chunk, end)):
        raise MalformedMarkup(
            f"Invalid character {chunk[end:end + 1]!r} in tag name", position=end
        )
    return chunk[start:end].decode("ascii"), end


def get_close_tag_name(chunk: bytes) -> str:
    """Extract the element name from a close tag.

    Only whitespace may follow the name; close tags carry no attributes.

    Raises:
        MalformedMarkup: The chunk is not a close tag or has content after the name
    """
    if not chunk.startswith(CLOSE_TAG_OPEN):
        raise MalformedMarkup("Close tag does not start with '</'", position=0)
    name, end = get_tag_name(chunk)
    pos = _skip_whitespace(chunk, end)
    if pos != len(chunk) - 1 or chunk[pos] != GT:
        raise MalformedMarkup(f"Unexpected content in close tag </{name}>", position=pos)
    return name


class AttributeScanner:
    """Iterate over the ``name="value"`` pairs of a tag chunk.

    Iteration stops at the tag terminator. Exhaustion means there are no more
    attributes; anything that does not parse raises ``MalformedMarkup``.
    Values are returned as raw bytes, with ``b""`` for an empty quoted value.

    Example:
        >>> list(AttributeScanner(b'<a x="1" y="">', 2))
        [('x', b'1'), ('y', b'')]
    """

    def __init__(self, chunk: bytes, start: int) -> None:
        if not 0 <= start <= len(chunk):
            raise InvalidArgument(f"Scan start {start} outside chunk of {len(chunk)} bytes")
        self.chunk = chunk
        self.position = start

    def __iter__(self) -> Iterator[Tuple[str, bytes]]:
        return self

    def __next__(self) -> Tuple[str, bytes]:
        data = self.chunk
        pos = _skip_whitespace(data, self.position)
        if pos >= len(data) or is_tag_terminator(data, pos):
            self.position = pos
            raise StopIteration

        name_end = _read_name(data, pos, "attribute name")
        name = data[pos:name_end].decode("ascii")

        if name_end < len(data) and not (
            data[name_end] == EQUALS
            or is_whitespace(data[name_end])
            or is_tag_terminator(data, name_end)
        ):
            raise MalformedMarkup(
                f"Invalid character {data[name_end:name_end + 1]!r} in attribute name {name!r}",
                position=name_end,
            )

        eq = _skip_whitespace(data, name_end)
        if eq >= len(data) or data[eq] != EQUALS:
            raise MalformedMarkup(f"Attribute {name!r} is missing '='", position=eq)

        open_quote = _skip_whitespace(data, eq + 1)
        if open_quote >= len(data) or data[open_quote] not in QUOTES:
            raise MalformedMarkup(
                f"Attribute {name!r} value is not quoted", position=open_quote
            )

        # The other quote character is ordinary content
        close_quote = data.find(data[open_quote:open_quote + 1], open_quote + 1)
        if close_quote == -1:
            raise MalformedMarkup(
                f"Attribute {name!r} value has no closing quote", position=open_quote
            )

        self.position = close_quote + 1
        return name, data[open_quote + 1:close_quote]


def get_pi_data(chunk: bytes) -> Tuple[str, Optional[bytes]]:
    """Split a processing instruction into target and data.

    Returns:
        Tuple of the target name and the data, or None when there is no data

    Raises:
        MalformedMarkup: The chunk is not a complete PI or the target is invalid
    """
    if len(chunk) < len(PI_OPEN) + len(PI_CLOSE) or not (
        chunk.startswith(PI_OPEN) and chunk.endswith(PI_CLOSE)
    ):
        raise MalformedMarkup("Processing instruction must be enclosed in '<?' and '?>'", position=0)

    body_end = len(chunk) - len(PI_CLOSE)
    start = len(PI_OPEN)
    end = _read_name(chunk, start, "processing instruction target")
    if end < body_end and not is_whitespace(chunk[end]):
        raise MalformedMarkup(
            f"Invalid character {chunk[end:end + 1]!r} in processing instruction target",
            position=end,
        )

    target = chunk[start:end].decode("ascii")
    data = chunk[_skip_whitespace(chunk, end):body_end]
    return target, data or None

"""ASCII character classification for the driver XML tokenizer.

Single-byte predicates take the integer value of a byte, as produced by
indexing a ``bytes`` object. Shape detectors take a buffer and an offset and
check that enough bytes remain before looking at any of them, so they never
read past the end of the buffer. None of them allocate or move a cursor.

Reference: https://www.w3.org/TR/REC-xml/ (ASCII subset only)
"""

from typing import Tuple

# S ::= (#x20 | #x9 | #xD | #xA)+
WHITESPACE_BYTES = frozenset(b" \t\r\n")
NAME_START_BYTES = frozenset(
    b"ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz_:"
)
NAME_BYTES = NAME_START_BYTES | frozenset(b"0123456789-.")

PRINTABLE_MIN = 0x20
PRINTABLE_MAX = 0x7E
UNPRINTABLE_REPLACEMENT = ord(".")

LT = ord("<")
GT = ord(">")
SLASH = ord("/")

COMMENT_OPEN = b"<!--"
COMMENT_CLOSE = b"-->"
PI_OPEN = b"<?"
PI_CLOSE = b"?>"
DECLARATION_OPEN = b"<!"
BOXED_DECLARATION_OPEN = b"<!["
BOXED_DECLARATION_CLOSE = b"]]>"
CLOSE_TAG_OPEN = b"</"
EMPTY_TAG_CLOSE = b"/>"

# "<a>" is the shortest open tag, "</a" the shortest close tag prefix
MIN_TAG_PREFIX = 2
MIN_CLOSE_TAG_PREFIX = 3
# "<a/>" is the shortest empty element
MIN_EMPTY_TAG_LENGTH = 4

# Every opener a well-formed chunk can start with; used to tell a document
# that was cut short from a stray '<'
MARKUP_OPENERS: Tuple[bytes, ...] = (COMMENT_OPEN, PI_OPEN, DECLARATION_OPEN, CLOSE_TAG_OPEN)


def is_whitespace(byte: int) -> bool:
    """Space, tab, carriage return or line feed."""
    return byte in WHITESPACE_BYTES


def is_name_start_char(byte: int) -> bool:
    """ASCII letters, underscore and colon."""
    return byte in NAME_START_BYTES


def is_name_char(byte: int) -> bool:
    """Name start characters plus digits, hyphen and period."""
    return byte in NAME_BYTES


def is_valid_name(name: str) -> bool:
    """Check a tag, attribute or PI target name against the ASCII name rules."""
    if not isinstance(name, str) or not name or not name.isascii():
        return False
    raw = name.encode("ascii")
    return is_name_start_char(raw[0]) and all(is_name_char(b) for b in raw[1:])


def is_xml_char(byte: int) -> bool:
    """Tab, line feed, carriage return and printable ASCII."""
    return byte in (0x09, 0x0A, 0x0D) or PRINTABLE_MIN <= byte <= PRINTABLE_MAX


def is_printable(byte: int) -> bool:
    return PRINTABLE_MIN <= byte <= PRINTABLE_MAX


def to_printable(data: bytes) -> str:
    """Render bytes as text, replacing anything outside 0x20-0x7E with '.'."""
    return bytes(
        b if PRINTABLE_MIN <= b <= PRINTABLE_MAX else UNPRINTABLE_REPLACEMENT
        for b in data
    ).decode("ascii")


def has_at_least(data: bytes, pos: int, count: int) -> bool:
    """Check that ``count`` bytes are available starting at ``pos``."""
    return pos >= 0 and len(data) - pos >= count


def looks_like_open_or_close_tag(data: bytes, pos: int = 0) -> bool:
    """'<' followed by a name start character, or '</' followed by one."""
    if not has_at_least(data, pos, MIN_TAG_PREFIX) or data[pos] != LT:
        return False
    if data[pos + 1] == SLASH:
        return (
            has_at_least(data, pos, MIN_CLOSE_TAG_PREFIX)
            and is_name_start_char(data[pos + 2])
        )
    return is_name_start_char(data[pos + 1])


def looks_like_close_tag(data: bytes, pos: int = 0) -> bool:
    if not has_at_least(data, pos, MIN_CLOSE_TAG_PREFIX):
        return False
    return data.startswith(CLOSE_TAG_OPEN, pos) and is_name_start_char(data[pos + 2])


def looks_like_empty_tag(chunk: bytes) -> bool:
    """A whole tag chunk that ends with '/>'."""
    return len(chunk) >= MIN_EMPTY_TAG_LENGTH and chunk.endswith(EMPTY_TAG_CLOSE)


def looks_like_comment(data: bytes, pos: int = 0) -> bool:
    return has_at_least(data, pos, len(COMMENT_OPEN)) and data.startswith(COMMENT_OPEN, pos)


def looks_like_pi(data: bytes, pos: int = 0) -> bool:
    return has_at_least(data, pos, len(PI_OPEN)) and data.startswith(PI_OPEN, pos)


def looks_like_declaration(data: bytes, pos: int = 0) -> bool:
    """Anything starting '<!' that is not a comment.

    Covers CDATA, DOCTYPE, ELEMENT, ATTLIST, ENTITY, NOTATION and conditional
    sections alike.
    """
    if not has_at_least(data, pos, len(DECLARATION_OPEN)):
        return False
    if not data.startswith(DECLARATION_OPEN, pos):
        return False
    return not has_at_least(data, pos, 3) or data[pos + 2] != ord("-")


def is_tag_terminator(data: bytes, pos: int) -> bool:
    """'>' or '/>' at ``pos``."""
    if not has_at_least(data, pos, 1):
        return False
    if data[pos] == GT:
        return True
    return data.startswith(EMPTY_TAG_CLOSE, pos)


def is_truncated_markup(data: bytes, pos: int = 0) -> bool:
    """The remaining bytes are all or part of a markup opener."""
    remaining = data[pos:]
    if not remaining:
        return False
    return any(opener.startswith(remaining) for opener in MARKUP_OPENERS)

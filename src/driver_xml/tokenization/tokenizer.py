"""Chunk extraction for the driver XML parser.

The extractor walks a document one markup or character-data run at a time.
Each call classifies the run under the cursor, advances the cursor past it
and returns the raw bytes together with their classification; turning a
chunk into nodes is the tree builder's job.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Optional

from driver_xml.character.classifier import (
    BOXED_DECLARATION_CLOSE,
    BOXED_DECLARATION_OPEN,
    COMMENT_CLOSE,
    GT,
    LT,
    PI_CLOSE,
    is_truncated_markup,
    is_whitespace,
    looks_like_close_tag,
    looks_like_comment,
    looks_like_declaration,
    looks_like_empty_tag,
    looks_like_open_or_close_tag,
    looks_like_pi,
)
from driver_xml.shared.errors import (
    InvalidArgument,
    MalformedMarkup,
    UnexpectedEndOfFile,
)


class ChunkType(Enum):
    """Classification of an extracted chunk."""

    TAG = auto()                     # <name ...>
    EMPTY_TAG = auto()               # <name .../>
    CLOSE_TAG = auto()               # </name>
    CHAR_DATA = auto()               # Text up to the next '<'
    PROCESSING_INSTRUCTION = auto()  # <?target data?>
    DECLARATION = auto()             # <!DOCTYPE ...>, <![CDATA[...]]> and friends
    COMMENT = auto()                 # <!-- ... -->
    NOTHING = auto()                 # Trailing whitespace


# Chunk types that never become nodes in the tree
DISCARDED_CHUNK_TYPES = frozenset(
    {ChunkType.COMMENT, ChunkType.DECLARATION, ChunkType.NOTHING}
)


@dataclass
class DocumentCursor:
    """Read position within a document buffer.

    Only the bytes before ``length`` belong to the document; anything after
    that in ``buffer`` is ignored.
    """

    buffer: bytes
    length: Optional[int] = None
    position: int = 0

    def __post_init__(self) -> None:
        """Validate cursor bounds."""
        if not isinstance(self.buffer, (bytes, bytearray, memoryview)):
            raise InvalidArgument(
                f"Document buffer must be bytes, got {type(self.buffer).__name__}"
            )
        self.buffer = bytes(self.buffer)
        if self.length is None:
            self.length = len(self.buffer)
        if not 0 <= self.length <= len(self.buffer):
            raise InvalidArgument(
                f"Document length {self.length} outside buffer of {len(self.buffer)} bytes"
            )
        if not 0 <= self.position <= self.length:
            raise InvalidArgument(
                f"Cursor position {self.position} outside document of {self.length} bytes"
            )
        # From here on only the document itself is visible
        self.buffer = self.buffer[:self.length]

    @property
    def at_end(self) -> bool:
        return self.position >= self.length

    @property
    def remaining(self) -> int:
        return self.length - self.position


@dataclass(frozen=True)
class Chunk:
    """One classified run of document bytes.

    ``start`` and ``end`` are offsets into the document; ``data`` is
    ``buffer[start:end]``.
    """

    type: ChunkType
    data: bytes
    start: int
    end: int

    @property
    def length(self) -> int:
        return len(self.data)


class ChunkExtractor:
    """Pull chunks off a document cursor.

    Example:
        >>> extractor = ChunkExtractor(DocumentCursor(b"<a>hi</a>"))
        >>> [chunk.type.name for chunk in extractor]
        ['TAG', 'CHAR_DATA', 'CLOSE_TAG']
    """

    def __init__(self, cursor: DocumentCursor) -> None:
        self.cursor = cursor
        self.chunks_extracted = 0

    def __iter__(self) -> Iterator[Chunk]:
        while True:
            chunk = self.next_chunk()
            if chunk is None:
                return
            yield chunk

    def next_chunk(self) -> Optional[Chunk]:
        """Extract and classify the chunk under the cursor.

        Returns:
            The next chunk, or None once the document is exhausted

        Raises:
            UnexpectedEndOfFile: The document ends before the chunk's terminator
            MalformedMarkup: A '<' starts something that is not markup
        """
        cursor = self.cursor
        if cursor.at_end:
            return None

        data = cursor.buffer
        start = cursor.position
        pos = start
        while pos < cursor.length and is_whitespace(data[pos]):
            pos += 1

        if pos >= cursor.length:
            return self._emit(ChunkType.NOTHING, start, cursor.length)

        if data[pos] != LT:
            # Character data keeps its leading whitespace
            end = data.find(b"<", pos)
            if end == -1:
                end = cursor.length
            return self._emit(ChunkType.CHAR_DATA, start, end)

        # Whitespace before markup is not content
        cursor.position = pos

        if looks_like_comment(data, pos):
            end = self._scan_past(COMMENT_CLOSE, pos + 4, "comment")
            return self._emit(ChunkType.COMMENT, pos, end)

        if looks_like_pi(data, pos):
            end = self._scan_past(PI_CLOSE, pos + 2, "processing instruction")
            return self._emit(ChunkType.PROCESSING_INSTRUCTION, pos, end)

        if looks_like_declaration(data, pos):
            if data.startswith(BOXED_DECLARATION_OPEN, pos):
                end = self._scan_past(BOXED_DECLARATION_CLOSE, pos + 3, "declaration")
            else:
                end = self._scan_past(b">", pos + 2, "declaration")
            return self._emit(ChunkType.DECLARATION, pos, end)

        if looks_like_open_or_close_tag(data, pos):
            end = self._scan_past(bytes((GT,)), pos + 1, "tag")
            chunk_data = data[pos:end]
            if looks_like_close_tag(chunk_data):
                chunk_type = ChunkType.CLOSE_TAG
            elif looks_like_empty_tag(chunk_data):
                chunk_type = ChunkType.EMPTY_TAG
            else:
                chunk_type = ChunkType.TAG
            return self._emit(chunk_type, pos, end)

        if is_truncated_markup(data, pos):
            raise UnexpectedEndOfFile("Document ends inside markup", position=pos)
        raise MalformedMarkup(
            f"Unrecognized markup starting {data[pos:pos + 4]!r}", position=pos
        )

    def _scan_past(self, terminator: bytes, search_from: int, what: str) -> int:
        """Offset just past the first ``terminator`` at or after ``search_from``."""
        found = self.cursor.buffer.find(terminator, search_from)
        if found == -1:
            raise UnexpectedEndOfFile(
                f"Unterminated {what}: missing {terminator.decode('ascii')!r}",
                position=self.cursor.position,
            )
        return found + len(terminator)

    def _emit(self, chunk_type: ChunkType, start: int, end: int) -> Chunk:
        chunk = Chunk(
            type=chunk_type,
            data=self.cursor.buffer[start:end],
            start=start,
            end=end,
        )
        self.cursor.position = end
        self.chunks_extracted += 1
        return chunk

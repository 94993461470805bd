"""Tree building for driver XML documents.

The builder pulls chunks from a ``ChunkExtractor`` and turns them into nodes
under a synthetic root tag. Open tags are kept on an explicit stack of
parent frames rather than on the Python call stack, so nesting depth is
bounded only by ``ParserConfig.max_depth``.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

from driver_xml.shared.config import ParserConfig
from driver_xml.shared.errors import (
    DepthLimitExceeded,
    MalformedMarkup,
    TagMismatch,
    UnexpectedEndOfFile,
    XMLParseError,
)
from driver_xml.shared.logging import get_logger
from driver_xml.shared.result import (
    DiagnosticEntry,
    DiagnosticSeverity,
    ParseStatistics,
)
from driver_xml.tokenization.attributes import (
    AttributeScanner,
    get_close_tag_name,
    get_pi_data,
    get_tag_name,
)
from driver_xml.tokenization.tokenizer import (
    DISCARDED_CHUNK_TYPES,
    Chunk,
    ChunkExtractor,
    ChunkType,
    DocumentCursor,
)
from driver_xml.tree.navigation import delete, iter_elements
from driver_xml.tree.nodes import (
    CharData,
    EmptyTag,
    ProcessingInstruction,
    Tag,
)


@dataclass
class ParseResult:
    """Outcome of a successful parse.

    ``root`` is the synthetic container tag; the document's own top-level
    nodes are its children.
    """

    root: Tag
    diagnostics: List[DiagnosticEntry] = field(default_factory=list)
    statistics: ParseStatistics = field(default_factory=ParseStatistics)
    correlation_id: Optional[str] = None

    @property
    def element_count(self) -> int:
        """Number of elements in the document, not counting the root."""
        return sum(1 for _ in iter_elements(self.root.children))

    @property
    def has_warnings(self) -> bool:
        """Check if anything was dropped or recovered during the parse."""
        return any(
            diag.severity == DiagnosticSeverity.WARNING for diag in self.diagnostics
        )

    def add_diagnostic(
        self,
        severity: DiagnosticSeverity,
        message: str,
        component: str,
        position: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> DiagnosticEntry:
        """Add diagnostic entry to result."""
        entry = DiagnosticEntry(
            severity=severity,
            message=message,
            component=component,
            position=position,
            details=details,
            correlation_id=self.correlation_id,
        )
        self.diagnostics.append(entry)
        return entry

    def get_diagnostics_by_severity(
        self,
        severity: DiagnosticSeverity
    ) -> List[DiagnosticEntry]:
        """Get diagnostics of specific severity level."""
        return [diag for diag in self.diagnostics if diag.severity == severity]

    def to_dict(self) -> Dict[str, Any]:
        """Convert the result to a JSON-friendly dictionary."""
        return {
            "root": self.root.to_dict(),
            "element_count": self.element_count,
            "diagnostics": [diag.to_dict() for diag in self.diagnostics],
            "statistics": self.statistics.to_dict(),
        }


class XMLTreeBuilder:
    """Build a node tree from raw ASCII XML bytes.

    Example:
        >>> result = XMLTreeBuilder().build(b"<a><b/></a>")
        >>> [child.name for child in result.root.children]
        ['a']
    """

    COMPONENT = "xml_tree_builder"

    def __init__(
        self,
        config: Optional[ParserConfig] = None,
        correlation_id: Optional[str] = None,
    ) -> None:
        """Initialize tree builder.

        Args:
            config: Parser settings, defaults to ``ParserConfig()``
            correlation_id: Optional correlation ID for request tracking
        """
        self.config = config or ParserConfig()
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, self.COMPONENT)

        self._root: Optional[Tag] = None
        self._extractor: Optional[ChunkExtractor] = None
        self._result: Optional[ParseResult] = None

    def build(
        self,
        buffer: Union[bytes, bytearray, memoryview],
        length: Optional[int] = None,
    ) -> ParseResult:
        """Parse ``buffer`` into a tree.

        Args:
            buffer: Document bytes
            length: Number of bytes of ``buffer`` that make up the document,
                defaults to all of it

        Returns:
            ParseResult holding the synthetic root and any diagnostics

        Raises:
            InvalidArgument: ``buffer`` or ``length`` is unusable
            XMLParseError: The document is not well formed; the error carries
                the partial tree and diagnostics gathered so far
        """
        start_time = time.time()
        cursor = DocumentCursor(buffer, length)

        self._root = Tag(self.config.root_name, synthetic=True)
        self._extractor = ChunkExtractor(cursor)
        self._result = ParseResult(root=self._root, correlation_id=self.correlation_id)
        result = self._result

        self.logger.info(
            "Starting tree building",
            extra={"document_size": cursor.length},
        )

        try:
            while not cursor.at_end:
                self.parse_branch(self._root)
        except XMLParseError as e:
            result.add_diagnostic(
                DiagnosticSeverity.ERROR,
                e.message,
                self.COMPONENT,
                position=e.position,
                details={"error_type": type(e).__name__},
            )
            e.partial_root = self._root
            e.diagnostics = list(result.diagnostics)
            self.logger.error(
                f"Tree building failed: {e}",
                extra={"error_type": type(e).__name__, "position": e.position},
            )
            raise
        finally:
            stats = result.statistics
            stats.bytes_processed = cursor.position
            stats.chunks_extracted = self._extractor.chunks_extracted
            stats.processing_time_ms = (time.time() - start_time) * 1000

        if not len(self._root.children):
            result.add_diagnostic(
                DiagnosticSeverity.INFO,
                "Document contains no nodes",
                self.COMPONENT,
            )

        self.logger.info(
            "Tree building completed",
            extra={
                "element_count": result.element_count,
                "elements_dropped": result.statistics.elements_dropped,
            },
        )
        return result

    def parse_branch(self, parent: Tag, depth: int = 0) -> None:
        """Add nodes to ``parent`` until its close tag or the end of input.

        Nested open tags are pushed onto a stack of ``(tag, depth)`` frames
        and popped at their close tag, so this returns once ``parent`` itself
        is closed.

        Args:
            parent: The open tag new nodes are appended to
            depth: Nesting depth of ``parent``, the root being 0

        Raises:
            TagMismatch: A close tag does not belong to the innermost open tag
            UnexpectedEndOfFile: Input ran out while a tag was still open
            DepthLimitExceeded: Nesting went past ``max_depth``
        """
        if self._extractor is None or self._root is None:
            raise RuntimeError("parse_branch() can only run inside build()")

        stats = self._result.statistics
        self._check_depth(parent, depth)
        stack: List[Tuple[Tag, int]] = [(parent, depth)]

        while stack:
            current, level = stack[-1]
            chunk = self._extractor.next_chunk()
            if chunk is None:
                if current is self._root:
                    return
                raise UnexpectedEndOfFile(
                    f"Unclosed tag <{current.name}>",
                    position=self._extractor.cursor.length,
                )

            if self.logger.is_enabled_for(logging.DEBUG):
                self.logger.debug(
                    f"{chunk.type.name} chunk under <{current.name}>",
                    extra={"start": chunk.start, "end": chunk.end},
                )

            if chunk.type in DISCARDED_CHUNK_TYPES:
                if chunk.type == ChunkType.COMMENT:
                    stats.comments_discarded += 1
                elif chunk.type == ChunkType.DECLARATION:
                    stats.declarations_discarded += 1
            elif chunk.type == ChunkType.CHAR_DATA:
                current.append(CharData(chunk.data))
                stats.nodes_created += 1
            elif chunk.type == ChunkType.PROCESSING_INSTRUCTION:
                target, data = self._from_chunk(get_pi_data, chunk)
                current.append(ProcessingInstruction(target, data))
                stats.nodes_created += 1
            elif chunk.type in (ChunkType.TAG, ChunkType.EMPTY_TAG):
                element = self._add_element(current, chunk)
                # A dropped tag still has to consume its content and close tag
                if isinstance(element, Tag):
                    self._check_depth(element, level + 1)
                    stack.append((element, level + 1))
            elif chunk.type == ChunkType.CLOSE_TAG:
                name = self._from_chunk(get_close_tag_name, chunk)
                if current is self._root:
                    raise TagMismatch(
                        current.name,
                        name,
                        position=chunk.start,
                        message=f"Close tag </{name}> has no matching open tag",
                    )
                if name != current.name:
                    raise TagMismatch(current.name, name, position=chunk.start)
                stack.pop()

    def _check_depth(self, element: Tag, depth: int) -> None:
        max_depth = self.config.max_depth
        if max_depth is not None and depth > max_depth:
            raise DepthLimitExceeded(
                f"Element <{element.name}> exceeds the maximum nesting depth of {max_depth}",
                position=self._extractor.cursor.position,
            )
        stats = self._result.statistics
        stats.max_depth = max(stats.max_depth, depth)

    def _add_element(self, parent: Tag, chunk: Chunk) -> Union[Tag, EmptyTag]:
        """Create the element for a tag chunk and attach it to ``parent``.

        An element whose attributes do not parse is detached again when
        recovery is enabled; it is still returned so its content can be read.
        """
        name, name_end = self._from_chunk(get_tag_name, chunk)
        element: Union[Tag, EmptyTag]
        element = EmptyTag(name) if chunk.type == ChunkType.EMPTY_TAG else Tag(name)
        parent.append(element)
        self._result.statistics.nodes_created += 1

        try:
            for attr_name, attr_value in AttributeScanner(chunk.data, name_end):
                element.add_attribute(attr_name, attr_value)
        except MalformedMarkup as e:
            self._rebase(e, chunk)
            if not self.config.recover_malformed_attributes:
                raise
            delete(parent.children, element)
            self._result.statistics.elements_dropped += 1
            self._result.add_diagnostic(
                DiagnosticSeverity.WARNING,
                f"Dropped <{name}> with malformed attributes: {e.message}",
                self.COMPONENT,
                position=chunk.start,
                details={"element": name, "reason": e.message},
            )
            self.logger.warning(
                f"Dropped <{name}> with malformed attributes",
                extra={"position": chunk.start, "reason": e.message},
            )
        return element

    def _from_chunk(self, extract, chunk: Chunk):
        try:
            return extract(chunk.data)
        except MalformedMarkup as e:
            self._rebase(e, chunk)
            raise

    @staticmethod
    def _rebase(error: MalformedMarkup, chunk: Chunk) -> MalformedMarkup:
        """Turn a chunk-relative error position into a document offset."""
        if error.position is not None:
            error.position += chunk.start
        return error

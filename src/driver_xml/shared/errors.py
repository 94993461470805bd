"""Exception hierarchy for driver XML parsing and tree manipulation.

Parse failures carry the byte offset where they were detected and, for
diagnostics only, the partially built tree.
"""

from typing import TYPE_CHECKING, Any, List, Optional

if TYPE_CHECKING:
    from driver_xml.tree.nodes import Tag


class DriverXmlError(Exception):
    """Base class for every error raised by this package."""


class XMLParseError(DriverXmlError):
    """A document could not be turned into a tree."""

    def __init__(
        self,
        message: str,
        position: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.position = position
        # Filled in by the tree builder before the error leaves build()
        self.partial_root: Optional["Tag"] = None
        self.diagnostics: List[Any] = []

    def __str__(self) -> str:
        if self.position is None:
            return self.message
        return f"{self.message} (at byte {self.position})"


class MalformedMarkup(XMLParseError):
    """A chunk could not be classified or extracted cleanly."""


class UnexpectedEndOfFile(XMLParseError):
    """The document ended inside a chunk or while an element was still open."""


class TagMismatch(XMLParseError):
    """A close tag does not match the currently open tag."""

    def __init__(
        self,
        expected: str,
        found: str,
        position: Optional[int] = None,
        message: Optional[str] = None,
    ) -> None:
        super().__init__(
            message or f"Close tag mismatch: expected </{expected}>, found </{found}>",
            position,
        )
        self.expected = expected
        self.found = found


class DepthLimitExceeded(XMLParseError):
    """Element nesting went deeper than the configured limit."""


class InvalidArgument(DriverXmlError, ValueError):
    """A required argument was missing or does not fit the operation."""


class TreeIntegrityError(DriverXmlError):
    """A node list no longer agrees with the nodes it should hold."""

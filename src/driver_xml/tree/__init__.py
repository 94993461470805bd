"""Tree layer for the driver XML parser.

This module provides the node types, navigation and deletion helpers, and
the stack-based builder that produces trees from raw documents.
"""

from .builder import ParseResult, XMLTreeBuilder
from .navigation import (
    delete,
    find_all_tags,
    find_attribute,
    find_tag,
    iter_elements,
    next_node,
)
from .nodes import (
    Attribute,
    CharData,
    EmptyTag,
    Node,
    NodeList,
    ProcessingInstruction,
    Tag,
)

__all__ = [
    "ParseResult",
    "XMLTreeBuilder",
    "delete",
    "find_all_tags",
    "find_attribute",
    "find_tag",
    "iter_elements",
    "next_node",
    "Attribute",
    "CharData",
    "EmptyTag",
    "Node",
    "NodeList",
    "ProcessingInstruction",
    "Tag",
]

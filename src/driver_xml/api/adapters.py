"""Conversion of driver XML trees into other representations.

``to_dict`` gives a JSON-friendly structure. ``to_elementtree`` and
``to_lxml`` build element trees for code that already works with those APIs;
lxml is an optional extra and is only imported when ``to_lxml`` is called.

Byte content is decoded as latin-1 so every byte value survives conversion.
A synthetic root converts to an element of the same name, so documents with
several top-level elements still have a single root.
"""

import xml.etree.ElementTree as ElementTree
from typing import Any, Dict, Optional

from driver_xml.shared.logging import get_logger
from driver_xml.tree.nodes import (
    CharData,
    EmptyTag,
    Node,
    ProcessingInstruction,
    Tag,
)

TEXT_ENCODING = "latin-1"


def _text(data: Optional[bytes]) -> Optional[str]:
    return None if data is None else data.decode(TEXT_ENCODING)


def to_dict(node: Node) -> Dict[str, Any]:
    """Convert a node and its subtree to nested dictionaries.

    Example:
        >>> from driver_xml.tree.nodes import EmptyTag
        >>> to_dict(EmptyTag("a", {"x": b"1"}))
        {'type': 'empty_tag', 'name': 'a', 'attributes': [{'name': 'x', 'value': '1'}]}
    """
    if not isinstance(node, (Tag, EmptyTag, CharData, ProcessingInstruction)):
        raise TypeError(f"Cannot convert {type(node).__name__}")
    return node.to_dict()


def _convert_element(element, ET):
    """Build an ``ET`` element for a Tag or EmptyTag, recursing into children."""
    converted = ET.Element(element.name)
    for attribute in element.attributes:
        converted.set(attribute.name, _text(attribute.value) or "")

    if not isinstance(element, Tag):
        return converted

    last = None
    for child in element.children:
        if isinstance(child, CharData):
            text = _text(child.data)
            # Text after a child element is that element's tail
            if last is None:
                converted.text = (converted.text or "") + text
            else:
                last.tail = (last.tail or "") + text
            continue
        if isinstance(child, ProcessingInstruction):
            last = ET.ProcessingInstruction(child.target, _text(child.data))
        elif isinstance(child, (Tag, EmptyTag)):
            last = _convert_element(child, ET)
        else:
            raise TypeError(f"Cannot convert {type(child).__name__}")
        converted.append(last)
    return converted


def _convert(node: Node, ET):
    if isinstance(node, (Tag, EmptyTag)):
        return _convert_element(node, ET)
    raise TypeError(
        f"Only elements can be converted to an element tree, got {type(node).__name__}"
    )


def to_elementtree(node: Node, correlation_id: Optional[str] = None) -> ElementTree.Element:
    """Convert an element to ``xml.etree.ElementTree.Element``."""
    logger = get_logger(__name__, correlation_id, "elementtree_adapter")
    converted = _convert(node, ElementTree)
    logger.debug("Converted tree to ElementTree", extra={"root_tag": converted.tag})
    return converted


def to_lxml(node: Node, correlation_id: Optional[str] = None):
    """Convert an element to ``lxml.etree._Element``.

    Raises:
        ImportError: lxml is not installed
        ValueError: lxml rejected a name or a control character in the content
    """
    logger = get_logger(__name__, correlation_id, "lxml_adapter")
    try:
        import lxml.etree as ET
    except ImportError as e:
        raise ImportError(
            "lxml is required for to_lxml(); install it with 'pip install driver-xml[lxml]'"
        ) from e

    converted = _convert(node, ET)
    logger.debug(
        "Converted tree to lxml",
        extra={"root_tag": converted.tag, "lxml_version": ET.LXML_VERSION},
    )
    return converted

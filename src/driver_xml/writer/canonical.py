"""Canonical XML serialization of driver XML trees.

Output carries no added whitespace: character data is written exactly as it
was parsed, so parsing the output gives back an equivalent tree.
"""

from typing import List, Optional, Union

from driver_xml.shared.config import WriterConfig
from driver_xml.shared.errors import InvalidArgument
from driver_xml.shared.logging import get_logger
from driver_xml.tree.nodes import (
    NODE_TYPES,
    Attribute,
    CharData,
    EmptyTag,
    Node,
    NodeList,
    ProcessingInstruction,
    Tag,
)
from driver_xml.writer.buffer import OutputBuffer

DOUBLE_QUOTE = b'"'
SINGLE_QUOTE = b"'"


def choose_attribute_quote(value: Optional[bytes]) -> bytes:
    """Pick the quote character that can enclose ``value``.

    Double quotes are preferred; single quotes are used when the value itself
    contains a double quote. Entity escaping is not supported, so a value
    holding both quote characters cannot be written.
    """
    if value is None or DOUBLE_QUOTE not in value:
        return DOUBLE_QUOTE
    if SINGLE_QUOTE not in value:
        return SINGLE_QUOTE
    raise InvalidArgument(
        "Attribute value contains both quote characters and cannot be serialized"
    )


class XMLWriter:
    """Write nodes into an ``OutputBuffer`` as canonical XML."""

    def __init__(
        self,
        config: Optional[WriterConfig] = None,
        correlation_id: Optional[str] = None,
    ) -> None:
        self.config = config or WriterConfig()
        self.logger = get_logger(__name__, correlation_id, "xml_writer")

    def new_buffer(self) -> OutputBuffer:
        return OutputBuffer(self.config.initial_capacity, self.config.grow_step)

    def serialize(self, node: Node) -> bytes:
        """Serialize ``node`` and everything below it.

        A synthetic root contributes only its children.

        Raises:
            TypeError: ``node`` is not one of the tree node types
            InvalidArgument: An attribute value cannot be quoted
        """
        buffer = self.new_buffer()
        self.write(node, buffer)
        self.logger.debug(
            "Serialized tree",
            extra={
                "output_size": buffer.size,
                "capacity": buffer.capacity,
                "reallocations": buffer.reallocations,
            },
        )
        return buffer.getvalue()

    def write(self, node: Node, buffer: OutputBuffer) -> None:
        if not isinstance(node, NODE_TYPES):
            raise TypeError(f"Cannot serialize {type(node).__name__}")
        # Pending close tags are queued as raw bytes between the nodes
        pending: List[Union[Node, bytes]] = [node]
        while pending:
            item = pending.pop()
            if isinstance(item, bytes):
                buffer.write(item)
            elif isinstance(item, Tag):
                if not item.synthetic:
                    buffer.write(b"<" + item.name.encode("ascii"))
                    self._write_attributes(item.attributes, buffer)
                    buffer.write(b">")
                    pending.append(b"</" + item.name.encode("ascii") + b">")
                self._queue_children(item.children, pending)
            elif isinstance(item, EmptyTag):
                buffer.write(b"<" + item.name.encode("ascii"))
                self._write_attributes(item.attributes, buffer)
                buffer.write(b"/>")
            elif isinstance(item, CharData):
                buffer.write(item.data)
            elif isinstance(item, ProcessingInstruction):
                buffer.write(b"<?" + item.target.encode("ascii"))
                if item.data:
                    buffer.write(b" ")
                    buffer.write(item.data)
                buffer.write(b"?>")
            else:
                raise TypeError(f"Cannot serialize {type(item).__name__}")

    @staticmethod
    def _queue_children(children: NodeList, pending: List[Union[Node, bytes]]) -> None:
        pending.extend(reversed(list(children)))

    def _write_attributes(self, attributes: NodeList, buffer: OutputBuffer) -> None:
        for attribute in attributes:
            self._write_attribute(attribute, buffer)

    @staticmethod
    def _write_attribute(attribute: Attribute, buffer: OutputBuffer) -> None:
        quote = choose_attribute_quote(attribute.value)
        buffer.write(b" " + attribute.name.encode("ascii") + b"=" + quote)
        if attribute.value:
            buffer.write(attribute.value)
        buffer.write(quote)


def serialize(node: Node, config: Optional[WriterConfig] = None) -> bytes:
    """Serialize a node, or the root of a parsed document, to canonical XML bytes.

    Example:
        >>> from driver_xml.tree.nodes import EmptyTag
        >>> serialize(EmptyTag("a", {"x": b"1"}))
        b'<a x="1"/>'
    """
    return XMLWriter(config).serialize(node)

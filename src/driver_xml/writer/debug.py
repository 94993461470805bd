"""Indented, human-readable trace of a driver XML tree.

Unlike the canonical writer this shows the synthetic root, puts every node
on its own line and replaces unprintable bytes with '.', so the output is
meant for eyes and logs rather than for re-parsing.
"""

import logging
from typing import Callable, List, Optional, Tuple, Union

from driver_xml.character.classifier import to_printable
from driver_xml.shared.config import WriterConfig
from driver_xml.shared.logging import get_logger
from driver_xml.tree.nodes import (
    NODE_TYPES,
    Attribute,
    CharData,
    EmptyTag,
    Node,
    ProcessingInstruction,
    Tag,
)

LineSink = Callable[[str], None]

logger = get_logger(__name__, component="debug_printer")


def _log_line(line: str) -> None:
    logger.debug(line)


class DebugPrinter:
    """Emit one line per node to a sink callable.

    Example:
        >>> lines = []
        >>> from driver_xml import parse
        >>> DebugPrinter(sink=lines.append).print_tree(parse(b"<a>x</a>"))
        >>> lines
        ['<Root>', '  <a>', '    x', '  </a>', '</Root>']
    """

    def __init__(
        self,
        sink: Optional[LineSink] = None,
        config: Optional[WriterConfig] = None,
    ) -> None:
        self.sink = sink or _log_line
        self.config = config or WriterConfig()

    def print_tree(self, node: Node, level: int = 0) -> None:
        if not isinstance(node, NODE_TYPES):
            raise TypeError(f"Cannot print {type(node).__name__}")
        # Closing lines are queued as ready-made strings between the nodes
        pending: List[Tuple[int, Union[Node, str]]] = [(level, node)]
        while pending:
            depth, item = pending.pop()
            prefix = " " * (self.config.indent_width * depth)
            if isinstance(item, str):
                self.sink(item)
            elif isinstance(item, Tag):
                self.sink(f"{prefix}<{item.name}{self._attributes(item)}>")
                pending.append((depth, f"{prefix}</{item.name}>"))
                pending.extend((depth + 1, child) for child in reversed(list(item.children)))
            elif isinstance(item, EmptyTag):
                self.sink(f"{prefix}<{item.name}{self._attributes(item)}/>")
            elif isinstance(item, CharData):
                self.sink(f"{prefix}{to_printable(item.data)}")
            elif isinstance(item, ProcessingInstruction):
                data = f" {to_printable(item.data)}" if item.data else ""
                self.sink(f"{prefix}<?{item.target}{data}?>")
            else:
                raise TypeError(f"Cannot print {type(item).__name__}")

    @staticmethod
    def _attributes(element) -> str:
        return "".join(_format_attribute(attribute) for attribute in element.attributes)


def _format_attribute(attribute: Attribute) -> str:
    value = to_printable(attribute.value) if attribute.value else ""
    return f' {attribute.name}="{value}"'


def format_tree(node: Node, config: Optional[WriterConfig] = None) -> List[str]:
    """Return the debug trace of ``node`` as a list of lines."""
    lines: List[str] = []
    DebugPrinter(sink=lines.append, config=config).print_tree(node)
    return lines


def debug_print(
    node: Node,
    sink: Optional[LineSink] = None,
    config: Optional[WriterConfig] = None,
) -> None:
    """Send the debug trace of ``node`` to ``sink``.

    Without a sink the lines go to this module's logger at DEBUG level; the
    work is skipped entirely when that level is disabled.
    """
    if sink is None and not logger.is_enabled_for(logging.DEBUG):
        return
    DebugPrinter(sink=sink, config=config).print_tree(node)

"""Writer layer for the driver XML parser.

This module turns trees back into canonical XML bytes and into indented
debug traces.
"""

from .buffer import OutputBuffer
from .canonical import XMLWriter, choose_attribute_quote, serialize
from .debug import DebugPrinter, debug_print, format_tree

__all__ = [
    "OutputBuffer",
    "XMLWriter",
    "choose_attribute_quote",
    "serialize",
    "DebugPrinter",
    "debug_print",
    "format_tree",
]

"""Public API for the driver XML parser."""

from .adapters import to_dict, to_elementtree, to_lxml
from .parser import parse, parse_bytes, parse_file, parse_string

__all__ = [
    "parse",
    "parse_bytes",
    "parse_file",
    "parse_string",
    "to_dict",
    "to_elementtree",
    "to_lxml",
]

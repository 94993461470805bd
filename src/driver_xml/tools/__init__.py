"""Developer tools for the driver XML parser."""

from .hexdump import format_hex_line, hex_dump, print_hex_dump

__all__ = [
    "format_hex_line",
    "hex_dump",
    "print_hex_dump",
]

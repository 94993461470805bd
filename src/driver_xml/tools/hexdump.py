"""Hex-editor style dump of byte buffers."""

from typing import Callable, List, Optional, Union

from driver_xml.character.classifier import to_printable
from driver_xml.shared.logging import get_logger

BYTES_PER_LINE = 16

logger = get_logger(__name__, component="hex_dump")


def format_hex_line(line_number: int, chunk: bytes) -> str:
    """Format up to 16 bytes as ``offset: hex "text"``.

    Short chunks are padded so the text column stays aligned.
    """
    hex_part = "".join(f"{byte:02X} " for byte in chunk)
    hex_part += "   " * (BYTES_PER_LINE - len(chunk))
    text_part = to_printable(chunk).ljust(BYTES_PER_LINE)
    return f'{line_number:07X}0: {hex_part}"{text_part}"'


def hex_dump(data: Union[bytes, bytearray], header: bool = False) -> List[str]:
    """Dump ``data`` 16 bytes per line.

    Example:
        >>> hex_dump(b"<a/>")
        ['00000000: 3C 61 2F 3E                                     "<a/>            "']
    """
    data = bytes(data)
    lines = [f"{len(data)} bytes"] if header else []
    for line_number, offset in enumerate(range(0, len(data), BYTES_PER_LINE)):
        lines.append(format_hex_line(line_number, data[offset:offset + BYTES_PER_LINE]))
    return lines


def print_hex_dump(
    data: Union[bytes, bytearray],
    sink: Optional[Callable[[str], None]] = None,
    header: bool = True,
) -> None:
    """Send a hex dump to ``sink``, or to this module's logger at DEBUG level."""
    emit = sink or logger.debug
    for line in hex_dump(data, header=header):
        emit(line)

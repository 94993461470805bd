"""Public parsing API for driver XML documents.

``parse`` is the lowest-friction entry point: bytes in, root tag out. The
``parse_bytes``/``parse_string``/``parse_file`` functions take care of
getting hold of the document and return the full ``ParseResult`` with
diagnostics and statistics.
"""

from pathlib import Path
from typing import Optional, Union

from driver_xml.shared.config import DriverXmlConfig, ParserConfig
from driver_xml.shared.errors import InvalidArgument
from driver_xml.shared.logging import get_logger
from driver_xml.tree.builder import ParseResult, XMLTreeBuilder
from driver_xml.tree.nodes import Tag

BufferType = Union[bytes, bytearray, memoryview]
ConfigType = Union[ParserConfig, DriverXmlConfig, None]


def _parser_config(config: ConfigType) -> ParserConfig:
    if config is None:
        return ParserConfig()
    if isinstance(config, DriverXmlConfig):
        return config.parser
    if isinstance(config, ParserConfig):
        return config
    raise InvalidArgument(
        f"Expected ParserConfig or DriverXmlConfig, got {type(config).__name__}"
    )


def parse(
    buffer: BufferType,
    length: Optional[int] = None,
    config: ConfigType = None,
    correlation_id: Optional[str] = None,
) -> Tag:
    """Parse an ASCII XML document and return its synthetic root tag.

    Args:
        buffer: Document bytes
        length: How many bytes of ``buffer`` belong to the document
        config: Parser settings
        correlation_id: Optional correlation ID for request tracking

    Returns:
        The synthetic ``Root`` tag; the document's nodes are its children

    Raises:
        InvalidArgument: ``buffer`` or ``length`` is unusable
        XMLParseError: The document is not well formed

    Examples:
        >>> root = parse(b'<config><item id="1"/></config>')
        >>> root.children[0].name
        'config'
    """
    return parse_bytes(buffer, length, config, correlation_id).root


def parse_bytes(
    buffer: BufferType,
    length: Optional[int] = None,
    config: ConfigType = None,
    correlation_id: Optional[str] = None,
) -> ParseResult:
    """Parse a document held in memory and return the full result."""
    builder = XMLTreeBuilder(_parser_config(config), correlation_id)
    return builder.build(buffer, length)


def parse_string(
    xml_string: str,
    config: ConfigType = None,
    correlation_id: Optional[str] = None,
) -> ParseResult:
    """Parse a document given as text.

    Raises:
        InvalidArgument: The text contains non-ASCII characters
    """
    if not isinstance(xml_string, str):
        raise InvalidArgument(f"Expected str, got {type(xml_string).__name__}")
    try:
        buffer = xml_string.encode("ascii")
    except UnicodeEncodeError as e:
        raise InvalidArgument(
            f"Only ASCII documents are supported: non-ASCII character at offset {e.start}"
        ) from e
    return parse_bytes(buffer, config=config, correlation_id=correlation_id)


def parse_file(
    file_path: Union[str, Path],
    config: ConfigType = None,
    correlation_id: Optional[str] = None,
) -> ParseResult:
    """Read a whole file into memory and parse it.

    Raises:
        OSError: The file cannot be read
        XMLParseError: The document is not well formed
    """
    logger = get_logger(__name__, correlation_id, "parse_file")
    path_obj = Path(file_path) if isinstance(file_path, str) else file_path

    logger.info("Starting file parse operation", extra={"file_path": str(path_obj)})
    try:
        with path_obj.open("rb") as file:
            raw_data = file.read()
    except OSError as e:
        logger.error(
            f"Cannot read {path_obj}: {e.strerror or e}",
            extra={"file_path": str(path_obj)},
        )
        raise

    return parse_bytes(raw_data, config=config, correlation_id=correlation_id)

"""Driver XML: a minimal ASCII XML parser and tree library.

Documents are parsed whole into a tree of tags, empty tags, character data
and processing instructions under a synthetic ``Root`` tag. Trees can be
searched, edited, written back as canonical XML or dumped as an indented
debug trace.

API levels:
- Level 1: Simple functions - parse(), serialize(), find_tag()
- Level 2: Full results - parse_bytes(), parse_string(), parse_file()
- Level 3: Components - XMLTreeBuilder, XMLWriter, DebugPrinter
"""

__version__ = "0.1.0"
__author__ = "Driver XML Team"

# Level 1: Simple functions
from .api import (
    parse,
    parse_bytes,
    parse_file,
    parse_string,
    to_dict,
    to_elementtree,
    to_lxml,
)

# Configuration classes for advanced usage
from .shared.config import DriverXmlConfig, ParserConfig, WriterConfig
from .shared.errors import (
    DepthLimitExceeded,
    DriverXmlError,
    InvalidArgument,
    MalformedMarkup,
    TagMismatch,
    TreeIntegrityError,
    UnexpectedEndOfFile,
    XMLParseError,
)
from .tools.hexdump import hex_dump

# Tree model, navigation and result objects
from .tree import (
    Attribute,
    CharData,
    EmptyTag,
    NodeList,
    ParseResult,
    ProcessingInstruction,
    Tag,
    XMLTreeBuilder,
    delete,
    find_all_tags,
    find_attribute,
    find_tag,
    next_node,
)
from .writer import DebugPrinter, XMLWriter, debug_print, format_tree, serialize

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Parsing
    "parse",
    "parse_bytes",
    "parse_file",
    "parse_string",

    # Serialization and diagnostics output
    "serialize",
    "debug_print",
    "format_tree",
    "hex_dump",
    "XMLWriter",
    "DebugPrinter",

    # Tree model and navigation
    "Attribute",
    "CharData",
    "EmptyTag",
    "NodeList",
    "ProcessingInstruction",
    "Tag",
    "delete",
    "find_all_tags",
    "find_attribute",
    "find_tag",
    "next_node",

    # Results and builder
    "ParseResult",
    "XMLTreeBuilder",

    # Adapters
    "to_dict",
    "to_elementtree",
    "to_lxml",

    # Configuration
    "DriverXmlConfig",
    "ParserConfig",
    "WriterConfig",

    # Errors
    "DriverXmlError",
    "XMLParseError",
    "MalformedMarkup",
    "UnexpectedEndOfFile",
    "TagMismatch",
    "DepthLimitExceeded",
    "InvalidArgument",
    "TreeIntegrityError",
]

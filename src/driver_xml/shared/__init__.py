"""Shared utilities for driver XML parsing.

This module provides the exception hierarchy, configuration objects,
diagnostic types and logging helpers used across all processing layers.
"""

from .config import (
    ConfigError,
    ConfigValidationError,
    DriverXmlConfig,
    ParserConfig,
    WriterConfig,
)
from .errors import (
    DepthLimitExceeded,
    DriverXmlError,
    InvalidArgument,
    MalformedMarkup,
    TagMismatch,
    TreeIntegrityError,
    UnexpectedEndOfFile,
    XMLParseError,
)
from .logging import (
    CorrelationLogger,
    get_logger,
)
from .result import (
    DiagnosticEntry,
    DiagnosticSeverity,
    ParseStatistics,
)

__all__ = [
    "ConfigError",
    "ConfigValidationError",
    "DriverXmlConfig",
    "ParserConfig",
    "WriterConfig",
    "DepthLimitExceeded",
    "DriverXmlError",
    "InvalidArgument",
    "MalformedMarkup",
    "TagMismatch",
    "TreeIntegrityError",
    "UnexpectedEndOfFile",
    "XMLParseError",
    "CorrelationLogger",
    "get_logger",
    "DiagnosticEntry",
    "DiagnosticSeverity",
    "ParseStatistics",
]

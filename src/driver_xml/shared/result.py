"""Diagnostic and statistics types shared by the parsing layers.

Diagnostics are returned to the caller as data instead of being written to a
global debug sink, so a parse has no hidden output side effects.
"""

import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, Optional


class DiagnosticSeverity(Enum):
    """Severity levels for diagnostic entries."""

    DEBUG = auto()      # Chunk-level tracing
    INFO = auto()       # Informational messages
    WARNING = auto()    # Recovered problems (e.g. a dropped element)
    ERROR = auto()      # The failure that aborted a parse


@dataclass
class DiagnosticEntry:
    """Single diagnostic entry with context information."""

    severity: DiagnosticSeverity
    message: str
    component: str
    position: Optional[int] = None
    details: Optional[Dict[str, Any]] = None
    timestamp: float = field(default_factory=time.time)
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate diagnostic entry."""
        if not self.message:
            raise ValueError("Diagnostic message cannot be empty")
        if not self.component:
            raise ValueError("Diagnostic component cannot be empty")
        if self.position is not None and self.position < 0:
            raise ValueError("Diagnostic position must be >= 0")

    def to_dict(self) -> Dict[str, Any]:
        """Convert the entry to a JSON-friendly dictionary."""
        result: Dict[str, Any] = {
            "severity": self.severity.name,
            "message": self.message,
            "component": self.component,
        }
        if self.position is not None:
            result["position"] = self.position
        if self.details:
            result["details"] = dict(self.details)
        return result


@dataclass
class ParseStatistics:
    """Counters collected while building a tree."""

    bytes_processed: int = 0
    chunks_extracted: int = 0
    nodes_created: int = 0
    comments_discarded: int = 0
    declarations_discarded: int = 0
    elements_dropped: int = 0
    max_depth: int = 0
    processing_time_ms: float = 0.0

    @property
    def bytes_per_second(self) -> float:
        """Calculate bytes processed per second."""
        if self.processing_time_ms <= 0:
            return 0.0
        return (self.bytes_processed * 1000.0) / self.processing_time_ms

    def to_dict(self) -> Dict[str, Any]:
        """Convert statistics to dictionary representation."""
        return {
            "bytes_processed": self.bytes_processed,
            "chunks_extracted": self.chunks_extracted,
            "nodes_created": self.nodes_created,
            "comments_discarded": self.comments_discarded,
            "declarations_discarded": self.declarations_discarded,
            "elements_dropped": self.elements_dropped,
            "max_depth": self.max_depth,
            "processing_time_ms": self.processing_time_ms,
        }

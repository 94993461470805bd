"""Tokenization layer for the driver XML parser.

This module splits a document into classified chunks and pulls names,
attributes and processing-instruction data out of individual chunks.
"""

from .attributes import (
    AttributeScanner,
    get_close_tag_name,
    get_pi_data,
    get_tag_name,
)
from .tokenizer import (
    DISCARDED_CHUNK_TYPES,
    Chunk,
    ChunkExtractor,
    ChunkType,
    DocumentCursor,
)

__all__ = [
    "AttributeScanner",
    "get_close_tag_name",
    "get_pi_data",
    "get_tag_name",
    "DISCARDED_CHUNK_TYPES",
    "Chunk",
    "ChunkExtractor",
    "ChunkType",
    "DocumentCursor",
]

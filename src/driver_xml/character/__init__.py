"""Character layer for the driver XML parser.

This module provides the ASCII byte predicates and markup shape detectors
the tokenizer is built on.
"""

from .classifier import (
    is_name_char,
    is_name_start_char,
    is_printable,
    is_tag_terminator,
    is_valid_name,
    is_whitespace,
    is_xml_char,
    looks_like_close_tag,
    looks_like_comment,
    looks_like_declaration,
    looks_like_empty_tag,
    looks_like_open_or_close_tag,
    looks_like_pi,
    to_printable,
)

__all__ = [
    "classifier",
    "is_name_char",
    "is_name_start_char",
    "is_printable",
    "is_tag_terminator",
    "is_valid_name",
    "is_whitespace",
    "is_xml_char",
    "looks_like_close_tag",
    "looks_like_comment",
    "looks_like_declaration",
    "looks_like_empty_tag",
    "looks_like_open_or_close_tag",
    "looks_like_pi",
    "to_printable",
]

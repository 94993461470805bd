"""Command-line interface module for the driver XML parser.

This module provides the driver-xml tool for tracing, canonicalizing and
validating documents.
"""

from .main import main

__all__ = ["main"]

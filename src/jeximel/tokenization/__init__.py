"""Tokenization layer for jeximel.

This module provides the resumable tag/text scanner and the parsers for the
attribute-bearing part of tag bodies.

Key Components:
    Cursor: Immutable scan position plus comment-in-progress flag
    ScanResult: Status, value and advanced cursor of one scan step
    next_tag / next_text: The two scan steps
    parse_attributes / apply_declaration: Tag body parsers
"""

from .attributes import (
    apply_declaration,
    is_declaration,
    parse_attributes,
    parse_boolean,
    parse_declaration,
)
from .cursor import (
    Cursor,
    ScanResult,
    ScanStatus,
    next_tag,
    next_text,
)

__all__ = [
    "Cursor",
    "ScanResult",
    "ScanStatus",
    "apply_declaration",
    "is_declaration",
    "next_tag",
    "next_text",
    "parse_attributes",
    "parse_boolean",
    "parse_declaration",
]

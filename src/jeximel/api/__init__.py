"""Public reading and writing API for jeximel.

Key Components:
    parse, parse_string, read, parse_file: Build a Document from XML input
    XMLWriter, serialize, to_string, write, write_file: Re-emit a Document
"""

from .parser import parse, parse_file, parse_string, read
from .writer import XMLWriter, serialize, to_string, write, write_file

__all__ = [
    "parse",
    "parse_file",
    "parse_string",
    "read",
    "XMLWriter",
    "serialize",
    "to_string",
    "write",
    "write_file",
]

"""jeximel: a minimal in-memory XML reader and writer.

Reads a complete document into a tree of named elements with attributes,
optional text and ordered children, and writes such a tree back out as
indented XML.

API levels:
- Simple functions: parse(), parse_string(), parse_file(), serialize()
- Configured use: ParserConfig / WriterConfig and the XMLWriter class
"""

__version__ = "0.1.0"
__author__ = "jeximel developers"

# Tree model
from .tree.model import Document, Element

from .api import (
    XMLWriter,
    parse,
    parse_file,
    parse_string,
    read,
    serialize,
    to_string,
    write,
    write_file,
)

# Configuration classes for advanced usage
from .shared.config import ParserConfig, WriteOptions, WriterConfig

# Error taxonomy
from .shared.errors import (
    DeclarationError,
    EmptyInputError,
    ParseError,
    WriteError,
    XMLError,
)

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Reading
    "parse",
    "parse_string",
    "parse_file",
    "read",

    # Writing
    "serialize",
    "to_string",
    "write",
    "write_file",
    "XMLWriter",

    # Tree model
    "Document",
    "Element",

    # Configuration classes for advanced usage
    "ParserConfig",
    "WriterConfig",
    "WriteOptions",

    # Errors
    "XMLError",
    "EmptyInputError",
    "ParseError",
    "DeclarationError",
    "WriteError",
]

"""Shared utilities for jeximel.

This module provides the error taxonomy, configuration objects and logging
helpers used across the reader and the writer.
"""

from .config import (
    DEFAULT_ENCODING,
    ConfigError,
    ConfigValidationError,
    ParserConfig,
    WriteOptions,
    WriterConfig,
    load_config,
)
from .errors import (
    DeclarationError,
    EmptyInputError,
    ParseError,
    WriteError,
    XMLError,
)
from .logging import (
    CorrelationLogger,
    get_logger,
)

__all__ = [
    "DEFAULT_ENCODING",
    "ConfigError",
    "ConfigValidationError",
    "ParserConfig",
    "WriteOptions",
    "WriterConfig",
    "load_config",
    "DeclarationError",
    "EmptyInputError",
    "ParseError",
    "WriteError",
    "XMLError",
    "CorrelationLogger",
    "get_logger",
]

"""Reading API for jeximel.

This module provides the entry points that turn bytes, strings, streams and
files into a ``Document``. Every call builds with its own ``XMLTreeBuilder``,
so independent parses never share scan state.
"""

import time
from pathlib import Path
from typing import BinaryIO, Optional, TextIO, Union

from jeximel.shared.config import ParserConfig
from jeximel.shared.errors import ParseError
from jeximel.shared.logging import get_logger
from jeximel.tree.builder import XMLTreeBuilder
from jeximel.tree.model import Document

# Type definitions for input data
InputType = Union[str, bytes, bytearray]

PREVIEW_LENGTH = 100  # Max length for content preview in logs
MS_PER_SECOND = 1000


def _resolve_config(
    encoding: Optional[str], config: Optional[ParserConfig]
) -> ParserConfig:
    config = config or ParserConfig()
    if encoding is not None:
        config = config.override(encoding=encoding)
    return config


def _decode(data: InputType, config: ParserConfig) -> str:
    if isinstance(data, str):
        return data
    try:
        return bytes(data).decode(config.effective_encoding)
    except LookupError as e:
        raise ParseError(f"Unknown character encoding: {config.effective_encoding}", e) from e
    except UnicodeDecodeError as e:
        raise ParseError(
            f"Input is not valid {config.effective_encoding} text", e
        ) from e


def parse(
    data: InputType,
    encoding: Optional[str] = None,
    config: Optional[ParserConfig] = None,
) -> Document:
    """Parse a complete document from bytes or text.

    Args:
        data: Document content; bytes are decoded with ``encoding``
        encoding: Character encoding of byte input (UTF-8 when omitted)
        config: Parser configuration; ``encoding`` overrides its encoding

    Returns:
        The parsed Document

    Raises:
        EmptyInputError: If the input has no content
        DeclarationError: If the leading declaration is malformed
        ParseError: For scanning, structural or decoding failures

    Examples:
        >>> document = parse(b'<a x="1"><b/></a>')
        >>> document.get_child("a").get_attribute("x")
        '1'
        >>> parse('<?xml version="1.0"?><root/>').version
        '1.0'
    """
    if not isinstance(data, (str, bytes, bytearray)):
        raise TypeError(f"Cannot parse input of type {type(data).__name__}")

    start_time = time.time()
    config = _resolve_config(encoding, config)
    logger = get_logger(__name__, config.correlation_id, "parse", config.trace)

    text = _decode(data, config)
    logger.info(
        "Starting parse operation",
        extra={
            "input_type": type(data).__name__,
            "content_length": len(text),
            "preview": (
                text[:PREVIEW_LENGTH] + "..." if len(text) > PREVIEW_LENGTH else text
            ),
        }
    )

    document = XMLTreeBuilder(config).build(text)

    logger.info(
        "Finished parse operation",
        extra={"processing_time_ms": (time.time() - start_time) * MS_PER_SECOND}
    )
    return document


def parse_string(xml_string: str, config: Optional[ParserConfig] = None) -> Document:
    """Parse a complete document from a string.

    Examples:
        >>> [child.name for child in parse_string("<a/><b/>").get_children()]
        ['a', 'b']
    """
    if not isinstance(xml_string, str):
        raise TypeError("parse_string expects a str")
    return parse(xml_string, config=config)


def read(
    stream: Union[BinaryIO, TextIO],
    encoding: Optional[str] = None,
    config: Optional[ParserConfig] = None,
) -> Document:
    """Read a complete document from a binary or text stream.

    Args:
        stream: Readable file-like object
        encoding: Character encoding of binary streams
        config: Parser configuration

    Raises:
        ParseError: If the stream cannot be read, or for any parse failure
        EmptyInputError: If the stream is empty
    """
    try:
        content = stream.read()
    except OSError as e:
        raise ParseError("Failed to read XML input stream", e) from e
    return parse(content, encoding, config)


def parse_file(
    file_path: Union[str, Path],
    encoding: Optional[str] = None,
    config: Optional[ParserConfig] = None,
) -> Document:
    """Parse a complete document from a file.

    Args:
        file_path: Path to the XML file
        encoding: Character encoding of the file (UTF-8 when omitted)
        config: Parser configuration

    Raises:
        ParseError: If the file cannot be read, or for any parse failure
        EmptyInputError: If the file is empty
    """
    path = Path(file_path)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise ParseError(f"Failed to read XML file: {path}", e) from e
    return parse(data, encoding, config)

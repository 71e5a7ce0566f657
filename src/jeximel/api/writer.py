"""Writing API for jeximel.

This module re-emits a ``Document`` as text: an optional declaration line,
then every top-level element depth first, one element per line, indented with
one tab per nesting level. Attribute placement follows the ``WriteOptions``
bits of the writer configuration.
"""

import io
import time
from pathlib import Path
from typing import BinaryIO, List, Optional, TextIO, Tuple, Union

from jeximel.character.entities import escape
from jeximel.shared.config import WriteOptions, WriterConfig
from jeximel.shared.errors import WriteError
from jeximel.shared.logging import get_logger
from jeximel.tree.model import Document, Element

INDENT = "\t"
NEWLINE = "\n"

OptionsType = Union[int, WriteOptions]


class XMLWriter:
    """Depth-first document writer.

    The nesting depth lives in the per-call walk stack, never on the writer, so
    one writer can serve several documents and sinks at the same time.
    """

    def __init__(self, config: Optional[WriterConfig] = None) -> None:
        """Initialize the writer.

        Args:
            config: Writer configuration (options, encoding, tracing)
        """
        self.config = config or WriterConfig()
        self.logger = get_logger(
            __name__, self.config.correlation_id, "xml_writer", self.config.trace
        )

    def write(self, document: Document, sink: TextIO) -> None:
        """Write a document to a text sink.

        Raises:
            WriteError: If the sink rejects the output
        """
        start_time = time.time()
        self.logger.info(
            "Writing XML document",
            extra={"options": int(self.config.options)}
        )
        try:
            declaration = self.format_declaration(document)
            if declaration:
                self.logger.trace("Writing declaration: %s", declaration)
                sink.write(declaration + NEWLINE)
            for element in document.get_children():
                self._write_tree(element, sink)
        except (OSError, ValueError) as e:
            self.logger.error("Failed to write XML document", extra={"error": str(e)})
            raise WriteError("Failed to write XML document", e) from e

        self.logger.info(
            "Finished writing XML document",
            extra={"processing_time_ms": (time.time() - start_time) * 1000}
        )

    def to_string(self, document: Document) -> str:
        """Render a document to a string."""
        buffer = io.StringIO()
        self.write(document, buffer)
        return buffer.getvalue()

    def to_bytes(self, document: Document) -> bytes:
        """Render a document to bytes in the configured encoding.

        Raises:
            WriteError: If the text cannot be represented in the encoding
        """
        text = self.to_string(document)
        encoding = self.config.effective_encoding
        try:
            return text.encode(encoding)
        except LookupError as e:
            raise WriteError(f"Unknown character encoding: {encoding}", e) from e
        except UnicodeEncodeError as e:
            raise WriteError(f"Document cannot be encoded as {encoding}", e) from e

    @staticmethod
    def format_declaration(document: Document) -> Optional[str]:
        """Build the ``<?xml ...?>`` line, or None when nothing is declared.

        Examples:
            >>> XMLWriter.format_declaration(Document(version="1.0", standalone=False))
            '<?xml version="1.0" standalone="false" ?>'
        """
        if not document.has_declaration:
            return None
        parts = ["<?xml"]
        if document.version is not None:
            parts.append(f' version="{escape(document.version)}"')
        if document.encoding is not None:
            parts.append(f' encoding="{escape(document.encoding)}"')
        if not document.standalone:
            parts.append(' standalone="false"')
        parts.append(" ?>")
        return "".join(parts)

    def _write_tree(self, top: Element, sink: TextIO) -> None:
        """Write one top-level element and its descendants.

        The walk keeps its own stack of ``(element, depth, closing)`` entries,
        so arbitrarily deep trees never exhaust the interpreter stack.
        """
        stack: List[Tuple[Element, int, bool]] = [(top, 0, False)]
        while stack:
            element, depth, closing = stack.pop()
            if closing:
                sink.write(f"{INDENT * depth}</{element.name}>{NEWLINE}")
                continue

            self._write_start(element, sink, depth)
            if element.has_children:
                self.logger.trace(
                    "Writing children of '%s' at depth %d", element.name, depth + 1
                )
                stack.append((element, depth, True))
                stack.extend(
                    (child, depth + 1, False) for child in reversed(element.children)
                )

    def _write_start(self, element: Element, sink: TextIO, depth: int) -> None:
        """Write an element's opening tag, or the whole element when it has no children."""
        tabs = INDENT * depth
        newline_inline = self.config.attr_newline_inline
        newline_all = self.config.attr_newline_all
        simple = not element.has_children and not element.has_text
        attribute_per_line = (newline_inline and simple) or newline_all

        parts: List[str] = [tabs, "<", element.name]
        for name, value in element.attributes.items():
            parts.append(NEWLINE + tabs + INDENT if attribute_per_line else " ")
            parts.append(f'{name}="{escape(value)}"')

        if not element.has_children:
            if not element.has_text:
                if (newline_inline or newline_all) and element.has_attributes:
                    parts.append(NEWLINE + tabs)
                else:
                    parts.append(" ")
                parts.append("/>" + NEWLINE)
            else:
                parts.append(f">{escape(element.text)}</{element.name}>{NEWLINE}")
        else:
            if newline_all and element.has_attributes:
                parts.append(NEWLINE + tabs)
            parts.append(">" + NEWLINE)
        sink.write("".join(parts))


def _resolve_config(
    encoding: Optional[str],
    options: OptionsType,
    config: Optional[WriterConfig],
) -> WriterConfig:
    config = config or WriterConfig()
    overrides = {}
    if encoding is not None:
        overrides["encoding"] = encoding
    if options:
        overrides["options"] = options
    return config.override(**overrides) if overrides else config


def serialize(
    document: Document,
    encoding: Optional[str] = None,
    options: OptionsType = 0,
    config: Optional[WriterConfig] = None,
) -> bytes:
    """Serialize a document to bytes.

    Args:
        document: Document to write
        encoding: Output character encoding (UTF-8 when omitted)
        options: ``WriteOptions`` bitmask; bit 0 puts each attribute of a
            childless, textless element on its own line, bit 1 does so for
            every element
        config: Writer configuration; ``encoding`` and ``options`` override it

    Returns:
        The encoded document text

    Raises:
        WriteError: If the document cannot be encoded

    Examples:
        >>> document = Document()
        >>> document.add_child("a").set_attribute("x", "1")
        >>> serialize(document)
        b'<a x="1" />\\n'
    """
    return XMLWriter(_resolve_config(encoding, options, config)).to_bytes(document)


def to_string(
    document: Document,
    options: OptionsType = 0,
    config: Optional[WriterConfig] = None,
) -> str:
    """Serialize a document to a string."""
    return XMLWriter(_resolve_config(None, options, config)).to_string(document)


def write(
    document: Document,
    stream: BinaryIO,
    encoding: Optional[str] = None,
    options: OptionsType = 0,
    config: Optional[WriterConfig] = None,
) -> None:
    """Serialize a document into a binary stream.

    Raises:
        WriteError: If encoding fails or the stream rejects the output
    """
    data = serialize(document, encoding, options, config)
    try:
        stream.write(data)
        stream.flush()
    except (OSError, ValueError) as e:
        raise WriteError("Failed to write XML document to stream", e) from e


def write_file(
    document: Document,
    file_path: Union[str, Path],
    encoding: Optional[str] = None,
    options: OptionsType = 0,
    config: Optional[WriterConfig] = None,
) -> None:
    """Serialize a document into a file, replacing its content.

    Raises:
        WriteError: If encoding fails or the file cannot be written
    """
    data = serialize(document, encoding, options, config)
    path = Path(file_path)
    try:
        path.write_bytes(data)
    except OSError as e:
        raise WriteError(f"Failed to write XML file: {path}", e) from e

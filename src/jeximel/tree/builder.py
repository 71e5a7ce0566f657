"""Core tree building implementation for jeximel.

This module drives the cursor scanner over a complete buffer and turns the
sequence of tag bodies and text runs into a ``Document``. The builder keeps a
reference to the current open element; opening tags descend into the new
element unless they are self-closing, and closing tags move back to the
parent.
"""

import re
import time
from typing import Optional, Tuple

from jeximel.character.entities import unescape
from jeximel.shared.config import ParserConfig
from jeximel.shared.errors import (
    DeclarationError,
    EmptyInputError,
    ParseError,
    XMLError,
)
from jeximel.shared.logging import get_logger
from jeximel.tokenization.attributes import apply_declaration, parse_attributes
from jeximel.tokenization.cursor import Cursor, ScanStatus, next_tag, next_text
from jeximel.tree.model import Document, Element

COMMENT_OPEN = "!--"
COMMENT_END = "--"
CLOSING_MARK = "/"
SELF_CLOSING_MARK = "/"
DECLARATION_MARK = "?"

_WHITESPACE = re.compile(r"\s")


class XMLTreeBuilder:
    """Tree builder constructing a Document from one complete buffer.

    A builder holds the state of a single build while it runs and resets it
    at the start of every call to ``build``; do not share one instance
    between threads.
    """

    def __init__(self, config: Optional[ParserConfig] = None) -> None:
        """Initialize tree builder.

        Args:
            config: Parser configuration (tracing, closing-tag strictness)
        """
        self.config = config or ParserConfig()
        self.logger = get_logger(
            __name__, self.config.correlation_id, "xml_tree_builder", self.config.trace
        )

        self._document: Optional[Document] = None
        self._current: Optional[Element] = None
        self._elements_created = 0

    def build(self, content: str) -> Document:
        """Build a document tree from the complete document text.

        Args:
            content: Document text

        Returns:
            The parsed Document

        Raises:
            EmptyInputError: If ``content`` is empty or only whitespace
            DeclarationError: If a ``<?...?>`` tag is not a valid declaration
            ParseError: For any other structural or scanning failure
        """
        if not content or not content.strip():
            raise EmptyInputError("Input is empty")

        start_time = time.time()
        self._reset_state()

        try:
            self._build_tree(content)
        except XMLError as e:
            self.logger.error(
                "Tree building failed",
                extra={"error_type": type(e).__name__, "error": e.message}
            )
            raise
        except Exception as e:
            self.logger.error(
                "Tree building failed",
                extra={"error_type": type(e).__name__},
                exc_info=True
            )
            raise ParseError("Failed parsing element from XML data", e) from e

        document = self._document
        self.logger.info(
            "Tree building completed",
            extra={
                "element_count": self._elements_created,
                "processing_time_ms": (time.time() - start_time) * 1000,
            }
        )
        self._reset_state()
        return document

    def _reset_state(self) -> None:
        """Reset internal state for a new tree building operation."""
        self._document = Document()
        self._current = self._document.root
        self._elements_created = 0

    def _build_tree(self, content: str) -> None:
        result = next_tag(content, Cursor())
        if result.status is ScanStatus.END_OF_INPUT:
            raise ParseError("No tags found in input")
        cursor = result.cursor
        tag = result.value

        if tag.startswith(DECLARATION_MARK):
            self.logger.trace("Declaration line: %s", tag)
            apply_declaration(self._document, tag)
            result = next_tag(content, cursor)
            cursor = result.cursor
            tag = result.value

        while result.status is ScanStatus.TOKEN:
            element, cursor = self._process_tag(tag, cursor)
            if element is not None:
                text = next_text(content, cursor)
                cursor = text.cursor
                if text.is_token:
                    element.text = unescape(text.value)

            result = next_tag(content, cursor)
            cursor = result.cursor
            tag = result.value

        if self._current is not self._document.root and self.logger.trace_enabled:
            self.logger.trace("Input ended with '%s' still open", self._current.ancestry())

    def _process_tag(self, raw: str, cursor: Cursor) -> Tuple[Optional[Element], Cursor]:
        """Process one tag body.

        Args:
            raw: Tag body between ``<`` and ``>``
            cursor: Cursor positioned just after the tag

        Returns:
            The element created by an opening tag (None for comments and
            closing tags) and the cursor to resume scanning from
        """
        if raw.startswith(COMMENT_OPEN):
            return None, self._handle_comment(raw, cursor)
        if raw.startswith(CLOSING_MARK):
            self._handle_closing_tag(raw)
            return None, cursor
        if raw.startswith(DECLARATION_MARK):
            raise DeclarationError(f"Declaration <{raw}> must precede all elements")
        return self._handle_opening_tag(raw), cursor

    def _handle_comment(self, raw: str, cursor: Cursor) -> Cursor:
        if len(raw) >= len(COMMENT_OPEN) + len(COMMENT_END) and raw.endswith(COMMENT_END):
            self.logger.trace("Encountered an in-line comment, ignoring.")
            return cursor
        # The '>' ending this body was inside the comment.
        self.logger.trace("Encountered a multi-line comment, ignoring.")
        return cursor.entering_comment()

    def _handle_closing_tag(self, raw: str) -> None:
        current = self._current
        if current.parent is None:
            raise ParseError(f"Closing tag <{raw}> has no matching opening tag")

        name = raw[len(CLOSING_MARK):].strip()
        if self.config.strict_closing_tags and name != current.name:
            raise ParseError(
                f"Closing tag </{name}> does not match open element <{current.name}>"
            )
        self._current = current.parent

    def _handle_opening_tag(self, raw: str) -> Element:
        self_closing = raw.endswith(SELF_CLOSING_MARK)
        body = raw[:-len(SELF_CLOSING_MARK)] if self_closing else raw

        match = _WHITESPACE.search(body)
        if match is None:
            name, remainder = body, ""
        else:
            name, remainder = body[:match.start()], body[match.start():]
        if not name:
            raise ParseError(f"Element without a name: <{raw}>")

        element = Element(name, self._current)
        self._elements_created += 1
        if not self_closing:
            self._current = element

        attributes = parse_attributes(remainder)
        if attributes:
            self.logger.trace("Setting attributes: %s", attributes)
            element.set_attributes(attributes)

        if self.logger.trace_enabled:
            self.logger.trace("Created element '%s'", element.ancestry())
        return element

"""Error taxonomy for jeximel.

Every failure reported by the reader or the writer is an ``XMLError``. The
subclasses tell the caller which stage failed; ``cause`` keeps the underlying
exception when the fault originated elsewhere (an I/O error, a decode error,
an internal lookup failure during tree construction).
"""

from typing import Optional


class XMLError(Exception):
    """Base exception for all reader and writer failures."""

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        if self.cause is not None:
            return f"{self.message} ({type(self.cause).__name__}: {self.cause})"
        return self.message


class EmptyInputError(XMLError):
    """Raised when the input buffer has no content."""


class ParseError(XMLError):
    """Raised for scan faults, unbalanced closing tags and malformed attributes."""


class DeclarationError(ParseError):
    """Raised when a leading ``<?...?>`` pseudo-tag is not a valid declaration."""


class WriteError(XMLError):
    """Raised when a document cannot be written to its sink."""

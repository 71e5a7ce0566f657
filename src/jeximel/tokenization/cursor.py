"""Cursor-based tag and text scanner.

The scanner never keeps hidden state: every step takes a ``Cursor`` value and
returns a ``ScanResult`` carrying the advanced cursor. A caller resumes
scanning by passing the returned cursor into the next call.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from jeximel.shared.errors import ParseError

TAG_OPEN = "<"
TAG_CLOSE = ">"
COMMENT_CLOSE = "-->"


class ScanStatus(Enum):
    """Outcome of a single scan step."""

    TOKEN = auto()         # A tag body or a non-empty text run was found
    END_OF_INPUT = auto()  # No further tag exists in the buffer
    SKIP = auto()          # Nothing to return at this position


@dataclass(frozen=True)
class Cursor:
    """Resumable scan position over one buffer.

    Attributes:
        position: Offset of the next character to examine
        in_comment: True while the scanner is inside a comment whose body
            contained a ``>`` before its closing ``-->``
    """

    position: int = 0
    in_comment: bool = False

    def entering_comment(self) -> "Cursor":
        return Cursor(self.position, True)


@dataclass(frozen=True)
class ScanResult:
    """Result of a scan step: a status, an optional value and the next cursor."""

    status: ScanStatus
    cursor: Cursor
    value: Optional[str] = None

    @property
    def is_token(self) -> bool:
        return self.status is ScanStatus.TOKEN


def _check_cursor(buffer: str, cursor: Cursor) -> None:
    if not isinstance(cursor.position, int) or not 0 <= cursor.position <= len(buffer):
        raise ParseError(
            f"Scan position {cursor.position!r} is outside the buffer "
            f"(length {len(buffer)})"
        )


def next_tag(buffer: str, cursor: Cursor) -> ScanResult:
    """Find the next raw tag body.

    When the cursor is inside a comment, the scan first skips past the next
    ``-->``. The body is the text strictly between the next ``<`` and the
    following ``>``.

    Args:
        buffer: The complete document text
        cursor: Position to resume scanning from

    Returns:
        ``TOKEN`` with the body and a cursor just past the ``>``, or
        ``END_OF_INPUT`` when no complete tag remains

    Raises:
        ParseError: If the cursor does not point into the buffer
    """
    _check_cursor(buffer, cursor)
    position = cursor.position

    if cursor.in_comment:
        closer = buffer.find(COMMENT_CLOSE, position)
        if closer == -1:
            return ScanResult(ScanStatus.END_OF_INPUT, Cursor(len(buffer)))
        position = closer + len(COMMENT_CLOSE)

    start = buffer.find(TAG_OPEN, position)
    if start == -1:
        return ScanResult(ScanStatus.END_OF_INPUT, Cursor(len(buffer)))
    stop = buffer.find(TAG_CLOSE, start)
    if stop == -1 or stop <= start:
        return ScanResult(ScanStatus.END_OF_INPUT, Cursor(len(buffer)))

    return ScanResult(ScanStatus.TOKEN, Cursor(stop + 1), buffer[start + 1:stop])


def next_text(buffer: str, cursor: Cursor) -> ScanResult:
    """Find the text run between the cursor and the next ``<``.

    The run is trimmed but not unescaped. Text after the last tag of the
    buffer is never returned.

    Args:
        buffer: The complete document text
        cursor: Position just after the previously returned tag

    Returns:
        ``TOKEN`` with the trimmed text and a cursor at the next ``<``, or
        ``SKIP`` with the cursor unchanged when the run is empty

    Raises:
        ParseError: If the cursor does not point into the buffer
    """
    _check_cursor(buffer, cursor)
    start = cursor.position
    stop = buffer.find(TAG_OPEN, start)
    if stop == -1 or stop <= start:
        return ScanResult(ScanStatus.SKIP, cursor)

    text = buffer[start:stop].strip()
    if not text:
        return ScanResult(ScanStatus.SKIP, cursor)
    return ScanResult(ScanStatus.TOKEN, Cursor(stop, cursor.in_comment), text)

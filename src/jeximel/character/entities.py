"""Escaping between raw text and the five XML-reserved character entities.

Only ``&quot;``, ``&amp;``, ``&apos;``, ``&lt;`` and ``&gt;`` are recognized.
Numeric character references and any other named entity are left untouched
by ``unescape``.
"""

import re
from typing import Dict

XML_ENTITIES: Dict[str, str] = {
    "&": "&amp;",
    '"': "&quot;",
    "'": "&apos;",
    "<": "&lt;",
    ">": "&gt;",
}

_REVERSE_ENTITIES: Dict[str, str] = {
    entity: char for char, entity in XML_ENTITIES.items()
}

_ESCAPE_PATTERN = re.compile("[&\"'<>]")
_UNESCAPE_PATTERN = re.compile(r"&(?:amp|quot|apos|lt|gt);")


def escape(text: str) -> str:
    """Replace reserved characters with their entity references.

    Every character is substituted at most once, so an ampersand introduced by
    another substitution is never escaped again.

    Args:
        text: Raw text

    Returns:
        Text safe for use as element content or a quoted attribute value
    """
    if not text:
        return text
    return _ESCAPE_PATTERN.sub(lambda match: XML_ENTITIES[match.group(0)], text)


def unescape(text: str) -> str:
    """Replace the five entity references with the characters they stand for.

    A single left-to-right pass: ``&amp;lt;`` becomes ``&lt;``, not ``<``.
    Ampersands that do not start a recognized reference pass through unchanged.

    Args:
        text: Text as found in a document

    Returns:
        Raw text
    """
    if not text or "&" not in text:
        return text
    return _UNESCAPE_PATTERN.sub(lambda match: _REVERSE_ENTITIES[match.group(0)], text)

"""Attribute and declaration parsing for raw tag bodies."""

from typing import TYPE_CHECKING, Dict

from jeximel.character.entities import unescape
from jeximel.shared.errors import DeclarationError, ParseError

if TYPE_CHECKING:
    from jeximel.tree.model import Document

DECLARATION_PREFIX = "?xml"
DECLARATION_SUFFIX = "?"
QUOTE = '"'


def parse_attributes(raw: str) -> Dict[str, str]:
    """Extract ``name="value"`` pairs from the part of a tag after its name.

    Each name is the trimmed text before the next ``=``; the value is the text
    between the next two double quotes and is unescaped. A later duplicate
    name overwrites the earlier value. Scanning stops once no further ``=``
    follows.

    Args:
        raw: Attribute-bearing remainder of a tag body

    Returns:
        Attribute names mapped to values, in source order

    Raises:
        ParseError: If a value is missing its opening or closing quote

    Examples:
        >>> parse_attributes(' id="7" label="a &amp; b" /')
        {'id': '7', 'label': 'a & b'}
    """
    attributes: Dict[str, str] = {}
    if not raw or not raw.strip():
        return attributes

    position = 0
    while True:
        equals = raw.find("=", position)
        if equals == -1:
            break

        name = raw[position:equals].strip()
        if not name:
            raise ParseError(f"Attribute without a name at offset {equals}: {raw!r}")

        opening = raw.find(QUOTE, equals + 1)
        if opening == -1:
            raise ParseError(f"Attribute '{name}' has no opening quote: {raw!r}")
        closing = raw.find(QUOTE, opening + 1)
        if closing == -1:
            raise ParseError(f"Attribute '{name}' has no closing quote: {raw!r}")

        attributes[name] = unescape(raw[opening + 1:closing])
        position = closing + 1

    return attributes


def is_declaration(raw: str) -> bool:
    """Check if a raw tag body is an ``<?xml ...?>`` declaration."""
    return raw.startswith(DECLARATION_PREFIX) and raw.endswith(DECLARATION_SUFFIX)


def parse_declaration(raw: str) -> Dict[str, str]:
    """Parse the pseudo-attributes of a declaration tag body.

    Args:
        raw: Tag body, e.g. ``?xml version="1.0"?``

    Returns:
        Pseudo-attribute names mapped to values

    Raises:
        DeclarationError: If the body is not a well-delimited declaration or
            its pseudo-attributes are malformed
    """
    if len(raw) < len(DECLARATION_PREFIX) + len(DECLARATION_SUFFIX) or not is_declaration(raw):
        raise DeclarationError(f"Malformed declaration: <{raw}>")

    body = raw[len(DECLARATION_PREFIX):-len(DECLARATION_SUFFIX)]
    try:
        return parse_attributes(body)
    except ParseError as e:
        raise DeclarationError(f"Malformed declaration: <{raw}>", e) from e


def parse_boolean(value: str) -> bool:
    """Parse a ``true``/``false`` token; anything but ``true`` is False."""
    return value.strip().lower() == "true"


def apply_declaration(document: "Document", raw: str) -> None:
    """Copy ``version``, ``encoding`` and ``standalone`` from a declaration.

    Unrecognized pseudo-attributes are ignored.

    Args:
        document: Document receiving the metadata
        raw: Declaration tag body

    Raises:
        DeclarationError: If the declaration is malformed
    """
    declared = parse_declaration(raw)
    if "version" in declared:
        document.version = declared["version"]
    if "encoding" in declared:
        document.encoding = declared["encoding"]
    if "standalone" in declared:
        document.standalone = parse_boolean(declared["standalone"])

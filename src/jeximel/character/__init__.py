"""Character layer for jeximel.

This module provides escaping and unescaping of the five XML-reserved
characters used by both the reader and the writer.
"""

from .entities import (
    XML_ENTITIES,
    escape,
    unescape,
)

__all__ = [
    "XML_ENTITIES",
    "escape",
    "unescape",
]

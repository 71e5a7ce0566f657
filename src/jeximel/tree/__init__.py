"""Tree layer for jeximel.

Key Components:
    Element: Named node with attributes, optional text and ordered children
    Document: Declaration metadata plus the synthetic root owning the tree
    XMLTreeBuilder: Builds a Document from a complete buffer
"""

from .model import (
    ANCESTRY_SEPARATOR,
    ROOT_NAME,
    Document,
    Element,
)
from .builder import XMLTreeBuilder

__all__ = [
    "ANCESTRY_SEPARATOR",
    "ROOT_NAME",
    "Document",
    "Element",
    "XMLTreeBuilder",
]

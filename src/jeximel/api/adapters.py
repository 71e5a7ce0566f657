"""Integration adapters for ElementTree and lxml.

This module converts between jeximel ``Document`` trees and the element
objects of ``xml.etree.ElementTree`` and ``lxml.etree``. Conversions report
problems through a ``ConversionResult`` instead of raising, so batch callers
can inspect failures alongside successful conversions.
"""

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Type

from jeximel.shared.logging import get_logger
from jeximel.tree.model import Document, Element


@dataclass
class AdapterMetadata:
    """Metadata about an integration adapter."""

    name: str
    target_library: str
    description: str


@dataclass
class ConversionResult:
    """Result of a conversion operation."""

    success: bool
    converted_data: Any
    original_data: Any
    conversion_time_ms: float
    warnings: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)


class IntegrationAdapter(ABC):
    """Abstract base class for adapters to an ElementTree-style API.

    ``to_target`` yields a list holding one target element per top-level
    element of the document; ``from_target`` accepts a single target element
    or an iterable of them and builds a new Document.
    """

    def __init__(self, correlation_id: Optional[str] = None) -> None:
        self.correlation_id = correlation_id
        self._logger = get_logger(__name__, correlation_id, self.__class__.__name__)

    @property
    @abstractmethod
    def metadata(self) -> AdapterMetadata:
        """Get adapter metadata."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the target library can be imported."""

    @abstractmethod
    def _etree(self) -> Any:
        """Return the target library's etree module."""

    def to_target(self, document: Document) -> ConversionResult:
        """Convert a Document into a list of target elements.

        Args:
            document: Document to convert

        Returns:
            ConversionResult whose ``converted_data`` is a list of elements
        """
        start_time = time.time()
        try:
            etree = self._etree()
            converted = [
                self._convert_element(element, etree)
                for element in document.get_children()
            ]
        except Exception as e:
            return self._create_error_result(
                f"Failed to convert to {self.metadata.target_library}: {e}",
                document,
                start_time
            )

        return ConversionResult(
            success=True,
            converted_data=converted,
            original_data=document,
            conversion_time_ms=(time.time() - start_time) * 1000,
        )

    def from_target(self, target_data: Any) -> ConversionResult:
        """Convert target elements into a new Document.

        Tail text, comments and processing instructions are dropped and
        reported as warnings.

        Args:
            target_data: A target element or an iterable of target elements

        Returns:
            ConversionResult whose ``converted_data`` is a Document
        """
        start_time = time.time()
        if hasattr(target_data, "tag"):
            elements: Iterable[Any] = [target_data]
        else:
            elements = target_data

        document = Document()
        warnings: List[str] = []
        try:
            for target in elements:
                self._import_element(target, document.root, warnings)
        except Exception as e:
            return self._create_error_result(
                f"Failed to convert from {self.metadata.target_library}: {e}",
                target_data,
                start_time
            )

        return ConversionResult(
            success=True,
            converted_data=document,
            original_data=target_data,
            conversion_time_ms=(time.time() - start_time) * 1000,
            warnings=warnings,
        )

    def _convert_element(self, element: Element, etree: Any) -> Any:
        target = etree.Element(element.name)
        for key, value in element.attributes.items():
            target.set(key, value)
        if element.has_text and not element.has_children:
            target.text = element.text
        for child in element.children:
            target.append(self._convert_element(child, etree))
        return target

    def _import_element(self, target: Any, parent: Element, warnings: List[str]) -> None:
        if not isinstance(target.tag, str):
            warnings.append(f"Skipped non-element node under '{parent.name}'")
            return

        element = Element(target.tag, parent)
        element.set_attributes({str(k): str(v) for k, v in target.attrib.items()})
        if target.text and target.text.strip():
            element.text = target.text.strip()
        if target.tail and target.tail.strip():
            warnings.append(f"Dropped tail text after '{target.tag}'")
        for child in target:
            self._import_element(child, element, warnings)

    def _create_error_result(
        self,
        error_message: str,
        original_data: Any,
        start_time: float
    ) -> ConversionResult:
        self._logger.warning(error_message)
        return ConversionResult(
            success=False,
            converted_data=None,
            original_data=original_data,
            conversion_time_ms=(time.time() - start_time) * 1000,
            errors=[error_message],
        )


class ElementTreeAdapter(IntegrationAdapter):
    """Adapter for bidirectional conversion with xml.etree.ElementTree."""

    @property
    def metadata(self) -> AdapterMetadata:
        return AdapterMetadata(
            name="elementtree",
            target_library="xml.etree.ElementTree",
            description="Bidirectional conversion between Document and ElementTree",
        )

    def is_available(self) -> bool:
        return True

    def _etree(self) -> Any:
        import xml.etree.ElementTree as ET
        return ET


class LxmlAdapter(IntegrationAdapter):
    """Adapter for bidirectional conversion with lxml.etree."""

    @property
    def metadata(self) -> AdapterMetadata:
        return AdapterMetadata(
            name="lxml",
            target_library="lxml",
            description="Bidirectional conversion between Document and lxml.etree",
        )

    def is_available(self) -> bool:
        """Check if lxml is available."""
        try:
            import lxml.etree  # noqa: F401
            return True
        except ImportError:
            return False

    def _etree(self) -> Any:
        import lxml.etree
        return lxml.etree


_ADAPTERS: Dict[str, Type[IntegrationAdapter]] = {
    "elementtree": ElementTreeAdapter,
    "lxml": LxmlAdapter,
}


def get_adapter(
    adapter_name: str,
    correlation_id: Optional[str] = None
) -> Optional[IntegrationAdapter]:
    """Get an adapter instance by name.

    Returns:
        Adapter instance if known and its library is importable, None otherwise
    """
    adapter_class = _ADAPTERS.get(adapter_name)
    if adapter_class is None:
        return None
    adapter = adapter_class(correlation_id)
    return adapter if adapter.is_available() else None


def list_available_adapters() -> List[AdapterMetadata]:
    """List metadata of adapters whose target library is importable."""
    available = []
    for adapter_class in _ADAPTERS.values():
        adapter = adapter_class()
        if adapter.is_available():
            available.append(adapter.metadata)
    return available

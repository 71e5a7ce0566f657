"""Element and Document types for jeximel.

An ``Element`` owns an ordered list of child elements and keeps a non-owning
reference to its parent. Attaching and detaching always update both sides of
the relation in the same call, so ``element.parent`` reflects the list that
actually contains the element.

A ``Document`` owns one synthetic root element named ``ROOT_NAME``. The
synthetic root is never written out; its children are the top-level elements
of the document.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Mapping, Optional, Union

ROOT_NAME = "_ROOT"
ANCESTRY_SEPARATOR = " -> "


@dataclass(eq=False)
class Element:
    """Represents a single XML element in the document tree.

    Creating an element with a ``parent`` attaches it to the end of the
    parent's children immediately.

    Examples:
        >>> parent = Element("list")
        >>> item = Element("item", parent)
        >>> parent.get_child("item") is item
        True
        >>> item.ancestry()
        'list -> item'
    """

    name: str
    parent: Optional["Element"] = field(default=None, repr=False)
    text: Optional[str] = None
    attributes: Dict[str, str] = field(default_factory=dict)
    children: List["Element"] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self) -> None:
        """Validate the name and attach to the initial parent."""
        if not isinstance(self.name, str) or not self.name:
            raise ValueError("Element name cannot be empty")

        parent = self.parent
        self.parent = None
        if parent is not None:
            parent.add_child(self)

    # Children

    def add_child(self, child: Union["Element", str]) -> "Element":
        """Append a child element and establish the parent relationship.

        Args:
            child: Element to attach, or the name of a new element to create

        Returns:
            The attached child

        Raises:
            TypeError: If ``child`` is neither an Element nor a string
            ValueError: If attaching would make the element its own ancestor
        """
        if isinstance(child, str):
            child = Element(child)
        if not isinstance(child, Element):
            raise TypeError("Child must be an Element instance or a name")

        # A childless element can only be an ancestor of itself.
        if child is self:
            raise ValueError("An element cannot be attached below itself")
        if child.children:
            ancestor = self.parent
            while ancestor is not None:
                if ancestor is child:
                    raise ValueError("An element cannot be attached below itself")
                ancestor = ancestor.parent

        if child.parent is not None:
            child.remove()

        child.parent = self
        self.children.append(child)
        return child

    def remove(self) -> bool:
        """Detach this element from its parent.

        Returns:
            True if the element was attached, False otherwise
        """
        if self.parent is None:
            return False
        return self.parent.remove_child(self)

    def remove_child(self, child: Union["Element", str]) -> bool:
        """Remove a child by identity, or the first child with a given name.

        Args:
            child: The child element itself, or a name to match

        Returns:
            True if a child was removed, False otherwise
        """
        for index, candidate in enumerate(self.children):
            if isinstance(child, Element):
                matches = candidate is child
            else:
                matches = candidate.name == child
            if matches:
                del self.children[index]
                candidate.parent = None
                return True
        return False

    def has_child(self, name: str) -> bool:
        """Check if a direct child with the given name exists."""
        return self.get_child(name) is not None

    def get_child(self, name: str) -> Optional["Element"]:
        """Find first direct child with matching name."""
        for child in self.children:
            if child.name == name:
                return child
        return None

    def get_child_by_attribute(
        self,
        attribute: str,
        name: Optional[str] = None,
        value: Optional[str] = None,
    ) -> Optional["Element"]:
        """Find first direct child carrying an attribute.

        Args:
            attribute: Attribute name the child must have
            name: Only consider children with this element name
            value: Only match when the attribute has exactly this value

        Returns:
            The first matching child, or None
        """
        for child in self.children:
            if name is not None and child.name != name:
                continue
            if attribute not in child.attributes:
                continue
            if value is None or child.attributes[attribute] == value:
                return child
        return None

    def get_children(self, name: Optional[str] = None) -> List["Element"]:
        """Get direct children in document order, optionally filtered by name."""
        if name is None:
            return list(self.children)
        return [child for child in self.children if child.name == name]

    @property
    def has_children(self) -> bool:
        return bool(self.children)

    def iter(self) -> Iterator["Element"]:
        """Iterate over this element and all descendants, depth first."""
        stack = [self]
        while stack:
            element = stack.pop()
            yield element
            stack.extend(reversed(element.children))

    # Text

    @property
    def has_text(self) -> bool:
        """Check for text with at least one non-whitespace character."""
        return bool(self.text and self.text.strip())

    # Attributes

    def get_attribute(self, name: str, default: str = "") -> str:
        """Get attribute value, or ``default`` when it is not set."""
        return self.attributes.get(name, default)

    def set_attribute(self, name: str, value: str) -> None:
        """Set attribute value, replacing any previous value."""
        if not isinstance(name, str) or not isinstance(value, str):
            raise TypeError("Attribute name and value must be strings")
        if not name:
            raise ValueError("Attribute name cannot be empty")
        self.attributes[name] = value

    def has_attribute(self, name: str) -> bool:
        return name in self.attributes

    @property
    def has_attributes(self) -> bool:
        return bool(self.attributes)

    def get_attributes(self) -> Dict[str, str]:
        """Get a copy of the attribute mapping."""
        return dict(self.attributes)

    def set_attributes(self, attributes: Mapping[str, str]) -> None:
        """Replace all attributes with the given mapping."""
        replacement: Dict[str, str] = {}
        for name, value in attributes.items():
            if not isinstance(name, str) or not isinstance(value, str):
                raise TypeError("Attribute name and value must be strings")
            replacement[name] = value
        self.attributes = replacement

    # Descriptions

    def ancestry(self, separator: str = ANCESTRY_SEPARATOR) -> str:
        """Get the names from the topmost ancestor down to this element.

        Examples:
            >>> document = Document()
            >>> Element("b", document.add_child("a")).ancestry()
            '_ROOT -> a -> b'
        """
        names = []
        element: Optional[Element] = self
        while element is not None:
            names.append(element.name)
            element = element.parent
        return separator.join(reversed(names))

    def __str__(self) -> str:
        attributes = ",".join(f"{key}={value}" for key, value in self.attributes.items())
        children = ",".join(child.name for child in self.children)
        return f"{self.name}({attributes}){{{children}}}"


@dataclass
class Document:
    """Root XML document container with declaration metadata.

    ``version`` and ``encoding`` are None unless the declaration set them;
    ``standalone`` defaults to True.
    """

    version: Optional[str] = None
    encoding: Optional[str] = None
    standalone: bool = True
    root: Element = field(
        default_factory=lambda: Element(ROOT_NAME), init=False, repr=False
    )

    @property
    def has_declaration(self) -> bool:
        """Check if any declaration field differs from its default."""
        return (
            self.version is not None
            or self.encoding is not None
            or not self.standalone
        )

    def add_child(self, child: Union[Element, str]) -> Element:
        """Add a top-level element."""
        return self.root.add_child(child)

    def get_child(self, name: str) -> Optional[Element]:
        """Find first top-level element with matching name."""
        return self.root.get_child(name)

    def has_child(self, name: str) -> bool:
        return self.root.has_child(name)

    def get_children(self, name: Optional[str] = None) -> List[Element]:
        """Get top-level elements in document order."""
        return self.root.get_children(name)

    def remove_child(self, child: Union[Element, str]) -> bool:
        """Remove a top-level element by identity or first match on name."""
        return self.root.remove_child(child)

    def iter_elements(self) -> Iterator[Element]:
        """Iterate over all elements in document order, excluding the synthetic root."""
        elements = self.root.iter()
        next(elements)
        yield from elements

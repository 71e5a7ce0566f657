"""Tests for the Element and Document tree model."""

import pytest

from jeximel.tree.model import ROOT_NAME, Document, Element


class TestElementConstruction:
    """Test Element creation."""

    def test_empty_name_rejected(self):
        """Test that an element needs a name."""
        with pytest.raises(ValueError, match="Element name cannot be empty"):
            Element("")

    def test_parent_attaches_child(self):
        """Test that passing a parent attaches the new element."""
        parent = Element("list")
        item = Element("item", parent)

        assert item.parent is parent
        assert parent.get_children() == [item]

    def test_defaults(self):
        """Test default field values."""
        element = Element("a")

        assert element.parent is None
        assert element.text is None
        assert element.attributes == {}
        assert not element.has_children
        assert not element.has_text
        assert not element.has_attributes

    def test_whitespace_text_is_not_text(self):
        """Test has_text ignores blank text."""
        element = Element("a")
        element.text = " \t\n"

        assert not element.has_text
        element.text = " x "
        assert element.has_text


class TestElementChildren:
    """Test child management."""

    def test_children_keep_attachment_order(self):
        """Test that children iterate in the order they were attached."""
        parent = Element("p")
        for name in ("c", "a", "b"):
            parent.add_child(name)

        assert [child.name for child in parent.get_children()] == ["c", "a", "b"]

    def test_order_preserved_after_interleaved_removals(self):
        """Test order survives removals in the middle of the list."""
        parent = Element("p")
        children = [parent.add_child(f"c{i}") for i in range(5)]

        assert parent.remove_child(children[1])
        parent.add_child("c5")
        assert parent.remove_child(children[3])

        assert [child.name for child in parent.children] == ["c0", "c2", "c4", "c5"]

    def test_add_child_by_name_returns_element(self):
        """Test adding a child by name creates and returns it."""
        parent = Element("p")
        child = parent.add_child("c")

        assert isinstance(child, Element)
        assert child.parent is parent

    def test_add_child_invalid_type(self):
        """Test adding something that is not an element."""
        with pytest.raises(TypeError, match="Child must be an Element instance or a name"):
            Element("p").add_child(42)

    def test_add_child_moves_attached_element(self):
        """Test that attaching to a new parent detaches from the old one."""
        first = Element("first")
        second = Element("second")
        child = first.add_child("c")

        second.add_child(child)

        assert child.parent is second
        assert not first.has_children
        assert second.get_children() == [child]

    def test_cycle_rejected(self):
        """Test an element cannot become its own descendant."""
        top = Element("top")
        middle = top.add_child("middle")

        with pytest.raises(ValueError, match="cannot be attached below itself"):
            middle.add_child(top)
        with pytest.raises(ValueError):
            top.add_child(top)

    def test_cycle_through_deeper_ancestor_rejected(self):
        """Test attaching an ancestor with children below its descendant."""
        top = Element("top")
        leaf = top.add_child("middle").add_child("leaf")

        with pytest.raises(ValueError, match="cannot be attached below itself"):
            leaf.add_child(top)
        assert top.parent is None

    def test_move_leaf_below_sibling(self):
        """Test re-parenting a childless element within one tree."""
        top = Element("top")
        first = top.add_child("first")
        second = top.add_child("second")

        first.add_child(second)

        assert second.parent is first
        assert top.get_children() == [first]

    def test_deep_chain_iteration(self):
        """Test iteration over a chain deeper than the recursion limit."""
        top = Element("n0")
        element = top
        for i in range(1, 5000):
            element = Element(f"n{i}", element)

        names = [e.name for e in top.iter()]

        assert len(names) == 5000
        assert names[-1] == "n4999"

    def test_remove_clears_both_relations(self):
        """Test that detaching clears the parent and the children list."""
        parent = Element("p")
        child = parent.add_child("c")

        assert child.remove()

        assert child.parent is None
        assert child not in parent.children
        assert not child.remove()

    def test_remove_child_by_name_removes_first_match(self):
        """Test removal by name affects the first match only."""
        parent = Element("p")
        first = parent.add_child("c")
        second = parent.add_child("c")

        assert parent.remove_child("c")

        assert parent.get_children() == [second]
        assert first.parent is None
        assert not parent.remove_child("missing")

    def test_lookup_by_name(self):
        """Test get_child, has_child and filtered get_children."""
        parent = Element("p")
        first = parent.add_child("item")
        parent.add_child("other")
        second = parent.add_child("item")

        assert parent.get_child("item") is first
        assert parent.has_child("other")
        assert not parent.has_child("missing")
        assert parent.get_child("missing") is None
        assert parent.get_children("item") == [first, second]

    def test_get_children_returns_copy(self):
        """Test mutating the returned list leaves the element intact."""
        parent = Element("p")
        parent.add_child("c")

        parent.get_children().clear()

        assert parent.has_children

    def test_get_child_by_attribute(self):
        """Test lookup by attribute presence, name and value."""
        parent = Element("p")
        plain = parent.add_child("item")
        blue = parent.add_child("item")
        blue.set_attribute("color", "blue")
        red = parent.add_child("thing")
        red.set_attribute("color", "red")

        assert parent.get_child_by_attribute("color") is blue
        assert parent.get_child_by_attribute("color", value="red") is red
        assert parent.get_child_by_attribute("color", name="thing") is red
        assert parent.get_child_by_attribute("color", name="item", value="red") is None
        assert parent.get_child_by_attribute("size") is None
        assert plain.get_child_by_attribute("color") is None

    def test_iter_depth_first(self):
        """Test iteration over an element and its descendants."""
        top = Element("a")
        b = top.add_child("b")
        b.add_child("c")
        top.add_child("d")

        assert [element.name for element in top.iter()] == ["a", "b", "c", "d"]


class TestElementAttributes:
    """Test attribute management."""

    def test_set_and_get(self):
        """Test setting, replacing and reading attributes."""
        element = Element("a")
        element.set_attribute("x", "1")
        element.set_attribute("x", "2")

        assert element.get_attribute("x") == "2"
        assert element.has_attribute("x")
        assert element.has_attributes

    def test_missing_attribute_default(self):
        """Test the default for a missing attribute."""
        element = Element("a")

        assert element.get_attribute("missing") == ""
        assert element.get_attribute("missing", "fallback") == "fallback"
        assert not element.has_attribute("missing")

    def test_invalid_attributes(self):
        """Test attribute validation."""
        element = Element("a")

        with pytest.raises(TypeError):
            element.set_attribute("x", 1)
        with pytest.raises(ValueError, match="Attribute name cannot be empty"):
            element.set_attribute("", "1")

    def test_set_attributes_replaces_mapping(self):
        """Test bulk replacement keeps the given order."""
        element = Element("a")
        element.set_attribute("old", "1")

        element.set_attributes({"b": "2", "a": "1"})

        assert list(element.get_attributes()) == ["b", "a"]
        assert not element.has_attribute("old")

    def test_get_attributes_returns_copy(self):
        """Test mutating the returned mapping leaves the element intact."""
        element = Element("a")
        element.set_attribute("x", "1")

        element.get_attributes()["y"] = "2"

        assert not element.has_attribute("y")


class TestElementDescriptions:
    """Test ancestry and string rendering."""

    def test_ancestry(self):
        """Test ancestry lists names from the top down."""
        top = Element("a")
        leaf = top.add_child("b").add_child("c")

        assert leaf.ancestry() == "a -> b -> c"
        assert leaf.ancestry("/") == "a/b/c"

    def test_str(self):
        """Test the one-line summary."""
        element = Element("a")
        element.set_attribute("x", "1")
        element.set_attribute("y", "2")
        element.add_child("b")
        element.add_child("c")

        assert str(element) == "a(x=1,y=2){b,c}"
        assert str(Element("e")) == "e(){}"


class TestDocument:
    """Test Document container."""

    def test_defaults(self):
        """Test declaration defaults and the synthetic root."""
        document = Document()

        assert document.version is None
        assert document.encoding is None
        assert document.standalone is True
        assert document.root.name == ROOT_NAME
        assert not document.has_declaration

    def test_has_declaration(self):
        """Test any non-default field counts as a declaration."""
        assert Document(version="1.0").has_declaration
        assert Document(encoding="UTF-8").has_declaration
        assert Document(standalone=False).has_declaration

    def test_top_level_elements(self):
        """Test adding, finding and removing top-level elements."""
        document = Document()
        a = document.add_child("a")
        b = document.add_child(Element("b"))

        assert document.get_children() == [a, b]
        assert document.get_child("b") is b
        assert document.has_child("a")
        assert a.parent is document.root
        assert a.ancestry() == "_ROOT -> a"

        assert document.remove_child("a")
        assert document.get_children() == [b]

    def test_iter_elements_excludes_root(self):
        """Test iteration over every element in document order."""
        document = Document()
        a = document.add_child("a")
        a.add_child("b")
        document.add_child("c")

        assert [element.name for element in document.iter_elements()] == ["a", "b", "c"]

    def test_documents_do_not_share_roots(self):
        """Test each document gets its own synthetic root."""
        first = Document()
        second = Document()
        first.add_child("a")

        assert first.root is not second.root
        assert not second.get_children()

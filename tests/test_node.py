"""Tests for the Node class."""

from __future__ import annotations

from typing import Any

import pytest

from pyHomie.enums import PropertyDatatype
from pyHomie.identifier import InvalidIdentifierError
from pyHomie.node import Node
from pyHomie.property import Property


def _make_node(**kwargs: Any) -> Node:
    defaults: dict[str, Any] = {
        "device": None,
        "prefix": "test",
        "node_id": "nodeID",
        "name": "nodeName",
        "node_type": "nodeType",
    }
    defaults.update(kwargs)
    return Node(**defaults)


class TestNodeConstruction:

    def test_defaults(self):
        node = _make_node()
        assert node.id == "nodeID"
        assert node.name == "nodeName"
        assert node.type == "nodeType"
        assert node.topic == "test/nodeID"
        assert node.device is None
        assert node.properties == {}

    def test_invalid_id_raises(self):
        with pytest.raises(InvalidIdentifierError) as excinfo:
            _make_node(node_id="node id")
        assert excinfo.value.kind == "node"


class TestNodeProperties:

    def test_add_property(self):
        node = _make_node()
        prop = node.add_property("prop1", "Prop 1", PropertyDatatype.INTEGER)
        assert isinstance(prop, Property)
        assert prop.node is node
        assert prop.topic == "test/nodeID/prop1"
        assert node.get_property("prop1") is prop

    def test_add_property_replaces_same_id(self):
        node = _make_node()
        first = node.add_property("prop1", "first", PropertyDatatype.INTEGER)
        second = node.add_property("prop1", "second", PropertyDatatype.STRING)
        assert node.get_property("prop1") is second
        assert node.get_property("prop1") is not first
        assert len(node.properties) == 1

    def test_undefined_property(self):
        assert _make_node().get_property("propertyID") is None

    def test_properties_view_is_a_copy(self):
        node = _make_node()
        node.add_property("prop1", "Prop 1", PropertyDatatype.INTEGER)
        view = node.properties
        view.clear()
        assert len(node.properties) == 1

    def test_invalid_property_id_raises(self):
        with pytest.raises(InvalidIdentifierError):
            _make_node().add_property("-bad", "bad", PropertyDatatype.STRING)


class TestNodeAttributes:

    def test_empty_node(self):
        node = _make_node()
        assert set(node.get_attributes()) == {
            ("test/nodeID/$name", "nodeName"),
            ("test/nodeID/$type", "nodeType"),
            ("test/nodeID/$properties", ""),
        }
        assert node.get_values() == []

    def test_node_with_properties(self):
        node = _make_node()
        node.add_property("prop1", "prop1", PropertyDatatype.INTEGER).set(10)
        node.add_property("prop2", "prop2", PropertyDatatype.INTEGER).set(20)

        assert set(node.get_attributes()) == {
            ("test/nodeID/$name", "nodeName"),
            ("test/nodeID/$type", "nodeType"),
            ("test/nodeID/$properties", "prop1,prop2"),
            ("test/nodeID/prop1/$name", "prop1"),
            ("test/nodeID/prop1/$datatype", "integer"),
            ("test/nodeID/prop2/$name", "prop2"),
            ("test/nodeID/prop2/$datatype", "integer"),
        }
        assert set(node.get_values()) == {
            ("test/nodeID/prop1", "10"),
            ("test/nodeID/prop2", "20"),
        }

    def test_properties_list_is_sorted(self):
        node = _make_node()
        for prop_id in ("zeta", "alpha", "Mid", "beta"):
            node.add_property(prop_id, prop_id, PropertyDatatype.STRING)
        attributes = dict(node.get_attributes())
        assert attributes["test/nodeID/$properties"] == "Mid,alpha,beta,zeta"


class TestNodeSetters:

    def test_only_settable_properties(self):
        node = _make_node()
        node.add_property("prop1", "prop1", PropertyDatatype.STRING)
        prop2 = node.add_property(
            "prop2", "prop2", PropertyDatatype.STRING
        ).set_settable(True)

        setters = node.get_setter_properties()
        assert setters == {"test/nodeID/prop2/set": prop2}

    def test_no_settable_properties(self):
        node = _make_node()
        node.add_property("prop1", "prop1", PropertyDatatype.STRING)
        assert node.get_setter_properties() == {}

"""Node: a group of properties inside a Homie device.

A node usually maps to one sensor or actuator on the device (a BME280
chip, a relay board, …).  It owns its :class:`Property` instances and
aggregates their attributes and values.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Dict, List, Optional, Union

from pyHomie.attribute import (
    ATTRIBUTE_NAME,
    ATTRIBUTE_PROPERTIES,
    ATTRIBUTE_TYPE,
    TopicValuePair,
    join_ids,
    join_topic,
)
from pyHomie.enums import PropertyDatatype
from pyHomie.identifier import validate_id
from pyHomie.property import Property

if TYPE_CHECKING:
    from pyHomie.device import Device

logger = logging.getLogger(__name__)


class Node:
    """A Homie node.

    Parameters
    ----------
    device:
        The owning :class:`~pyHomie.device.Device`, or ``None`` for a
        standalone node.
    prefix:
        Topic of the owning device; the node topic is
        ``<prefix>/<node_id>``.
    node_id:
        Topic id of the node.
    name:
        Human-readable name (``$name``).
    node_type:
        Free-form type label (``$type``).

    Raises
    ------
    InvalidIdentifierError
        If *node_id* is not a valid topic id.
    """

    def __init__(
        self,
        *,
        device: Optional[Device],
        prefix: str,
        node_id: str,
        name: str,
        node_type: str,
    ) -> None:
        self._id: str = validate_id(node_id, "node")
        self._device: Optional[Device] = device
        self._topic: str = join_topic(prefix, node_id)
        self._name: str = name
        self._type: str = node_type
        self._properties: Dict[str, Property] = {}

    # ---- accessors ---------------------------------------------------

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def type(self) -> str:
        return self._type

    @property
    def topic(self) -> str:
        return self._topic

    @property
    def device(self) -> Optional[Device]:
        """The owning device (handy for chaining declarations)."""
        return self._device

    @property
    def properties(self) -> Dict[str, Property]:
        """All properties keyed by id (read-only view)."""
        return dict(self._properties)

    # ---- property management -----------------------------------------

    def add_property(
        self,
        property_id: str,
        name: str,
        datatype: Union[PropertyDatatype, str],
    ) -> Property:
        """Create a :class:`Property` on this node and return it.

        Adding a property with an id that already exists replaces the
        previous one.

        Raises
        ------
        InvalidIdentifierError
            If *property_id* is not a valid topic id.
        """
        prop = Property(
            node=self,
            prefix=self._topic,
            property_id=property_id,
            name=name,
            datatype=datatype,
        )
        if property_id in self._properties:
            logger.debug(
                "Replacing property '%s' on node %s", property_id, self._topic,
            )
        self._properties[property_id] = prop
        logger.debug("Added property %s (%s)", prop.topic, prop.datatype)
        return prop

    def get_property(self, property_id: str) -> Optional[Property]:
        """Look up a property by id."""
        return self._properties.get(property_id)

    # ---- topic / value pairs -----------------------------------------

    def get_attributes(self) -> List[TopicValuePair]:
        """Return the node attributes followed by all property attributes."""
        attributes = [
            TopicValuePair(join_topic(self._topic, ATTRIBUTE_NAME), self._name),
            TopicValuePair(join_topic(self._topic, ATTRIBUTE_TYPE), self._type),
            TopicValuePair(
                join_topic(self._topic, ATTRIBUTE_PROPERTIES),
                join_ids(self._properties),
            ),
        ]
        for prop in self._properties.values():
            attributes.extend(prop.get_attributes())
        return attributes

    def get_values(self) -> List[TopicValuePair]:
        return [prop.get_value() for prop in self._properties.values()]

    def get_setter_properties(self) -> Dict[str, Property]:
        """Map each setter topic to its settable property."""
        setters: Dict[str, Property] = {}
        for prop in self._properties.values():
            topic = prop.get_setter_topic()
            if topic:
                setters[topic] = prop
        return setters

    # ---- dunder -------------------------------------------------------

    def __repr__(self) -> str:
        return (
            f"Node(topic={self._topic!r}, type={self._type!r}, "
            f"properties={len(self._properties)})"
        )

"""Device: the root of a Homie device description.

A :class:`Device` owns a set of :class:`~pyHomie.node.Node` objects,
which in turn own :class:`~pyHomie.property.Property` objects.  The
device turns this tree into MQTT topic/value pairs:

* :meth:`Device.get_homie_attributes`: the full description
  (``$homie``, ``$name``, ``$state``, ``$nodes``, … for every level).
  Publish it once, and again whenever the topology changes.
* :meth:`Device.get_values`: the current value of every property.
* :meth:`Device.get_property_setters`: the ``…/set`` command topics
  to subscribe to, mapped to their properties.

Publishing itself is left to the caller: install a callback with
:meth:`Device.on_set` and it is invoked for every
:meth:`Property.set` (unless the property has its own callback) and
every :meth:`Device.set_state`.

Lifecycle
~~~~~~~~~

1. Create the device (state ``init``), optionally with a
   :class:`~pyHomie.config.HomieConfig`.
2. Add nodes and properties.  Topics are computed at this point and
   never change afterwards, so :meth:`Device.set_root` is only allowed
   before the first node is added.
3. Publish the attributes, then call ``set_state(DeviceState.READY)``.
4. Push values with :meth:`Property.set` for the rest of the process.

The tree is not thread-safe; share a device between threads only
behind an external lock.

Usage example::

    from pyHomie import Device, DeviceState, PropertyDatatype

    device = (
        Device("raspberry-pi", "Raspberry PI agent")
        .add_node("bme280", "BME280 on GPIO", "bme280")
        .add_property("temperature", "Temperature", PropertyDatatype.FLOAT)
        .set_unit("°C")
        .node
        .add_property("humidity", "Humidity", PropertyDatatype.FLOAT)
        .set_unit("%")
        .node
        .device
    )

    for topic, value in device.get_homie_attributes():
        client.publish(topic, value, retain=True)

    device.on_set(lambda topic, value, datatype: client.publish(topic, value))
    device.set_state(DeviceState.READY)
    device.get_node("bme280").get_property("temperature").set(21.5)
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Union

from pyHomie.attribute import (
    ATTRIBUTE_EXTENSIONS,
    ATTRIBUTE_HOMIE_VERSION,
    ATTRIBUTE_NAME,
    ATTRIBUTE_NODES,
    ATTRIBUTE_STATE,
    Setter,
    TopicValuePair,
    join_ids,
    join_topic,
)
from pyHomie.config import HomieConfig
from pyHomie.enums import DeviceState, PropertyDatatype
from pyHomie.identifier import validate_id
from pyHomie.node import Node
from pyHomie.property import Property

logger = logging.getLogger(__name__)


class Device:
    """A Homie device.

    Parameters
    ----------
    device_id:
        Topic id of the device: ``<root>/<device_id>/…``.
    name:
        Human-readable name (``$name``).
    config:
        Root topic and convention version.  Defaults to
        ``HomieConfig()`` (root ``homie``, version ``4.0.0``).

    Raises
    ------
    InvalidIdentifierError
        If *device_id* is not a valid topic id.  Check with
        :func:`~pyHomie.identifier.is_valid_id` beforehand to avoid it.
    """

    def __init__(
        self,
        device_id: str,
        name: str,
        *,
        config: Optional[HomieConfig] = None,
    ) -> None:
        self._id: str = validate_id(device_id, "device")
        self._name: str = name
        self._config: HomieConfig = config or HomieConfig()
        self._topic: str = join_topic(self._config.root, device_id)
        self._state: DeviceState = DeviceState.INIT
        self._on_set: Optional[Setter] = None
        self._nodes: Dict[str, Node] = {}

    # ---- accessors ---------------------------------------------------

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def topic(self) -> str:
        """Base topic ``<root>/<device_id>``."""
        return self._topic

    @property
    def config(self) -> HomieConfig:
        return self._config

    @property
    def root(self) -> str:
        return self._config.root

    @property
    def version(self) -> str:
        return self._config.version

    @property
    def state(self) -> DeviceState:
        return self._state

    @property
    def state_topic(self) -> str:
        return join_topic(self._topic, ATTRIBUTE_STATE)

    @property
    def nodes(self) -> Dict[str, Node]:
        """All nodes keyed by id (read-only view)."""
        return dict(self._nodes)

    @property
    def on_set_callback(self) -> Optional[Setter]:
        """The device-level callback, if any."""
        return self._on_set

    # ---- configuration -----------------------------------------------

    def set_root(self, root: str) -> Device:
        """Change the MQTT root topic (default ``homie``).

        Node and property topics are computed when they are added, so
        the root can only change while the device has no nodes.
        Trailing slashes are dropped; a leading slash is kept, so
        ``"/homie"`` yields ``/homie/<device>/...`` topics.

        Raises
        ------
        RuntimeError
            If a node has already been added.

        See https://homieiot.github.io/specification/#base-topic
        """
        if self._nodes:
            raise RuntimeError(
                "Cannot change the root topic of a device that already "
                "has nodes.  Set the root before adding nodes."
            )
        self._config = self._config.with_root(root)
        self._topic = join_topic(root, self._id)
        logger.debug("Device %s: root topic changed to %r", self._id, root)
        return self

    def on_set(self, callback: Optional[Setter]) -> Device:
        """Install the device-level callback, or remove it with ``None``.

        It is used by :meth:`set_state` and by every property that has
        no callback of its own.
        """
        self._on_set = callback
        return self

    # ---- lifecycle ---------------------------------------------------

    def set_state(self, state: Union[DeviceState, str]) -> Device:
        """Change the device state and notify the device callback.

        Any transition is accepted; following the recommended lifecycle
        is up to the caller.

        Raises
        ------
        ValueError
            If *state* is not a Homie device state.

        See https://homieiot.github.io/specification/#device-lifecycle
        """
        self._state = DeviceState(state)
        logger.info("Device %s: state -> %s", self._id, self._state.value)
        if self._on_set is not None:
            try:
                self._on_set(
                    self.state_topic,
                    self._state.value,
                    PropertyDatatype.STRING,
                )
            except Exception:  # noqa: BLE001
                logger.exception(
                    "on_set callback raised for device state '%s'",
                    self.state_topic,
                )
        return self

    def get_state(self) -> TopicValuePair:
        return TopicValuePair(self.state_topic, self._state.value)

    # ---- node management ---------------------------------------------

    def add_node(self, node_id: str, name: str, node_type: str) -> Node:
        """Create a :class:`Node` on this device and return it.

        Adding a node with an id that already exists replaces the
        previous one (and all of its properties).

        Raises
        ------
        InvalidIdentifierError
            If *node_id* is not a valid topic id.
        """
        node = Node(
            device=self,
            prefix=self._topic,
            node_id=node_id,
            name=name,
            node_type=node_type,
        )
        if node_id in self._nodes:
            logger.debug(
                "Replacing node '%s' on device %s", node_id, self._id,
            )
        self._nodes[node_id] = node
        logger.debug("Added node %s (type %r)", node.topic, node_type)
        return node

    def get_node(self, node_id: str) -> Optional[Node]:
        """Look up a node by id."""
        return self._nodes.get(node_id)

    # ---- topic / value pairs -----------------------------------------

    def get_homie_attributes(self) -> List[TopicValuePair]:
        """Return every attribute of the device, its nodes and properties.

        Order is not significant; only the ``$nodes`` and
        ``$properties`` id lists are sorted.
        """
        attributes = [
            TopicValuePair(
                join_topic(self._topic, ATTRIBUTE_HOMIE_VERSION),
                self._config.version,
            ),
            TopicValuePair(join_topic(self._topic, ATTRIBUTE_NAME), self._name),
            self.get_state(),
            TopicValuePair(
                join_topic(self._topic, ATTRIBUTE_NODES),
                join_ids(self._nodes),
            ),
            # No extensions are supported.
            TopicValuePair(join_topic(self._topic, ATTRIBUTE_EXTENSIONS), ""),
        ]
        for node in self._nodes.values():
            attributes.extend(node.get_attributes())
        return attributes

    def get_values(self) -> List[TopicValuePair]:
        """Return the current value of every property."""
        values: List[TopicValuePair] = []
        for node in self._nodes.values():
            values.extend(node.get_values())
        return values

    def get_property_setters(self) -> Dict[str, Property]:
        """Map every ``…/set`` command topic to its settable property.

        See https://homieiot.github.io/specification/#property-command-topic
        """
        setters: Dict[str, Property] = {}
        for node in self._nodes.values():
            setters.update(node.get_setter_properties())
        return setters

    # ---- dunder -------------------------------------------------------

    def __repr__(self) -> str:
        return (
            f"Device(topic={self._topic!r}, state={self._state.value!r}, "
            f"nodes={len(self._nodes)})"
        )

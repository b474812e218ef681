"""Property: the leaf of the Homie device tree.

A :class:`Property` holds one value of a node (a temperature reading, a
relay state, …) together with the metadata announced as ``$``-attributes
under its topic.

Values are stored as the string published on MQTT.  Each call to
:meth:`Property.set` converts the Python value to that string and then
invokes the value-change callback synchronously:

  1. the property's own callback (see :meth:`Property.on_set`), or
  2. the callback of the owning device (:meth:`Device.on_set`), or
  3. nothing, if neither is installed.

Attribute emission follows the convention's defaults: ``$settable`` is
only published when ``true`` and ``$retained`` only when ``false``.

Usage example::

    node = device.add_node("bme280", "BME280 on GPIO", "bme280")
    temperature = (
        node.add_property("temperature", "Temperature", PropertyDatatype.FLOAT)
        .set_unit("°C")
    )
    temperature.set(21.5)   # -> callback("homie/<dev>/bme280/temperature",
                            #             "21.5", PropertyDatatype.FLOAT)
"""

from __future__ import annotations

import logging
import math
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, Any, List, Optional, Union

from pyHomie.attribute import (
    ATTRIBUTE_DATATYPE,
    ATTRIBUTE_FORMAT,
    ATTRIBUTE_NAME,
    ATTRIBUTE_RETAINED,
    ATTRIBUTE_SETTABLE,
    ATTRIBUTE_UNIT,
    SETTER_SUFFIX,
    Setter,
    TopicValuePair,
    join_topic,
)
from pyHomie.enums import PropertyDatatype
from pyHomie.identifier import validate_id

if TYPE_CHECKING:
    from pyHomie.node import Node

logger = logging.getLogger(__name__)

# Decimal exponent from which floats switch to exponent notation.
_FLOAT_EXPONENT_LIMIT = 21


def to_payload(value: Any) -> str:
    """Convert a Python value to its canonical Homie payload string."""
    if value is None:
        return ""
    # Enum before str/int: str- and int-based enums must publish their
    # value, not their member name.
    if isinstance(value, Enum):
        return to_payload(value.value)
    # bool must be checked before int (bool is a subclass of int).
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(int(value))
    if isinstance(value, float):
        return _format_float(float(value))
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    return str(value)


def _format_float(value: float) -> str:
    """Render *value* with the fewest digits that round-trip.

    Whole numbers carry no ``.0``.  Exponent notation (``1e+21``,
    ``1e-05``) is used when the decimal exponent is below -4 or at
    least 21.  Non-finite values publish as ``NaN``, ``+Inf`` and
    ``-Inf``.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"

    number = Decimal(repr(value)).normalize()
    sign, digits, exponent = number.as_tuple()
    if not any(digits):
        return "-0" if sign else "0"

    point = len(digits) + exponent - 1
    if -4 <= point < _FLOAT_EXPONENT_LIMIT:
        return format(number, "f")

    mantissa = str(digits[0])
    if len(digits) > 1:
        mantissa += "." + "".join(str(d) for d in digits[1:])
    return "%s%se%s%02d" % (
        "-" if sign else "", mantissa, "-" if point < 0 else "+", abs(point),
    )


def _to_bool_payload(value: bool) -> str:
    return "true" if value else "false"


class Property:
    """A single Homie property.

    Parameters
    ----------
    node:
        The owning :class:`~pyHomie.node.Node`, or ``None`` for a
        standalone property.  Used to find the device-level callback.
    prefix:
        Topic of the owning node; the property topic is
        ``<prefix>/<property_id>``.
    property_id:
        Topic id of the property.
    name:
        Human-readable name (``$name``).
    datatype:
        A :class:`PropertyDatatype` or its string value.

    Raises
    ------
    InvalidIdentifierError
        If *property_id* is not a valid topic id.
    ValueError
        If *datatype* is not a Homie datatype.
    """

    def __init__(
        self,
        *,
        node: Optional[Node],
        prefix: str,
        property_id: str,
        name: str,
        datatype: Union[PropertyDatatype, str],
    ) -> None:
        self._id: str = validate_id(property_id, "property")
        self._node: Optional[Node] = node
        self._topic: str = join_topic(prefix, property_id)
        self._name: str = name
        self._datatype: PropertyDatatype = PropertyDatatype(datatype)
        self._format: str = ""
        self._unit: str = ""
        self._settable: bool = False
        self._retained: bool = True
        self._value: str = ""
        self._on_set: Optional[Setter] = None

    # ---- read-only accessors -----------------------------------------

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def topic(self) -> str:
        """Full value topic ``<root>/<device>/<node>/<property>``."""
        return self._topic

    @property
    def node(self) -> Optional[Node]:
        """The owning node (handy for chaining declarations)."""
        return self._node

    @property
    def datatype(self) -> PropertyDatatype:
        return self._datatype

    @property
    def format(self) -> str:
        return self._format

    @property
    def unit(self) -> str:
        return self._unit

    @property
    def settable(self) -> bool:
        return self._settable

    @property
    def retained(self) -> bool:
        return self._retained

    @property
    def value(self) -> str:
        """Last value passed to :meth:`set`, as a payload string."""
        return self._value

    @property
    def on_set_callback(self) -> Optional[Setter]:
        """The property-local callback, if any."""
        return self._on_set

    # ---- metadata (chainable) ----------------------------------------

    def set_settable(self, settable: bool = True) -> Property:
        """Allow (or forbid) changes via ``<topic>/set`` commands.

        See https://homieiot.github.io/specification/#property-command-topic
        """
        self._settable = bool(settable)
        return self

    def set_unit(self, unit: str) -> Property:
        self._unit = unit or ""
        return self

    def set_format(self, fmt: str) -> Property:
        """Set ``$format`` (e.g. ``"0:100"`` or ``"on,off"``)."""
        self._format = fmt or ""
        return self

    def set_retained(self, retained: bool) -> Property:
        self._retained = bool(retained)
        return self

    def on_set(self, callback: Optional[Setter]) -> Property:
        """Install a callback for :meth:`set`, or remove it with ``None``.

        A property-local callback always wins over the device callback.
        """
        self._on_set = callback
        return self

    # ---- value -------------------------------------------------------

    def set(self, value: Any) -> Property:
        """Store a new value and notify the effective callback.

        The value content is not validated against the datatype.
        """
        self._value = to_payload(value)
        callback = self._resolve_callback()
        if callback is not None:
            try:
                callback(self._topic, self._value, self._datatype)
            except Exception:  # noqa: BLE001
                logger.exception(
                    "on_set callback raised for property '%s'", self._topic,
                )
        return self

    def _resolve_callback(self) -> Optional[Setter]:
        if self._on_set is not None:
            return self._on_set
        # Standalone properties and nodes have no device to fall back on.
        node = self._node
        if node is not None and node.device is not None:
            return node.device.on_set_callback
        return None

    # ---- topic / value pairs -----------------------------------------

    def get_attributes(self) -> List[TopicValuePair]:
        """Return the ``$``-attributes describing this property."""
        attributes = [
            TopicValuePair(
                join_topic(self._topic, ATTRIBUTE_NAME), self._name
            ),
            TopicValuePair(
                join_topic(self._topic, ATTRIBUTE_DATATYPE),
                self._datatype.value,
            ),
        ]
        if self._format:
            attributes.append(TopicValuePair(
                join_topic(self._topic, ATTRIBUTE_FORMAT), self._format
            ))
        if self._unit:
            attributes.append(TopicValuePair(
                join_topic(self._topic, ATTRIBUTE_UNIT), self._unit
            ))
        if self._settable:
            attributes.append(TopicValuePair(
                join_topic(self._topic, ATTRIBUTE_SETTABLE),
                _to_bool_payload(self._settable),
            ))
        if not self._retained:
            attributes.append(TopicValuePair(
                join_topic(self._topic, ATTRIBUTE_RETAINED),
                _to_bool_payload(self._retained),
            ))
        return attributes

    def get_value(self) -> TopicValuePair:
        return TopicValuePair(self._topic, self._value)

    def get_setter_topic(self) -> str:
        """Return ``<topic>/set``, or ``""`` if the property is not settable."""
        if not self._settable:
            return ""
        return join_topic(self._topic, SETTER_SUFFIX)

    # ---- dunder -------------------------------------------------------

    def __repr__(self) -> str:
        return (
            f"Property(topic={self._topic!r}, "
            f"datatype={self._datatype.value!r}, value={self._value!r})"
        )

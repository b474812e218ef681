"""Homie convention enumerations.

Values are the literal strings published on the wire, derived from the
Homie convention v4.0.0:

- https://homieiot.github.io/specification/#property-attributes
- https://homieiot.github.io/specification/#device-lifecycle
"""

from enum import Enum, unique


# ---------------------------------------------------------------------------
#  Property datatypes
# ---------------------------------------------------------------------------


@unique
class PropertyDatatype(str, Enum):
    """Declared value kind of a property (``$datatype`` attribute)."""

    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    STRING = "string"
    ENUM = "enum"
    COLOR = "color"

    def __str__(self) -> str:
        return self.value


# ---------------------------------------------------------------------------
#  Device lifecycle
# ---------------------------------------------------------------------------


@unique
class DeviceState(str, Enum):
    """Device lifecycle state (``$state`` attribute).

    The model allows a transition from any state to any other state.
    """

    INIT = "init"
    READY = "ready"
    DISCONNECTED = "disconnected"
    SLEEPING = "sleeping"
    LOST = "lost"
    ALERT = "alert"

    def __str__(self) -> str:
        return self.value

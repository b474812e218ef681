"""Topic building blocks shared by devices, nodes and properties."""

from __future__ import annotations

from typing import Callable, NamedTuple

from pyHomie.enums import PropertyDatatype

# ---------------------------------------------------------------------------
# Attribute names
# ---------------------------------------------------------------------------

ATTRIBUTE_HOMIE_VERSION = "$homie"
ATTRIBUTE_NAME = "$name"
ATTRIBUTE_STATE = "$state"
ATTRIBUTE_NODES = "$nodes"
ATTRIBUTE_EXTENSIONS = "$extensions"
ATTRIBUTE_PROPERTIES = "$properties"
ATTRIBUTE_TYPE = "$type"
ATTRIBUTE_DATATYPE = "$datatype"
ATTRIBUTE_FORMAT = "$format"
ATTRIBUTE_UNIT = "$unit"
ATTRIBUTE_SETTABLE = "$settable"
ATTRIBUTE_RETAINED = "$retained"

#: Last topic segment of a property command topic.
SETTER_SUFFIX = "set"

#: Type alias for the value-change callback.
#: ``def callback(topic, value, datatype) -> None``
Setter = Callable[[str, str, PropertyDatatype], None]


class TopicValuePair(NamedTuple):
    """One MQTT topic and the string payload to publish on it."""

    topic: str
    value: str


def join_topic(*segments: str) -> str:
    """Join topic segments with ``/``, dropping empty segments.

    Surrounding slashes on each segment are stripped, so a root such as
    ``"unit/test/"`` joins cleanly.  A leading slash on the first
    segment is kept (``"/homie"`` stays an absolute topic).
    """
    parts = [s.strip("/") for s in segments]
    joined = "/".join(p for p in parts if p)
    if segments and segments[0].startswith("/"):
        return "/" + joined
    return joined


def join_ids(ids) -> str:
    """Comma-join *ids* in ascending order (``$nodes`` / ``$properties``)."""
    return ",".join(sorted(ids))

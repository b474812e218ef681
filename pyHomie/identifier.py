"""Topic identifiers.

Device, node and property ids each become one segment of an MQTT topic,
so they are restricted to the Homie topic-id alphabet:

  * non-empty,
  * ASCII letters ``a-z`` / ``A-Z``, digits ``0-9`` and the hyphen,
  * no leading or trailing hyphen.

Reference: https://homieiot.github.io/specification/#topic-ids
"""

from __future__ import annotations

import string
from typing import Any

_ID_CHARS = frozenset(string.ascii_letters + string.digits + "-")


class InvalidIdentifierError(ValueError):
    """Raised when a device, node or property id is not a valid topic id."""

    def __init__(self, identifier: Any, kind: str = "topic") -> None:
        super().__init__(f"invalid {kind} ID: {identifier!r}")
        self.identifier = identifier
        self.kind = kind


def is_valid_id(value: Any) -> bool:
    """Return ``True`` if *value* can be used as a topic segment."""
    if not isinstance(value, str) or not value:
        return False
    if value[0] == "-" or value[-1] == "-":
        return False
    return all(char in _ID_CHARS for char in value)


def validate_id(value: Any, kind: str = "topic") -> str:
    """Return *value* unchanged, or raise :class:`InvalidIdentifierError`.

    *kind* names the entity in the error message (``"device"``,
    ``"node"`` or ``"property"``).
    """
    if not is_valid_id(value):
        raise InvalidIdentifierError(value, kind)
    return value

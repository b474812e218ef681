"""pyHomie - Homie convention device model for Python."""

__version__ = "0.1.0"

from pyHomie.enums import (  # noqa: F401 – re-export for convenience
    DeviceState,
    PropertyDatatype,
)

from pyHomie.identifier import (  # noqa: F401
    InvalidIdentifierError,
    is_valid_id,
    validate_id,
)

from pyHomie.attribute import (  # noqa: F401
    Setter,
    TopicValuePair,
    join_topic,
)

from pyHomie.config import (  # noqa: F401
    DEFAULT_ROOT,
    DEFAULT_VERSION,
    HomieConfig,
    load_config,
)

from pyHomie.property import Property, to_payload  # noqa: F401

from pyHomie.node import Node  # noqa: F401

from pyHomie.device import Device  # noqa: F401


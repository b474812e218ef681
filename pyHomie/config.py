"""Per-device configuration: MQTT root topic and convention version.

Each :class:`~pyHomie.device.Device` carries its own
:class:`HomieConfig`, so devices built side by side (or in tests) never
share mutable defaults.

The configuration can be kept in a YAML file::

    homie:
      root: home/sensors
      version: 4.0.0

Usage example::

    from pyHomie import Device
    from pyHomie.config import load_config

    device = Device("raspberry-pi", "Raspberry PI agent",
                    config=load_config("/etc/myagent/homie.yaml"))
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

logger = logging.getLogger(__name__)

#: Default MQTT base topic.
DEFAULT_ROOT: str = "homie"

#: Homie convention version published as ``$homie``.
DEFAULT_VERSION: str = "4.0.0"

# Top-level key of the YAML configuration file.
_SECTION = "homie"


@dataclass(frozen=True)
class HomieConfig:
    """Root topic and convention version for one device."""

    root: str = DEFAULT_ROOT
    version: str = DEFAULT_VERSION

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> HomieConfig:
        """Build a config from a mapping, ignoring unknown keys.

        Missing keys fall back to the defaults.  Values are converted
        to ``str`` (YAML happily parses ``version: 4.0`` as a float).
        """
        if not data:
            return cls()
        kwargs: Dict[str, str] = {}
        for key in ("root", "version"):
            if data.get(key) is not None:
                kwargs[key] = str(data[key])
        return cls(**kwargs)

    def with_root(self, root: str) -> HomieConfig:
        """Return a copy of this config using *root*."""
        return replace(self, root=root)


def load_config(path: Union[str, Path]) -> HomieConfig:
    """Load a :class:`HomieConfig` from a YAML file.

    The settings may sit under a top-level ``homie:`` key or at the top
    level itself.  An empty file yields the defaults.

    Raises
    ------
    OSError
        If the file cannot be read.
    ValueError
        If the file is not valid UTF-8 YAML or does not contain a
        mapping.
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (yaml.YAMLError, UnicodeDecodeError) as exc:
        raise ValueError(f"unreadable YAML in {path}: {exc}") from exc

    if data is None:
        logger.debug("Empty configuration file %s, using defaults", path)
        return HomieConfig()
    if not isinstance(data, dict):
        raise ValueError(
            f"expected a mapping at top level in {path}, "
            f"got {type(data).__name__}"
        )

    section = data.get(_SECTION, data)
    if not isinstance(section, dict):
        raise ValueError(f"'{_SECTION}' section in {path} is not a mapping")

    config = HomieConfig.from_dict(section)
    logger.debug("Loaded %r from %s", config, path)
    return config

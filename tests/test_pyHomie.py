"""Basic tests for pyHomie."""

from importlib.metadata import version

import pyHomie


def test_version():
    """Test that the package version matches the installed metadata."""
    assert isinstance(pyHomie.__version__, str)
    assert pyHomie.__version__ == version("pyHomie")


def test_public_names_are_exported():
    for name in ("Device", "Node", "Property", "DeviceState",
                 "PropertyDatatype", "is_valid_id", "HomieConfig",
                 "InvalidIdentifierError"):
        assert hasattr(pyHomie, name)

"""Tests for roost.__init__ — every public name resolves lazily."""

import pytest

import roost


@pytest.mark.parametrize("name", roost.__all__)
def test_all_names_resolve(name: str) -> None:
    """Every name in __all__ must resolve via __getattr__ without error."""
    obj = getattr(roost, name)
    assert obj is not None, f"roost.{name} resolved to None"


def test_unknown_name_raises_attribute_error() -> None:
    with pytest.raises(AttributeError, match="no attribute"):
        roost.__getattr__("ThisDoesNotExist")

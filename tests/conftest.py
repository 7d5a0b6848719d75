"""Shared fixtures: every test starts and ends with an empty process registry."""
import pytest

from singleton_registry import get_registry


@pytest.fixture(autouse=True)
def registry():
    reg = get_registry()
    reg.clear()
    yield reg
    reg.clear()

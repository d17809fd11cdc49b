"""Shared fixtures for resmap-query tests."""

from __future__ import annotations

import pytest

from resmap_core import ColumnType, Property, Resource
from resmap_query import InMemoryDriver, build_default_registry


class Person(Resource, model="person"):
    name = Property(str, not_null=True)
    age = Property(ColumnType.NUMBER)
    active = Property(bool, default=True)
    profile = Property(dict)


@pytest.fixture
def registry():
    """Default in-memory operator registry."""
    return build_default_registry()


@pytest.fixture
def person_type() -> type[Person]:
    return Person


@pytest.fixture
def memory_driver() -> InMemoryDriver:
    return InMemoryDriver()


@pytest.fixture(autouse=True)
def _uninstall_driver():
    yield
    Resource.use(None)

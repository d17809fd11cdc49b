"""Shared fixtures for resmap-core tests."""

from __future__ import annotations

from typing import Any

import pytest

from resmap_core import MetadataRegistry, Resource, ResourceDriver, ResourceNotFoundError


class RecordingDriver(ResourceDriver):
    """Driver double that records calls and keeps instances in a dict."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, Any]] = []
        self.rows: dict[Any, Any] = {}

    async def create(self, resource):
        self.calls.append(("create", resource))

    async def save(self, instance):
        self.calls.append(("save", instance))
        key = getattr(instance, "id", None) or len(self.rows) + 1
        instance.id = key
        self.rows[key] = instance
        return key

    async def remove(self, instance):
        self.calls.append(("remove", instance))
        self.rows.pop(instance.id, None)

    async def find(self, instance):
        self.calls.append(("find", instance))
        if instance.id not in self.rows:
            raise ResourceNotFoundError(type(instance).describe().name, instance.id)
        return type(instance)(vars(self.rows[instance.id]))

    async def find_all(self, resource, query=None):
        self.calls.append(("find_all", (resource, query)))
        return [row for row in self.rows.values() if isinstance(row, resource)]


@pytest.fixture
def registry() -> MetadataRegistry:
    """Fresh registry, isolated from the process-wide one."""
    return MetadataRegistry()


@pytest.fixture
def driver() -> RecordingDriver:
    return RecordingDriver()


@pytest.fixture(autouse=True)
def _uninstall_driver():
    yield
    Resource.use(None)

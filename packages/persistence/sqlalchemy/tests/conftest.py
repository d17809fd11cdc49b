"""Shared fixtures for resmap-sqlalchemy tests."""

from __future__ import annotations

import pytest

from resmap_core import Resource
from resmap_sqlalchemy import SQLiteDriver


@pytest.fixture()
async def sqlite_driver(tmp_path):
    driver = SQLiteDriver(f"sqlite+aiosqlite:///{tmp_path / 'cloud.db'}")
    yield driver
    await driver.dispose()


@pytest.fixture(autouse=True)
def _uninstall_driver():
    yield
    Resource.use(None)

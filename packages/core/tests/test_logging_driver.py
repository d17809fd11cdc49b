"""Tests for LoggingDriver."""

from __future__ import annotations

import logging

import pytest

from resmap_core import LoggingDriver, Property, Resource, ResourceNotFoundError


class Item(Resource, model="item"):
    label = Property(str)


@pytest.mark.asyncio
async def test_logs_start_and_completion(driver, caplog) -> None:
    logged = LoggingDriver(driver)
    caplog.set_level(logging.INFO, logger="resmap.driver")

    key = await logged.save(Item(label="a"))

    assert key == 1
    messages = [r.getMessage() for r in caplog.records]
    assert messages[0] == "save Item"
    assert messages[1].startswith("save Item completed in ")


@pytest.mark.asyncio
async def test_failure_is_logged_and_reraised(driver, caplog) -> None:
    logged = LoggingDriver(driver)
    caplog.set_level(logging.INFO, logger="resmap.driver")

    with pytest.raises(ResourceNotFoundError):
        await logged.find(Item(id=5))

    failure = caplog.records[-1]
    assert failure.levelno == logging.ERROR
    assert "find Item failed" in failure.getMessage()
    assert failure.exc_info is not None


@pytest.mark.asyncio
async def test_can_be_installed_as_resource_driver(driver) -> None:
    logged = LoggingDriver(driver, logger=logging.getLogger("test.resmap"))
    Resource.use(logged)

    await Item.create()
    await Item(label="x").save()
    items = await Item.find_all()

    assert logged.inner is driver
    assert [i.label for i in items] == ["x"]

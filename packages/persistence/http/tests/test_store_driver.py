"""Tests for StoreDriver against the fake key-JSON store."""

from __future__ import annotations

import httpx
import pytest

from resmap_core import (
    ColumnType,
    ConfigurationError,
    PersistenceError,
    Property,
    Resource,
    ResourceNotFoundError,
    SequentialIDGenerator,
)
from resmap_http import StoreDriver, StorePersistenceError
from resmap_query import Query

BASE_URL = "https://store.test/db"


class Note(Resource, model="note"):
    title = Property(str)
    pinned = Property(bool)
    meta = Property(dict, default={"tags": []})
    stars = Property(ColumnType.NUMBER)


@pytest.fixture(autouse=True)
def installed(store_driver: StoreDriver) -> StoreDriver:
    Resource.use(store_driver)
    return store_driver


class TestConfiguration:
    def test_trailing_slash_is_stripped(self, store_driver) -> None:
        assert store_driver.base_url == BASE_URL
        assert store_driver.item_url("note", "a1") == f"{BASE_URL}/note/a1"

    def test_falls_back_to_environment(self, monkeypatch) -> None:
        monkeypatch.setenv("STORE_URL", "https://env.test/")

        assert StoreDriver().base_url == "https://env.test"

    def test_missing_url(self, monkeypatch) -> None:
        monkeypatch.delenv("STORE_URL", raising=False)

        with pytest.raises(ConfigurationError, match="STORE_URL"):
            StoreDriver()


@pytest.mark.asyncio
class TestStoreDriver:
    async def test_create_posts_and_deletes_placeholder(self, store) -> None:
        await Note.create()

        assert [(r.method, r.url.path) for r in store.requests] == [
            ("POST", "/db/note/0"),
            ("DELETE", "/db/note/0"),
        ]
        assert store.data == {"note": {}}

    async def test_create_failure(self, store) -> None:
        store.fail_with = 500

        with pytest.raises(PersistenceError, match='Cannot create resource "note"'):
            await Note.create()

    async def test_save_generates_id_and_stores_native_values(self, store) -> None:
        note = Note(title="Hello", pinned=True, meta={"tags": ["x"]})

        key = await note.save()

        assert isinstance(key, str)
        assert note.id == key
        assert store.data["note"][key] == {
            "title": "Hello",
            "pinned": True,
            "meta": {"tags": ["x"]},
            "stars": 0,
        }
        assert store.requests[-1].headers["content-type"] == "application/json"

    async def test_custom_id_generator(self, store) -> None:
        driver = StoreDriver(
            BASE_URL,
            id_generator=SequentialIDGenerator(start=100),
            transport=httpx.MockTransport(store.handler),
        )

        assert await Note(title="a").save(driver=driver) == 100
        assert "100" in store.data["note"]

    async def test_find_round_trip(self) -> None:
        note = Note(title="Hello", pinned=False)
        await note.save()

        loaded = await Note(id=note.id).find()

        assert loaded.to_dict() == {
            "id": note.id,
            "title": "Hello",
            "pinned": False,
            "meta": {"tags": []},
            "stars": 0,
        }

    async def test_find_missing(self) -> None:
        with pytest.raises(ResourceNotFoundError):
            await Note(id="nope").find()

    async def test_save_failure_reports_status(self, store) -> None:
        store.fail_with = 503

        with pytest.raises(StorePersistenceError, match="Cannot store item: HTTP 503") as exc_info:
            await Note(title="x").save()

        assert exc_info.value.status_code == 503

    async def test_load_failure(self, store) -> None:
        store.fail_with = 500

        with pytest.raises(PersistenceError, match="Unable to load: HTTP 500"):
            await Note(id="a").find()

    async def test_remove(self, store) -> None:
        note = Note(title="x")
        await note.save()

        await note.remove()

        assert store.data["note"] == {}

    async def test_remove_missing_is_tolerated(self) -> None:
        await Note(id="ghost").remove()

    async def test_remove_failure(self, store) -> None:
        store.fail_with = 500

        with pytest.raises(PersistenceError, match="Unable to remove: HTTP 500"):
            await Note(id="a").remove()

    async def test_find_all_filters_in_memory(self) -> None:
        await Note(id="a", title="Groceries", stars=1).save()
        await Note(id="b", title="Grocery list", stars=5).save()
        await Note(id="c", title="Ideas", stars=5).save()

        found = await Note.find(Query().where("title").is_like("Grocer").where("stars").gte("2"))

        assert [n.id for n in found] == ["b"]

    async def test_find_all_by_opaque_id(self) -> None:
        await Note(id="a", title="one").save()
        await Note(id="b", title="two").save()

        (found,) = await Note.find_all(Query().where("id").is_("b"))

        assert found.title == "two"

    async def test_numeric_ids_come_back_as_numbers(self) -> None:
        await Note(id=5, title="five").save()
        await Note(id=7, title="seven").save()

        everything = await Note.find_all()
        exact = await Note.find_all(Query().where("id").is_(5))
        greater = await Note.find_all(Query().where("id").gt(6))
        loaded = await Note(id="7").find()

        assert [n.id for n in everything] == [5, 7]
        assert [n.title for n in exact] == ["five"]
        assert [n.title for n in greater] == ["seven"]
        assert loaded.id == 7

    async def test_non_object_item_is_a_load_error(self, store) -> None:
        store.data["note"] = {"x": "not an object"}

        with pytest.raises(StorePersistenceError, match="Unable to load"):
            await Note(id="x").find()

    async def test_find_all_on_missing_collection(self) -> None:
        assert await Note.find_all() == []

    async def test_unknown_operator_is_not_constraining(self) -> None:
        await Note(id="a").save()
        await Note(id="b").save()

        assert len(await Note.find_all(Query().push("stars", "near", 3))) == 2

    async def test_transport_error_is_wrapped(self) -> None:
        def boom(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        driver = StoreDriver(BASE_URL, transport=httpx.MockTransport(boom))

        with pytest.raises(StorePersistenceError, match="Unable to load") as exc_info:
            await Note.find_all(driver=driver)

        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

"""In-process fake of the key-JSON store, served through ``httpx.MockTransport``."""

from __future__ import annotations

import json
from typing import Any

import httpx
import pytest

from resmap_core import Resource
from resmap_http import StoreDriver

BASE_URL = "https://store.test/db"


class FakeStore:
    """Keeps ``{resource: {id: object}}`` and answers like the real store."""

    def __init__(self) -> None:
        self.data: dict[str, dict[str, Any]] = {}
        self.requests: list[httpx.Request] = []
        self.fail_with: int | None = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_with is not None:
            return httpx.Response(self.fail_with)

        path = request.url.path.removeprefix("/db/").strip("/")
        parts = path.split("/")
        if len(parts) == 1:
            return self._collection(request, parts[0])
        return self._item(request, parts[0], parts[1])

    def _collection(self, request: httpx.Request, name: str) -> httpx.Response:
        if request.method != "GET":
            return httpx.Response(405)
        if name not in self.data:
            return httpx.Response(404)
        return httpx.Response(200, json=self.data[name])

    def _item(self, request: httpx.Request, name: str, key: str) -> httpx.Response:
        items = self.data.get(name)
        if request.method in ("PUT", "POST"):
            self.data.setdefault(name, {})[key] = json.loads(request.content or b"{}")
            return httpx.Response(200, json={"ok": True})
        if items is None or key not in items:
            return httpx.Response(404)
        if request.method == "GET":
            return httpx.Response(200, json=items[key])
        if request.method == "DELETE":
            del items[key]
            return httpx.Response(204)
        return httpx.Response(405)


@pytest.fixture
def store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def store_driver(store: FakeStore) -> StoreDriver:
    return StoreDriver(BASE_URL + "/", transport=httpx.MockTransport(store.handler))


@pytest.fixture(autouse=True)
def _uninstall_driver():
    yield
    Resource.use(None)

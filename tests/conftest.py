"""
Shared fixtures: an in-process Catalog Service and recording collaborators.

The fake service speaks the same `{success, data}` envelope as the real one
and is served through aiohttp's TestServer, so the client runs over HTTP.
"""

import asyncio
from typing import Any

import pytest
import pytest_asyncio
from aiohttp import ClientSession, web
from aiohttp.test_utils import TestServer

from galleria.catalog import CatalogClient
from galleria.models import GalleryItem
from galleria.viewport import Viewport


def item_payload(
    item_id: int,
    category_id: int | None = None,
    images: tuple[str, ...] = ("a.jpg",),
    is_active: bool = True,
    created_at: str = "2024-01-01T00:00:00.000Z",
    **extra: Any,
) -> dict[str, Any]:
    payload = {
        "id": item_id,
        "title": f"Item {item_id}",
        "imageUrls": list(images),
        "categoryId": category_id,
        "isActive": is_active,
        "sortOrder": 0,
        "createdAt": created_at,
        "updatedAt": created_at,
    }
    payload.update(extra)
    return payload


class FakeCatalog:
    """Mutable stand-in for the Catalog Service."""

    def __init__(self) -> None:
        self.categories: list[dict[str, Any]] = []
        self.items: list[dict[str, Any]] = []
        self.categories_success = True
        self.items_success = True
        self.items_status = 200
        self.honor_filter = True
        self.delays: dict[str, float] = {}
        self.broken: str | None = None
        self.raw_items_payload: Any = None
        self.requests: list[tuple[str, dict[str, str]]] = []
        self.base_url = ""

    def app(self) -> web.Application:
        app = web.Application()
        app.router.add_get("/gallery/categories", self.get_categories)
        app.router.add_get("/gallery", self.get_items)
        return app

    async def get_categories(self, request: web.Request) -> web.Response:
        self.requests.append((request.path, dict(request.query)))
        if self.broken:
            return self.broken_response(request)
        if not self.categories_success:
            return web.json_response(
                {"success": False, "message": "Failed to fetch categories"}
            )
        return web.json_response({"success": True, "data": self.categories})

    async def get_items(self, request: web.Request) -> web.Response:
        query = dict(request.query)
        self.requests.append((request.path, query))
        category_id = query.get("categoryId", "all")
        delay = self.delays.get(category_id)
        if delay:
            await asyncio.sleep(delay)
        if self.broken:
            return self.broken_response(request)
        if self.raw_items_payload is not None:
            return web.json_response(self.raw_items_payload)
        if self.items_status != 200:
            return web.json_response(
                {"success": False, "message": "Failed to fetch gallery items"},
                status=self.items_status,
            )
        if not self.items_success:
            return web.json_response({"success": False})
        items = self.items
        if self.honor_filter and "categoryId" in query:
            items = [i for i in items if str(i.get("categoryId")) == category_id]
        return web.json_response({"success": True, "data": items})

    def broken_response(self, request: web.Request) -> web.Response:
        if self.broken == "redirect_loop":
            raise web.HTTPFound(request.path_qs)
        if self.broken == "bad_gzip":
            return web.Response(
                body=b'{"success": true, "data": []}',
                headers={"Content-Encoding": "gzip", "Content-Type": "application/json"},
            )
        raise AssertionError(f"Unknown failure mode: {self.broken}")

    def item_requests(self) -> list[dict[str, str]]:
        return [query for path, query in self.requests if path == "/gallery"]


class RecordingNotifier:
    def __init__(self) -> None:
        self.messages: list[tuple[str, str]] = []

    def notify(self, kind: str, message: str) -> None:
        self.messages.append((kind, message))

    def kinds(self) -> list[str]:
        return [kind for kind, _ in self.messages]


@pytest_asyncio.fixture
async def catalog():
    fake = FakeCatalog()
    server = TestServer(fake.app())
    await server.start_server()
    fake.base_url = str(server.make_url("/")).rstrip("/")
    try:
        yield fake
    finally:
        await server.close()


@pytest_asyncio.fixture
async def session():
    async with ClientSession() as sess:
        yield sess


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def client(session, catalog, notifier) -> CatalogClient:
    return CatalogClient(session, notifier, catalog.base_url)


@pytest.fixture
def viewport() -> Viewport:
    return Viewport()


@pytest.fixture
def make_item():
    """Build a GalleryItem from the same payload shape the service returns."""

    def _make(item_id: int, **kwargs: Any) -> GalleryItem:
        return GalleryItem.from_dict(item_payload(item_id, **kwargs))

    return _make


@pytest.fixture
def payload():
    return item_payload

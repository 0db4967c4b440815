"""Catalog Service client: categories and gallery items over HTTP."""

# pylint: disable=line-too-long

import asyncio
import os
from typing import Any, Union

from aiohttp import ClientSession, ClientTimeout, client_exceptions

from galleria.errors import CatalogError, NetworkError, NotFoundError, ServerError
from galleria.models import Category, GalleryItem
from galleria.notify import ERROR, Notifier
from galleria.utils import dbg, env_float, get_random_user_agent

API_URL = os.environ.get("GALLERIA_API_URL", "https://sundar.risva.app/api")
REQUEST_TIMEOUT = env_float("GALLERIA_TIMEOUT", 10.0)
SOCIAL_CATEGORY = "social"
ALL = "all"

CategoryFilter = Union[str, int]


def default_timeout() -> ClientTimeout:
    """Total per-request timeout imposed on the session by its owner."""
    return ClientTimeout(total=REQUEST_TIMEOUT)


class CatalogClient:
    """
    Client wrapper for the Catalog Service.

    `list_categories` and `list_items` are plain calls that raise
    `CatalogError` subclasses. `load_items` and `load_social_items` own the
    in-memory collection: they toggle `loading`, replace `items` wholesale on
    success, notify on failure and keep whatever was loaded before.
    """

    def __init__(
        self,
        session: ClientSession,
        notifier: Notifier,
        base_url: str = API_URL,
    ) -> None:
        self.session = session
        self.notifier = notifier
        self.base_url = base_url.rstrip("/")
        self.items: list[GalleryItem] = []
        self.loading = False
        self._seq = 0

    async def _get_json(self, path: str, params: dict[str, str] | None = None) -> Any:
        """GET a `{success, data}` envelope and return its `data`."""
        url = f"{self.base_url}{path}"
        headers = {
            "User-Agent": get_random_user_agent(),
            "Accept": "application/json",
        }
        dbg(f"GET {url} params={params or {}}")
        try:
            async with self.session.get(url, params=params, headers=headers) as response:
                try:
                    payload = await response.json(content_type=None)
                except ValueError:
                    payload = None
                dbg(f"GET {url} -> {response.status}")
                if response.status >= 400:
                    message = payload.get("message") if isinstance(payload, dict) else None
                    raise ServerError(
                        message or f"HTTP {response.status} at {url}", response.status
                    )
        except client_exceptions.InvalidURL as e:
            raise NetworkError(f"Invalid URL: {e}") from e
        except (client_exceptions.ClientConnectionError, asyncio.TimeoutError) as e:
            raise NetworkError(f"Could not reach {url}: {e!r}") from e
        except client_exceptions.ClientResponseError as e:
            raise ServerError(f"Bad response at {url}: {e.message}", e.status) from e
        except client_exceptions.ClientError as e:
            raise NetworkError(f"Request to {url} failed: {e!r}") from e

        if not isinstance(payload, dict):
            raise ServerError(f"Malformed response at {url}", response.status)
        if not payload.get("success"):
            raise ServerError(
                payload.get("message") or f"Request to {url} was not successful",
                response.status,
            )
        data = payload.get("data") or []
        if not isinstance(data, list):
            raise ServerError(f"Malformed response at {url}", response.status)
        return data

    async def _get_rows(self, path: str, parse, params: dict[str, str] | None = None) -> list:
        """Fetch a list envelope and build one model per row."""
        data = await self._get_json(path, params)
        try:
            return [parse(row) for row in data]
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise ServerError(f"Malformed response at {self.base_url}{path}: {e!r}") from e

    async def list_categories(self) -> list[Category]:
        """
        Fetch every category from `GET /gallery/categories`.

        Raises:
            NetworkError: If the service could not be reached.
            ServerError: On a non-success status or payload.
        """
        return await self._get_rows("/gallery/categories", Category.from_dict)

    async def list_active_categories(self) -> list[Category]:
        """Fetch categories and keep only the active ones."""
        return [cat for cat in await self.list_categories() if cat.is_active]

    async def list_items(self, category_filter: CategoryFilter = ALL) -> list[GalleryItem]:
        """
        Fetch gallery items from `GET /gallery`.

        Args:
            category_filter (str | int): `"all"` or a category id. A category id is
            sent as the `categoryId` query parameter; the server does the filtering.

        Raises:
            NetworkError: If the service could not be reached.
            ServerError: On a non-success status or payload.
        """
        params = None
        if category_filter != ALL:
            params = {"categoryId": str(category_filter)}
        return await self._get_rows("/gallery", GalleryItem.from_dict, params)

    async def resolve_social_category(self) -> Category:
        """
        Find the category named "social" (case-insensitive exact match).

        Raises:
            NotFoundError: If no such category exists.
        """
        for category in await self.list_categories():
            if category.name.lower() == SOCIAL_CATEGORY:
                return category
        raise NotFoundError("Social category not found")

    async def _social_items(self) -> list[GalleryItem]:
        category = await self.resolve_social_category()
        items = await self.list_items(category.id)
        # Re-check the category: the server filter is not trusted.
        return [
            item
            for item in items
            if item.is_active and item.category_id == category.id
        ]

    async def _load(self, fetch, failure_message: str) -> bool:
        """
        Run one fetch under a fresh sequence token.

        Returns:
            bool: True when this call's result replaced `items`; False when the
            fetch failed or a newer request superseded it.
        """
        self._seq += 1
        token = self._seq
        self.loading = True
        try:
            items = await fetch()
        except NotFoundError as e:
            if token != self._seq:
                return False
            self.notifier.notify(ERROR, str(e))
            self.items = []
            return True
        except CatalogError as e:
            dbg(f"Fetch #{token} failed: {e}")
            if token == self._seq:
                self.notifier.notify(ERROR, failure_message)
            return False
        finally:
            if token == self._seq:
                self.loading = False

        if token != self._seq:
            dbg(f"Discarding stale response #{token} (latest #{self._seq})")
            return False
        self.items = items
        return True

    async def load_items(self, category_filter: CategoryFilter = ALL) -> bool:
        """Load gallery items for `category_filter` into `items`."""
        return await self._load(
            lambda: self.list_items(category_filter), "Failed to load gallery"
        )

    async def load_social_items(self) -> bool:
        """Load the active items of the "social" category into `items`."""
        return await self._load(self._social_items, "Failed to load social gallery")

"""Gallery and social feed views wiring the client, layout and lightbox together."""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from typing import Optional

from galleria.catalog import ALL, CatalogClient, CategoryFilter
from galleria.engagement import (
    EngagementSimulator,
    sort_by_latest,
    sort_by_popularity,
)
from galleria.errors import CatalogError, ContractViolation
from galleria.layout import layout, social_layout
from galleria.lightbox import LightboxController
from galleria.models import Category, DisplayItem, GalleryItem
from galleria.notify import ERROR
from galleria.utils import dbg
from galleria.viewport import Viewport

SORT_LATEST = "latest"
SORT_POPULAR = "popular"


class _View(ABC):
    """Shared lifecycle: a catalog client, a lightbox and teardown on exit."""

    def __init__(self, client: CatalogClient, viewport: Viewport) -> None:
        self.client = client
        self.lightbox = LightboxController(viewport)

    @property
    def loading(self) -> bool:
        return self.client.loading

    @property
    def items(self) -> list[GalleryItem]:
        return self.client.items

    def find(self, item_id: int) -> GalleryItem:
        for item in self.client.items:
            if item.id == item_id:
                return item
        raise ContractViolation(f"Item {item_id} is not in the loaded collection")

    def open_item(self, item: GalleryItem | int) -> None:
        """Open the lightbox on a clicked grid item."""
        if isinstance(item, int):
            item = self.find(item)
        self.lightbox.open(item)

    @abstractmethod
    async def mount(self) -> None:
        """Load the view's initial data."""

    def teardown(self) -> None:
        self.lightbox.teardown()

    async def __aenter__(self):
        await self.mount()
        return self

    async def __aexit__(self, *exc_info) -> None:
        self.teardown()


class GalleryView(_View):
    """The general gallery with its category filter."""

    def __init__(self, client: CatalogClient, viewport: Viewport) -> None:
        super().__init__(client, viewport)
        self.categories: list[Category] = []
        self.selected_category: CategoryFilter = ALL

    async def load_categories(self) -> None:
        try:
            self.categories = await self.client.list_active_categories()
        except CatalogError as e:
            dbg(f"Error fetching categories: {e}")
            self.client.notifier.notify(ERROR, "Failed to load categories")

    async def mount(self) -> None:
        await asyncio.gather(
            self.client.load_items(self.selected_category), self.load_categories()
        )

    async def select_category(self, category_filter: CategoryFilter) -> bool:
        """Switch the filter and refetch; selecting the current filter is a no-op."""
        if isinstance(category_filter, str) and category_filter.isdigit():
            category_filter = int(category_filter)
        if category_filter == self.selected_category:
            return False
        self.selected_category = category_filter
        return await self.client.load_items(category_filter)

    @property
    def grid_items(self) -> list[DisplayItem]:
        return layout(self.client.items)

    @property
    def total_items(self) -> int:
        return len(self.client.items)

    def count_for(self, category_id: int) -> int:
        return sum(1 for item in self.client.items if item.category_id == category_id)


class SocialView(_View):
    """Social feed: one category, engagement counters and a sort toggle."""

    def __init__(
        self,
        client: CatalogClient,
        viewport: Viewport,
        engagement: Optional[EngagementSimulator] = None,
    ) -> None:
        super().__init__(client, viewport)
        self.engagement = engagement or EngagementSimulator(client.notifier)
        self.sort_by = SORT_LATEST

    async def mount(self) -> None:
        await self.refresh()

    async def refresh(self) -> bool:
        replaced = await self.client.load_social_items()
        if replaced:
            self.engagement.seed(self.client.items)
        return replaced

    def set_sort(self, sort_by: str) -> None:
        if sort_by not in (SORT_LATEST, SORT_POPULAR):
            raise ValueError(f"Unknown sort mode: {sort_by}")
        self.sort_by = sort_by

    @property
    def stats(self):
        return self.engagement.stats

    @property
    def sorted_items(self) -> list[GalleryItem]:
        if self.sort_by == SORT_POPULAR:
            return sort_by_popularity(self.client.items, self.engagement.stats)
        return sort_by_latest(self.client.items)

    @property
    def grid_items(self) -> list[DisplayItem]:
        return social_layout(self.sorted_items)

    def like(self, item_id: int):
        return self.engagement.toggle_like(item_id)

    def comment(self, item_id: int) -> None:
        self.engagement.record_comment(item_id)

    def share(self, item_id: int) -> None:
        self.engagement.record_share(self.find(item_id))

"""Grid layout: assign a display size to each gallery item by position."""

from __future__ import annotations

from typing import Iterable

from galleria.models import (
    SIZE_LARGE,
    SIZE_MEDIUM,
    SIZE_SMALL,
    SIZE_STANDARD,
    DisplayItem,
    GalleryItem,
)

MASONRY_STRIDE = 5


def _renderable(items: Iterable[GalleryItem]) -> list[GalleryItem]:
    return [item for item in items if item.is_active and item.image_urls]


def _gallery_size(index: int) -> str:
    # Every branch resolves to medium; small is kept for a future masonry pass.
    size = SIZE_SMALL
    if index == 0:
        size = SIZE_MEDIUM
    elif index % MASONRY_STRIDE == 0:
        size = SIZE_MEDIUM
    else:
        size = SIZE_MEDIUM
    return size


def _social_size(index: int) -> str:
    if index == 0 or index % MASONRY_STRIDE == 0:
        return SIZE_LARGE
    return SIZE_STANDARD


def layout(items: Iterable[GalleryItem]) -> list[DisplayItem]:
    """
    Build the render model for the general gallery grid.

    Inactive items and items without images are dropped; input order is
    preserved. `item_count` is the number of images in each item.
    """
    active = _renderable(items)
    return [
        DisplayItem.from_item(item, _gallery_size(index))
        for index, item in enumerate(active)
    ]


def social_layout(items: Iterable[GalleryItem]) -> list[DisplayItem]:
    """Build the social feed grid: index 0 and every 5th index render large."""
    active = _renderable(items)
    return [
        DisplayItem.from_item(item, _social_size(index))
        for index, item in enumerate(active)
    ]

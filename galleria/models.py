"""Data models for the gallery catalog and viewer."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping

SIZE_MEDIUM = "medium"
SIZE_SMALL = "small"
SIZE_LARGE = "large"
SIZE_STANDARD = "standard"


@dataclass(frozen=True)
class Category:
    """Catalog category row."""

    id: int
    name: str
    is_active: bool = True
    description: str | None = None
    created_at: str | None = None
    updated_at: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Category":
        """Build a category from the service's camelCase payload."""
        return cls(
            id=int(data["id"]),
            name=str(data.get("name") or ""),
            is_active=bool(data.get("isActive", True)),
            description=data.get("description"),
            created_at=data.get("createdAt"),
            updated_at=data.get("updatedAt"),
        )


@dataclass(frozen=True)
class GalleryItem:
    """One gallery entry: a titled, ordered set of images."""

    id: int
    title: str
    image_urls: tuple[str, ...] = ()
    is_active: bool = True
    sort_order: int = 0
    description: str | None = None
    thumbnail_url: str | None = None
    category_id: int | None = None
    created_at: str | None = None
    updated_at: str | None = None
    category: Category | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "GalleryItem":
        """Build an item from the service's camelCase payload."""
        category_id = data.get("categoryId")
        category = data.get("category")
        return cls(
            id=int(data["id"]),
            title=str(data.get("title") or ""),
            image_urls=tuple(str(u) for u in data.get("imageUrls") or ()),
            is_active=bool(data.get("isActive", True)),
            sort_order=int(data.get("sortOrder") or 0),
            description=data.get("description"),
            thumbnail_url=data.get("thumbnailUrl") or None,
            category_id=int(category_id) if category_id is not None else None,
            created_at=data.get("createdAt"),
            updated_at=data.get("updatedAt"),
            category=Category.from_dict(category) if category else None,
        )

    @property
    def display_thumbnail(self) -> str | None:
        """Thumbnail URL, falling back to the first image."""
        if self.thumbnail_url:
            return self.thumbnail_url
        return self.image_urls[0] if self.image_urls else None


@dataclass(frozen=True)
class DisplayItem(GalleryItem):
    """Gallery item enriched with grid sizing metadata."""

    size: str = SIZE_MEDIUM
    item_count: int = 0

    @classmethod
    def from_item(cls, item: GalleryItem, size: str) -> "DisplayItem":
        values = {f.name: getattr(item, f.name) for f in fields(GalleryItem)}
        return cls(**values, size=size, item_count=len(item.image_urls))


@dataclass
class EngagementStats:
    """Simulated like/comment/share counters for one item."""

    likes: int
    comments: int
    shares: int
    is_liked: bool = False

    @property
    def popularity(self) -> int:
        return self.likes + self.comments + self.shares


@dataclass(frozen=True)
class LightboxState:
    """Snapshot of the full-screen viewer."""

    is_open: bool = False
    active_item: GalleryItem | None = None
    active_index: int = 0

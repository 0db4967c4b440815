"""Simulated social engagement counters and the share collaborator."""

from __future__ import annotations

import os
import random
from typing import Iterable, Optional, Protocol, Sequence

from galleria.errors import ContractViolation
from galleria.models import EngagementStats, GalleryItem
from galleria.notify import SUCCESS, Notifier
from galleria.utils import dbg, parse_timestamp

PAGE_URL = os.environ.get("GALLERIA_PAGE_URL", "https://sundar.risva.app/social")
SHARE_TEXT = "Check out this amazing social post!"

LIKES_RANGE = (500, 1499)
COMMENTS_RANGE = (50, 249)
SHARES_RANGE = (20, 119)


class ShareSheet(Protocol):
    """Platform share sheet; `share` returns False when unavailable."""

    def share(self, title: str, text: str, url: str) -> bool: ...


class Clipboard(Protocol):
    def copy(self, text: str) -> None: ...


class NoShareSheet:
    """Share sheet for hosts that do not have one."""

    def share(self, title: str, text: str, url: str) -> bool:
        return False


class MemoryClipboard:
    """Clipboard that keeps the last copied text."""

    def __init__(self) -> None:
        self.text: str | None = None

    def copy(self, text: str) -> None:
        self.text = text


class EngagementSimulator:
    """
    Per-item like/comment/share counters for the social feed.

    Counters are pseudo-random and reseeded on every successful fetch; they are
    not persisted anywhere. Only the like toggle mutates them.
    """

    def __init__(
        self,
        notifier: Notifier,
        share_sheet: Optional[ShareSheet] = None,
        clipboard: Optional[Clipboard] = None,
        rng: Optional[random.Random] = None,
        page_url: str = PAGE_URL,
    ) -> None:
        self.notifier = notifier
        self.share_sheet = share_sheet or NoShareSheet()
        self.clipboard = clipboard or MemoryClipboard()
        self.rng = rng or random.Random()
        self.page_url = page_url
        self.stats: dict[int, EngagementStats] = {}

    def seed(self, items: Iterable[GalleryItem]) -> dict[int, EngagementStats]:
        """Replace all counters with fresh pseudo-random values for `items`."""
        self.stats = {
            item.id: EngagementStats(
                likes=self.rng.randint(*LIKES_RANGE),
                comments=self.rng.randint(*COMMENTS_RANGE),
                shares=self.rng.randint(*SHARES_RANGE),
            )
            for item in items
        }
        dbg(f"Seeded engagement for {len(self.stats)} item(s)")
        return self.stats

    def _get(self, item_id: int) -> EngagementStats:
        try:
            return self.stats[item_id]
        except KeyError:
            raise ContractViolation(f"No engagement stats for item {item_id}") from None

    def toggle_like(self, item_id: int) -> EngagementStats:
        """Flip the like flag and move the like counter by one."""
        stats = self._get(item_id)
        stats.likes += -1 if stats.is_liked else 1
        stats.is_liked = not stats.is_liked
        return stats

    def record_comment(self, item_id: int) -> None:
        self._get(item_id)
        self.notifier.notify(SUCCESS, "Comment feature coming soon!")

    def record_share(self, item: GalleryItem) -> None:
        """Open the share sheet, or copy the page link when there is none."""
        self._get(item.id)
        if self.share_sheet.share(item.title, SHARE_TEXT, self.page_url):
            return
        self.clipboard.copy(self.page_url)
        self.notifier.notify(SUCCESS, "Link copied to clipboard!")


def sort_by_popularity(
    items: Sequence[GalleryItem], stats: dict[int, EngagementStats]
) -> list[GalleryItem]:
    """Most engaged first; equal totals keep fetch order."""

    def popularity(item: GalleryItem) -> int:
        entry = stats.get(item.id)
        return entry.popularity if entry else 0

    return sorted(items, key=popularity, reverse=True)


def sort_by_latest(items: Sequence[GalleryItem]) -> list[GalleryItem]:
    """Newest `created_at` first; equal timestamps keep fetch order."""
    return sorted(items, key=lambda item: parse_timestamp(item.created_at), reverse=True)

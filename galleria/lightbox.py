"""Full-screen image viewer state machine."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional

from galleria.errors import ContractViolation
from galleria.models import GalleryItem, LightboxState
from galleria.utils import dbg
from galleria.viewport import KeyboardNavigationBinder, ScrollLockManager, Viewport


class LightboxController:
    """
    Closed/Open viewer over one gallery item's images.

    The controller owns both global resources the viewer needs: the page
    scroll lock and the keyboard listener. They are acquired on `open` and
    released on `close`, and `teardown` closes a viewer left open.
    """

    def __init__(self, viewport: Viewport) -> None:
        self.scroll_lock = ScrollLockManager(viewport)
        self.keyboard = KeyboardNavigationBinder(viewport, self)
        self._item: Optional[GalleryItem] = None
        self._index = 0

    @property
    def is_open(self) -> bool:
        return self._item is not None

    @property
    def active_item(self) -> Optional[GalleryItem]:
        return self._item

    @property
    def active_index(self) -> int:
        return self._index

    @property
    def state(self) -> LightboxState:
        return LightboxState(self.is_open, self._item, self._index)

    @property
    def current_image_url(self) -> Optional[str]:
        if self._item is None:
            return None
        return self._item.image_urls[self._index]

    def _require_open(self, action: str) -> GalleryItem:
        if self._item is None:
            raise ContractViolation(f"Cannot {action} a closed lightbox")
        return self._item

    def open(self, item: GalleryItem) -> None:
        """Show `item` from its first image."""
        if not item.image_urls:
            raise ContractViolation(f"Item {item.id} has no images to show")
        was_open = self.is_open
        self._item = item
        self._index = 0
        if not was_open:
            self.scroll_lock.lock()
        self.keyboard.bind()
        dbg(f"Lightbox open: item {item.id} ({len(item.image_urls)} image(s))")

    def next(self) -> None:
        item = self._require_open("advance")
        self._index = (self._index + 1) % len(item.image_urls)
        self.keyboard.bind()

    def prev(self) -> None:
        item = self._require_open("rewind")
        length = len(item.image_urls)
        self._index = (self._index - 1 + length) % length
        self.keyboard.bind()

    def jump_to(self, index: int) -> None:
        item = self._require_open("jump within")
        if not 0 <= index < len(item.image_urls):
            raise ContractViolation(
                f"Image index {index} out of range for item {item.id} "
                f"({len(item.image_urls)} image(s))"
            )
        self._index = index
        self.keyboard.bind()

    def close(self) -> None:
        self._require_open("close")
        self._item = None
        self._index = 0
        try:
            self.keyboard.unbind()
        finally:
            self.scroll_lock.unlock()
        dbg("Lightbox closed")

    def teardown(self) -> None:
        """Release everything when the owning view goes away."""
        if self.is_open:
            self.close()
        else:
            self.keyboard.unbind()

    @contextmanager
    def viewing(self, item: GalleryItem) -> Iterator["LightboxController"]:
        """Open `item` for the duration of the block, closing on any exit."""
        self.open(item)
        try:
            yield self
        finally:
            self.teardown()

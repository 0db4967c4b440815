"""Host window: key-down listeners, page scroll lock and lightbox key bindings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Optional

from galleria.errors import ContractViolation
from galleria.utils import dbg

if TYPE_CHECKING:
    from galleria.lightbox import LightboxController

ESCAPE = "Escape"
ARROW_LEFT = "ArrowLeft"
ARROW_RIGHT = "ArrowRight"

OVERFLOW_AUTO = "auto"
OVERFLOW_HIDDEN = "hidden"


@dataclass(frozen=True)
class KeyEvent:
    key: str


KeyListener = Callable[[KeyEvent], None]


class Viewport:
    """Document-level state shared by every view: key listeners and body overflow."""

    def __init__(self) -> None:
        self._listeners: list[KeyListener] = []
        self.body_overflow = OVERFLOW_AUTO

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def add_key_listener(self, listener: KeyListener) -> None:
        self._listeners.append(listener)

    def remove_key_listener(self, listener: KeyListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def key_down(self, key: str) -> None:
        """Dispatch a key-down event to every listener bound at dispatch time."""
        event = KeyEvent(key)
        # Listeners may unbind or rebind themselves while handling the event.
        for listener in list(self._listeners):
            listener(event)


class ScrollLockManager:
    """Strictly paired page scroll lock."""

    def __init__(self, viewport: Viewport) -> None:
        self.viewport = viewport
        self.locked = False

    def lock(self) -> None:
        if self.locked:
            raise ContractViolation("Scroll lock is already held")
        self.locked = True
        self.viewport.body_overflow = OVERFLOW_HIDDEN

    def unlock(self) -> None:
        if not self.locked:
            raise ContractViolation("Scroll lock is not held")
        self.locked = False
        self.viewport.body_overflow = OVERFLOW_AUTO


class KeyboardNavigationBinder:
    """
    Owns the single key listener that drives an open lightbox.

    The controller calls `bind` after every transition into or within the Open
    state and `unbind` when it closes, so at most one listener is ever attached.
    """

    def __init__(self, viewport: Viewport, controller: "LightboxController") -> None:
        self.viewport = viewport
        self.controller = controller
        self._listener: Optional[KeyListener] = None

    @property
    def bound(self) -> bool:
        return self._listener is not None

    def bind(self) -> None:
        self.unbind()
        controller = self.controller
        actions = {
            ESCAPE: controller.close,
            ARROW_RIGHT: controller.next,
            ARROW_LEFT: controller.prev,
        }

        def on_key_down(event: KeyEvent) -> None:
            if not controller.is_open:
                return
            action = actions.get(event.key)
            if action:
                dbg(f"Key {event.key} -> {action.__name__}")
                action()

        self._listener = on_key_down
        self.viewport.add_key_listener(on_key_down)

    def unbind(self) -> None:
        if self._listener is not None:
            self.viewport.remove_key_listener(self._listener)
            self._listener = None

"""Toast-style notifications for success and error feedback."""

from __future__ import annotations

from typing import Protocol

from tqdm import tqdm

SUCCESS = "success"
ERROR = "error"

_PREFIX = {SUCCESS: "[^]", ERROR: "[!]"}


class Notifier(Protocol):
    """Fire-and-forget notification surface."""

    def notify(self, kind: str, message: str) -> None: ...


class ConsoleNotifier:
    """Print notifications without breaking any live progress bar."""

    def notify(self, kind: str, message: str) -> None:
        tqdm.write(f"{_PREFIX.get(kind, '[*]')} {message}")

"""CLI banner utilities."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

VERSION_PATH = Path(__file__).resolve().parent.parent / "VERSION"

_FRAME_ASCII = (
    "  +-----------------+",
    "  |  .-.            |",
    "  | (   )     /\\    |",
    "  |  `-'     /  \\   |",
    "  |    /\\   /    \\  |",
    "  |   /  \\_/      \\ |",
    "  |  /             \\|",
    "  +-----------------+",
)

_TITLE_ASCII = (
    "  ____       _ _            _       ",
    " / ___| __ _| | | ___ _ __ (_) __ _ ",
    "| |  _ / _` | | |/ _ \\ '__|| |/ _` |",
    "| |_| | (_| | | |  __/ |   | | (_| |",
    " \\____|\\__,_|_|_|\\___|_|   |_|\\__,_|",
)


def _pad_lines(lines: Sequence[str], target_height: int) -> list[str]:
    """Pad lines with blanks up to target height."""
    out = list(lines)
    out.extend([""] * (target_height - len(out)))
    return out


def read_version() -> str:
    """Read the CLI version from the VERSION file, or `unknown`."""
    try:
        version = VERSION_PATH.read_text(encoding="utf-8").strip()
    except OSError:
        return "unknown"
    return version or "unknown"


def render_banner(
    separator: str = " | ",
    extra_right_lines: Sequence[str] | None = None,
) -> str:
    """Render banner as `ascii frame | ascii title`."""
    right = list(_TITLE_ASCII)
    if extra_right_lines:
        right.extend(str(line) for line in extra_right_lines)

    height = max(len(_FRAME_ASCII), len(right))
    left = _pad_lines(_FRAME_ASCII, height)
    right = _pad_lines(right, height)
    left_width = max(len(line) for line in left)

    rows = [
        f"{left_line.ljust(left_width)}{separator}{right_line}".rstrip()
        for left_line, right_line in zip(left, right)
    ]
    return "\n".join(rows)


def render_main_menu_banner(separator: str = " | ") -> str:
    """Render banner with the main menu on the right-hand side."""
    title_width = max(len(line) for line in _TITLE_ASCII)
    menu_lines = (
        f"v{read_version()}".rjust(title_width),
        "",
        "Main menu:",
        "[1] Gallery",
        "[2] Social feed",
        "[3] Exit",
        "",
    )
    return render_banner(separator=separator, extra_right_lines=menu_lines)

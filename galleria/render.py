"""Plain-text rendering of the grid, the social feed and the lightbox."""

from __future__ import annotations

from typing import Mapping, Sequence

from galleria.lightbox import LightboxController
from galleria.models import SIZE_LARGE, DisplayItem, EngagementStats
from galleria.utils import format_number, plural

LOADING_TEXT = "Loading gallery..."
EMPTY_TITLE = "No images found"
EMPTY_TEXT = "Check back later for updates"


def render_empty_state() -> str:
    return f"\n    [ ]  {EMPTY_TITLE}\n         {EMPTY_TEXT}\n"


def render_grid(
    items: Sequence[DisplayItem],
    stats: Mapping[int, EngagementStats] | None = None,
) -> str:
    """
    Render grid cells, one per line, numbered from 1.

    Large cells are starred. Items with more than one image show their count;
    social stats, when given, are appended as likes/comments/shares.
    """
    if not items:
        return render_empty_state()

    lines = []
    for number, item in enumerate(items, start=1):
        marker = "*" if item.size == SIZE_LARGE else " "
        line = f"{marker}[{number:>2}] {item.title}"
        if item.category:
            line += f"  #{item.category.name}"
        if item.item_count > 1:
            line += f"  ({plural(item.item_count, 'image')})"
        entry = stats.get(item.id) if stats else None
        if entry:
            heart = "♥" if entry.is_liked else "♡"
            line += (
                f"  {heart} {format_number(entry.likes)}"
                f"  ✎ {format_number(entry.comments)}"
                f"  ⇪ {format_number(entry.shares)}"
            )
        lines.append(line)
    return "\n".join(lines)


def render_category_filter(
    labels: Sequence[tuple[str, str, int]], selected: str
) -> str:
    """Render `(key, name, count)` filter buttons, bracketing the selected one."""
    buttons = []
    for key, name, count in labels:
        label = f"{name} ({count})"
        buttons.append(f"[{key}: {label}]" if key == selected else f" {key}: {label} ")
    return " ".join(buttons)


def render_lightbox(lightbox: LightboxController) -> str:
    """Render the open viewer: title, counter, current URL and thumbnail strip."""
    item = lightbox.active_item
    if item is None:
        return ""
    total = len(item.image_urls)
    index = lightbox.active_index
    strip = " ".join(
        f"[{i + 1}]" if i == index else f" {i + 1} " for i in range(total)
    )
    lines = [
        "=" * 60,
        f"{item.title}    {index + 1} / {total}",
        lightbox.current_image_url or "",
    ]
    if item.description:
        lines.append(item.description)
    if total > 1:
        lines.append(strip)
    lines.append("=" * 60)
    return "\n".join(lines)

"""Interactive terminal front end for the gallery and the social feed."""

# pylint: disable=line-too-long

import asyncio
from typing import Awaitable, TypeVar

from aiohttp import ClientSession
from tqdm import tqdm

from galleria.catalog import ALL, API_URL, CatalogClient, default_timeout
from galleria.lightbox import LightboxController
from galleria.notify import ConsoleNotifier
from galleria.render import (
    LOADING_TEXT,
    render_category_filter,
    render_grid,
    render_lightbox,
)
from galleria.banner import render_main_menu_banner
from galleria.utils import check_base_url
from galleria.viewport import ARROW_LEFT, ARROW_RIGHT, ESCAPE, Viewport
from galleria.views import SORT_LATEST, SORT_POPULAR, GalleryView, SocialView

T = TypeVar("T")

KEY_ALIASES = {
    "left": ARROW_LEFT,
    "a": ARROW_LEFT,
    "right": ARROW_RIGHT,
    "d": ARROW_RIGHT,
    "esc": ESCAPE,
    "q": ESCAPE,
}


async def with_loading(awaitable: Awaitable[T]) -> T:
    """Await `awaitable` while a loading indicator ticks on the terminal."""
    task = asyncio.ensure_future(awaitable)
    with tqdm(desc=LOADING_TEXT, bar_format="{desc} {elapsed}", leave=False) as bar:
        while not task.done():
            await asyncio.wait({task}, timeout=0.1)
            bar.refresh()
    return task.result()


def select_grid_number(raw: str, count: int) -> int:
    """
    Convert a 1-based grid number typed by the user into a list index.

    Raises:
        ValueError: If the input is not a number within the grid.
    """
    if not raw.isdigit() or not 1 <= int(raw) <= count:
        raise ValueError(f"Enter a number between 1 and {count}.")
    return int(raw) - 1


def view_lightbox(lightbox: LightboxController, viewport: Viewport) -> None:
    """
    Drive an open lightbox from terminal input until it closes.

    Arrow keys and escape go through the viewport like real key-down events;
    a number jumps straight to that image.
    """
    while lightbox.is_open:
        print(render_lightbox(lightbox))
        raw = input("[?] left/right, image number, esc: ").strip().lower()
        key = KEY_ALIASES.get(raw)
        if key:
            viewport.key_down(key)
            continue
        try:
            lightbox.jump_to(select_grid_number(raw, len(lightbox.active_item.image_urls)))
        except ValueError as ve:
            print(f"[!] Error: {ve}")


async def gallery_screen(session: ClientSession, base_url: str) -> None:
    """Browse the gallery, switching categories and opening items."""
    viewport = Viewport()
    client = CatalogClient(session, ConsoleNotifier(), base_url)
    view = GalleryView(client, viewport)
    try:
        await with_loading(view.mount())
        while True:
            labels = [(ALL, "All", view.total_items)] + [
                (str(cat.id), cat.name, view.count_for(cat.id))
                for cat in view.categories
            ]
            print(f"\n{render_category_filter(labels, str(view.selected_category))}")
            grid = view.grid_items
            print(render_grid(grid))
            raw = input(
                "[?] Item number to view, 'c <id|all>' to filter, 'b' to go back: "
            ).strip().lower()
            if raw in ("b", ""):
                return
            if raw.startswith("c "):
                await with_loading(view.select_category(raw[2:].strip()))
                continue
            try:
                view.open_item(grid[select_grid_number(raw, len(grid))])
            except ValueError as ve:
                print(f"[!] Error: {ve}")
                continue
            view_lightbox(view.lightbox, viewport)
    finally:
        view.teardown()


async def social_screen(session: ClientSession, base_url: str) -> None:
    """Browse the social feed with likes, comments, shares and sorting."""
    viewport = Viewport()
    client = CatalogClient(session, ConsoleNotifier(), base_url)
    view = SocialView(client, viewport)
    try:
        await with_loading(view.mount())
        while True:
            print(f"\n[*] Social feed, sorted by {view.sort_by}")
            grid = view.grid_items
            print(render_grid(grid, view.stats))
            raw = input(
                "[?] Item number to view, 'like|comment|share <n>', "
                f"'sort {SORT_LATEST}|{SORT_POPULAR}', 'r' to reload, 'b' to go back: "
            ).strip().lower()
            if raw in ("b", ""):
                return
            if raw == "r":
                await with_loading(view.refresh())
                continue
            command, _, arg = raw.partition(" ")
            try:
                if command == "sort":
                    view.set_sort(arg.strip())
                elif command in ("like", "comment", "share"):
                    item_id = grid[select_grid_number(arg.strip(), len(grid))].id
                    getattr(view, command)(item_id)
                else:
                    view.open_item(grid[select_grid_number(raw, len(grid))])
                    view_lightbox(view.lightbox, viewport)
            except ValueError as ve:
                print(f"[!] Error: {ve}")
    finally:
        view.teardown()


async def main_menu() -> None:
    """
    Show the banner and dispatch to the gallery or social screens until exit.

    Raises:
        SystemExit: If the configured Catalog Service URL is invalid.
    """
    print(render_main_menu_banner())
    try:
        base_url = check_base_url(API_URL)
    except ValueError as ve:
        print(f"[!] Error: {ve}")
        raise SystemExit(1) from ve

    screens = {"1": gallery_screen, "2": social_screen}
    async with ClientSession(timeout=default_timeout()) as session:
        while True:
            choice = input("[?] Select menu: ").strip()
            if choice in ("3", "q", ""):
                return
            screen = screens.get(choice)
            if screen is None:
                print("[!] Unknown menu entry.")
                continue
            await screen(session, base_url)

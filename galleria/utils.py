"""This modules contains common utils"""

# pylint: disable=broad-exception-caught

import os
from datetime import datetime, timezone
from typing import Optional

from fake_useragent import UserAgent
from validators import url as validate_url

# Debug flag controlled by env var GALLERIA_DEBUG
DEBUG = os.environ.get("GALLERIA_DEBUG", "").lower() in {"1", "true", "yes", "on"}


def dbg(msg: str) -> None:
    """
    Print a debug message when the DEBUG flag is enabled.

    Args:
        msg (str): Message to print when debug logging is active.

    Returns:
        None
    """
    if DEBUG:
        print(f"[debug] {msg}")


def env_float(name: str, default: float) -> float:
    """Read a float from the environment, falling back to `default` on bad input."""
    try:
        return float(os.environ.get(name, "") or default)
    except ValueError:
        return default


def get_random_user_agent() -> str:
    """
    Return a random user agent string; fallback to a generic UA if generator fails.
    """
    try:
        return UserAgent().random
    except Exception:
        return "Mozilla/5.0"


def check_base_url(base_url: str) -> str:
    """
    Validate the Catalog Service base URL and strip any trailing slash.

    Args:
        base_url (str): The configured base URL.

    Raises:
        ValueError: If the URL is empty or has an invalid format.

    Returns:
        str: The normalized base URL.
    """
    if not base_url:
        raise ValueError("Catalog Service URL cannot be empty!")
    if not validate_url(base_url):
        raise ValueError(f"Invalid Catalog Service URL: {base_url}")
    return base_url.rstrip("/")


def parse_timestamp(value: Optional[str]) -> datetime:
    """
    Parse an ISO-8601 timestamp as sent by the Catalog Service.

    A trailing `Z` is accepted and naive values are taken as UTC. A missing or
    unparseable value sorts before everything else.

    Args:
        value (Optional[str]): The timestamp string.

    Returns:
        datetime: A timezone-aware datetime.
    """
    earliest = datetime.min.replace(tzinfo=timezone.utc)
    if not value:
        return earliest
    try:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        dbg(f"Unparseable timestamp: {value!r}")
        return earliest
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_number(num: int) -> str:
    """Return a compact counter label: 950, 1.2K, 3.4M."""
    if num >= 1_000_000:
        return f"{num / 1_000_000:.1f}M"
    if num >= 1000:
        return f"{num / 1000:.1f}K"
    return str(num)


def plural(count: int, word: str) -> str:
    """Return `count word` with a trailing s when count is not one."""
    return f"{count} {word}{'s' if count != 1 else ''}"

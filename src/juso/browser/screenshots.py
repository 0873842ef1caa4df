"""Screenshot naming and writing.

Files are named ``{base}_{timestamp}.png`` where the timestamp is an
ISO-8601 UTC instant with ``:`` and ``.`` replaced by ``-`` so the name is
valid on every filesystem, e.g. ``강남구_테헤란로_2024-05-01T09-30-12-345Z.png``.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING

from playwright.sync_api import Error as PlaywrightError

from juso.exceptions import ScreenshotError

if TYPE_CHECKING:
    from playwright.sync_api import Locator, Page

logger = logging.getLogger(__name__)

# Anything that is not an ASCII word char, whitespace or a Hangul syllable.
_UNSAFE_NAME_CHARS = re.compile(r"[^A-Za-z0-9_\s가-힣]")
_WHITESPACE_RUN = re.compile(r"\s+")


def default_basename(keyword: str) -> str:
    """Derive a file base name from a search keyword.

    >>> default_basename("강남구 테헤란로!!")
    '강남구_테헤란로'
    """
    return _WHITESPACE_RUN.sub("_", _UNSAFE_NAME_CHARS.sub("", keyword))


def screenshot_timestamp(now: datetime | None = None) -> str:
    """Return a filesystem-safe UTC timestamp with millisecond precision."""
    now = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    iso = now.isoformat(timespec="milliseconds").replace("+00:00", "Z")
    return iso.replace(":", "-").replace(".", "-")


def ensure_output_dir(output_dir: str | Path) -> Path:
    """Create *output_dir* (and parents) if missing; a no-op otherwise."""
    path = Path(output_dir)
    path.mkdir(parents=True, exist_ok=True)
    return path


def build_screenshot_path(name: str, output_dir: str | Path, now: datetime | None = None) -> Path:
    """Return ``output_dir/{name}_{timestamp}.png``, creating the directory."""
    return ensure_output_dir(output_dir) / f"{name}_{screenshot_timestamp(now)}.png"


def save_full_page(page: Page, name: str, output_dir: str | Path) -> str:
    """Write a full-page PNG and return its path.

    Raises:
        ScreenshotError: If the directory or the image cannot be written.
    """
    try:
        path = build_screenshot_path(name, output_dir)
    except (OSError, ValueError) as exc:
        raise ScreenshotError(str(Path(output_dir) / name), str(exc)) from exc
    try:
        page.screenshot(path=str(path), full_page=True)
    except PlaywrightError as exc:
        raise ScreenshotError(str(path), str(exc)) from exc
    _confirm_written(path)
    logger.info("Screenshot saved: %s", path)
    return str(path)


def save_element(locator: Locator, name: str, output_dir: str | Path) -> str:
    """Write a PNG of a single element and return its path.

    Raises:
        ScreenshotError: If the directory or the image cannot be written.
    """
    try:
        path = build_screenshot_path(name, output_dir)
    except (OSError, ValueError) as exc:
        raise ScreenshotError(str(Path(output_dir) / name), str(exc)) from exc
    try:
        locator.screenshot(path=str(path))
    except PlaywrightError as exc:
        raise ScreenshotError(str(path), str(exc)) from exc
    _confirm_written(path)
    logger.info("Element screenshot saved: %s", path)
    return str(path)


def _confirm_written(path: Path) -> None:
    if not path.is_file():
        raise ScreenshotError(str(path), "file was not written")

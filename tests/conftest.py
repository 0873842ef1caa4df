"""Juso-capture test configuration — shared fixtures for unit and integration tests."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable
from unittest.mock import MagicMock

import pytest
from playwright.sync_api import TimeoutError as PlaywrightTimeout

# Minimal PNG signature; enough for "file exists" checks.
PNG_BYTES = b"\x89PNG\r\n\x1a\n"

JUSO_URL = "https://www.juso.go.kr/openIndexPage.do"


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_settings_cache(monkeypatch):
    """Clear the settings LRU cache and ambient JUSO_* env between tests."""
    from juso.settings.config import get_settings

    monkeypatch.delenv("JUSO_ENV", raising=False)
    monkeypatch.delenv("JUSO_LOG_LEVEL", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture()
def settings():
    """Freshly resolved ``Settings`` (default profile)."""
    from juso.settings.config import Settings

    return Settings()


# ---------------------------------------------------------------------------
# Stub Playwright page / session
# ---------------------------------------------------------------------------


def _write_png(*args, path: str | None = None, **kwargs) -> bytes:
    if path:
        Path(path).write_bytes(PNG_BYTES)
    return PNG_BYTES


def build_stub_page(visible: Iterable[str] = (), *, title: str = "도로명주소 안내시스템") -> MagicMock:
    """Return a ``MagicMock`` page whose locators are visible only for *visible* selectors.

    ``page.locator(selector).first.wait_for`` raises ``PlaywrightTimeout``
    for every selector not listed. Screenshots write a tiny PNG to disk.
    Created locators are kept in ``page.stub_locators`` for assertions.
    """
    visible = set(visible)
    page = MagicMock(name="page")
    page.url = JUSO_URL
    page.title.return_value = title
    page.evaluate.return_value = {"inputs": [], "buttons": []}
    page.screenshot.side_effect = _write_png

    locators: dict[str, MagicMock] = {}

    def _locator(selector: str) -> MagicMock:
        if selector not in locators:
            loc = MagicMock(name=f"locator({selector})")
            if selector not in visible:
                loc.first.wait_for.side_effect = PlaywrightTimeout(f"{selector} not visible")
            loc.first.screenshot.side_effect = _write_png
            locators[selector] = loc
        return locators[selector]

    page.locator.side_effect = _locator
    page.stub_locators = locators
    return page


def build_stub_session(page: MagicMock):
    """Wrap *page* in a real ``BrowserSession`` with a mocked browser."""
    from juso.browser.session import BrowserSession

    return BrowserSession(browser=MagicMock(name="browser"), page=page, driver=None)


@pytest.fixture()
def stub_page_factory():
    """Expose :func:`build_stub_page` to tests."""
    return build_stub_page


@pytest.fixture()
def make_automator(settings):
    """Return a factory creating a ``PageAutomator`` bound to a stub page.

    Usage::

        automator, session = make_automator(page)
    """
    from juso.automator import PageAutomator

    def _make(page: MagicMock):
        session = build_stub_session(page)
        automator = PageAutomator(settings=settings, session_factory=lambda _browser_settings: session)
        return automator, session

    return _make


# ---------------------------------------------------------------------------
# Pytest markers
# ---------------------------------------------------------------------------


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests that require external services or real I/O")
    config.addinivalue_line("markers", "slow: marks tests that take more than a few seconds")

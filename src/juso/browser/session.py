"""Browser session lifetime: one Playwright driver, one browser, one page.

Usage::

    from juso.browser.session import launch_session

    session = launch_session(settings.browser)
    try:
        session.page.goto(url)
    finally:
        session.close()
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from playwright.sync_api import Error as PlaywrightError, sync_playwright

from juso.exceptions import SessionLaunchError

if TYPE_CHECKING:
    from playwright.sync_api import Browser, Page

    from juso.settings.config import BrowserSettings

logger = logging.getLogger(__name__)


@dataclass
class BrowserSession:
    """Handles owned for the duration of a single run.

    ``page`` is only valid between :func:`launch_session` and :meth:`close`.
    """

    browser: Browser
    page: Page
    driver: Any = None
    closed: bool = field(default=False, init=False)

    def close(self) -> None:
        """Close the browser and stop the driver (best-effort, idempotent)."""
        if self.closed:
            return
        self.closed = True
        try:
            self.browser.close()
        except Exception as exc:
            logger.warning("Browser close failed: %s", exc)
        if self.driver is not None:
            _stop_driver(self.driver)


def build_launch_args(settings: BrowserSettings) -> dict[str, Any]:
    """Return keyword arguments for ``chromium.launch()``."""
    args = [
        f"--window-position={settings.window_x},{settings.window_y}",
        f"--window-size={settings.viewport_width},{settings.viewport_height}",
    ]
    if not settings.sandbox:
        args.append("--no-sandbox")
    return {
        "headless": settings.headless,
        "slow_mo": settings.slow_mo_ms,
        "args": args,
    }


def launch_session(settings: BrowserSettings) -> BrowserSession:
    """Start Chromium with a fixed viewport and open a single page.

    Raises:
        SessionLaunchError: If the browser engine cannot be started.
    """
    try:
        driver = sync_playwright().start()
    except PlaywrightError as exc:
        raise SessionLaunchError(f"Playwright driver failed to start: {exc}") from exc

    browser = None
    try:
        browser = driver.chromium.launch(**build_launch_args(settings))
        page = browser.new_page()
        page.set_viewport_size({"width": settings.viewport_width, "height": settings.viewport_height})
        page.set_default_timeout(settings.timeout_ms)
    except PlaywrightError as exc:
        if browser is not None:
            try:
                browser.close()
            except Exception as close_exc:
                logger.warning("Browser close after failed launch failed: %s", close_exc)
        _stop_driver(driver)
        raise SessionLaunchError(f"Chromium launch failed: {exc}") from exc

    logger.info(
        "Browser started (headless=%s, viewport=%dx%d)",
        settings.headless,
        settings.viewport_width,
        settings.viewport_height,
    )
    return BrowserSession(browser=browser, page=page, driver=driver)


def _stop_driver(driver: Any) -> None:
    try:
        driver.stop()
    except Exception as exc:
        logger.warning("Playwright driver stop failed: %s", exc)

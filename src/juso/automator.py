"""Search-and-capture automation for the juso.go.kr address lookup site.

The whole run is one linear sequence::

    initialize → navigate → (debug shot) → search → (debug shot) → final shot → close

``PageAutomator.run`` never raises: every failure is folded into the
returned ``CaptureResult`` and the browser is always released.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable

from playwright.sync_api import Error as PlaywrightError, TimeoutError as PlaywrightTimeout

from juso.browser.diagnostics import log_page_state
from juso.browser.locators import (
    RESULT_AREA_CANDIDATES,
    RESULT_CANDIDATES,
    SEARCH_INPUT_CANDIDATES,
    locate_first_visible,
)
from juso.browser.navigation import navigate, wait_for_network_idle
from juso.browser.screenshots import default_basename, save_element, save_full_page
from juso.browser.session import BrowserSession, launch_session
from juso.exceptions import JusoError, ScreenshotError, SearchBoxNotFoundError, SubmissionError
from juso.models.results import SEARCH_FAILED_ERROR, CaptureOptions, CaptureResult
from juso.settings.config import BrowserSettings, Settings

logger = logging.getLogger(__name__)

SessionFactory = Callable[[BrowserSettings], BrowserSession]

PRE_SEARCH_SUFFIX = "검색전"
POST_SEARCH_SUFFIX = "검색후"
FINAL_SUFFIX = "최종결과"


class PageAutomator:
    """Owns one browser session and drives the address search on it.

    Args:
        settings: Resolved settings; defaults to :func:`get_settings`.
        session_factory: Callable that starts a :class:`BrowserSession`.
            Tests pass a factory returning stubbed browser/page objects.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        session_factory: SessionFactory | None = None,
    ) -> None:
        if settings is None:
            from juso.settings import get_settings

            settings = get_settings()
        self.settings = settings
        self._session_factory = session_factory or launch_session
        self._session: BrowserSession | None = None

    @property
    def session(self) -> BrowserSession | None:
        """The live session, or ``None`` outside initialize/close."""
        return self._session

    @property
    def page(self):
        """The session's page. Raises ``JusoError`` when no session is open."""
        if self._session is None:
            raise JusoError("Browser session is not initialized")
        return self._session.page

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def initialize(self) -> None:
        """Launch the browser and open a single page."""
        self._session = self._session_factory(self.settings.browser)

    def navigate_to_target(self, url: str | None = None) -> None:
        """Load the address lookup page and wait for the network to settle."""
        target = url or self.settings.search.target_url
        logger.info("Navigating to %s", target)
        navigate(self.page, target, timeout_ms=self.settings.browser.timeout_ms)

    def close(self) -> None:
        """Release the browser if one was started. Safe to call repeatedly."""
        if self._session is None:
            return
        session, self._session = self._session, None
        session.close()
        logger.debug("Browser session closed")

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def search(self, keyword: str) -> bool:
        """Type *keyword* into the search box, submit, and wait for results.

        Returns ``False`` if anything up to and including the post-submit
        waits raised. Failing to spot a result marker only logs a warning;
        the search is still reported as completed.
        """
        search = self.settings.search
        try:
            page = self.page
            wait_for_network_idle(page, timeout_ms=search.network_idle_timeout_ms)

            match = locate_first_visible(page, SEARCH_INPUT_CANDIDATES, timeout_ms=search.selector_timeout_ms)
            if match is None:
                logger.error("Search box not found; dumping page state")
                log_page_state(page)
                raise SearchBoxNotFoundError(len(SEARCH_INPUT_CANDIDATES))
            logger.info("Search box found: %s", match.candidate)

            field = match.locator
            field.click()
            field.fill("")
            field.fill(keyword)
            page.wait_for_timeout(search.settle_delay_ms)

            # Enter is more reliable than guessing the submit button's selector
            page.keyboard.press("Enter")
            try:
                wait_for_network_idle(page, timeout_ms=search.network_idle_timeout_ms)
                page.wait_for_timeout(search.render_delay_ms)
            except PlaywrightTimeout as exc:
                raise SubmissionError(f"Timed out waiting for search results: {exc}") from exc
        except Exception as exc:
            logger.error("Address search for %r failed: %s", keyword, exc)
            return False

        self._verify_results()
        logger.info("Address search completed: %s", keyword)
        return True

    def _verify_results(self) -> bool:
        try:
            result = locate_first_visible(
                self.page,
                RESULT_CANDIDATES,
                timeout_ms=self.settings.search.result_timeout_ms,
            )
        except PlaywrightError as exc:
            logger.warning("Result verification failed: %s", exc)
            return False
        if result is None:
            logger.warning("No search result marker visible; results may not have rendered")
            return False
        logger.info("Search results confirmed via %s", result.candidate)
        return True

    # ------------------------------------------------------------------
    # Capture
    # ------------------------------------------------------------------

    def capture_screenshot(self, name: str, output_dir: str = "screenshots") -> str | None:
        """Save a full-page screenshot as ``{name}_{timestamp}.png``.

        Returns:
            The written path, or ``None`` if the capture failed.
        """
        try:
            return save_full_page(self.page, name, output_dir)
        except JusoError as exc:
            logger.error("Screenshot %s failed: %s", name, exc)
            return None

    def capture_search_results(self, name: str, output_dir: str = "screenshots") -> str | None:
        """Save only the result area as ``{name}_result_{timestamp}.png``.

        Falls back to a full-page capture when no result area is visible or
        the element capture fails.
        """
        try:
            area = locate_first_visible(
                self.page,
                RESULT_AREA_CANDIDATES,
                timeout_ms=self.settings.search.result_timeout_ms,
            )
        except (JusoError, PlaywrightError) as exc:
            logger.error("Result area capture failed: %s", exc)
            return None
        if area is None:
            logger.info("Result area not found; capturing full page instead")
            return self.capture_screenshot(name, output_dir)
        try:
            return save_element(area.locator, f"{name}_result", output_dir)
        except ScreenshotError as exc:
            logger.warning("Result area capture failed (%s); capturing full page instead", exc)
            return self.capture_screenshot(name, output_dir)

    # ------------------------------------------------------------------
    # Orchestration
    # ------------------------------------------------------------------

    def run(
        self,
        keyword: str,
        filename: str | None = None,
        options: CaptureOptions | None = None,
    ) -> CaptureResult:
        """Search for *keyword* and capture the result page.

        Args:
            keyword: Address keyword to search for.
            filename: File base name; derived from *keyword* when omitted.
            options: Output directory and capture switches.

        Returns:
            A ``CaptureResult``. Never raises.
        """
        options = options or CaptureOptions.from_settings(self.settings)
        base = filename or default_basename(keyword)
        result = CaptureResult(search_keyword=keyword)

        try:
            self.initialize()
            self.navigate_to_target()

            if options.debug_screenshots:
                self._capture_debug(result, f"{base}_{PRE_SEARCH_SUFFIX}", options.output_dir)

            search_ok = self.search(keyword)

            if options.debug_screenshots:
                self._capture_debug(result, f"{base}_{POST_SEARCH_SUFFIX}", options.output_dir)

            if not search_ok:
                logger.error("Address search failed for %r", keyword)
                result.error = SEARCH_FAILED_ERROR
                return result

            if options.capture_full_page:
                path = self.capture_screenshot(f"{base}_{FINAL_SUFFIX}", options.output_dir)
                if path:
                    result.captured_files.append(path)
            if options.capture_result_only:
                path = self.capture_search_results(base, options.output_dir)
                if path:
                    result.captured_files.append(path)

            result.success = True
            logger.info(
                "Capture complete for %r: %d file(s) saved",
                keyword,
                len(result.captured_files),
            )
            return result

        except Exception as exc:
            logger.exception("Search and capture failed for %r: %s", keyword, exc)
            result.success = False
            result.error = str(exc) or exc.__class__.__name__
            return result

        finally:
            try:
                self.close()
            except Exception:
                logger.exception("Browser cleanup failed for %r", keyword)
            result.completed_at = datetime.now(timezone.utc)

    def _capture_debug(self, result: CaptureResult, name: str, output_dir: str) -> None:
        path = self.capture_screenshot(name, output_dir)
        if path:
            result.debug_files.append(path)

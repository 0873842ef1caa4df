"""Unit tests for juso.browser.session — launch arguments and teardown."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
from playwright.sync_api import Error as PlaywrightError

from juso.browser.session import BrowserSession, build_launch_args, launch_session
from juso.exceptions import SessionLaunchError
from juso.settings.config import BrowserSettings

_SESSION_MODULE = "juso.browser.session"


class TestBuildLaunchArgs:
    def test_defaults(self) -> None:
        args = build_launch_args(BrowserSettings())

        assert args["headless"] is False
        assert args["slow_mo"] == 50
        assert "--window-position=1920,0" in args["args"]
        assert "--window-size=1920,1080" in args["args"]
        assert "--no-sandbox" not in args["args"]

    def test_sandbox_disabled(self) -> None:
        args = build_launch_args(BrowserSettings(sandbox=False, headless=True))

        assert args["headless"] is True
        assert "--no-sandbox" in args["args"]


class TestBrowserSessionClose:
    def test_close_closes_browser_and_stops_driver(self) -> None:
        session = BrowserSession(browser=MagicMock(), page=MagicMock(), driver=MagicMock())

        session.close()

        session.browser.close.assert_called_once()
        session.driver.stop.assert_called_once()
        assert session.closed is True

    def test_close_is_idempotent(self) -> None:
        session = BrowserSession(browser=MagicMock(), page=MagicMock(), driver=MagicMock())

        session.close()
        session.close()

        assert session.browser.close.call_count == 1
        assert session.driver.stop.call_count == 1

    def test_close_errors_are_logged_not_raised(self, caplog) -> None:
        browser = MagicMock()
        browser.close.side_effect = PlaywrightError("Browser has been closed")
        driver = MagicMock()
        session = BrowserSession(browser=browser, page=MagicMock(), driver=driver)

        session.close()

        driver.stop.assert_called_once()
        assert "Browser close failed" in caplog.text

    def test_non_playwright_close_errors_are_logged(self, caplog) -> None:
        browser = MagicMock()
        browser.close.side_effect = RuntimeError("cannot switch to a different thread")
        driver = MagicMock()
        driver.stop.side_effect = RuntimeError("event loop is closed")
        session = BrowserSession(browser=browser, page=MagicMock(), driver=driver)

        session.close()

        driver.stop.assert_called_once()
        assert session.closed is True
        assert "Playwright driver stop failed" in caplog.text


class TestLaunchSession:
    @patch(f"{_SESSION_MODULE}.sync_playwright")
    def test_launch_sets_viewport(self, mock_sync_playwright) -> None:
        driver = mock_sync_playwright.return_value.start.return_value
        browser = driver.chromium.launch.return_value
        page = browser.new_page.return_value

        session = launch_session(BrowserSettings(timeout_ms=12_000))

        assert session.browser is browser
        assert session.page is page
        assert session.driver is driver
        page.set_viewport_size.assert_called_once_with({"width": 1920, "height": 1080})
        page.set_default_timeout.assert_called_once_with(12_000)
        _, kwargs = driver.chromium.launch.call_args
        assert kwargs["slow_mo"] == 50

    @patch(f"{_SESSION_MODULE}.sync_playwright")
    def test_launch_failure_raises_and_stops_driver(self, mock_sync_playwright) -> None:
        driver = mock_sync_playwright.return_value.start.return_value
        driver.chromium.launch.side_effect = PlaywrightError("Executable doesn't exist")

        with pytest.raises(SessionLaunchError, match="Executable doesn't exist"):
            launch_session(BrowserSettings())

        driver.stop.assert_called_once()

    @patch(f"{_SESSION_MODULE}.sync_playwright")
    def test_page_failure_closes_browser(self, mock_sync_playwright) -> None:
        driver = mock_sync_playwright.return_value.start.return_value
        browser = driver.chromium.launch.return_value
        browser.new_page.side_effect = PlaywrightError("Target closed")

        with pytest.raises(SessionLaunchError):
            launch_session(BrowserSettings())

        browser.close.assert_called_once()
        driver.stop.assert_called_once()

    @patch(f"{_SESSION_MODULE}.sync_playwright")
    def test_driver_start_failure_is_wrapped(self, mock_sync_playwright) -> None:
        mock_sync_playwright.return_value.start.side_effect = PlaywrightError(
            "It looks like you are using Playwright Sync API inside the asyncio loop."
        )

        with pytest.raises(SessionLaunchError, match="asyncio loop"):
            launch_session(BrowserSettings())

    @patch(f"{_SESSION_MODULE}.sync_playwright")
    def test_driver_stopped_when_browser_close_fails(self, mock_sync_playwright) -> None:
        driver = mock_sync_playwright.return_value.start.return_value
        browser = driver.chromium.launch.return_value
        browser.new_page.side_effect = PlaywrightError("Target closed")
        browser.close.side_effect = PlaywrightError("Browser has been closed")

        with pytest.raises(SessionLaunchError, match="Target closed"):
            launch_session(BrowserSettings())

        browser.close.assert_called_once()
        driver.stop.assert_called_once()

"""Single-attempt page navigation and network-idle waits.

Failures are translated into :class:`~juso.exceptions.NavigationError`
with a short reason; nothing here retries.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from playwright.sync_api import Error as PlaywrightError, TimeoutError as PlaywrightTimeout

from juso.exceptions import NavigationError

if TYPE_CHECKING:
    from playwright.sync_api import Page, Response

logger = logging.getLogger(__name__)

# Playwright error substrings mapped to a readable reason.
_KNOWN_NET_ERRORS: tuple[str, ...] = (
    "ERR_NAME_NOT_RESOLVED",
    "ERR_CONNECTION_REFUSED",
    "ERR_CONNECTION_RESET",
    "ERR_CONNECTION_CLOSED",
    "ERR_INTERNET_DISCONNECTED",
    "ERR_SSL_PROTOCOL_ERROR",
    "ERR_CERT_AUTHORITY_INVALID",
    "ERR_CERT_COMMON_NAME_INVALID",
    "ERR_ADDRESS_UNREACHABLE",
)


def navigate(page: Page, url: str, *, timeout_ms: int = 30_000) -> Response | None:
    """Load *url* and wait until the network is idle.

    Args:
        page: Playwright page instance.
        url: Target URL.
        timeout_ms: Navigation timeout in milliseconds.

    Returns:
        The main-frame ``Response``, or ``None``.

    Raises:
        NavigationError: On timeout or any Playwright navigation error.
    """
    logger.debug("goto %s (wait_until=networkidle, timeout=%dms)", url, timeout_ms)
    try:
        return page.goto(url, wait_until="networkidle", timeout=timeout_ms)
    except PlaywrightError as exc:
        reason = describe_navigation_error(exc)
        logger.error("Navigation to %s failed: %s", url, reason)
        raise NavigationError(url, reason) from exc


def wait_for_network_idle(page: Page, *, timeout_ms: int = 30_000) -> None:
    """Block until no network activity is observed for a short quiet window."""
    page.wait_for_load_state("networkidle", timeout=timeout_ms)


def describe_navigation_error(exc: PlaywrightError) -> str:
    """Return a short reason string for a Playwright navigation error."""
    if isinstance(exc, PlaywrightTimeout):
        return "timed out"
    message = str(exc)
    for pattern in _KNOWN_NET_ERRORS:
        if pattern in message:
            return pattern.replace("ERR_", "").replace("_", " ").lower()
    return message.splitlines()[0] if message else exc.__class__.__name__

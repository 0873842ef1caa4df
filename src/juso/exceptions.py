"""Juso-capture exception hierarchy."""

from __future__ import annotations


class JusoError(Exception):
    """Base exception for all juso-capture errors."""


class SessionLaunchError(JusoError):
    """Raised when the browser engine cannot be started."""


class NavigationError(JusoError):
    """Raised when the target page cannot be loaded.

    Attributes:
        url: The URL that failed to load.
        reason: Short human-readable cause (e.g. ``"timed out"``).
    """

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"Navigation to {url} failed: {reason}")


class SearchBoxNotFoundError(JusoError):
    """Raised when none of the search-input candidates became visible."""

    def __init__(self, tried: int) -> None:
        self.tried = tried
        super().__init__(f"Search box not found ({tried} selector candidates tried)")


class SubmissionError(JusoError):
    """Raised when submitting the search or waiting for its results times out."""


class ScreenshotError(JusoError):
    """Raised when a screenshot could not be written to disk."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Screenshot {path} could not be saved: {reason}")

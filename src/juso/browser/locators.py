"""Ordered selector-candidate probing.

The address site's markup changes between releases, so elements are found
by trying a prioritised list of CSS selectors, most specific first.  Each
candidate gets a short visibility wait; the first visible one wins and the
remaining candidates are never touched.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence

from playwright.sync_api import TimeoutError as PlaywrightTimeout

if TYPE_CHECKING:
    from playwright.sync_api import Locator, Page

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SelectorCandidate:
    """One heuristic rule for locating a DOM element."""

    selector: str
    description: str = ""

    def __str__(self) -> str:
        return self.description or self.selector


@dataclass
class LocatedElement:
    """The winning candidate together with its resolved locator."""

    candidate: SelectorCandidate
    locator: Locator
    index: int


# Search keyword input, most specific first.
SEARCH_INPUT_CANDIDATES: tuple[SelectorCandidate, ...] = (
    SelectorCandidate('input[name="keyword"]', "name=keyword"),
    SelectorCandidate("input#keyword", "id=keyword"),
    SelectorCandidate('input[name="searchKeyword"]', "name=searchKeyword"),
    SelectorCandidate("input#searchKeyword", "id=searchKeyword"),
    SelectorCandidate("input.search-input", "class=search-input"),
    SelectorCandidate('input[placeholder*="주소"]', "placeholder contains 주소"),
    SelectorCandidate('input[placeholder*="검색"]', "placeholder contains 검색"),
    SelectorCandidate('input[type="text"]', "generic text input"),
)

# Markers whose presence confirms that a result list was rendered.
RESULT_CANDIDATES: tuple[SelectorCandidate, ...] = (
    SelectorCandidate("table", "table"),
    SelectorCandidate(".result", "class=result"),
    SelectorCandidate(".search-result", "class=search-result"),
    SelectorCandidate("#searchResult", "id=searchResult"),
    SelectorCandidate(".list", "class=list"),
    SelectorCandidate('[class*="result"]', "class contains result"),
    SelectorCandidate('[id*="result"]', "id contains result"),
)

# Regions worth capturing on their own for a result-only screenshot.
RESULT_AREA_CANDIDATES: tuple[SelectorCandidate, ...] = (
    SelectorCandidate(".result", "class=result"),
    SelectorCandidate(".search-result", "class=search-result"),
    SelectorCandidate(".list", "class=list"),
    SelectorCandidate(".table", "class=table"),
    SelectorCandidate(".content", "class=content"),
)


def is_visible_within(locator: Locator, timeout_ms: int) -> bool:
    """Return ``True`` if *locator* becomes visible within *timeout_ms*."""
    try:
        locator.wait_for(state="visible", timeout=timeout_ms)
    except PlaywrightTimeout:
        return False
    return True


def locate_first_visible(
    page: Page,
    candidates: Sequence[SelectorCandidate],
    *,
    timeout_ms: int = 1_000,
) -> LocatedElement | None:
    """Return the first candidate that is visible within its timeout.

    Candidates are evaluated strictly in order; once one matches, later
    candidates are not queried at all.

    Args:
        page: Playwright page instance.
        candidates: Ordered selector candidates (highest priority first).
        timeout_ms: Visibility wait per candidate in milliseconds.

    Returns:
        A ``LocatedElement`` for the winner, or ``None`` if none matched.
    """
    for index, candidate in enumerate(candidates):
        locator = page.locator(candidate.selector).first
        if is_visible_within(locator, timeout_ms):
            logger.debug("Candidate %d matched: %s", index, candidate)
            return LocatedElement(candidate=candidate, locator=locator, index=index)
        logger.debug("Candidate %d not visible: %s", index, candidate)
    return None

"""Page-state dump used when the search box cannot be found.

Output is log lines for a human reading the run; nothing downstream
parses it.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from playwright.sync_api import Error as PlaywrightError

if TYPE_CHECKING:
    from playwright.sync_api import Page

logger = logging.getLogger(__name__)

_MAX_ELEMENTS = 5

_COLLECT_ELEMENTS_JS = """(limit) => {
    const describe = (el) => ({
        tag: el.tagName.toLowerCase(),
        type: el.getAttribute('type') || '',
        name: el.getAttribute('name') || '',
        id: el.id || '',
        cls: el.className && typeof el.className === 'string' ? el.className : '',
        placeholder: el.getAttribute('placeholder') || '',
        text: (el.innerText || el.value || '').trim().slice(0, 40),
    });
    const inputs = [...document.querySelectorAll('input')].slice(0, limit).map(describe);
    const buttons = [...document.querySelectorAll('button, input[type="submit"], input[type="button"]')]
        .slice(0, limit)
        .map(describe);
    return {inputs, buttons};
}"""


def collect_page_state(page: Page, limit: int = _MAX_ELEMENTS) -> dict[str, Any]:
    """Return URL, title and up to *limit* input and button descriptions."""
    state: dict[str, Any] = {"url": page.url, "title": "", "inputs": [], "buttons": []}
    try:
        state["title"] = page.title()
        elements = page.evaluate(_COLLECT_ELEMENTS_JS, limit)
    except PlaywrightError as exc:
        logger.debug("Page state collection failed: %s", exc)
        return state
    state["inputs"] = elements.get("inputs", [])[:limit]
    state["buttons"] = elements.get("buttons", [])[:limit]
    return state


def log_page_state(page: Page, limit: int = _MAX_ELEMENTS) -> dict[str, Any]:
    """Log the current page state for debugging and return what was collected."""
    state = collect_page_state(page, limit)
    logger.info("Page URL: %s", state["url"])
    logger.info("Page title: %s", state["title"])
    logger.info("Inputs on page (first %d): %d", limit, len(state["inputs"]))
    for i, el in enumerate(state["inputs"]):
        logger.info("  input[%d] %s", i, _format_element(el))
    logger.info("Buttons on page (first %d): %d", limit, len(state["buttons"]))
    for i, el in enumerate(state["buttons"]):
        logger.info("  button[%d] %s", i, _format_element(el))
    return state


def _format_element(el: dict[str, Any]) -> str:
    parts = [el.get("tag", "?")]
    for key in ("type", "name", "id", "cls", "placeholder", "text"):
        value = el.get(key)
        if value:
            parts.append(f"{key}={value!r}")
    return " ".join(parts)

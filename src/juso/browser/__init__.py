"""Browser automation modules (Playwright, sync API).

``session`` owns the browser process, ``navigation`` loads pages,
``locators`` probes ordered selector candidates, ``screenshots`` writes
PNG files and ``diagnostics`` dumps page state when a search box is missing.
"""

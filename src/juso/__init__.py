"""juso-capture — search the juso.go.kr address lookup site and save screenshots."""

from __future__ import annotations

try:
    from importlib.metadata import version

    __version__ = version("juso-capture")
except Exception:
    __version__ = "0.0.0"

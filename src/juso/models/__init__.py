"""Run-scoped data models."""

from juso.models.results import SEARCH_FAILED_ERROR, CaptureOptions, CaptureResult

__all__ = ["SEARCH_FAILED_ERROR", "CaptureOptions", "CaptureResult"]

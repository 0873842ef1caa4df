"""Result and option models for a single capture run.

``CaptureResult`` is produced once per :meth:`PageAutomator.run` and
returned to the caller; nothing is persisted besides the PNG files.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

# Error reported when the search step itself fails (no exception escaped).
SEARCH_FAILED_ERROR = "주소 검색 실패"


@dataclass
class CaptureOptions:
    """Per-run switches for :meth:`PageAutomator.run`."""

    output_dir: str = "screenshots"
    capture_full_page: bool = True
    capture_result_only: bool = False
    debug_screenshots: bool = True

    @classmethod
    def from_settings(cls, settings=None) -> CaptureOptions:
        """Build options from the ``[capture]`` settings section."""
        if settings is None:
            from juso.settings import get_settings

            settings = get_settings()
        capture = settings.capture
        return cls(
            output_dir=capture.output_dir,
            capture_full_page=capture.capture_full_page,
            capture_result_only=capture.capture_result_only,
            debug_screenshots=capture.debug_screenshots,
        )


@dataclass
class CaptureResult:
    """Outcome of one search-and-capture run.

    ``captured_files`` only lists screenshots that were confirmed written.
    Debug screenshots taken around the search step are tracked separately
    in ``debug_files``.
    """

    search_keyword: str = ""
    success: bool = False
    captured_files: list[str] = field(default_factory=list)
    error: str | None = None
    debug_files: list[str] = field(default_factory=list)

    started_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    completed_at: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a plain dict suitable for JSON output."""
        return {
            "search_keyword": self.search_keyword,
            "success": self.success,
            "captured_files": list(self.captured_files),
            "error": self.error,
            "debug_files": list(self.debug_files),
            "started_at": self.started_at.isoformat(),
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
        }

    def to_json(self, indent: int = 2) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False, default=str)

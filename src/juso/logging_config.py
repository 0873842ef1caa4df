"""Process-wide logging setup."""

from __future__ import annotations

import json
import logging
import os
import sys


class CloudFormatter(logging.Formatter):
    """JSON formatter emitting one ``{"severity", "message", ...}`` object per line."""

    _LEVEL_MAP = {
        "DEBUG": "DEBUG",
        "INFO": "INFO",
        "WARNING": "WARNING",
        "ERROR": "ERROR",
        "CRITICAL": "CRITICAL",
    }

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record as a JSON object with severity."""
        entry = {
            "severity": self._LEVEL_MAP.get(record.levelname, "DEFAULT"),
            "message": record.getMessage(),
            "logger": record.name,
            "time": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
        }
        if record.exc_info and record.exc_info[1]:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def configure_logging(level: str | None = None, *, json_output: bool | None = None) -> None:
    """Set up root logging for a CLI or script run.

    Outside the ``local`` environment (``JUSO_ENV``), emits JSON lines so
    log collectors can parse severity. Locally, uses a human-readable
    plain-text format.

    Args:
        level: Log level name. Defaults to ``JUSO_LOG_LEVEL`` or ``INFO``.
        json_output: Force JSON (``True``) or text (``False``) output.
    """
    log_level = (level or os.environ.get("JUSO_LOG_LEVEL", "INFO")).upper()
    if json_output is None:
        json_output = os.environ.get("JUSO_ENV", "local").strip() != "local"

    handler = logging.StreamHandler(sys.stderr)
    if json_output:
        handler.setFormatter(CloudFormatter())
    else:
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s %(levelname)-8s %(name)s - %(message)s",
                datefmt="%Y-%m-%dT%H:%M:%S",
            )
        )
    logging.root.handlers.clear()
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, log_level, logging.INFO))

    # Quieten noisy libraries
    logging.getLogger("asyncio").setLevel(logging.WARNING)

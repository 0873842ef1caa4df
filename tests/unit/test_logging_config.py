"""Unit tests for juso.logging_config."""

from __future__ import annotations

import json
import logging

import pytest

from juso.logging_config import CloudFormatter, configure_logging


@pytest.fixture()
def _restore_root_logging():
    handlers = list(logging.root.handlers)
    level = logging.root.level
    yield
    logging.root.handlers[:] = handlers
    logging.root.setLevel(level)


class TestCloudFormatter:
    def test_emits_json_with_severity(self) -> None:
        record = logging.LogRecord("juso.automator", logging.WARNING, __file__, 1, "결과 %s", ("없음",), None)

        entry = json.loads(CloudFormatter().format(record))

        assert entry["severity"] == "WARNING"
        assert entry["message"] == "결과 없음"
        assert entry["logger"] == "juso.automator"


@pytest.mark.usefixtures("_restore_root_logging")
class TestConfigureLogging:
    def test_text_output_locally(self, monkeypatch) -> None:
        monkeypatch.delenv("JUSO_ENV", raising=False)

        configure_logging("debug")

        assert logging.root.level == logging.DEBUG
        assert len(logging.root.handlers) == 1
        assert not isinstance(logging.root.handlers[0].formatter, CloudFormatter)

    def test_json_output_outside_local(self, monkeypatch) -> None:
        monkeypatch.setenv("JUSO_ENV", "ci")

        configure_logging()

        assert isinstance(logging.root.handlers[0].formatter, CloudFormatter)
        assert logging.root.level == logging.INFO

    def test_level_from_env(self, monkeypatch) -> None:
        monkeypatch.setenv("JUSO_LOG_LEVEL", "WARNING")

        configure_logging(json_output=True)

        assert logging.root.level == logging.WARNING

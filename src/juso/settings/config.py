"""Configuration loader for juso-capture using Pydantic settings.

Config precedence (highest wins):
  1. CLI flags (where applicable)
  2. Environment variables (JUSO_* with __ for nesting)
  3. settings.local.toml
  4. settings.{env}.toml
  5. settings.default.toml
"""

from __future__ import annotations

import os
import tomllib
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# ---------------------------------------------------------------------------
# Path helpers
# ---------------------------------------------------------------------------

_THIS_DIR = Path(__file__).resolve().parent
PROJECT_ROOT = Path(os.getenv("JUSO_PROJECT_ROOT", _THIS_DIR.parents[2]))
CONFIG_DIR = PROJECT_ROOT / "config"

ENV_VAR_NAME = "JUSO_ENV"
DEFAULT_ENV = "local"

JUSO_OPEN_INDEX_URL = "https://www.juso.go.kr/openIndexPage.do"

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _resolve_env() -> str:
    return (os.getenv(ENV_VAR_NAME) or DEFAULT_ENV).strip()


def _load_toml(path: Path) -> dict[str, Any]:
    if path.is_file():
        with open(path, "rb") as f:
            return tomllib.load(f)
    return {}


# ---------------------------------------------------------------------------
# Section models
# ---------------------------------------------------------------------------


class BrowserSettings(BaseSettings):
    """Playwright browser launch settings."""

    model_config = SettingsConfigDict(env_prefix="JUSO_BROWSER__")

    headless: bool = False
    slow_mo_ms: int = 50
    viewport_width: int = 1920
    viewport_height: int = 1080
    window_x: int = 1920
    window_y: int = 0
    timeout_ms: int = 30_000
    sandbox: bool = True


class SearchSettings(BaseSettings):
    """Target site and search timing."""

    model_config = SettingsConfigDict(env_prefix="JUSO_SEARCH__")

    target_url: str = JUSO_OPEN_INDEX_URL
    selector_timeout_ms: int = 1_000
    result_timeout_ms: int = 1_000
    settle_delay_ms: int = 500
    render_delay_ms: int = 3_000
    network_idle_timeout_ms: int = 30_000


class CaptureSettings(BaseSettings):
    """Screenshot output configuration."""

    model_config = SettingsConfigDict(env_prefix="JUSO_CAPTURE__")

    output_dir: str = "screenshots"
    capture_full_page: bool = True
    capture_result_only: bool = False
    debug_screenshots: bool = True


# ---------------------------------------------------------------------------
# Root settings
# ---------------------------------------------------------------------------


class Settings(BaseSettings):
    """Root juso-capture settings with nested sections."""

    model_config = SettingsConfigDict(
        env_prefix="JUSO_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    env: str = Field(default_factory=_resolve_env)
    project_root: Path = Field(default=PROJECT_ROOT)
    debug: bool = False
    log_level: str = "INFO"

    browser: BrowserSettings = Field(default_factory=BrowserSettings)
    search: SearchSettings = Field(default_factory=SearchSettings)
    capture: CaptureSettings = Field(default_factory=CaptureSettings)

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(_LOG_LEVELS)}, got {value!r}")
        return level

    @model_validator(mode="before")
    @classmethod
    def _merge_toml_files(cls, values: dict[str, Any]) -> dict[str, Any]:
        """Layer TOML config files before env var overrides."""
        defaults = _load_toml(CONFIG_DIR / "settings.default.toml")
        env_name = (values.get("env") or os.getenv(ENV_VAR_NAME) or DEFAULT_ENV).strip()
        env_overrides = _load_toml(CONFIG_DIR / f"settings.{env_name}.toml")
        local_overrides = _load_toml(CONFIG_DIR / "settings.local.toml")

        # Merge: defaults < env-specific < local < explicit values
        merged: dict[str, Any] = {}
        for layer in (defaults, env_overrides, local_overrides, values):
            for key, val in layer.items():
                if isinstance(val, dict) and isinstance(merged.get(key), dict):
                    merged[key] = {**merged[key], **val}
                else:
                    merged[key] = val
        return merged


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the singleton settings instance (cached)."""
    return Settings()

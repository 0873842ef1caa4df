"""Layered configuration (TOML files + ``JUSO_*`` environment variables)."""

from juso.settings.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]

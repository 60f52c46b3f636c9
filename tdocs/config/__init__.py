"""Configuration package: settings and logging setup."""

from .logging import setup_logging
from .settings import Settings, get_settings, log_startup

__all__ = ["Settings", "get_settings", "log_startup", "setup_logging"]

"""Configuration: settings and logging."""

from .logging import JSONExceptionFormatter, get_logger, setup_logging
from .settings import Settings, load_settings

__all__ = ["JSONExceptionFormatter", "Settings", "get_logger", "load_settings", "setup_logging"]

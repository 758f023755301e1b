"""Public API for shared configuration utilities."""

from .loader import load_settings
from .models import (
    DEFAULT_CONFIG_PATH,
    InwrapSettings,
    LoggingSettings,
    SingleFieldSettings,
)

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "InwrapSettings",
    "LoggingSettings",
    "SingleFieldSettings",
    "load_settings",
]

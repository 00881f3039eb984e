# ==============================================================================
# Session Store Utilities
# ==============================================================================
"""
Shared utilities: configuration, clock, string helpers and retry policy.
"""

from sessionstore.utils.clock import Clock, SystemClock, utc_day_bounds
from sessionstore.utils.config import (
    AuthSettings,
    OpenSearchSettings,
    Settings,
    ValkeySettings,
    get_settings,
)
from sessionstore.utils.strings import remove_duplicates

__all__ = [
    # Clock
    "Clock",
    "SystemClock",
    "utc_day_bounds",
    # Config
    "AuthSettings",
    "OpenSearchSettings",
    "Settings",
    "ValkeySettings",
    "get_settings",
    # Strings
    "remove_duplicates",
]

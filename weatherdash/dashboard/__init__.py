"""Dashboard module: weather service and user preferences."""

from weatherdash.dashboard.preferences import (
    PreferencesStore,
    add_favorite,
    record_search,
    remove_favorite,
)
from weatherdash.dashboard.service import DashboardResult, ErrorInfo, WeatherService

__all__ = [
    "WeatherService",
    "DashboardResult",
    "ErrorInfo",
    "PreferencesStore",
    "record_search",
    "add_favorite",
    "remove_favorite",
]

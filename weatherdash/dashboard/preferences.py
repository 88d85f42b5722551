"""Search history and favorites.

State transitions are plain functions returning new lists; persistence is a
best-effort JSON file. Storage problems never reach the user: a missing,
unreadable or corrupt file reads as the defaults and failed writes are
logged and dropped.
"""

import json
from pathlib import Path
from typing import Any

from weatherdash.shared.config.logging import get_logger
from weatherdash.shared.config.settings import get_settings
from weatherdash.shared.constants import DEFAULT_FAVORITES, HISTORY_LIMIT

logger = get_logger(__name__)


def record_search(history: list[str], city: str, limit: int = HISTORY_LIMIT) -> list[str]:
    """Put a searched city at the front of the history.

    An earlier entry for the same city is removed and the list is capped at
    ``limit`` entries. Blank names leave the history unchanged.

    Args:
        history: Current history, most recent first
        city: City that was searched
        limit: Maximum number of entries kept

    Returns:
        New history list
    """
    city = city.strip()
    if not city:
        return list(history)
    return [city, *(c for c in history if c != city)][:limit]


def add_favorite(favorites: list[str], city: str) -> list[str]:
    """Append a city to the favorites unless already present."""
    city = city.strip()
    if not city or city in favorites:
        return list(favorites)
    return [*favorites, city]


def remove_favorite(favorites: list[str], city: str) -> list[str]:
    """Remove a city from the favorites."""
    return [c for c in favorites if c != city.strip()]


class PreferencesStore:
    """JSON file store for search history and favorites.

    The file holds ``{"history": [...], "favorites": [...]}``. Each list
    is read and written independently of the other.
    """

    def __init__(
        self,
        path: Path | str | None = None,
        default_favorites: list[str] | None = None,
    ) -> None:
        """Initialize preferences store.

        Args:
            path: JSON file path (defaults to settings.preferences_path)
            default_favorites: Favorites used when none are stored
        """
        settings = get_settings()
        self.path = Path(path) if path is not None else Path(settings.preferences_path)
        if default_favorites is None:
            default_favorites = list(settings.default_favorites or DEFAULT_FAVORITES)
        self.default_favorites = default_favorites

    def _read(self) -> dict[str, Any]:
        """Read the whole document, or an empty one on any failure."""
        if not self.path.exists():
            return {}

        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("preferences_read_failed", path=str(self.path), error=str(e))
            return {}

        if not isinstance(data, dict):
            logger.warning("preferences_invalid_document", path=str(self.path))
            return {}
        return data

    def _read_list(self, key: str) -> list[str] | None:
        """Read one list; None when absent or not a list of strings."""
        value = self._read().get(key)
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            if value is not None:
                logger.warning("preferences_invalid_list", key=key, path=str(self.path))
            return None
        return value

    def _write_list(self, key: str, values: list[str]) -> None:
        """Replace one list, keeping the other; failures are only logged."""
        data = self._read()
        data[key] = list(values)

        # Written to a sibling temp file first; the old file survives a failed write
        tmp_path = self.path.with_name(f"{self.path.name}.tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            tmp_path.replace(self.path)
        except OSError as e:
            logger.warning("preferences_write_failed", path=str(self.path), error=str(e))
            tmp_path.unlink(missing_ok=True)
            return

        logger.debug("preferences_saved", key=key, count=len(values))

    def load_history(self) -> list[str]:
        """Load the search history (empty if nothing is stored)."""
        return self._read_list("history") or []

    def persist_history(self, history: list[str]) -> None:
        """Save the search history."""
        self._write_list("history", history)

    def load_favorites(self) -> list[str]:
        """Load the favorites (defaults if nothing is stored)."""
        favorites = self._read_list("favorites")
        if favorites is None:
            return list(self.default_favorites)
        return favorites

    def persist_favorites(self, favorites: list[str]) -> None:
        """Save the favorites."""
        self._write_list("favorites", favorites)

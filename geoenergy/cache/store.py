"""Coordinate-keyed cache of computed energy data.

Entries are matched approximately: any stored coordinate within
``COORDINATE_TOLERANCE`` degrees on both axes counts as the same location.

Stored items that fail validation are logged and skipped on lookup, but kept
in the file until an entry is saved at their coordinate.

The JSON store rewrites the whole file on every save without locking. Two
processes saving at once can lose one entry (last writer wins). This is
accepted for single-tenant deployments.
"""

import json
from pathlib import Path
from typing import Any, Protocol

from pydantic import ValidationError

from geoenergy.config.schema import CacheEntry, json_safe
from geoenergy.utils.exceptions import CacheReadError, CacheWriteError
from geoenergy.utils.logger import setup_logger

logger = setup_logger(__name__)

COORDINATE_TOLERANCE = 0.01


def is_near(
    entry: CacheEntry,
    latitude: float,
    longitude: float,
    tolerance: float = COORDINATE_TOLERANCE,
) -> bool:
    """True when the entry lies strictly within ``tolerance`` on both axes."""
    return (
        abs(entry.latitude - latitude) < tolerance
        and abs(entry.longitude - longitude) < tolerance
    )


def _raw_is_near(item: Any, entry: CacheEntry) -> bool:
    """``is_near`` for a stored item that failed validation."""
    if not isinstance(item, dict):
        return False
    lat, lon = item.get("latitude"), item.get("longitude")
    for value in (lat, lon):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return False
    return (
        abs(entry.latitude - lat) < COORDINATE_TOLERANCE
        and abs(entry.longitude - lon) < COORDINATE_TOLERANCE
    )


class CacheRepository(Protocol):
    """Storage contract used by the orchestrator."""

    def initialize(self) -> None: ...

    def find_by_coordinates(
        self,
        latitude: float,
        longitude: float,
        tolerance: float = COORDINATE_TOLERANCE,
    ) -> CacheEntry | None: ...

    def save(self, entry: CacheEntry) -> CacheEntry: ...

    def get_all(self) -> list[CacheEntry]: ...


class _EntryListStore:
    """Shared lookup and replace logic over a full list of entries."""

    def _read_entries(self) -> list[CacheEntry]:
        raise NotImplementedError

    def _write_entries(self, entries: list[CacheEntry], saved: CacheEntry) -> None:
        raise NotImplementedError

    def initialize(self) -> None:
        """Nothing to prepare by default."""

    def find_by_coordinates(
        self,
        latitude: float,
        longitude: float,
        tolerance: float = COORDINATE_TOLERANCE,
    ) -> CacheEntry | None:
        """Return the first stored entry near the coordinate.

        Args:
            latitude: Target latitude.
            longitude: Target longitude.
            tolerance: Match window in degrees on each axis.

        Returns:
            The first matching CacheEntry in stored order, or None.
        """
        for entry in self._read_entries():
            if is_near(entry, latitude, longitude, tolerance):
                logger.debug(f"Cache hit for ({latitude}, {longitude})")
                return entry

        logger.debug(f"No cache hit for ({latitude}, {longitude})")
        return None

    def save(self, entry: CacheEntry) -> CacheEntry:
        """Store ``entry``, replacing every entry near its coordinate.

        Args:
            entry: Entry to persist.

        Returns:
            The saved entry.

        Raises:
            CacheWriteError: If the store cannot be written.
        """
        entries = self._read_entries()
        kept = [
            existing
            for existing in entries
            if not is_near(existing, entry.latitude, entry.longitude)
        ]
        replaced = len(entries) - len(kept)
        kept.append(entry)

        self._write_entries(kept, saved=entry)

        if replaced:
            logger.info(
                f"Replaced {replaced} cached entr{'y' if replaced == 1 else 'ies'} "
                f"near ({entry.latitude}, {entry.longitude})"
            )
        else:
            logger.info(f"Cached energy data for ({entry.latitude}, {entry.longitude})")
        return entry

    def get_all(self) -> list[CacheEntry]:
        """Return every stored entry in stored order."""
        return self._read_entries()


class JsonFileCacheStore(_EntryListStore):
    """Cache persisted as a single JSON array on disk.

    Args:
        db_file: Path to the JSON store file.
    """

    def __init__(self, db_file: Path = Path("data/energy_database.json")) -> None:
        self.db_file = db_file

    def initialize(self) -> None:
        """Create the store directory and an empty store if absent.

        Raises:
            OSError: If the directory or file cannot be created.
        """
        self.db_file.parent.mkdir(parents=True, exist_ok=True)
        if not self.db_file.exists():
            self.db_file.write_text(json.dumps([], indent=2))
            logger.info(f"Initialized empty energy cache: {self.db_file}")

    def _load_items(self) -> list[Any]:
        # Fail open: an unreadable or corrupt store reads as empty.
        try:
            self.initialize()
            payload = json.loads(self.db_file.read_text(encoding="utf-8"))
            if not isinstance(payload, list):
                raise ValueError(f"expected a JSON array, got {type(payload).__name__}")
        except (OSError, ValueError) as e:
            error = CacheReadError(
                "Energy cache unreadable, treating as empty",
                context={"path": str(self.db_file), "error": str(e)},
            )
            logger.error(str(error))
            return []
        return payload

    def _split_items(
        self, items: list[Any]
    ) -> tuple[list[CacheEntry], list[tuple[int, Any, ValidationError]]]:
        """Validate items one by one into (entries, rejected)."""
        entries: list[CacheEntry] = []
        rejected: list[tuple[int, Any, ValidationError]] = []
        for index, item in enumerate(items):
            try:
                entries.append(CacheEntry.model_validate(item))
            except ValidationError as e:
                rejected.append((index, item, e))
        return entries, rejected

    def _read_entries(self) -> list[CacheEntry]:
        entries, rejected = self._split_items(self._load_items())
        for index, _, e in rejected:
            error = CacheReadError(
                "Skipping unreadable cache entry",
                context={
                    "path": str(self.db_file),
                    "index": index,
                    "error": str(e).splitlines()[0],
                },
            )
            logger.error(str(error))
        return entries

    def _write_entries(self, entries: list[CacheEntry], saved: CacheEntry) -> None:
        # Unreadable items stay on disk unless the saved entry replaces them.
        _, rejected = self._split_items(self._load_items())
        preserved = [
            item for _, item, _ in rejected if not _raw_is_near(item, saved)
        ]
        data = json_safe(preserved) + [entry.to_store() for entry in entries]
        try:
            self.db_file.write_text(
                json.dumps(data, indent=2, allow_nan=False), encoding="utf-8"
            )
        except (OSError, ValueError) as e:
            logger.error(f"Error writing energy cache {self.db_file}: {e}")
            raise CacheWriteError(
                "Failed to write energy cache",
                context={"path": str(self.db_file), "error": str(e)},
            ) from e


class InMemoryCacheStore(_EntryListStore):
    """Cache held in a Python list, for tests and throwaway runs."""

    def __init__(self, entries: list[CacheEntry] | None = None) -> None:
        self._entries: list[CacheEntry] = list(entries or [])

    def _read_entries(self) -> list[CacheEntry]:
        return list(self._entries)

    def _write_entries(self, entries: list[CacheEntry], saved: CacheEntry) -> None:
        self._entries = list(entries)

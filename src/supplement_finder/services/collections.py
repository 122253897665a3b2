"""Persisted ordered string collections (favorites, recent searches)."""

import json
import logging
from dataclasses import dataclass, field
from typing import Protocol

from supplement_finder.services.storage import KeyValueStorage, StorageError

FAVORITES_KEY = "supplement-favorites"
RECENT_SEARCHES_KEY = "supplement-recent-searches"
MAX_RECENT_SEARCHES = 10

_logger = logging.getLogger(__name__)


class MalformedPersistedDataError(Exception):
    """Raised when stored collection data cannot be decoded."""

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(f"Malformed data under {key!r}: {reason}")
        self.key = key
        self.reason = reason


class MergePolicy(Protocol):
    """Rules applied to the item list on each mutation."""

    def add(self, items: list[str], value: str) -> list[str]:
        """Return the list after adding a value."""

    def remove(self, items: list[str], value: str) -> list[str]:
        """Return the list after removing a value."""


class SetPolicy(MergePolicy):
    """Unique values in insertion order, no size cap."""

    def add(self, items: list[str], value: str) -> list[str]:
        if value in items:
            return items
        return [*items, value]

    def remove(self, items: list[str], value: str) -> list[str]:
        return [item for item in items if item != value]


@dataclass(frozen=True)
class MruPolicy(MergePolicy):
    """Most-recent-first list with case-insensitive dedup and a size cap."""

    limit: int = MAX_RECENT_SEARCHES

    def add(self, items: list[str], value: str) -> list[str]:
        trimmed = value.strip()
        if not trimmed:
            return items
        lowered = trimmed.lower()
        rest = [item for item in items if item.lower() != lowered]
        return [trimmed, *rest][: self.limit]

    def remove(self, items: list[str], value: str) -> list[str]:
        return [item for item in items if item != value]


@dataclass
class PersistentCollection:
    """Ordered string collection mirrored to a storage key.

    Items are read from storage on first access. Every mutation writes the
    full list back before returning.
    """

    storage: KeyValueStorage
    key: str
    policy: MergePolicy
    _items: list[str] | None = field(default=None, init=False, repr=False)

    @property
    def items(self) -> list[str]:
        return list(self._loaded())

    @property
    def count(self) -> int:
        return len(self._loaded())

    def __len__(self) -> int:
        return self.count

    def __contains__(self, value: object) -> bool:
        return value in self._loaded()

    def add(self, value: str) -> list[str]:
        """Add a value according to the merge policy."""
        return self._replace(self.policy.add(self._loaded(), value))

    def remove(self, value: str) -> list[str]:
        """Remove exact matches of a value."""
        return self._replace(self.policy.remove(self._loaded(), value))

    def toggle(self, value: str) -> list[str]:
        """Remove the value if present, otherwise add it."""
        if value in self._loaded():
            return self.remove(value)
        return self.add(value)

    def clear(self) -> list[str]:
        """Remove every value."""
        return self._replace([])

    def _loaded(self) -> list[str]:
        if self._items is None:
            self._items = self._read()
        return self._items

    def _read(self) -> list[str]:
        try:
            return _decode(self.key, self.storage.get(self.key))
        except (MalformedPersistedDataError, StorageError) as exc:
            _logger.warning("Resetting collection %s: %s", self.key, exc)
            return []

    def _replace(self, items: list[str]) -> list[str]:
        self._items = items
        try:
            self.storage.set(self.key, json.dumps(items))
        except StorageError:
            _logger.exception("Failed to persist collection %s", self.key)
        return list(items)


def _decode(key: str, raw: str | None) -> list[str]:
    if raw is None:
        return []
    try:
        value = json.loads(raw)
    except ValueError as exc:
        raise MalformedPersistedDataError(key, f"invalid JSON ({exc})") from exc
    if not isinstance(value, list):
        raise MalformedPersistedDataError(key, "not a list")
    if not all(isinstance(item, str) for item in value):
        raise MalformedPersistedDataError(key, "non-string entries")
    return value


def favorites_collection(
    storage: KeyValueStorage, key: str = FAVORITES_KEY
) -> PersistentCollection:
    """Favorites: unique supplement ids in insertion order."""
    return PersistentCollection(storage=storage, key=key, policy=SetPolicy())


def recent_searches_collection(
    storage: KeyValueStorage,
    key: str = RECENT_SEARCHES_KEY,
    limit: int = MAX_RECENT_SEARCHES,
) -> PersistentCollection:
    """Recent searches: most recent first, at most ``limit`` entries."""
    return PersistentCollection(storage=storage, key=key, policy=MruPolicy(limit))

"""Key-value storage abstractions."""

from dataclasses import dataclass, field
from typing import Protocol


class StorageError(Exception):
    """Raised when a storage backend cannot read or write a key."""


class KeyValueStorage(Protocol):
    """Durable string storage keyed by name."""

    def get(self, key: str) -> str | None:
        """Return the stored value, or None when the key is missing."""

    def set(self, key: str, value: str) -> None:
        """Replace the stored value for a key."""


@dataclass
class InMemoryStorage(KeyValueStorage):
    """In-memory storage for tests and throwaway sessions."""

    values: dict[str, str] = field(default_factory=dict)

    def get(self, key: str) -> str | None:
        """Return the stored value, if any."""
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        """Store a value."""
        self.values[key] = value

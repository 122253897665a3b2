"""Supabase-backed key-value storage."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from supplement_finder.services.storage import KeyValueStorage, StorageError


@dataclass
class SupabaseStorage(KeyValueStorage):
    """Stores values in a ``key``/``value`` table, one row per key."""

    client: Client
    table: str = "client_storage"

    def get(self, key: str) -> str | None:
        """Return the stored value for a key."""
        try:
            response = (
                self.client.table(self.table)
                .select("value")
                .eq("key", key)
                .limit(1)
                .execute()
            )
        except Exception as exc:
            raise StorageError(f"Failed to read key {key!r} from Supabase") from exc
        if not response.data:
            return None
        value = response.data[0].get("value")
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        """Insert or replace the row for a key."""
        try:
            self.client.table(self.table).upsert(
                {
                    "key": key,
                    "value": value,
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                },
                on_conflict="key",
            ).execute()
        except Exception as exc:
            raise StorageError(f"Failed to write key {key!r} to Supabase") from exc

"""Supabase-backed key-value storage."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from fittrack.services.storage import KeyValueBackend


@dataclass
class SupabaseKeyValueBackend(KeyValueBackend):
    """Supabase implementation storing one row per key."""

    client: Client
    table: str = "kv_store"

    def read(self, key: str) -> str | None:
        """Return the stored text for a key, if present."""
        response = (
            self.client.table(self.table)
            .select("key, value")
            .eq("key", key)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        value = response.data[0].get("value")
        return str(value) if value is not None else None

    def write(self, key: str, raw: str) -> None:
        """Upsert the row for a key."""
        self.client.table(self.table).upsert(
            {
                "key": key,
                "value": raw,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            }
        ).execute()

    def delete(self, key: str) -> None:
        """Delete the row for a key."""
        self.client.table(self.table).delete().eq("key", key).execute()

"""Supabase-backed key-value document store."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from fuel_hub.adapters.document_store import DocumentStore


@dataclass
class SupabaseDocumentStore(DocumentStore):
    """Stores documents as text in a ``key``/``value`` table."""

    client: Client
    table: str = "documents"

    def get(self, key: str) -> str | None:
        """Return the stored document text for a key."""
        response = (
            self.client.table(self.table)
            .select("value")
            .eq("key", key)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        value = response.data[0].get("value")
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        """Insert or overwrite the document for a key."""
        self.client.table(self.table).upsert(
            {
                "key": key,
                "value": value,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            },
            on_conflict="key",
        ).execute()

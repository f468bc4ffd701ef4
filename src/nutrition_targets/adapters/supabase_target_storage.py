"""Supabase key-value storage for target snapshots."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from nutrition_targets.services.targets import TargetStorage


@dataclass
class SupabaseTargetStorage(TargetStorage):
    """Supabase implementation storing snapshots as JSON rows."""

    client: Client
    table: str = "kv_store"

    def load(self, key: str) -> dict[str, object] | None:
        """Return the stored snapshot for a key."""
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
        return value if isinstance(value, dict) else None

    def save(self, key: str, snapshot: dict[str, object]) -> None:
        """Upsert the snapshot row for a key."""
        self.client.table(self.table).upsert(
            {
                "key": key,
                "value": snapshot,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            },
            on_conflict="key",
        ).execute()

# services/profile_store.py

import uuid
from dataclasses import dataclass
from typing import Any, Dict, Tuple

from supabase import Client


@dataclass(frozen=True)
class LogRef:
    """A freshly generated key inside a log table."""
    collection: str
    key: str

    @property
    def path(self) -> str:
        return f"{self.collection}/{self.key}"


def split_path(path: str) -> Tuple[str, str]:
    """
    "users/abc-123" → ("users", "abc-123")
    """
    table, sep, key = path.partition("/")
    if not sep or not table or not key:
        raise ValueError(f"Invalid record path: {path!r} (expected '<table>/<key>')")
    return table, key


# ============================================================
# Supabase tables — keyed records + append-only log
# ============================================================

class SupabaseProfileStore:
    """
    Keyed record storage on top of PostgREST.

    Every table used here has a text/uuid `id` primary key; the remaining
    columns mirror the record's fields (nested objects go to jsonb columns).
    Writes are plain inserts: a second write to the same key fails, which
    is what keeps profile rows and audit entries write-once.
    """

    def __init__(self, client: Client):
        self.client = client

    def write(self, path: str, record: Dict[str, Any]) -> None:
        table, key = split_path(path)
        row = {**record, "id": key}
        self.client.table(table).insert(row).execute()

    def append_log(self, collection: str) -> LogRef:
        # Key only; nothing is written until write(ref.path, entry)
        return LogRef(collection=collection, key=str(uuid.uuid4()))

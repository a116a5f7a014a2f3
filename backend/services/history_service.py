"""Server-side edit history stores.

Every store returns entries newest first. The store object is created once per
application and handed to request handlers through ``get_history_store``.
"""
import time
import uuid
from threading import Lock
from typing import List, Optional, Protocol

from supabase import Client

from config.settings import Settings, get_settings
from core.errors import ConfigError, StorageError
from models.history import HistoryEntry


def new_entry(prompt: str, image_url: str) -> HistoryEntry:
    return HistoryEntry(
        id=uuid.uuid4().hex,
        timestamp=int(time.time() * 1000),
        prompt=prompt,
        image_url=image_url,
    )


class HistoryStore(Protocol):
    def append(self, prompt: str, image_url: str) -> HistoryEntry: ...

    def list(self) -> List[HistoryEntry]: ...

    def delete(self, entry_id: str) -> bool: ...

    def clear(self) -> int: ...


class InMemoryHistoryStore:
    """Process-local store; appends are serialized by a lock."""

    def __init__(self):
        self._entries: List[HistoryEntry] = []
        self._lock = Lock()

    def append(self, prompt: str, image_url: str) -> HistoryEntry:
        entry = new_entry(prompt, image_url)
        with self._lock:
            self._entries.insert(0, entry)
        return entry

    def list(self) -> List[HistoryEntry]:
        with self._lock:
            return list(self._entries)

    def delete(self, entry_id: str) -> bool:
        with self._lock:
            before = len(self._entries)
            self._entries = [e for e in self._entries if e.id != entry_id]
            return len(self._entries) != before

    def clear(self) -> int:
        with self._lock:
            count = len(self._entries)
            self._entries = []
            return count


class SupabaseHistoryStore:
    """Persistent store backed by a Supabase table; each append is a single-row insert."""

    def __init__(self, client: Client, table: str = "edit_history"):
        self.supabase = client
        self.table = table

    def append(self, prompt: str, image_url: str) -> HistoryEntry:
        entry = new_entry(prompt, image_url)
        data = {
            "id": entry.id,
            "timestamp": entry.timestamp,
            "prompt": entry.prompt,
            "image_url": entry.image_url,
        }
        try:
            result = self.supabase.table(self.table).insert(data).execute()
        except Exception as e:
            raise StorageError(f"Failed to save edit history: {e}")
        if not result.data:
            raise StorageError("Failed to save edit history: no row returned")
        return entry

    def list(self) -> List[HistoryEntry]:
        try:
            result = self.supabase.table(self.table)\
                .select("*")\
                .order("timestamp", desc=True)\
                .execute()
        except Exception as e:
            raise StorageError(f"Failed to load edit history: {e}")
        return [HistoryEntry(**row) for row in (result.data or [])]

    def delete(self, entry_id: str) -> bool:
        try:
            result = self.supabase.table(self.table).delete().eq("id", entry_id).execute()
        except Exception as e:
            raise StorageError(f"Failed to delete history entry: {e}")
        return bool(result.data)

    def clear(self) -> int:
        try:
            result = self.supabase.table(self.table).delete().neq("id", "").execute()
        except Exception as e:
            raise StorageError(f"Failed to clear edit history: {e}")
        return len(result.data or [])


_store: Optional[HistoryStore] = None
_store_lock = Lock()


def create_history_store(settings: Optional[Settings] = None) -> HistoryStore:
    settings = settings or get_settings()
    backend = settings.HISTORY_BACKEND.lower()
    if backend == "memory":
        return InMemoryHistoryStore()
    if backend == "supabase":
        from core.supabase import get_supabase
        return SupabaseHistoryStore(get_supabase(), settings.HISTORY_TABLE)
    raise ConfigError(f"Unknown HISTORY_BACKEND: {settings.HISTORY_BACKEND}")


def get_history_store() -> HistoryStore:
    """FastAPI dependency returning the application's history store."""
    global _store
    with _store_lock:
        if _store is None:
            _store = create_history_store()
            print(f"🗂️ History store initialized: {type(_store).__name__}")
        return _store

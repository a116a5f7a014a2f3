"""Device-local edit history kept in a small JSON key-value file."""
import json
import os
import tempfile
from pathlib import Path
from threading import Lock
from typing import List, Optional, Union

from config.settings import get_settings
from core.errors import StorageError
from models.history import HistoryEntry
from services.history_service import new_entry

HISTORY_KEY = "image_edit_history"


class LocalHistoryStore:
    """Newest-first history capped at ``limit`` entries."""

    def __init__(self, path: Optional[Union[str, os.PathLike]] = None, limit: Optional[int] = None):
        settings = get_settings()
        self.path = Path(path or settings.LOCAL_HISTORY_PATH).expanduser()
        self.limit = limit if limit is not None else settings.LOCAL_HISTORY_LIMIT
        self._lock = Lock()

    def _read_storage(self) -> dict:
        if not self.path.exists():
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError("history file is not a JSON object")
        return data

    def _load(self) -> List[HistoryEntry]:
        try:
            raw = self._read_storage().get(HISTORY_KEY) or []
            if not isinstance(raw, list):
                raise ValueError(f"{HISTORY_KEY} is not a list")
        except (OSError, ValueError, TypeError) as e:
            print(f"⚠️ Could not read edit history from {self.path}: {e}")
            return []

        entries = []
        for item in raw:
            try:
                entries.append(HistoryEntry.model_validate(item))
            except ValueError as e:
                print(f"⚠️ Skipping invalid history entry in {self.path}: {e}")
        return entries

    def _save(self, entries: List[HistoryEntry]) -> None:
        try:
            try:
                storage = self._read_storage()
            except (OSError, ValueError):
                storage = {}
            storage[HISTORY_KEY] = [entry.to_wire() for entry in entries]

            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=".history-", suffix=".json")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(storage, f)
                os.replace(tmp_path, self.path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.unlink(tmp_path)
                raise
        except OSError as e:
            raise StorageError(f"Could not write edit history to {self.path}: {e}")

    def list(self) -> List[HistoryEntry]:
        with self._lock:
            return self._load()

    def append(self, prompt: str, image_url: str) -> HistoryEntry:
        entry = new_entry(prompt, image_url)
        with self._lock:
            entries = [entry] + self._load()
            self._save(entries[:self.limit])
        return entry

    def delete(self, entry_id: str) -> bool:
        with self._lock:
            entries = self._load()
            remaining = [e for e in entries if e.id != entry_id]
            if len(remaining) == len(entries):
                return False
            self._save(remaining)
            return True

    def clear(self) -> int:
        with self._lock:
            count = len(self._load())
            self._save([])
            return count

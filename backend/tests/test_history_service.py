"""
History store unit tests
"""
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import MagicMock

import pytest

from config.settings import get_settings
from core.errors import ConfigError, StorageError
from services.history_service import InMemoryHistoryStore, SupabaseHistoryStore, create_history_store


@pytest.mark.unit
class TestInMemoryHistoryStore:

    def test_append_generates_id_and_timestamp(self):
        store = InMemoryHistoryStore()

        entry = store.append("add a hat", "data:image/png;base64,AAAA")

        assert entry.id
        assert entry.timestamp > 0
        assert entry.image_url == "data:image/png;base64,AAAA"

    def test_newest_first(self):
        store = InMemoryHistoryStore()
        for i in range(3):
            store.append(f"p{i}", "u")

        assert [e.prompt for e in store.list()] == ["p2", "p1", "p0"]

    def test_concurrent_appends_are_all_kept(self):
        store = InMemoryHistoryStore()

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(lambda i: store.append(f"p{i}", "u"), range(200)))

        entries = store.list()
        assert len(entries) == 200
        assert len({e.id for e in entries}) == 200

    def test_delete_and_clear(self):
        store = InMemoryHistoryStore()
        keep = store.append("keep", "u")
        drop = store.append("drop", "u")

        assert store.delete(drop.id) is True
        assert store.delete("missing") is False
        assert [e.id for e in store.list()] == [keep.id]
        assert store.clear() == 1
        assert store.list() == []

    def test_list_returns_copy(self):
        store = InMemoryHistoryStore()
        store.append("p", "u")

        store.list().clear()

        assert len(store.list()) == 1


@pytest.mark.unit
class TestSupabaseHistoryStore:

    def test_append_inserts_one_row(self):
        client = MagicMock()
        client.table.return_value.insert.return_value.execute.return_value.data = [{"id": "x"}]
        store = SupabaseHistoryStore(client, "edit_history")

        entry = store.append("add a hat", "data:x")

        client.table.assert_called_with("edit_history")
        inserted = client.table.return_value.insert.call_args[0][0]
        assert inserted == {
            "id": entry.id,
            "timestamp": entry.timestamp,
            "prompt": "add a hat",
            "image_url": "data:x",
        }

    def test_list_orders_newest_first(self):
        client = MagicMock()
        query = client.table.return_value.select.return_value.order.return_value
        query.execute.return_value.data = [
            {"id": "b", "timestamp": 2, "prompt": "second", "image_url": "u2", "created_at": "2024-01-01"},
            {"id": "a", "timestamp": 1, "prompt": "first", "image_url": "u1"},
        ]
        store = SupabaseHistoryStore(client)

        entries = store.list()

        client.table.return_value.select.return_value.order.assert_called_with("timestamp", desc=True)
        assert [e.id for e in entries] == ["b", "a"]
        assert entries[0].image_url == "u2"

    def test_insert_failure_raises_storage_error(self):
        client = MagicMock()
        client.table.return_value.insert.return_value.execute.side_effect = RuntimeError("db down")
        store = SupabaseHistoryStore(client)

        with pytest.raises(StorageError) as exc:
            store.append("p", "u")
        assert "db down" in exc.value.message


@pytest.mark.unit
class TestCreateHistoryStore:

    def test_memory_backend(self, monkeypatch):
        monkeypatch.setenv("HISTORY_BACKEND", "memory")

        assert isinstance(create_history_store(get_settings()), InMemoryHistoryStore)

    def test_unknown_backend(self, monkeypatch):
        monkeypatch.setenv("HISTORY_BACKEND", "redis")

        with pytest.raises(ConfigError):
            create_history_store(get_settings())

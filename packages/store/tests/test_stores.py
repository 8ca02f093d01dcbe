"""Tests for prboard-store backends."""

from __future__ import annotations

import json
from unittest.mock import MagicMock, patch

from prboard_store.gist import GistStore
from prboard_store.memory import MemoryStore
from prboard_store.sqlite import SQLiteStore

# ---------------------------------------------------------------------------
# MemoryStore
# ---------------------------------------------------------------------------


class TestMemoryStore:
    def test_get_missing_returns_none(self):
        assert MemoryStore().get("pinned_prs") is None

    def test_set_and_get(self):
        store = MemoryStore()
        store.set("pinned_prs", '["1"]')
        assert store.get("pinned_prs") == '["1"]'

    def test_delete(self):
        store = MemoryStore({"pinned_prs": "[]"})
        store.delete("pinned_prs")
        assert store.get("pinned_prs") is None

    def test_delete_missing_does_not_raise(self):
        MemoryStore().delete("nope")

    def test_initial_is_copied(self):
        initial = {"k": "v"}
        store = MemoryStore(initial)
        store.set("k", "w")
        assert initial == {"k": "v"}


# ---------------------------------------------------------------------------
# SQLiteStore
# ---------------------------------------------------------------------------


class TestSQLiteStore:
    def test_set_and_get(self, tmp_path):
        store = SQLiteStore(db_path=str(tmp_path / "test.db"))
        store.set("pinned_prs", '["1", "2"]')
        assert store.get("pinned_prs") == '["1", "2"]'
        store.close()

    def test_get_missing_returns_none(self, tmp_path):
        store = SQLiteStore(db_path=str(tmp_path / "test.db"))
        assert store.get("pinned_prs") is None
        store.close()

    def test_set_overwrites(self, tmp_path):
        store = SQLiteStore(db_path=str(tmp_path / "test.db"))
        store.set("k", "one")
        store.set("k", "two")
        assert store.get("k") == "two"
        store.close()

    def test_keys_isolated(self, tmp_path):
        store = SQLiteStore(db_path=str(tmp_path / "test.db"))
        store.set("pinned_prs", "[]")
        store.set("pr_filters", "{}")
        assert store.get("pinned_prs") == "[]"
        assert store.get("pr_filters") == "{}"
        store.close()

    def test_delete(self, tmp_path):
        store = SQLiteStore(db_path=str(tmp_path / "test.db"))
        store.set("k", "v")
        store.delete("k")
        store.delete("k")
        assert store.get("k") is None
        store.close()

    def test_persists_across_connections(self, tmp_path):
        """Data written by one SQLiteStore instance must be readable by another."""
        db = str(tmp_path / "test.db")
        store1 = SQLiteStore(db_path=db)
        store1.set("pinned_prs", '["42"]')
        store1.close()

        store2 = SQLiteStore(db_path=db)
        assert store2.get("pinned_prs") == '["42"]'
        store2.close()


# ---------------------------------------------------------------------------
# GistStore
# ---------------------------------------------------------------------------


def _make_gist_store(content: str | None):
    """Return a GistStore wired to a mock Gist whose state file holds ``content``."""
    with patch("github.Github") as mock_gh_cls:
        mock_gh = MagicMock()
        mock_gh_cls.return_value = mock_gh
        store = GistStore(gist_id="abc123", token="tok")

    gist = MagicMock()
    if content is None:
        gist.files = {}
    else:
        file_obj = MagicMock()
        file_obj.content = content
        gist.files = {"prboard_state.json": file_obj}
    mock_gh.get_gist.return_value = gist
    return store, gist


class TestGistStore:
    def test_get_value(self):
        store, _ = _make_gist_store(json.dumps({"pinned_prs": '["1"]'}))
        assert store.get("pinned_prs") == '["1"]'

    def test_get_missing_file_returns_none(self):
        store, _ = _make_gist_store(None)
        assert store.get("pinned_prs") is None

    def test_get_corrupt_file_returns_none(self):
        store, _ = _make_gist_store("not json{")
        assert store.get("pinned_prs") is None

    def test_get_non_object_file_returns_none(self):
        store, _ = _make_gist_store("[1, 2]")
        assert store.get("pinned_prs") is None

    def test_get_api_failure_returns_none(self):
        store, _ = _make_gist_store("{}")
        store._gh.get_gist.side_effect = Exception("network down")
        assert store.get("pinned_prs") is None

    def test_set_preserves_other_keys(self):
        store, gist = _make_gist_store(json.dumps({"pr_filters": "{}"}))
        store.set("pinned_prs", '["7"]')

        written = json.loads(gist.edit.call_args.kwargs["files"]["prboard_state.json"]["content"])
        assert written == {"pr_filters": "{}", "pinned_prs": '["7"]'}

    def test_delete_removes_key(self):
        store, gist = _make_gist_store(json.dumps({"pinned_prs": "[]", "pr_filters": "{}"}))
        store.delete("pinned_prs")

        written = json.loads(gist.edit.call_args.kwargs["files"]["prboard_state.json"]["content"])
        assert written == {"pr_filters": "{}"}

    def test_delete_missing_key_skips_write(self):
        store, gist = _make_gist_store("{}")
        store.delete("pinned_prs")
        gist.edit.assert_not_called()

    def test_set_failure_does_not_raise(self):
        store, gist = _make_gist_store("{}")
        gist.edit.side_effect = Exception("403 Forbidden")
        store.set("pinned_prs", "[]")  # must not raise

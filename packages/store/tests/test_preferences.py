"""Tests for saved filter options."""

import json
from unittest.mock import MagicMock

from prboard_core.models import FilterOptions
from prboard_store.memory import MemoryStore
from prboard_store.preferences import FILTERS_KEY, load_filters, reset_filters, save_filters


def test_missing_record_returns_defaults():
    assert load_filters(MemoryStore()) == FilterOptions()


def test_missing_record_returns_given_default():
    default = FilterOptions(prioritize_my_reviews=False)
    assert load_filters(MemoryStore(), default=default) == default


def test_corrupt_record_returns_defaults():
    assert load_filters(MemoryStore({FILTERS_KEY: "{oops"})) == FilterOptions()


def test_backend_failure_returns_defaults():
    backend = MagicMock()
    backend.get.side_effect = RuntimeError("boom")
    assert load_filters(backend) == FilterOptions()


def test_save_then_load():
    store = MemoryStore()
    options = FilterOptions(search_query="fix", authors=frozenset({"bob"}), sort_by="oldest", hide_stale=False)
    save_filters(store, options)
    assert load_filters(store) == options


def test_saved_record_is_plain_json():
    store = MemoryStore()
    save_filters(store, FilterOptions(repositories=frozenset({"web", "api"})))
    data = json.loads(store.get(FILTERS_KEY))
    assert data["repositories"] == ["api", "web"]
    assert data["sort_by"] == "updated"


def test_partially_corrupt_record_keeps_valid_fields():
    store = MemoryStore({FILTERS_KEY: json.dumps({"search_query": "bug", "sort_by": 5})})
    options = load_filters(store)
    assert options.search_query == "bug"
    assert options.sort_by == "updated"


def test_reset():
    store = MemoryStore()
    save_filters(store, FilterOptions(search_query="fix"))
    reset_filters(store)
    assert load_filters(store) == FilterOptions()

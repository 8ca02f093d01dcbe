"""Last-used filter options, persisted as one JSON record."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from prboard_core.models import FilterOptions

if TYPE_CHECKING:
    from prboard_store.base import BaseStore

logger = logging.getLogger(__name__)

FILTERS_KEY = "pr_filters"


def load_filters(store: BaseStore, default: FilterOptions | None = None) -> FilterOptions:
    """Return the saved filter options, or ``default`` if none can be read."""
    default = default or FilterOptions()
    try:
        raw = store.get(FILTERS_KEY)
    except Exception as e:
        logger.warning("Could not read saved filters: %s", e)
        return default
    if not raw:
        return default
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, TypeError) as e:
        logger.warning("Error parsing saved filters: %s", e)
        return default
    return FilterOptions.from_dict(data)


def save_filters(store: BaseStore, options: FilterOptions) -> None:
    store.set(FILTERS_KEY, json.dumps(options.to_dict()))


def reset_filters(store: BaseStore) -> None:
    store.delete(FILTERS_KEY)

"""Pinned pull requests.

The pin set is a flat JSON list of pull-request ids stored under a single
key. It outlives any one fetch: ids of pull requests that were closed in the
meantime simply never match again.
"""

from __future__ import annotations

import json
import logging
import threading
from dataclasses import replace
from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from prboard_core.models import PullRequest
    from prboard_store.base import BaseStore

logger = logging.getLogger(__name__)

PINNED_PRS_KEY = "pinned_prs"


class PinStore:
    """Set-like view over the persisted pin list.

    Reads never raise: a missing, unreadable or malformed record is an
    empty pin set. Writes happen only when membership actually changes.
    """

    def __init__(self, store: BaseStore):
        self._store = store
        self._lock = threading.RLock()

    def _read(self) -> list[str]:
        try:
            raw = self._store.get(PINNED_PRS_KEY)
        except Exception as e:
            logger.warning("Could not read pinned pull requests: %s", e)
            return []
        if not raw:
            return []
        try:
            data = json.loads(raw)
        except (json.JSONDecodeError, TypeError) as e:
            logger.warning("Error parsing pinned pull requests: %s", e)
            return []
        if not isinstance(data, list):
            logger.warning("Ignoring pinned pull requests record of type %s.", type(data).__name__)
            return []
        return [str(item) for item in data]

    def _write(self, ids: list[str]) -> None:
        self._store.set(PINNED_PRS_KEY, json.dumps(ids))

    def list(self) -> set[str]:
        return set(self._read())

    def ordered(self) -> list[str]:
        """Pinned ids in the order they were pinned."""
        return list(dict.fromkeys(self._read()))

    def add(self, pr_id: str) -> None:
        with self._lock:
            ids = self._read()
            if pr_id not in ids:
                ids.append(pr_id)
                self._write(ids)

    def remove(self, pr_id: str) -> None:
        with self._lock:
            ids = self._read()
            if pr_id in ids:
                self._write([i for i in ids if i != pr_id])

    def toggle(self, pr_id: str) -> bool:
        """Flip the pin on ``pr_id`` and return the new state (True = pinned)."""
        with self._lock:
            if pr_id in self._read():
                self.remove(pr_id)
                return False
            self.add(pr_id)
            return True

    def clear(self) -> None:
        with self._lock:
            self._store.delete(PINNED_PRS_KEY)

    def apply_to(self, prs: Iterable[PullRequest]) -> list[PullRequest]:
        """Return copies of ``prs`` with ``is_pinned`` stamped. Does not write."""
        pinned = self.list()
        return [replace(pr, is_pinned=pr.id in pinned) for pr in prs]

"""In-process store — used by tests and by ``store: memory``.

Nothing survives the process, so pins and saved filters last only for a
single `prboard dashboard --watch` session.
"""

from __future__ import annotations

from prboard_store.base import BaseStore


class MemoryStore(BaseStore):
    """Dict-backed store; ``initial`` seeds it (handy for corrupt-record tests)."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

"""Abstract key-value store interface.

The dashboard persists two small records: the pinned pull-request ids and
the last-used filter options. Both are stored as JSON text under a fixed
key. Backends (memory, SQLite, Gist) implement this interface; the pin
store and filter preferences depend on BaseStore, never on a concrete
backend, so tests can inject a MemoryStore.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class BaseStore(ABC):
    """Pluggable string-to-string persistence.

    Values are opaque text to the store. Parsing, and recovering from text
    that does not parse, is the caller's job.
    """

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the stored text for ``key``, or None if absent."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove ``key``. Deleting a missing key is not an error."""

    def close(self) -> None:
        """Release any resources held by the store (connections, file handles).

        Default is a no-op so callers can always call close() safely.
        """

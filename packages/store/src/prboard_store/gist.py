"""GistStore — pins and filters that follow you between machines.

Why a Gist:
- Zero infra: no DB to provision; a secret Gist is enough for two records.
- Same credentials: the token that reads pull requests can write the Gist
  if it carries the `gist` scope.

Data format: a single JSON file named `prboard_state.json` inside the Gist,
holding one object that maps record keys to their stored text.
"""

from __future__ import annotations

import json
import logging

from prboard_store.base import BaseStore

logger = logging.getLogger(__name__)

_GIST_FILENAME = "prboard_state.json"


class GistStore(BaseStore):
    """Stores every record in one JSON object inside a GitHub Gist.

    Each set() or delete() rewrites the whole file. Write failures are logged
    and swallowed: losing a pin is better than aborting a dashboard refresh.
    """

    def __init__(self, gist_id: str, token: str):
        from github import Github

        self._gist_id = gist_id
        self._gh = Github(token)

    def _get_gist(self):
        return self._gh.get_gist(self._gist_id)

    def get(self, key: str) -> str | None:
        try:
            records = self._read_records(self._get_gist())
        except Exception as e:
            logger.warning("GistStore.get(%r) failed: %s", key, e)
            return None
        value = records.get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        self._update(key, value)

    def delete(self, key: str) -> None:
        self._update(key, None)

    def _update(self, key: str, value: str | None) -> None:
        try:
            gist = self._get_gist()
            records = self._read_records(gist)
            if value is None:
                if key not in records:
                    return
                records.pop(key)
            else:
                records[key] = value
            gist.edit(files={_GIST_FILENAME: {"content": json.dumps(records, indent=2)}})
        except Exception as e:
            logger.warning("GistStore update of %r failed (%s): %s", key, type(e).__name__, e)

    def _read_records(self, gist) -> dict:
        """Read the current JSON object from the Gist file, or return {}."""
        file_obj = gist.files.get(_GIST_FILENAME)
        if file_obj is None:
            return {}
        try:
            data = json.loads(file_obj.content)
        except (json.JSONDecodeError, TypeError, AttributeError):
            return {}
        return data if isinstance(data, dict) else {}

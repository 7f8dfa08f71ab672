from __future__ import annotations

import json
import logging
from typing import Any

from .store import KeyValueStore

logger = logging.getLogger(__name__)


class JsonCollection:
    """A JSON list persisted under one key.

    Unparseable or non-list values are read as an empty collection so the
    application stays usable; the next write replaces them.
    """

    def __init__(self, store: KeyValueStore, key: str):
        self._store = store
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    def load(self) -> list[dict[str, Any]]:
        raw = self._store.get(self._key)
        if raw is None or raw == "":
            return []
        try:
            data = json.loads(raw)
        except ValueError:
            logger.warning("Corrupted JSON under key %r, treating as empty", self._key)
            return []
        if not isinstance(data, list):
            logger.warning("Unexpected %s under key %r, treating as empty", type(data).__name__, self._key)
            return []
        return [item for item in data if isinstance(item, dict)]

    def save(self, items: list[dict[str, Any]]) -> None:
        self._store.set(self._key, json.dumps(items, ensure_ascii=False))

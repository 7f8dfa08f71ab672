from __future__ import annotations

from typing import Iterable, Optional, Protocol


class KeyValueStore(Protocol):
    """Generic string key-value store (the persistence collaborator).

    Values are raw JSON text; decoding happens in `JsonCollection` so that
    corrupted values can be handled in one place.
    """

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    def remove(self, key: str) -> None:
        raise NotImplementedError

    def keys(self) -> Iterable[str]:
        raise NotImplementedError


class MemoryKeyValueStore(KeyValueStore):
    """Process-local store, used by tests and the `memory` backend."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return sorted(self._data)

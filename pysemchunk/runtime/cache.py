from __future__ import annotations

from typing import Protocol


class Cache(Protocol):
    def get(self, key: str) -> int | None: ...
    def set(self, key: str, value: int) -> None: ...


def cache_for(memoize: bool) -> Cache:
    """Return a fresh token-count cache for one chunking run."""
    if not memoize:
        return NullCache()
    return MemoryCache()


class NullCache:
    def get(self, key: str) -> int | None:
        return None

    def set(self, key: str, value: int) -> None:
        return None


class MemoryCache:
    def __init__(self) -> None:
        self._counts: dict[str, int] = {}

    def __len__(self) -> int:
        return len(self._counts)

    def get(self, key: str) -> int | None:
        return self._counts.get(key)

    def set(self, key: str, value: int) -> None:
        self._counts[key] = value

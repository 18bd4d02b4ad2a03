from __future__ import annotations

from typing import Callable, Dict, Generic, Iterable, List, Optional, TypeVar

T = TypeVar("T")


def normalize_key(key: str) -> str:
    """Identifier lookups are case-insensitive."""
    return str(key).strip().casefold()


class Repository(Generic[T]):
    """In-memory system of record keyed by identifier, iterating in insertion order.

    Not thread-safe on its own; the owning service serializes access.
    """

    def __init__(self, key_of: Callable[[T], str], items: Iterable[T] = ()):
        self._key_of = key_of
        self._items: Dict[str, T] = {}
        for item in items:
            self.upsert(item)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, key: str) -> bool:
        return normalize_key(key) in self._items

    def list(self) -> List[T]:
        return list(self._items.values())

    def get(self, key: str) -> Optional[T]:
        return self._items.get(normalize_key(key))

    def upsert(self, item: T) -> None:
        """Replaces in place (keeping position) or appends."""
        self._items[normalize_key(self._key_of(item))] = item

    def remove(self, key: str) -> Optional[T]:
        return self._items.pop(normalize_key(key), None)

    def clear(self) -> None:
        self._items.clear()

"""Keyed in-memory entity store.

The storage primitive behind every in-memory repository. Each store owns
its map and one lock; nothing is shared at module level, so every test or
process constructs its own stores.
"""

import asyncio
from collections.abc import Callable, Hashable, Iterator
from typing import Generic, TypeVar

K = TypeVar("K", bound=Hashable)
T = TypeVar("T")


class EntityStore(Generic[K, T]):
    """Mapping from identifier to entity, iterated in insertion order.

    The store methods themselves are synchronous and never await. Callers
    that need a read-modify-write to be atomic hold ``lock`` around it.
    """

    def __init__(self) -> None:
        self._entities: dict[K, T] = {}
        self.lock = asyncio.Lock()

    def get(self, key: K) -> T | None:
        return self._entities.get(key)

    def put(self, key: K, entity: T) -> T:
        """Insert or replace. Replacing keeps the original insertion slot."""
        self._entities[key] = entity
        return entity

    def delete(self, key: K) -> bool:
        return self._entities.pop(key, None) is not None

    def values(self) -> list[T]:
        return list(self._entities.values())

    def find_first(self, predicate: Callable[[T], bool]) -> T | None:
        for entity in self._entities.values():
            if predicate(entity):
                return entity
        return None

    def filter(self, predicate: Callable[[T], bool]) -> list[T]:
        return [e for e in self._entities.values() if predicate(e)]

    def delete_where(self, predicate: Callable[[T], bool]) -> int:
        """Delete every entity matching the predicate and return the count."""
        doomed = [k for k, e in self._entities.items() if predicate(e)]
        for key in doomed:
            del self._entities[key]
        return len(doomed)

    def __len__(self) -> int:
        return len(self._entities)

    def __contains__(self, key: object) -> bool:
        return key in self._entities

    def __iter__(self) -> Iterator[T]:
        return iter(self.values())

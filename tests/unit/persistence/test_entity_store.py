"""Unit tests for EntityStore."""

import asyncio

import pytest

from bailago.persistence.store import EntityStore


class TestEntityStore:
    """Tests for the keyed store primitive."""

    def test_put_then_get_returns_entity(self):
        store: EntityStore[str, str] = EntityStore()

        store.put("a", "alpha")

        assert store.get("a") == "alpha"
        assert "a" in store
        assert len(store) == 1

    def test_get_missing_returns_none(self):
        store: EntityStore[str, str] = EntityStore()

        assert store.get("missing") is None

    def test_replace_keeps_insertion_order(self):
        """Replacing an entity keeps its original slot."""
        # Arrange
        store: EntityStore[str, str] = EntityStore()
        store.put("a", "alpha")
        store.put("b", "beta")

        # Act
        store.put("a", "alpha-2")

        # Assert
        assert store.values() == ["alpha-2", "beta"]

    def test_delete_reports_existence(self):
        store: EntityStore[str, str] = EntityStore()
        store.put("a", "alpha")

        assert store.delete("a") is True
        assert store.delete("a") is False
        assert len(store) == 0

    def test_find_first_and_filter(self):
        store: EntityStore[int, int] = EntityStore()
        for n in range(1, 7):
            store.put(n, n * 10)

        assert store.find_first(lambda v: v > 25) == 30
        assert store.find_first(lambda v: v > 100) is None
        assert store.filter(lambda v: v % 20 == 0) == [20, 40, 60]

    def test_delete_where_returns_count(self):
        store: EntityStore[int, int] = EntityStore()
        for n in range(5):
            store.put(n, n)

        removed = store.delete_where(lambda v: v % 2 == 0)

        assert removed == 3
        assert list(store) == [1, 3]

    def test_values_is_a_snapshot(self):
        """Mutating the store does not change a list already returned."""
        store: EntityStore[str, str] = EntityStore()
        store.put("a", "alpha")
        snapshot = store.values()

        store.put("b", "beta")

        assert snapshot == ["alpha"]

    def test_stores_do_not_share_state(self):
        first: EntityStore[str, str] = EntityStore()
        second: EntityStore[str, str] = EntityStore()

        first.put("a", "alpha")

        assert second.get("a") is None
        assert first.lock is not second.lock

    @pytest.mark.asyncio
    async def test_lock_serializes_read_modify_write(self):
        """Concurrent increments under the lock never lose an update."""
        # Arrange
        store: EntityStore[str, int] = EntityStore()
        store.put("counter", 0)

        async def increment() -> None:
            async with store.lock:
                current = store.get("counter")
                await asyncio.sleep(0)
                store.put("counter", current + 1)

        # Act
        await asyncio.gather(*(increment() for _ in range(50)))

        # Assert
        assert store.get("counter") == 50

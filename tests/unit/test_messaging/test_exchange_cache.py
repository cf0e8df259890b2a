"""Unit tests for ExchangeCache."""

from __future__ import annotations

from webhook_bridge.infra.messaging.cache import ExchangeCache


class TestExchangeCache:
    """Test suite for the per-link exchange cache."""

    def test_add_and_contains(self):
        """Test that added names are reported as confirmed."""
        cache = ExchangeCache()

        assert cache.add("orders") is True
        assert cache.contains("orders")
        assert "orders" in cache
        assert "payments" not in cache
        assert len(cache) == 1

    def test_clear_starts_new_generation(self):
        """Test that clear empties the cache and bumps the generation."""
        cache = ExchangeCache()
        cache.add("orders")
        before = cache.generation

        cache.clear()

        assert len(cache) == 0
        assert cache.generation == before + 1

    def test_add_with_stale_generation_is_dropped(self):
        """Test that a confirmation from before a clear is not recorded."""
        cache = ExchangeCache()
        generation = cache.generation
        cache.clear()

        assert cache.add("orders", generation=generation) is False
        assert "orders" not in cache

    def test_add_with_current_generation(self):
        """Test that a confirmation from the current link is recorded."""
        cache = ExchangeCache()
        cache.clear()

        assert cache.add("orders", generation=cache.generation) is True

    def test_remove_is_idempotent(self):
        """Test that removing a missing name is a no-op."""
        cache = ExchangeCache()
        cache.add("orders")

        cache.remove("orders")
        cache.remove("orders")

        assert len(cache) == 0

    def test_names_are_sorted(self):
        """Test that the snapshot is sorted and detached from the cache."""
        cache = ExchangeCache()
        for name in ("payments", "audit", "orders"):
            cache.add(name)

        names = cache.names()
        names.append("other")

        assert cache.names() == ["audit", "orders", "payments"]

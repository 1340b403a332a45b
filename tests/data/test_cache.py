"""Tests for the listing TTL cache."""

from unittest.mock import patch

from promptbank.data.cache import TTLCache


class TestTTLCache:
    def test_set_and_get(self):
        cache = TTLCache(ttl_s=60)
        cache.set("all", ("api", "auth"))
        assert cache.get("all") == ("api", "auth")
        assert len(cache) == 1

    def test_expiry(self):
        cache = TTLCache(ttl_s=10)
        with patch("promptbank.data.cache.monotonic", return_value=100.0):
            cache.set("all", ("api",))
        with patch("promptbank.data.cache.monotonic", return_value=109.0):
            assert cache.get("all") == ("api",)
        with patch("promptbank.data.cache.monotonic", return_value=110.0):
            assert cache.get("all") is None
        assert len(cache) == 0

    def test_zero_ttl_disables(self):
        cache = TTLCache(ttl_s=0)
        assert cache.enabled is False
        cache.set("all", ("api",))
        assert cache.get("all") is None

    def test_negative_ttl_treated_as_disabled(self):
        assert TTLCache(ttl_s=-5).enabled is False

    def test_invalidate_drops_only_that_key(self):
        cache = TTLCache(ttl_s=60)
        cache.set("all", ("api",))
        cache.set("bank:team", ("team/review",))

        cache.invalidate("all")
        assert cache.get("all") is None
        assert cache.get("bank:team") == ("team/review",)

        cache.invalidate("bank:missing")
        assert len(cache) == 1

import threading
import unittest

from storefront.infrastructure.cache.ttl_cache import TTLCache
from tests.fixtures import FakeClock


class TestTTLCache(unittest.TestCase):

    def setUp(self):
        self.clock = FakeClock()
        self.cache = TTLCache(ttl=300, maxsize=16, timer=self.clock)

    def test_get_returns_stored_value(self):
        self.cache.set("search_hat", ["hat"])
        self.assertEqual(self.cache.get("search_hat"), ["hat"])
        self.assertIn("search_hat", self.cache)

    def test_missing_key_is_a_miss(self):
        self.assertIsNone(self.cache.get("nope"))

    def test_entry_valid_until_ttl_elapses(self):
        self.cache.set("k", "v")
        self.clock.advance(299)
        self.assertEqual(self.cache.get("k"), "v")
        self.clock.advance(1)
        self.assertIsNone(self.cache.get("k"))

    def test_set_overwrites_and_resets_age(self):
        self.cache.set("k", "old")
        self.clock.advance(200)
        self.cache.set("k", "new")
        self.clock.advance(200)
        self.assertEqual(self.cache.get("k"), "new")

    def test_sweep_removes_only_expired_entries(self):
        self.cache.set("old", 1)
        self.clock.advance(250)
        self.cache.set("fresh", 2)
        self.clock.advance(60)

        removed = self.cache.sweep()

        self.assertEqual(removed, 1)
        self.assertEqual(len(self.cache), 1)
        self.assertEqual(self.cache.get("fresh"), 2)

    def test_lazy_expiration_without_sweep(self):
        self.cache.set("k", "v")
        self.clock.advance(301)
        self.assertNotIn("k", self.cache)
        self.assertEqual(len(self.cache), 0)

    def test_delete_and_clear(self):
        self.cache.set("a", 1)
        self.cache.set("b", 2)
        self.cache.delete("a")
        self.cache.delete("missing")
        self.assertIsNone(self.cache.get("a"))
        self.cache.clear()
        self.assertEqual(len(self.cache), 0)

    def test_maxsize_bounds_entries(self):
        cache = TTLCache(ttl=300, maxsize=2, timer=self.clock)
        cache.set("a", 1)
        cache.set("b", 2)
        cache.set("c", 3)
        self.assertEqual(len(cache), 2)
        self.assertEqual(cache.get("c"), 3)

    def test_rejects_none_value(self):
        with self.assertRaises(ValueError):
            self.cache.set("k", None)

    def test_rejects_non_positive_ttl(self):
        with self.assertRaises(ValueError):
            TTLCache(ttl=0)

    def test_concurrent_writers_do_not_corrupt_state(self):
        cache = TTLCache(ttl=300, maxsize=1000)

        def writer(offset):
            for i in range(200):
                cache.set(f"key_{offset}_{i % 20}", i)
                cache.get(f"key_{offset}_{i % 20}")

        threads = [threading.Thread(target=writer, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        self.assertEqual(len(cache), 8 * 20)


if __name__ == "__main__":
    unittest.main()

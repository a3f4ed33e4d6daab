import unittest
from unittest.mock import Mock, patch

from storefront.application.exceptions import CatalogError, LLMError
from storefront.application.models import ConversationTurn
from storefront.application.services.ai_service import SNAPSHOT_KEY, AIService
from storefront.application.services.conversation import ConversationAssembler
from storefront.application.services.product_context import ProductContextBuilder
from storefront.infrastructure.cache.ttl_cache import TTLCache
from storefront.infrastructure.llm.prompts import FALLBACK_RESPONSE, NO_PRODUCT_CONTEXT
from tests.fixtures import FakeClock, add_product, make_repository, make_shop_repository


class TestAIServiceResponses(unittest.TestCase):

    def setUp(self):
        self.repository = make_shop_repository()
        self.clock = FakeClock()
        self.cache = TTLCache(ttl=300, maxsize=1, timer=self.clock)
        self.llm = Mock()
        self.llm.generate.return_value = "The Straw Hat costs TZS 15,000."
        self.service = AIService(
            self.repository,
            self.llm,
            cache=self.cache,
            context_builder=ProductContextBuilder(store_name="Test Shop", currency="TZS"),
            assembler=ConversationAssembler(history_window=6, store_name="Test Shop"),
        )

    def _prompt(self):
        return self.llm.generate.call_args[0][0]

    def test_reply_is_completion_text(self):
        reply = self.service.generate_response("How much is the hat?")

        self.assertEqual(reply, "The Straw Hat costs TZS 15,000.")
        self.llm.generate.assert_called_once()

    def test_prompt_contains_catalog_and_message(self):
        self.service.generate_response("Do you have belts?")

        prompt = self._prompt()
        self.assertIn("ACCESSORIES:", prompt)
        self.assertIn("- Leather Belt: TZS 30,000 - Brown belt with brass buckle", prompt)
        self.assertIn("TOTAL PRODUCTS: 4", prompt)
        self.assertIn("Customer Message: Do you have belts?", prompt)

    def test_prompt_includes_recent_history(self):
        history = [
            ConversationTurn(speaker="user", text="Hi there"),
            ConversationTurn(speaker="assistant", text="Hello! How can I help?"),
        ]
        self.service.generate_response("Show me jackets", history)

        prompt = self._prompt()
        self.assertIn("Customer: Hi there", prompt)
        self.assertIn("Assistant: Hello! How can I help?", prompt)

    def test_llm_error_returns_fallback(self):
        self.llm.generate.side_effect = LLMError("quota exceeded")
        self.assertEqual(self.service.generate_response("hello"), FALLBACK_RESPONSE)

    def test_any_failure_returns_fallback(self):
        self.llm.generate.side_effect = ConnectionError("network down")
        self.assertEqual(self.service.generate_response("hello"), FALLBACK_RESPONSE)

    def test_unavailable_catalog_still_answers(self):
        service = AIService(make_repository(create_tables=False), self.llm, cache=self.cache)

        reply = service.generate_response("anything in stock?")

        self.assertEqual(reply, "The Straw Hat costs TZS 15,000.")
        self.assertIn(NO_PRODUCT_CONTEXT, self._prompt())

    def test_requires_llm_client(self):
        with self.assertRaises(ValueError):
            AIService(self.repository, None)


class TestAIServiceSnapshotCache(unittest.TestCase):

    def setUp(self):
        self.repository = make_shop_repository()
        self.clock = FakeClock()
        self.cache = TTLCache(ttl=300, maxsize=1, timer=self.clock)
        self.llm = Mock()
        self.llm.generate.return_value = "ok"
        self.service = AIService(self.repository, self.llm, cache=self.cache)

    def test_snapshot_reused_within_ttl(self):
        with patch.object(self.repository, "list_products", wraps=self.repository.list_products) as spy:
            self.service.generate_response("one")
            self.clock.advance(299)
            self.service.generate_response("two")
        self.assertEqual(spy.call_count, 1)

    def test_snapshot_refetched_after_ttl(self):
        with patch.object(self.repository, "list_products", wraps=self.repository.list_products) as spy:
            self.service.generate_response("one")
            self.clock.advance(300)
            self.service.generate_response("two")
            self.service.generate_response("three")
        self.assertEqual(spy.call_count, 2)

    def test_refresh_forces_refetch(self):
        first = self.service.update_product_cache()
        add_product(self.repository, id="scarf-1", name="Silk Scarf", category="c-acc", price=40000)

        self.assertIs(self.service.update_product_cache(), first)
        self.assertTrue(self.service.refresh_cache())

        snapshot = self.cache.get(SNAPSHOT_KEY)
        self.assertEqual(len(snapshot.products), 5)
        self.assertIsNot(snapshot, first)

    def test_failed_refresh_keeps_last_snapshot(self):
        first = self.service.update_product_cache()

        with patch.object(self.repository, "list_products", side_effect=CatalogError("down")):
            self.assertFalse(self.service.refresh_cache())
            self.assertIs(self.service.update_product_cache(), first)
            self.service.generate_response("still there?")

        self.assertIn("Red Jacket", self.llm.generate.call_args[0][0])

    def test_failed_refresh_without_prior_snapshot(self):
        service = AIService(make_repository(create_tables=False), self.llm, cache=self.cache)
        self.assertFalse(service.refresh_cache())
        self.assertIsNone(service.update_product_cache())


class TestAIServiceCatalogHelpers(unittest.TestCase):

    def setUp(self):
        self.service = AIService(make_shop_repository(), Mock(), cache=TTLCache(ttl=300, maxsize=1))

    def test_category_name(self):
        self.assertEqual(self.service.get_category_name("c-out"), "Outerwear")
        self.assertEqual(self.service.get_category_name("missing"), "Unknown Category")

    def test_search_cached_products(self):
        self.assertEqual([p.id for p in self.service.search_cached_products("BRASS")], ["belt-1"])
        self.assertEqual(
            {p.id for p in self.service.search_cached_products("accessories")}, {"hat-1", "belt-1"}
        )
        self.assertEqual(self.service.search_cached_products("  "), [])

    def test_products_by_category(self):
        self.assertEqual([p.id for p in self.service.get_products_by_category("footwear")], ["shoe-1"])
        self.assertEqual(self.service.get_products_by_category("Toys"), [])

    def test_products_by_price_range(self):
        ids = {p.id for p in self.service.get_products_by_price_range(15000, 85000)}
        self.assertEqual(ids, {"shoe-1", "hat-1", "belt-1"})

    def test_product_stats(self):
        stats = self.service.get_product_stats()
        self.assertEqual(stats["total_products"], 4)
        self.assertEqual(stats["categories"], 3)
        self.assertEqual(stats["price_range"], {"min": 15000, "max": 120000})
        self.assertEqual(stats["average_price"], 62500)

    def test_stats_for_empty_catalog(self):
        service = AIService(make_repository(), Mock(), cache=TTLCache(ttl=300, maxsize=1))
        stats = service.get_product_stats()
        self.assertEqual(stats["total_products"], 0)
        self.assertEqual(stats["price_range"], {"min": 0, "max": 0})

    def test_category_summary(self):
        self.assertEqual(
            self.service.get_category_summary(),
            {"Footwear": 1, "Outerwear": 1, "Accessories": 2},
        )


if __name__ == "__main__":
    unittest.main()

# tests/test_app.py

"""Smoke tests for the storefront TUI using Textual's Pilot."""

import asyncio
import unittest
from typing import Any
from unittest.mock import MagicMock

from textual.widgets import Button, Input, OptionList, Static

from src.config.settings import Settings
from src.models.order import OrderConfirmation
from src.models.product import Listing, ProductDetail, ProductSummary
from src.services.api_client import StorefrontAPIError, StorefrontClient
from src.services.cart import CartStore
from src.ui.app import StorefrontApp
from src.ui.screens import (
    CheckoutScreen,
    ContactScreen,
    HomeScreen,
    ProductScreen,
    ShopScreen,
)
from src.ui.widgets import ProductTable

SIZE = (140, 60)

ESP32 = ProductSummary(
    id="p1", title="ESP32 DevKit", price=9.5, rating=4.6, is_new=True
)
DETAIL = ProductDetail(
    id="p1",
    title="ESP32 DevKit",
    price=9.5,
    specs={"Flash": "4MB"},
    reviews_count=12,
    category="Microcontrollers",
)


def _mock_client() -> Any:
    """A client whose async endpoints return canned data."""
    client: Any = MagicMock(spec=StorefrontClient)
    client.fetch_suggestions.return_value = ["esp32", "esp8266"]
    client.new_arrivals.return_value = [ESP32]
    client.best_sellers.return_value = []
    client.list_products.return_value = Listing(items=(ESP32,), total=1)
    client.get_product.return_value = DETAIL
    client.related_products.return_value = []
    client.checkout.return_value = OrderConfirmation(order_id="ORD-1")
    return client


async def _settle(app: StorefrontApp, pilot: Any) -> None:
    """Let workers and queued messages finish."""
    await pilot.pause()
    await app.workers.wait_for_complete()
    await pilot.pause()


class TestStorefrontApp(unittest.IsolatedAsyncioTestCase):
    """Navigation, shop sync, product and checkout flows."""

    async def test_home_loads_rails(self) -> None:
        """The home page opens first and fills the new-arrivals rail."""
        client = _mock_client()
        app = StorefrontApp(client=client)
        async with app.run_test(size=SIZE) as pilot:
            await _settle(app, pilot)
            self.assertIsInstance(app.screen, HomeScreen)
            new_table = app.screen.query_one("#new_table", ProductTable)
            self.assertEqual(new_table.row_count, 1)
            best_table = app.screen.query_one("#best_table", ProductTable)
            self.assertEqual(best_table.row_count, 0)
            best_status = app.screen.query_one("#best_status", Static)
            self.assertFalse(best_status.has_class("error"))
            reviews = app.screen.query(".review")
            self.assertEqual(len(reviews), len(Settings.CUSTOMER_REVIEWS))

    async def test_home_rail_failure_is_visible(self) -> None:
        client = _mock_client()
        client.new_arrivals.side_effect = StorefrontAPIError("API error")
        app = StorefrontApp(client=client)
        async with app.run_test(size=SIZE) as pilot:
            await _settle(app, pilot)
            status = app.screen.query_one("#new_status", Static)
            self.assertTrue(status.has_class("error"))

    async def test_shop_location_seeds_filters_and_fetches_once(self) -> None:
        """/shop?q=esp32 → query input seeded, one initial fetch."""
        client = _mock_client()
        app = StorefrontApp(client=client, start_location="/shop?q=esp32")
        async with app.run_test(size=SIZE) as pilot:
            await _settle(app, pilot)
            await asyncio.sleep(0.05)
            await pilot.pause()

            self.assertIsInstance(app.screen, ShopScreen)
            self.assertEqual(
                app.screen.query_one("#filter_query", Input).value, "esp32"
            )
            client.list_products.assert_awaited_once_with(
                {"q": "esp32", "sort": "newest"}
            )
            table = app.screen.query_one("#listing_table", ProductTable)
            self.assertEqual(table.row_count, 1)

    async def test_filter_change_refetches_and_updates_location(self) -> None:
        client = _mock_client()
        app = StorefrontApp(client=client, start_location="/shop")
        async with app.run_test(size=SIZE) as pilot:
            await _settle(app, pilot)
            screen = app.screen
            assert isinstance(screen, ShopScreen)

            screen.query_one("#filter_min_price", Input).value = "10"
            await pilot.pause()
            await screen.sync.fetcher.wait()
            await pilot.pause()

            client.list_products.assert_awaited_with(
                {"minPrice": "10", "sort": "newest"}
            )
            self.assertEqual(app.location, "/shop?minPrice=10&sort=newest")
            self.assertEqual(screen.location, app.location)

    async def test_listing_failure_shows_error(self) -> None:
        client = _mock_client()
        client.list_products.side_effect = StorefrontAPIError(
            "API error (HTTP 500)", 500
        )
        app = StorefrontApp(client=client, start_location="/shop")
        async with app.run_test(size=SIZE) as pilot:
            await _settle(app, pilot)
            screen = app.screen
            assert isinstance(screen, ShopScreen)
            await screen.sync.fetcher.wait()
            await pilot.pause()

            status = screen.query_one("#shop_status", Static)
            self.assertTrue(status.has_class("error"))
            self.assertEqual(
                screen.query_one("#listing_table", ProductTable).row_count, 0
            )

    async def test_navbar_suggestions_debounced(self) -> None:
        """Typing quickly issues one lookup for the final text."""
        client = _mock_client()
        app = StorefrontApp(client=client)
        async with app.run_test(size=SIZE) as pilot:
            await _settle(app, pilot)
            app.screen.query_one("#nav_search", Input).focus()
            await pilot.press("e", "s", "p")
            await asyncio.sleep(Settings.SUGGESTION_DEBOUNCE + 0.2)
            await pilot.pause()

            client.fetch_suggestions.assert_awaited_once_with("esp")
            options = app.screen.query_one("#nav_suggestions", OptionList)
            self.assertEqual(options.option_count, 2)
            self.assertTrue(options.display)

    async def test_navbar_submit_opens_shop(self) -> None:
        client = _mock_client()
        app = StorefrontApp(client=client)
        async with app.run_test(size=SIZE) as pilot:
            await _settle(app, pilot)
            search = app.screen.query_one("#nav_search", Input)
            search.value = "arduino"
            search.focus()
            await pilot.press("enter")
            await _settle(app, pilot)

            self.assertIsInstance(app.screen, ShopScreen)
            self.assertEqual(app.location, "/shop?q=arduino")

    async def test_product_add_to_cart_updates_badge(self) -> None:
        client = _mock_client()
        cart = CartStore()
        app = StorefrontApp(client=client, cart=cart, start_location="/product/p1")
        async with app.run_test(size=SIZE) as pilot:
            await _settle(app, pilot)
            screen = app.screen
            assert isinstance(screen, ProductScreen)
            client.get_product.assert_awaited_once_with("p1")
            client.related_products.assert_awaited_once_with(
                "Microcontrollers", "p1"
            )

            screen.query_one("#qty_plus", Button).press()
            await pilot.pause()
            screen.query_one("#add_to_cart", Button).press()
            await pilot.pause()

            self.assertEqual(cart.count, 2)
            badge = screen.query_one("#nav_cart", Button)
            self.assertEqual(str(badge.label), "🛒 2")

    async def test_product_load_failure_disables_actions(self) -> None:
        client = _mock_client()
        client.get_product.side_effect = StorefrontAPIError("API error (HTTP 404)", 404)
        app = StorefrontApp(client=client, start_location="/product/missing")
        async with app.run_test(size=SIZE) as pilot:
            await _settle(app, pilot)
            screen = app.screen
            self.assertTrue(screen.query_one("#add_to_cart", Button).disabled)
            self.assertTrue(
                screen.query_one("#product_title", Static).has_class("error")
            )

    async def test_checkout_success_clears_cart(self) -> None:
        client = _mock_client()
        cart = CartStore()
        cart.add(ESP32, 2)
        app = StorefrontApp(client=client, cart=cart, start_location="/checkout")
        async with app.run_test(size=SIZE) as pilot:
            await _settle(app, pilot)
            screen = app.screen
            assert isinstance(screen, CheckoutScreen)
            screen.query_one("#checkout_name", Input).value = "Ada"
            screen.query_one("#checkout_email", Input).value = "ada@example.com"
            await screen.place_order()
            await pilot.pause()

            request = client.checkout.call_args.args[0]
            self.assertEqual(request.customer_name, "Ada")
            self.assertEqual(request.items[0]["quantity"], 2)
            self.assertEqual(screen.confirmation, OrderConfirmation("ORD-1"))
            self.assertEqual(cart.count, 0)

    async def test_checkout_failure_is_reported(self) -> None:
        client = _mock_client()
        client.checkout.side_effect = StorefrontAPIError("API error (HTTP 422)", 422)
        cart = CartStore()
        cart.add(ESP32)
        app = StorefrontApp(client=client, cart=cart, start_location="/checkout")
        async with app.run_test(size=SIZE, notifications=True) as pilot:
            await _settle(app, pilot)
            screen = app.screen
            assert isinstance(screen, CheckoutScreen)
            with self.assertLogs("storefront.ui", level="WARNING") as logs:
                await screen.place_order()
            await pilot.pause()

            self.assertIn("Checkout failed", logs.output[0])
            status = screen.query_one("#checkout_status", Static)
            self.assertTrue(status.has_class("error"))
            self.assertIsNone(screen.confirmation)
            self.assertEqual(cart.count, 1)

    async def test_escape_goes_back(self) -> None:
        client = _mock_client()
        app = StorefrontApp(client=client)
        async with app.run_test(size=SIZE) as pilot:
            await _settle(app, pilot)
            app.navigate("/about")
            await pilot.pause()
            self.assertEqual(app.location, "/about")

            app.action_back()
            await pilot.pause()
            self.assertIsInstance(app.screen, HomeScreen)
            self.assertEqual(app.location, "/")

    async def test_same_page_kind_replaces_current(self) -> None:
        """Browsing category after category does not grow the history."""
        client = _mock_client()
        app = StorefrontApp(client=client)
        async with app.run_test(size=SIZE) as pilot:
            await _settle(app, pilot)
            app.navigate("/shop?category=Sensors")
            await _settle(app, pilot)
            depth = len(app.screen_stack)

            for category in ("Tools", "Robotics", "Components"):
                app.navigate(f"/shop?category={category}")
                await _settle(app, pilot)

            self.assertEqual(len(app.screen_stack), depth)
            self.assertIsInstance(app.screen, ShopScreen)
            self.assertEqual(app.location, "/shop?category=Components")

            app.action_back()
            await pilot.pause()
            self.assertIsInstance(app.screen, HomeScreen)

    async def test_history_depth_is_capped(self) -> None:
        client = _mock_client()
        app = StorefrontApp(client=client)
        app.settings.MAX_HISTORY = 3
        async with app.run_test(size=SIZE) as pilot:
            await _settle(app, pilot)
            for location in ("/about", "/cart", "/contact", "/about", "/cart"):
                app.navigate(location)
                await _settle(app, pilot)

            # Default screen plus at most three pages
            self.assertEqual(len(app.screen_stack), 4)
            self.assertEqual(app.location, "/cart")

    async def test_contact_page_lists_support_hours(self) -> None:
        client = _mock_client()
        app = StorefrontApp(client=client, start_location="/contact")
        async with app.run_test(size=SIZE) as pilot:
            await _settle(app, pilot)
            self.assertIsInstance(app.screen, ContactScreen)
            self.assertEqual(app.location, "/contact")
            app.screen.query_one("#contact_hours", Static)

    async def test_unknown_location_rejected(self) -> None:
        client = _mock_client()
        app = StorefrontApp(client=client)
        async with app.run_test(size=SIZE, notifications=True) as pilot:
            await _settle(app, pilot)
            self.assertFalse(app.navigate("/wishlist"))
            await pilot.pause()
            self.assertIsInstance(app.screen, HomeScreen)


if __name__ == "__main__":
    unittest.main()

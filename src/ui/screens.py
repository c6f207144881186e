# src/ui/screens.py

"""Pages of the storefront TUI, one screen per route."""

import asyncio
import logging
from collections.abc import Callable
from typing import Any

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.screen import Screen
from textual.widgets import (
    Button,
    DataTable,
    Footer,
    Header,
    Input,
    Label,
    Select,
    Static,
    TextArea,
)

from src.config.settings import Settings
from src.models.order import CheckoutRequest, OrderConfirmation
from src.models.product import Listing, ProductDetail
from src.models.result import FetchResult
from src.services.api_client import StorefrontClient, attempt
from src.services.query_sync import QuerySynchronizer
from src.ui.routes import category_location, product_location
from src.ui.widgets import NavBar, ProductTable, storefront

logger = logging.getLogger("storefront.ui")

# Shop input id -> FilterState field
FILTER_INPUTS: dict[str, str] = {
    "filter_query": "query",
    "filter_brand": "brand",
    "filter_min_price": "min_price",
    "filter_max_price": "max_price",
    "filter_min_rating": "min_rating",
}


class PageScreen(Screen[None]):
    """Base page: remembers its location and opens selected products."""

    def __init__(self, location: str, client: StorefrontClient) -> None:
        super().__init__()
        self.location = location
        self.client = client

    def on_screen_resume(self) -> None:
        storefront(self).set_location(self.location)

    def on_data_table_row_selected(
        self, event: DataTable.RowSelected
    ) -> None:
        table = event.data_table
        if isinstance(table, ProductTable):
            product = table.product_at(event.cursor_row)
            if product is not None:
                storefront(self).navigate(product_location(product.id))


def _status(widget: Static, message: str, error: bool = False) -> None:
    widget.update(message)
    widget.set_class(error, "error")


class HomeScreen(PageScreen):
    """Landing page with featured categories and product rails."""

    def compose(self) -> ComposeResult:
        yield Header()
        yield NavBar()
        yield VerticalScroll(
            Static(
                "Power your projects with premium hardware",
                id="hero_title",
            ),
            Static(
                "From microcontrollers to robotics kits, find everything "
                "you need to build, prototype, and ship faster.",
                id="hero_tagline",
            ),
            Horizontal(
                Button("Shop now", id="home_shop", variant="primary"),
                *[
                    Button(c, name=c, classes="home_category")
                    for c in Settings.FEATURED_CATEGORIES
                ],
                id="home_actions",
            ),
            Label("New arrivals", classes="section_title"),
            Static("Loading...", id="new_status", classes="status"),
            ProductTable(id="new_table"),
            Label("Best sellers", classes="section_title"),
            Static("Loading...", id="best_status", classes="status"),
            ProductTable(id="best_table"),
            Label("What customers say", classes="section_title"),
            Vertical(
                *[
                    Static(f"[b]{name}[/b]  {text}", classes="review")
                    for name, text in Settings.CUSTOMER_REVIEWS
                ],
                id="home_reviews",
            ),
            id="home_body",
        )
        yield Footer()

    def on_mount(self) -> None:
        self.run_worker(self.load_rails(), exclusive=True)

    async def load_rails(self) -> None:
        """Fetch new arrivals and best sellers side by side."""
        new, best = await asyncio.gather(
            attempt(self.client.new_arrivals(), []),
            attempt(self.client.best_sellers(), []),
        )
        self._show_rail(new, "#new_table", "#new_status")
        self._show_rail(best, "#best_table", "#best_status")

    def _show_rail(
        self, result: FetchResult[Any], table_id: str, status_id: str
    ) -> None:
        self.query_one(table_id, ProductTable).show(result.value)
        status = self.query_one(status_id, Static)
        if not result.ok:
            _status(status, f"⚠ {result.error}", error=True)
        elif not result.value:
            _status(status, "No products yet.")
        else:
            _status(status, "")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "home_shop":
            storefront(self).navigate("/shop")
        elif event.button.name:
            storefront(self).navigate(category_location(event.button.name))


class ShopScreen(PageScreen):
    """Filter sidebar plus the matching product listing."""

    BINDINGS = [Binding("ctrl+r", "retry", "Retry")]

    def __init__(self, location: str, client: StorefrontClient) -> None:
        super().__init__(location, client)
        self.sync = QuerySynchronizer(
            client.list_products,
            location=location,
            on_listing=self._show_listing,
            on_location=self._location_changed,
        )

    def compose(self) -> ComposeResult:
        state = self.sync.state
        categories = list(Settings.CATEGORIES)
        if state.category and state.category not in categories:
            categories.append(state.category)
        category_kwargs: dict[str, Any] = (
            {"value": state.category} if state.category else {}
        )

        yield Header()
        yield NavBar()
        yield Horizontal(
            VerticalScroll(
                Label("Search"),
                Input(
                    value=state.query, placeholder="Search...", id="filter_query"
                ),
                Label("Category"),
                Select(
                    [(c, c) for c in categories],
                    prompt="All",
                    allow_blank=True,
                    id="filter_category",
                    **category_kwargs,
                ),
                Label("Brand"),
                Input(value=state.brand, id="filter_brand"),
                Label("Min Price"),
                Input(value=state.min_price, id="filter_min_price"),
                Label("Max Price"),
                Input(value=state.max_price, id="filter_max_price"),
                Label("Min Rating"),
                Input(
                    value=state.min_rating,
                    placeholder="0-5",
                    id="filter_min_rating",
                ),
                Label("Sort"),
                Select(
                    [(o["label"], o["id"]) for o in Settings.SORT_OPTIONS],
                    allow_blank=False,
                    value=state.sort.value,
                    id="filter_sort",
                ),
                id="filters",
            ),
            Vertical(
                Static("Loading...", id="shop_status", classes="status"),
                ProductTable(id="listing_table"),
                id="listing",
            ),
            id="shop_body",
        )
        yield Footer()

    def on_mount(self) -> None:
        self.sync.start()

    def on_unmount(self) -> None:
        self.sync.close()

    def on_input_changed(self, event: Input.Changed) -> None:
        field_name = FILTER_INPUTS.get(event.input.id or "")
        if field_name is not None:
            self.sync.set_field(field_name, event.value)

    def on_select_changed(self, event: Select.Changed) -> None:
        # A cleared Select reports a sentinel rather than a string
        value = event.value if isinstance(event.value, str) else ""
        if event.select.id == "filter_category":
            self.sync.set_field("category", value)
        elif event.select.id == "filter_sort" and value:
            self.sync.set_field("sort", value)

    def action_retry(self) -> None:
        _status(self.query_one("#shop_status", Static), "Loading...")
        self.sync.refresh()

    def _location_changed(self, location: str) -> None:
        self.location = location
        storefront(self).set_location(location)
        _status(self.query_one("#shop_status", Static), "Loading...")

    def _show_listing(self, result: FetchResult[Listing]) -> None:
        listing = result.value
        self.query_one("#listing_table", ProductTable).show(listing.items)
        status = self.query_one("#shop_status", Static)
        if not result.ok:
            _status(
                status,
                f"⚠ Could not load products: {result.error}. "
                "Press Ctrl+R to retry.",
                error=True,
            )
        elif not listing.items:
            _status(status, "No products match these filters.")
        else:
            _status(
                status, f"Showing {len(listing.items)} of {listing.total} products"
            )


class ProductScreen(PageScreen):
    """Product detail with quantity picker, specs and related items."""

    def __init__(
        self, location: str, client: StorefrontClient, product_id: str
    ) -> None:
        super().__init__(location, client)
        self.product_id = product_id
        self.product: ProductDetail | None = None
        self.quantity = 1

    def compose(self) -> ComposeResult:
        yield Header()
        yield NavBar()
        yield VerticalScroll(
            Static("Loading...", id="product_title"),
            Static("", id="product_meta", classes="status"),
            Static("", id="product_description"),
            Static("", id="product_image", classes="status"),
            Horizontal(
                Static("", id="product_price"),
                Button("-", id="qty_minus"),
                Static("1", id="qty_value"),
                Button("+", id="qty_plus"),
                id="qty_row",
            ),
            Horizontal(
                Button("Add to cart", id="add_to_cart", variant="primary"),
                Button("Buy now", id="buy_now", variant="warning"),
                id="product_actions",
            ),
            Label("Specifications", classes="section_title"),
            DataTable(id="specs_table", show_cursor=False),
            Label("You may also like", classes="section_title"),
            ProductTable(id="related_table"),
            id="product_body",
        )
        yield Footer()

    def on_mount(self) -> None:
        self.query_one("#specs_table", DataTable).add_columns("Spec", "Value")
        self._set_actions_enabled(False)
        self.run_worker(self.load_product(), exclusive=True)

    async def load_product(self) -> None:
        result: FetchResult[ProductDetail | None] = await attempt(
            self.client.get_product(self.product_id), None
        )
        if not result.ok or result.value is None:
            logger.info(
                "Product %s unavailable: %s", self.product_id, result.error
            )
            _status(
                self.query_one("#product_title", Static),
                f"⚠ Could not load product {self.product_id}: {result.error}",
                error=True,
            )
            return

        self.product = result.value
        self._render_product(result.value)
        self._set_actions_enabled(True)

        if result.value.category:
            related = await attempt(
                self.client.related_products(
                    result.value.category, result.value.id
                ),
                [],
            )
            self.query_one("#related_table", ProductTable).show(related.value)

    def _render_product(self, product: ProductDetail) -> None:
        self.query_one("#product_title", Static).update(product.title)
        tags = " ".join(product.badges)
        self.query_one("#product_meta", Static).update(
            f"★ {product.format_rating()} · {product.reviews_count} reviews"
            + (f"  {tags}" if tags else "")
        )
        self.query_one("#product_description", Static).update(
            product.description
        )
        self.query_one("#product_image", Static).update(
            f"Image: {product.primary_image}"
        )
        self.query_one("#product_price", Static).update(product.format_price())
        specs = self.query_one("#specs_table", DataTable)
        specs.clear()
        for key, value in product.specs.items():
            specs.add_row(key, value)

    def _set_actions_enabled(self, enabled: bool) -> None:
        for button_id in ("#add_to_cart", "#buy_now"):
            self.query_one(button_id, Button).disabled = not enabled

    def _set_quantity(self, quantity: int) -> None:
        self.quantity = max(1, quantity)
        self.query_one("#qty_value", Static).update(str(self.quantity))

    def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id
        if button_id == "qty_minus":
            self._set_quantity(self.quantity - 1)
        elif button_id == "qty_plus":
            self._set_quantity(self.quantity + 1)
        elif button_id in ("add_to_cart", "buy_now") and self.product:
            storefront(self).cart.add(self.product, self.quantity)
            if button_id == "buy_now":
                storefront(self).navigate("/checkout")
            else:
                self.notify(f"Added {self.quantity} x {self.product.title}")


class CartScreen(PageScreen):
    """Cart contents with remove, clear and checkout actions."""

    def __init__(self, location: str, client: StorefrontClient) -> None:
        super().__init__(location, client)
        self._unsubscribe: Callable[[], None] | None = None

    def compose(self) -> ComposeResult:
        yield Header()
        yield NavBar()
        yield Vertical(
            Label("Cart", classes="section_title"),
            DataTable(id="cart_table", cursor_type="row"),
            Static("", id="cart_subtotal"),
            Horizontal(
                Button("Checkout", id="cart_checkout", variant="warning"),
                Button("Remove selected", id="cart_remove"),
                Button("Clear cart", id="cart_clear", variant="error"),
                id="cart_actions",
            ),
            id="cart_body",
        )
        yield Footer()

    def on_mount(self) -> None:
        self.query_one("#cart_table", DataTable).add_columns(
            "Product", "Qty", "Price", "Total"
        )
        self._unsubscribe = storefront(self).cart.subscribe(self._refresh)
        self._refresh()

    def on_unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()

    def _refresh(self, _count: int | None = None) -> None:
        cart = storefront(self).cart
        table = self.query_one("#cart_table", DataTable)
        table.clear()
        for line in cart.lines:
            table.add_row(
                line.product.title[:50],
                str(line.quantity),
                line.product.format_price(),
                f"{Settings.CURRENCY_SYMBOL}{line.line_total:,.2f}",
            )
        summary = (
            f"{cart.count} items · subtotal "
            f"{Settings.CURRENCY_SYMBOL}{cart.subtotal:,.2f}"
            if cart.count
            else "Your cart is empty."
        )
        self.query_one("#cart_subtotal", Static).update(summary)
        self.query_one("#cart_checkout", Button).disabled = not cart.count

    def on_button_pressed(self, event: Button.Pressed) -> None:
        cart = storefront(self).cart
        if event.button.id == "cart_checkout":
            storefront(self).navigate("/checkout")
        elif event.button.id == "cart_clear":
            cart.clear()
        elif event.button.id == "cart_remove":
            row = self.query_one("#cart_table", DataTable).cursor_row
            lines = cart.lines
            if 0 <= row < len(lines):
                cart.remove(lines[row].product.id)


class CheckoutScreen(PageScreen):
    """Demo checkout form; the outcome is always shown to the user."""

    def __init__(self, location: str, client: StorefrontClient) -> None:
        super().__init__(location, client)
        self.confirmation: OrderConfirmation | None = None

    def compose(self) -> ComposeResult:
        cart = storefront(self).cart
        yield Header()
        yield NavBar()
        yield Horizontal(
            VerticalScroll(
                Label("Checkout", classes="section_title"),
                Input(placeholder="Full name", id="checkout_name"),
                Input(placeholder="Email", id="checkout_email"),
                Label("Shipping address"),
                TextArea(id="checkout_address"),
                Input(placeholder="Order notes (optional)", id="checkout_notes"),
                id="checkout_form",
            ),
            Vertical(
                Label("Order summary", classes="section_title"),
                Static(
                    f"{cart.count} items · "
                    f"{Settings.CURRENCY_SYMBOL}{cart.subtotal:,.2f}",
                    id="checkout_summary",
                ),
                Static(
                    "This demo confirms orders without real payment.",
                    classes="status",
                ),
                Button("Place order", id="place_order", variant="warning"),
                Static("", id="checkout_status"),
                id="checkout_side",
            ),
            id="checkout_body",
        )
        yield Footer()

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "place_order":
            await self.place_order()

    async def place_order(self) -> None:
        """Submit the form and report the confirmation or the failure."""
        app = storefront(self)
        button = self.query_one("#place_order", Button)
        status = self.query_one("#checkout_status", Static)
        request = CheckoutRequest(
            customer_name=self.query_one("#checkout_name", Input).value.strip(),
            email=self.query_one("#checkout_email", Input).value.strip(),
            shipping_address=self.query_one("#checkout_address", TextArea).text,
            items=app.cart.to_checkout_items(),
            notes=self.query_one("#checkout_notes", Input).value.strip(),
        )

        button.disabled = True
        button.label = "Placing..."
        result: FetchResult[OrderConfirmation | None] = await attempt(
            self.client.checkout(request), None
        )
        button.disabled = False
        button.label = "Place order"

        if result.ok and result.value is not None:
            self.confirmation = result.value
            logger.info("Checkout confirmed as %s", result.value.order_id)
            _status(status, f"Order confirmed: {result.value.order_id}")
            app.cart.clear()
            self.query_one("#checkout_summary", Static).update("0 items")
        else:
            logger.warning("Checkout failed: %s", result.error)
            _status(
                status,
                f"⚠ Order failed: {result.error}. Please try again.",
                error=True,
            )
            self.notify("Order could not be placed", severity="error")


class AboutScreen(PageScreen):
    """Static brand page."""

    VALUES = {
        "Quality": "We source from trusted brands and test parts.",
        "Reliability": "Stock visibility and accurate specs you can trust.",
        "Fast Delivery": "Same-day dispatch on most orders.",
    }

    def compose(self) -> ComposeResult:
        yield Header()
        yield NavBar()
        yield VerticalScroll(
            Label(f"About {Settings.BRAND_NAME}", classes="section_title"),
            Static(
                "We are a team of engineers and makers delivering quality "
                "parts and fast shipping to builders worldwide."
            ),
            *[
                Static(f"[b]{name}[/b]  {text}")
                for name, text in self.VALUES.items()
            ],
            Static(
                f"{Settings.SUPPORT_EMAIL} · {Settings.SUPPORT_HOURS}",
                classes="status",
            ),
            Button("Contact us", id="about_contact"),
            id="about_body",
        )
        yield Footer()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "about_contact":
            storefront(self).navigate("/contact")


class ContactScreen(PageScreen):
    """Support hours and how to reach the team."""

    def compose(self) -> ComposeResult:
        yield Header()
        yield NavBar()
        yield VerticalScroll(
            Label("Contact", classes="section_title"),
            Static(f"Email: {Settings.SUPPORT_EMAIL}", id="contact_email"),
            Label("Support hours", classes="section_title"),
            Static(Settings.SUPPORT_HOURS, id="contact_hours"),
            id="contact_body",
        )
        yield Footer()

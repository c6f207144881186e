# src/ui/widgets.py

"""Reusable widgets shared by the storefront screens."""

import logging
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, cast

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.dom import DOMNode
from textual.widget import Widget
from textual.widgets import Button, DataTable, Input, OptionList

from src.config.settings import Settings
from src.models.product import ProductSummary
from src.services.suggestion_fetcher import SuggestionFetcher
from src.ui.routes import category_location, search_location

if TYPE_CHECKING:
    from src.ui.app import StorefrontApp

logger = logging.getLogger("storefront.ui")


def storefront(node: DOMNode) -> "StorefrontApp":
    """The running :class:`StorefrontApp` for ``node``."""
    return cast("StorefrontApp", node.app)


class ProductTable(DataTable[str | Text]):
    """Row-per-product table; the selected row maps back to a product."""

    COLUMNS = ("Title", "Price", "Rating", "Tags")

    def __init__(self, *, id: str | None = None) -> None:
        super().__init__(id=id, zebra_stripes=True, cursor_type="row")
        self.products: list[ProductSummary] = []

    def _ensure_columns(self) -> None:
        if not self.columns:
            self.add_columns(*self.COLUMNS)

    def on_mount(self) -> None:
        self._ensure_columns()

    def show(self, products: Iterable[ProductSummary]) -> None:
        """Replace the table contents with ``products``."""
        self._ensure_columns()
        self.clear()
        self.products = list(products)
        for p in self.products:
            self.add_row(
                p.title[:60],
                Text(p.format_price(), style="bold cyan"),
                f"★ {p.format_rating()}",
                Text(" ".join(p.badges), style="bold yellow"),
            )

    def product_at(self, row: int) -> ProductSummary | None:
        if 0 <= row < len(self.products):
            return self.products[row]
        return None


class NavBar(Widget):
    """Brand, search-as-you-type box, category links and cart badge."""

    def __init__(self) -> None:
        super().__init__(id="navbar")
        self._fetcher: SuggestionFetcher | None = None
        self._unsubscribe_cart: Callable[[], None] | None = None

    def compose(self) -> ComposeResult:
        yield Horizontal(
            Button(Settings.BRAND_NAME, id="nav_home", variant="primary"),
            Input(
                placeholder="Search microcontrollers, sensors, tools...",
                id="nav_search",
            ),
            Button("🛒 0", id="nav_cart"),
            id="nav_row",
        )
        yield OptionList(id="nav_suggestions")
        yield Horizontal(
            *[
                Button(c, name=c, classes="nav_category")
                for c in Settings.CATEGORIES
            ],
            id="nav_categories",
        )

    def on_mount(self) -> None:
        app = storefront(self)
        self._fetcher = SuggestionFetcher(
            app.client.fetch_suggestions,
            on_change=self._show_suggestions,
        )
        self._unsubscribe_cart = app.cart.subscribe(self._update_badge)
        self._update_badge(app.cart.count)

    def on_unmount(self) -> None:
        if self._fetcher is not None:
            self._fetcher.cancel()
        if self._unsubscribe_cart is not None:
            self._unsubscribe_cart()
            self._unsubscribe_cart = None

    @property
    def suggestions(self) -> list[str]:
        return self._fetcher.suggestions if self._fetcher else []

    def _update_badge(self, count: int) -> None:
        self.query_one("#nav_cart", Button).label = f"🛒 {count}"

    def _show_suggestions(self, suggestions: list[str]) -> None:
        option_list = self.query_one("#nav_suggestions", OptionList)
        option_list.clear_options()
        option_list.add_options(suggestions)
        option_list.display = bool(suggestions)

    def go_search(self, term: str) -> None:
        """Open the shop for ``term`` and dismiss the suggestions."""
        if not term:
            return
        logger.debug("Search submitted: %s", term)
        if self._fetcher is not None:
            self._fetcher.cancel()
        self._show_suggestions([])
        storefront(self).navigate(search_location(term))

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id != "nav_search":
            return
        event.stop()
        if self._fetcher is not None:
            self._fetcher.update(event.value)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id != "nav_search":
            return
        event.stop()
        self.go_search(event.value)

    def on_option_list_option_selected(
        self, event: OptionList.OptionSelected
    ) -> None:
        event.stop()
        suggestions = self.suggestions
        if 0 <= event.option_index < len(suggestions):
            self.go_search(suggestions[event.option_index])

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        app = storefront(self)
        if event.button.id == "nav_home":
            app.navigate("/")
        elif event.button.id == "nav_cart":
            app.navigate("/cart")
        elif event.button.name:
            app.navigate(category_location(event.button.name))

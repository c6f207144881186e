# src/ui/app.py

"""Terminal UI for the TechParts Hub storefront."""

import logging

from textual.app import App
from textual.binding import Binding

from src.config.settings import Settings
from src.services.api_client import StorefrontClient
from src.services.cart import CartStore
from src.ui.routes import Route, resolve_route
from src.ui.screens import (
    AboutScreen,
    CartScreen,
    CheckoutScreen,
    ContactScreen,
    HomeScreen,
    PageScreen,
    ProductScreen,
    ShopScreen,
)

logger = logging.getLogger("storefront.ui")


class StorefrontApp(App[None]):
    """Terminal storefront over the remote catalog and checkout API.

    The app is the context object for its screens: they reach the shared
    API client and cart through it rather than through module globals.
    """

    CSS_PATH = "styles.css"
    TITLE = Settings.BRAND_NAME

    BINDINGS = [
        Binding("escape", "back", "Back"),
        Binding("ctrl+o", "go_home", "Home"),
        Binding("ctrl+k", "open_cart", "Cart"),
        Binding("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        client: StorefrontClient | None = None,
        cart: CartStore | None = None,
        start_location: str = "/",
    ) -> None:
        super().__init__()
        self.settings = Settings()
        self.client = client if client is not None else StorefrontClient()
        self.cart = cart if cart is not None else CartStore()
        self.start_location = start_location
        self.location = start_location

    def on_mount(self) -> None:
        if not self.navigate(self.start_location):
            self.navigate("/")

    def _build_screen(self, route: Route) -> PageScreen:
        if route.name == "shop":
            return ShopScreen(route.location, self.client)
        if route.name == "product":
            return ProductScreen(route.location, self.client, route.params["id"])
        if route.name == "cart":
            return CartScreen(route.location, self.client)
        if route.name == "checkout":
            return CheckoutScreen(route.location, self.client)
        if route.name == "about":
            return AboutScreen(route.location, self.client)
        if route.name == "contact":
            return ContactScreen(route.location, self.client)
        return HomeScreen(route.location, self.client)

    def navigate(self, location: str) -> bool:
        """Open the page for ``location``; returns ``False`` if unknown."""
        route = resolve_route(location)
        if route is None:
            logger.warning("No page for location '%s'", location)
            self.notify(f"Page not found: {location}", severity="warning")
            return False
        logger.info("Navigating to %s", route.location)
        self.set_location(route.location)
        screen = self._build_screen(route)
        if self._replaces_current(screen):
            self.switch_screen(screen)
        else:
            self.push_screen(screen)
        return True

    def _replaces_current(self, screen: PageScreen) -> bool:
        """Whether ``screen`` should take the current page's place.

        Reopening the same kind of page (another category, another
        product) swaps it in place, and a full history does the same.
        """
        current = self.screen
        if not isinstance(current, PageScreen):
            return False
        # The bottom of the stack is Textual's default screen
        depth = len(self.screen_stack) - 1
        return (
            type(current) is type(screen)
            or depth >= self.settings.MAX_HISTORY
        )

    def set_location(self, location: str) -> None:
        """Record the location of the page now showing."""
        self.location = location
        self.sub_title = location

    def action_back(self) -> None:
        # The bottom of the stack is Textual's default screen
        if len(self.screen_stack) > 2:
            self.pop_screen()

    def action_go_home(self) -> None:
        self.navigate("/")

    def action_open_cart(self) -> None:
        self.navigate("/cart")

    async def action_quit(self) -> None:
        await self.client.close()
        self.exit()

# src/services/cart.py

"""Observable in-memory cart shared by the navigation bar and pages."""

import logging
from collections.abc import Callable

from src.models.order import CartLine
from src.models.product import ProductSummary

logger = logging.getLogger("storefront.cart")

CartListener = Callable[[int], None]


class CartStore:
    """Cart contents for one app session.

    The app owns a single instance and hands it to its screens; listeners
    are called with the new item count after every mutation.
    """

    def __init__(self) -> None:
        self._lines: dict[str, CartLine] = {}
        self._listeners: list[CartListener] = []

    @property
    def lines(self) -> list[CartLine]:
        return list(self._lines.values())

    @property
    def count(self) -> int:
        """Total quantity across all lines."""
        return sum(line.quantity for line in self._lines.values())

    @property
    def subtotal(self) -> float:
        return sum(line.line_total for line in self._lines.values())

    def add(self, product: ProductSummary, quantity: int = 1) -> CartLine:
        """Add ``quantity`` of ``product``, merging with an existing line."""
        if quantity < 1:
            raise ValueError(f"quantity must be >= 1, got {quantity}")
        line = self._lines.get(product.id)
        if line is None:
            line = CartLine(product=product, quantity=quantity)
            self._lines[product.id] = line
        else:
            line.quantity += quantity
        logger.info(
            "Cart: +%d x %s (%s), %d items",
            quantity,
            product.id,
            product.title,
            self.count,
        )
        self._notify()
        return line

    def remove(self, product_id: str) -> bool:
        if self._lines.pop(product_id, None) is None:
            return False
        self._notify()
        return True

    def clear(self) -> None:
        if not self._lines:
            return
        self._lines.clear()
        self._notify()

    def to_checkout_items(self) -> list[dict[str, object]]:
        """Cart lines in the shape the checkout endpoint accepts."""
        return [
            {
                "product_id": line.product.id,
                "title": line.product.title,
                "quantity": line.quantity,
                "price": line.product.price,
            }
            for line in self._lines.values()
        ]

    def subscribe(self, listener: CartListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        count = self.count
        for listener in list(self._listeners):
            listener(count)

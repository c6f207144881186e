# src/models/order.py

"""Cart and checkout data models."""

from dataclasses import dataclass, field
from typing import Any

from src.models.product import ProductSummary


@dataclass
class CartLine:
    """A product in the cart with its quantity."""

    product: ProductSummary
    quantity: int = 1

    @property
    def line_total(self) -> float:
        return self.product.price * self.quantity


@dataclass
class CheckoutRequest:
    """Body of ``POST /api/checkout``."""

    customer_name: str
    email: str
    shipping_address: str
    payment_method: str = "card"
    items: list[dict[str, Any]] = field(
        default_factory=lambda: list[dict[str, Any]]()
    )
    notes: str = ""

    def to_payload(self) -> dict[str, Any]:
        return {
            "customer_name": self.customer_name,
            "email": self.email,
            "shipping_address": self.shipping_address,
            "payment_method": self.payment_method,
            "items": list(self.items),
            "notes": self.notes,
        }


@dataclass(frozen=True)
class OrderConfirmation:
    """The API's acknowledgement of a placed order."""

    order_id: str

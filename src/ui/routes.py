# src/ui/routes.py

"""Maps location strings such as ``/product/42`` to pages."""

from dataclasses import dataclass, field
from urllib.parse import quote, unquote, urlencode, urlsplit


@dataclass(frozen=True)
class Route:
    """A resolved location: the page name plus its path parameters."""

    name: str
    location: str
    params: dict[str, str] = field(default_factory=dict)


def resolve_route(location: str) -> Route | None:
    """Return the page for ``location``, or ``None`` if nothing matches."""
    parts = urlsplit(location.strip() or "/")
    path = parts.path.rstrip("/") or "/"

    if path == "/":
        return Route("home", location)
    if path == "/shop":
        return Route("shop", location)
    if path.startswith("/product/"):
        product_id = unquote(path[len("/product/"):])
        if product_id and "/" not in product_id:
            return Route("product", location, {"id": product_id})
        return None
    if path in ("/cart", "/checkout", "/about", "/contact"):
        return Route(path.lstrip("/"), location)
    return None


def search_location(term: str) -> str:
    return f"/shop?{urlencode({'q': term})}"


def category_location(category: str) -> str:
    return f"/shop?{urlencode({'category': category})}"


def product_location(product_id: str) -> str:
    return f"/product/{quote(product_id, safe='')}"

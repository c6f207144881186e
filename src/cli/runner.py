# src/cli/runner.py

"""Headless listing and suggestion commands sharing the TUI's services."""

import json
import logging
import sys

from rich.console import Console
from rich.table import Table

from src.models.filter_state import FilterState
from src.models.product import Listing, ProductSummary
from src.services.api_client import StorefrontAPIError, StorefrontClient
from src.services.listing_fetcher import ListingFetcher
from src.ui.routes import resolve_route

logger = logging.getLogger("storefront.cli")

# Stderr console for status messages so stdout stays clean for JSON
_err = Console(stderr=True)


def _products_to_dicts(
    products: tuple[ProductSummary, ...] | list[ProductSummary],
) -> list[dict[str, object]]:
    """Serialise product summaries to plain dicts for JSON output."""
    return [
        {
            "id": p.id,
            "title": p.title,
            "price": p.price,
            "rating": p.rating,
            "is_new": p.is_new,
            "is_best_seller": p.is_best_seller,
            "discount_percent": p.discount_percent,
            "image": p.primary_image,
        }
        for p in products
    ]


def _print_table(listing: Listing, title: str) -> None:
    """Render a Rich table of the listing to stdout."""
    table = Table(
        title=title,
        caption=f"{len(listing.items)} of {listing.total} products",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("#", style="dim", width=4)
    table.add_column("ID", style="dim")
    table.add_column("Title", max_width=60)
    table.add_column("Price", justify="right", style="cyan")
    table.add_column("Rating", justify="center")
    table.add_column("Tags", style="yellow")

    for idx, p in enumerate(listing.items, 1):
        table.add_row(
            str(idx),
            p.id,
            p.title[:60],
            p.format_price(),
            p.format_rating(),
            " ".join(p.badges),
        )

    Console().print(table)


async def cli_list(
    location: str,
    output_format: str,
    base_url: str | None = None,
) -> int:
    """Print the listing for a ``/shop?...`` location (0=ok, 1=fail)."""
    route = resolve_route(location)
    if route is None or route.name != "shop":
        _err.print(f"[red]Not a shop location: {location}[/red]")
        return 1

    state = FilterState.from_location(location)
    client = StorefrontClient(base_url=base_url)
    _err.print(
        f"[bold]Listing:[/bold] {client.base_url}/api/products"
        f"?{state.to_query_string()}"
    )
    try:
        fetcher = ListingFetcher(client.list_products)
        fetcher.request(state)
        result = await fetcher.wait()
    finally:
        await client.close()

    if result is None or not result.ok:
        error = result.error if result else "no response"
        _err.print(f"[red]Error: {error}[/red]")
        return 1

    listing = result.value
    if not listing.items:
        _err.print("[yellow]No products found.[/yellow]")
        return 1

    if output_format == "table":
        _print_table(listing, title=location)
    else:
        json.dump(
            {
                "items": _products_to_dicts(listing.items),
                "total": listing.total,
            },
            sys.stdout,
            ensure_ascii=False,
            indent=2,
        )
        sys.stdout.write("\n")
    return 0


async def cli_suggest(text: str, base_url: str | None = None) -> int:
    """Print search suggestions for ``text``, one per line."""
    client = StorefrontClient(base_url=base_url)
    try:
        suggestions = await client.fetch_suggestions(text)
    except StorefrontAPIError as exc:
        logger.error("Suggestion lookup failed: %s", exc)
        _err.print(f"[red]Error: {exc}[/red]")
        return 1
    finally:
        await client.close()

    if not suggestions:
        _err.print("[yellow]No suggestions.[/yellow]")
        return 1
    for suggestion in suggestions:
        sys.stdout.write(f"{suggestion}\n")
    return 0

# src/config/settings.py

"""Central configuration for the storefront client."""

import os
from pathlib import Path

from curl_cffi.requests import BrowserTypeLiteral
from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Central configuration for the storefront client."""

    # --- Remote API ---
    API_BASE_URL: str = (
        os.getenv("STOREFRONT_API_URL")
        or os.getenv("VITE_BACKEND_URL")
        or "http://localhost:8000"
    )
    REQUEST_TIMEOUT: int = 15           # Seconds before a request times out

    # --- Search ---
    SUGGESTION_DEBOUNCE: float = 0.18   # Quiet period before a lookup (secs)
    RELATED_PRODUCTS_LIMIT: int = 4

    # --- HTTP ---
    IMPERSONATE_BROWSER: BrowserTypeLiteral = "chrome131"
    DEFAULT_HEADERS: dict[str, str] = {
        "Content-Type": "application/json",
        "Accept": "application/json",
        "Accept-Language": "en-US,en;q=0.9",
    }

    # --- Catalog ---
    BRAND_NAME: str = "TechParts Hub"
    CURRENCY_SYMBOL: str = "$"
    PLACEHOLDER_IMAGE: str = (
        "https://images.unsplash.com/photo-1518770660439-4636190af475"
        "?q=80&w=1200&auto=format&fit=crop"
    )
    CATEGORIES: list[str] = [
        "Microcontrollers",
        "Sensors",
        "Tools",
        "PC Components",
        "Electrical",
        "Robotics",
        "DIY Kits",
        "Components",
    ]
    FEATURED_CATEGORIES: list[str] = [
        "Electronics",
        "Tools",
        "Robotics",
        "Components",
    ]
    SORT_OPTIONS: list[dict[str, str]] = [
        {"id": "newest", "label": "Newest"},
        {"id": "price_asc", "label": "Price: Low to High"},
        {"id": "price_desc", "label": "Price: High to Low"},
        {"id": "rating_desc", "label": "Rating"},
    ]
    CUSTOMER_REVIEWS: list[tuple[str, str]] = [
        ("Alex", "Fast delivery and genuine parts. My go-to store for robotics gear."),
        ("Priya", "Loved the curated kits. The ESP32 kit was perfect for my class."),
        ("Marco", "Great prices on SSDs and top-notch support. Highly recommend."),
    ]

    # --- Support ---
    SUPPORT_EMAIL: str = "support@techparts.hub"
    SUPPORT_HOURS: str = "Mon-Fri 9am-6pm (UTC)"

    # --- UI ---
    MAX_HISTORY: int = 20               # Pages kept on the back stack

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    LOGS_DIR: Path = BASE_DIR / "logs"

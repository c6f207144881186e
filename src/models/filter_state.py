# src/models/filter_state.py

"""Shop filter state, its query-string form, and the store that owns it."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, fields, replace
from enum import Enum
from urllib.parse import parse_qs, urlencode, urlsplit

logger = logging.getLogger("storefront.filters")


class SortKey(str, Enum):
    """Listing sort orders understood by the API."""

    NEWEST = "newest"
    PRICE_ASC = "price_asc"
    PRICE_DESC = "price_desc"
    RATING_DESC = "rating_desc"


# Python field name -> query-string key used by the API and locations
WIRE_KEYS: dict[str, str] = {
    "query": "q",
    "category": "category",
    "brand": "brand",
    "min_price": "minPrice",
    "max_price": "maxPrice",
    "min_rating": "rating",
    "sort": "sort",
}


@dataclass(frozen=True)
class FilterState:
    """User-chosen search, filter and sort parameters for the shop view.

    Numeric fields hold the raw text the user typed; they are passed to
    the API verbatim, unparsed and unvalidated.
    """

    query: str = ""
    category: str = ""
    brand: str = ""
    min_price: str = ""
    max_price: str = ""
    min_rating: str = ""
    sort: SortKey = SortKey.NEWEST

    def to_query_params(self) -> dict[str, str]:
        """Return the non-empty fields keyed by their wire names."""
        params: dict[str, str] = {}
        for name, key in WIRE_KEYS.items():
            value = getattr(self, name)
            if isinstance(value, SortKey):
                value = value.value
            if value is None or value == "":
                continue
            params[key] = str(value)
        return params

    def to_query_string(self) -> str:
        return urlencode(self.to_query_params())

    @classmethod
    def from_query_string(cls, query_string: str) -> "FilterState":
        """Parse a query string written by :meth:`to_query_string`.

        Unknown keys are ignored; an unrecognised sort falls back to
        :attr:`SortKey.NEWEST`.
        """
        parsed = parse_qs(query_string, keep_blank_values=True)
        values: dict[str, str] = {}
        for name, key in WIRE_KEYS.items():
            if key in parsed:
                values[name] = parsed[key][0]

        raw_sort = values.pop("sort", "")
        try:
            sort = SortKey(raw_sort) if raw_sort else SortKey.NEWEST
        except ValueError:
            logger.warning("Ignoring unknown sort '%s'", raw_sort)
            sort = SortKey.NEWEST
        return cls(sort=sort, **values)

    @classmethod
    def from_location(cls, location: str) -> "FilterState":
        """Seed a state from a location such as ``/shop?q=esp32``."""
        return cls.from_query_string(urlsplit(location).query)


FilterListener = Callable[[FilterState], None]


class FilterStateStore:
    """Owns the current :class:`FilterState` for one shop view.

    ``set_field`` is the only mutation; listeners run once per real
    change and never for a write of the current value.
    """

    _FIELD_NAMES = frozenset(f.name for f in fields(FilterState))

    def __init__(self, initial: FilterState | None = None) -> None:
        self._state = initial or FilterState()
        self._listeners: list[FilterListener] = []

    @property
    def state(self) -> FilterState:
        return self._state

    def set_field(self, key: str, value: str | SortKey) -> bool:
        """Replace one field, leaving the others unchanged.

        Returns ``True`` when the state actually changed.

        Raises:
            KeyError: ``key`` is not a FilterState field.
            ValueError: ``key`` is ``sort`` and ``value`` is not a SortKey.
        """
        if key not in self._FIELD_NAMES:
            raise KeyError(key)
        new_value: str | SortKey = SortKey(value) if key == "sort" else value
        if getattr(self._state, key) == new_value:
            return False

        self._state = replace(self._state, **{key: new_value})
        logger.debug("Filter %s -> %r", key, new_value)
        for listener in list(self._listeners):
            listener(self._state)
        return True

    def subscribe(self, listener: FilterListener) -> Callable[[], None]:
        """Register ``listener``; call the returned function to detach it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

import logging
from typing import List, Sequence

from app.models.product import Product, SortKey
from app.utils.scheduler import DeferredTask

logger = logging.getLogger(__name__)

_SORT_FIELDS = {
    SortKey.PRICE_ASC: ("price", False),
    SortKey.PRICE_DESC: ("price", True),
    SortKey.STOCK_ASC: ("stock", False),
    SortKey.STOCK_DESC: ("stock", True),
}


def project(products: Sequence[Product], search: str = "", sort_key: SortKey = SortKey.NONE) -> List[Product]:
    """
    Derive the displayed product list.

    Filtering is a case-insensitive substring match on the name; an empty
    term matches everything. Sorting is stable, so products with equal keys
    keep their insertion order. `SortKey.NONE` keeps the filtered order.

    Args:
        products: Full catalog, most recent first
        search: Search term (already debounced)
        sort_key: Requested sort order

    Returns:
        New list of products to render
    """
    term = (search or "").casefold()
    items = [p for p in products if term in p.name.casefold()]

    if sort_key in _SORT_FIELDS:
        field, descending = _SORT_FIELDS[sort_key]
        items = sorted(items, key=lambda p: getattr(p, field), reverse=descending)

    return items


class SearchState:
    """
    Live and debounced copies of the search input.

    The live term is echoed back immediately; the applied term used for
    filtering only catches up once input has been idle for `delay` seconds.
    """

    def __init__(self, delay: float = 0.3):
        self.delay = delay
        self.term = ""
        self.applied_term = ""
        self._debounce = DeferredTask(name="search-debounce")

    @property
    def pending(self) -> bool:
        return self._debounce.pending

    def set_term(self, term: str) -> None:
        self.term = term
        if self.delay <= 0:
            self._debounce.cancel()
            self._apply(term)
            return
        self._debounce.schedule(lambda: self._apply(term), self.delay)

    def cancel(self) -> None:
        self._debounce.cancel()

    def _apply(self, term: str) -> None:
        self.applied_term = term
        logger.debug(f"Search term applied: '{term}'")

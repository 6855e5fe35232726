import asyncio
import logging
from typing import Optional, List

import httpx
from fastapi import Request

from app.config import Settings, get_settings
from app.models.product import Product, SortKey
from app.services.ability_feed import AbilityFeed
from app.services.catalog_store import CatalogStore
from app.services.form_controller import FormController
from app.services.view_projector import SearchState, project
from app.utils.scheduler import DeferredTask
from app.utils.storage import KeyValueStorage

logger = logging.getLogger(__name__)


class CatalogPage:
    """
    Owner of all state for one catalog page.

    Ties the catalog store, search/sort view state, the form controller
    and the ability feed to a single mount/unmount lifecycle:

    1. mount() schedules the initial load after a simulated delay and
       starts fetching the ability feed
    2. requests mutate the catalog through the form controller
    3. unmount() cancels pending callbacks so nothing changes after teardown
    """

    def __init__(
        self,
        store: CatalogStore,
        feed: Optional[AbilityFeed] = None,
        load_delay: float = 0.6,
        search_delay: float = 0.3,
    ):
        self.store = store
        self.feed = feed
        self.load_delay = load_delay
        self.search = SearchState(delay=search_delay)
        self.sort_key = SortKey.NONE
        self.forms = FormController(store)
        self.mounted = False
        self._load_task = DeferredTask(name="initial-load")
        self._feed_task: Optional[asyncio.Task] = None

    def mount(self) -> None:
        """Start the page: schedule the catalog load and fetch the feed."""
        logger.info("Mounting catalog page...")
        self.mounted = True

        if self.load_delay <= 0:
            self.store.load()
        else:
            self._load_task.schedule(self._load, self.load_delay)

        if self.feed is not None:
            self._feed_task = asyncio.get_running_loop().create_task(self.feed.refresh())

    async def unmount(self) -> None:
        """Tear the page down, cancelling any pending deferred work."""
        logger.info("Unmounting catalog page...")
        self.mounted = False
        self._load_task.cancel()
        self.search.cancel()

        if self._feed_task is not None and not self._feed_task.done():
            self._feed_task.cancel()
            try:
                await self._feed_task
            except asyncio.CancelledError:
                pass
        self._feed_task = None

        if self.feed is not None:
            await self.feed.client.aclose()

    def set_search(self, term: str) -> None:
        self.search.set_term(term)

    def reset(self) -> List[Product]:
        """Close any open dialog and restore the seed catalog."""
        self.forms.cancel()
        return self.store.reset()

    def set_sort(self, sort_key: SortKey) -> None:
        self.sort_key = sort_key

    def view(self) -> List[Product]:
        """Derived list to render; empty while loading."""
        products = self.store.products
        if products is None:
            return []
        return project(products, self.search.applied_term, self.sort_key)

    def _load(self) -> None:
        if not self.mounted:
            return
        self.store.load()


def build_page(settings: Settings = None) -> CatalogPage:
    """Build a page wired to Redis storage and the live ability API."""
    settings = settings or get_settings()
    store = CatalogStore(KeyValueStorage(), key=settings.STORAGE_KEY)

    feed = None
    if settings.ABILITY_FEED_ENABLED:
        client = httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT)
        feed = AbilityFeed(
            client,
            base_url=settings.ABILITY_API_BASE_URL,
            page_size=settings.ABILITY_PAGE_SIZE,
            ability_name=settings.ABILITY_NAME,
        )

    return CatalogPage(
        store,
        feed=feed,
        load_delay=settings.LOAD_DELAY_MS / 1000,
        search_delay=settings.SEARCH_DEBOUNCE_MS / 1000,
    )


def get_page(request: Request) -> CatalogPage:
    """
    Dependency to get the page owned by the running application.
    """
    return request.app.state.page

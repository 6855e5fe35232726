import fakeredis
import httpx
import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.services.ability_feed import AbilityFeed
from app.services.catalog_page import CatalogPage
from app.services.catalog_store import CatalogStore
from app.utils.storage import KeyValueStorage


ABILITY_API = "https://pokeapi.test/api/v2"

ABILITY_LIST = {
    "count": 3,
    "results": [
        {"name": "stench", "url": f"{ABILITY_API}/ability/1/"},
        {"name": "drizzle", "url": f"{ABILITY_API}/ability/2/"},
        {"name": "speed-boost", "url": f"{ABILITY_API}/ability/3/"},
    ],
}

STENCH_DETAIL = {
    "name": "stench",
    "effect_entries": [
        {"effect": "Has a 10% chance of making target Pokemon flinch.", "language": {"name": "en"}},
        {"effect": "Mit jedem Treffer besteht eine 10% Chance.", "language": {"name": "de"}},
    ],
}


def ability_api_handler(request: httpx.Request) -> httpx.Response:
    """Serve canned PokeAPI responses."""
    if request.url.path == "/api/v2/ability":
        return httpx.Response(200, json=ABILITY_LIST)
    if request.url.path == "/api/v2/ability/stench":
        return httpx.Response(200, json=STENCH_DETAIL)
    return httpx.Response(404, json={"detail": "Not found"})


def make_feed(handler=ability_api_handler) -> AbilityFeed:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return AbilityFeed(client, base_url=ABILITY_API, page_size=3, ability_name="stench")


@pytest.fixture(scope="function")
def redis_client():
    """In-memory Redis standing in for the storage server."""
    return fakeredis.FakeRedis(decode_responses=True)


@pytest.fixture(scope="function")
def storage(redis_client):
    return KeyValueStorage(redis_client)


@pytest.fixture(scope="function")
def store(storage):
    """Catalog store on an empty storage slot (not loaded yet)."""
    return CatalogStore(storage, key="products_v1")


@pytest.fixture(scope="function")
def loaded_store(store):
    """Catalog store loaded with the seed set."""
    store.load()
    return store


@pytest.fixture(scope="function")
def page(store):
    """Page with no simulated delays so requests see results immediately."""
    return CatalogPage(store, feed=make_feed(), load_delay=0, search_delay=0)


@pytest.fixture(scope="function")
def client(page):
    """Create test client with a freshly mounted page for each test."""
    app.state.page = page

    with TestClient(app) as test_client:
        yield test_client

    app.state.page = None


@pytest.fixture
def ability_handler():
    return ability_api_handler


@pytest.fixture
def feed_factory():
    """Build an ability feed served by a mock transport."""
    return make_feed

import logging
import random
from typing import Optional, List

from pydantic import TypeAdapter, ValidationError

from app.config import get_settings
from app.models.product import Product, LoadState, generate_id, seed_products
from app.utils.storage import KeyValueStorage

logger = logging.getLogger(__name__)

_product_list = TypeAdapter(List[Product])


class CatalogNotLoadedError(Exception):
    """Exception raised when the catalog is mutated before it has loaded."""
    pass


class DuplicateProductError(Exception):
    """Exception raised when a product ID is already in the catalog."""
    pass


class CatalogStore:
    """
    Owner of the authoritative in-memory product collection.

    This store handles:
    - Loading from the storage slot, falling back to the seed set
    - Adding, replacing and removing products
    - Persisting the full collection after every mutation
    - Resetting to the seed set

    The in-memory collection stays authoritative for the session even when
    persisting fails.
    """

    def __init__(self, storage: KeyValueStorage, key: str = None):
        self.storage = storage
        self.key = key or get_settings().STORAGE_KEY
        self._products: Optional[List[Product]] = None

    @property
    def products(self) -> Optional[List[Product]]:
        """Current collection (a copy), or None before load."""
        if self._products is None:
            return None
        return list(self._products)

    @property
    def state(self) -> LoadState:
        if self._products is None:
            return LoadState.LOADING
        if not self._products:
            return LoadState.EMPTY
        return LoadState.READY

    def get(self, product_id: str) -> Optional[Product]:
        """Get a product by ID."""
        for product in self._products or []:
            if product.id == product_id:
                return product
        return None

    def load(self) -> List[Product]:
        """
        Load the collection from storage.

        Missing or malformed stored data is treated as absent and the
        seed set is used instead.

        Returns:
            The loaded collection
        """
        raw = self.storage.get_item(self.key)

        products = None
        if raw is not None:
            try:
                products = _product_list.validate_python(raw)
            except ValidationError as e:
                logger.warning(f"Stored catalog under '{self.key}' is invalid, using seed set: {e.error_count()} errors")
            else:
                ids = [p.id for p in products]
                if len(ids) != len(set(ids)):
                    logger.warning(f"Stored catalog under '{self.key}' repeats product IDs, using seed set")
                    products = None

        if products is None:
            products = seed_products()
            logger.info(f"Catalog seeded with {len(products)} products")
        else:
            logger.info(f"Catalog loaded with {len(products)} products from '{self.key}'")

        self._products = products
        return self.products

    def add(self, product: Product) -> Product:
        """Prepend a product so the newest appears first."""
        items = self._require_loaded()
        if any(p.id == product.id for p in items):
            raise DuplicateProductError(f"Product with ID {product.id} already exists")
        self._products = [product] + items
        self._persist()
        return product

    def update(self, product: Product) -> Optional[Product]:
        """
        Replace the product with a matching ID.

        Returns:
            The stored product or None if no product matched
        """
        items = self._require_loaded()
        for index, existing in enumerate(items):
            if existing.id == product.id:
                items[index] = product
                self._products = items
                self._persist()
                return product
        return None

    def remove(self, product_id: str) -> bool:
        """
        Remove a product.

        Returns:
            True if removed, False if not found
        """
        items = self._require_loaded()
        remaining = [p for p in items if p.id != product_id]
        if len(remaining) == len(items):
            return False
        self._products = remaining
        self._persist()
        return True

    def reset(self) -> List[Product]:
        """Replace the collection with the seed set and clear the storage slot."""
        self._products = seed_products()
        self.storage.remove_item(self.key)
        logger.info("Catalog reset to seed set")
        return self.products

    def add_placeholder(self) -> Product:
        """
        Prepend a demo product with random price and stock.

        The label reproduces the legacy expression `count || 0 + 1`, which
        yields the current count (or 1 when empty) rather than count + 1.
        """
        items = self._require_loaded()
        product = Product(
            id=generate_id(p.id for p in items),
            name=f"Produk {len(items) or 0 + 1}",
            price=random.randrange(100000),
            stock=random.randrange(50),
        )
        return self.add(product)

    def _require_loaded(self) -> List[Product]:
        if self._products is None:
            raise CatalogNotLoadedError("Catalog is still loading")
        return list(self._products)

    def _persist(self) -> bool:
        payload = _product_list.dump_python(self._products, mode="json")
        return self.storage.set_item(self.key, payload)

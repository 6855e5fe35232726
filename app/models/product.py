import enum
import uuid
from typing import Iterable

from pydantic import BaseModel, ConfigDict, Field

from app.config import get_settings


def placeholder_image() -> str:
    return get_settings().PLACEHOLDER_IMAGE


class Product(BaseModel):
    """
    Product record representing one catalog item.

    Attributes:
        id: Opaque identifier generated at creation, immutable afterwards
        name: Product name (non-empty after trimming)
        price: Product price (must be non-negative, fractional allowed)
        stock: Available quantity (must be a non-negative whole number)
        image: Display image, the placeholder when absent
    """
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    price: float = Field(..., ge=0)
    stock: int = Field(..., ge=0)
    image: str = Field(default_factory=placeholder_image)

    def __repr__(self):
        return f"<Product(id='{self.id}', name='{self.name}', stock={self.stock})>"


class LoadState(str, enum.Enum):
    """Tri-state load status of the catalog."""
    LOADING = "loading"
    EMPTY = "empty"
    READY = "ready"


class SortKey(str, enum.Enum):
    """Sort orders available for the derived view."""
    NONE = "none"
    PRICE_ASC = "price_asc"
    PRICE_DESC = "price_desc"
    STOCK_ASC = "stock_asc"
    STOCK_DESC = "stock_desc"


def generate_id(existing: Iterable[str] = ()) -> str:
    """Generate a short random id not present in `existing`."""
    taken = set(existing)
    while True:
        candidate = uuid.uuid4().hex[:8]
        if candidate not in taken:
            return candidate


def seed_products() -> list[Product]:
    """Fixed fallback collection used on first run and on reset."""
    return [
        Product(id="seed-1", name="Produk 1", price=50000, stock=10),
        Product(id="seed-2", name="Produk 2", price=75000, stock=25),
        Product(id="seed-3", name="Produk 3", price=120000, stock=5),
        Product(id="seed-4", name="Produk 4", price=95000, stock=0),
    ]

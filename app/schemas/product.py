from pydantic import BaseModel, Field
from typing import Optional, Union

from app.models.modal import ModalMode
from app.models.product import LoadState, SortKey


class ProductForm(BaseModel):
    """
    Raw create/edit form input.

    Values are kept as entered (text or numbers); the form controller
    validates them in a fixed order.
    """
    name: str = Field("", description="Product name")
    price: Union[str, float, int, None] = Field("", description="Product price")
    stock: Union[str, int, float, None] = Field("", description="Available stock")


class ProductResponse(BaseModel):
    """Schema for product response including all fields."""
    id: str
    name: str
    price: float
    stock: int
    image: str


class FieldError(BaseModel):
    """Inline validation message for one form field."""
    field: str
    message: str


class ModalResponse(BaseModel):
    """Schema for the modal currently shown on the page."""
    mode: ModalMode
    product: Optional[ProductResponse] = None
    form: Optional[ProductForm] = None


class SearchUpdate(BaseModel):
    """Schema for updating the live search input."""
    term: str = Field("", max_length=255, description="Free-text search on product name")


class SortUpdate(BaseModel):
    """Schema for selecting a sort order."""
    sort: SortKey = Field(..., description="Sort order for the displayed list")


class CatalogViewResponse(BaseModel):
    """Schema for the derived catalog view."""
    status: LoadState
    search: str
    applied_search: str
    sort: SortKey
    items: list[ProductResponse]
    total: int
    modal: ModalResponse

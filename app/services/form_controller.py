import logging
import math
from typing import Optional

from app.models.modal import ModalState, Idle, Creating, Editing, ConfirmingDelete
from app.models.product import Product, generate_id, placeholder_image
from app.schemas.product import ProductForm
from app.services.catalog_store import CatalogStore

logger = logging.getLogger(__name__)


class ModalStateError(Exception):
    """Exception raised when an action does not fit the open modal."""
    pass


class ProductNotFoundError(Exception):
    """Exception raised when the product behind an open dialog is gone."""
    pass


class ProductValidationError(Exception):
    """Exception raised when a submitted form fails a validation rule."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.message = message


def _parse_number(value) -> Optional[float]:
    """Parse form input as a finite number, or None if it is not one."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def validate_form(form: ProductForm) -> tuple[str, float, int]:
    """
    Validate raw form input.

    Rules are checked in order and the first failure wins:
    1. name is non-empty after trimming
    2. price is a valid number
    3. stock is a valid number
    4. price is non-negative
    5. stock is a non-negative whole number

    Returns:
        Tuple of (name, price, stock)

    Raises:
        ProductValidationError: On the first failing rule
    """
    name = (form.name or "").strip()
    if not name:
        raise ProductValidationError("name", "Product name is required")

    price = _parse_number(form.price)
    if price is None:
        raise ProductValidationError("price", "Price must be a valid number")

    stock = _parse_number(form.stock)
    if stock is None:
        raise ProductValidationError("stock", "Stock must be a valid number")

    if price < 0:
        raise ProductValidationError("price", "Price cannot be negative")

    if stock < 0 or not stock.is_integer():
        raise ProductValidationError("stock", "Stock must be a non-negative whole number")

    return name, price, int(stock)


class FormController:
    """
    Create/edit form and delete confirmation state machine.

    Modal transitions:
    - Idle -> Creating | Editing(product) | ConfirmingDelete(product)
    - Creating | Editing -> Idle on successful submit or cancel
    - ConfirmingDelete -> Idle on confirm or cancel

    Every write to the catalog goes through a validated submit or a
    confirmed delete.
    """

    def __init__(self, store: CatalogStore):
        self.store = store
        self.state: ModalState = Idle()

    def open_create(self) -> ModalState:
        self._require_idle()
        self.state = Creating()
        return self.state

    def open_edit(self, product: Product) -> ModalState:
        self._require_idle()
        self.state = Editing(product)
        return self.state

    def open_delete(self, product: Product) -> ModalState:
        self._require_idle()
        self.state = ConfirmingDelete(product)
        return self.state

    def form_values(self) -> Optional[ProductForm]:
        """Current form contents: blank on create, pre-filled on edit."""
        if isinstance(self.state, Creating):
            return ProductForm()
        if isinstance(self.state, Editing):
            product = self.state.product
            return ProductForm(name=product.name, price=product.price, stock=product.stock)
        return None

    def submit(self, form: ProductForm) -> Product:
        """
        Validate the form and commit it to the catalog.

        On create the product gets a fresh ID and the placeholder image;
        on edit the original ID and image are kept. The modal stays open
        when validation fails.

        Raises:
            ModalStateError: If no form is open
            ProductValidationError: If a validation rule fails
            ProductNotFoundError: If the product being edited no longer exists
        """
        state = self.state
        if not isinstance(state, (Creating, Editing)):
            raise ModalStateError("No product form is open")

        name, price, stock = validate_form(form)

        if isinstance(state, Editing):
            product = Product(
                id=state.product.id,
                name=name,
                price=price,
                stock=stock,
                image=state.product.image,
            )
            if self.store.update(product) is None:
                self.state = Idle()
                raise ProductNotFoundError(f"Product with ID {product.id} not found")
            logger.info(f"Product '{product.id}' updated")
        else:
            existing = self.store.products or []
            product = Product(
                id=generate_id(p.id for p in existing),
                name=name,
                price=price,
                stock=stock,
                image=placeholder_image(),
            )
            self.store.add(product)
            logger.info(f"Product '{product.id}' created")

        self.state = Idle()
        return product

    def confirm_delete(self) -> Product:
        """
        Remove the delete candidate from the catalog.

        Raises:
            ModalStateError: If no delete confirmation is open
            ProductNotFoundError: If the candidate no longer exists
        """
        state = self.state
        if not isinstance(state, ConfirmingDelete):
            raise ModalStateError("No delete confirmation is open")

        self.state = Idle()
        if not self.store.remove(state.product.id):
            raise ProductNotFoundError(f"Product with ID {state.product.id} not found")
        logger.info(f"Product '{state.product.id}' deleted")
        return state.product

    def cancel(self) -> ModalState:
        """Close any open modal without touching the catalog."""
        self.state = Idle()
        return self.state

    def _require_idle(self) -> None:
        if not isinstance(self.state, Idle):
            raise ModalStateError(f"Another dialog is already open ({self.state.mode.value})")

"""Tests for form validation and the modal state machine."""
import pytest

from app.models.modal import ModalMode, Idle, Creating, Editing, ConfirmingDelete
from app.models.product import Product
from app.schemas.product import ProductForm
from app.services.form_controller import (
    FormController,
    ModalStateError,
    ProductNotFoundError,
    ProductValidationError,
    validate_form,
)


@pytest.fixture
def forms(loaded_store):
    return FormController(loaded_store)


@pytest.mark.parametrize("form, field, message", [
    (ProductForm(name="   ", price="abc", stock="x"), "name", "Product name is required"),
    (ProductForm(name="Roti", price="", stock="x"), "price", "Price must be a valid number"),
    (ProductForm(name="Roti", price="12a", stock="3"), "price", "Price must be a valid number"),
    (ProductForm(name="Roti", price="-5", stock="abc"), "stock", "Stock must be a valid number"),
    (ProductForm(name="Roti", price="-5", stock="-1"), "price", "Price cannot be negative"),
    (ProductForm(name="Roti", price="5", stock="-1"), "stock", "Stock must be a non-negative whole number"),
    (ProductForm(name="Roti", price="5", stock="2.5"), "stock", "Stock must be a non-negative whole number"),
    (ProductForm(name="Roti", price="nan", stock="1"), "price", "Price must be a valid number"),
])
def test_validation_first_failing_rule_wins(form, field, message):
    """Test each rule's message and the fixed check order."""
    with pytest.raises(ProductValidationError) as exc_info:
        validate_form(form)

    assert exc_info.value.field == field
    assert exc_info.value.message == message


def test_validation_accepts_text_and_numbers():
    """Test valid input is trimmed and converted."""
    assert validate_form(ProductForm(name="  Roti  ", price=" 7500.5 ", stock="3")) == ("Roti", 7500.5, 3)
    assert validate_form(ProductForm(name="Roti", price=0, stock=0)) == ("Roti", 0.0, 0)


def test_create_adds_product_first(forms, loaded_store):
    """Test create prepends one product with a new id and placeholder image."""
    forms.open_create()
    assert forms.form_values() == ProductForm()

    product = forms.submit(ProductForm(name="Kopi", price="15000", stock="7"))

    assert isinstance(forms.state, Idle)
    assert loaded_store.products[0] == product
    assert len(loaded_store.products) == 5
    assert product.id not in {"seed-1", "seed-2", "seed-3", "seed-4"}
    assert product.image == Product(id="x", name="x", price=0, stock=0).image


def test_created_ids_are_unique(forms, loaded_store):
    """Test repeated creates never reuse an id."""
    for i in range(20):
        forms.open_create()
        forms.submit(ProductForm(name=f"Item {i}", price=i, stock=i))

    ids = [p.id for p in loaded_store.products]
    assert len(ids) == len(set(ids))


def test_edit_preserves_id_and_image(forms, loaded_store):
    """Test edit replaces fields but keeps id and image."""
    original = loaded_store.products[2]
    forms.open_edit(original)
    prefilled = forms.form_values()
    assert prefilled.name == original.name

    product = forms.submit(ProductForm(name="Produk Edit", price=prefilled.price, stock=prefilled.stock))

    assert product.id == original.id
    assert product.image == original.image
    assert product.price == original.price
    assert loaded_store.products[2].name == "Produk Edit"
    assert len(loaded_store.products) == 4


def test_failed_submit_keeps_form_open(forms, loaded_store):
    """Test validation failure does not mutate or close the form."""
    forms.open_create()

    with pytest.raises(ProductValidationError):
        forms.submit(ProductForm(name="", price="1", stock="1"))

    assert isinstance(forms.state, Creating)
    assert len(loaded_store.products) == 4


def test_confirm_delete_removes_candidate(forms, loaded_store):
    """Test confirming deletion removes only that product."""
    forms.open_delete(loaded_store.get("seed-3"))
    assert forms.state.mode == ModalMode.CONFIRMING_DELETE

    forms.confirm_delete()

    assert isinstance(forms.state, Idle)
    assert [p.id for p in loaded_store.products] == ["seed-1", "seed-2", "seed-4"]


def test_cancel_delete_discards_candidate(forms, loaded_store):
    """Test cancelling a deletion leaves the catalog unchanged."""
    forms.open_delete(loaded_store.get("seed-3"))

    forms.cancel()

    assert isinstance(forms.state, Idle)
    assert len(loaded_store.products) == 4


def test_only_one_dialog_at_a_time(forms, loaded_store):
    """Test opening a dialog while another is open is rejected."""
    forms.open_edit(loaded_store.get("seed-1"))

    with pytest.raises(ModalStateError):
        forms.open_delete(loaded_store.get("seed-2"))

    assert isinstance(forms.state, Editing)


def test_actions_require_matching_dialog(forms, loaded_store):
    """Test submit and confirm need their dialog open."""
    with pytest.raises(ModalStateError):
        forms.submit(ProductForm(name="Roti", price="1", stock="1"))

    forms.open_create()
    with pytest.raises(ModalStateError):
        forms.confirm_delete()

    forms.cancel()
    forms.open_delete(loaded_store.get("seed-1"))
    assert isinstance(forms.state, ConfirmingDelete)
    with pytest.raises(ModalStateError):
        forms.submit(ProductForm(name="Roti", price="1", stock="1"))


def test_creating_and_idle_carry_no_product():
    """Test only the edit and delete dialogs hold a product."""
    product = Product(id="x", name="x", price=0, stock=0)

    with pytest.raises(TypeError):
        Creating(product=product)

    with pytest.raises(TypeError):
        Idle(product=product)


def test_submit_edit_of_removed_product(forms, loaded_store):
    """Test editing a product that disappeared does not report success."""
    forms.open_edit(loaded_store.get("seed-1"))
    loaded_store.remove("seed-1")

    with pytest.raises(ProductNotFoundError):
        forms.submit(ProductForm(name="Ghost", price="1", stock="1"))

    assert isinstance(forms.state, Idle)
    assert "Ghost" not in [p.name for p in loaded_store.products]


def test_confirm_delete_of_removed_product(forms, loaded_store):
    """Test confirming deletion of a product already gone is reported."""
    forms.open_delete(loaded_store.get("seed-2"))
    loaded_store.remove("seed-2")

    with pytest.raises(ProductNotFoundError):
        forms.confirm_delete()

    assert isinstance(forms.state, Idle)
    assert len(loaded_store.products) == 3

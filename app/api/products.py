from fastapi import APIRouter, Depends, HTTPException, status

from app.api.catalog import render_modal
from app.services.catalog_page import CatalogPage, get_page
from app.services.catalog_store import CatalogNotLoadedError
from app.services.form_controller import (
    ModalStateError,
    ProductNotFoundError,
    ProductValidationError,
)
from app.models.product import Product
from app.schemas.product import (
    ModalResponse,
    ProductForm,
    ProductResponse,
)

router = APIRouter(prefix="/products", tags=["Products"])


def _find_product(page: CatalogPage, product_id: str) -> Product:
    if page.store.products is None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Catalog is still loading"
        )
    product = page.store.get(product_id)
    if not product:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Product with ID {product_id} not found"
        )
    return product


def _modal_conflict(e: ModalStateError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail=str(e)
    )


def _not_found(e: ProductNotFoundError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=str(e)
    )


@router.get(
    "/modal",
    response_model=ModalResponse,
    summary="Get modal state",
    description="Which dialog is open, its product and the form contents."
)
async def get_modal(page: CatalogPage = Depends(get_page)):
    return render_modal(page)


@router.post(
    "/modal/create",
    response_model=ModalResponse,
    summary="Open the create form"
)
async def open_create(page: CatalogPage = Depends(get_page)):
    """Open a blank product form."""
    try:
        page.forms.open_create()
    except ModalStateError as e:
        raise _modal_conflict(e)
    return render_modal(page)


@router.post(
    "/{product_id}/edit",
    response_model=ModalResponse,
    summary="Open the edit form",
    description="Open the product form pre-filled with the product's current values."
)
async def open_edit(
    product_id: str,
    page: CatalogPage = Depends(get_page)
):
    product = _find_product(page, product_id)
    try:
        page.forms.open_edit(product)
    except ModalStateError as e:
        raise _modal_conflict(e)
    return render_modal(page)


@router.post(
    "/{product_id}/delete",
    response_model=ModalResponse,
    summary="Ask to delete a product",
    description="Open the delete confirmation for a product. Nothing is removed yet."
)
async def open_delete(
    product_id: str,
    page: CatalogPage = Depends(get_page)
):
    product = _find_product(page, product_id)
    try:
        page.forms.open_delete(product)
    except ModalStateError as e:
        raise _modal_conflict(e)
    return render_modal(page)


@router.post(
    "/modal/submit",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit the product form",
    description="Validate the open create/edit form and save it to the catalog."
)
async def submit_form(
    form: ProductForm,
    page: CatalogPage = Depends(get_page)
):
    """
    Submit the open form.

    - **name**: Product name, required
    - **price**: Number, must be non-negative
    - **stock**: Whole number, must be non-negative

    On a validation error the form stays open and the response names the
    offending field.
    """
    try:
        product = page.forms.submit(form)
    except ModalStateError as e:
        raise _modal_conflict(e)
    except ProductNotFoundError as e:
        raise _not_found(e)
    except ProductValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"field": e.field, "message": e.message}
        )
    except CatalogNotLoadedError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e)
        )
    return product.model_dump()


@router.post(
    "/modal/confirm-delete",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Confirm deletion"
)
async def confirm_delete(page: CatalogPage = Depends(get_page)):
    """Remove the product awaiting confirmation."""
    try:
        page.forms.confirm_delete()
    except ModalStateError as e:
        raise _modal_conflict(e)
    except ProductNotFoundError as e:
        raise _not_found(e)
    return None


@router.post(
    "/modal/cancel",
    response_model=ModalResponse,
    summary="Close the open dialog",
    description="Cancel the create/edit form or the delete confirmation without changes."
)
async def cancel_modal(page: CatalogPage = Depends(get_page)):
    page.forms.cancel()
    return render_modal(page)

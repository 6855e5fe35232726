from fastapi import APIRouter, Depends, HTTPException, status

from app.services.catalog_page import CatalogPage, get_page
from app.services.catalog_store import CatalogNotLoadedError
from app.schemas.product import (
    CatalogViewResponse,
    ModalResponse,
    ProductResponse,
    SearchUpdate,
    SortUpdate,
)

router = APIRouter(prefix="/catalog", tags=["Catalog"])

# Handlers are async so page state is only touched from the event loop.


def render_modal(page: CatalogPage) -> ModalResponse:
    state = page.forms.state
    product = getattr(state, "product", None)
    return ModalResponse(
        mode=state.mode,
        product=ProductResponse.model_validate(product.model_dump()) if product else None,
        form=page.forms.form_values(),
    )


def render_view(page: CatalogPage) -> CatalogViewResponse:
    items = page.view()
    return CatalogViewResponse(
        status=page.store.state,
        search=page.search.term,
        applied_search=page.search.applied_term,
        sort=page.sort_key,
        items=[ProductResponse.model_validate(p.model_dump()) for p in items],
        total=len(page.store.products or []),
        modal=render_modal(page),
    )


@router.get(
    "/",
    response_model=CatalogViewResponse,
    summary="Get the catalog view",
    description="Filtered and sorted product list plus load status and modal state."
)
async def get_catalog(page: CatalogPage = Depends(get_page)):
    """
    Get the derived catalog view.

    - **status**: `loading` until the initial load completes, then `empty` or `ready`
    - **search**: live search input, echoed immediately
    - **applied_search**: debounced term the list is filtered by
    """
    return render_view(page)


@router.put(
    "/search",
    response_model=CatalogViewResponse,
    summary="Update the search input",
    description="Set the live search term. Filtering follows after the debounce interval."
)
async def update_search(
    search: SearchUpdate,
    page: CatalogPage = Depends(get_page)
):
    page.set_search(search.term)
    return render_view(page)


@router.put(
    "/sort",
    response_model=CatalogViewResponse,
    summary="Select the sort order"
)
async def update_sort(
    sort: SortUpdate,
    page: CatalogPage = Depends(get_page)
):
    page.set_sort(sort.sort)
    return render_view(page)


@router.post(
    "/reset",
    response_model=CatalogViewResponse,
    summary="Reset the catalog",
    description="Discard all products, restore the seed set and clear stored data."
)
async def reset_catalog(page: CatalogPage = Depends(get_page)):
    """Reset the catalog to the seed set."""
    page.reset()
    return render_view(page)


@router.post(
    "/placeholder",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a demo product",
    description="Prepend a product with a generated name, random price and random stock."
)
async def add_placeholder(page: CatalogPage = Depends(get_page)):
    try:
        product = page.store.add_placeholder()
    except CatalogNotLoadedError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e)
        )
    return product.model_dump()

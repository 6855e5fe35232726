from fastapi import APIRouter, Depends

from app.services.catalog_page import CatalogPage, get_page

router = APIRouter(prefix="/health", tags=["Health"])


@router.get(
    "/",
    summary="Health check",
    description="Basic health check endpoint."
)
def health_check():
    """Simple health check."""
    return {"status": "healthy"}


@router.get(
    "/ready",
    summary="Readiness check",
    description="Check whether the catalog has loaded and storage is reachable."
)
async def readiness_check(page: CatalogPage = Depends(get_page)):
    """
    Readiness check for the page.

    Returns status of:
    - Catalog load state
    - Storage (Redis) connection

    Storage being down does not block readiness: the in-memory catalog
    stays authoritative.
    """
    checks = {
        "catalog": page.store.state.value,
        "storage": page.store.storage.ping(),
    }

    loaded = page.store.products is not None

    return {
        "status": "ready" if loaded else "not_ready",
        "checks": checks
    }

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging

from app.config import get_settings
from app.services.catalog_page import build_page
from app.api import catalog, products, abilities, health

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager: mounts the catalog page on startup and
    unmounts it on shutdown.
    """
    # Startup
    logger.info("Starting up application...")

    page = getattr(app.state, "page", None) or build_page(settings)
    app.state.page = page
    page.mount()

    yield

    # Shutdown
    logger.info("Shutting down application...")
    await page.unmount()
    app.state.page = None


# Create FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    description="""
    A single-page product catalog backed by a key-value storage slot:

    - **Catalog**: List, search and sort products
    - **Product Forms**: Validated create/edit dialogs and delete confirmation
    - **Persistence**: The full catalog is saved to storage after every change
    - **Ability Feed**: Read-only data fetched from PokeAPI

    ## Features

    ### Loading State
    The catalog loads after a short simulated delay. Until then the view
    reports `loading` rather than an empty catalog.

    ### Debounced Search
    The search input is echoed immediately; filtering applies once the input
    has been idle for a short interval.

    ### Reset
    Resetting restores the fixed seed products and clears stored data.
    """,
    version=settings.APP_VERSION,
    license_info={
        "name": "MIT",
        "url": "https://opensource.org/licenses/MIT"
    },
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routers
app.include_router(health.router, prefix="/api/v1")
app.include_router(catalog.router, prefix="/api/v1")
app.include_router(products.router, prefix="/api/v1")
app.include_router(abilities.router, prefix="/api/v1")


@app.get("/", tags=["Root"])
def root():
    """Root endpoint with API information."""
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": "/docs",
        "redoc": "/redoc",
        "health": "/api/v1/health"
    }

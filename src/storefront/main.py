import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storefront import __version__
from storefront.api.v1 import products
from storefront.core.config import settings
from storefront.core.errors import AppError, register_exception_handlers
from storefront.core.logging import configure_logging
from storefront.middleware.metrics import PrometheusMiddleware, metrics_endpoint
from storefront.services.catalog_store import get_catalog_store

configure_logging(level=logging.DEBUG if settings.DEBUG else logging.INFO)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown events."""
    logger.info("Starting application...")

    # Warm the catalog cache; a bad source is reported per request, not fatal here
    store = get_catalog_store()
    try:
        store.load()
    except AppError as e:
        logger.warning(f"Failed to pre-load catalog from {store.path}: {e.message}")

    yield

    logger.info("Shutting down application")


app = FastAPI(
    title=settings.APP_NAME,
    version=__version__,
    description="Read-only product catalog for the marketplace storefront",
    lifespan=lifespan,
)

# Prometheus Metrics Middleware (must be first to capture all requests)
app.add_middleware(PrometheusMiddleware)

# CORS Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include API routers
app.include_router(products.router, prefix=f"{settings.API_PREFIX}/products", tags=["products"])


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


# Prometheus metrics endpoint
app.add_route("/metrics", metrics_endpoint)

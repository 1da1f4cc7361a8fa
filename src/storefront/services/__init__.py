"""Business logic services."""

from storefront.services.catalog_store import (
    CatalogPage,
    CatalogSnapshot,
    CatalogStore,
    get_catalog_store,
)

__all__ = [
    "CatalogStore",
    "CatalogSnapshot",
    "CatalogPage",
    "get_catalog_store",
]

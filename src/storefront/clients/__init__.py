"""HTTP clients for the catalog API."""

from storefront.clients.catalog_client import ApiClientError, CatalogClient

__all__ = ["CatalogClient", "ApiClientError"]

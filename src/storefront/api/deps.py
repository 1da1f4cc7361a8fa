"""API dependencies for catalog access."""

from typing import Annotated

from fastapi import Depends

from storefront.services.catalog_store import CatalogStore, get_catalog_store

# Type alias for cleaner dependency injection
CatalogStoreDep = Annotated[CatalogStore, Depends(get_catalog_store)]

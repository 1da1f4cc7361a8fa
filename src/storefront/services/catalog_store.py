"""File-backed product catalog with modification-time caching."""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from storefront.core.config import settings
from storefront.core.errors import DataSourceError, UnsupportedOperationError
from storefront.middleware.metrics import record_catalog_load_failure, record_catalog_reload

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 12
MIN_LIMIT = 1
MAX_LIMIT = 100


@dataclass(frozen=True)
class CatalogSnapshot:
    """Products as read from one version of the source file."""

    products: tuple[dict[str, Any], ...]
    source_version: int  # st_mtime_ns of the file when read


@dataclass(frozen=True)
class CatalogPage:
    items: list[dict[str, Any]]
    page: int
    total: int


def _matches(product: Any, needle: str) -> bool:
    if not isinstance(product, dict):
        return False
    for key in ("title", "description"):
        value = product.get(key)
        if isinstance(value, str) and needle in value.lower():
            return True
    return False


class CatalogStore:
    """Read-only product collection served from a JSON array file.

    The whole collection is cached as one ``CatalogSnapshot``. A reload
    builds a new snapshot and swaps the reference, so readers see either
    the old or the new collection, never a mix.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)
        self._snapshot: Optional[CatalogSnapshot] = None

    @property
    def snapshot(self) -> Optional[CatalogSnapshot]:
        return self._snapshot

    def invalidate(self) -> None:
        """Drop the cached snapshot; the next access re-reads the file."""
        self._snapshot = None

    def _source_version(self) -> int:
        try:
            return os.stat(self.path).st_mtime_ns
        except OSError as e:
            record_catalog_load_failure()
            logger.error(f"Catalog source {self.path} is not accessible: {e}")
            raise DataSourceError(f"Catalog source is not accessible: {self.path}") from e

    def _read(self, version: int) -> CatalogSnapshot:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            record_catalog_load_failure()
            logger.error(f"Failed to read catalog source {self.path}: {e}")
            raise DataSourceError(f"Failed to read catalog source: {self.path}") from e

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            record_catalog_load_failure()
            logger.error(f"Catalog source {self.path} is not valid JSON: {e}")
            raise DataSourceError(f"Catalog source is not valid JSON: {e.msg}") from e

        if not isinstance(data, list):
            record_catalog_load_failure()
            logger.error(f"Catalog source {self.path} is not a JSON array")
            raise DataSourceError("Catalog source must contain a JSON array")

        return CatalogSnapshot(products=tuple(data), source_version=version)

    def load(self) -> tuple[dict[str, Any], ...]:
        """Return the product collection, re-reading the file if it changed.

        Raises:
            DataSourceError: If the file is missing, unreadable or not a JSON array
        """
        version = self._source_version()
        current = self._snapshot
        if current is not None and version <= current.source_version:
            logger.debug(f"Catalog cache hit (version {current.source_version})")
            return current.products

        snapshot = self._read(version)
        self._snapshot = snapshot
        record_catalog_reload(len(snapshot.products))
        logger.info(f"Loaded {len(snapshot.products)} products from {self.path}")
        return snapshot.products

    def get_by_id(self, product_id: Any) -> Optional[dict[str, Any]]:
        """Get product by ID.

        Args:
            product_id: Exact product ID

        Returns:
            Product record or None if not found
        """
        if not isinstance(product_id, str):
            return None
        for product in self.load():
            if isinstance(product, dict) and product.get("id") == product_id:
                return product
        return None

    def list_products(
        self,
        query: Optional[str] = None,
        page: Optional[int] = DEFAULT_PAGE,
        limit: Optional[int] = DEFAULT_LIMIT,
    ) -> CatalogPage:
        """Search and paginate the collection.

        Out-of-range ``page`` and ``limit`` are clamped rather than rejected.

        Args:
            query: Case-insensitive substring matched against title or description
            page: 1-based page number
            limit: Page size, clamped to [1, 100]

        Returns:
            CatalogPage with the window, the effective page and the filtered total
        """
        page = max(DEFAULT_PAGE, int(page)) if page is not None else DEFAULT_PAGE
        limit = DEFAULT_LIMIT if limit is None else min(MAX_LIMIT, max(MIN_LIMIT, int(limit)))

        products = list(self.load())

        needle = query.strip().lower() if query else ""
        if needle:
            products = [p for p in products if _matches(p, needle)]

        start = (page - 1) * limit
        return CatalogPage(
            items=products[start:start + limit],
            page=page,
            total=len(products),
        )

    # Mutations are refused: the catalog is fixed at deployment.

    def create(self, data: Any = None) -> None:
        raise UnsupportedOperationError("Create operation not supported in read-only mode")

    def update(self, product_id: Any = None, data: Any = None) -> None:
        raise UnsupportedOperationError("Update operation not supported in read-only mode")

    def delete(self, product_id: Any = None) -> None:
        raise UnsupportedOperationError("Delete operation not supported in read-only mode")


catalog_store = CatalogStore(settings.CATALOG_PATH)


def get_catalog_store() -> CatalogStore:
    """Get the process-wide catalog store."""
    return catalog_store

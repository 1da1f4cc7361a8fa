"""Product catalog API endpoints (read-only)."""

import logging
import re
from typing import Optional

from fastapi import APIRouter, Query, status
from fastapi.responses import JSONResponse

from storefront.api.deps import CatalogStoreDep
from storefront.core.config import settings
from storefront.core.errors import (
    AppError,
    ValidationFailure,
    internal_error_response,
    not_found_response,
    not_implemented_response,
)
from storefront.middleware.metrics import record_guardrail_failure
from storefront.schemas.product import ErrorResponse, Product, ProductListResponse
from storefront.schemas.validation import validate_product

logger = logging.getLogger(__name__)

router = APIRouter()

ErrorResponseDoc = {"model": ErrorResponse}

READ_ONLY_RESPONSES = {status.HTTP_501_NOT_IMPLEMENTED: ErrorResponseDoc}

_INTEGER = re.compile(r"^[+-]?\d+$", re.ASCII)


def _read_only(operation: str) -> JSONResponse:
    """Fixed answer for every mutating verb."""
    return not_implemented_response(f"{operation} operation not supported in read-only mode")


def _int_param(
    name: str,
    raw: Optional[str],
    *,
    default: int,
    minimum: int,
    maximum: Optional[int] = None,
) -> int:
    """Parse an integer query parameter; absent or empty means the default."""
    if raw is None or raw == "":
        return default
    if not _INTEGER.match(raw):
        raise ValidationFailure(f"Invalid query parameter: {name}: must be an integer")
    value = int(raw)
    if value < minimum:
        raise ValidationFailure(
            f"Invalid query parameter: {name}: must be greater than or equal to {minimum}"
        )
    if maximum is not None and value > maximum:
        raise ValidationFailure(
            f"Invalid query parameter: {name}: must be less than or equal to {maximum}"
        )
    return value


@router.get(
    "",
    response_model=ProductListResponse,
    responses={
        status.HTTP_400_BAD_REQUEST: ErrorResponseDoc,
        status.HTTP_500_INTERNAL_SERVER_ERROR: ErrorResponseDoc,
    },
)
def list_products(
    store: CatalogStoreDep,
    q: Optional[str] = Query(None, description="Case-insensitive search on title and description"),
    page: Optional[str] = Query(None, description="1-based page number (default 1)"),
    limit: Optional[str] = Query(
        None, description=f"Page size, 1-{settings.MAX_PAGE_SIZE} (default {settings.DEFAULT_PAGE_SIZE})"
    ),
):
    """List products with optional search and pagination.

    Empty ``page``/``limit`` values fall back to the defaults; anything else
    must be an integer in range or the request fails with 400.
    """
    query = q if q and q.strip() else None
    page_number = _int_param("page", page, default=1, minimum=1)
    page_size = _int_param(
        "limit",
        limit,
        default=settings.DEFAULT_PAGE_SIZE,
        minimum=1,
        maximum=settings.MAX_PAGE_SIZE,
    )

    try:
        result = store.list_products(query=query, page=page_number, limit=page_size)
    except AppError as e:
        logger.error(f"Error in GET /products: {e.message}")
        return internal_error_response("Failed to fetch products")
    except Exception as e:
        logger.exception(f"Error in GET /products: {e}")
        return internal_error_response("Failed to fetch products")

    # Guardrail: every item must satisfy the schema before it leaves
    items = []
    for item in result.items:
        validation = validate_product(item)
        if not validation.ok:
            record_guardrail_failure("/products")
            logger.error(
                f"Product validation failed: {[str(v) for v in validation.violations]}"
            )
            return internal_error_response("Product data validation failed")
        items.append(validation.value.to_json())

    return JSONResponse(content={"items": items, "page": result.page, "total": result.total})


@router.post(
    "",
    status_code=status.HTTP_501_NOT_IMPLEMENTED,
    responses=READ_ONLY_RESPONSES,
)
async def create_product():
    """Create a product (not supported in read-only mode)."""
    return _read_only("POST")


@router.get(
    "/{product_id}",
    response_model=Product,
    responses={
        status.HTTP_404_NOT_FOUND: ErrorResponseDoc,
        status.HTTP_500_INTERNAL_SERVER_ERROR: ErrorResponseDoc,
    },
)
def get_product(product_id: str, store: CatalogStoreDep):
    """Get product by ID."""
    try:
        product = store.get_by_id(product_id)
    except AppError as e:
        logger.error(f"Error in GET /products/{product_id}: {e.message}")
        return internal_error_response("Failed to fetch product")
    except Exception as e:
        logger.exception(f"Error in GET /products/{product_id}: {e}")
        return internal_error_response("Failed to fetch product")

    if product is None:
        return not_found_response(f"Product with id '{product_id}' not found")

    validation = validate_product(product)
    if not validation.ok:
        record_guardrail_failure("/products/{id}")
        logger.error(f"Product validation failed: {[str(v) for v in validation.violations]}")
        return internal_error_response("Product data validation failed")

    return JSONResponse(content=validation.value.to_json())


@router.put(
    "/{product_id}",
    status_code=status.HTTP_501_NOT_IMPLEMENTED,
    responses=READ_ONLY_RESPONSES,
)
async def update_product(product_id: str):
    """Update a product (not supported in read-only mode)."""
    return _read_only("PUT")


@router.patch(
    "/{product_id}",
    status_code=status.HTTP_501_NOT_IMPLEMENTED,
    responses=READ_ONLY_RESPONSES,
)
async def patch_product(product_id: str):
    return _read_only("PATCH")


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_501_NOT_IMPLEMENTED,
    responses=READ_ONLY_RESPONSES,
)
async def delete_product(product_id: str):
    """Delete a product (not supported in read-only mode)."""
    return _read_only("DELETE")

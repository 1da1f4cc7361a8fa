"""Pydantic schemas for catalog records and API payloads."""

from storefront.schemas.product import (
    ErrorResponse,
    PaymentMethod,
    Price,
    Product,
    ProductCreate,
    ProductFlags,
    ProductListQuery,
    ProductListResponse,
    ProductUpdate,
    Rating,
    Seller,
)
from storefront.schemas.validation import (
    FieldViolation,
    ValidationResult,
    validate_product,
    validate_products,
)

__all__ = [
    "Product",
    "ProductCreate",
    "ProductUpdate",
    "ProductListQuery",
    "ProductListResponse",
    "Price",
    "Rating",
    "PaymentMethod",
    "Seller",
    "ProductFlags",
    "ErrorResponse",
    "FieldViolation",
    "ValidationResult",
    "validate_product",
    "validate_products",
]

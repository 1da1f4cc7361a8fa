from storefront.core.config import settings
from storefront.core.errors import (
    AppError,
    DataSourceError,
    InternalError,
    NotFoundError,
    UnsupportedOperationError,
    ValidationFailure,
)
from storefront.core.logging import configure_logging

__all__ = [
    "settings",
    "configure_logging",
    "AppError",
    "ValidationFailure",
    "NotFoundError",
    "UnsupportedOperationError",
    "InternalError",
    "DataSourceError",
]

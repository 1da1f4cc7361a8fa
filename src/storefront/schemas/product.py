"""Product schemas for catalog records and API payloads.

JSON field names are camelCase (``paymentMethods``, ``isOfficial``); Python
attributes are snake_case through the alias generator. Dump with
``by_alias=True, exclude_none=True`` to reproduce the stored shape.

Numeric and boolean fields are strict: ``"15"`` is not a stock level and
``1`` is not a flag. Integers are still accepted for float fields.
"""

import re
from typing import Annotated, Literal, Optional

from pydantic import (
    AfterValidator,
    AnyUrl,
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    TypeAdapter,
    field_validator,
)
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

ID_PATTERN = re.compile(r"^[a-z0-9_-]+$")
ID_MIN_LENGTH = 6
ID_MAX_LENGTH = 40
MAX_IMAGES = 10

_url_adapter = TypeAdapter(AnyUrl)


def validate_id(value: str) -> str:
    """Shared ID rule for products and sellers."""
    if len(value) < ID_MIN_LENGTH:
        raise PydanticCustomError("id_too_short", "ID must be at least 6 characters")
    if len(value) > ID_MAX_LENGTH:
        raise PydanticCustomError("id_too_long", "ID must not exceed 40 characters")
    if not ID_PATTERN.match(value):
        raise PydanticCustomError(
            "id_pattern",
            "ID must contain only lowercase letters, numbers, underscores, and hyphens",
        )
    return value


def validate_image_url(value: str) -> str:
    try:
        _url_adapter.validate_python(value)
    except ValueError:
        raise PydanticCustomError("image_url", "Image must be a valid HTTPS URL")
    if not value.startswith("https://"):
        raise PydanticCustomError("image_https", "Image URL must use HTTPS")
    return value


CatalogId = Annotated[str, AfterValidator(validate_id)]
ImageUrl = Annotated[str, AfterValidator(validate_image_url)]


class CatalogModel(BaseModel):
    """Base for catalog value objects: camelCase aliases, frozen."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class Price(CatalogModel):
    amount: float = Field(..., strict=True, allow_inf_nan=False)
    currency: Literal["MXN", "USD"]

    @field_validator("amount")
    @classmethod
    def check_amount(cls, v: float) -> float:
        if v <= 0:
            raise PydanticCustomError("price_positive", "Price amount must be positive")
        if round(v, 2) != v:
            raise PydanticCustomError(
                "price_precision", "Price must have at most 2 decimal places"
            )
        return v


class Rating(CatalogModel):
    average: float = Field(..., strict=True, allow_inf_nan=False)
    count: int = Field(..., ge=0, strict=True)

    @field_validator("average")
    @classmethod
    def check_average(cls, v: float) -> float:
        if v < 0:
            raise PydanticCustomError("rating_min", "Rating average must be at least 0")
        if v > 5:
            raise PydanticCustomError("rating_max", "Rating average must not exceed 5")
        if round(v, 1) != v:
            raise PydanticCustomError("rating_step", "Rating average must be in 0.1 steps")
        return v


class PaymentMethod(CatalogModel):
    label: str = Field(..., min_length=1, max_length=40)
    note: Optional[str] = Field(None, max_length=100)


class Seller(CatalogModel):
    id: CatalogId
    name: str = Field(..., min_length=1)
    rating: float = Field(..., ge=0, le=5, strict=True, allow_inf_nan=False)
    sales: int = Field(..., ge=0, strict=True)
    is_official: StrictBool
    location: Optional[str] = None


class ProductFlags(CatalogModel):
    full: Optional[StrictBool] = None
    free_shipping: Optional[StrictBool] = None


class IdentifiedModel(CatalogModel):
    id: CatalogId


class ProductBase(CatalogModel):
    """Fields shared by stored products and create payloads."""

    title: str = Field(..., min_length=1, max_length=160)
    description: str = Field(..., min_length=1, max_length=5000)
    images: list[ImageUrl]
    price: Price
    payment_methods: list[PaymentMethod]
    seller: Seller
    stock: int = Field(..., ge=0, strict=True)
    rating: Rating
    flags: Optional[ProductFlags] = None

    @field_validator("images")
    @classmethod
    def check_images(cls, v: list[str]) -> list[str]:
        if len(v) < 1:
            raise PydanticCustomError("images_min", "At least one image is required")
        if len(v) > MAX_IMAGES:
            raise PydanticCustomError("images_max", "Maximum 10 images allowed")
        return v

    @field_validator("payment_methods")
    @classmethod
    def check_payment_methods(cls, v: list[PaymentMethod]) -> list[PaymentMethod]:
        if not v:
            raise PydanticCustomError(
                "payment_methods_min", "At least one payment method is required"
            )
        return v

    @property
    def is_available(self) -> bool:
        """Purchase actions are gated on stock; zero means unavailable."""
        return self.stock > 0

    def to_json(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Product(ProductBase, IdentifiedModel):
    """A catalog product as stored and served.

    ``id`` comes first in field order (reverse MRO), matching the stored records.
    """


class ProductCreate(ProductBase):
    """Body of a create request (refused in read-only mode)."""


class ProductUpdate(CatalogModel):
    """Partial body of an update request (refused in read-only mode)."""

    title: Optional[str] = Field(None, min_length=1, max_length=160)
    description: Optional[str] = Field(None, min_length=1, max_length=5000)
    images: Optional[list[ImageUrl]] = None
    price: Optional[Price] = None
    payment_methods: Optional[list[PaymentMethod]] = None
    seller: Optional[Seller] = None
    stock: Optional[int] = Field(None, ge=0, strict=True)
    rating: Optional[Rating] = None
    flags: Optional[ProductFlags] = None


class ProductListQuery(BaseModel):
    """Query parameters accepted by the product listing."""

    q: Optional[str] = None
    page: int = Field(1, ge=1)
    limit: int = Field(12, ge=1, le=100)


class ProductListResponse(CatalogModel):
    """Schema for product list response."""

    items: list[Product]
    page: int = Field(..., strict=True)
    total: int = Field(..., strict=True)

    def to_json(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ErrorDetail(BaseModel):
    code: str
    message: str


class ErrorResponse(BaseModel):
    error: ErrorDetail

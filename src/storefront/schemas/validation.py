"""Total validation of untyped catalog data.

``validate_product`` never raises: every failure comes back as a
``ValidationResult`` carrying field-level violations, so callers can decide
whether bad data is the caller's fault (400) or the data source's (500).
"""

from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from pydantic import ValidationError

from storefront.schemas.product import Product

ROOT_PATH = "<root>"


@dataclass(frozen=True)
class FieldViolation:
    field_path: str
    message: str

    def __str__(self) -> str:
        return f"{self.field_path}: {self.message}"


@dataclass(frozen=True)
class ValidationResult:
    """Either a normalized product or a non-empty list of violations."""

    value: Optional[Product] = None
    violations: tuple[FieldViolation, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return self.value is not None

    @property
    def messages(self) -> list[str]:
        return [v.message for v in self.violations]

    def messages_for(self, field_path: str) -> list[str]:
        return [v.message for v in self.violations if v.field_path == field_path]


def _format_path(loc: tuple) -> str:
    return ".".join(str(part) for part in loc) or ROOT_PATH


def violations_from_error(exc: ValidationError) -> tuple[FieldViolation, ...]:
    """Flatten a pydantic ValidationError into ordered field violations."""
    return tuple(
        FieldViolation(field_path=_format_path(err["loc"]), message=err["msg"])
        for err in exc.errors(include_url=False)
    )


def validate_product(data: Any) -> ValidationResult:
    """Validate arbitrary data against the Product schema."""
    try:
        product = Product.model_validate(data)
    except ValidationError as e:
        violations = violations_from_error(e)
        if not violations:
            violations = (FieldViolation(ROOT_PATH, "Invalid product"),)
        return ValidationResult(violations=violations)
    except (TypeError, ValueError, RecursionError) as e:
        return ValidationResult(violations=(FieldViolation(ROOT_PATH, str(e) or "Invalid product"),))
    return ValidationResult(value=product)


def validate_products(items: Iterable[Any]) -> tuple[list[Product], Optional[tuple[int, ValidationResult]]]:
    """Validate a sequence of records, stopping at the first bad one.

    Returns:
        Tuple of (normalized products, (index, failed result) or None)
    """
    products: list[Product] = []
    for index, item in enumerate(items):
        result = validate_product(item)
        if not result.ok:
            return products, (index, result)
        products.append(result.value)
    return products, None

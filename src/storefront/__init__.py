"""Read-only product catalog API for the marketplace storefront."""

__version__ = "1.0.0"

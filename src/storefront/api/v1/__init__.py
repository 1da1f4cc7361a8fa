"""API v1 routers."""

from storefront.api.v1 import products

__all__ = ["products"]

"""
Catalog API HTTP client.

Used by scripts and the storefront rendering layer to read products from a
running catalog API. Error responses are surfaced as ``ApiClientError`` with
the envelope's code and message.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from storefront.core.config import settings
from storefront.schemas.product import Product, ProductCreate, ProductListResponse, ProductUpdate

logger = logging.getLogger(__name__)


class ApiClientError(Exception):
    def __init__(self, status_code: int, code: Optional[str], message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.message = message


class CatalogClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self.timeout_seconds = timeout_seconds or settings.API_TIMEOUT_SECONDS
        self._client = client

    async def _request(self, method: str, endpoint: str, **kwargs: Any) -> Any:
        url = f"{self.base_url}{endpoint}"
        headers: Dict[str, str] = {"Content-Type": "application/json"}

        if self._client is not None:
            response = await self._client.request(method, url, headers=headers, **kwargs)
        else:
            async with httpx.AsyncClient(timeout=self.timeout_seconds) as client:
                response = await client.request(method, url, headers=headers, **kwargs)

        if response.is_error:
            raise self._error_from(response)
        return response.json() if response.content else None

    @staticmethod
    def _error_from(response: httpx.Response) -> ApiClientError:
        code = None
        message = f"API Error: {response.status_code} {response.reason_phrase}".rstrip()
        try:
            payload = response.json()
        except ValueError:
            payload = None
        if isinstance(payload, dict) and isinstance(payload.get("error"), dict):
            code = payload["error"].get("code")
            message = payload["error"].get("message") or message
        logger.debug(f"Catalog API returned {response.status_code} ({code}): {message}")
        return ApiClientError(response.status_code, code, message)

    async def get_products(
        self,
        q: Optional[str] = None,
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> ProductListResponse:
        params = {k: v for k, v in {"q": q, "page": page, "limit": limit}.items() if v is not None}
        data = await self._request("GET", "/api/products", params=params)
        return ProductListResponse.model_validate(data)

    async def get_product(self, product_id: str) -> Product:
        data = await self._request("GET", f"/api/products/{quote(product_id, safe='')}")
        return Product.model_validate(data)

    async def create_product(self, product: ProductCreate) -> Product:
        data = await self._request(
            "POST",
            "/api/products",
            json=product.model_dump(mode="json", by_alias=True, exclude_none=True),
        )
        return Product.model_validate(data)

    async def update_product(self, product_id: str, product: ProductUpdate) -> Product:
        data = await self._request(
            "PUT",
            f"/api/products/{quote(product_id, safe='')}",
            json=product.model_dump(mode="json", by_alias=True, exclude_none=True),
        )
        return Product.model_validate(data)

    async def delete_product(self, product_id: str) -> None:
        await self._request("DELETE", f"/api/products/{quote(product_id, safe='')}")

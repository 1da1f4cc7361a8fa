"""Tests for the catalog HTTP client using httpx.MockTransport."""

import json

import httpx
import pytest

from storefront.clients.catalog_client import ApiClientError, CatalogClient
from storefront.schemas.product import ProductCreate, ProductUpdate


def _client(handler) -> CatalogClient:
    transport = httpx.MockTransport(handler)
    return CatalogClient(
        base_url="http://catalog.test",
        client=httpx.AsyncClient(transport=transport),
    )


class TestReads:
    """Test successful read calls."""

    @pytest.mark.asyncio
    async def test_get_products(self, product):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = request.url
            return httpx.Response(200, json={"items": [product], "page": 2, "total": 7})

        result = await _client(handler).get_products(q="laptop", page=2)

        assert seen["url"].path == "/api/products"
        assert dict(seen["url"].params) == {"q": "laptop", "page": "2"}
        assert result.page == 2
        assert result.total == 7
        assert result.items[0].id == "premium-laptop-mx2024"

    @pytest.mark.asyncio
    async def test_get_product(self, product):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/api/products/premium-laptop-mx2024"
            return httpx.Response(200, json=product)

        result = await _client(handler).get_product("premium-laptop-mx2024")

        assert result.price.amount == 89999.99
        assert result.to_json() == product


class TestErrors:
    """Test error envelopes become ApiClientError."""

    @pytest.mark.asyncio
    async def test_not_found(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                404,
                json={"error": {"code": "NOT_FOUND", "message": "Product with id 'x' not found"}},
            )

        with pytest.raises(ApiClientError) as exc_info:
            await _client(handler).get_product("x")

        assert exc_info.value.status_code == 404
        assert exc_info.value.code == "NOT_FOUND"
        assert "'x'" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_non_envelope_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(502, text="bad gateway")

        with pytest.raises(ApiClientError) as exc_info:
            await _client(handler).get_products()

        assert exc_info.value.status_code == 502
        assert exc_info.value.code is None
        assert exc_info.value.message.startswith("API Error: 502")


class TestMutations:
    """Test mutating calls surface the server's read-only answer."""

    @staticmethod
    def _read_only(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            501,
            json={
                "error": {
                    "code": "NOT_IMPLEMENTED",
                    "message": f"{request.method} operation not supported in read-only mode",
                }
            },
        )

    @pytest.mark.asyncio
    async def test_create_sends_camel_case_body(self, product):
        sent = {}

        def handler(request: httpx.Request) -> httpx.Response:
            sent.update(json.loads(request.content))
            return self._read_only(request)

        data = dict(product)
        del data["id"]

        with pytest.raises(ApiClientError) as exc_info:
            await _client(handler).create_product(ProductCreate.model_validate(data))

        assert exc_info.value.code == "NOT_IMPLEMENTED"
        assert "paymentMethods" in sent
        assert "id" not in sent

    @pytest.mark.asyncio
    async def test_update(self):
        with pytest.raises(ApiClientError) as exc_info:
            await _client(self._read_only).update_product(
                "premium-laptop-mx2024", ProductUpdate(title="Updated Product")
            )

        assert exc_info.value.status_code == 501
        assert exc_info.value.message == "PUT operation not supported in read-only mode"

    @pytest.mark.asyncio
    async def test_delete(self):
        with pytest.raises(ApiClientError) as exc_info:
            await _client(self._read_only).delete_product("premium-laptop-mx2024")

        assert exc_info.value.message == "DELETE operation not supported in read-only mode"

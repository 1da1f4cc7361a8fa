"""Pytest configuration and fixtures for testing."""

import copy
import json
import os
from pathlib import Path
from typing import Callable, Generator

import pytest
from fastapi.testclient import TestClient

from storefront.main import app
from storefront.services.catalog_store import CatalogStore, get_catalog_store

BASE_PRODUCT = {
    "id": "premium-laptop-mx2024",
    "title": 'MacBook Pro 16" M3 Max - Premium Edition',
    "description": "Experience ultimate performance with the latest MacBook Pro featuring M3 Max chip.",
    "images": ["https://example.com/images/macbook-pro-16-m3-max-front.jpg"],
    "price": {"amount": 89999.99, "currency": "MXN"},
    "paymentMethods": [
        {"label": "Tarjeta de Crédito", "note": "12 meses sin intereses disponibles"},
    ],
    "seller": {
        "id": "apple-store-mx",
        "name": "Apple Store México",
        "rating": 4.8,
        "sales": 15420,
        "isOfficial": True,
        "location": "Ciudad de México",
    },
    "stock": 15,
    "rating": {"average": 4.7, "count": 2847},
}


def build_product(**overrides) -> dict:
    """Return a valid product record with top-level fields overridden."""
    product = copy.deepcopy(BASE_PRODUCT)
    product.update(overrides)
    return product


def write_catalog(path: Path, products) -> None:
    """Write a catalog file and move its mtime strictly forward."""
    previous = path.stat().st_mtime_ns if path.exists() else None
    path.write_text(json.dumps(products), encoding="utf-8")
    if previous is not None:
        bumped = max(path.stat().st_mtime_ns, previous + 1_000_000_000)
        os.utime(path, ns=(bumped, bumped))


# Sample product records
@pytest.fixture
def product() -> dict:
    """Create a single valid product record."""
    return build_product()


@pytest.fixture
def make_product() -> Callable[..., dict]:
    """Factory for valid product records with overrides."""
    return build_product


@pytest.fixture
def sample_products() -> list[dict]:
    """Create a small mixed catalog in a fixed order."""
    return [
        build_product(),
        build_product(
            id="galaxy-s24-ultra-256",
            title="Samsung Galaxy S24 Ultra",
            description="Flagship phone with great camera performance.",
            price={"amount": 24999, "currency": "MXN"},
            flags={"full": True, "freeShipping": True},
        ),
        build_product(
            id="sony-wh1000xm5-black",
            title="Sony WH-1000XM5 Headphones",
            description="Noise cancelling headphones.",
            price={"amount": 349.99, "currency": "USD"},
            paymentMethods=[{"label": "Credit Card"}, {"label": "PayPal"}],
            stock=0,
        ),
        build_product(
            id="ipad-air-m2-11",
            title="iPad Air 11 M2",
            description="Great companion for a MacBook.",
            price={"amount": 14999.5, "currency": "MXN"},
        ),
        build_product(
            id="mechanical-keyboard-k8",
            title="Keychron K8 Keyboard",
            description="Wireless mechanical keyboard.",
            price={"amount": 89.0, "currency": "USD"},
            rating={"average": 2.9, "count": 58},
        ),
    ]


# Catalog file and store fixtures
@pytest.fixture
def catalog_file(tmp_path: Path, sample_products: list[dict]) -> Path:
    """Write the sample catalog to a temporary JSON file."""
    path = tmp_path / "products.json"
    write_catalog(path, sample_products)
    return path


@pytest.fixture
def store(catalog_file: Path) -> CatalogStore:
    """Create a catalog store over the temporary file."""
    return CatalogStore(catalog_file)


# API client fixture
@pytest.fixture
def client(store: CatalogStore) -> Generator[TestClient, None, None]:
    """Create a test client whose catalog dependency points at the temp store."""
    app.dependency_overrides[get_catalog_store] = lambda: store
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


@pytest.fixture
def catalog_writer() -> Callable[[Path, list], None]:
    """Writer that replaces a catalog file and advances its mtime."""
    return write_catalog

"""Shared fixtures for specification tests."""

from __future__ import annotations

import pytest

from catalog_specifications import Product


@pytest.fixture
def iphone() -> Product:
    return Product(
        id="p1",
        name="iPhone 15 Pro",
        price=1199,
        category="electronics",
        stock=50,
        tags=("Apple", "smartphone"),
    )


@pytest.fixture
def galaxy() -> Product:
    return Product(
        id="p2",
        name="Samsung Galaxy S24",
        price=899,
        category="electronics",
        stock=30,
        tags=("samsung", "smartphone"),
    )


@pytest.fixture
def desk() -> Product:
    return Product(
        id="p3",
        name="Standing Desk",
        price=250,
        category="furniture",
        stock=0,
        tags=("office",),
    )


@pytest.fixture
def macbook() -> Product:
    return Product(
        id="p4",
        name="MacBook Pro",
        price=2499,
        category="Electronics",
        stock=5,
        tags=("apple", "laptop"),
    )


@pytest.fixture
def lamp() -> Product:
    return Product(
        id="p5",
        name="Desk Lamp",
        price=350,
        category="furniture",
        stock=12,
        tags=("office", "lighting"),
    )


@pytest.fixture
def catalog(iphone, galaxy, desk, macbook, lamp) -> list[Product]:
    return [iphone, galaxy, desk, macbook, lamp]

"""Shared test helpers."""

import asyncio

import pytest

from storefront.catalog.query import (
    query_by_category,
    query_catalog,
    related_products,
    search_suggestions,
)
from storefront.catalog.reviews import review_stats
from storefront.errors import TransientFetchError
from storefront.mock_data import load_menu
from storefront.models import PageRequest, Product
from storefront.providers.base import CatalogProvider


def make_product(product_id: int, **overrides) -> Product:
    """Build a product with sensible defaults."""
    data = dict(
        product_id=product_id,
        product_name=f"Product {product_id}",
        product_description=f"Description {product_id}",
        product_code=f"P{product_id}",
        price=10.0,
        category=1,
        rating=3,
    )
    data.update(overrides)
    return Product(**data)


@pytest.fixture
def catalog_25():
    """25 plain products, IDs 1..25, in insertion order."""
    return [make_product(i, price=float(i)) for i in range(1, 26)]


class GatedCatalog(CatalogProvider):
    """
    Catalog whose calls can be held open and released in any order.

    With ``hold`` set, every fetch parks on its own event in ``gates``
    until the test sets it.
    """

    def __init__(self, products):
        self.products = list(products)
        self.hold = False
        self.fail = False
        self.gates: list[asyncio.Event] = []
        self.calls: list[tuple] = []

    async def _gate(self, call: tuple) -> None:
        gate = asyncio.Event()
        if not self.hold:
            gate.set()
        self.gates.append(gate)
        self.calls.append(call)
        await gate.wait()
        if self.fail:
            raise TransientFetchError("catalog unavailable")

    async def fetch_page(self, filters, page, limit):
        await self._gate(("page", page))
        return query_catalog(self.products, filters, PageRequest(page=page, limit=limit))

    async def fetch_by_category(self, category_id, filters, page, limit):
        await self._gate(("category", category_id, page))
        return query_by_category(
            self.products, category_id, filters, PageRequest(page=page, limit=limit)
        )

    async def get_product(self, product_id):
        for product in self.products:
            if product.product_id == product_id:
                return product
        return None

    async def get_menu(self):
        return load_menu()

    async def search_suggestions(self, text, limit=8):
        return search_suggestions(self.products, text, limit)

    async def related_products(self, product_id, category_id=None, limit=12):
        return related_products(self.products, product_id, category_id, limit)

    async def get_reviews(self, product_id):
        return []

    async def get_review_stats(self, product_id):
        return review_stats([])


async def settle(rounds: int = 5) -> None:
    """Let started tasks run up to their next suspension point."""
    for _ in range(rounds):
        await asyncio.sleep(0)


@pytest.fixture
def gated_catalog():
    """30 products over categories 1-3, nothing held by default."""
    return GatedCatalog(
        make_product(i, price=float(i), category=(i % 3) + 1) for i in range(1, 31)
    )

"""In-memory catalog and cart adapters.

They simulate the storefront backend: optional latency and a configurable
random failure rate. Each instance owns its own storage.
"""

import asyncio
import logging
import random
from typing import Optional, Sequence

from ..catalog.query import (
    find_product,
    query_by_category,
    query_catalog,
    related_products,
    search_suggestions,
)
from ..catalog.reviews import review_stats, reviews_for_product
from ..errors import TransientFetchError
from ..mock_data import load_menu, load_products, load_reviews
from ..models import (
    ApiResponse,
    CartItem,
    FilterState,
    MenuItem,
    PageRequest,
    PageResult,
    Product,
    ProductReview,
    ReviewStats,
)
from .base import CartApi, CatalogProvider

logger = logging.getLogger(__name__)


class _Simulated:
    """Latency and failure simulation shared by the in-memory adapters."""

    def __init__(self, latency: float = 0.0, failure_rate: float = 0.0, seed: Optional[int] = None):
        self.latency = latency
        self.failure_rate = failure_rate
        self._random = random.Random(seed)

    async def _delay(self) -> None:
        if self.latency > 0:
            await asyncio.sleep(self.latency)
        else:
            # Still yield so callers see a real suspension point.
            await asyncio.sleep(0)

    def _should_fail(self) -> bool:
        return self.failure_rate > 0 and self._random.random() < self.failure_rate


class InMemoryCatalog(_Simulated, CatalogProvider):
    """Catalog provider over a fixed product list."""

    def __init__(
        self,
        products: Optional[Sequence[Product]] = None,
        menu: Optional[Sequence[MenuItem]] = None,
        latency: float = 0.0,
        failure_rate: float = 0.0,
        seed: Optional[int] = None,
        reviews: Optional[Sequence[ProductReview]] = None,
    ):
        super().__init__(latency, failure_rate, seed)
        self._products = tuple(products if products is not None else load_products())
        self._menu = tuple(menu if menu is not None else load_menu())
        self._reviews = tuple(reviews if reviews is not None else load_reviews())

    @property
    def products(self) -> tuple[Product, ...]:
        return self._products

    async def _simulate(self, operation: str) -> None:
        await self._delay()
        if self._should_fail():
            logger.warning("Simulated catalog failure in %s", operation)
            raise TransientFetchError(f"Failed to {operation}")

    async def fetch_page(self, filters: FilterState, page: int, limit: int) -> PageResult:
        await self._simulate("fetch products")
        return query_catalog(self._products, filters, PageRequest(page=page, limit=limit))

    async def fetch_by_category(
        self, category_id: int, filters: FilterState, page: int, limit: int
    ) -> PageResult:
        await self._simulate("fetch products by category")
        return query_by_category(
            self._products, category_id, filters, PageRequest(page=page, limit=limit)
        )

    async def get_product(self, product_id: int) -> Optional[Product]:
        await self._simulate("fetch product")
        product = find_product(self._products, product_id)
        return product.model_copy(deep=True) if product else None

    async def get_menu(self) -> list[MenuItem]:
        await self._simulate("fetch menu")
        return list(self._menu)

    async def search_suggestions(self, text: str, limit: int = 8) -> list[Product]:
        await self._simulate("search products")
        return search_suggestions(self._products, text, limit)

    async def related_products(
        self, product_id: int, category_id: Optional[int] = None, limit: int = 12
    ) -> list[Product]:
        await self._simulate("fetch related products")
        return related_products(self._products, product_id, category_id, limit)

    async def get_reviews(self, product_id: int) -> list[ProductReview]:
        await self._simulate("fetch reviews")
        return reviews_for_product(self._reviews, product_id)

    async def get_review_stats(self, product_id: int) -> ReviewStats:
        await self._simulate("fetch review stats")
        return review_stats(reviews_for_product(self._reviews, product_id))


class InMemoryCartApi(_Simulated, CartApi):
    """Cart API backed by a per-instance list."""

    def __init__(self, latency: float = 0.0, failure_rate: float = 0.0, seed: Optional[int] = None):
        super().__init__(latency, failure_rate, seed)
        self._items: list[CartItem] = []

    def _index_of(self, product_id: int) -> int:
        for i, item in enumerate(self._items):
            if item.product.product_id == product_id:
                return i
        return -1

    async def get_cart(self) -> ApiResponse[list[CartItem]]:
        await self._delay()
        if self._should_fail():
            return ApiResponse[list[CartItem]](
                success=False, data=[], message="Failed to fetch cart from server"
            )
        # Copies so callers cannot mutate server-side storage.
        return ApiResponse[list[CartItem]](
            success=True, data=[item.model_copy(deep=True) for item in self._items]
        )

    async def add_product_to_cart(self, product: Product, quantity: int) -> ApiResponse[CartItem]:
        await self._delay()
        if self._should_fail():
            return ApiResponse[CartItem](success=False, message="Failed to add item to cart")
        if quantity <= 0:
            return ApiResponse[CartItem](success=False, message="Quantity must be positive")

        index = self._index_of(product.product_id)
        if index >= 0:
            existing = self._items[index]
            item = existing.model_copy(update={"quantity": existing.quantity + quantity})
            self._items[index] = item
        else:
            item = CartItem(product=product.model_copy(deep=True), quantity=quantity)
            self._items.append(item)

        return ApiResponse[CartItem](success=True, data=item.model_copy(deep=True))

    async def update_cart_item(self, product_id: int, quantity: int) -> ApiResponse[CartItem]:
        await self._delay()
        if self._should_fail():
            return ApiResponse[CartItem](success=False, message="Failed to update cart item")

        index = self._index_of(product_id)
        if index == -1:
            return ApiResponse[CartItem](success=False, message="Item not found in cart")

        item = self._items[index].model_copy(update={"quantity": quantity})
        self._items[index] = item
        return ApiResponse[CartItem](success=True, data=item.model_copy(deep=True))

    async def remove_from_cart(self, product_id: int) -> ApiResponse[None]:
        await self._delay()
        if self._should_fail():
            return ApiResponse[None](success=False, message="Failed to remove item from cart")

        remaining = [item for item in self._items if item.product.product_id != product_id]
        if len(remaining) == len(self._items):
            return ApiResponse[None](success=False, message="Item not found in cart")

        self._items = remaining
        return ApiResponse[None](success=True)

    async def clear_cart(self) -> ApiResponse[None]:
        await self._delay()
        if self._should_fail():
            return ApiResponse[None](success=False, message="Failed to clear cart")

        self._items = []
        return ApiResponse[None](success=True)

    @property
    def size(self) -> int:
        """Number of distinct lines stored."""
        return len(self._items)

    def reset(self) -> None:
        self._items = []

"""Abstract catalog and cart provider interfaces."""

from abc import ABC, abstractmethod
from typing import Optional

from ..models import (
    ApiResponse,
    CartItem,
    FilterState,
    MenuItem,
    PageResult,
    Product,
    ProductReview,
    ReviewStats,
)


class CatalogProvider(ABC):
    """Source of catalog pages. Calls with identical arguments are idempotent."""

    @abstractmethod
    async def fetch_page(self, filters: FilterState, page: int, limit: int) -> PageResult:
        """Fetch one page of products matching the filters."""
        pass

    @abstractmethod
    async def fetch_by_category(
        self, category_id: int, filters: FilterState, page: int, limit: int
    ) -> PageResult:
        """Fetch one page of a single category, ignoring the filter's category set."""
        pass

    @abstractmethod
    async def get_product(self, product_id: int) -> Optional[Product]:
        """Get a product by ID, or None when it does not exist."""
        pass

    @abstractmethod
    async def get_menu(self) -> list[MenuItem]:
        """Get the navigation menu."""
        pass

    @abstractmethod
    async def search_suggestions(self, text: str, limit: int = 8) -> list[Product]:
        """Type-ahead search."""
        pass

    @abstractmethod
    async def related_products(
        self, product_id: int, category_id: Optional[int] = None, limit: int = 12
    ) -> list[Product]:
        """Other in-stock products, same category first."""
        pass

    @abstractmethod
    async def get_reviews(self, product_id: int) -> list[ProductReview]:
        pass

    @abstractmethod
    async def get_review_stats(self, product_id: int) -> ReviewStats:
        """Review totals, average and per-star distribution."""
        pass


class CartApi(ABC):
    """Cart persistence boundary.

    Every call answers with an envelope; ``success=False`` is a reportable,
    non-fatal failure.
    """

    @abstractmethod
    async def get_cart(self) -> ApiResponse[list[CartItem]]:
        pass

    @abstractmethod
    async def add_product_to_cart(self, product: Product, quantity: int) -> ApiResponse[CartItem]:
        pass

    @abstractmethod
    async def remove_from_cart(self, product_id: int) -> ApiResponse[None]:
        pass

    @abstractmethod
    async def update_cart_item(self, product_id: int, quantity: int) -> ApiResponse[CartItem]:
        pass

    @abstractmethod
    async def clear_cart(self) -> ApiResponse[None]:
        pass

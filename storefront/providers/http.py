"""Catalog and cart adapters over the storefront REST API."""

from typing import Optional

from ..catalog.codec import to_params
from ..client import ApiClient
from ..errors import NotFoundError
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
from .base import CartApi, CatalogProvider


class _ClientOwner:
    """Shares an ApiClient or owns one for the length of an ``async with``."""

    def __init__(self, client: Optional[ApiClient] = None):
        self._client = client
        self._own_client = client is None

    async def __aenter__(self):
        if self._own_client:
            self._client = ApiClient()
            await self._client.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self._own_client and self._client:
            await self._client.close()

    @property
    def client(self) -> ApiClient:
        if not self._client:
            raise RuntimeError("Provider not initialized. Use 'async with' context manager.")
        return self._client


class HttpCatalogProvider(_ClientOwner, CatalogProvider):
    """Catalog provider backed by ``/products`` and ``/menu`` endpoints."""

    @staticmethod
    def _page_params(filters: FilterState, page: int, limit: int) -> dict:
        params = to_params(filters)
        params["page"] = page
        params["limit"] = limit
        return params

    async def fetch_page(self, filters: FilterState, page: int, limit: int) -> PageResult:
        data = await self.client.get("/products", params=self._page_params(filters, page, limit))
        return PageResult.model_validate(data)

    async def fetch_by_category(
        self, category_id: int, filters: FilterState, page: int, limit: int
    ) -> PageResult:
        try:
            data = await self.client.get(
                f"/products/category/{category_id}",
                params=self._page_params(filters, page, limit),
            )
        except NotFoundError:
            return PageResult(page=page)
        return PageResult.model_validate(data)

    async def get_product(self, product_id: int) -> Optional[Product]:
        try:
            data = await self.client.get(f"/products/{product_id}")
        except NotFoundError:
            return None
        return Product.model_validate(data)

    async def get_menu(self) -> list[MenuItem]:
        data = await self.client.get("/menu/master")
        return [MenuItem.model_validate(item) for item in data.get("menuMaster", [])]

    async def search_suggestions(self, text: str, limit: int = 8) -> list[Product]:
        if not text.strip():
            return []
        data = await self.client.get("/products/search", params={"q": text, "limit": limit})
        return [Product.model_validate(item) for item in data]

    async def related_products(
        self, product_id: int, category_id: Optional[int] = None, limit: int = 12
    ) -> list[Product]:
        params = {"limit": limit}
        if category_id is not None:
            params["categoryId"] = category_id
        try:
            data = await self.client.get(f"/products/{product_id}/related", params=params)
        except NotFoundError:
            return []
        return [Product.model_validate(item) for item in data]

    async def get_reviews(self, product_id: int) -> list[ProductReview]:
        try:
            data = await self.client.get(f"/products/{product_id}/reviews")
        except NotFoundError:
            return []
        return [ProductReview.model_validate(item) for item in data]

    async def get_review_stats(self, product_id: int) -> ReviewStats:
        try:
            data = await self.client.get(f"/products/{product_id}/reviews/stats")
        except NotFoundError:
            return ReviewStats()
        return ReviewStats.model_validate(data)


class HttpCartApi(_ClientOwner, CartApi):
    """Cart API backed by ``/cart`` endpoints."""

    async def get_cart(self) -> ApiResponse[list[CartItem]]:
        data = await self.client.get("/cart")
        return ApiResponse[list[CartItem]].model_validate(data)

    async def add_product_to_cart(self, product: Product, quantity: int) -> ApiResponse[CartItem]:
        data = await self.client.post("/cart/add", json={
            "product": product.model_dump(mode="json", by_alias=True),
            "quantity": quantity,
        })
        return ApiResponse[CartItem].model_validate(data)

    async def update_cart_item(self, product_id: int, quantity: int) -> ApiResponse[CartItem]:
        data = await self.client.post("/cart/update", json={
            "productId": product_id,
            "quantity": quantity,
        })
        return ApiResponse[CartItem].model_validate(data)

    async def remove_from_cart(self, product_id: int) -> ApiResponse[None]:
        data = await self.client.post("/cart/remove", json={"productId": product_id})
        return ApiResponse[None].model_validate(data)

    async def clear_cart(self) -> ApiResponse[None]:
        data = await self.client.post("/cart/clear")
        return ApiResponse[None].model_validate(data)

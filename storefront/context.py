"""Storefront orchestration: provider calls in, store actions out."""

import asyncio
import logging
import math
from typing import Awaitable, Optional, TypeVar

from .catalog.accumulator import PaginationAccumulator
from .models import (
    ApiResponse,
    FilterState,
    LoadingState,
    MenuItem,
    PageResult,
    PriceRange,
    Product,
    User,
)
from .providers.base import CartApi, CatalogProvider
from .store import (
    AddToCart,
    AppendProducts,
    AppState,
    ClearCart,
    RemoveFromCart,
    SetCart,
    SetCurrentCategory,
    SetLoading,
    SetMenuItems,
    SetPagination,
    SetProducts,
    SetUser,
    Store,
    UpdateCartQuantity,
)

logger = logging.getLogger(__name__)

R = TypeVar("R")

# Context fetches cover the whole catalog; the 0..1000 price default belongs to listings.
UNFILTERED = FilterState(price_range=PriceRange(max=math.inf))


class StorefrontContext:
    """
    Owns the store and is the only place that performs I/O.

    Provider failures never escape: they are logged and turned into
    ``loading.error`` while previously loaded data stays as it was.
    """

    def __init__(
        self,
        catalog: CatalogProvider,
        cart_api: CartApi,
        store: Optional[Store] = None,
        page_size: int = 10,
    ):
        self.catalog = catalog
        self.cart_api = cart_api
        self.store = store or Store()
        self.page_size = page_size
        self._pages = PaginationAccumulator()
        self._query_category: Optional[int] = None

    @property
    def state(self) -> AppState:
        return self.store.state

    def _set_loading(self, is_loading: bool, error: Optional[str] = None) -> None:
        self.store.dispatch(SetLoading(LoadingState(is_loading=is_loading, error=error)))

    def _sync_pagination(self) -> None:
        self.store.dispatch(SetPagination(self._pages.pagination()))

    # ============ Cart ============

    async def _cart_call(
        self, call: Awaitable[ApiResponse[R]], failure_message: str
    ) -> Optional[ApiResponse[R]]:
        try:
            response = await call
        except Exception as e:
            logger.warning("%s: %s", failure_message, e)
            self._set_loading(False, failure_message)
            return None

        if not response.success:
            logger.warning("%s: %s", failure_message, response.message)
            self._set_loading(False, response.message or failure_message)
            return None
        return response

    async def fetch_cart(self) -> None:
        """Replace the local cart with the server's copy."""
        response = await self._cart_call(self.cart_api.get_cart(), "Failed to fetch cart")
        if response is not None:
            self.store.dispatch(SetCart(response.data or []))

    async def add_to_cart(self, product: Product, quantity: int = 1) -> None:
        response = await self._cart_call(
            self.cart_api.add_product_to_cart(product, quantity),
            "Failed to add item to cart",
        )
        if response is None:
            return
        item_id = response.data.id if response.data else None
        self.store.dispatch(AddToCart(product, quantity, item_id=item_id))

    async def remove_from_cart(self, product_id: int) -> None:
        response = await self._cart_call(
            self.cart_api.remove_from_cart(product_id),
            "Failed to remove item from cart",
        )
        if response is not None:
            self.store.dispatch(RemoveFromCart(product_id))

    async def update_cart_quantity(self, product_id: int, quantity: int) -> None:
        """Set a line's quantity; zero or less removes the line."""
        if quantity <= 0:
            await self.remove_from_cart(product_id)
            return

        response = await self._cart_call(
            self.cart_api.update_cart_item(product_id, quantity),
            "Failed to update cart item",
        )
        if response is not None:
            self.store.dispatch(UpdateCartQuantity(product_id, quantity))

    async def clear_cart(self) -> None:
        response = await self._cart_call(self.cart_api.clear_cart(), "Failed to clear cart")
        if response is not None:
            self.store.dispatch(ClearCart())

    # ============ User ============

    def set_user(self, user: Optional[User]) -> None:
        self.store.dispatch(SetUser(user))

    async def logout(self) -> None:
        self.store.dispatch(SetUser(None))
        await self.clear_cart()

    # ============ Products ============

    async def _fetch_page(self, category_id: Optional[int], page: int) -> PageResult:
        if category_id is not None:
            return await self.catalog.fetch_by_category(
                category_id, UNFILTERED, page, self.page_size
            )
        return await self.catalog.fetch_page(UNFILTERED, page, self.page_size)

    async def _load_first_page(self, category_id: Optional[int]) -> None:
        ticket = self._pages.begin_load()
        self._query_category = category_id
        self._set_loading(True)
        self._sync_pagination()

        try:
            result = await self._fetch_page(category_id, ticket.page)
        except Exception as e:
            if self._pages.fail(ticket):
                logger.warning("Failed to fetch products: %s", e)
                self._sync_pagination()
                self._set_loading(False, str(e) or "Failed to fetch products")
            return

        if not self._pages.complete(ticket, result):
            return
        self.store.dispatch(SetProducts(self._pages.items))
        self.store.dispatch(SetCurrentCategory(category_id))
        self._sync_pagination()
        self._set_loading(False)

    async def fetch_products(self) -> None:
        """Load the first page of the whole catalog."""
        await self._load_first_page(None)

    async def fetch_products_by_category(self, category_id: int) -> None:
        """Load the first page of one category."""
        await self._load_first_page(category_id)

    async def load_more_products(self) -> None:
        """Append the next page. A no-op while loading or when nothing is left."""
        ticket = self._pages.begin_load_more()
        if ticket is None:
            return
        self._sync_pagination()

        try:
            result = await self._fetch_page(self._query_category, ticket.page)
        except Exception as e:
            if self._pages.fail(ticket):
                logger.warning("Failed to load more products: %s", e)
                self._sync_pagination()
                self._set_loading(False, "Failed to load more products")
            return

        if not self._pages.complete(ticket, result):
            return
        self.store.dispatch(AppendProducts(result.items))
        self._sync_pagination()

    # ============ Menu ============

    async def fetch_menu_items(self) -> None:
        """Load active menu entries, ordered for display."""
        try:
            menu = await self.catalog.get_menu()
        except Exception as e:
            logger.warning("Failed to fetch menu items: %s", e)
            return

        active: list[MenuItem] = sorted(
            (item for item in menu if item.active), key=lambda item: item.order_by
        )
        self.store.dispatch(SetMenuItems(active))

    async def initialize(self) -> None:
        """Initial load: first product page, menu and cart."""
        await asyncio.gather(
            self.fetch_products(),
            self.fetch_menu_items(),
            self.fetch_cart(),
        )

"""Product listing page controller.

Owns the listing's filter state, mirrors it into the URL query string and
runs queries through a :class:`PaginationAccumulator`, so results of
superseded queries never overwrite newer ones.
"""

import logging
from typing import Optional

from .catalog import codec
from .catalog.accumulator import PaginationAccumulator
from .catalog.query import apply_filters, apply_search, apply_sort
from .models import FilterState, PageResult, Product, SortBy, SortOrder
from .providers.base import CatalogProvider

logger = logging.getLogger(__name__)


class ProductListing:
    """State of one product listing view."""

    def __init__(
        self,
        provider: CatalogProvider,
        page_size: int = 12,
        category_id: Optional[int] = None,
        category_name: str = "",
        query_string: str = "",
    ):
        self.provider = provider
        self.page_size = page_size
        self.category_id = category_id
        self.title = category_name
        self.filters: FilterState = codec.decode(query_string)
        self.query_string = query_string.lstrip("?")
        self.error: Optional[str] = None
        self._pages = PaginationAccumulator()
        self._loaded_once = False

    # ============ View state ============

    @property
    def products(self) -> list[Product]:
        return self._pages.items

    @property
    def total(self) -> int:
        return self._pages.total

    @property
    def has_next(self) -> bool:
        return self._pages.has_next

    @property
    def current_page(self) -> int:
        return self._pages.page

    @property
    def is_loading(self) -> bool:
        """First load of the page."""
        return self._pages.is_loading and not self._loaded_once

    @property
    def is_filter_loading(self) -> bool:
        """Reload after a search, filter, sort or category change."""
        return self._pages.is_loading and self._loaded_once

    @property
    def is_loading_more(self) -> bool:
        return self._pages.is_loading_more

    # ============ Queries ============

    async def _fetch(self, page: int) -> PageResult:
        # Category scope applies only while no categories are picked in the filters.
        if self.category_id is not None and not self.filters.categories:
            return await self.provider.fetch_by_category(
                self.category_id, self.filters, page, self.page_size
            )
        return await self.provider.fetch_page(self.filters, page, self.page_size)

    async def refresh(self) -> None:
        """(Re)load the first page for the current state. Also the manual retry."""
        ticket = self._pages.begin_load()
        self.error = None

        try:
            result = await self._fetch(ticket.page)
        except Exception as e:
            if self._pages.fail(ticket):
                logger.warning("Failed to fetch products: %s", e)
                self.error = str(e) or "Failed to fetch products"
            return

        if self._pages.complete(ticket, result):
            self._loaded_once = True

    async def load_more(self) -> None:
        """Append the next page; ignored while a query is running or at the end."""
        ticket = self._pages.begin_load_more()
        if ticket is None:
            return
        self.error = None

        try:
            result = await self._fetch(ticket.page)
        except Exception as e:
            if self._pages.fail(ticket):
                logger.warning("Failed to load more products: %s", e)
                self.error = str(e) or "Failed to load more products"
            return

        self._pages.complete(ticket, result)

    # ============ User actions ============

    def _write_url(self) -> None:
        self.query_string = codec.encode(self.filters)

    async def search(self, text: str) -> None:
        """New search across the whole catalog: filters and category scope are cleared."""
        self.filters = apply_search(self.filters, text)
        self.category_id = None
        self.title = f'Search results for "{text}"' if text.strip() else "All Products"
        self._write_url()
        await self.refresh()

    async def change_filters(self, filters: FilterState) -> None:
        """Apply new narrowing filters; the current search text stays."""
        self.filters = apply_filters(self.filters, filters)
        self._write_url()
        await self.refresh()

    async def change_sort(self, sort_by: SortBy, sort_order: SortOrder) -> None:
        self.filters = apply_sort(self.filters, sort_by, sort_order)
        self._write_url()
        await self.refresh()

    async def select_category(self, category_id: Optional[int], category_name: str = "") -> None:
        """Switch category scope. The search text is not cleared."""
        self.category_id = category_id
        self.title = category_name
        await self.refresh()

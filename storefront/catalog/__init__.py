"""Product catalog querying: filtering, URL state and pagination."""

from .accumulator import LoadState, PaginationAccumulator, Slot, Ticket, append_page
from .codec import decode, encode
from .query import (
    apply_filters,
    apply_search,
    apply_sort,
    query_by_category,
    query_catalog,
    related_products,
)
from .reviews import review_stats, reviews_for_product

__all__ = [
    "LoadState",
    "PaginationAccumulator",
    "Slot",
    "Ticket",
    "append_page",
    "decode",
    "encode",
    "apply_filters",
    "apply_search",
    "apply_sort",
    "query_by_category",
    "query_catalog",
    "related_products",
    "review_stats",
    "reviews_for_product",
]

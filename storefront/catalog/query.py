"""In-memory product query executor.

Pure functions over a catalog snapshot: filter, sort, paginate. Nothing here
mutates the catalog or keeps state between calls.
"""

from typing import Callable, Iterable, Optional, Sequence

from ..errors import ValidationError
from ..models import FilterState, PageRequest, PageResult, Product, SortBy, SortOrder


Predicate = Callable[[Product], bool]


def _matches_search(product: Product, needle: str) -> bool:
    return any(
        needle in field.lower()
        for field in (
            product.product_name,
            product.product_description,
            product.product_code,
            product.overview,
        )
    )


def build_predicates(filters: FilterState) -> list[Predicate]:
    """Build the ordered list of predicates for a filter state.

    Order matters only for short-circuiting: category, price, rating,
    in stock, best seller, offer, then free-text search.
    """
    predicates: list[Predicate] = []

    if filters.categories:
        categories = frozenset(filters.categories)
        predicates.append(lambda p: p.category in categories)

    price_range = filters.price_range
    predicates.append(lambda p: price_range.contains(p.price))

    if filters.ratings:
        # "N stars & up" for any selected N is the same as the lowest N.
        threshold = min(filters.ratings)
        predicates.append(lambda p: p.rounded_rating >= threshold)

    if filters.in_stock:
        predicates.append(lambda p: p.in_stock)
    if filters.best_seller:
        predicates.append(lambda p: p.best_seller)
    if filters.has_offer:
        predicates.append(lambda p: p.has_offer)

    needle = filters.search.strip().lower()
    if needle:
        predicates.append(lambda p: _matches_search(p, needle))

    return predicates


def _sort_key(sort_by: SortBy) -> Optional[Callable[[Product], object]]:
    if sort_by == SortBy.PRODUCT_NAME:
        return lambda p: p.product_name.lower()
    if sort_by == SortBy.PRICE:
        return lambda p: p.price
    if sort_by == SortBy.RATING:
        return lambda p: p.rating
    if sort_by == SortBy.USER_BUY_COUNT:
        return lambda p: p.user_buy_count
    if sort_by == SortBy.CREATED:
        return lambda p: p.created.timestamp() if p.created else float("-inf")
    if sort_by == SortBy.BEST_SELLER:
        return lambda p: 1 if p.best_seller else 0
    return None


def sort_products(
    products: Iterable[Product],
    sort_by: SortBy = SortBy.DEFAULT,
    sort_order: SortOrder = SortOrder.ASC,
) -> list[Product]:
    """Stable sort; equal keys keep their catalog order in both directions."""
    items = list(products)
    key = _sort_key(sort_by)
    if key is None:
        return items
    # sorted() is stable with reverse=True as well.
    return sorted(items, key=key, reverse=sort_order == SortOrder.DESC)


def filter_products(catalog: Iterable[Product], filters: FilterState) -> list[Product]:
    """Apply every predicate of the filter state, preserving catalog order."""
    predicates = build_predicates(filters)
    return [p for p in catalog if all(pred(p) for pred in predicates)]


def validate_page(page: PageRequest) -> None:
    if page.page < 1:
        raise ValidationError(f"page must be >= 1, got {page.page}")
    if page.limit <= 0:
        raise ValidationError(f"limit must be > 0, got {page.limit}")


def query_catalog(
    catalog: Sequence[Product],
    filters: FilterState,
    page: PageRequest,
) -> PageResult:
    """
    Return one page of catalog products matching the filters.

    Args:
        catalog: Catalog snapshot, in natural (insertion) order
        filters: Narrowing and sorting criteria
        page: Page number (1-indexed) and page size

    Returns:
        PageResult with the page items, the total match count and whether
        another page follows

    Raises:
        ValidationError: page < 1 or limit <= 0
    """
    validate_page(page)

    matches = sort_products(
        filter_products(catalog, filters), filters.sort_by, filters.sort_order
    )
    total = len(matches)
    end = page.page * page.limit

    return PageResult(
        items=matches[page.offset:end],
        total=total,
        has_next=end < total,
        page=page.page,
    )


def query_by_category(
    catalog: Sequence[Product],
    category_id: int,
    filters: FilterState,
    page: PageRequest,
) -> PageResult:
    """Query scoped to one category; replaces the filter's category set."""
    scoped = filters.model_copy(update={"categories": {category_id}})
    return query_catalog(catalog, scoped, page)


def find_product(catalog: Iterable[Product], product_id: int) -> Optional[Product]:
    for product in catalog:
        if product.product_id == product_id:
            return product
    return None


def search_suggestions(catalog: Iterable[Product], text: str, limit: int = 8) -> list[Product]:
    """Type-ahead matches for the search box. Blank text yields nothing."""
    needle = text.strip().lower()
    if not needle:
        return []
    matches = [p for p in catalog if _matches_search(p, needle)]
    return matches[:limit]


def related_products(
    catalog: Iterable[Product],
    product_id: int,
    category_id: Optional[int] = None,
    limit: int = 12,
) -> list[Product]:
    """Active, in-stock products other than ``product_id``; same category first."""
    candidates = [
        p for p in catalog
        if p.product_id != product_id and p.active and p.in_stock
    ]
    if category_id is not None:
        candidates = (
            [p for p in candidates if p.category == category_id]
            + [p for p in candidates if p.category != category_id]
        )
    return candidates[:limit]


# ============ Search / category precedence ============

def apply_search(filters: FilterState, text: str) -> FilterState:
    """
    Start a new free-text search.

    A search spans the whole catalog: narrowing filters, category scope
    included, go back to their defaults. Sort settings are kept.
    """
    return FilterState(
        search=text,
        sort_by=filters.sort_by,
        sort_order=filters.sort_order,
    )


def apply_filters(current: FilterState, new: FilterState) -> FilterState:
    """Take the narrowing filters from ``new`` and keep the current search and sort."""
    return new.model_copy(
        update={
            "search": current.search,
            "sort_by": current.sort_by,
            "sort_order": current.sort_order,
        }
    )


def apply_sort(filters: FilterState, sort_by: SortBy, sort_order: SortOrder) -> FilterState:
    return filters.model_copy(update={"sort_by": sort_by, "sort_order": sort_order})

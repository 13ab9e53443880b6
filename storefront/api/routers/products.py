"""API endpoints for browsing the catalog."""

from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query

from ...catalog.codec import from_params
from ...errors import TransientFetchError
from ...models import PageResult, Product, ProductReview, ReviewStats
from ...providers.memory import InMemoryCatalog

router = APIRouter()

# Global catalog (initialized on startup)
_catalog: Optional[InMemoryCatalog] = None


def get_catalog() -> InMemoryCatalog:
    """Dependency to get the catalog."""
    global _catalog
    if _catalog is None:
        _catalog = InMemoryCatalog()
    return _catalog


def unavailable(e: TransientFetchError) -> HTTPException:
    """Simulated backend failures surface as 503 so clients retry."""
    return HTTPException(status_code=503, detail=str(e))


async def require_product(catalog: InMemoryCatalog, product_id: int) -> Product:
    try:
        product = await catalog.get_product(product_id)
    except TransientFetchError as e:
        raise unavailable(e)

    if not product:
        raise HTTPException(status_code=404, detail="Product not found")

    return product


@router.get("", response_model=PageResult)
async def list_products(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=200),
    q: str = "",
    filters: str = "",
    sort_by: str = Query("", alias="sortBy"),
    sort_order: str = Query("", alias="sortOrder"),
    catalog: InMemoryCatalog = Depends(get_catalog),
):
    """
    List products with filters, sorting and pagination.

    - page: Page number (1-indexed)
    - limit: Items per page (max 200)
    - q: Free-text search
    - filters: JSON-encoded narrowing filters
    - sortBy / sortOrder: Sort field and direction
    """
    state = from_params(q, filters, sort_by, sort_order)
    try:
        return await catalog.fetch_page(state, page, limit)
    except TransientFetchError as e:
        raise unavailable(e)


@router.get("/search", response_model=list[Product])
async def search_products(
    q: str = "",
    limit: int = Query(8, ge=1, le=50),
    catalog: InMemoryCatalog = Depends(get_catalog),
):
    """Type-ahead product search."""
    try:
        return await catalog.search_suggestions(q, limit)
    except TransientFetchError as e:
        raise unavailable(e)


@router.get("/category/{category_id}", response_model=PageResult)
async def list_category_products(
    category_id: int,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=200),
    q: str = "",
    filters: str = "",
    sort_by: str = Query("", alias="sortBy"),
    sort_order: str = Query("", alias="sortOrder"),
    catalog: InMemoryCatalog = Depends(get_catalog),
):
    """List one category; an unknown category is simply empty."""
    state = from_params(q, filters, sort_by, sort_order)
    try:
        return await catalog.fetch_by_category(category_id, state, page, limit)
    except TransientFetchError as e:
        raise unavailable(e)


@router.get("/{product_id}", response_model=Product)
async def get_product(
    product_id: int,
    catalog: InMemoryCatalog = Depends(get_catalog),
):
    """Get product by ID."""
    return await require_product(catalog, product_id)


@router.get("/{product_id}/related", response_model=list[Product])
async def get_related_products(
    product_id: int,
    category_id: Optional[int] = Query(None, alias="categoryId"),
    limit: int = Query(12, ge=1, le=50),
    catalog: InMemoryCatalog = Depends(get_catalog),
):
    """
    Products to show beside a product page.

    Defaults the preferred category to the product's own.
    """
    product = await require_product(catalog, product_id)
    try:
        return await catalog.related_products(
            product_id, category_id if category_id is not None else product.category, limit
        )
    except TransientFetchError as e:
        raise unavailable(e)


@router.get("/{product_id}/reviews", response_model=list[ProductReview])
async def get_product_reviews(
    product_id: int,
    catalog: InMemoryCatalog = Depends(get_catalog),
):
    """Reviews for one product."""
    await require_product(catalog, product_id)
    try:
        return await catalog.get_reviews(product_id)
    except TransientFetchError as e:
        raise unavailable(e)


@router.get("/{product_id}/reviews/stats", response_model=ReviewStats)
async def get_product_review_stats(
    product_id: int,
    catalog: InMemoryCatalog = Depends(get_catalog),
):
    """Review count, average rating and star distribution."""
    await require_product(catalog, product_id)
    try:
        return await catalog.get_review_stats(product_id)
    except TransientFetchError as e:
        raise unavailable(e)

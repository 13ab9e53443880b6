"""Tests for the mock storefront API and the HTTP adapters that consume it."""

import json

import pytest
from httpx import ASGITransport, AsyncClient

from storefront.api.main import create_app
from storefront.api.routers import cart as cart_router
from storefront.api.routers import products as products_router
from storefront.client import ApiClient
from storefront.config import ApiConfig
from storefront.context import StorefrontContext
from storefront.mock_data import PRODUCTS
from storefront.models import FilterState, SortBy, SortOrder
from storefront.providers import HttpCartApi, HttpCatalogProvider, InMemoryCartApi, InMemoryCatalog

from conftest import make_product


@pytest.fixture
def cart_api():
    return InMemoryCartApi()


@pytest.fixture
def app(cart_api):
    """App with fresh in-memory backends."""
    catalog = InMemoryCatalog()
    app = create_app()
    app.dependency_overrides[products_router.get_catalog] = lambda: catalog
    app.dependency_overrides[cart_router.get_cart_api] = lambda: cart_api
    return app


@pytest.fixture
async def client(app):
    """Create test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
async def api_client(app):
    """Storefront API client talking to the app in-process."""
    config = ApiConfig(base_url="http://test/api", max_retries=0, max_backoff=0)
    async with ApiClient(config, transport=ASGITransport(app=app)) as api_client:
        yield api_client


# ============ Mock API ============

@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/health")
    assert response.json() == {"status": "healthy"}


@pytest.mark.asyncio
async def test_list_products(client):
    """Test GET /api/products."""
    response = await client.get("/api/products", params={"page": 1, "limit": 5})

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 16
    assert data["hasNext"] is True
    assert len(data["items"]) == 5
    # Wire spelling of the category field
    assert data["items"][0]["categrory"] == 4


@pytest.mark.asyncio
async def test_list_products_with_filters(client):
    response = await client.get("/api/products", params={
        "filters": json.dumps({"bestSeller": True}),
        "sortBy": "price",
        "sortOrder": "desc",
    })

    names = [item["productName"] for item in response.json()["items"]]
    assert names == ["Apple Sapling", "Basil Seeds", "Mango", "Guava"]


@pytest.mark.asyncio
async def test_malformed_filters_are_ignored(client):
    response = await client.get("/api/products", params={"filters": "{oops", "limit": 50})
    assert response.status_code == 200
    assert response.json()["total"] == 16


@pytest.mark.asyncio
@pytest.mark.parametrize("params", [{"page": 0}, {"limit": 0}, {"page": "two"}])
async def test_invalid_paging_is_rejected(client, params):
    response = await client.get("/api/products", params=params)
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_get_product(client):
    """Test GET /api/products/{id}."""
    response = await client.get("/api/products/1004")
    assert response.status_code == 200
    assert response.json()["productName"] == "Kiwi"


@pytest.mark.asyncio
async def test_get_product_not_found(client):
    """Test GET /api/products/{id} with invalid ID."""
    response = await client.get("/api/products/1")
    assert response.status_code == 404
    assert response.json()["detail"] == "Product not found"


@pytest.mark.asyncio
async def test_search_products(client):
    response = await client.get("/api/products/search", params={"q": "seed"})
    names = [item["productName"] for item in response.json()]
    assert names == ["Tomato Seeds", "Carrot Seeds", "Basil Seeds", "Spinach Seeds"]


@pytest.mark.asyncio
async def test_category_products(client):
    response = await client.get("/api/products/category/2")
    assert [item["productId"] for item in response.json()["items"]] == [1007, 1008]


@pytest.mark.asyncio
async def test_menu_master(client):
    response = await client.get("/api/menu/master")
    assert len(response.json()["menuMaster"]) == 5


@pytest.mark.asyncio
async def test_cart_endpoints(client):
    product = PRODUCTS[0]

    added = await client.post("/api/cart/add", json={"product": product, "quantity": 2})
    await client.post("/api/cart/add", json={"product": product})
    assert added.json()["success"] is True

    cart = (await client.get("/api/cart")).json()
    assert len(cart["data"]) == 1
    assert cart["data"][0]["quantity"] == 3

    updated = await client.post("/api/cart/update", json={"productId": 1001, "quantity": 5})
    assert updated.json()["data"]["quantity"] == 5

    removed = await client.post("/api/cart/remove", json={"productId": 1001})
    assert removed.json()["success"] is True
    assert (await client.get("/api/cart")).json()["data"] == []


@pytest.mark.asyncio
async def test_cart_update_rejects_zero_quantity(client):
    response = await client.post("/api/cart/update", json={"productId": 1001, "quantity": 0})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_cart_remove_unknown_item(client):
    response = await client.post("/api/cart/remove", json={"productId": 42})
    assert response.status_code == 200
    assert response.json()["success"] is False


# ============ HTTP adapters ============

@pytest.mark.asyncio
async def test_http_catalog_provider(api_client):
    provider = HttpCatalogProvider(api_client)

    filters = FilterState(best_seller=True, sort_by=SortBy.PRICE, sort_order=SortOrder.ASC)
    page = await provider.fetch_page(filters, 1, 2)
    assert [p.product_name for p in page.items] == ["Guava", "Mango"]
    assert page.total == 4
    assert page.has_next is True

    category = await provider.fetch_by_category(5, FilterState(), 1, 10)
    assert [p.product_id for p in category.items] == [1011, 1012]

    assert (await provider.get_product(1001)).category == 4
    assert await provider.get_product(1) is None
    assert len(await provider.get_menu()) == 5
    assert [p.product_id for p in await provider.search_suggestions("apple")] == [1001, 1014]
    assert await provider.search_suggestions("  ") == []


@pytest.mark.asyncio
async def test_http_cart_api(api_client, cart_api):
    carts = HttpCartApi(api_client)
    product = await HttpCatalogProvider(api_client).get_product(1004)

    added = await carts.add_product_to_cart(product, 2)
    assert added.success is True
    assert added.data.product.product_id == 1004
    assert cart_api.size == 1

    updated = await carts.update_cart_item(1004, 4)
    assert updated.data.quantity == 4

    fetched = await carts.get_cart()
    assert [item.quantity for item in fetched.data] == [4]

    assert (await carts.remove_from_cart(1004)).success is True
    assert (await carts.remove_from_cart(1004)).success is False
    assert (await carts.clear_cart()).success is True


@pytest.mark.asyncio
async def test_context_over_http(api_client):
    context = StorefrontContext(HttpCatalogProvider(api_client), HttpCartApi(api_client))

    await context.initialize()
    await context.load_more_products()

    assert len(context.state.products) == 16
    assert context.state.pagination.has_next is False
    assert [item.menu_id for item in context.state.menu_items] == [1, 2, 3, 4]

    await context.add_to_cart(context.state.products[0], 2)
    assert context.state.cart[0].quantity == 2


@pytest.mark.asyncio
async def test_context_over_http_sees_whole_price_range(cart_api):
    """The context's catalog fetch has no upper price bound on the wire either."""
    catalog = InMemoryCatalog([make_product(1, price=50), make_product(2, price=2500)])
    app = create_app()
    app.dependency_overrides[products_router.get_catalog] = lambda: catalog
    app.dependency_overrides[cart_router.get_cart_api] = lambda: cart_api
    config = ApiConfig(base_url="http://test/api", max_retries=0, max_backoff=0)

    async with ApiClient(config, transport=ASGITransport(app=app)) as api_client:
        context = StorefrontContext(HttpCatalogProvider(api_client), HttpCartApi(api_client))
        await context.fetch_products()

    assert [p.product_id for p in context.state.products] == [1, 2]


# ============ Related products and reviews ============

@pytest.mark.asyncio
async def test_related_products_default_to_own_category(client):
    response = await client.get("/api/products/1001/related", params={"limit": 5})
    assert response.status_code == 200
    assert [item["productId"] for item in response.json()] == [1002, 1003, 1004, 1016, 1007]


@pytest.mark.asyncio
async def test_related_products_with_category(client):
    response = await client.get(
        "/api/products/1001/related", params={"categoryId": 5, "limit": 2}
    )
    assert [item["productId"] for item in response.json()] == [1011, 1012]


@pytest.mark.asyncio
@pytest.mark.parametrize("path", ["related", "reviews", "reviews/stats"])
async def test_product_subresources_not_found(client, path):
    response = await client.get(f"/api/products/99999/{path}")
    assert response.status_code == 404
    assert response.json()["detail"] == "Product not found"


@pytest.mark.asyncio
async def test_product_reviews(client):
    response = await client.get("/api/products/1002/reviews")
    assert response.status_code == 200
    reviews = response.json()
    assert [review["userName"] for review in reviews] == ["Emma Davis", "David Brown"]
    assert reviews[1]["verified"] is False


@pytest.mark.asyncio
async def test_product_review_stats(client):
    response = await client.get("/api/products/1002/reviews/stats")
    assert response.status_code == 200
    assert response.json() == {
        "totalReviews": 2,
        "averageRating": 3.5,
        "ratingDistribution": {"1": 0, "2": 0, "3": 1, "4": 1, "5": 0},
    }


@pytest.mark.asyncio
async def test_review_stats_for_unreviewed_product(client):
    data = (await client.get("/api/products/1010/reviews/stats")).json()
    assert data["totalReviews"] == 0
    assert data["averageRating"] == 0
    assert set(data["ratingDistribution"]) == {"1", "2", "3", "4", "5"}


@pytest.mark.asyncio
async def test_http_related_products_and_reviews(api_client):
    provider = HttpCatalogProvider(api_client)

    related = await provider.related_products(1004, category_id=4, limit=3)
    assert [p.product_id for p in related] == [1001, 1002, 1003]
    assert await provider.related_products(99999) == []

    reviews = await provider.get_reviews(1001)
    assert len(reviews) == 3
    assert all(review.product_id == 1001 for review in reviews)
    assert await provider.get_reviews(99999) == []

    stats = await provider.get_review_stats(1001)
    assert stats.total_reviews == 3
    assert stats.rating_distribution == {1: 0, 2: 0, 3: 0, 4: 1, 5: 2}
    assert (await provider.get_review_stats(99999)).total_reviews == 0


# ============ Backend failures ============

@pytest.mark.asyncio
@pytest.mark.parametrize("path", [
    "/api/products",
    "/api/products/search?q=apple",
    "/api/products/category/4",
    "/api/products/1001",
    "/api/products/1001/related",
    "/api/products/1001/reviews",
    "/api/products/1001/reviews/stats",
    "/api/menu/master",
])
async def test_backend_failure_is_service_unavailable(app, client, path):
    """A failing catalog answers 503 rather than an unhandled 500."""
    failing = InMemoryCatalog(failure_rate=1.0)
    app.dependency_overrides[products_router.get_catalog] = lambda: failing

    response = await client.get(path)

    assert response.status_code == 503
    assert "Failed to" in response.json()["detail"]

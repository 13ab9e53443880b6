"""Tests for storefront data models."""

import pytest
from pydantic import ValidationError

from storefront.mock_data import PRODUCTS, REVIEWS, load_products
from storefront.models import (
    ApiResponse,
    CartItem,
    FilterState,
    PageRequest,
    PriceRange,
    Product,
    ProductImage,
    ProductReview,
    ReviewStats,
    calculate_discounted_price,
    is_product_in_cart,
    product_quantity_in_cart,
)

from conftest import make_product


def test_product_from_wire_format():
    """Test parsing a product as the catalog API sends it."""
    product = Product.model_validate(PRODUCTS[0])

    assert product.product_id == 1001
    assert product.category == 4
    assert product.in_stock is True
    assert product.delivery_days == 5
    assert product.has_offer is True


def test_product_dump_uses_wire_aliases():
    data = make_product(1, category=3).model_dump(by_alias=True)
    assert data["categrory"] == 3
    assert data["productName"] == "Product 1"
    assert "in_stock" in data
    assert "deleveryDate" in data


def test_product_lenient_timestamps():
    """Test that placeholder dates are tolerated."""
    product = make_product(1, created="date", modified="2024-02-01T10:00:00Z")
    assert product.created is None
    assert product.modified.year == 2024


def test_product_null_offer():
    product = make_product(1, offer=None)
    assert product.offer == ""
    assert product.has_offer is False


@pytest.mark.parametrize("rating,expected", [(0, 0), (2.4, 2), (2.5, 3), (3.6, 4), (5, 5)])
def test_rounded_rating(rating, expected):
    assert make_product(1, rating=rating).rounded_rating == expected


def test_product_rejects_negative_price():
    with pytest.raises(ValidationError):
        make_product(1, price=-1)


def test_get_main_image():
    """Test main image lookup with fallback."""
    images = [
        ProductImage(image_id=1, poster="a.svg"),
        ProductImage(image_id=2, poster="b.svg", main=True, active=False),
        ProductImage(image_id=3, poster="c.svg", main=True),
    ]
    assert make_product(1, images=images).get_main_image().image_id == 3
    assert make_product(2, images=images[:2]).get_main_image().image_id == 1
    assert make_product(3).get_main_image() is None


def test_price_range_validation():
    assert PriceRange(min=10, max=10).contains(10)
    with pytest.raises(ValidationError):
        PriceRange(min=20, max=10)


def test_filter_state_rejects_bad_rating():
    with pytest.raises(ValidationError):
        FilterState(ratings={0})


def test_filter_state_narrowing():
    state = FilterState(search="kiwi", categories={5, 2}, has_offer=True)
    narrowing = state.narrowing()

    assert narrowing["categories"] == [2, 5]
    assert narrowing["hasOffer"] is True
    assert "search" not in narrowing
    assert "sortBy" not in narrowing
    assert FilterState().is_default()
    assert not state.is_default()


def test_page_request_offset():
    assert PageRequest(page=3, limit=10).offset == 20


def test_cart_item_defaults():
    first = CartItem(product=make_product(1, price=4), quantity=3)
    second = CartItem(product=make_product(1), quantity=1)

    assert first.id != second.id
    assert first.line_total == 12
    with pytest.raises(ValidationError):
        CartItem(product=make_product(1), quantity=0)


def test_api_response_envelope():
    response = ApiResponse[list[CartItem]].model_validate({"success": True, "data": []})
    assert response.data == []
    assert response.message is None


def test_seed_catalog_is_valid():
    products = load_products()
    assert len({p.product_id for p in products}) == len(products)
    assert all(p.price <= 1000 for p in products)


def test_cart_lookups():
    items = [
        CartItem(product=make_product(1), quantity=2),
        CartItem(product=make_product(2), quantity=5),
    ]
    assert is_product_in_cart(2, items) is True
    assert is_product_in_cart(3, items) is False
    assert product_quantity_in_cart(2, items) == 5
    assert product_quantity_in_cart(3, items) == 0
    assert product_quantity_in_cart(1, []) == 0


@pytest.mark.parametrize("offer,expected", [
    ("50%", 50),
    ("10%", 90),
    ("12.5% off", 87.5),
    ("", 100),
    ("Free gift", 100),
])
def test_calculate_discounted_price(offer, expected):
    assert calculate_discounted_price(100, offer) == pytest.approx(expected)


def test_review_from_wire_format():
    review = ProductReview.model_validate(REVIEWS[0])
    assert review.product_id == 1001
    assert review.user_name == "John Doe"
    assert review.rating == 5
    assert review.created_at is not None


def test_review_rating_bounds():
    data = dict(REVIEWS[0], rating=6)
    with pytest.raises(ValidationError):
        ProductReview.model_validate(data)


def test_review_stats_defaults_are_zero_filled():
    stats = ReviewStats()
    assert stats.total_reviews == 0
    assert stats.rating_distribution == {1: 0, 2: 0, 3: 0, 4: 0, 5: 0}
    assert stats.model_dump(by_alias=True)["ratingDistribution"][3] == 0

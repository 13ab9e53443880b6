"""Data models for the storefront catalog and cart."""

import math
import re
from datetime import datetime
from enum import Enum
from typing import Annotated, ClassVar, Generic, Optional, TypeVar
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

DEFAULT_PRICE_MIN = 0
DEFAULT_PRICE_MAX = 1000

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base model: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============ Catalog ============

class ProductImage(CamelModel):
    """Product image data."""

    image_id: int
    poster: str
    main: bool = False
    active: bool = True
    order_by: int = 0


class Product(CamelModel):
    """Catalog product. Read-only to the filter subsystem."""

    product_id: int = Field(..., description="Catalog product ID")
    tenant_id: Optional[int] = None
    product_name: str = Field(..., description="Display name")
    product_description: str = ""
    product_code: str = ""
    overview: str = ""
    long_description: str = Field("", alias="long_description")
    price: float = Field(..., ge=0, description="Current price")
    # The catalog API spells this field "categrory".
    category: int = Field(..., alias="categrory", description="Category ID")
    rating: float = Field(0, ge=0, le=5, description="Average rating")
    active: bool = True
    trending: int = 0
    user_buy_count: int = Field(0, ge=0)
    created: Optional[datetime] = None
    modified: Optional[datetime] = None
    in_stock: bool = Field(True, alias="in_stock")
    best_seller: bool = Field(False, alias="best_seller")
    offer: str = Field("", description="Offer label, empty when there is none")
    delivery_days: int = Field(0, alias="deleveryDate")
    order_by: int = 0
    images: list[ProductImage] = Field(default_factory=list)

    @field_validator("created", "modified", mode="before")
    @classmethod
    def _lenient_timestamp(cls, value):
        # Placeholder values such as "date" show up in seed data.
        if isinstance(value, str):
            try:
                return datetime.fromisoformat(value.replace("Z", "+00:00"))
            except ValueError:
                return None
        return value

    @field_validator("offer", mode="before")
    @classmethod
    def _offer_text(cls, value):
        return "" if value is None else value

    @property
    def has_offer(self) -> bool:
        return bool(self.offer)

    @property
    def rounded_rating(self) -> int:
        """Rating rounded half-up to a whole star."""
        return int(math.floor(self.rating + 0.5))

    def get_main_image(self) -> Optional[ProductImage]:
        """Get the main active image, falling back to the first one."""
        for img in self.images:
            if img.main and img.active:
                return img
        return self.images[0] if self.images else None


class MenuCategory(CamelModel):
    """Category entry under a menu."""

    category_id: int
    category: str
    active: bool = True


class MenuItem(CamelModel):
    """Navigation menu entry."""

    menu_id: int
    menu_name: str
    order_by: int = 0
    active: bool = True
    image: str = ""
    sub_menu: bool = False
    category: list[MenuCategory] = Field(default_factory=list)


class ProductReview(CamelModel):
    """Customer review of a product."""

    review_id: int
    product_id: int
    user_id: int
    user_name: str
    user_email: str = ""
    rating: int = Field(..., ge=1, le=5)
    title: str = ""
    comment: str = ""
    helpful: int = 0
    verified: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ReviewStats(CamelModel):
    """Aggregate review figures for one product."""

    total_reviews: int = 0
    average_rating: float = 0
    # Every star value 1..5 is present, zero when unused.
    rating_distribution: dict[int, int] = Field(
        default_factory=lambda: {star: 0 for star in range(1, 6)}
    )


# ============ Filtering ============

class SortBy(str, Enum):
    """Sortable product fields."""
    DEFAULT = "default"
    PRODUCT_NAME = "productName"
    PRICE = "price"
    RATING = "rating"
    USER_BUY_COUNT = "userBuyCount"
    CREATED = "created"
    BEST_SELLER = "best_seller"


class SortOrder(str, Enum):
    """Sort direction."""
    ASC = "asc"
    DESC = "desc"


class PriceRange(CamelModel):
    """Inclusive price bounds."""

    min: float = Field(DEFAULT_PRICE_MIN, ge=0)
    max: float = Field(DEFAULT_PRICE_MAX, ge=0)

    @model_validator(mode="after")
    def _check_bounds(self) -> "PriceRange":
        if self.min > self.max:
            raise ValueError(f"price range min {self.min} exceeds max {self.max}")
        return self

    def contains(self, price: float) -> bool:
        return self.min <= price <= self.max


Rating = Annotated[int, Field(ge=1, le=5)]


class FilterState(CamelModel):
    """All user-chosen narrowing and sorting criteria for a product query."""

    search: str = ""
    price_range: PriceRange = Field(default_factory=PriceRange)
    categories: set[int] = Field(default_factory=set)
    ratings: set[Rating] = Field(default_factory=set)
    in_stock: bool = False
    best_seller: bool = False
    has_offer: bool = False
    sort_by: SortBy = SortBy.DEFAULT
    sort_order: SortOrder = SortOrder.ASC

    # Fields carried in the URL "filters" parameter.
    NARROWING_FIELDS: ClassVar[set[str]] = {
        "price_range", "categories", "ratings", "in_stock", "best_seller", "has_offer",
    }

    def narrowing(self) -> dict:
        """The narrowing filters as a JSON-ready camelCase dict."""
        data = self.model_dump(by_alias=True, include=self.NARROWING_FIELDS)
        data["categories"] = sorted(self.categories)
        data["ratings"] = sorted(self.ratings)
        return data

    def is_default(self) -> bool:
        return self == FilterState()


class PageRequest(BaseModel):
    """Offset pagination parameters. Checked by the query executor."""

    page: int = 1
    limit: int = 10

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class PageResult(CamelModel):
    """One page of query results."""

    items: list[Product] = Field(default_factory=list)
    total: int = Field(0, ge=0)
    has_next: bool = False
    page: int = 1


# ============ Cart & application state ============

def new_item_id() -> str:
    """Generate a unique cart line ID."""
    return uuid4().hex


class CartItem(CamelModel):
    """A cart line. The product is captured by value when added."""

    id: str = Field(default_factory=new_item_id)
    product: Product
    quantity: int = Field(..., gt=0)

    @property
    def line_total(self) -> float:
        return self.product.price * self.quantity


class LoadingState(CamelModel):
    """Global loading/error flag."""

    is_loading: bool = False
    error: Optional[str] = None


class Pagination(CamelModel):
    """Pagination metadata for the accumulated product list."""

    page: int = 1
    has_next: bool = False
    is_loading_more: bool = False
    total: int = 0


class User(CamelModel):
    """Signed-in customer."""

    id: str
    email: str
    name: str
    role: str = "customer"


class ApiResponse(BaseModel, Generic[T]):
    """Envelope returned by cart and catalog endpoints."""

    success: bool
    data: Optional[T] = None
    message: Optional[str] = None


def cart_total(items: list[CartItem]) -> float:
    """Sum of price * quantity over all lines."""
    return sum(item.line_total for item in items)


def cart_item_count(items: list[CartItem]) -> int:
    """Number of distinct lines in the cart."""
    return len(items)


def cart_total_quantity(items: list[CartItem]) -> int:
    """Total quantity across all lines."""
    return sum(item.quantity for item in items)


def is_product_in_cart(product_id: int, items: list[CartItem]) -> bool:
    return any(item.product.product_id == product_id for item in items)


def product_quantity_in_cart(product_id: int, items: list[CartItem]) -> int:
    """Quantity of a product in the cart, 0 when absent."""
    for item in items:
        if item.product.product_id == product_id:
            return item.quantity
    return 0


_OFFER_PERCENT = re.compile(r"\s*(\d+(?:\.\d+)?)")


def calculate_discounted_price(price: float, offer: str) -> float:
    """Apply a percentage offer label such as "50%" to a price.

    Labels without a leading number leave the price unchanged.
    """
    match = _OFFER_PERCENT.match(offer or "")
    if not match:
        return price
    return price * (1 - float(match.group(1)) / 100)

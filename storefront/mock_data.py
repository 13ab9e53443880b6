"""Seed catalog, menu and reviews used by the in-memory adapters and the mock API."""

from .models import MenuItem, Product, ProductReview

_OVERVIEW = (
    "Lorem ipsum dolor sit amet consectetur adipisicing elit. "
    "Error unde quisquam magni vel eligendi nam."
)


def _image(image_id: int, label: str, main: bool = False) -> dict:
    return {
        "imageId": image_id,
        "poster": f"/images/{label.lower().replace(' ', '-')}.svg",
        "main": main,
        "active": True,
        "orderBy": image_id,
    }


def _product(
    product_id: int,
    name: str,
    code: str,
    price: float,
    category: int,
    rating: float,
    created: str,
    *,
    in_stock: bool = True,
    best_seller: bool = False,
    offer: str = "",
    user_buy_count: int = 50,
    description: str = "",
) -> dict:
    # Wire format, as served by the catalog API.
    return {
        "productId": product_id,
        "tenantId": 10,
        "productName": name,
        "productDescription": description or name,
        "productCode": code,
        "overview": _OVERVIEW,
        "long_description": "",
        "price": price,
        "categrory": category,
        "rating": rating,
        "active": True,
        "trending": 1,
        "userBuyCount": user_buy_count,
        "created": created,
        "modified": created,
        "in_stock": in_stock,
        "best_seller": best_seller,
        "deleveryDate": 5,
        "offer": offer,
        "orderBy": product_id - 1000,
        "images": [_image(1, name, main=True), _image(2, f"{name} detail")],
    }


PRODUCTS = [
    _product(1001, "Apple", "SD101", 499, 4, 2, "2024-01-05T09:00:00", offer="50%", user_buy_count=120),
    _product(1002, "Orange", "OR1O1", 399, 4, 3, "2024-01-08T09:00:00", offer="50%"),
    _product(1003, "Grapes", "DR101", 200, 4, 1, "2024-01-11T09:00:00", offer="50%"),
    _product(1004, "Kiwi", "KW001", 400, 4, 5, "2024-02-02T09:00:00", offer="10%", user_buy_count=80),
    _product(1005, "Guava", "GV001", 50, 4, 3, "2024-02-09T09:00:00",
             in_stock=False, best_seller=True, offer="70%", user_buy_count=300),
    _product(1006, "Mango", "MG100", 60, 4, 4, "2024-02-15T09:00:00",
             in_stock=False, best_seller=True, offer="80%", user_buy_count=410),
    _product(1007, "Tomato Seeds", "TS200", 70, 2, 4.4, "2024-03-01T09:00:00",
             description="Heirloom tomato seed packet", user_buy_count=35),
    _product(1008, "Carrot Seeds", "CS201", 80, 2, 3.6, "2024-03-04T09:00:00",
             description="Early nantes carrot seeds", offer="20%"),
    _product(1009, "Basil Seeds", "BS300", 90, 3, 5, "2024-03-09T09:00:00",
             description="Sweet Genovese basil", best_seller=True, user_buy_count=220),
    _product(1010, "Mint Starter", "MT301", 20, 3, 1, "2024-03-12T09:00:00"),
    _product(1011, "Spinach Seeds", "SP500", 210, 5, 3, "2024-04-01T09:00:00", offer="50%"),
    _product(1012, "Lettuce Mix", "LT501", 220, 5, 4, "2024-04-03T09:00:00", user_buy_count=95),
    _product(1013, "Pomegranate", "PG001", 230, 4, 1, "2024-04-18T09:00:00", in_stock=False),
    _product(1014, "Apple Sapling", "AS100", 140, 1, 5, "2024-05-02T09:00:00",
             description="Grafted apple sapling", best_seller=True, user_buy_count=150),
    _product(1015, "Herb Garden Kit", "HK100", 950, 1, 4.6, "2024-05-20T09:00:00",
             description="Five herb starter kit", offer="15%"),
    _product(1016, "Papaya", "PP001", 210, 4, 3, "2024-06-01T09:00:00"),
]

MENU = [
    {"menuId": 1, "menuName": "Home", "orderBy": 1, "active": True, "subMenu": False, "category": []},
    {
        "menuId": 2,
        "menuName": "Seed",
        "orderBy": 2,
        "active": True,
        "subMenu": True,
        "category": [
            {"categoryId": 1, "category": "All Seed"},
            {"categoryId": 2, "category": "Vegetable"},
            {"categoryId": 3, "category": "Herbal"},
            {"categoryId": 4, "category": "Fruits"},
            {"categoryId": 5, "category": "Greens"},
        ],
    },
    {"menuId": 4, "menuName": "Contact Us", "orderBy": 4, "active": True, "subMenu": False, "category": []},
    {"menuId": 3, "menuName": "Plants", "orderBy": 3, "active": True, "subMenu": True, "category": [
        {"categoryId": 1, "category": "All Plants"},
        {"categoryId": 2, "category": "Indoor"},
    ]},
    {"menuId": 5, "menuName": "Offers", "orderBy": 5, "active": False, "subMenu": False, "category": []},
]


def _review(
    review_id: int,
    product_id: int,
    user_name: str,
    rating: int,
    title: str,
    comment: str,
    helpful: int,
    created: str,
    verified: bool = True,
) -> dict:
    return {
        "reviewId": review_id,
        "productId": product_id,
        "userId": review_id,
        "userName": user_name,
        "userEmail": f"{user_name.split()[0].lower()}@example.com",
        "rating": rating,
        "title": title,
        "comment": comment,
        "helpful": helpful,
        "verified": verified,
        "createdAt": created,
        "updatedAt": created,
    }


REVIEWS = [
    _review(1, 1001, "John Doe", 5, "Excellent product!",
            "Incredibly fresh and delicious. Perfect for morning smoothies.", 15,
            "2024-01-15T10:30:00Z"),
    _review(2, 1001, "Sarah Johnson", 4, "Good quality",
            "Fresh and crisp apples. Great value for money.", 8, "2024-01-10T14:20:00Z"),
    _review(3, 1001, "Mike Wilson", 5, "Perfect for baking",
            "Sweet and firm texture, great in pies.", 12, "2024-01-05T09:15:00Z"),
    _review(4, 1002, "Emma Davis", 4, "Fresh oranges",
            "Juicy and sweet. Perfect for breakfast juice.", 6, "2024-01-12T16:45:00Z"),
    _review(5, 1002, "David Brown", 3, "Average quality",
            "Okay, but not as sweet as expected. Decent for the price.", 3,
            "2024-01-08T11:30:00Z", verified=False),
]


def load_reviews() -> list[ProductReview]:
    """Parse the seed reviews."""
    return [ProductReview.model_validate(data) for data in REVIEWS]


def load_products() -> list[Product]:
    """Parse the seed catalog."""
    return [Product.model_validate(data) for data in PRODUCTS]


def load_menu() -> list[MenuItem]:
    """Parse the seed menu, inactive entries included."""
    return [MenuItem.model_validate(data) for data in MENU]

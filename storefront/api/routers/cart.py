"""API endpoints for the shopping cart."""

from typing import Optional
from fastapi import APIRouter, Depends
from pydantic import Field

from ...models import ApiResponse, CamelModel, CartItem, Product
from ...providers.memory import InMemoryCartApi

router = APIRouter()

# Global cart storage (initialized on startup)
_cart: Optional[InMemoryCartApi] = None


def get_cart_api() -> InMemoryCartApi:
    """Dependency to get the cart storage."""
    global _cart
    if _cart is None:
        _cart = InMemoryCartApi()
    return _cart


class AddToCartRequest(CamelModel):
    """Request schema for adding a product."""
    product: Product
    quantity: int = Field(1, gt=0)


class UpdateCartRequest(CamelModel):
    """Request schema for changing a line's quantity."""
    product_id: int
    quantity: int = Field(..., gt=0)


class RemoveFromCartRequest(CamelModel):
    """Request schema for removing a line."""
    product_id: int


@router.get("", response_model=ApiResponse[list[CartItem]])
async def get_cart(cart: InMemoryCartApi = Depends(get_cart_api)):
    """Current cart contents."""
    return await cart.get_cart()


@router.post("/add", response_model=ApiResponse[CartItem])
async def add_to_cart(
    data: AddToCartRequest,
    cart: InMemoryCartApi = Depends(get_cart_api),
):
    """
    Add a product to the cart.

    - Creates a new line on first add
    - Increments the quantity of an existing line otherwise
    """
    return await cart.add_product_to_cart(data.product, data.quantity)


@router.post("/update", response_model=ApiResponse[CartItem])
async def update_cart_item(
    data: UpdateCartRequest,
    cart: InMemoryCartApi = Depends(get_cart_api),
):
    """Set the quantity of an existing line."""
    return await cart.update_cart_item(data.product_id, data.quantity)


@router.post("/remove", response_model=ApiResponse[None])
async def remove_from_cart(
    data: RemoveFromCartRequest,
    cart: InMemoryCartApi = Depends(get_cart_api),
):
    """Remove a line from the cart."""
    return await cart.remove_from_cart(data.product_id)


@router.post("/clear", response_model=ApiResponse[None])
async def clear_cart(cart: InMemoryCartApi = Depends(get_cart_api)):
    """Empty the cart."""
    return await cart.clear_cart()

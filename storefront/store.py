"""Application state store.

All state changes go through :func:`reduce` with one of the action variants
below. Actions never perform I/O; the orchestration layer
(:mod:`storefront.context`) talks to the providers and dispatches results.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Union

from pydantic import BaseModel, Field

from .models import (
    CartItem,
    LoadingState,
    MenuItem,
    Pagination,
    Product,
    User,
    new_item_id,
)

logger = logging.getLogger(__name__)


class AppState(BaseModel):
    """Snapshot of the whole storefront client state."""

    user: Optional[User] = None
    products: list[Product] = Field(default_factory=list)
    menu_items: list[MenuItem] = Field(default_factory=list)
    current_category: Optional[int] = None
    cart: list[CartItem] = Field(default_factory=list)
    loading: LoadingState = Field(default_factory=LoadingState)
    pagination: Pagination = Field(default_factory=Pagination)


# ============ Actions ============

@dataclass(frozen=True)
class SetUser:
    user: Optional[User]


@dataclass(frozen=True)
class SetProducts:
    products: list[Product]


@dataclass(frozen=True)
class AppendProducts:
    products: list[Product]


@dataclass(frozen=True)
class SetMenuItems:
    menu_items: list[MenuItem]


@dataclass(frozen=True)
class SetCurrentCategory:
    category_id: Optional[int]


@dataclass(frozen=True)
class SetPagination:
    pagination: Pagination


@dataclass(frozen=True)
class SetCart:
    cart: list[CartItem]


@dataclass(frozen=True)
class AddToCart:
    product: Product
    quantity: int
    # Fixed line ID for a new line; generated when omitted.
    item_id: Optional[str] = None


@dataclass(frozen=True)
class RemoveFromCart:
    product_id: int


@dataclass(frozen=True)
class UpdateCartQuantity:
    product_id: int
    quantity: int


@dataclass(frozen=True)
class ClearCart:
    pass


@dataclass(frozen=True)
class SetLoading:
    loading: LoadingState


Action = Union[
    SetUser,
    SetProducts,
    AppendProducts,
    SetMenuItems,
    SetCurrentCategory,
    SetPagination,
    SetCart,
    AddToCart,
    RemoveFromCart,
    UpdateCartQuantity,
    ClearCart,
    SetLoading,
]


# ============ Reducer ============

def _add_to_cart(cart: list[CartItem], action: AddToCart) -> list[CartItem]:
    product_id = action.product.product_id
    if any(item.product.product_id == product_id for item in cart):
        return [
            item.model_copy(update={"quantity": item.quantity + action.quantity})
            if item.product.product_id == product_id
            else item
            for item in cart
        ]
    new_item = CartItem(
        id=action.item_id or new_item_id(),
        product=action.product,
        quantity=action.quantity,
    )
    return [*cart, new_item]


def reduce(state: AppState, action: Action) -> AppState:
    """Return the state that results from applying ``action`` to ``state``."""
    if isinstance(action, SetLoading):
        return state.model_copy(update={"loading": action.loading})
    if isinstance(action, SetUser):
        return state.model_copy(update={"user": action.user})
    if isinstance(action, SetProducts):
        return state.model_copy(update={"products": list(action.products)})
    if isinstance(action, AppendProducts):
        return state.model_copy(update={"products": [*state.products, *action.products]})
    if isinstance(action, SetMenuItems):
        return state.model_copy(update={"menu_items": list(action.menu_items)})
    if isinstance(action, SetCurrentCategory):
        return state.model_copy(update={"current_category": action.category_id})
    if isinstance(action, SetPagination):
        return state.model_copy(update={"pagination": action.pagination})
    if isinstance(action, SetCart):
        return state.model_copy(update={"cart": list(action.cart)})
    if isinstance(action, AddToCart):
        return state.model_copy(update={"cart": _add_to_cart(state.cart, action)})
    if isinstance(action, RemoveFromCart):
        cart = [item for item in state.cart if item.product.product_id != action.product_id]
        return state.model_copy(update={"cart": cart})
    if isinstance(action, UpdateCartQuantity):
        # Zero or negative quantities are turned into removals before dispatch.
        cart = [
            item.model_copy(update={"quantity": action.quantity})
            if item.product.product_id == action.product_id
            else item
            for item in state.cart
        ]
        return state.model_copy(update={"cart": cart})
    if isinstance(action, ClearCart):
        return state.model_copy(update={"cart": []})
    return state


Listener = Callable[[AppState], None]


class Store:
    """Holds the current state; the single writer is :meth:`dispatch`."""

    def __init__(self, state: Optional[AppState] = None):
        self._state = state or AppState()
        self._listeners: list[Listener] = []

    @property
    def state(self) -> AppState:
        return self._state

    def dispatch(self, action: Action) -> AppState:
        logger.debug("dispatch %s", type(action).__name__)
        self._state = reduce(self._state, action)
        for listener in list(self._listeners):
            listener(self._state)
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

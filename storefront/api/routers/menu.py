"""API endpoint for the navigation menu."""

from fastapi import APIRouter, Depends
from pydantic import Field

from ...errors import TransientFetchError
from ...models import CamelModel, MenuItem
from ...providers.memory import InMemoryCatalog
from .products import get_catalog, unavailable

router = APIRouter()


class MenuMaster(CamelModel):
    """Response schema for the menu."""
    menu_master: list[MenuItem] = Field(default_factory=list)


@router.get("/master", response_model=MenuMaster)
async def get_menu(catalog: InMemoryCatalog = Depends(get_catalog)):
    """All menu entries, inactive ones included; clients filter and order them."""
    try:
        return MenuMaster(menu_master=await catalog.get_menu())
    except TransientFetchError as e:
        raise unavailable(e)

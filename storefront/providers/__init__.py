"""Catalog and cart providers."""

from .base import CartApi, CatalogProvider
from .http import HttpCartApi, HttpCatalogProvider
from .memory import InMemoryCartApi, InMemoryCatalog

__all__ = [
    "CartApi",
    "CatalogProvider",
    "HttpCartApi",
    "HttpCatalogProvider",
    "InMemoryCartApi",
    "InMemoryCatalog",
]

"""Storefront catalog core: product queries, cart store and providers."""

__version__ = "1.0.0"

#!/usr/bin/env python3
"""
Demo of the storefront catalog core.

This script shows how to:
1. Browse the catalog with search, filters and "load more"
2. Share listing state through the URL query string
3. Add products to the cart
"""

import asyncio
import logging

from storefront.config import load_config
from storefront.context import StorefrontContext
from storefront.listing import ProductListing
from storefront.models import FilterState, SortBy, SortOrder, cart_total
from storefront.providers import InMemoryCartApi, InMemoryCatalog


def print_products(listing: ProductListing):
    print(f"{len(listing.products)} products shown ({listing.total} total)")
    for product in listing.products:
        offer = f" [{product.offer} off]" if product.has_offer else ""
        print(f"  - {product.product_name:<18} {product.price:>7.2f}  {product.rating:.1f}*{offer}")


async def browse(catalog: InMemoryCatalog, page_size: int):
    """Search, filter and paginate a listing."""
    print(f"\n{'='*50}")
    print("Browsing the catalog")
    print("=" * 50)

    listing = ProductListing(catalog, page_size=page_size, category_name="All Products")
    await listing.refresh()
    print_products(listing)

    while listing.has_next:
        await listing.load_more()
    print(f"\nAfter loading every page: {len(listing.products)} products")

    await listing.search("apple")
    print(f"\n{listing.title}")
    print_products(listing)

    await listing.change_filters(FilterState(ratings={4}, in_stock=True))
    await listing.change_sort(SortBy.PRICE, SortOrder.DESC)
    print("\nIn stock, 4 stars & up, most expensive first:")
    print_products(listing)
    print(f"\nShareable URL: /products?{listing.query_string}")

    return listing


async def shop(context: StorefrontContext):
    """Fill and edit the cart."""
    print(f"\n{'='*50}")
    print("Cart")
    print("=" * 50)

    await context.initialize()
    products = context.state.products

    await context.add_to_cart(products[0], 2)
    await context.add_to_cart(products[0], 3)
    await context.add_to_cart(products[1], 1)
    await context.update_cart_quantity(products[1].product_id, 0)

    for item in context.state.cart:
        print(f"  {item.product.product_name}: {item.quantity} x {item.product.price:.2f}")
    print(f"Cart total: {cart_total(context.state.cart):.2f}")

    if context.state.loading.error:
        print(f"Last error: {context.state.loading.error}")


async def main():
    """Main entry point."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    config = load_config()

    print("\n" + "=" * 60)
    print("Storefront Catalog Demo")
    print("=" * 60)

    catalog = InMemoryCatalog(
        latency=config.catalog.latency, failure_rate=config.catalog.failure_rate
    )
    await browse(catalog, config.catalog.listing_page_size)

    context = StorefrontContext(
        catalog,
        InMemoryCartApi(latency=config.catalog.latency, failure_rate=config.catalog.failure_rate),
        page_size=config.catalog.page_size,
    )
    await shop(context)

    print("\n" + "=" * 60)
    print("Demo complete!")
    print("=" * 60)


if __name__ == "__main__":
    asyncio.run(main())

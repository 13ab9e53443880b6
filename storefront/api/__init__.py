"""Mock storefront HTTP API."""

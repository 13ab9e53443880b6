"""Configuration management."""

import os
from dataclasses import dataclass, field
from dotenv import load_dotenv

load_dotenv()


def _env_float(name: str, default: str) -> float:
    return float(os.getenv(name, default))


@dataclass
class ApiConfig:
    """Storefront REST API configuration.

    Handed to :class:`storefront.client.ApiClient` at construction and kept
    for the lifetime of that client session.
    """

    base_url: str = field(
        default_factory=lambda: os.getenv("STOREFRONT_API_URL", "http://localhost:3001/api")
    )
    tenant_id: str = field(default_factory=lambda: os.getenv("STOREFRONT_TENANT_ID", ""))
    auth_token: str = field(default_factory=lambda: os.getenv("STOREFRONT_AUTH_TOKEN", ""))

    # Request behavior
    timeout: float = field(default_factory=lambda: _env_float("STOREFRONT_TIMEOUT", "10"))
    max_retries: int = field(
        default_factory=lambda: int(os.getenv("STOREFRONT_MAX_RETRIES", "3"))
    )
    max_backoff: float = field(
        default_factory=lambda: _env_float("STOREFRONT_MAX_BACKOFF", "8")
    )

    @property
    def api_base_url(self) -> str:
        """Base URL without a trailing slash."""
        return self.base_url.rstrip("/")

    @property
    def auth_headers(self) -> dict[str, str]:
        """Headers sent with every request."""
        headers = {"Accept": "application/json"}
        if self.auth_token:
            headers["Authorization"] = f"Bearer {self.auth_token}"
        if self.tenant_id:
            headers["X-Tenant-Id"] = self.tenant_id
        return headers


@dataclass
class CatalogConfig:
    """Catalog browsing configuration."""

    page_size: int = 10
    listing_page_size: int = 12

    # In-memory adapters
    latency: float = field(
        default_factory=lambda: _env_float("STOREFRONT_MOCK_LATENCY", "0")
    )
    failure_rate: float = field(
        default_factory=lambda: _env_float("STOREFRONT_MOCK_FAILURE_RATE", "0")
    )


@dataclass
class StorefrontConfig:
    """Top-level configuration for one storefront session."""

    api: ApiConfig = field(default_factory=ApiConfig)
    catalog: CatalogConfig = field(default_factory=CatalogConfig)


def load_config() -> StorefrontConfig:
    """Build a fresh configuration from the current environment."""
    return StorefrontConfig()

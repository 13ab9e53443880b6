"""Storefront error types."""

from typing import Optional


class StorefrontError(Exception):
    """Base class for storefront errors."""


class ValidationError(StorefrontError, ValueError):
    """Malformed arguments to a catalog query (bad page or limit)."""


class NotFoundError(StorefrontError):
    """A referenced product or category does not resolve."""


class TransientFetchError(StorefrontError):
    """A catalog or cart provider call failed; the caller may retry."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code

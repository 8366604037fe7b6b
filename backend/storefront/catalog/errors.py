# Overview: Error taxonomy for catalog listing queries.

from __future__ import annotations

from ..validation import ValidationError


class CatalogError(Exception):
    """Base class for catalog listing failures."""


class InvalidCursor(CatalogError):
    """
    Cursor could not be decoded or does not match the active sort chain.

    Never reaches callers of list_products: the service treats the request
    as a first-page request instead.
    """


class CatalogQueryFailed(CatalogError):
    """Store or transport failure while executing a catalog query."""

    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(message)
        self.cause = cause


class InvalidFilterCombination(ValidationError):
    """Filter values that cannot be satisfied together (e.g., min_price > max_price)."""

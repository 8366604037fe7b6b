# backend/storefront/services/products_service.py
"""
Products Listing Service

Single entry point for product listings, shared by the storefront and the
admin product grid.

- list_products resolves the sort chain and compiles filters independently,
  then builds the keyset predicate from the (validated) cursor
- The plan is assembled once and executed in one round trip plus an exact count
- Invalid or mismatched cursors restart the listing at the first page
"""
from __future__ import annotations

from flask import current_app

from ..extensions import db
from ..catalog import (
    AdminFilters,
    CatalogQueryFailed,
    CustomerFilters,
    CustomerSort,
    FilterSpec,
    InvalidCursor,
    InvalidFilterCombination,
    Role,
    assemble_plan,
    build_page,
    compile_filters,
    decode_cursor,
    execute_plan,
    resolve_sort_chain,
)


def clamp_limit(limit: int | None) -> int:
    """Default when absent, otherwise clamped to [1, CATALOG_MAX_PAGE_LIMIT]."""
    default = current_app.config.get("CATALOG_DEFAULT_PAGE_LIMIT", 12)
    maximum = current_app.config.get("CATALOG_MAX_PAGE_LIMIT", 100)
    if limit is None:
        return default
    return max(1, min(limit, maximum))


def _check_role(role: str, filters: FilterSpec) -> None:
    if role not in Role.ALL:
        raise InvalidFilterCombination(f"Unknown role: {role}")
    if getattr(filters, "role", None) != role:
        raise InvalidFilterCombination(
            f"{type(filters).__name__} cannot be used for a {role} listing"
        )


def list_products(
    role: str,
    filters: FilterSpec | None = None,
    category_id: int | None = None,
    cursor: str | None = None,
    limit: int | None = None,
    *,
    strict: bool = False,
) -> dict:
    """
    Keyset-paginated product listing.

    Args:
        role: Role.CUSTOMER or Role.ADMIN
        filters: CustomerFilters / AdminFilters matching role (defaults if None)
        category_id: Explicit category; overrides filters.category_id (customer only)
        cursor: nextCursor from the previous page, or None for the first page
        limit: Page size (config default if None, clamped to config max)
        strict: Reject unsatisfiable filter ranges instead of returning nothing

    Returns:
        Dict with 'products', 'total' and 'nextCursor'.

    Raises:
        InvalidFilterCombination: role/filter mismatch, admin category filter,
            or (strict only) min > max ranges
        CatalogQueryFailed: database failure
    """
    if filters is None:
        filters = CustomerFilters() if role == Role.CUSTOMER else AdminFilters()
    _check_role(role, filters)

    limit = clamp_limit(limit)

    # Independent of each other
    chain = resolve_sort_chain(filters)
    compiled = compile_filters(filters, category_id, strict=strict)

    cursor_values = None
    if cursor:
        try:
            cursor_values = decode_cursor(cursor, chain)
        except InvalidCursor as e:
            current_app.logger.info("Ignoring pagination cursor, starting from first page: %s", e)

    plan = assemble_plan(compiled, chain, cursor_values, limit)

    try:
        rows, total = execute_plan(db.session, plan)
    except CatalogQueryFailed as e:
        current_app.logger.error("Catalog query failed (role=%s): %r", role, e.cause)
        raise

    return build_page(rows, chain=chain, limit=limit, total=total)


def list_highlights() -> dict:
    """
    Storefront home sections: newest arrivals and featured products.

    Two independent first-page listings; neither carries a cursor forward.
    """
    new_arrivals = list_products(
        Role.CUSTOMER,
        CustomerFilters(sort_order=CustomerSort.NEWEST),
        limit=current_app.config.get("CATALOG_HIGHLIGHT_NEW_ARRIVALS", 8),
    )
    featured = list_products(
        Role.CUSTOMER,
        CustomerFilters(sort_order=CustomerSort.FEATURED),
        limit=current_app.config.get("CATALOG_HIGHLIGHT_FEATURED", 4),
    )
    return {
        "new_arrivals": new_arrivals["products"],
        "featured": featured["products"],
    }


def get_products_module_status() -> dict:
    """
    A tiny status payload the frontend can use to confirm module wiring.
    """
    return {
        "module": "products",
        "status": "db-ready",
        "notes": "Keyset-paginated listing for storefront and admin roles.",
    }

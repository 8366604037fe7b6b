# Overview: Flask API routes for the admin product grid; parses input and returns JSON responses.

# backend/storefront/routes/admin.py
"""
Admin product grid routes.

Unlike the storefront listing, inactive products are included unless the
caller filters on isActive explicitly.
"""

from flask import Blueprint, request, current_app

from ..services.products_service import list_products as list_products_service
from ..catalog import AdminFilters, AdminSortField, CatalogQueryFailed, Role, SortDirection
from ..validation import (
    ValidationError,
    parse_bool_arg,
    parse_choice_arg,
    parse_int_arg,
    parse_text_arg,
)

admin_bp = Blueprint("admin", __name__, url_prefix="/api/admin")


def admin_filters_from_args(args) -> AdminFilters:
    return AdminFilters(
        search=parse_text_arg(args, "search"),
        min_price_cents=parse_int_arg(args, "minPrice"),
        max_price_cents=parse_int_arg(args, "maxPrice"),
        min_stock=parse_int_arg(args, "minStock"),
        max_stock=parse_int_arg(args, "maxStock"),
        is_active=parse_bool_arg(args, "isActive"),
        has_variants=parse_bool_arg(args, "hasVariants"),
        sort_by=parse_choice_arg(args, "sortBy", AdminSortField.ALL) or AdminSortField.DEFAULT,
        sort_order=parse_choice_arg(args, "sortOrder", SortDirection.ALL) or SortDirection.ASC,
    )


@admin_bp.get("/products")
def list_products():
    """
    List products for the admin grid.

    Query params:
    - cursor: str (optional) - nextCursor from the previous page
    - limit: int (optional) - page size (default 12, max 100)
    - search: str (optional) - case-insensitive substring of the name
    - minPrice, maxPrice: int (optional) - price bounds in cents
    - minStock, maxStock: int (optional)
    - isActive, hasVariants: bool (optional)
    - sortBy: name | price | stock | created (default name)
    - sortOrder: asc | desc (default asc)
    """
    try:
        filters = admin_filters_from_args(request.args)
        limit = parse_int_arg(request.args, "limit")
        cursor = parse_text_arg(request.args, "cursor", max_length=4096)
        return list_products_service(
            Role.ADMIN,
            filters,
            cursor=cursor,
            limit=limit,
            strict=True,
        )
    except ValidationError as e:
        return {"error": str(e)}, 400
    except CatalogQueryFailed:
        current_app.logger.exception("Failed to list admin products")
        return {"error": "Catalog temporarily unavailable"}, 503

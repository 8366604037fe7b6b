# Overview: Flask API routes for the storefront product listing; parses input and returns JSON responses.

# backend/storefront/routes/products.py
"""
Storefront product listing routes.

Listings are keyset-paginated: clients pass back the `nextCursor` of the
previous response as `cursor`. Cursors are opaque; a stale or foreign one
restarts the listing at the first page rather than failing.
"""
from flask import Blueprint, request, current_app
from ..services.products_service import (
    list_products as list_products_service,
    list_highlights,
    get_products_module_status,
)
from ..catalog import CatalogQueryFailed, CustomerFilters, CustomerSort, Role
from ..validation import (
    ValidationError,
    parse_bool_arg,
    parse_choice_arg,
    parse_int_arg,
    parse_text_arg,
)

products_bp = Blueprint("products", __name__, url_prefix="/api/products")

UNAVAILABLE = {"error": "Catalog temporarily unavailable"}


def customer_filters_from_args(args) -> CustomerFilters:
    """Build storefront filters from query args (prices in cents)."""
    return CustomerFilters(
        min_price_cents=parse_int_arg(args, "minPrice"),
        max_price_cents=parse_int_arg(args, "maxPrice"),
        in_stock_only=bool(parse_bool_arg(args, "inStockOnly")),
        category_id=parse_int_arg(args, "categoryId"),
        sort_order=parse_choice_arg(args, "sortOrder", CustomerSort.ALL) or CustomerSort.DEFAULT,
    )


@products_bp.get("/status")
def products_status():
    """Get product module status."""
    return get_products_module_status()


@products_bp.get("")
def list_products():
    """
    List active products for the storefront.

    Query params:
    - cursor: str (optional) - nextCursor from the previous page
    - limit: int (optional) - page size (default 12, max 100)
    - sortOrder: featured | price_asc | price_desc | newest (default featured)
    - minPrice, maxPrice: int (optional) - price bounds in cents
    - inStockOnly: bool (optional)
    - categoryId: int (optional) - restrict to one category
    """
    try:
        filters = customer_filters_from_args(request.args)
        limit = parse_int_arg(request.args, "limit")
        cursor = parse_text_arg(request.args, "cursor", max_length=4096)
        return list_products_service(
            Role.CUSTOMER,
            filters,
            cursor=cursor,
            limit=limit,
            strict=True,
        )
    except ValidationError as e:
        return {"error": str(e)}, 400
    except CatalogQueryFailed:
        current_app.logger.exception("Failed to list products")
        return UNAVAILABLE, 503


@products_bp.get("/highlights")
def product_highlights():
    """Newest arrivals and featured products for the home page."""
    try:
        return list_highlights()
    except CatalogQueryFailed:
        current_app.logger.exception("Failed to load product highlights")
        return UNAVAILABLE, 503


@products_bp.get("/category/<int:category_id>")
def list_category_products(category_id: int):
    """
    List active products in one category.

    The path category always wins over a categoryId query arg.
    Accepts the same query params as the main listing.
    """
    try:
        filters = customer_filters_from_args(request.args)
        limit = parse_int_arg(request.args, "limit")
        cursor = parse_text_arg(request.args, "cursor", max_length=4096)
        return list_products_service(
            Role.CUSTOMER,
            filters,
            category_id=category_id,
            cursor=cursor,
            limit=limit,
            strict=True,
        )
    except ValidationError as e:
        return {"error": str(e)}, 400
    except CatalogQueryFailed:
        current_app.logger.exception("Failed to list category products")
        return UNAVAILABLE, 503

# Overview: Flask API routes for storefront categories; feeds the category filter.

# backend/storefront/routes/categories.py
from flask import Blueprint, current_app

from ..services.categories_service import list_categories as list_categories_service
from ..catalog import CatalogQueryFailed

categories_bp = Blueprint("categories", __name__, url_prefix="/api/categories")


@categories_bp.get("")
def list_categories():
    """
    Active categories as {"categories": [{"id", "name", "slug"}]}.

    The ids are the values accepted by categoryId and
    /api/products/category/<id>.
    """
    try:
        return {"categories": list_categories_service(active_only=True)}
    except CatalogQueryFailed:
        current_app.logger.exception("Failed to list categories")
        return {"error": "Catalog temporarily unavailable"}, 503

# backend/storefront/services/categories_service.py
"""
Category Service

Category options for the storefront filter panel. Listings take a
categoryId; this is where clients discover the valid ones.
"""
from __future__ import annotations

from sqlalchemy import select, true
from sqlalchemy.exc import SQLAlchemyError

from ..extensions import db
from ..models import Category
from ..catalog import CatalogQueryFailed


def list_categories(*, active_only: bool = True) -> list[dict]:
    """
    Categories ordered by name, then id.

    Args:
        active_only: Hide inactive categories (storefront default)

    Returns:
        List of {"id", "name", "slug"} dicts.

    Raises:
        CatalogQueryFailed: database failure (session rolled back)
    """
    stmt = select(Category.id, Category.name, Category.slug).order_by(Category.name.asc(), Category.id.asc())
    if active_only:
        stmt = stmt.where(Category.is_active == true())

    try:
        rows = db.session.execute(stmt).all()
    except SQLAlchemyError as exc:
        db.session.rollback()
        raise CatalogQueryFailed("Category query failed", cause=exc) from exc

    return [{"id": row.id, "name": row.name, "slug": row.slug} for row in rows]

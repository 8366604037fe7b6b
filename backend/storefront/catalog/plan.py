# Overview: Immutable query plan for one catalog listing request.

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy import and_, distinct, func, select
from sqlalchemy.orm import aliased
from sqlalchemy.sql.elements import ColumnElement

from ..models import Category, Product, ProductCategory
from .compiler import JOIN_INNER, CompiledFilters
from .keyset import build_seek_predicate, order_by_clauses, subquery_columns
from .sorting import SortChain

# Product columns carried by every listing row
LISTING_COLUMNS = (
    Product.id,
    Product.sku,
    Product.name,
    Product.description,
    Product.image_url,
    Product.price_cents,
    Product.stock,
    Product.is_active,
    Product.featured,
    Product.has_variants,
    Product.created_at,
)


@dataclass(frozen=True)
class QueryPlan:
    """
    Everything needed to run one listing request.

    Built once by assemble_plan() and never mutated. The row and count
    statements are both derived from the same filters and join mode; only
    the row statement carries the seek predicate, ordering and limit.
    """
    filters: CompiledFilters
    chain: SortChain
    seek: ColumnElement
    limit: int

    @property
    def join_mode(self) -> str:
        return self.filters.join_mode

    def _restrict(self, stmt):
        if self.filters.join_mode == JOIN_INNER:
            stmt = stmt.join(
                ProductCategory,
                and_(
                    ProductCategory.product_id == Product.id,
                    ProductCategory.category_id == self.filters.category_id,
                ),
            )
        return stmt.where(*self.filters.predicates)

    def page_subquery(self):
        stmt = self._restrict(select(*LISTING_COLUMNS).select_from(Product))
        # One row past the page tells the transformer whether another page exists
        stmt = stmt.where(self.seek).order_by(*order_by_clauses(self.chain)).limit(self.limit + 1)
        return stmt.subquery("page")

    def rows_statement(self):
        """
        One round trip: the limited page of products, left-joined to all of
        their categories for display. A product with several categories
        yields several consecutive rows; one without yields a single row
        with NULL category columns.
        """
        page = self.page_subquery()
        links = aliased(ProductCategory)
        return (
            select(
                page,
                Category.id.label("category_id"),
                Category.name.label("category_name"),
            )
            .select_from(page)
            .outerjoin(links, links.product_id == page.c.id)
            .outerjoin(Category, Category.id == links.category_id)
            .order_by(*order_by_clauses(self.chain, subquery_columns(page)), links.id.asc())
        )

    def count_statement(self):
        """Exact count of matching products, ignoring the cursor."""
        return self._restrict(select(func.count(distinct(Product.id))).select_from(Product))


def assemble_plan(
    filters: CompiledFilters,
    chain: SortChain,
    cursor_values: dict | None,
    limit: int,
) -> QueryPlan:
    if limit < 1:
        raise ValueError("limit must be >= 1")
    return QueryPlan(
        filters=filters,
        chain=chain,
        seek=build_seek_predicate(chain, cursor_values),
        limit=limit,
    )

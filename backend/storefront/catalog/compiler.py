# Overview: Compiles role-tagged filters into scalar predicates plus a category join mode.

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy import true
from sqlalchemy.sql.elements import ColumnElement

from ..models import Product
from .errors import InvalidFilterCombination
from .filters import AdminFilters, CustomerFilters, FilterSpec

JOIN_LEFT = "left"
JOIN_INNER = "inner"

LIKE_ESCAPE = "\\"


@dataclass(frozen=True)
class CompiledFilters:
    """
    Output of the filter compiler.

    predicates: scalar conditions on the products table, ANDed together.
    join_mode:  JOIN_LEFT (categories only decorate rows) or JOIN_INNER
                (rows restricted to products linked to category_id).

    The same predicates tuple feeds the row query and the count query in
    both join modes; switching modes never rebuilds it.
    """
    predicates: tuple[ColumnElement, ...]
    join_mode: str = JOIN_LEFT
    category_id: int | None = None

    @property
    def is_category_filtered(self) -> bool:
        return self.join_mode == JOIN_INNER


def escape_like(value: str) -> str:
    return (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def _check_range(low, high, label: str, strict: bool) -> None:
    if not strict or low is None or high is None:
        return
    if low > high:
        raise InvalidFilterCombination(f"min {label} cannot be greater than max {label}")


def compile_customer_filters(
    filters: CustomerFilters,
    category_id: int | None = None,
    *,
    strict: bool = False,
) -> CompiledFilters:
    _check_range(filters.min_price_cents, filters.max_price_cents, "price", strict)

    # Storefront never shows inactive products
    predicates: list[ColumnElement] = [Product.is_active == true()]

    if filters.min_price_cents is not None:
        predicates.append(Product.price_cents >= filters.min_price_cents)
    if filters.max_price_cents is not None:
        predicates.append(Product.price_cents <= filters.max_price_cents)
    if filters.in_stock_only:
        predicates.append(Product.stock > 0)

    # Explicit argument wins over the one embedded in the filters
    effective_category = category_id if category_id is not None else filters.category_id
    if effective_category is None:
        return CompiledFilters(predicates=tuple(predicates), join_mode=JOIN_LEFT)

    return CompiledFilters(
        predicates=tuple(predicates),
        join_mode=JOIN_INNER,
        category_id=effective_category,
    )


def compile_admin_filters(
    filters: AdminFilters,
    category_id: int | None = None,
    *,
    strict: bool = False,
) -> CompiledFilters:
    if category_id is not None:
        raise InvalidFilterCombination("Category filtering is not available for admin listings")

    _check_range(filters.min_price_cents, filters.max_price_cents, "price", strict)
    _check_range(filters.min_stock, filters.max_stock, "stock", strict)

    predicates: list[ColumnElement] = []

    if filters.search:
        pattern = f"%{escape_like(filters.search)}%"
        predicates.append(Product.name.ilike(pattern, escape=LIKE_ESCAPE))
    if filters.min_price_cents is not None:
        predicates.append(Product.price_cents >= filters.min_price_cents)
    if filters.max_price_cents is not None:
        predicates.append(Product.price_cents <= filters.max_price_cents)
    if filters.min_stock is not None:
        predicates.append(Product.stock >= filters.min_stock)
    if filters.max_stock is not None:
        predicates.append(Product.stock <= filters.max_stock)
    if filters.is_active is not None:
        predicates.append(Product.is_active == filters.is_active)
    if filters.has_variants is not None:
        predicates.append(Product.has_variants == filters.has_variants)

    return CompiledFilters(predicates=tuple(predicates), join_mode=JOIN_LEFT)


def compile_filters(
    filters: FilterSpec,
    category_id: int | None = None,
    *,
    strict: bool = False,
) -> CompiledFilters:
    """
    Compile a filter object.

    strict=True turns unsatisfiable ranges into InvalidFilterCombination;
    otherwise they simply match nothing.
    """
    if isinstance(filters, CustomerFilters):
        return compile_customer_filters(filters, category_id, strict=strict)
    if isinstance(filters, AdminFilters):
        return compile_admin_filters(filters, category_id, strict=strict)
    raise TypeError(f"Unsupported filter object: {type(filters).__name__}")

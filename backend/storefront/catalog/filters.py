# Overview: Role-tagged filter objects accepted by the catalog listing.

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


class Role:
    """Who is asking for the listing."""
    CUSTOMER = "customer"
    ADMIN = "admin"

    ALL = (CUSTOMER, ADMIN)


class CustomerSort:
    FEATURED = "featured"
    PRICE_ASC = "price_asc"
    PRICE_DESC = "price_desc"
    NEWEST = "newest"

    ALL = (FEATURED, PRICE_ASC, PRICE_DESC, NEWEST)
    DEFAULT = FEATURED


class AdminSortField:
    NAME = "name"
    PRICE = "price"
    STOCK = "stock"
    CREATED = "created"

    ALL = (NAME, PRICE, STOCK, CREATED)
    DEFAULT = NAME


class SortDirection:
    ASC = "asc"
    DESC = "desc"

    ALL = (ASC, DESC)


@dataclass(frozen=True)
class CustomerFilters:
    """
    Storefront filters.

    Prices are in cents, matching Product.price_cents.
    """
    min_price_cents: int | None = None
    max_price_cents: int | None = None
    in_stock_only: bool = False
    category_id: int | None = None
    sort_order: str = CustomerSort.DEFAULT

    role = Role.CUSTOMER


@dataclass(frozen=True)
class AdminFilters:
    """Back-office product grid filters. No implicit is_active filter."""
    search: str | None = None
    min_price_cents: int | None = None
    max_price_cents: int | None = None
    min_stock: int | None = None
    max_stock: int | None = None
    is_active: bool | None = None
    has_variants: bool | None = None
    sort_by: str = AdminSortField.DEFAULT
    sort_order: str = SortDirection.ASC

    role = Role.ADMIN


FilterSpec = Union[CustomerFilters, AdminFilters]

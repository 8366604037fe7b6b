# Overview: Resolves a named listing order into an explicit, totally ordered key chain.

from __future__ import annotations

from dataclasses import dataclass

from ..validation import ValidationError
from .filters import (
    AdminFilters,
    AdminSortField,
    CustomerFilters,
    CustomerSort,
    FilterSpec,
    SortDirection,
)

NULLS_FIRST = "first"
NULLS_LAST = "last"

TIE_BREAKER_FIELD = "id"


@dataclass(frozen=True)
class SortableField:
    """Product column that may appear in a sort chain (and therefore in a cursor)."""
    name: str
    kind: str  # "int" | "str" | "bool" | "datetime"
    nullable: bool


SORTABLE_FIELDS: dict[str, SortableField] = {
    f.name: f
    for f in (
        SortableField("id", "int", nullable=False),
        SortableField("name", "str", nullable=False),
        SortableField("price_cents", "int", nullable=True),
        SortableField("stock", "int", nullable=True),
        SortableField("featured", "bool", nullable=False),
        SortableField("created_at", "datetime", nullable=False),
    )
}


@dataclass(frozen=True)
class SortKey:
    field: str
    direction: str = SortDirection.ASC
    nulls: str | None = None

    @property
    def descending(self) -> bool:
        return self.direction == SortDirection.DESC

    @property
    def spec(self) -> SortableField:
        return SORTABLE_FIELDS[self.field]

    def token(self) -> str:
        if self.nulls:
            return f"{self.field}:{self.direction}:nulls_{self.nulls}"
        return f"{self.field}:{self.direction}"


@dataclass(frozen=True)
class SortChain:
    """
    Ordered sort keys ending in the unique id tie-breaker.

    Two chains with the same signature order rows identically, so a cursor
    produced under one is valid under the other.
    """
    keys: tuple[SortKey, ...]

    def __post_init__(self):
        if not self.keys:
            raise ValueError("Sort chain cannot be empty")
        fields = [k.field for k in self.keys]
        if len(set(fields)) != len(fields):
            raise ValueError(f"Sort chain repeats a field: {fields}")
        last = self.keys[-1]
        if last.field != TIE_BREAKER_FIELD:
            raise ValueError("Sort chain must end with the id tie-breaker")
        for key in self.keys:
            if key.field not in SORTABLE_FIELDS:
                raise ValueError(f"Field is not sortable: {key.field}")
            if SORTABLE_FIELDS[key.field].nullable and key.nulls is None:
                raise ValueError(f"Nullable sort field needs explicit nulls placement: {key.field}")

    @property
    def fields(self) -> tuple[str, ...]:
        return tuple(k.field for k in self.keys)

    @property
    def signature(self) -> str:
        return ",".join(k.token() for k in self.keys)

    @property
    def is_id_only(self) -> bool:
        return len(self.keys) == 1

    def __iter__(self):
        return iter(self.keys)

    def __len__(self) -> int:
        return len(self.keys)


CUSTOMER_SORT_KEYS: dict[str, tuple[SortKey, ...]] = {
    CustomerSort.PRICE_ASC: (SortKey("price_cents", SortDirection.ASC, NULLS_LAST),),
    CustomerSort.PRICE_DESC: (SortKey("price_cents", SortDirection.DESC, NULLS_LAST),),
    CustomerSort.NEWEST: (SortKey("created_at", SortDirection.DESC),),
    CustomerSort.FEATURED: (
        SortKey("featured", SortDirection.DESC, NULLS_LAST),
        SortKey("created_at", SortDirection.DESC),
    ),
}

ADMIN_SORT_FIELDS: dict[str, str] = {
    AdminSortField.NAME: "name",
    AdminSortField.PRICE: "price_cents",
    AdminSortField.STOCK: "stock",
    AdminSortField.CREATED: "created_at",
}


def with_tie_breaker(keys) -> SortChain:
    keys = tuple(keys)
    if not keys or keys[0].field != TIE_BREAKER_FIELD:
        keys = keys + (SortKey(TIE_BREAKER_FIELD, SortDirection.ASC),)
    return SortChain(keys)


def resolve_customer_sort(sort_order: str | None) -> SortChain:
    name = sort_order or CustomerSort.DEFAULT
    try:
        keys = CUSTOMER_SORT_KEYS[name]
    except KeyError:
        raise ValidationError(f"sortOrder must be one of: {', '.join(CustomerSort.ALL)}")
    return with_tie_breaker(keys)


def resolve_admin_sort(sort_by: str | None, sort_order: str | None) -> SortChain:
    sort_by = sort_by or AdminSortField.DEFAULT
    direction = sort_order or SortDirection.ASC

    if sort_by not in ADMIN_SORT_FIELDS:
        raise ValidationError(f"sortBy must be one of: {', '.join(AdminSortField.ALL)}")
    if direction not in SortDirection.ALL:
        raise ValidationError("sortOrder must be asc or desc")

    field = ADMIN_SORT_FIELDS[sort_by]
    nulls = NULLS_LAST if SORTABLE_FIELDS[field].nullable else None
    return with_tie_breaker((SortKey(field, direction, nulls),))


def resolve_sort_chain(filters: FilterSpec) -> SortChain:
    """Sort chain for a role-tagged filter object."""
    if isinstance(filters, CustomerFilters):
        return resolve_customer_sort(filters.sort_order)
    if isinstance(filters, AdminFilters):
        return resolve_admin_sort(filters.sort_by, filters.sort_order)
    raise TypeError(f"Unsupported filter object: {type(filters).__name__}")

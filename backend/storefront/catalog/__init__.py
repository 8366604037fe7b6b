# Overview: Catalog query compiler and keyset pagination engine.
# Re-exports the public building blocks used by the products service.

from .errors import CatalogError, CatalogQueryFailed, InvalidCursor, InvalidFilterCombination
from .filters import (
    AdminFilters,
    AdminSortField,
    CustomerFilters,
    CustomerSort,
    FilterSpec,
    Role,
    SortDirection,
)
from .sorting import SortChain, SortKey, resolve_sort_chain
from .cursor import decode_cursor, encode_cursor
from .compiler import JOIN_INNER, JOIN_LEFT, CompiledFilters, compile_filters
from .keyset import build_seek_predicate, order_by_clauses
from .plan import QueryPlan, assemble_plan
from .execution import execute_plan
from .results import build_page

__all__ = [
    "CatalogError",
    "CatalogQueryFailed",
    "InvalidCursor",
    "InvalidFilterCombination",
    "AdminFilters",
    "AdminSortField",
    "CustomerFilters",
    "CustomerSort",
    "FilterSpec",
    "Role",
    "SortDirection",
    "SortChain",
    "SortKey",
    "resolve_sort_chain",
    "decode_cursor",
    "encode_cursor",
    "JOIN_INNER",
    "JOIN_LEFT",
    "CompiledFilters",
    "compile_filters",
    "build_seek_predicate",
    "order_by_clauses",
    "QueryPlan",
    "assemble_plan",
    "execute_plan",
    "build_page",
]

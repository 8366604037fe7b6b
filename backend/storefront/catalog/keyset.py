# Overview: Keyset (seek) predicates and ORDER BY clauses for a sort chain.

from __future__ import annotations

from typing import Any, Callable, Mapping

from sqlalchemy import and_, false, literal, or_, true
from sqlalchemy.sql.elements import ColumnElement

from ..models import Product
from .sorting import NULLS_FIRST, NULLS_LAST, SortChain, SortKey

ColumnLookup = Callable[[str], ColumnElement]


def product_columns(field: str) -> ColumnElement:
    return getattr(Product, field)


def subquery_columns(subquery) -> ColumnLookup:
    def lookup(field: str) -> ColumnElement:
        return subquery.c[field]
    return lookup


def order_by_clauses(chain: SortChain, columns: ColumnLookup = product_columns) -> list:
    clauses = []
    for key in chain:
        col = columns(key.field)
        clause = col.desc() if key.descending else col.asc()
        if key.nulls == NULLS_LAST:
            clause = clause.nulls_last()
        elif key.nulls == NULLS_FIRST:
            clause = clause.nulls_first()
        clauses.append(clause)
    return clauses


def _equal_to(col: ColumnElement, value: Any) -> ColumnElement:
    if value is None:
        return col.is_(None)
    return col == literal(value, col.type)


def _strictly_after(col: ColumnElement, key: SortKey, value: Any) -> ColumnElement | None:
    """
    Condition for rows that come after `value` on this key alone.

    None means no row can come after it on this key (a NULL cursor value
    under NULLS LAST).
    """
    if value is None:
        if key.nulls == NULLS_FIRST:
            return col.isnot(None)
        return None

    # Bound with the column type: SQLAlchemy refuses < and > against a bare True/False
    bound = literal(value, col.type)
    beyond = col < bound if key.descending else col > bound
    if key.nulls == NULLS_LAST:
        return or_(beyond, col.is_(None))
    return beyond


def build_seek_predicate(
    chain: SortChain,
    cursor_values: Mapping[str, Any] | None,
    columns: ColumnLookup = product_columns,
) -> ColumnElement:
    """
    Rows strictly after the cursor position in chain order.

    For keys f1..fn with cursor values v1..vn:

        OR over i of ( AND over j < i of fj = vj ) AND ( fi beyond vi )

    where "beyond" is > for ascending and < for descending keys, widened to
    include NULLs for NULLS LAST keys. An id-only chain reduces to id > v.

    No cursor means no constraint.
    """
    if not cursor_values:
        return true()

    disjuncts = []
    equal_prefix: list[ColumnElement] = []
    for key in chain:
        col = columns(key.field)
        value = cursor_values[key.field]

        after = _strictly_after(col, key, value)
        if after is not None:
            disjuncts.append(and_(*equal_prefix, after) if equal_prefix else after)

        equal_prefix.append(_equal_to(col, value))

    if not disjuncts:
        return false()
    return or_(*disjuncts)

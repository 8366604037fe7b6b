# Overview: Runs a query plan against the database and maps store failures.

from __future__ import annotations

from sqlalchemy.exc import SQLAlchemyError

from .errors import CatalogQueryFailed
from .plan import QueryPlan


def execute_plan(session, plan: QueryPlan) -> tuple[list, int]:
    """
    Execute the count and row statements of a plan.

    Returns (rows, total). Rows are SQLAlchemy Row objects in chain order,
    repeated once per linked category.

    Raises:
        CatalogQueryFailed: on any database error. The session is rolled
        back first so the failed transaction is released; no partial
        results are returned.
    """
    try:
        total = session.execute(plan.count_statement()).scalar_one()
        rows = session.execute(plan.rows_statement()).all()
    except SQLAlchemyError as exc:
        session.rollback()
        raise CatalogQueryFailed("Catalog query failed", cause=exc) from exc
    return rows, int(total or 0)

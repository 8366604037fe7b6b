# Overview: Turns joined listing rows into product records plus the next cursor.

from __future__ import annotations

from ..time_utils import to_utc_z
from .cursor import encode_cursor
from .sorting import SortChain


def _product_record(row) -> dict:
    return {
        "id": row.id,
        "sku": row.sku,
        "name": row.name,
        "description": row.description,
        "image_url": row.image_url,
        "price_cents": row.price_cents,
        "stock": row.stock,
        "is_active": bool(row.is_active),
        "featured": bool(row.featured),
        "has_variants": bool(row.has_variants),
        "created_at": to_utc_z(row.created_at),
        "categories": [],
    }


def group_rows(rows) -> list[tuple[object, dict]]:
    """
    Collapse consecutive rows of the same product.

    Returns [(first raw row, record)] in row order. Categories are
    deduplicated by id, keeping first-seen order.
    """
    grouped: list[tuple[object, dict]] = []
    seen_categories: set = set()
    current_id = None

    for row in rows:
        if not grouped or row.id != current_id:
            current_id = row.id
            grouped.append((row, _product_record(row)))
            seen_categories = set()

        category_id = getattr(row, "category_id", None)
        if category_id is None or category_id in seen_categories:
            continue
        seen_categories.add(category_id)
        grouped[-1][1]["categories"].append({"id": category_id, "name": row.category_name})

    return grouped


def build_page(rows, *, chain: SortChain, limit: int, total: int) -> dict:
    """
    Page payload: {"products", "total", "nextCursor"}.

    Rows may hold one product past the limit (the plan's lookahead). A cursor
    is only emitted when that extra product exists, so the exact last page
    never carries one, even when total is a multiple of limit.
    """
    grouped = group_rows(rows)
    has_more = len(grouped) > limit
    grouped = grouped[:limit]
    products = [record for _, record in grouped]

    next_cursor = None
    if has_more:
        last_row = grouped[-1][0]
        next_cursor = encode_cursor(last_row, chain)

    return {
        "products": products,
        "total": total,
        "nextCursor": next_cursor,
    }

"""
Row grouping and page assembly, without a database.
"""
from collections import namedtuple
from datetime import datetime

from storefront.catalog import build_page, decode_cursor
from storefront.catalog.results import group_rows
from storefront.catalog.sorting import resolve_customer_sort


Row = namedtuple(
    "Row",
    "id sku name description image_url price_cents stock is_active featured has_variants "
    "created_at category_id category_name",
)


def row(product_id, category_id=None, category_name=None, **overrides):
    values = dict(
        id=product_id,
        sku=f"SKU-{product_id}",
        name=f"Product {product_id}",
        description=None,
        image_url=None,
        price_cents=1000,
        stock=3,
        is_active=1,
        featured=0,
        has_variants=0,
        created_at=datetime(2026, 3, 1, 12, 0, product_id, 250),
        category_id=category_id,
        category_name=category_name,
    )
    values.update(overrides)
    return Row(**values)


NEWEST = resolve_customer_sort("newest")


class TestGroupRows:
    def test_one_record_per_product(self):
        rows = [row(3, 1, "A"), row(3, 2, "B"), row(2), row(1, 2, "B")]
        grouped = group_rows(rows)

        assert [record["id"] for _, record in grouped] == [3, 2, 1]
        assert grouped[0][1]["categories"] == [{"id": 1, "name": "A"}, {"id": 2, "name": "B"}]
        assert grouped[1][1]["categories"] == []
        assert grouped[2][1]["categories"] == [{"id": 2, "name": "B"}]

    def test_repeated_category_kept_once(self):
        grouped = group_rows([row(1, 7, "X"), row(1, 7, "X"), row(1, 8, "Y")])
        assert grouped[0][1]["categories"] == [{"id": 7, "name": "X"}, {"id": 8, "name": "Y"}]

    def test_flags_are_booleans(self):
        _, record = group_rows([row(1, featured=1, has_variants=0)])[0]
        assert record["featured"] is True
        assert record["has_variants"] is False
        assert record["is_active"] is True

    def test_empty(self):
        assert group_rows([]) == []


class TestBuildPage:
    def test_lookahead_row_emits_cursor_and_is_trimmed(self):
        rows = [row(3), row(2, 1, "A"), row(2, 2, "B"), row(1)]
        page = build_page(rows, chain=NEWEST, limit=2, total=5)

        assert [p["id"] for p in page["products"]] == [3, 2]
        assert page["total"] == 5
        assert decode_cursor(page["nextCursor"], NEWEST) == {
            "created_at": datetime(2026, 3, 1, 12, 0, 2, 250),
            "id": 2,
        }

    def test_exactly_limit_products_has_no_cursor(self):
        page = build_page([row(3), row(2, 1, "A"), row(2, 2, "B")], chain=NEWEST, limit=2, total=4)
        assert [p["id"] for p in page["products"]] == [3, 2]
        assert page["nextCursor"] is None

    def test_short_page_has_no_cursor(self):
        page = build_page([row(1)], chain=NEWEST, limit=2, total=5)
        assert page["nextCursor"] is None

    def test_page_holding_everything_has_no_cursor(self):
        page = build_page([row(2), row(1)], chain=NEWEST, limit=2, total=2)
        assert page["nextCursor"] is None

    def test_empty_page(self):
        assert build_page([], chain=NEWEST, limit=12, total=0) == {
            "products": [],
            "total": 0,
            "nextCursor": None,
        }

import pytest
from sqlalchemy.dialects import sqlite

from storefront.catalog import (
    JOIN_INNER,
    JOIN_LEFT,
    AdminFilters,
    CustomerFilters,
    InvalidFilterCombination,
    compile_filters,
)
from storefront.catalog.compiler import escape_like


def _sql(expr):
    return str(expr.compile(dialect=sqlite.dialect(), compile_kwargs={"literal_binds": True}))


def _rendered(compiled):
    return [_sql(p) for p in compiled.predicates]


class TestCustomerFilters:
    def test_active_only_is_always_applied(self):
        compiled = compile_filters(CustomerFilters())
        assert compiled.join_mode == JOIN_LEFT
        assert compiled.category_id is None
        rendered = _rendered(compiled)
        assert len(rendered) == 1
        assert "products.is_active" in rendered[0]

    def test_scalar_predicates(self):
        compiled = compile_filters(CustomerFilters(min_price_cents=100, max_price_cents=500, in_stock_only=True))
        rendered = _rendered(compiled)
        assert "products.is_active" in rendered[0]
        assert rendered[1:] == [
            "products.price_cents >= 100",
            "products.price_cents <= 500",
            "products.stock > 0",
        ]

    def test_category_switches_to_inner_join_keeping_predicates(self):
        filters = CustomerFilters(min_price_cents=100, in_stock_only=True, category_id=7)
        without = compile_filters(CustomerFilters(min_price_cents=100, in_stock_only=True))
        with_category = compile_filters(filters)

        assert with_category.join_mode == JOIN_INNER
        assert with_category.is_category_filtered
        assert with_category.category_id == 7
        assert _rendered(with_category) == _rendered(without)

    def test_explicit_category_overrides_embedded_one(self):
        compiled = compile_filters(CustomerFilters(category_id=7), category_id=9)
        assert compiled.category_id == 9
        assert compiled.join_mode == JOIN_INNER

    def test_explicit_category_applies_without_embedded_one(self):
        compiled = compile_filters(CustomerFilters(), category_id=3)
        assert compiled.category_id == 3

    def test_inverted_price_range_is_allowed_unless_strict(self):
        compiled = compile_filters(CustomerFilters(min_price_cents=900, max_price_cents=100))
        assert len(compiled.predicates) == 3

        with pytest.raises(InvalidFilterCombination):
            compile_filters(CustomerFilters(min_price_cents=900, max_price_cents=100), strict=True)

    def test_equal_bounds_are_valid_in_strict_mode(self):
        compile_filters(CustomerFilters(min_price_cents=500, max_price_cents=500), strict=True)


class TestAdminFilters:
    def test_no_implicit_active_filter(self):
        assert compile_filters(AdminFilters()).predicates == ()

    def test_all_predicates(self):
        compiled = compile_filters(AdminFilters(
            search="lamp",
            min_price_cents=1,
            max_price_cents=2,
            min_stock=3,
            max_stock=4,
            is_active=False,
            has_variants=True,
        ))
        rendered = _rendered(compiled)
        assert len(rendered) == 7
        assert "LIKE" in rendered[0] and "%lamp%" in rendered[0]
        assert "products.stock >= 3" in rendered
        assert "products.stock <= 4" in rendered
        assert any("products.is_active" in r for r in rendered)
        assert any("products.has_variants" in r for r in rendered)
        assert compiled.join_mode == JOIN_LEFT

    def test_category_override_is_rejected(self):
        with pytest.raises(InvalidFilterCombination):
            compile_filters(AdminFilters(), category_id=1)

    def test_strict_stock_range(self):
        with pytest.raises(InvalidFilterCombination):
            compile_filters(AdminFilters(min_stock=5, max_stock=1), strict=True)


def test_escape_like():
    assert escape_like("50%_off\\") == "50\\%\\_off\\\\"


def test_unknown_filter_object():
    with pytest.raises(TypeError):
        compile_filters({"minPrice": 1})

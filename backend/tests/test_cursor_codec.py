import base64
import json
from datetime import datetime

import pytest

from storefront.catalog import InvalidCursor, decode_cursor, encode_cursor
from storefront.catalog.sorting import resolve_admin_sort, resolve_customer_sort


FEATURED = resolve_customer_sort("featured")
NEWEST = resolve_customer_sort("newest")
PRICE_ASC = resolve_customer_sort("price_asc")
PRICE_DESC = resolve_customer_sort("price_desc")

ROW = {
    "id": 42,
    "name": "Lamp",
    "price_cents": 1999,
    "stock": 3,
    "featured": True,
    "created_at": datetime(2026, 3, 1, 12, 30, 15, 123456),
}


def _raw(token):
    padded = token + "=" * (-len(token) % 4)
    return json.loads(base64.urlsafe_b64decode(padded))


def _token(payload):
    raw = json.dumps(payload).encode()
    return base64.urlsafe_b64encode(raw).decode().rstrip("=")


class TestEncode:
    def test_payload_holds_exactly_chain_fields(self):
        payload = _raw(encode_cursor(ROW, FEATURED))
        fields = {k for k in payload if not k.startswith("_")}
        assert fields == {"featured", "created_at", "id"}
        assert payload["featured"] is True
        assert payload["id"] == 42
        assert payload["_v"] == 1

    def test_token_is_url_safe(self):
        token = encode_cursor(dict(ROW, name="??>>~~" * 10), resolve_admin_sort("name", "asc"))
        assert "+" not in token and "/" not in token and "=" not in token

    def test_accepts_attribute_rows(self):
        class Row:
            pass

        row = Row()
        for key, value in ROW.items():
            setattr(row, key, value)
        assert encode_cursor(row, NEWEST) == encode_cursor(ROW, NEWEST)


class TestDecode:
    def test_values_come_back_with_their_types(self):
        values = decode_cursor(encode_cursor(ROW, FEATURED), FEATURED)
        assert values == {
            "featured": True,
            "created_at": datetime(2026, 3, 1, 12, 30, 15, 123456),
            "id": 42,
        }

    def test_null_price_survives(self):
        values = decode_cursor(encode_cursor(dict(ROW, price_cents=None), PRICE_ASC), PRICE_ASC)
        assert values == {"price_cents": None, "id": 42}

    def test_strings_are_not_reparsed(self):
        chain = resolve_admin_sort("name", "asc")
        values = decode_cursor(encode_cursor(dict(ROW, name="00123"), chain), chain)
        assert values["name"] == "00123"

    @pytest.mark.parametrize("issued,replayed", [
        (NEWEST, FEATURED),
        (FEATURED, NEWEST),
        (PRICE_ASC, PRICE_DESC),
        (PRICE_DESC, PRICE_ASC),
    ])
    def test_cursor_from_other_order_is_rejected(self, issued, replayed):
        with pytest.raises(InvalidCursor):
            decode_cursor(encode_cursor(ROW, issued), replayed)

    @pytest.mark.parametrize("token", [
        "",
        "not base64 at all!!",
        _token([1, 2, 3]),
        _token("string"),
        base64.urlsafe_b64encode(b"\xff\xfe\xfd").decode(),
        "x" * 5000,
    ])
    def test_garbage_is_invalid(self, token):
        with pytest.raises(InvalidCursor):
            decode_cursor(token, NEWEST)

    def test_missing_field_is_invalid(self):
        payload = _raw(encode_cursor(ROW, FEATURED))
        del payload["created_at"]
        with pytest.raises(InvalidCursor):
            decode_cursor(_token(payload), FEATURED)

    def test_extra_field_is_invalid(self):
        payload = _raw(encode_cursor(ROW, NEWEST))
        payload["price_cents"] = 100
        with pytest.raises(InvalidCursor):
            decode_cursor(_token(payload), NEWEST)

    def test_unknown_version_is_invalid(self):
        payload = _raw(encode_cursor(ROW, NEWEST))
        payload["_v"] = 2
        with pytest.raises(InvalidCursor):
            decode_cursor(_token(payload), NEWEST)

    @pytest.mark.parametrize("field,value", [
        ("id", "42"),
        ("id", True),
        ("id", 4.2),
        ("id", None),
        ("featured", 1),
        ("created_at", 1700000000),
        ("created_at", "yesterday"),
        ("created_at", None),
    ])
    def test_wrong_value_types_are_invalid(self, field, value):
        payload = _raw(encode_cursor(ROW, FEATURED))
        payload[field] = value
        with pytest.raises(InvalidCursor):
            decode_cursor(_token(payload), FEATURED)

    def test_padding_is_optional(self):
        token = encode_cursor(ROW, NEWEST)
        padded = token + "=" * (-len(token) % 4)
        assert decode_cursor(padded, NEWEST) == decode_cursor(token, NEWEST)

    def test_deeply_nested_json_is_invalid(self):
        token = base64.urlsafe_b64encode(b"[" * 1500).decode().rstrip("=")
        assert len(token) <= 2048
        with pytest.raises(InvalidCursor):
            decode_cursor(token, NEWEST)

    @pytest.mark.parametrize("field,value", [
        ("id", 10 ** 30),
        ("id", -(2 ** 63) - 1),
        ("price_cents", 2 ** 63),
    ])
    def test_integers_beyond_bigint_are_invalid(self, field, value):
        payload = _raw(encode_cursor(ROW, PRICE_ASC))
        payload[field] = value
        with pytest.raises(InvalidCursor):
            decode_cursor(_token(payload), PRICE_ASC)

    def test_largest_bigint_is_accepted(self):
        payload = _raw(encode_cursor(ROW, PRICE_ASC))
        payload["id"] = 2 ** 63 - 1
        assert decode_cursor(_token(payload), PRICE_ASC)["id"] == 2 ** 63 - 1

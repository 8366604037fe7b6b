# Overview: Opaque pagination cursor codec (URL-safe base64 of a small JSON record).

from __future__ import annotations

import base64
import binascii
import json
from typing import Any, Mapping

from ..time_utils import from_cursor_timestamp, to_cursor_timestamp
from .errors import InvalidCursor
from .sorting import SortChain

"""
Cursor wire format (version 1):

    base64url(JSON({"_v": 1, "_s": "<chain signature>", "<field>": <value>, ..., "id": <id>}))

- Field keys are exactly the sort chain's fields (id always included).
- Values are the literal column values of the last row on the page;
  datetimes travel as ISO-8601 strings with microseconds.
- "_s" pins the cursor to the chain it was cut from. A cursor replayed
  against a different order is rejected, never reinterpreted.
- Base64 padding is stripped on encode and restored on decode.
"""

CURSOR_VERSION = 1
MAX_CURSOR_LENGTH = 2048

_VERSION_KEY = "_v"
_SIGNATURE_KEY = "_s"

# Integer columns are BIGINT at most
_MIN_INT = -(2 ** 63)
_MAX_INT = 2 ** 63 - 1


def _row_value(row: Any, field: str) -> Any:
    if isinstance(row, Mapping):
        return row[field]
    return getattr(row, field)


def _dump_value(value: Any, kind: str) -> Any:
    if value is None:
        return None
    if kind == "datetime":
        return to_cursor_timestamp(value)
    if kind == "bool":
        return bool(value)
    return value


def _load_value(raw: Any, kind: str, nullable: bool, field: str) -> Any:
    if raw is None:
        if not nullable:
            raise InvalidCursor(f"cursor field {field} cannot be null")
        return None

    if kind == "int":
        if isinstance(raw, bool) or not isinstance(raw, int):
            raise InvalidCursor(f"cursor field {field} must be an integer")
        if not _MIN_INT <= raw <= _MAX_INT:
            raise InvalidCursor(f"cursor field {field} is out of range")
        return raw
    if kind == "bool":
        if not isinstance(raw, bool):
            raise InvalidCursor(f"cursor field {field} must be a boolean")
        return raw
    if kind == "str":
        if not isinstance(raw, str):
            raise InvalidCursor(f"cursor field {field} must be a string")
        return raw
    if kind == "datetime":
        if not isinstance(raw, str):
            raise InvalidCursor(f"cursor field {field} must be an ISO-8601 string")
        try:
            return from_cursor_timestamp(raw)
        except ValueError:
            raise InvalidCursor(f"cursor field {field} must be an ISO-8601 string")

    raise InvalidCursor(f"cursor field {field} has unsupported kind {kind}")


def encode_cursor(row: Any, chain: SortChain) -> str:
    """
    Project the row onto the chain's fields and encode it as an opaque token.

    `row` may be a mapping or any object exposing the fields as attributes.
    """
    payload: dict[str, Any] = {
        _VERSION_KEY: CURSOR_VERSION,
        _SIGNATURE_KEY: chain.signature,
    }
    for key in chain:
        payload[key.field] = _dump_value(_row_value(row, key.field), key.spec.kind)

    raw = json.dumps(payload, separators=(",", ":"), sort_keys=True).encode("utf-8")
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def decode_cursor(token: str, chain: SortChain) -> dict[str, Any]:
    """
    Decode and validate a cursor against the active sort chain.

    Returns {field: value} for exactly the chain's fields.

    Raises:
        InvalidCursor: for any malformed, tampered or mismatched token.
        Nothing else escapes this function.
    """
    if not isinstance(token, str) or not token:
        raise InvalidCursor("cursor must be a non-empty string")
    if len(token) > MAX_CURSOR_LENGTH:
        raise InvalidCursor("cursor is too long")

    try:
        padded = token + "=" * (-len(token) % 4)
        raw = base64.urlsafe_b64decode(padded.encode("ascii"))
        payload = json.loads(raw.decode("utf-8"))
    except (binascii.Error, UnicodeError, ValueError, RecursionError):
        raise InvalidCursor("cursor is not valid base64 JSON")

    if not isinstance(payload, dict):
        raise InvalidCursor("cursor payload must be an object")

    version = payload.get(_VERSION_KEY)
    if isinstance(version, bool) or version != CURSOR_VERSION:
        raise InvalidCursor(f"unsupported cursor version: {version!r}")
    if payload.get(_SIGNATURE_KEY) != chain.signature:
        raise InvalidCursor("cursor was issued for a different sort order")

    expected = set(chain.fields) | {_VERSION_KEY, _SIGNATURE_KEY}
    present = set(payload.keys())
    if present != expected:
        missing = sorted(expected - present)
        extra = sorted(present - expected)
        raise InvalidCursor(f"cursor fields mismatch (missing={missing}, extra={extra})")

    values: dict[str, Any] = {}
    for key in chain:
        spec = key.spec
        values[key.field] = _load_value(payload[key.field], spec.kind, spec.nullable, key.field)
    return values

from __future__ import annotations

from typing import Any, Mapping


class ValidationError(ValueError):
    """400-level input problem."""


_TRUE_STRINGS = {"true", "1", "yes", "on"}
_FALSE_STRINGS = {"false", "0", "no", "off"}


def parse_int_arg(args: Mapping[str, Any], key: str) -> int | None:
    """
    Strict integer query arg.

    - missing / "" -> None
    - rejects floats, decimals and scientific notation (e.g., "12.5", "1e3")
    """
    raw = args.get(key)
    if raw is None:
        return None
    if isinstance(raw, bool):
        raise ValidationError(f"{key} must be an integer")
    if isinstance(raw, int):
        return raw
    stripped = str(raw).strip()
    if not stripped:
        return None
    if 'e' in stripped.lower():
        raise ValidationError(f"{key} must be a plain integer (scientific notation not allowed)")
    if '.' in stripped:
        raise ValidationError(f"{key} must be an integer (no decimals)")
    try:
        return int(stripped)
    except ValueError:
        raise ValidationError(f"{key} must be an integer")


def parse_bool_arg(args: Mapping[str, Any], key: str) -> bool | None:
    """Tri-state boolean query arg: missing -> None, otherwise true/false."""
    raw = args.get(key)
    if raw is None:
        return None
    if isinstance(raw, bool):
        return raw
    stripped = str(raw).strip().lower()
    if not stripped:
        return None
    if stripped in _TRUE_STRINGS:
        return True
    if stripped in _FALSE_STRINGS:
        return False
    raise ValidationError(f"{key} must be true or false")


def parse_choice_arg(args: Mapping[str, Any], key: str, choices) -> str | None:
    raw = args.get(key)
    if raw is None:
        return None
    stripped = str(raw).strip()
    if not stripped:
        return None
    if stripped not in choices:
        raise ValidationError(f"{key} must be one of: {', '.join(sorted(choices))}")
    return stripped


def parse_text_arg(args: Mapping[str, Any], key: str, *, max_length: int = 255) -> str | None:
    raw = args.get(key)
    if raw is None:
        return None
    stripped = str(raw).strip()
    if not stripped:
        return None
    if len(stripped) > max_length:
        raise ValidationError(f"{key} exceeds max length {max_length}")
    return stripped

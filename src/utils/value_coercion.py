"""Value coercion helpers for loosely typed option mappings."""

from __future__ import annotations

from enum import Enum


def strict_bool(value: object) -> bool | None:
    """Return the value when it is a real bool, otherwise None.

    Returns
    -------
    bool | None
        The boolean value, or None for any other type.
    """
    if isinstance(value, bool):
        return value
    return None


def strict_int(value: object) -> int | None:
    """Return the value when it is a real int (bools excluded), otherwise None.

    Returns
    -------
    int | None
        The integer value, or None for any other type.
    """
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return None


def coerce_str(value: object) -> str | None:
    """Return a stripped non-empty string, or None.

    Returns
    -------
    str | None
        Stripped string, or None for non-strings and blank strings.
    """
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped or None


def coerce_enum[TEnum: Enum](value: object, enum_type: type[TEnum]) -> TEnum | None:
    """Coerce a string or enum member to ``enum_type``.

    Returns
    -------
    TEnum | None
        Matching enum member, or None when the value does not match.
    """
    if isinstance(value, enum_type):
        return value
    text = coerce_str(value)
    if text is None:
        return None
    try:
        return enum_type(text.lower())
    except ValueError:
        return None


__all__ = [
    "coerce_enum",
    "coerce_str",
    "strict_bool",
    "strict_int",
]

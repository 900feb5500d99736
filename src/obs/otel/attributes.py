"""Attribute hygiene for spans and metric points."""

from __future__ import annotations

import re
from collections.abc import Mapping

from opentelemetry.util.types import AttributeValue

REDACTED = "[redacted]"
MAX_ATTRIBUTE_CHARS = 1024

# Keys that may carry SSH passphrases, tokens or key material.
_SENSITIVE_KEY = re.compile(r"pass(word|phrase)|secret|token|private[_.-]?key", re.IGNORECASE)


def _clip(text: str) -> str:
    return text if len(text) <= MAX_ATTRIBUTE_CHARS else text[:MAX_ATTRIBUTE_CHARS]


def _coerce(value: object) -> AttributeValue:
    match value:
        case bool() | int() | float():
            return value
        case str():
            return _clip(value)
        case list() | tuple():
            return [_clip(str(item)) for item in value if item is not None]
        case _:
            return _clip(str(value))


def normalize_attributes(attrs: Mapping[str, object] | None) -> dict[str, AttributeValue]:
    """Convert ``attrs`` into values OpenTelemetry accepts.

    ``None`` values are dropped, long strings are clipped, and values under
    credential-like keys are replaced with ``[redacted]``.

    Returns
    -------
    dict[str, AttributeValue]
        Exportable attributes.
    """
    normalized: dict[str, AttributeValue] = {}
    for key, value in (attrs or {}).items():
        if value is None:
            continue
        name = str(key)
        normalized[name] = REDACTED if _SENSITIVE_KEY.search(name) else _coerce(value)
    return normalized


__all__ = ["MAX_ATTRIBUTE_CHARS", "REDACTED", "normalize_attributes"]

"""Typed reads of ``SEEKRET_*`` and related environment variables.

Every helper treats an unset or blank variable as absent. Values that do not
parse are logged at WARNING and replaced by the caller's default, so a typo in
the environment never aborts an extraction.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import overload

_LOGGER = logging.getLogger(__name__)

_BOOL_WORDS: dict[str, bool] = {
    "1": True,
    "true": True,
    "yes": True,
    "y": True,
    "on": True,
    "0": False,
    "false": False,
    "no": False,
    "n": False,
    "off": False,
}


def env_value(name: str) -> str | None:
    """Return the stripped value of ``name``, or None when unset or blank.

    Returns
    -------
    str | None
        Stripped value.
    """
    text = os.environ.get(name, "").strip()
    return text or None


def env_path(name: str) -> Path | None:
    """Return ``name`` as a user-expanded path.

    Returns
    -------
    pathlib.Path | None
        Expanded path, or None when the variable is absent.
    """
    text = env_value(name)
    return None if text is None else Path(text).expanduser()


@overload
def env_bool(name: str) -> bool | None: ...


@overload
def env_bool(name: str, *, default: bool) -> bool: ...


@overload
def env_bool(name: str, *, default: bool | None) -> bool | None: ...


def env_bool(name: str, *, default: bool | None = None) -> bool | None:
    """Parse ``name`` as a boolean flag.

    Accepts ``1/0``, ``true/false``, ``yes/no``, ``y/n`` and ``on/off`` in any
    case.

    Parameters
    ----------
    name
        Environment variable name.
    default
        Value returned when the variable is absent or unparseable.

    Returns
    -------
    bool | None
        Parsed flag or ``default``.
    """
    text = env_value(name)
    if text is None:
        return default
    parsed = _BOOL_WORDS.get(text.lower())
    if parsed is None:
        _LOGGER.warning("Ignoring %s=%r: expected a boolean", name, text)
        return default
    return parsed


@overload
def env_int(name: str) -> int | None: ...


@overload
def env_int(name: str, *, default: int) -> int: ...


def env_int(name: str, *, default: int | None = None) -> int | None:
    """Parse ``name`` as a base-10 integer.

    Returns
    -------
    int | None
        Parsed integer or ``default``.
    """
    text = env_value(name)
    if text is None:
        return default
    try:
        return int(text, 10)
    except ValueError:
        _LOGGER.warning("Ignoring %s=%r: expected an integer", name, text)
        return default


__all__ = ["env_bool", "env_int", "env_path", "env_value"]

"""Global pygit2 settings helpers."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from functools import cache

import pygit2

from utils.env_utils import env_bool, env_int, env_value

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class GitSettingsSpec:
    """Optional pygit2 Settings overrides."""

    owner_validation: bool | None = None
    server_timeout_ms: int | None = None
    server_connect_timeout_ms: int | None = None
    ssl_cert_file: str | None = None


def apply_git_settings(spec: GitSettingsSpec) -> tuple[str, ...]:
    """Push overrides into libgit2's process-wide settings.

    Overrides for settings the installed pygit2 does not expose are skipped.
    Turning owner validation off lets a scan read repositories owned by
    another user, such as a mounted CI checkout.

    Returns
    -------
    tuple[str, ...]
        Names of the settings that were applied.
    """
    settings = pygit2.Settings()
    applied: list[str] = []
    for name, value in _overrides(spec).items():
        if not hasattr(settings, name):
            _LOGGER.debug("pygit2 does not expose setting %s; skipping", name)
            continue
        setattr(settings, name, value)
        applied.append(name)
    if applied:
        _LOGGER.info("Applied libgit2 settings: %s", ", ".join(applied))
    return tuple(applied)


@contextmanager
def scoped_git_settings(spec: GitSettingsSpec) -> Iterator[tuple[str, ...]]:
    """Apply ``spec`` for the duration of the block.

    libgit2 settings are process-wide, so every value the block changed is put
    back on exit. Settings whose previous value cannot be read are left as
    applied.

    Yields
    ------
    tuple[str, ...]
        Names of the settings that were applied.
    """
    settings = pygit2.Settings()
    previous = {name: getattr(settings, name, None) for name in _overrides(spec)}
    applied = apply_git_settings(spec)
    try:
        yield applied
    finally:
        restored = [name for name in applied if previous.get(name) is not None]
        for name in restored:
            setattr(settings, name, previous[name])
        if restored:
            _LOGGER.debug("Restored libgit2 settings: %s", ", ".join(restored))


def _overrides(spec: GitSettingsSpec) -> dict[str, object]:
    values: dict[str, object | None] = {
        "owner_validation": spec.owner_validation,
        "server_timeout": spec.server_timeout_ms,
        "server_connect_timeout": spec.server_connect_timeout_ms,
        "ssl_cert_file": spec.ssl_cert_file,
    }
    return {name: value for name, value in values.items() if value is not None}


@cache
def apply_git_settings_once() -> None:
    """Apply settings once based on environment overrides."""
    spec = git_settings_from_env()
    if spec is not None:
        apply_git_settings(spec)


def git_settings_from_env() -> GitSettingsSpec | None:
    """Build GitSettingsSpec from environment variables when present.

    Returns
    -------
    GitSettingsSpec | None
        Settings derived from environment variables.
    """
    owner_validation = env_bool("SEEKRET_GIT_OWNER_VALIDATION")
    server_timeout_ms = env_int("SEEKRET_GIT_SERVER_TIMEOUT_MS")
    server_connect_timeout_ms = env_int("SEEKRET_GIT_SERVER_CONNECT_TIMEOUT_MS")
    ssl_cert_file = env_value("SEEKRET_GIT_SSL_CERT_FILE")
    if (
        owner_validation is None
        and server_timeout_ms is None
        and server_connect_timeout_ms is None
        and not ssl_cert_file
    ):
        return None
    return GitSettingsSpec(
        owner_validation=owner_validation,
        server_timeout_ms=server_timeout_ms,
        server_connect_timeout_ms=server_connect_timeout_ms,
        ssl_cert_file=ssl_cert_file,
    )


__all__ = [
    "GitSettingsSpec",
    "apply_git_settings",
    "apply_git_settings_once",
    "git_settings_from_env",
    "scoped_git_settings",
]

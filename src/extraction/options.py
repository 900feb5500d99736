"""Canonical load option contracts and normalization helpers."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path

import msgspec

from core_types import NonNegativeInt, PositiveFloat
from extract.git.history import TreeErrorPolicy
from extract.git.remotes import CertificatePolicy
from utils.value_coercion import coerce_enum, coerce_str, strict_bool, strict_int

_LOGGER = logging.getLogger(__name__)

OPTION_COMMIT_FILES = "commit-files"
OPTION_COMMIT_MESSAGES = "commit-messages"
OPTION_STAGED_FILES = "staged-files"
OPTION_COMMIT_COUNT = "commit-count"
OPTION_TREE_ERRORS = "tree-errors"
OPTION_CERTIFICATE_POLICY = "certificate-policy"
OPTION_CLONE_TIMEOUT = "clone-timeout"
OPTION_SSH_CONFIG = "ssh-config"

RECOGNIZED_OPTIONS: frozenset[str] = frozenset(
    {
        OPTION_COMMIT_FILES,
        OPTION_COMMIT_MESSAGES,
        OPTION_STAGED_FILES,
        OPTION_COMMIT_COUNT,
        OPTION_TREE_ERRORS,
        OPTION_CERTIFICATE_POLICY,
        OPTION_CLONE_TIMEOUT,
        OPTION_SSH_CONFIG,
    }
)


class LoadOptions(msgspec.Struct, frozen=True):
    """Normalized load options consumed by the extraction orchestrator."""

    commit_files: bool = False
    commit_messages: bool = False
    staged_files: bool = False
    commit_count: NonNegativeInt = 0
    tree_errors: TreeErrorPolicy = TreeErrorPolicy.SKIP
    certificate_policy: CertificatePolicy = CertificatePolicy.VERIFY
    clone_timeout_s: PositiveFloat | None = None
    ssh_config_path: Path | None = None

    @property
    def history_enabled(self) -> bool:
        """Return whether any per-commit content was requested."""
        return self.commit_files or self.commit_messages


def normalize_load_options(
    options: LoadOptions | Mapping[str, object] | None,
) -> LoadOptions:
    """Normalize load options from typed or mapping payloads.

    Keys are the hyphenated option names (``commit-files``); the snake_case
    spelling (``commit_files``) is accepted when the hyphenated key is absent.
    Values of the wrong type and unrecognized keys are ignored and the
    default is kept.

    Returns
    -------
    LoadOptions
        Normalized options with defaults applied.

    Raises
    ------
    TypeError
        Raised when ``options`` is not ``None``, ``LoadOptions``, or a mapping.
    """
    if isinstance(options, LoadOptions):
        return options
    if options is None:
        return LoadOptions()
    if not isinstance(options, Mapping):
        msg = "Load options must be a mapping, LoadOptions, or None."
        raise TypeError(msg)

    unknown = sorted(str(key) for key in options if _canonical_key(key) not in RECOGNIZED_OPTIONS)
    if unknown:
        _LOGGER.debug("Ignoring unrecognized load options: %s", ", ".join(unknown))

    defaults = LoadOptions()
    return LoadOptions(
        commit_files=_bool_option(options, OPTION_COMMIT_FILES, default=defaults.commit_files),
        commit_messages=_bool_option(
            options, OPTION_COMMIT_MESSAGES, default=defaults.commit_messages
        ),
        staged_files=_bool_option(options, OPTION_STAGED_FILES, default=defaults.staged_files),
        commit_count=_commit_count_option(options, default=defaults.commit_count),
        tree_errors=_enum_option(
            options, OPTION_TREE_ERRORS, TreeErrorPolicy, default=defaults.tree_errors
        ),
        certificate_policy=_enum_option(
            options,
            OPTION_CERTIFICATE_POLICY,
            CertificatePolicy,
            default=defaults.certificate_policy,
        ),
        clone_timeout_s=_timeout_option(options),
        ssh_config_path=_path_option(options, OPTION_SSH_CONFIG),
    )


def _canonical_key(key: object) -> str:
    return str(key).replace("_", "-")


def _lookup(options: Mapping[str, object], key: str) -> object:
    if key in options:
        return options[key]
    return options.get(key.replace("-", "_"))


def _ignored(key: str, value: object, expected: str) -> None:
    if value is not None:
        _LOGGER.debug(
            "Ignoring load option %s=%r: expected %s, got %s",
            key,
            value,
            expected,
            type(value).__name__,
        )


def _bool_option(options: Mapping[str, object], key: str, *, default: bool) -> bool:
    raw = _lookup(options, key)
    value = strict_bool(raw)
    if value is None:
        _ignored(key, raw, "bool")
        return default
    return value


def _commit_count_option(options: Mapping[str, object], *, default: int) -> int:
    raw = _lookup(options, OPTION_COMMIT_COUNT)
    value = strict_int(raw)
    if value is None or value < 0:
        _ignored(OPTION_COMMIT_COUNT, raw, "non-negative int")
        return default
    return value


def _enum_option[TEnum: (TreeErrorPolicy, CertificatePolicy)](
    options: Mapping[str, object],
    key: str,
    enum_type: type[TEnum],
    *,
    default: TEnum,
) -> TEnum:
    raw = _lookup(options, key)
    value = coerce_enum(raw, enum_type)
    if value is None:
        _ignored(key, raw, " | ".join(member.value for member in enum_type))
        return default
    return value


def _timeout_option(options: Mapping[str, object]) -> float | None:
    raw = _lookup(options, OPTION_CLONE_TIMEOUT)
    if isinstance(raw, bool) or not isinstance(raw, (int, float)) or raw <= 0:
        _ignored(OPTION_CLONE_TIMEOUT, raw, "positive number of seconds")
        return None
    return float(raw)


def _path_option(options: Mapping[str, object], key: str) -> Path | None:
    raw = _lookup(options, key)
    if isinstance(raw, Path):
        return raw.expanduser()
    text = coerce_str(raw)
    if text is None:
        _ignored(key, raw, "path string")
        return None
    return Path(text).expanduser()


__all__ = [
    "OPTION_CERTIFICATE_POLICY",
    "OPTION_CLONE_TIMEOUT",
    "OPTION_COMMIT_COUNT",
    "OPTION_COMMIT_FILES",
    "OPTION_COMMIT_MESSAGES",
    "OPTION_SSH_CONFIG",
    "OPTION_STAGED_FILES",
    "OPTION_TREE_ERRORS",
    "RECOGNIZED_OPTIONS",
    "LoadOptions",
    "normalize_load_options",
]

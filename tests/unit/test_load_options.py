"""Tests for load option normalization."""

from __future__ import annotations

from pathlib import Path

import pytest

from extract.git.history import TreeErrorPolicy
from extract.git.remotes import CertificatePolicy
from extraction.options import LoadOptions, normalize_load_options


def test_defaults() -> None:
    """Ensure missing options fall back to disabled extraction."""
    options = normalize_load_options(None)
    assert options == LoadOptions()
    assert not options.history_enabled
    assert options.commit_count == 0
    assert options.tree_errors is TreeErrorPolicy.SKIP
    assert options.certificate_policy is CertificatePolicy.VERIFY


def test_recognized_keys() -> None:
    """Ensure every recognized key is applied."""
    options = normalize_load_options(
        {
            "commit-files": True,
            "commit-messages": True,
            "staged-files": True,
            "commit-count": 7,
            "tree-errors": "raise",
            "certificate-policy": "accept-all",
            "clone-timeout": 30,
            "ssh-config": "~/custom_ssh_config",
        }
    )
    assert options.commit_files
    assert options.commit_messages
    assert options.staged_files
    assert options.commit_count == 7
    assert options.tree_errors is TreeErrorPolicy.RAISE
    assert options.certificate_policy is CertificatePolicy.ACCEPT_ALL
    assert options.clone_timeout_s == 30.0
    assert options.ssh_config_path == Path("~/custom_ssh_config").expanduser()


@pytest.mark.parametrize(
    "payload",
    [
        {"commit-files": "true"},
        {"commit-files": 1},
        {"commit-count": "5"},
        {"commit-count": True},
        {"commit-count": -1},
        {"commit-count": 2.5},
        {"tree-errors": "explode"},
        {"certificate-policy": 3},
        {"clone-timeout": 0},
        {"clone-timeout": "10"},
        {"ssh-config": 42},
        {"unknown-key": True},
    ],
)
def test_invalid_values_are_ignored(payload: dict[str, object]) -> None:
    """Ensure wrongly typed values and unknown keys keep the defaults."""
    assert normalize_load_options(payload) == LoadOptions()


def test_snake_case_aliases() -> None:
    """Ensure snake_case keys are accepted when the hyphenated key is absent."""
    options = normalize_load_options({"commit_messages": True, "commit_count": 2})
    assert options.commit_messages
    assert options.commit_count == 2


def test_hyphenated_key_takes_precedence() -> None:
    """Ensure the canonical key wins over its snake_case spelling."""
    options = normalize_load_options({"commit-files": False, "commit_files": True})
    assert not options.commit_files


def test_typed_options_pass_through() -> None:
    """Ensure LoadOptions instances are returned unchanged."""
    typed = LoadOptions(commit_messages=True)
    assert normalize_load_options(typed) is typed


def test_rejects_non_mapping() -> None:
    """Ensure unsupported payload types are rejected."""
    with pytest.raises(TypeError, match="mapping"):
        normalize_load_options(["commit-files"])  # type: ignore[arg-type]

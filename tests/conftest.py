"""Shared pytest fixtures for git source extraction tests."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from tests.test_helpers.git_repos import init_repo

if TYPE_CHECKING:
    from pygit2 import Repository

_ENV_PREFIXES = ("SEEKRET_", "OTEL_")


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Drop extractor and OpenTelemetry env vars inherited from the shell."""
    for key in list(os.environ):
        if key.startswith(_ENV_PREFIXES):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def git_repo(tmp_path: Path) -> Repository:
    """Return an empty non-bare repository under ``tmp_path``.

    Returns
    -------
    pygit2.Repository
        Repository with an unborn HEAD.
    """
    return init_repo(tmp_path / "repo")


@pytest.fixture
def ssh_config_file(tmp_path: Path) -> Path:
    """Write an SSH client config with one host block and return its path.

    Returns
    -------
    pathlib.Path
        Path of the written config file.
    """
    key_dir = tmp_path / "keys"
    key_dir.mkdir()
    config = tmp_path / "ssh_config"
    config.write_text(
        "\n".join(
            (
                "Host github.com",
                "    User git",
                f"    IdentityFile {key_dir / 'id_github'}",
                f"    IdentityFile {key_dir / 'id_fallback'}",
                "",
                "Host bare.example.com",
                "    User git",
                "",
            )
        ),
        encoding="utf-8",
    )
    return config

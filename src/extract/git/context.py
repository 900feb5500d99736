"""Open local repositories by searching upward from a path."""

from __future__ import annotations

import logging
from pathlib import Path

import pygit2

from core_types import PathLike, ensure_path
from extract.errors import RepositoryNotFoundError, RepositoryResolutionError
from extract.git.settings import apply_git_settings_once

_LOGGER = logging.getLogger(__name__)


def discover_repository_path(path: PathLike) -> Path | None:
    """Return the ``.git`` directory governing ``path``, if there is one.

    The search walks parent directories and may cross filesystem boundaries.

    Returns
    -------
    pathlib.Path | None
        Repository directory, or None when ``path`` is not inside a repository.
    """
    try:
        found = pygit2.discover_repository(str(ensure_path(path)), True)
    except (KeyError, ValueError, pygit2.GitError) as exc:
        _LOGGER.debug("Repository discovery failed for %s: %s", path, exc)
        return None
    return None if found is None else Path(found)


def open_local_repository(path: PathLike, *, looked_remote: bool = False) -> pygit2.Repository:
    """Open the repository containing ``path``.

    ``looked_remote`` marks locators that resemble a remote URI but did not
    parse as one, so the error can hint at the likely typo.

    Returns
    -------
    pygit2.Repository
        Open repository; the caller frees it.

    Raises
    ------
    RepositoryNotFoundError
        Raised when no repository exists at or above ``path``.
    RepositoryResolutionError
        Raised when the repository exists but libgit2 cannot open it, for
        example because its config file does not parse.
    """
    apply_git_settings_once()
    repo_dir = discover_repository_path(path)
    if repo_dir is None:
        raise RepositoryNotFoundError(str(path), looked_remote=looked_remote)
    try:
        return pygit2.Repository(str(repo_dir))
    except (pygit2.GitError, KeyError, ValueError) as exc:
        msg = f"Cannot open repository at {repo_dir}: {exc}"
        raise RepositoryResolutionError(msg) from exc


__all__ = ["discover_repository_path", "open_local_repository"]

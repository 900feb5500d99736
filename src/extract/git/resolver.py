"""Repository resolution: open local repositories or clone remotes."""

from __future__ import annotations

import logging
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path

import pygit2

from extract.errors import CloneError, CloneTimeoutError
from extract.git.context import open_local_repository
from extract.git.locator import NormalizedLocation, looks_remote, normalize_location
from extract.git.remotes import RemoteAuthCallbacks, RemoteOptions
from extract.git.settings import GitSettingsSpec, apply_git_settings_once, scoped_git_settings

_LOGGER = logging.getLogger(__name__)

CLONE_DIR_PREFIX = "seekret"


@dataclass(frozen=True)
class RepositoryHandle:
    """Open repository owned by a single extraction call."""

    repo: pygit2.Repository
    location: NormalizedLocation
    workdir: Path | None
    temporary: bool


@contextmanager
def open_repository(
    source: str,
    *,
    remote: RemoteOptions | None = None,
) -> Iterator[RepositoryHandle]:
    """Yield a repository handle for a local path or remote URI.

    Remote URIs are cloned into a fresh temporary directory that is removed
    when the context exits, whether it exits normally or with an error.

    Yields
    ------
    RepositoryHandle
        Handle valid for the lifetime of the context.
    """
    location = normalize_location(source)
    if not location.is_remote:
        local = open_local_repository(location.value, looked_remote=looks_remote(source))
        workdir = Path(local.workdir) if local.workdir else None
        _LOGGER.debug("Opened local repository at %s", local.path)
        try:
            yield RepositoryHandle(
                repo=local,
                location=location,
                workdir=workdir,
                temporary=False,
            )
        finally:
            local.free()
        return
    with tempfile.TemporaryDirectory(prefix=CLONE_DIR_PREFIX) as tmpdir:
        repo = clone_remote(location.value, Path(tmpdir), options=remote or RemoteOptions())
        try:
            yield RepositoryHandle(
                repo=repo,
                location=location,
                workdir=Path(tmpdir),
                temporary=True,
            )
        finally:
            repo.free()
    _LOGGER.debug("Removed temporary clone of %s", location.value)


def clone_remote(uri: str, target: Path, *, options: RemoteOptions) -> pygit2.Repository:
    """Fully clone ``uri`` into ``target``.

    When ``options.timeout_s`` is set it also bounds libgit2's connect and
    socket timeouts while the clone runs, so a stalled server cannot block
    past the deadline between progress callbacks.

    Returns
    -------
    pygit2.Repository
        The cloned repository.

    Raises
    ------
    CloneError
        Raised when libgit2 reports a transport or clone failure.
    CloneTimeoutError
        Raised when libgit2 fails after the clone deadline has passed.
    """
    apply_git_settings_once()
    callbacks = RemoteAuthCallbacks(options)
    _LOGGER.info("Cloning %s into %s", uri, target)
    try:
        with scoped_git_settings(_clone_timeout_settings(options)):
            return pygit2.clone_repository(uri, str(target), callbacks=callbacks)
    except pygit2.GitError as exc:
        if callbacks.deadline_passed():
            msg = f"Clone of {uri!r} exceeded timeout of {options.timeout_s}s: {exc}"
            raise CloneTimeoutError(msg) from exc
        msg = f"Failed to clone {uri!r}: {exc}"
        raise CloneError(msg) from exc


def _clone_timeout_settings(options: RemoteOptions) -> GitSettingsSpec:
    if options.timeout_s is None:
        return GitSettingsSpec()
    timeout_ms = max(1, int(options.timeout_s * 1000))
    return GitSettingsSpec(server_timeout_ms=timeout_ms, server_connect_timeout_ms=timeout_ms)


__all__ = ["CLONE_DIR_PREFIX", "RepositoryHandle", "clone_remote", "open_repository"]

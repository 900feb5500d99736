"""Error taxonomy for git source extraction."""

from __future__ import annotations


class SourceGitError(Exception):
    """Base class for git source extraction errors."""


class RepositoryResolutionError(SourceGitError, RuntimeError):
    """Raised when a repository handle cannot be produced."""


class RepositoryNotFoundError(RepositoryResolutionError):
    """Raised when no repository exists at or above a local path."""

    def __init__(self, source: str, *, looked_remote: bool = False) -> None:
        self.source = source
        self.looked_remote = looked_remote
        message = f"Repository not found at {source!r}"
        if looked_remote:
            message = f"{message} (locator resembles a remote URI but is not a recognized form)"
        super().__init__(message)


class CloneError(RepositoryResolutionError):
    """Raised when cloning a remote repository fails."""


class CloneTimeoutError(CloneError):
    """Raised when a clone exceeds its deadline."""


class CloneCancelledError(CloneError):
    """Raised when a clone is cancelled by the caller."""


class AuthenticationError(RepositoryResolutionError):
    """Raised when credentials for a remote cannot be negotiated."""


class SshConfigError(AuthenticationError):
    """Raised when the SSH client configuration cannot supply a key pair."""


class TraversalError(SourceGitError, RuntimeError):
    """Base class for history traversal failures."""


class HistoryWalkError(TraversalError):
    """Raised when the commit walk cannot be set up or iterated."""


class TreeWalkError(TraversalError):
    """Raised when a commit tree cannot be walked under the strict policy."""

    def __init__(self, commit: str, path: str | None, reason: str) -> None:
        self.commit = commit
        self.path = path
        self.reason = reason
        where = f"{commit}:{path}" if path else commit
        super().__init__(f"Failed to walk tree at {where}: {reason}")


class IndexStatusError(SourceGitError, RuntimeError):
    """Raised when the staging index or file status cannot be read."""


__all__ = [
    "AuthenticationError",
    "CloneCancelledError",
    "CloneError",
    "CloneTimeoutError",
    "HistoryWalkError",
    "IndexStatusError",
    "RepositoryNotFoundError",
    "RepositoryResolutionError",
    "SourceGitError",
    "SshConfigError",
    "TraversalError",
    "TreeWalkError",
]

"""Tests for CLI exit code classification."""

from __future__ import annotations

import pytest

from cli.exit_codes import ExitCode
from extract.errors import (
    AuthenticationError,
    CloneCancelledError,
    CloneError,
    CloneTimeoutError,
    HistoryWalkError,
    IndexStatusError,
    RepositoryNotFoundError,
    RepositoryResolutionError,
    SshConfigError,
    TreeWalkError,
)


@pytest.mark.parametrize(
    ("exc", "expected"),
    [
        (RepositoryNotFoundError("/nowhere"), ExitCode.REPOSITORY_NOT_FOUND),
        (CloneError("clone failed"), ExitCode.CLONE_ERROR),
        (CloneTimeoutError("too slow"), ExitCode.CLONE_TIMEOUT),
        (CloneCancelledError("cancelled"), ExitCode.CLONE_CANCELLED),
        (AuthenticationError("denied"), ExitCode.AUTHENTICATION_ERROR),
        (SshConfigError("no identity"), ExitCode.SSH_CONFIG_ERROR),
        (RepositoryResolutionError("bad config"), ExitCode.REPOSITORY_OPEN_ERROR),
        (HistoryWalkError("unborn"), ExitCode.TRAVERSAL_ERROR),
        (TreeWalkError("abc", "a.txt", "missing"), ExitCode.TRAVERSAL_ERROR),
        (IndexStatusError("index"), ExitCode.INDEX_ERROR),
        (ValueError("bad"), ExitCode.VALIDATION_ERROR),
        (PermissionError("denied"), ExitCode.CONFIG_ERROR),
        (RuntimeError("other"), ExitCode.GENERAL_ERROR),
    ],
)
def test_exit_code_from_exception(exc: BaseException, expected: ExitCode) -> None:
    """Ensure each error family maps to its exit code."""
    assert ExitCode.from_exception(exc) is expected

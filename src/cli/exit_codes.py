"""Exit code taxonomy for the seekret-git CLI."""

from __future__ import annotations

from enum import IntEnum

from extract.errors import (
    AuthenticationError,
    CloneCancelledError,
    CloneError,
    CloneTimeoutError,
    IndexStatusError,
    RepositoryNotFoundError,
    RepositoryResolutionError,
    SshConfigError,
    TraversalError,
)


class ExitCode(IntEnum):
    """Standard exit codes for CLI commands.

    Exit codes follow Unix conventions with domain-specific extensions:
    - 0: Success
    - 1-9: General errors (parse, validation, config)
    - 10-19: Repository resolution errors
    - 20-29: Traversal errors
    """

    SUCCESS = 0
    GENERAL_ERROR = 1
    PARSE_ERROR = 2
    VALIDATION_ERROR = 3
    CONFIG_ERROR = 4

    # Repository resolution errors (10-19)
    REPOSITORY_NOT_FOUND = 10
    CLONE_ERROR = 11
    CLONE_TIMEOUT = 12
    CLONE_CANCELLED = 13
    AUTHENTICATION_ERROR = 14
    SSH_CONFIG_ERROR = 15
    REPOSITORY_OPEN_ERROR = 16

    # Traversal errors (20-29)
    TRAVERSAL_ERROR = 20
    INDEX_ERROR = 21

    @classmethod
    def from_exception(cls, exc: BaseException) -> ExitCode:
        """Map an exception to an appropriate exit code.

        Parameters
        ----------
        exc
            Exception to classify.

        Returns
        -------
        ExitCode
            Exit code appropriate for the exception type.
        """
        cyclopts_code = _exit_code_for_cyclopts(exc)
        if cyclopts_code is not None:
            return cyclopts_code

        for exc_type, exit_code in _EXCEPTION_CODES:
            if isinstance(exc, exc_type):
                return exit_code

        if isinstance(exc, (ValueError, TypeError)):
            return cls.VALIDATION_ERROR
        if isinstance(exc, (FileNotFoundError, PermissionError)):
            return cls.CONFIG_ERROR
        return cls.GENERAL_ERROR


# Most specific first.
_EXCEPTION_CODES: tuple[tuple[type[BaseException], ExitCode], ...] = (
    (RepositoryNotFoundError, ExitCode.REPOSITORY_NOT_FOUND),
    (CloneTimeoutError, ExitCode.CLONE_TIMEOUT),
    (CloneCancelledError, ExitCode.CLONE_CANCELLED),
    (CloneError, ExitCode.CLONE_ERROR),
    (SshConfigError, ExitCode.SSH_CONFIG_ERROR),
    (AuthenticationError, ExitCode.AUTHENTICATION_ERROR),
    (RepositoryResolutionError, ExitCode.REPOSITORY_OPEN_ERROR),
    (IndexStatusError, ExitCode.INDEX_ERROR),
    (TraversalError, ExitCode.TRAVERSAL_ERROR),
)


def _exit_code_for_cyclopts(exc: BaseException) -> ExitCode | None:
    module = exc.__class__.__module__
    if not module.startswith("cyclopts"):
        return None
    if exc.__class__.__name__ == "ValidationError":
        return ExitCode.VALIDATION_ERROR
    return ExitCode.PARSE_ERROR


__all__ = ["ExitCode"]

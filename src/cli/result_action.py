"""Map command return values to process exit codes."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console

from cli.exit_codes import ExitCode

if TYPE_CHECKING:
    from cyclopts import App


def cli_result_action(app: App, cmd: object, result: object) -> int:
    """Translate a command result into an exit code.

    ``None`` means success and integers pass through unchanged. Anything else
    is a programming error in the command and exits with ``GENERAL_ERROR``.

    Returns
    -------
    int
        Process exit code.
    """
    del app, cmd
    match result:
        case None:
            return int(ExitCode.SUCCESS)
        case int() if not isinstance(result, bool):
            return int(result)
    Console(stderr=True).print(
        f"[bold red]error:[/] command returned {type(result).__name__}, expected an exit code"
    )
    return int(ExitCode.GENERAL_ERROR)


__all__ = ["cli_result_action"]

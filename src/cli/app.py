"""Main application setup for the seekret-git CLI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, Literal

from cyclopts import App, Parameter

from cli.commands.version import get_version
from cli.groups import observability_group, session_group
from cli.result_action import cli_result_action

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

_HELP_EPILOGUE = """
Examples:
  seekret-git extract . --commit-messages          Messages of every commit
  seekret-git extract . --commit-files --commit-count 5
  seekret-git extract . --staged-files --format summary
  seekret-git extract git@github.com:org/repo.git --commit-files

Environment Variables:
  SEEKRET_LOG_LEVEL                      Default log level (DEBUG, INFO, WARNING, ERROR)
  SEEKRET_GIT_SSH_CONFIG                 SSH client configuration file
  SEEKRET_GIT_SERVER_TIMEOUT_MS          libgit2 server timeout
  SEEKRET_GIT_SERVER_CONNECT_TIMEOUT_MS  libgit2 server connect timeout
  SEEKRET_GIT_OWNER_VALIDATION           libgit2 repository owner validation
  SEEKRET_GIT_SSL_CERT_FILE              CA bundle for HTTPS remotes
"""

app = App(
    name="seekret-git",
    help="Extract commit messages, committed files, and staged files from git repositories.",
    help_format="rich",
    help_epilogue=_HELP_EPILOGUE,
    version=get_version(),
    version_flags=["--version", "-V"],
    default_parameter=Parameter(
        show_default=True,
        show_env_var=True,
    ),
    result_action=cli_result_action,
    exit_on_error=True,
    print_error=True,
    help_on_error=False,
)

app.meta.group_parameters = session_group


@dataclass(frozen=True)
class SessionOptions:
    """Session-level configuration parameters."""

    log_level: Annotated[
        Literal["DEBUG", "INFO", "WARNING", "ERROR"],
        Parameter(
            name="--log-level",
            help="Logging verbosity level.",
            env_var="SEEKRET_LOG_LEVEL",
            group=session_group,
        ),
    ] = "WARNING"


@dataclass(frozen=True)
class ObservabilityOptions:
    """OpenTelemetry configuration parameters."""

    enable_traces: Annotated[
        bool | None,
        Parameter(
            name="--enable-traces",
            help="Export OpenTelemetry spans to the console.",
            env_var="SEEKRET_OTEL_TRACES",
            group=observability_group,
        ),
    ] = None
    enable_metrics: Annotated[
        bool | None,
        Parameter(
            name="--enable-metrics",
            help="Export OpenTelemetry metrics to the console.",
            env_var="SEEKRET_OTEL_METRICS",
            group=observability_group,
        ),
    ] = None


_DEFAULT_SESSION_OPTIONS = SessionOptions()
_DEFAULT_OBSERVABILITY_OPTIONS = ObservabilityOptions()


@app.meta.default
def meta_launcher(
    *tokens: Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
    session: Annotated[SessionOptions, Parameter(name="*")] = _DEFAULT_SESSION_OPTIONS,
    observability: Annotated[ObservabilityOptions, Parameter(name="*")] = (
        _DEFAULT_OBSERVABILITY_OPTIONS
    ),
) -> int:
    """Meta launcher for logging and telemetry setup.

    Returns
    -------
    int
        Exit status code from command execution.

    Raises
    ------
    ValueError
        Raised when the log level is invalid.
    """
    from obs.otel import OtelBootstrapOptions, configure_otel, install_trace_logging

    if session.log_level not in LOG_LEVELS:
        msg = f"Unsupported log level {session.log_level!r}."
        raise ValueError(msg)
    install_trace_logging(session.log_level)

    providers = None
    if observability.enable_traces or observability.enable_metrics:
        providers = configure_otel(
            options=OtelBootstrapOptions(
                enable_traces=observability.enable_traces,
                enable_metrics=observability.enable_metrics,
            )
        )
    try:
        result = app(list(tokens))
    finally:
        if providers is not None:
            providers.shutdown()
    return result if isinstance(result, int) else 0


app.command("cli.commands.extract:extract_command", name="extract", alias="x")
app.command("cli.commands.version:version_command", name="version", alias="v")


def main() -> None:
    """Run the seekret-git CLI and exit with the command status."""
    exit_code = app.meta()
    raise SystemExit(exit_code if isinstance(exit_code, int) else 0)


__all__ = ["app", "main"]

"""Extract command implementation for the seekret-git CLI."""

from __future__ import annotations

import logging
import sys
from collections import Counter
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Literal

import msgspec
from cyclopts import Parameter, validators
from rich.console import Console
from rich.table import Table

from cli.exit_codes import ExitCode
from cli.groups import history_group, output_group, remote_group
from extract.errors import SourceGitError
from extract.git.history import TreeErrorPolicy
from extract.git.remotes import CertificatePolicy
from extraction.options import (
    OPTION_CERTIFICATE_POLICY,
    OPTION_CLONE_TIMEOUT,
    OPTION_COMMIT_COUNT,
    OPTION_COMMIT_FILES,
    OPTION_COMMIT_MESSAGES,
    OPTION_SSH_CONFIG,
    OPTION_STAGED_FILES,
    OPTION_TREE_ERRORS,
)
from extraction.orchestrator import ExtractionResult, run_extraction

_LOGGER = logging.getLogger(__name__)

OutputFormat = Literal["json", "summary"]


@dataclass(frozen=True)
class ExtractOptions:
    """Options that select extracted content and control remote clones."""

    commit_files: Annotated[
        bool,
        Parameter(
            name="--commit-files",
            help="Emit the content of every file in every walked commit.",
            group=history_group,
        ),
    ] = False
    commit_messages: Annotated[
        bool,
        Parameter(
            name="--commit-messages",
            help="Emit the message of every walked commit.",
            group=history_group,
        ),
    ] = False
    staged_files: Annotated[
        bool,
        Parameter(
            name="--staged-files",
            help="Emit the content of files with staged changes.",
            group=history_group,
        ),
    ] = False
    commit_count: Annotated[
        int,
        Parameter(
            name="--commit-count",
            help="Walk at most this many commits from HEAD (0 walks all history).",
            validator=validators.Number(gte=0),
            group=history_group,
        ),
    ] = 0
    tree_errors: Annotated[
        TreeErrorPolicy,
        Parameter(
            name="--tree-errors",
            help="Skip and report, or raise on, commits whose tree cannot be walked.",
            group=history_group,
        ),
    ] = TreeErrorPolicy.SKIP
    certificate_policy: Annotated[
        CertificatePolicy,
        Parameter(
            name="--certificate-policy",
            help="Verify server certificates, or accept all of them.",
            group=remote_group,
        ),
    ] = CertificatePolicy.VERIFY
    clone_timeout: Annotated[
        float | None,
        Parameter(
            name="--clone-timeout",
            help="Abort a remote clone after this many seconds.",
            validator=validators.Number(gt=0),
            group=remote_group,
        ),
    ] = None
    ssh_config: Annotated[
        Path | None,
        Parameter(
            name="--ssh-config",
            help="SSH client configuration used to find key pairs.",
            env_var="SEEKRET_GIT_SSH_CONFIG",
            group=remote_group,
        ),
    ] = None

    def to_load_options(self) -> dict[str, object]:
        """Return the options mapping consumed by the orchestrator.

        Returns
        -------
        dict[str, object]
            Options keyed by their hyphenated names.
        """
        payload: dict[str, object] = {
            OPTION_COMMIT_FILES: self.commit_files,
            OPTION_COMMIT_MESSAGES: self.commit_messages,
            OPTION_STAGED_FILES: self.staged_files,
            OPTION_COMMIT_COUNT: self.commit_count,
            OPTION_TREE_ERRORS: self.tree_errors,
            OPTION_CERTIFICATE_POLICY: self.certificate_policy,
        }
        if self.clone_timeout is not None:
            payload[OPTION_CLONE_TIMEOUT] = self.clone_timeout
        if self.ssh_config is not None:
            payload[OPTION_SSH_CONFIG] = str(self.ssh_config)
        return payload


_DEFAULT_EXTRACT_OPTIONS = ExtractOptions()


def extract_command(
    source: Annotated[
        str,
        Parameter(help="Local repository path or remote git URI."),
    ],
    options: Annotated[ExtractOptions, Parameter(name="*")] = _DEFAULT_EXTRACT_OPTIONS,
    *,
    output_format: Annotated[
        OutputFormat,
        Parameter(
            name="--format",
            help="Write objects as JSON lines, or a human-readable summary.",
            group=output_group,
        ),
    ] = "json",
) -> int:
    """Extract content objects from a git repository.

    Returns
    -------
    int
        Exit status code.
    """
    try:
        result = run_extraction(source, options.to_load_options())
    except SourceGitError as exc:
        exit_code = ExitCode.from_exception(exc)
        Console(stderr=True).print(f"[bold red]error:[/] {exc}", markup=True, highlight=False)
        _LOGGER.debug("Extraction failed with exit code %d", int(exit_code))
        return int(exit_code)
    if output_format == "json":
        write_json_lines(result)
    else:
        print_summary(source, result)
    return ExitCode.SUCCESS


def write_json_lines(result: ExtractionResult) -> None:
    """Write one JSON document per content object to stdout.

    Payload bytes are base64 encoded.
    """
    encoder = msgspec.json.Encoder()
    for item in result.objects:
        sys.stdout.write(encoder.encode(item).decode("utf-8") + "\n")
    sys.stdout.flush()


def print_summary(source: str, result: ExtractionResult) -> None:
    """Print object counts, tolerated issues, and stage timing."""
    console = Console()
    counts = Counter(item.origin_tag for item in result.objects)
    table = Table(title=f"Extracted objects: {source}")
    table.add_column("Origin tag")
    table.add_column("Objects", justify="right")
    for origin_tag, count in sorted(counts.items()):
        table.add_row(str(origin_tag), str(count))
    table.add_row("total", str(len(result.objects)), style="bold")
    console.print(table)
    if result.issues:
        console.print(f"Tree-walk issues: {len(result.issues)}")
        for issue in result.issues:
            location = f"{issue.commit}:{issue.path}" if issue.path else issue.commit
            console.print(f"  {location} {issue.error_type}: {issue.message}", highlight=False)
    for stage, seconds in result.timing.items():
        console.print(f"{stage}: {seconds * 1000.0:.1f}ms", highlight=False)


__all__ = ["ExtractOptions", "extract_command", "print_summary", "write_json_lines"]

"""Shared help-panel groups for the seekret-git CLI."""

from __future__ import annotations

from cyclopts import Group

session_group = Group(
    "Session",
    help="Logging and session options.",
    sort_key=0,
)

history_group = Group(
    "History",
    help="Select which per-commit content is extracted.",
    sort_key=1,
)

remote_group = Group(
    "Remote",
    help="Control how remote repositories are cloned.",
    sort_key=2,
)

output_group = Group(
    "Output",
    help="Configure how extracted objects are written.",
    sort_key=3,
)

observability_group = Group(
    "Observability",
    help="Configure OpenTelemetry tracing and metrics.",
    sort_key=8,
)

__all__ = [
    "history_group",
    "observability_group",
    "output_group",
    "remote_group",
    "session_group",
]

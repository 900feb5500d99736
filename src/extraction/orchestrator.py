"""Extraction orchestrator.

Resolves a source locator into a repository, runs the requested history and
staged stages in order, and returns their content objects as one list.
Every stage runs inside an OpenTelemetry stage span.
"""

from __future__ import annotations

import logging
import threading
import time
from collections import Counter
from collections.abc import Callable, Mapping
from contextlib import ExitStack

import msgspec

from extract.errors import SourceGitError
from extract.git.history import extract_commit_objects
from extract.git.locator import normalize_location
from extract.git.remotes import RemoteOptions
from extract.git.resolver import RepositoryHandle, open_repository
from extract.git.staged import extract_staged_objects
from extract.objects import ContentObject, TraversalIssue
from extraction.options import LoadOptions, normalize_load_options
from obs.otel import SCOPE_EXTRACT, record_error, record_object_count, stage_span
from obs.otel.constants import AttributeName

logger = logging.getLogger(__name__)

STAGE_RESOLVE = "resolve"
STAGE_HISTORY = "history"
STAGE_STAGED = "staged"


class ExtractionResult(msgspec.Struct, frozen=True):
    """Result of a single extraction call."""

    objects: list[ContentObject]
    issues: list[TraversalIssue]
    timing: dict[str, float]


def run_extraction(
    source: str,
    options: LoadOptions | Mapping[str, object] | None = None,
    *,
    cancel_event: threading.Event | None = None,
) -> ExtractionResult:
    """Extract content objects from the repository named by ``source``.

    Parameters
    ----------
    source
        Local path or remote git URI.
    options
        Load options, as ``LoadOptions`` or an options mapping.
    cancel_event
        Optional event that aborts an in-flight remote clone when set.

    Returns
    -------
    ExtractionResult
        History objects followed by staged objects, tolerated tree-walk
        issues, and per-stage timing in seconds.
    """
    resolved = normalize_load_options(options)
    remote = RemoteOptions(
        certificate_policy=resolved.certificate_policy,
        timeout_s=resolved.clone_timeout_s,
        ssh_config_path=resolved.ssh_config_path,
        cancel_event=cancel_event,
    )
    objects: list[ContentObject] = []
    issues: list[TraversalIssue] = []
    timing: dict[str, float] = {}
    with ExitStack() as stack:
        handle = _run_stage(
            STAGE_RESOLVE,
            lambda: stack.enter_context(open_repository(source, remote=remote)),
            timing=timing,
            attributes={AttributeName.LOCATION_KIND: normalize_location(source).kind},
        )
        if resolved.history_enabled:
            history = _run_stage(
                STAGE_HISTORY,
                lambda: extract_commit_objects(
                    handle.repo,
                    commit_files=resolved.commit_files,
                    commit_messages=resolved.commit_messages,
                    commit_count=resolved.commit_count,
                    tree_errors=resolved.tree_errors,
                ),
                timing=timing,
                attributes=_handle_attributes(handle),
            )
            objects.extend(history.objects)
            issues.extend(history.issues)
            _record_counts(history.objects, stage=STAGE_HISTORY)
        if resolved.staged_files:
            staged = _run_stage(
                STAGE_STAGED,
                lambda: extract_staged_objects(handle.repo),
                timing=timing,
                attributes=_handle_attributes(handle),
            )
            objects.extend(staged)
            _record_counts(staged, stage=STAGE_STAGED)
    if issues:
        logger.warning("Extraction of %s tolerated %d tree-walk issues", source, len(issues))
    logger.info("Extracted %d content objects from %s", len(objects), source)
    return ExtractionResult(objects=objects, issues=issues, timing=timing)


def load_objects(
    source: str,
    options: LoadOptions | Mapping[str, object] | None = None,
) -> list[ContentObject]:
    """Load content objects from a repository.

    Returns
    -------
    list[ContentObject]
        History objects followed by staged objects.
    """
    return run_extraction(source, options).objects


def _run_stage[T](
    stage: str,
    func: Callable[[], T],
    *,
    timing: dict[str, float],
    attributes: Mapping[str, object] | None = None,
) -> T:
    start = time.monotonic()
    try:
        with stage_span(
            f"extract.{stage}",
            stage=stage,
            scope_name=SCOPE_EXTRACT,
            attributes=attributes,
        ):
            return func()
    except SourceGitError as exc:
        record_error(stage, type(exc).__name__)
        logger.error("Extraction stage %s failed: %s", stage, exc)
        raise
    finally:
        timing[stage] = time.monotonic() - start


def _handle_attributes(handle: RepositoryHandle) -> dict[str, object]:
    return {
        AttributeName.LOCATION_KIND: handle.location.kind,
        "seekret.temporary_clone": handle.temporary,
    }


def _record_counts(objects: list[ContentObject], *, stage: str) -> None:
    for origin_tag, count in Counter(item.origin_tag for item in objects).items():
        record_object_count(origin_tag, count, stage=stage)


__all__ = [
    "STAGE_HISTORY",
    "STAGE_RESOLVE",
    "STAGE_STAGED",
    "ExtractionResult",
    "load_objects",
    "run_extraction",
]

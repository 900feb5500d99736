"""Commit history extraction: commit messages and per-commit file blobs."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import StrEnum

import pygit2
from pygit2.enums import SortMode

from extract.errors import HistoryWalkError, TreeWalkError
from extract.objects import (
    ContentObject,
    TraversalIssue,
    commit_file_object,
    commit_message_object,
)

_LOGGER = logging.getLogger(__name__)

_LOOKUP_ERRORS = (KeyError, ValueError, pygit2.GitError)


class TreeErrorPolicy(StrEnum):
    """What to do when one commit's tree cannot be walked."""

    SKIP = "skip"
    RAISE = "raise"


@dataclass(frozen=True)
class HistoryExtraction:
    """Objects emitted by a history walk plus tolerated tree failures."""

    objects: list[ContentObject] = field(default_factory=list)
    issues: list[TraversalIssue] = field(default_factory=list)


@dataclass
class _TreeWalkState:
    repo: pygit2.Repository
    commit_id: str
    policy: TreeErrorPolicy
    objects: list[ContentObject]
    issues: list[TraversalIssue]

    def tolerate(self, path: str | None, exc: Exception) -> None:
        if self.policy is TreeErrorPolicy.RAISE:
            raise TreeWalkError(self.commit_id, path, str(exc)) from exc
        _LOGGER.warning(
            "Skipping unreadable tree entry %s in commit %s: %s",
            path or "<root>",
            self.commit_id,
            exc,
        )
        self.issues.append(
            TraversalIssue(
                commit=self.commit_id,
                path=path,
                error_type=type(exc).__name__,
                message=str(exc),
            )
        )


def extract_commit_objects(
    repo: pygit2.Repository,
    *,
    commit_files: bool,
    commit_messages: bool,
    commit_count: int = 0,
    tree_errors: TreeErrorPolicy = TreeErrorPolicy.SKIP,
) -> HistoryExtraction:
    """Walk history from HEAD, newest commit first, and emit content objects.

    Each commit contributes its message object (when ``commit_messages``)
    followed by one object per blob in its tree (when ``commit_files``).
    ``commit_count > 0`` limits the walk to ``HEAD~commit_count..HEAD``; when
    that boundary does not exist the whole history is walked.

    Returns
    -------
    HistoryExtraction
        Emitted objects in walk order and any tolerated tree failures.

    Raises
    ------
    HistoryWalkError
        Raised when the walk cannot be set up or iterated.
    """
    result = HistoryExtraction()
    if not (commit_files or commit_messages):
        return result
    walker = _history_walker(repo, commit_count)
    visited = 0
    try:
        for commit in walker:
            visited += 1
            commit_id = str(commit.id)
            if commit_messages:
                result.objects.append(commit_message_object(commit_id, commit.raw_message))
            if commit_files:
                state = _TreeWalkState(
                    repo=repo,
                    commit_id=commit_id,
                    policy=tree_errors,
                    objects=result.objects,
                    issues=result.issues,
                )
                _walk_commit_tree(commit, state)
    except pygit2.GitError as exc:
        msg = f"Commit walk failed: {exc}"
        raise HistoryWalkError(msg) from exc
    _LOGGER.debug("Visited %d commits, emitted %d objects", visited, len(result.objects))
    return result


def _history_walker(repo: pygit2.Repository, commit_count: int) -> pygit2.Walker:
    try:
        unborn = repo.head_is_unborn
        if not unborn:
            head = repo.head.peel(pygit2.Commit)
            walker = repo.walk(head.id, SortMode.TIME)
    except _LOOKUP_ERRORS as exc:
        msg = f"Cannot start commit walk at HEAD: {exc}"
        raise HistoryWalkError(msg) from exc
    if unborn:
        msg = "HEAD is unborn; repository has no history"
        raise HistoryWalkError(msg)
    if commit_count > 0:
        try:
            boundary = repo.revparse_single(f"{head.id}~{commit_count}").peel(pygit2.Commit)
        except _LOOKUP_ERRORS:
            _LOGGER.debug(
                "History has no commit %d behind HEAD; walking full history", commit_count
            )
        else:
            walker.hide(boundary.id)
    return walker


def _walk_commit_tree(commit: pygit2.Commit, state: _TreeWalkState) -> None:
    try:
        tree = commit.tree
    except _LOOKUP_ERRORS as exc:
        state.tolerate(None, exc)
        return
    _walk_tree(tree, "", state)


def _walk_tree(tree: pygit2.Tree, base: str, state: _TreeWalkState) -> None:
    for entry in tree:
        path = f"{base}{entry.name}"
        kind = entry.type_str
        if kind == "tree":
            try:
                subtree = state.repo[entry.id].peel(pygit2.Tree)
            except _LOOKUP_ERRORS as exc:
                state.tolerate(path, exc)
                continue
            _walk_tree(subtree, f"{path}/", state)
        elif kind == "blob":
            try:
                data = state.repo[entry.id].peel(pygit2.Blob).data
            except _LOOKUP_ERRORS as exc:
                state.tolerate(path, exc)
                continue
            state.objects.append(
                commit_file_object(path, data, commit_id=state.commit_id, blob_id=str(entry.id))
            )


__all__ = ["HistoryExtraction", "TreeErrorPolicy", "extract_commit_objects"]

"""Extraction layer.

These modules turn a git source into ``ContentObject`` values for a
downstream secret scanner.

Exports:
- content objects -> ContentObject, MetadataValue, TraversalIssue
- error taxonomy -> SourceGitError and subclasses
- repository resolution -> open_repository
- history extraction -> extract_commit_objects
- staged extraction -> extract_staged_objects

Module Organization:
- git/ - Locator normalization, credentials, resolution and traversal
- objects - Content object model
- errors - Typed failures surfaced to callers
"""

from __future__ import annotations

import importlib
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from extract.errors import (
        AuthenticationError,
        CloneError,
        HistoryWalkError,
        IndexStatusError,
        RepositoryNotFoundError,
        SourceGitError,
        SshConfigError,
        TreeWalkError,
    )
    from extract.git.history import TreeErrorPolicy, extract_commit_objects
    from extract.git.resolver import RepositoryHandle, open_repository
    from extract.git.staged import extract_staged_objects
    from extract.objects import SOURCE_TYPE, ContentObject, MetadataValue, TraversalIssue

# Map of export names to (module_path, attribute_name) for lazy loading
_EXPORTS: dict[str, tuple[str, str]] = {
    "SOURCE_TYPE": ("extract.objects", "SOURCE_TYPE"),
    "ContentObject": ("extract.objects", "ContentObject"),
    "MetadataValue": ("extract.objects", "MetadataValue"),
    "TraversalIssue": ("extract.objects", "TraversalIssue"),
    "AuthenticationError": ("extract.errors", "AuthenticationError"),
    "CloneError": ("extract.errors", "CloneError"),
    "HistoryWalkError": ("extract.errors", "HistoryWalkError"),
    "IndexStatusError": ("extract.errors", "IndexStatusError"),
    "RepositoryNotFoundError": ("extract.errors", "RepositoryNotFoundError"),
    "SourceGitError": ("extract.errors", "SourceGitError"),
    "SshConfigError": ("extract.errors", "SshConfigError"),
    "TreeWalkError": ("extract.errors", "TreeWalkError"),
    "RepositoryHandle": ("extract.git.resolver", "RepositoryHandle"),
    "open_repository": ("extract.git.resolver", "open_repository"),
    "TreeErrorPolicy": ("extract.git.history", "TreeErrorPolicy"),
    "extract_commit_objects": ("extract.git.history", "extract_commit_objects"),
    "extract_staged_objects": ("extract.git.staged", "extract_staged_objects"),
}


def __getattr__(name: str) -> object:
    target = _EXPORTS.get(name)
    if target is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)
    module_name, attr = target
    module = importlib.import_module(module_name)
    return getattr(module, attr)


def __dir__() -> list[str]:
    return sorted(list(globals()) + list(_EXPORTS))


__all__ = (
    "SOURCE_TYPE",
    "AuthenticationError",
    "CloneError",
    "ContentObject",
    "HistoryWalkError",
    "IndexStatusError",
    "MetadataValue",
    "RepositoryHandle",
    "RepositoryNotFoundError",
    "SourceGitError",
    "SshConfigError",
    "TraversalIssue",
    "TreeErrorPolicy",
    "TreeWalkError",
    "extract_commit_objects",
    "extract_staged_objects",
    "open_repository",
)

"""Staged change extraction from the repository index."""

from __future__ import annotations

import logging

import pygit2
from pygit2.enums import FileMode, FileStatus

from extract.errors import IndexStatusError
from extract.objects import ContentObject, staged_file_object

_LOGGER = logging.getLogger(__name__)

STAGED_STATUS_MASK = (
    FileStatus.INDEX_NEW
    | FileStatus.INDEX_MODIFIED
    | FileStatus.INDEX_RENAMED
    | FileStatus.INDEX_TYPECHANGE
)


def is_staged_change(status: int) -> bool:
    """Return whether a status carries an index-side change against HEAD.

    Returns
    -------
    bool
        ``True`` when the index differs from HEAD for the path.
    """
    return bool(status & STAGED_STATUS_MASK)


def extract_staged_objects(repo: pygit2.Repository) -> list[ContentObject]:
    """Emit one object per index entry whose staged content differs from HEAD.

    Entries are visited in index order. Paths whose only change is in the
    working tree are not staged and are skipped. Gitlink entries record a
    submodule commit rather than file content and are skipped too.

    Returns
    -------
    list[ContentObject]
        Staged file objects tagged ``status=staged``.

    Raises
    ------
    IndexStatusError
        Raised when the index, a file status, or a staged blob cannot be read.
    """
    try:
        index = repo.index
        index.read(False)
    except pygit2.GitError as exc:
        msg = f"Cannot read repository index: {exc}"
        raise IndexStatusError(msg) from exc
    objects: list[ContentObject] = []
    for entry in index:
        path = entry.path
        if entry.mode == FileMode.COMMIT:
            _LOGGER.debug("Skipping submodule entry %s", path)
            continue
        try:
            status = repo.status_file(path)
        except (KeyError, ValueError, pygit2.GitError) as exc:
            msg = f"Cannot read status for {path!r}: {exc}"
            raise IndexStatusError(msg) from exc
        if not is_staged_change(status):
            continue
        try:
            data = repo[entry.id].peel(pygit2.Blob).data
        except (KeyError, ValueError, pygit2.GitError) as exc:
            msg = f"Cannot read staged blob for {path!r}: {exc}"
            raise IndexStatusError(msg) from exc
        objects.append(staged_file_object(path, data))
    _LOGGER.debug("Collected %d staged objects from %d index entries", len(objects), len(index))
    return objects


__all__ = ["STAGED_STATUS_MASK", "extract_staged_objects", "is_staged_change"]

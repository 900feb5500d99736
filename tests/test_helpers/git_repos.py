"""Helpers that build small git repositories for tests."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, cast

import pygit2

if TYPE_CHECKING:
    from collections.abc import Mapping

    from pygit2 import Oid, Repository

TEST_SIGNATURE = ("Test User", "test@example.com")


def init_repo(path: Path) -> Repository:
    """Initialize a non-bare repository at ``path``.

    Returns
    -------
    pygit2.Repository
        Freshly initialized repository.
    """
    return pygit2.init_repository(str(path), bare=False)


def stage_file(repo: Repository, relpath: str, content: bytes | str) -> Path:
    """Write ``relpath`` in the working tree and add it to the index.

    Returns
    -------
    pathlib.Path
        Absolute path of the written file.
    """
    target = Path(repo.workdir) / relpath
    target.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, str):
        target.write_text(content, encoding="utf-8")
    else:
        target.write_bytes(content)
    repo.index.add(relpath)
    repo.index.write()
    return target


def commit_files(
    repo: Repository,
    files: Mapping[str, bytes | str],
    *,
    message: str = "commit",
) -> str:
    """Stage ``files`` and commit them on top of HEAD.

    Returns
    -------
    str
        New commit id.
    """
    for relpath, content in files.items():
        stage_file(repo, relpath, content)
    author = pygit2.Signature(*TEST_SIGNATURE)
    tree_id = repo.index.write_tree()
    parents: list[Oid] = []
    if not repo.head_is_unborn:
        parents = [cast("Oid", repo.head.target)]
    commit_id = repo.create_commit("HEAD", author, author, message, tree_id, parents)
    return str(commit_id)


def build_history(repo: Repository, count: int) -> list[str]:
    """Create ``count`` commits, each touching ``file.txt``.

    Returns
    -------
    list[str]
        Commit ids, oldest first.
    """
    return [
        commit_files(repo, {"file.txt": f"revision {index}\n"}, message=f"commit {index}\n")
        for index in range(count)
    ]


def loose_object_path(repo: Repository, object_id: str) -> Path:
    """Return the on-disk path of a loose object.

    Returns
    -------
    pathlib.Path
        Path under ``.git/objects``.
    """
    return Path(repo.path) / "objects" / object_id[:2] / object_id[2:]


__all__ = [
    "TEST_SIGNATURE",
    "build_history",
    "commit_files",
    "init_repo",
    "loose_object_path",
    "stage_file",
]

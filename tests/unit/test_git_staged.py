"""Tests for staged change extraction."""

from __future__ import annotations

from pathlib import Path

import pygit2
from pygit2.enums import FileMode, FileStatus

from core_types import OriginTag
from extract.git.staged import extract_staged_objects, is_staged_change
from extract.objects import METADATA_STATUS, STATUS_STAGED
from tests.test_helpers.git_repos import commit_files, stage_file


def test_clean_repository_has_no_staged_objects(git_repo: pygit2.Repository) -> None:
    """Ensure a clean index yields nothing."""
    commit_files(git_repo, {"a.txt": "a\n", "b.txt": "b\n"})
    assert extract_staged_objects(git_repo) == []


def test_staged_modification_is_emitted(git_repo: pygit2.Repository) -> None:
    """Ensure one staged modification yields one object with staged content."""
    commit_files(git_repo, {"a.txt": "a\n", "b.txt": "b\n"})
    stage_file(git_repo, "b.txt", "password=hunter2\n")
    objects = extract_staged_objects(git_repo)
    assert len(objects) == 1
    item = objects[0]
    assert item.id == "b.txt"
    assert item.origin_tag is OriginTag.FILE_CONTENT
    assert item.payload == b"password=hunter2\n"
    assert list(item.metadata) == [METADATA_STATUS]
    assert item.metadata_value(METADATA_STATUS) == STATUS_STAGED
    assert item.primary_keys() == {}


def test_working_tree_only_change_is_skipped(git_repo: pygit2.Repository) -> None:
    """Ensure unstaged edits are not reported as staged."""
    commit_files(git_repo, {"a.txt": "a\n"})
    (Path(git_repo.workdir) / "a.txt").write_text("edited\n", encoding="utf-8")
    assert extract_staged_objects(git_repo) == []


def test_staged_content_wins_over_working_tree(git_repo: pygit2.Repository) -> None:
    """Ensure the emitted payload is the index blob, not the working file."""
    commit_files(git_repo, {"a.txt": "a\n"})
    target = stage_file(git_repo, "a.txt", "staged\n")
    target.write_text("unstaged\n", encoding="utf-8")
    objects = extract_staged_objects(git_repo)
    assert [item.payload for item in objects] == [b"staged\n"]


def test_new_files_are_staged_in_index_order(git_repo: pygit2.Repository) -> None:
    """Ensure newly added files are reported in index order."""
    commit_files(git_repo, {"a.txt": "a\n"})
    stage_file(git_repo, "z/new.txt", "z\n")
    stage_file(git_repo, "m.txt", "m\n")
    objects = extract_staged_objects(git_repo)
    assert [item.id for item in objects] == ["m.txt", "z/new.txt"]


def test_unborn_repository_reports_staged_files(git_repo: pygit2.Repository) -> None:
    """Ensure files staged before the first commit are reported."""
    stage_file(git_repo, "first.txt", "first\n")
    objects = extract_staged_objects(git_repo)
    assert [item.id for item in objects] == ["first.txt"]


def test_staged_submodule_entry_is_skipped(git_repo: pygit2.Repository) -> None:
    """Ensure a staged gitlink is skipped while regular staged files are kept."""
    commit_id = commit_files(git_repo, {"a.txt": "a\n"})
    gitlink = pygit2.IndexEntry("vendor/lib", pygit2.Oid(hex=commit_id), FileMode.COMMIT)
    git_repo.index.add(gitlink)
    git_repo.index.write()
    stage_file(git_repo, "b.txt", "b\n")
    objects = extract_staged_objects(git_repo)
    assert [item.id for item in objects] == ["b.txt"]


def test_is_staged_change_flags() -> None:
    """Ensure only index-side flags count as staged."""
    assert is_staged_change(FileStatus.INDEX_MODIFIED)
    assert is_staged_change(FileStatus.INDEX_NEW | FileStatus.WT_MODIFIED)
    assert not is_staged_change(FileStatus.WT_MODIFIED)
    assert not is_staged_change(FileStatus.CURRENT)

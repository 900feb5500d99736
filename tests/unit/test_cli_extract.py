"""Tests for the seekret-git CLI commands."""

from __future__ import annotations

import base64
import json
from pathlib import Path

import pygit2
import pytest

from cli.app import app
from cli.exit_codes import ExitCode
from tests.test_helpers.git_repos import build_history, stage_file


def _run(tokens: list[str]) -> int:
    result = app(tokens)
    assert isinstance(result, int)
    return result


def test_extract_json_lines(
    git_repo: pygit2.Repository,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Ensure JSON output has one base64-encoded object per line."""
    commit_ids = build_history(git_repo, 2)
    exit_code = _run(["extract", str(Path(git_repo.workdir)), "--commit-messages"])
    assert exit_code == ExitCode.SUCCESS
    lines = capsys.readouterr().out.splitlines()
    documents = [json.loads(line) for line in lines]
    expected_ids = [f"commit-{commit_id}" for commit_id in reversed(commit_ids)]
    assert [doc["id"] for doc in documents] == expected_ids
    newest = documents[0]
    assert newest["origin_tag"] == "commit-message"
    assert newest["source_type"] == "seekret-source-git"
    assert base64.b64decode(newest["payload"]) == b"commit 1\n"
    assert newest["metadata"]["commit"] == {"value": commit_ids[1], "primary_key": False}


def test_extract_summary(
    git_repo: pygit2.Repository,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Ensure the summary format reports per-tag counts."""
    build_history(git_repo, 3)
    stage_file(git_repo, "new.txt", "new\n")
    exit_code = _run(
        [
            "extract",
            str(Path(git_repo.workdir)),
            "--commit-messages",
            "--staged-files",
            "--format",
            "summary",
        ]
    )
    assert exit_code == ExitCode.SUCCESS
    out = capsys.readouterr().out
    assert "commit-message" in out
    assert "file-content" in out
    assert "total" in out


def test_extract_commit_count(
    git_repo: pygit2.Repository,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Ensure --commit-count bounds the walk."""
    build_history(git_repo, 4)
    exit_code = _run(
        ["extract", str(Path(git_repo.workdir)), "--commit-messages", "--commit-count", "1"]
    )
    assert exit_code == ExitCode.SUCCESS
    assert len(capsys.readouterr().out.splitlines()) == 1


def test_extract_missing_repository_exit_code(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Ensure resolution failures map to their exit code."""
    exit_code = _run(["extract", str(tmp_path / "missing"), "--commit-messages"])
    assert exit_code == ExitCode.REPOSITORY_NOT_FOUND
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Repository not found" in captured.err


def test_extract_unborn_history_exit_code(git_repo: pygit2.Repository) -> None:
    """Ensure traversal failures map to the traversal exit code."""
    exit_code = _run(["extract", str(Path(git_repo.workdir)), "--commit-files"])
    assert exit_code == ExitCode.TRAVERSAL_ERROR


def test_version_command(capsys: pytest.CaptureFixture[str]) -> None:
    """Ensure the version command prints a JSON payload."""
    exit_code = _run(["version"])
    assert exit_code == ExitCode.SUCCESS
    payload = json.loads(capsys.readouterr().out)
    assert "seekret-source-git" in payload
    assert payload["libgit2"]
    assert set(payload["transports"]) == {"https", "ssh"}

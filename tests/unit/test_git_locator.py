"""Tests for source locator classification."""

from __future__ import annotations

import pytest

from core_types import LocationKind
from extract.git.locator import looks_remote, normalize_location, normalize_source


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("git@github.com:acme/widget.git", ("ssh://git@github.com/acme/widget.git", True)),
        ("https://github.com/acme/widget.git", ("https://github.com/acme/widget.git", True)),
        ("http://git.acme.io/widget.git", ("http://git.acme.io/widget.git", True)),
        ("git://github.com/acme/widget.git", ("git://github.com/acme/widget.git", True)),
        ("ssh://github.com/acme/widget.git", ("ssh://github.com/acme/widget.git", True)),
        ("/home/user/widget", ("/home/user/widget", False)),
        ("relative/widget", ("relative/widget", False)),
    ],
)
def test_normalize_source(raw: str, expected: tuple[str, bool]) -> None:
    """Ensure remote URIs are canonicalized and paths pass through unchanged."""
    assert normalize_source(raw) == expected


def test_normalize_location_records_host() -> None:
    """Ensure remote locations carry their host."""
    location = normalize_location("git@github.com:acme/widget.git")
    assert location.kind is LocationKind.REMOTE
    assert location.is_remote
    assert location.host == "github.com"


@pytest.mark.parametrize(
    "raw",
    [
        "https://github.com/acme/widget",
        "https://github.com/acme/team/widget.git",
        "git@github.com:acme/wid.get.git",
        "ftp://github.com/acme/widget.git",
    ],
)
def test_unrecognized_remote_forms_are_local(raw: str) -> None:
    """Ensure strings outside the remote grammar are treated as local paths."""
    location = normalize_location(raw)
    assert location.kind is LocationKind.LOCAL
    assert location.value == raw
    assert location.host is None
    assert looks_remote(raw)


def test_plain_paths_do_not_look_remote() -> None:
    """Ensure filesystem paths are not reported as remote lookalikes."""
    assert not looks_remote("/srv/git/widget.git")
    assert not looks_remote("widget")

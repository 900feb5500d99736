"""Tests for libgit2 settings overrides."""

from __future__ import annotations

import pytest

from extract.git import settings as git_settings
from extract.git.settings import GitSettingsSpec, apply_git_settings, scoped_git_settings


class _FakeSettings:
    def __init__(self) -> None:
        self.owner_validation = True
        self.server_timeout = 0


def test_apply_git_settings_sets_exposed_values(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure exposed settings are applied and unknown ones skipped."""
    fake = _FakeSettings()
    monkeypatch.setattr(git_settings.pygit2, "Settings", lambda: fake)
    applied = apply_git_settings(
        GitSettingsSpec(
            owner_validation=False,
            server_timeout_ms=1500,
            server_connect_timeout_ms=700,
        )
    )
    assert applied == ("owner_validation", "server_timeout")
    assert fake.owner_validation is False
    assert fake.server_timeout == 1500
    assert not hasattr(fake, "server_connect_timeout")


def test_apply_git_settings_empty_spec(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure an empty spec leaves settings untouched."""
    fake = _FakeSettings()
    monkeypatch.setattr(git_settings.pygit2, "Settings", lambda: fake)
    assert apply_git_settings(GitSettingsSpec()) == ()
    assert fake.owner_validation is True


def test_scoped_git_settings_restores_previous_values(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure scoped overrides are undone when the block exits, even on error."""
    fake = _FakeSettings()
    fake.server_timeout = 300
    monkeypatch.setattr(git_settings.pygit2, "Settings", lambda: fake)
    spec = GitSettingsSpec(owner_validation=False, server_timeout_ms=1500)
    with pytest.raises(RuntimeError, match="stop"), scoped_git_settings(spec) as applied:
        assert applied == ("owner_validation", "server_timeout")
        assert fake.owner_validation is False
        assert fake.server_timeout == 1500
        msg = "stop"
        raise RuntimeError(msg)
    assert fake.owner_validation is True
    assert fake.server_timeout == 300

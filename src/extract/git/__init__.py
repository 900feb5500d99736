"""Git repository integration for the extract layer.

This subpackage provides pygit2-backed utilities for:
- Source locator classification and remote URI canonicalization
- SSH key-pair credentials resolved from the SSH client configuration
- Opening local repositories and cloning remotes into scoped temp dirs
- Commit history traversal
- Staged change detection
"""

from __future__ import annotations

from extract.git.context import discover_repository_path, open_local_repository
from extract.git.history import HistoryExtraction, TreeErrorPolicy, extract_commit_objects
from extract.git.locator import (
    NormalizedLocation,
    looks_remote,
    normalize_location,
    normalize_source,
)
from extract.git.remotes import (
    CertificatePolicy,
    RemoteAuthCallbacks,
    RemoteFeatureSet,
    RemoteOptions,
    remote_features,
    remote_host,
)
from extract.git.resolver import RepositoryHandle, clone_remote, open_repository
from extract.git.settings import (
    GitSettingsSpec,
    apply_git_settings,
    apply_git_settings_once,
    git_settings_from_env,
)
from extract.git.ssh_config import SshIdentity, default_ssh_config_path, resolve_identity
from extract.git.staged import extract_staged_objects, is_staged_change

__all__ = [
    "CertificatePolicy",
    "GitSettingsSpec",
    "HistoryExtraction",
    "NormalizedLocation",
    "RemoteAuthCallbacks",
    "RemoteFeatureSet",
    "RemoteOptions",
    "RepositoryHandle",
    "SshIdentity",
    "TreeErrorPolicy",
    "apply_git_settings",
    "apply_git_settings_once",
    "clone_remote",
    "default_ssh_config_path",
    "discover_repository_path",
    "extract_commit_objects",
    "extract_staged_objects",
    "git_settings_from_env",
    "is_staged_change",
    "looks_remote",
    "normalize_location",
    "normalize_source",
    "open_local_repository",
    "open_repository",
    "remote_features",
    "remote_host",
    "resolve_identity",
]

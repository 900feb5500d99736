"""Remote transport callbacks: SSH key credentials, trust policy, deadlines."""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from urllib.parse import urlparse

import pygit2

from extract.errors import AuthenticationError, CloneCancelledError, CloneTimeoutError
from extract.git.ssh_config import resolve_identity

_LOGGER = logging.getLogger(__name__)

DEFAULT_SSH_USERNAME = "git"
MAX_CREDENTIAL_ATTEMPTS = 3


class CertificatePolicy(StrEnum):
    """How server certificates and host keys are trusted."""

    VERIFY = "verify"
    ACCEPT_ALL = "accept-all"


@dataclass(frozen=True)
class RemoteOptions:
    """Caller controls for a remote clone."""

    certificate_policy: CertificatePolicy = CertificatePolicy.VERIFY
    timeout_s: float | None = None
    ssh_config_path: Path | None = None
    cancel_event: threading.Event | None = None


@dataclass(frozen=True)
class RemoteFeatureSet:
    """Supported transport features reported by pygit2."""

    ssh: bool
    https: bool


def remote_features() -> RemoteFeatureSet:
    """Return supported remote transport features.

    Returns
    -------
    RemoteFeatureSet
        Supported transport features.
    """
    ssh_flag = getattr(pygit2, "GIT_FEATURE_SSH", 0)
    https_flag = getattr(pygit2, "GIT_FEATURE_HTTPS", 0)
    return RemoteFeatureSet(
        ssh=bool(pygit2.features & ssh_flag),
        https=bool(pygit2.features & https_flag),
    )


class RemoteAuthCallbacks(pygit2.RemoteCallbacks):
    """Remote callbacks that negotiate SSH key credentials from the SSH config."""

    def __init__(self, options: RemoteOptions) -> None:
        super().__init__()
        self._options = options
        self._deadline = (
            time.monotonic() + options.timeout_s if options.timeout_s is not None else None
        )
        self._attempts = 0

    def credentials(
        self,
        url: str,
        username_from_url: str | None,
        allowed_types: pygit2.enums.CredentialType,
    ) -> pygit2.Username | pygit2.Keypair:
        """Return credentials based on the allowed types.

        Returns
        -------
        object
            Credential object accepted by pygit2.

        Raises
        ------
        AuthenticationError
            Raised when no supported credential type is available, the SSH
            config cannot supply a key pair, or the attempt budget is spent.
        """
        self.check_deadline()
        self._attempts += 1
        if self._attempts > MAX_CREDENTIAL_ATTEMPTS:
            msg = f"Authentication to {url!r} failed after {MAX_CREDENTIAL_ATTEMPTS} attempts"
            raise AuthenticationError(msg)
        username = username_from_url or DEFAULT_SSH_USERNAME
        if allowed_types & pygit2.enums.CredentialType.USERNAME:
            return pygit2.Username(username)
        if allowed_types & pygit2.enums.CredentialType.SSH_KEY:
            host = remote_host(url)
            if host is None:
                msg = f"Cannot determine host for remote {url!r}"
                raise AuthenticationError(msg)
            identity = resolve_identity(host, config_path=self._options.ssh_config_path)
            return pygit2.Keypair(
                username,
                str(identity.public_key_path),
                str(identity.private_key_path),
                "",
            )
        msg = f"No supported credentials available for remote {url!r}"
        raise AuthenticationError(msg)

    def certificate_check(self, certificate: None, valid: bool, host: bytes | str) -> bool:
        """Return whether to accept the server certificate or host key.

        Returns
        -------
        bool
            ``True`` to accept, ``False`` to reject.
        """
        _ = certificate
        self.check_deadline()
        if self._options.certificate_policy is CertificatePolicy.ACCEPT_ALL:
            if not valid:
                _LOGGER.warning("Accepting unverified certificate for %r", host)
            return True
        return bool(valid)

    def transfer_progress(self, stats: pygit2.remotes.TransferProgress) -> None:
        """Abort the transfer when the deadline passes or cancellation is requested."""
        _ = stats
        self.check_deadline()

    def sideband_progress(self, string: str) -> None:
        """Abort on deadline or cancellation while the server reports progress."""
        _LOGGER.debug("remote: %s", string.rstrip())
        self.check_deadline()

    def deadline_passed(self) -> bool:
        """Return whether the clone has run past its timeout."""
        return self._deadline is not None and time.monotonic() > self._deadline

    def check_deadline(self) -> None:
        """Raise when the clone was cancelled or ran past its deadline.

        Raises
        ------
        CloneCancelledError
            Raised when the cancel event is set.
        CloneTimeoutError
            Raised when the deadline has passed.
        """
        cancel_event = self._options.cancel_event
        if cancel_event is not None and cancel_event.is_set():
            msg = "Clone cancelled"
            raise CloneCancelledError(msg)
        if self.deadline_passed():
            msg = f"Clone exceeded timeout of {self._options.timeout_s}s"
            raise CloneTimeoutError(msg)


def remote_host(url: str) -> str | None:
    """Return the host part of a canonical remote URI.

    Returns
    -------
    str | None
        Host name, or None when the URI carries none.
    """
    parsed = urlparse(url)
    if parsed.hostname:
        return parsed.hostname
    if "@" in url and ":" in url:
        return url.split(":", 1)[0].split("@")[-1] or None
    return None


__all__ = [
    "DEFAULT_SSH_USERNAME",
    "MAX_CREDENTIAL_ATTEMPTS",
    "CertificatePolicy",
    "RemoteAuthCallbacks",
    "RemoteFeatureSet",
    "RemoteOptions",
    "remote_features",
    "remote_host",
]

"""SSH client configuration lookup for remote key-pair credentials."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import paramiko
from paramiko.ssh_exception import ConfigParseError, CouldNotCanonicalize

from extract.errors import SshConfigError
from utils.env_utils import env_path

_LOGGER = logging.getLogger(__name__)

SSH_CONFIG_ENV = "SEEKRET_GIT_SSH_CONFIG"
PUBLIC_KEY_SUFFIX = ".pub"


@dataclass(frozen=True)
class SshIdentity:
    """Private/public key pair declared for a host."""

    host: str
    private_key_path: Path
    public_key_path: Path


def default_ssh_config_path() -> Path:
    """Return the SSH client configuration path.

    Returns
    -------
    pathlib.Path
        ``SEEKRET_GIT_SSH_CONFIG`` when set, otherwise ``~/.ssh/config``.
    """
    return env_path(SSH_CONFIG_ENV) or Path("~/.ssh/config").expanduser()


def load_ssh_config(path: Path) -> paramiko.SSHConfig:
    """Parse an SSH client configuration file.

    Returns
    -------
    paramiko.SSHConfig
        Parsed configuration.

    Raises
    ------
    SshConfigError
        Raised when the file cannot be read or parsed.
    """
    try:
        return paramiko.SSHConfig.from_path(str(path))
    except OSError as exc:
        msg = f"Cannot read SSH config {str(path)!r}: {exc.strerror or exc}"
        raise SshConfigError(msg) from exc
    except ConfigParseError as exc:
        msg = f"Cannot parse SSH config {str(path)!r}: {exc}"
        raise SshConfigError(msg) from exc


def resolve_identity(host: str, *, config_path: Path | None = None) -> SshIdentity:
    """Return the key pair the SSH config declares for ``host``.

    The first ``IdentityFile`` of the matching host block is the private key;
    the public key sits beside it with a ``.pub`` suffix.

    Returns
    -------
    SshIdentity
        Key pair for the host.

    Raises
    ------
    SshConfigError
        Raised when the config is unusable or declares no identity for the host.
    """
    path = config_path if config_path is not None else default_ssh_config_path()
    config = load_ssh_config(path)
    try:
        host_config = config.lookup(host)
    except (ConfigParseError, CouldNotCanonicalize) as exc:
        msg = f"SSH config lookup failed for host {host!r}: {exc}"
        raise SshConfigError(msg) from exc
    identity_files = host_config.get("identityfile") or []
    if not identity_files:
        msg = f"No IdentityFile for host {host!r} in {str(path)!r}"
        raise SshConfigError(msg)
    private_key = Path(identity_files[0]).expanduser()
    public_key = private_key.with_name(private_key.name + PUBLIC_KEY_SUFFIX)
    _LOGGER.debug("Resolved SSH identity %s for host %s", private_key, host)
    return SshIdentity(host=host, private_key_path=private_key, public_key_path=public_key)


__all__ = [
    "PUBLIC_KEY_SUFFIX",
    "SSH_CONFIG_ENV",
    "SshIdentity",
    "default_ssh_config_path",
    "load_ssh_config",
    "resolve_identity",
]

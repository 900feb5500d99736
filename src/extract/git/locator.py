"""Source locator classification and remote URI canonicalization."""

from __future__ import annotations

import re

import msgspec

from core_types import LocationKind

_REMOTE_PATTERN = re.compile(
    r"^(?:(?P<proto>https?|git|ssh)://|(?P<user>git@))"
    r"(?P<host>[^:/]+)[/:](?P<org>[^/]+)/(?P<repo>[^/.]+)\.git$"
)
_REMOTE_LOOKALIKE = re.compile(r"^(?:[A-Za-z][A-Za-z0-9+.-]*://|git@)")
_DEFAULT_PROTOCOL = "ssh"


class NormalizedLocation(msgspec.Struct, frozen=True):
    """Classified source locator."""

    kind: LocationKind
    value: str
    host: str | None = None

    @property
    def is_remote(self) -> bool:
        """Return whether the location is a remote URI."""
        return self.kind is LocationKind.REMOTE


def normalize_location(raw: str) -> NormalizedLocation:
    """Classify a raw locator and canonicalize remote URIs.

    ``git@host:org/repo.git`` becomes ``ssh://git@host/org/repo.git``; URIs
    with an explicit protocol keep it. Anything outside the remote grammar is
    a local path and is returned unchanged.

    Returns
    -------
    NormalizedLocation
        Local path or canonical remote URI.
    """
    match = _REMOTE_PATTERN.match(raw)
    if match is None:
        return NormalizedLocation(kind=LocationKind.LOCAL, value=raw)
    proto = match.group("proto") or _DEFAULT_PROTOCOL
    user = match.group("user") or ""
    host = match.group("host")
    uri = f"{proto}://{user}{host}/{match.group('org')}/{match.group('repo')}.git"
    return NormalizedLocation(kind=LocationKind.REMOTE, value=uri, host=host)


def normalize_source(raw: str) -> tuple[str, bool]:
    """Return ``(canonical, is_remote)`` for a raw locator.

    Returns
    -------
    tuple[str, bool]
        Canonical locator and whether it is remote.
    """
    location = normalize_location(raw)
    return location.value, location.is_remote


def looks_remote(raw: str) -> bool:
    """Return whether an unmatched locator still resembles a remote URI.

    Returns
    -------
    bool
        ``True`` for strings with a URI scheme or ``git@`` prefix.
    """
    return bool(_REMOTE_LOOKALIKE.match(raw))


__all__ = ["NormalizedLocation", "looks_remote", "normalize_location", "normalize_source"]

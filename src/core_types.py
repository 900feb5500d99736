"""Shared type aliases and small typing helpers."""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path
from typing import Annotated

from msgspec import Meta

type PathLike = str | Path

NonNegativeInt = Annotated[int, Meta(ge=0)]
PositiveFloat = Annotated[float, Meta(gt=0)]


class LocationKind(StrEnum):
    """Where a source locator points."""

    LOCAL = "local"
    REMOTE = "remote"


class OriginTag(StrEnum):
    """Origin tags carried by extracted content objects."""

    FILE_CONTENT = "file-content"
    COMMIT_MESSAGE = "commit-message"


def ensure_path(p: PathLike) -> Path:
    """Return a normalized ``Path`` for the provided value.

    Parameters
    ----------
    p:
        String or ``Path`` input to normalize.

    Returns
    -------
    pathlib.Path
        Normalized path instance.
    """
    return p if isinstance(p, Path) else Path(p)


__all__ = [
    "LocationKind",
    "NonNegativeInt",
    "OriginTag",
    "PathLike",
    "PositiveFloat",
    "ensure_path",
]

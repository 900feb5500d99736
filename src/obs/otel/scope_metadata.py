"""Version stamped on tracers, meters and the service resource."""

from __future__ import annotations

from functools import cache
from importlib.metadata import PackageNotFoundError, version

from utils.env_utils import env_value

DISTRIBUTION_NAME = "seekret-source-git"


@cache
def instrumentation_version() -> str | None:
    """Return ``SEEKRET_SERVICE_VERSION`` or the installed distribution version.

    Returns
    -------
    str | None
        Version string, or None when running from an uninstalled checkout.
    """
    override = env_value("SEEKRET_SERVICE_VERSION")
    if override is not None:
        return override
    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        return None


__all__ = ["DISTRIBUTION_NAME", "instrumentation_version"]

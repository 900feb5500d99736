"""Canonical OpenTelemetry instrumentation scopes."""

from __future__ import annotations

from obs.otel.constants import ScopeName

SCOPE_EXTRACT = ScopeName.EXTRACT
SCOPE_OBS = ScopeName.OBS

__all__ = ["SCOPE_EXTRACT", "SCOPE_OBS"]

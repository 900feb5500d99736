"""Canonical OpenTelemetry constants for the git source extractor."""

from __future__ import annotations

from enum import StrEnum


class MetricName(StrEnum):
    """Canonical metric names."""

    STAGE_DURATION = "seekret.stage.duration"
    OBJECT_COUNT = "seekret.object.count"
    ERROR_COUNT = "seekret.error.count"


class AttributeName(StrEnum):
    """Canonical attribute names."""

    STAGE = "stage"
    STATUS = "status"
    ERROR_TYPE = "error_type"
    ORIGIN_TAG = "origin_tag"
    STAGE_NAME = "seekret.stage"
    LOCATION_KIND = "seekret.location.kind"


class ScopeName(StrEnum):
    """Canonical instrumentation scope names."""

    EXTRACT = "seekret.extract"
    OBS = "seekret.obs"


__all__ = ["AttributeName", "MetricName", "ScopeName"]

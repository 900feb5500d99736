"""Extraction metric instruments.

Instruments are created lazily from the global meter provider and rebuilt
after :func:`reset_metrics_registry`, which bootstrap calls whenever a new
provider is installed.
"""

from __future__ import annotations

from collections.abc import Mapping
from functools import cache
from typing import NamedTuple

from opentelemetry import metrics

from obs.otel.attributes import normalize_attributes
from obs.otel.constants import AttributeName, MetricName
from obs.otel.scope_metadata import instrumentation_version
from obs.otel.scopes import SCOPE_OBS


class ExtractionInstruments(NamedTuple):
    """Histogram and counters shared by all extraction stages."""

    stage_duration: metrics.Histogram
    object_count: metrics.Counter
    error_count: metrics.Counter


@cache
def _instruments() -> ExtractionInstruments:
    meter = metrics.get_meter(SCOPE_OBS, instrumentation_version() or "unknown")
    return ExtractionInstruments(
        stage_duration=meter.create_histogram(
            MetricName.STAGE_DURATION,
            unit="s",
            description="Wall time of one extraction stage.",
        ),
        object_count=meter.create_counter(
            MetricName.OBJECT_COUNT,
            unit="{object}",
            description="Content objects emitted, by origin tag.",
        ),
        error_count=meter.create_counter(
            MetricName.ERROR_COUNT,
            unit="{error}",
            description="Extraction failures, by stage and error type.",
        ),
    )


def reset_metrics_registry() -> None:
    """Drop cached instruments so the next record binds to the current provider."""
    _instruments.cache_clear()


def record_stage_duration(
    stage: str,
    duration_s: float,
    *,
    status: str,
    attributes: Mapping[str, object] | None = None,
) -> None:
    """Record how long ``stage`` took and whether it succeeded."""
    labels = {**(attributes or {}), AttributeName.STAGE: stage, AttributeName.STATUS: status}
    _instruments().stage_duration.record(duration_s, normalize_attributes(labels))


def record_object_count(origin_tag: str, count: int, *, stage: str) -> None:
    """Count objects emitted by ``stage``; zero counts are not recorded."""
    if count > 0:
        labels = {AttributeName.ORIGIN_TAG: origin_tag, AttributeName.STAGE: stage}
        _instruments().object_count.add(count, normalize_attributes(labels))


def record_error(
    stage: str,
    error_type: str,
    *,
    attributes: Mapping[str, object] | None = None,
) -> None:
    """Count one failure of ``stage``."""
    labels = {
        **(attributes or {}),
        AttributeName.STAGE: stage,
        AttributeName.ERROR_TYPE: error_type,
    }
    _instruments().error_count.add(1, normalize_attributes(labels))


__all__ = [
    "ExtractionInstruments",
    "record_error",
    "record_object_count",
    "record_stage_duration",
    "reset_metrics_registry",
]

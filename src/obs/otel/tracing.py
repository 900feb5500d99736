"""Stage spans for extraction work."""

from __future__ import annotations

import time
from collections.abc import Iterator, Mapping
from contextlib import contextmanager

from opentelemetry import trace
from opentelemetry.trace import Span, Status, StatusCode

from obs.otel.attributes import normalize_attributes
from obs.otel.constants import AttributeName
from obs.otel.metrics import record_stage_duration
from obs.otel.scope_metadata import instrumentation_version

SLOW_STAGE_THRESHOLD_S = 5.0


def get_tracer(scope_name: str) -> trace.Tracer:
    """Return the tracer for ``scope_name``, versioned with this distribution.

    Returns
    -------
    opentelemetry.trace.Tracer
        Tracer from the global provider.
    """
    return trace.get_tracer(scope_name, instrumentation_version() or "unknown")


def set_span_attributes(span: Span, attrs: Mapping[str, object] | None) -> None:
    """Normalize ``attrs`` and set them on ``span``."""
    span.set_attributes(normalize_attributes(attrs))


def record_exception(span: Span, exc: BaseException) -> None:
    """Attach ``exc`` as a span event and mark the span failed."""
    span.record_exception(exc)
    span.set_status(Status(StatusCode.ERROR, f"{type(exc).__name__}: {exc}"))


@contextmanager
def stage_span(
    name: str,
    *,
    stage: str,
    scope_name: str,
    attributes: Mapping[str, object] | None = None,
) -> Iterator[Span]:
    """Run the body inside a span named ``name`` and time it.

    On exit the span gets ``status`` (``ok`` or ``error``) and ``duration_s``
    attributes, and the duration is recorded on the stage histogram. Stages
    slower than ``SLOW_STAGE_THRESHOLD_S`` are flagged with ``seekret.slow``.
    Exceptions are recorded on the span and re-raised.

    Yields
    ------
    Span
        The active span.
    """
    initial = normalize_attributes({**(attributes or {}), AttributeName.STAGE_NAME: stage})
    status = "ok"
    started = time.monotonic()
    with get_tracer(scope_name).start_as_current_span(
        name,
        attributes=initial,
        record_exception=False,
        set_status_on_exception=False,
    ) as span:
        try:
            yield span
        except Exception as exc:
            status = "error"
            record_exception(span, exc)
            raise
        finally:
            elapsed = time.monotonic() - started
            record_stage_duration(stage, elapsed, status=status)
            set_span_attributes(
                span,
                {
                    "duration_s": elapsed,
                    "status": status,
                    "seekret.slow": True if elapsed >= SLOW_STAGE_THRESHOLD_S else None,
                },
            )


__all__ = [
    "SLOW_STAGE_THRESHOLD_S",
    "get_tracer",
    "record_exception",
    "set_span_attributes",
    "stage_span",
]

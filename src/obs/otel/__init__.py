"""OpenTelemetry helpers for git source extractor observability."""

from __future__ import annotations

import importlib
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from obs.otel.bootstrap import OtelBootstrapOptions, OtelProviders, configure_otel
    from obs.otel.logging import TraceContextFilter, install_trace_logging
    from obs.otel.metrics import (
        record_error,
        record_object_count,
        record_stage_duration,
        reset_metrics_registry,
    )
    from obs.otel.scopes import SCOPE_EXTRACT, SCOPE_OBS
    from obs.otel.tracing import (
        get_tracer,
        record_exception,
        set_span_attributes,
        stage_span,
    )

__all__ = [
    "SCOPE_EXTRACT",
    "SCOPE_OBS",
    "OtelBootstrapOptions",
    "OtelProviders",
    "TraceContextFilter",
    "configure_otel",
    "get_tracer",
    "install_trace_logging",
    "record_error",
    "record_exception",
    "record_object_count",
    "record_stage_duration",
    "reset_metrics_registry",
    "set_span_attributes",
    "stage_span",
]

_EXPORT_MAP: dict[str, tuple[str, str]] = {
    "OtelBootstrapOptions": ("obs.otel.bootstrap", "OtelBootstrapOptions"),
    "OtelProviders": ("obs.otel.bootstrap", "OtelProviders"),
    "configure_otel": ("obs.otel.bootstrap", "configure_otel"),
    "TraceContextFilter": ("obs.otel.logging", "TraceContextFilter"),
    "install_trace_logging": ("obs.otel.logging", "install_trace_logging"),
    "record_error": ("obs.otel.metrics", "record_error"),
    "record_object_count": ("obs.otel.metrics", "record_object_count"),
    "record_stage_duration": ("obs.otel.metrics", "record_stage_duration"),
    "reset_metrics_registry": ("obs.otel.metrics", "reset_metrics_registry"),
    "get_tracer": ("obs.otel.tracing", "get_tracer"),
    "record_exception": ("obs.otel.tracing", "record_exception"),
    "set_span_attributes": ("obs.otel.tracing", "set_span_attributes"),
    "stage_span": ("obs.otel.tracing", "stage_span"),
    "SCOPE_EXTRACT": ("obs.otel.scopes", "SCOPE_EXTRACT"),
    "SCOPE_OBS": ("obs.otel.scopes", "SCOPE_OBS"),
}


def __getattr__(name: str) -> object:
    target = _EXPORT_MAP.get(name)
    if target is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)
    module_path, attr_name = target
    module = importlib.import_module(module_path)
    value = getattr(module, attr_name)
    globals()[name] = value
    return value


def __dir__() -> list[str]:
    return sorted(list(globals()) + __all__)

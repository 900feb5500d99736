"""Process-wide OpenTelemetry provider setup.

Signals are off unless enabled by option or environment. The CLI exports to
the console; tests pass ``test_mode`` to capture spans and metric points in
memory instead.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from opentelemetry import metrics, trace
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import (
    ConsoleMetricExporter,
    InMemoryMetricReader,
    MetricReader,
    PeriodicExportingMetricReader,
)
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import SpanProcessor, TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SimpleSpanProcessor,
)
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

from obs.otel.metrics import reset_metrics_registry
from obs.otel.scope_metadata import instrumentation_version
from utils.env_utils import env_bool, env_value

_LOGGER = logging.getLogger(__name__)

DEFAULT_SERVICE_NAME = "seekret-git"
TRACES_ENV = "SEEKRET_OTEL_TRACES"
METRICS_ENV = "SEEKRET_OTEL_METRICS"


@dataclass(frozen=True)
class OtelBootstrapOptions:
    """Explicit choices that take precedence over the environment."""

    service_version: str | None = None
    enable_traces: bool | None = None
    enable_metrics: bool | None = None
    test_mode: bool = False


@dataclass
class OtelProviders:
    """Providers installed by :func:`configure_otel`.

    ``span_exporter`` and ``metric_reader`` are only set in test mode.
    """

    resource: Resource
    tracer_provider: TracerProvider | None
    meter_provider: MeterProvider | None
    span_exporter: InMemorySpanExporter | None = None
    metric_reader: InMemoryMetricReader | None = None

    def shutdown(self) -> None:
        """Flush pending telemetry and release exporters."""
        for provider in (self.tracer_provider, self.meter_provider):
            if provider is not None:
                provider.shutdown()


_CONFIGURED: list[OtelProviders] = []


def configure_otel(
    *,
    service_name: str | None = None,
    options: OtelBootstrapOptions | None = None,
) -> OtelProviders:
    """Install tracer and meter providers for this process.

    The first call wins; later calls return the providers already installed,
    because the OpenTelemetry API only accepts one global provider per
    signal.

    Parameters
    ----------
    service_name
        ``service.name`` resource attribute. Falls back to
        ``OTEL_SERVICE_NAME`` and then ``seekret-git``.
    options
        Explicit signal switches. ``None`` switches defer to
        ``SEEKRET_OTEL_TRACES`` and ``SEEKRET_OTEL_METRICS``.

    Returns
    -------
    OtelProviders
        Installed providers.
    """
    if _CONFIGURED:
        return _CONFIGURED[0]
    chosen = options or OtelBootstrapOptions()
    name = service_name or env_value("OTEL_SERVICE_NAME") or DEFAULT_SERVICE_NAME
    resource = Resource.create(
        {
            SERVICE_NAME: name,
            SERVICE_VERSION: chosen.service_version or instrumentation_version() or "unknown",
        }
    )
    providers = OtelProviders(resource=resource, tracer_provider=None, meter_provider=None)
    if _signal_enabled(chosen.enable_traces, TRACES_ENV):
        processor: SpanProcessor
        if chosen.test_mode:
            providers.span_exporter = InMemorySpanExporter()
            processor = SimpleSpanProcessor(providers.span_exporter)
        else:
            processor = BatchSpanProcessor(ConsoleSpanExporter())
        providers.tracer_provider = TracerProvider(resource=resource)
        providers.tracer_provider.add_span_processor(processor)
        trace.set_tracer_provider(providers.tracer_provider)
    if _signal_enabled(chosen.enable_metrics, METRICS_ENV):
        reader: MetricReader
        if chosen.test_mode:
            providers.metric_reader = InMemoryMetricReader()
            reader = providers.metric_reader
        else:
            reader = PeriodicExportingMetricReader(ConsoleMetricExporter())
        providers.meter_provider = MeterProvider(resource=resource, metric_readers=[reader])
        metrics.set_meter_provider(providers.meter_provider)
        reset_metrics_registry()
    _CONFIGURED.append(providers)
    _LOGGER.info(
        "OpenTelemetry configured for %s (traces=%s, metrics=%s)",
        name,
        providers.tracer_provider is not None,
        providers.meter_provider is not None,
    )
    return providers


def _signal_enabled(explicit: bool | None, env_name: str) -> bool:
    if explicit is not None:
        return explicit
    return env_bool(env_name, default=False)


__all__ = [
    "DEFAULT_SERVICE_NAME",
    "METRICS_ENV",
    "TRACES_ENV",
    "OtelBootstrapOptions",
    "OtelProviders",
    "configure_otel",
]

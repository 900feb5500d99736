"""In-memory OpenTelemetry harness for tests."""

from __future__ import annotations

from dataclasses import dataclass

from opentelemetry.sdk.metrics.export import InMemoryMetricReader
from opentelemetry.sdk.trace import ReadableSpan
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

from obs.otel.bootstrap import OtelBootstrapOptions, OtelProviders, configure_otel


@dataclass
class OtelHarness:
    """Configured providers with in-memory exporters."""

    providers: OtelProviders

    @property
    def span_exporter(self) -> InMemorySpanExporter:
        """Return the in-memory span exporter."""
        exporter = self.providers.span_exporter
        if exporter is None:
            msg = "Harness was configured without traces."
            raise RuntimeError(msg)
        return exporter

    @property
    def metric_reader(self) -> InMemoryMetricReader:
        """Return the in-memory metric reader."""
        reader = self.providers.metric_reader
        if reader is None:
            msg = "Harness was configured without metrics."
            raise RuntimeError(msg)
        return reader

    def reset(self) -> None:
        """Drop spans captured so far."""
        self.span_exporter.clear()

    def spans(self, name: str | None = None) -> list[ReadableSpan]:
        """Return finished spans, optionally filtered by name."""
        finished = list(self.span_exporter.get_finished_spans())
        if name is None:
            return finished
        return [span for span in finished if span.name == name]

    def metric_points(self, metric_name: str) -> list[object]:
        """Return data points recorded for ``metric_name``."""
        data = self.metric_reader.get_metrics_data()
        points: list[object] = []
        if data is None:
            return points
        for resource_metrics in data.resource_metrics:
            for scope_metrics in resource_metrics.scope_metrics:
                for metric in scope_metrics.metrics:
                    if metric.name == metric_name:
                        points.extend(metric.data.data_points)
        return points


_HARNESS: dict[str, OtelHarness | None] = {"value": None}


def get_otel_harness() -> OtelHarness:
    """Return the process-wide harness, configuring it on first use."""
    cached = _HARNESS["value"]
    if cached is not None:
        return cached
    providers = configure_otel(
        service_name="seekret-git-tests",
        options=OtelBootstrapOptions(
            enable_traces=True,
            enable_metrics=True,
            test_mode=True,
        ),
    )
    harness = OtelHarness(providers=providers)
    _HARNESS["value"] = harness
    return harness


__all__ = ["OtelHarness", "get_otel_harness"]

"""Log records correlated with the active span."""

from __future__ import annotations

import logging

from opentelemetry import trace

TRACE_LOG_FORMAT = (
    "%(asctime)s %(levelname)s [trace_id=%(trace_id)s span_id=%(span_id)s] %(name)s: %(message)s"
)


class TraceContextFilter(logging.Filter):
    """Stamp ``trace_id`` and ``span_id`` onto every record.

    Both are ``None`` when no recording span is active.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        context = trace.get_current_span().get_span_context()
        valid = context.is_valid
        record.trace_id = format(context.trace_id, "032x") if valid else None
        record.span_id = format(context.span_id, "016x") if valid else None
        return True


def install_trace_logging(level: int | str, logger: logging.Logger | None = None) -> None:
    """Set ``level`` on ``logger`` (root by default) and make its output trace-aware.

    A stderr handler is added when the logger has none. Calling this twice does
    not stack filters.
    """
    target = logger if logger is not None else logging.getLogger()
    target.setLevel(level)
    if not target.handlers:
        target.addHandler(logging.StreamHandler())
    for handler in target.handlers:
        if not any(isinstance(item, TraceContextFilter) for item in handler.filters):
            handler.addFilter(TraceContextFilter())
        handler.setFormatter(logging.Formatter(TRACE_LOG_FORMAT))


__all__ = ["TRACE_LOG_FORMAT", "TraceContextFilter", "install_trace_logging"]

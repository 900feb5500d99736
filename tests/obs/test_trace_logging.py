"""Tests for trace-correlated logging."""

from __future__ import annotations

import io
import logging

from obs.otel.logging import TraceContextFilter, install_trace_logging
from obs.otel.scopes import SCOPE_EXTRACT
from obs.otel.tracing import stage_span
from tests.obs._support.otel_harness import get_otel_harness


def _capture_logger(name: str) -> tuple[logging.Logger, io.StringIO]:
    stream = io.StringIO()
    logger = logging.getLogger(name)
    logger.handlers.clear()
    logger.propagate = False
    logger.addHandler(logging.StreamHandler(stream))
    install_trace_logging(logging.INFO, logger)
    return logger, stream


def test_records_outside_spans_have_no_ids() -> None:
    """Log lines outside a span render empty trace identifiers."""
    logger, stream = _capture_logger("seekret.test.no_span")
    logger.info("hello")
    assert "trace_id=None span_id=None" in stream.getvalue()


def test_records_inside_spans_carry_ids() -> None:
    """Log lines inside a span carry the active span's identifiers."""
    harness = get_otel_harness()
    harness.reset()
    logger, stream = _capture_logger("seekret.test.span")
    with stage_span("extract.logged", stage="logged", scope_name=SCOPE_EXTRACT):
        logger.info("inside")
    span = harness.spans("extract.logged")[0]
    context = span.get_span_context()
    assert context is not None
    assert f"trace_id={context.trace_id:032x}" in stream.getvalue()
    assert f"span_id={context.span_id:016x}" in stream.getvalue()


def test_install_is_idempotent() -> None:
    """Repeated installs do not stack filters."""
    logger, _ = _capture_logger("seekret.test.idempotent")
    install_trace_logging(logging.DEBUG, logger)
    handler = logger.handlers[0]
    assert sum(isinstance(item, TraceContextFilter) for item in handler.filters) == 1
    assert logger.level == logging.DEBUG

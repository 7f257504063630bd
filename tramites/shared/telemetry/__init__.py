"""Shared telemetry: logging setup, OpenTelemetry config, and tracing helpers."""

from tramites.shared.telemetry.logging import get_logger, setup_logging
from tramites.shared.telemetry.tracing import add_span_attributes, traced

__all__ = [
    "setup_logging",
    "get_logger",
    "traced",
    "add_span_attributes",
]

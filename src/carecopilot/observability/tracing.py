"""
OpenTelemetry tracing helpers for Caregiver Co-Pilot.

Provides custom spans for LLM calls, pipeline runs and transcription. Without
a configured SDK the OpenTelemetry API hands out no-op spans.
"""
import logging
from contextlib import contextmanager
from typing import Any, Iterator, Optional

from opentelemetry import trace
from opentelemetry.trace import Span, Status, StatusCode

logger = logging.getLogger(__name__)

tracer = trace.get_tracer("carecopilot")


@contextmanager
def trace_operation(operation_name: str, attributes: Optional[dict] = None) -> Iterator[Span]:
    """
    Context manager for creating custom tracing spans.

    Args:
        operation_name: Name of the operation being traced
        attributes: Optional dictionary of attributes to add to the span

    Example:
        with trace_operation("llm_call", {"llm.model": "gpt-4o-mini"}) as span:
            response = await client.chat(...)
    """
    with tracer.start_as_current_span(operation_name, record_exception=True) as span:
        if attributes:
            for key, value in attributes.items():
                span.set_attribute(key, str(value))
        yield span


def set_span_status(span: Optional[Span], success: bool, error_message: Optional[str] = None) -> None:
    """
    Set the status of a tracing span.

    Args:
        span: OpenTelemetry span object
        success: Whether the operation succeeded
        error_message: Optional error message if operation failed
    """
    if span is None:
        return
    if success:
        span.set_status(Status(StatusCode.OK))
    else:
        span.set_status(Status(StatusCode.ERROR, error_message or "Operation failed"))


def add_span_attribute(span: Optional[Span], key: str, value: Any) -> None:
    """Add an attribute to a tracing span (value converted to string)."""
    if span is None:
        return
    span.set_attribute(key, str(value))

"""
Observability module for tracing and metrics.

Provides:
- Custom tracing spans for LLM calls and pipeline runs
- Custom metrics for AI, pipeline, transcription, and HTTP requests
"""

from .metrics import (
    record_ai_request,
    record_http_request,
    record_pipeline_run,
    record_transcription_request,
)
from .tracing import add_span_attribute, set_span_status, trace_operation

__all__ = [
    "add_span_attribute",
    "record_ai_request",
    "record_http_request",
    "record_pipeline_run",
    "record_transcription_request",
    "set_span_status",
    "trace_operation",
]

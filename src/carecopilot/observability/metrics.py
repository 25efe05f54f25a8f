"""
Custom metrics for Caregiver Co-Pilot using OpenTelemetry.

Provides metrics for AI calls, pipeline runs, transcription and HTTP traffic.
"""
import logging
from typing import Optional

from opentelemetry import metrics
from opentelemetry.metrics import Counter, Histogram

logger = logging.getLogger(__name__)

meter = metrics.get_meter("carecopilot")

# Initialize custom metrics (lazy initialization)
_metrics_initialized = False
_ai_request_counter: Optional[Counter] = None
_ai_latency_histogram: Optional[Histogram] = None
_ai_token_counter: Optional[Counter] = None
_pipeline_counter: Optional[Counter] = None
_pipeline_latency_histogram: Optional[Histogram] = None
_transcription_counter: Optional[Counter] = None
_transcription_latency_histogram: Optional[Histogram] = None
_request_counter: Optional[Counter] = None
_request_latency_histogram: Optional[Histogram] = None
_error_counter: Optional[Counter] = None


def _initialize_metrics() -> None:
    """Initialize custom metrics instruments."""
    global _metrics_initialized, _ai_request_counter, _ai_latency_histogram
    global _ai_token_counter, _pipeline_counter, _pipeline_latency_histogram
    global _transcription_counter, _transcription_latency_histogram
    global _request_counter, _request_latency_histogram, _error_counter

    if _metrics_initialized:
        return

    _ai_request_counter = meter.create_counter(
        name="carecopilot.ai.requests",
        description="Total number of AI API requests",
        unit="1",
    )
    _ai_latency_histogram = meter.create_histogram(
        name="carecopilot.ai.latency",
        description="AI API request latency in milliseconds",
        unit="ms",
    )
    _ai_token_counter = meter.create_counter(
        name="carecopilot.ai.tokens",
        description="Total tokens used in AI requests",
        unit="1",
    )
    _pipeline_counter = meter.create_counter(
        name="carecopilot.pipeline.runs",
        description="Visit pipeline runs by outcome",
        unit="1",
    )
    _pipeline_latency_histogram = meter.create_histogram(
        name="carecopilot.pipeline.latency",
        description="End-to-end visit pipeline latency in milliseconds",
        unit="ms",
    )
    _transcription_counter = meter.create_counter(
        name="carecopilot.transcription.requests",
        description="Total number of transcription requests",
        unit="1",
    )
    _transcription_latency_histogram = meter.create_histogram(
        name="carecopilot.transcription.latency",
        description="Transcription request latency in seconds",
        unit="s",
    )
    _request_counter = meter.create_counter(
        name="carecopilot.http.requests",
        description="Total HTTP requests",
        unit="1",
    )
    _request_latency_histogram = meter.create_histogram(
        name="carecopilot.http.latency",
        description="HTTP request latency in milliseconds",
        unit="ms",
    )
    _error_counter = meter.create_counter(
        name="carecopilot.errors",
        description="Total application errors",
        unit="1",
    )
    _metrics_initialized = True
    logger.debug("Custom metrics initialized")


def record_ai_request(model: str, step: str, latency_ms: float, tokens: int, success: bool = True) -> None:
    """
    Record an AI API request metric.

    Args:
        model: Model name (e.g., "gpt-4o-mini")
        step: Pipeline step that issued the call
        latency_ms: Request latency in milliseconds
        tokens: Total tokens used
        success: Whether the request succeeded
    """
    _initialize_metrics()
    status = "success" if success else "error"
    _ai_request_counter.add(1, {"model": model, "step": step, "status": status})
    _ai_latency_histogram.record(latency_ms, {"model": model, "step": step})
    if tokens:
        _ai_token_counter.add(tokens, {"model": model, "step": step})
    if not success:
        _error_counter.add(1, {"type": "ai_request", "model": model})


def record_pipeline_run(latency_ms: float, success: bool, failed_step: Optional[str] = None) -> None:
    """Record one visit pipeline run; ``failed_step`` is set on failure."""
    _initialize_metrics()
    attributes = {"status": "success" if success else "error"}
    if failed_step:
        attributes["step"] = failed_step
    _pipeline_counter.add(1, attributes)
    _pipeline_latency_histogram.record(latency_ms, attributes)
    if not success:
        _error_counter.add(1, {"type": "pipeline", "step": failed_step or "unknown"})


def record_transcription_request(latency_seconds: float, success: bool = True) -> None:
    """Record a transcription request metric."""
    _initialize_metrics()
    _transcription_counter.add(1, {"status": "success" if success else "error"})
    _transcription_latency_histogram.record(latency_seconds)
    if not success:
        _error_counter.add(1, {"type": "transcription"})


def record_http_request(method: str, path: str, status_code: int, latency_ms: float) -> None:
    """
    Record an HTTP request metric.

    Args:
        method: HTTP method (GET, POST, etc.)
        path: Request path
        status_code: HTTP status code
        latency_ms: Request latency in milliseconds
    """
    _initialize_metrics()
    _request_counter.add(1, {
        "method": method,
        "path": path,
        "status_code": str(status_code),
        "status": "success" if 200 <= status_code < 400 else "error",
    })
    _request_latency_histogram.record(latency_ms, {"method": method, "path": path})
    if status_code >= 500:
        _error_counter.add(1, {"type": "http_error", "status_code": str(status_code)})

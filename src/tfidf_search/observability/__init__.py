"""Observability module: structured logging, metrics and tracing."""

from tfidf_search.observability.context import bind_context, get_trace_context, set_trace_context, trace_context
from tfidf_search.observability.logging import JsonFormatter, configure_logging, configure_logging_from_settings
from tfidf_search.observability.metrics import (
    INDEX_DOC_COUNT,
    INDEX_OPERATIONS,
    SEARCH_LATENCY,
    SEARCH_RESULTS,
    get_metrics,
    get_metrics_content_type,
    init_metrics,
    track_latency,
)
from tfidf_search.observability.tracing import create_span, get_tracer, init_tracing


__all__ = [
    "INDEX_DOC_COUNT",
    "INDEX_OPERATIONS",
    "SEARCH_LATENCY",
    "SEARCH_RESULTS",
    "JsonFormatter",
    "bind_context",
    "configure_logging",
    "configure_logging_from_settings",
    "create_span",
    "get_metrics",
    "get_metrics_content_type",
    "get_trace_context",
    "get_tracer",
    "init_metrics",
    "init_tracing",
    "set_trace_context",
    "trace_context",
    "track_latency",
]

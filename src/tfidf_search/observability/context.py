"""Trace context shared between spans and log records."""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from typing import TYPE_CHECKING
from uuid import uuid4


if TYPE_CHECKING:
    from collections.abc import Generator


trace_context: ContextVar[dict | None] = ContextVar("trace_context", default=None)


def generate_trace_id() -> str:
    return uuid4().hex


def generate_span_id() -> str:
    return uuid4().hex[:16]


def get_trace_context() -> dict:
    """Get current trace context, creating ids on first use."""
    ctx = trace_context.get()
    if ctx is None or not ctx.get("trace_id"):
        ctx = {"trace_id": generate_trace_id(), "span_id": generate_span_id()}
        trace_context.set(ctx)
    return ctx


def set_trace_context(trace_id: str, span_id: str, **extra: object) -> None:
    trace_context.set({"trace_id": trace_id, "span_id": span_id, **extra})


def update_span_id(span_id: str) -> None:
    """Update span_id while preserving trace_id and extra fields."""
    ctx = trace_context.get() or {}
    trace_context.set({**ctx, "span_id": span_id})


@contextmanager
def bind_context(**fields: object) -> Generator[dict, None, None]:
    """Add fields such as ``index`` to the trace context for the enclosed block."""
    token = trace_context.set({**get_trace_context(), **fields})
    try:
        yield trace_context.get()
    finally:
        trace_context.reset(token)

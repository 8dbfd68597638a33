"""Minimal request tracing primitives.

Every request gets a trace id and a timing span. Events are emitted as
single-line JSON through the ``agents_api`` logger so that they can be
shipped to any log collector without extra parsing.
"""

from __future__ import annotations

import json
import logging
import time
import uuid
from dataclasses import dataclass, field
from typing import Any

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("agents_api")

TRACE_HEADER = "X-Trace-Id"


@dataclass
class Span:
    name: str
    trace_id: str
    span_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    start_ns: int = field(default_factory=time.time_ns)
    end_ns: int | None = None
    attributes: dict[str, Any] = field(default_factory=dict)

    def end(self) -> None:
        self.end_ns = time.time_ns()

    @property
    def duration_ms(self) -> float | None:
        if self.end_ns is None:
            return None
        return (self.end_ns - self.start_ns) / 1_000_000.0


def new_trace_id() -> str:
    return uuid.uuid4().hex


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def log_event(
    event: str,
    *,
    trace_id: str | None = None,
    span: Span | None = None,
    level: int = logging.INFO,
    **fields: Any,
) -> None:
    payload: dict[str, Any] = {"event": event, "trace_id": trace_id, **fields}
    if span is not None:
        payload["span"] = {
            "name": span.name,
            "span_id": span.span_id,
            "duration_ms": span.duration_ms,
            "attributes": span.attributes,
        }
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=str))


def get_trace_id(request: Request) -> str | None:
    return getattr(request.state, "trace_id", None)


class TracingMiddleware(BaseHTTPMiddleware):
    """Attach a trace id to each request and log one event when it completes."""

    async def dispatch(self, request: Request, call_next) -> Response:
        trace_id = request.headers.get(TRACE_HEADER) or new_trace_id()
        request.state.trace_id = trace_id

        span = Span(name="http.request", trace_id=trace_id)
        span.attributes.update(method=request.method, path=request.url.path)

        # Unhandled errors surface as 500 once they leave the middleware stack.
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
        finally:
            span.end()
            span.attributes["status_code"] = status_code
            log_event("http.request", trace_id=trace_id, span=span)

        response.headers[TRACE_HEADER] = trace_id
        return response

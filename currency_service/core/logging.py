"""Structured (JSON lines) logging with per-request context.

Every record carries the id and route of the request being served. The id
is taken from an inbound X-Request-ID header when present, echoed back on
the response, and stored on ``request.state`` so exception handlers that run
outside the middleware can still tag their records with it.
"""

import json
import logging
import sys
import time
import uuid
from contextvars import ContextVar
from typing import Any, Dict, Optional

from starlette.requests import Request

REQUEST_ID_HEADER = "X-Request-ID"

request_ctx: ContextVar[Optional[Dict[str, str]]] = ContextVar("request_ctx", default=None)

# Optional fields handlers may pass through ``extra=``.
_EXTRA_FIELDS = ("status", "duration_ms", "error_count")


def request_log_extra(request: Request) -> Dict[str, str]:
    """Context for records emitted after the middleware has unwound."""
    return {
        "request_id": getattr(request.state, "request_id", "-"),
        "route": f"{request.method} {request.url.path}",
    }


class RequestContextFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:  # noqa: D401
        ctx = request_ctx.get() or {}
        if not hasattr(record, "request_id"):
            record.request_id = ctx.get("request_id", "-")
        if not hasattr(record, "route"):
            record.route = ctx.get("route", "-")
        return True


class JsonFormatter(logging.Formatter):
    converter = time.gmtime

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        payload: Dict[str, Any] = {
            "time": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", "-"),
            "route": getattr(record, "route", "-"),
        }
        for field in _EXTRA_FIELDS:
            if hasattr(record, field):
                payload[field] = getattr(record, field)
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def init_logging(debug: bool = False) -> None:
    root = logging.getLogger()
    root.handlers.clear()
    level = logging.DEBUG if debug else logging.INFO
    root.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.addFilter(RequestContextFilter())
    handler.setFormatter(JsonFormatter())
    root.addHandler(handler)


async def request_context_middleware(request: Request, call_next):  # type: ignore
    rid = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
    request.state.request_id = rid
    token = request_ctx.set(
        {"request_id": rid, "route": f"{request.method} {request.url.path}"}
    )
    logger = logging.getLogger("app.request")
    started = time.perf_counter()
    try:
        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = rid
        logger.debug(
            "request served",
            extra={
                "status": response.status_code,
                "duration_ms": round((time.perf_counter() - started) * 1000, 3),
            },
        )
        return response
    finally:
        request_ctx.reset(token)

# campus_connect/core/logger.py
"""JSON logging with per-request correlation ids.

Every record carries the request id and, once ``require_auth`` has run, the
id of the authenticated user. ``init_app`` also writes one access line per
request (endpoint, status, elapsed time); health probes are left out.
"""

from __future__ import annotations

import json
import logging
import sys
import time
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from flask import Flask, g, has_request_context, request

REQUEST_ID_HEADER = "X-Request-ID"
CORRELATION_HEADERS = ("X-Request-ID", "X-Correlation-ID")

# campos aceitos via extra={...}
_EXTRA_KEYS = ("user_id", "email", "method", "endpoint", "status_code", "elapsed_ms")

access_logger = logging.getLogger("campus_connect.access")


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "time": datetime.now(timezone.utc).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", None),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        for key in _EXTRA_KEYS:
            value = getattr(record, key, None)
            if value is not None:
                payload[key] = value
        return json.dumps(payload, default=str)


class RequestContextFilter(logging.Filter):
    """Carimba request_id e, se autenticado, user_id (sem sobrescrever o extra)."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not has_request_context():
            record.request_id = None
            return True

        record.request_id = ensure_request_id()
        identity = g.get("identity")
        if identity is not None and getattr(record, "user_id", None) is None:
            record.user_id = identity.id
        return True


def ensure_request_id() -> str:
    if has_request_context():
        if "request_id" in g:
            return g.request_id
        for header in CORRELATION_HEADERS:
            value = request.headers.get(header)
            if value:
                g.request_id = value
                return value
        g.request_id = str(uuid4())
        return g.request_id
    return str(uuid4())


def _resolve_level(level: str | int) -> int | str:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    return resolved if isinstance(resolved, int) else level.upper()


def configure_logging(level: str | int = "INFO") -> None:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter())
    handler.addFilter(RequestContextFilter())
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(_resolve_level(level))


def init_app(app: Flask) -> None:
    app.logger.addFilter(RequestContextFilter())

    @app.before_request
    def _start_request() -> None:
        ensure_request_id()
        g.request_started = time.perf_counter()

    @app.after_request
    def _finish_request(response):
        response.headers.setdefault(REQUEST_ID_HEADER, ensure_request_id())

        if not request.path.startswith("/health"):
            started = g.get("request_started")
            elapsed = round((time.perf_counter() - started) * 1000, 2) if started is not None else None
            access_logger.info(
                "%s %s %s",
                request.method,
                request.path,
                response.status_code,
                extra={
                    "method": request.method,
                    "endpoint": request.endpoint,
                    "status_code": response.status_code,
                    "elapsed_ms": elapsed,
                },
            )
        return response


__all__ = ["configure_logging", "init_app", "ensure_request_id", "JSONFormatter", "RequestContextFilter"]

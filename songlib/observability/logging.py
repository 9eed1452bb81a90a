"""JSON log lines tagged with the request they belong to."""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from uuid import uuid4

from flask import Flask, g, has_app_context, has_request_context, request

REQUEST_ID_HEADER = "X-Request-ID"

_REQUEST_FIELDS = ("request_id", "method", "path", "endpoint")


class RequestContextFilter(logging.Filter):
    """Stamp records with the current request id, method, path and endpoint."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = getattr(g, "request_id", None) if has_app_context() else None
        if has_request_context():
            record.method = request.method
            record.path = request.path
            record.endpoint = request.endpoint
        else:
            record.method = record.path = record.endpoint = None
        return True


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for field in _REQUEST_FIELDS:
            payload[field] = getattr(record, field, None)
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def configure_structured_logging(app: Flask) -> None:
    """Add a JSON stdout handler to the root logger, once per process."""
    root = logging.getLogger()
    if any(isinstance(h.formatter, JsonFormatter) for h in root.handlers):
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter())
    handler.addFilter(RequestContextFilter())
    root.addHandler(handler)
    app.logger.debug("Structured logging enabled")


def init_request_ids(app: Flask) -> None:
    """Reuse the caller's X-Request-ID (or mint one) and echo it on every response."""

    @app.before_request
    def _assign_request_id():
        g.request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex

    @app.after_request
    def _inject_request_id(response):
        if getattr(g, "request_id", None):
            response.headers.setdefault(REQUEST_ID_HEADER, g.request_id)
        return response

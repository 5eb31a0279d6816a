"""JSON line logging with per-request correlation ids.

Each HTTP request gets an id (the caller's ``X-Request-ID`` when present,
otherwise a fresh UUID). The id is kept in a ContextVar so every record
emitted while the request is handled carries it, and it is echoed back in
the response header. Structured values travel in ``extra={"fields": {...}}``
and are merged into the JSON line.
"""

import json
import logging
import sys
import time
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Optional

REQUEST_ID_HEADER = "X-Request-ID"

request_id_ctx: ContextVar[Optional[str]] = ContextVar("request_id", default=None)

access_logger = logging.getLogger("yakstra.request")


def current_request_id() -> str:
    return request_id_ctx.get() or "-"


class RequestIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = current_request_id()
        return True


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        stamp = datetime.fromtimestamp(record.created, tz=timezone.utc)
        line: Dict[str, Any] = {
            "time": stamp.isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
            "request_id": getattr(record, "request_id", "-"),
            "message": record.getMessage(),
        }
        fields = getattr(record, "fields", None)
        if isinstance(fields, dict):
            for key, value in fields.items():
                line.setdefault(key, value)
        if record.exc_info:
            line["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(line, ensure_ascii=False, default=str)


def init_logging(debug: bool = False) -> None:
    """Route everything through one stdout handler; safe to call repeatedly."""
    level = logging.DEBUG if debug else logging.INFO
    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.addFilter(RequestIdFilter())
    handler.setFormatter(JsonFormatter())
    root.addHandler(handler)


async def request_context_middleware(request, call_next):  # type: ignore
    rid = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
    token = request_id_ctx.set(rid)
    started = time.perf_counter()
    fields: Dict[str, Any] = {"method": request.method, "path": request.url.path}
    try:
        response = await call_next(request)
    except Exception:
        fields["duration_ms"] = round((time.perf_counter() - started) * 1000, 1)
        access_logger.exception("request failed", extra={"fields": fields})
        raise
    else:
        fields["status"] = response.status_code
        fields["duration_ms"] = round((time.perf_counter() - started) * 1000, 1)
        access_logger.info("request completed", extra={"fields": fields})
        response.headers[REQUEST_ID_HEADER] = rid
        return response
    finally:
        request_id_ctx.reset(token)

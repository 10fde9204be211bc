"""
Per-request correlation id.

The middleware picks the id for each request (the caller's ``X-Request-ID``
when it is a short token, a fresh one otherwise) and binds it to a context
variable for the duration of the request. ``RequestIdLogFilter`` copies it
onto every log record, so a post update and the access line it produced can
be matched in the logs; error envelopes carry it as ``requestId``.
"""

from __future__ import annotations

import logging
import re
from contextvars import ContextVar
from time import perf_counter
from uuid import uuid4

from fastapi import FastAPI, Request

REQUEST_ID_HEADER = "X-Request-ID"
NO_REQUEST_ID = "-"

_TOKEN_RE = re.compile(r"[A-Za-z0-9._-]{1,128}")
_current_request_id: ContextVar[str] = ContextVar("blog_api_request_id", default=NO_REQUEST_ID)
_ACCESS_LOG = logging.getLogger("blog_api.http")


def current_request_id() -> str:
    return _current_request_id.get()


def pick_request_id(inbound: str | None) -> str:
    candidate = (inbound or "").strip()
    return candidate if _TOKEN_RE.fullmatch(candidate) else uuid4().hex


class RequestIdLogFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "request_id"):
            record.request_id = current_request_id()
        return True


def install_request_tracking(app: FastAPI) -> None:
    @app.middleware("http")
    async def _track(request: Request, call_next):
        request_id = pick_request_id(request.headers.get(REQUEST_ID_HEADER))
        request.state.request_id = request_id
        token = _current_request_id.set(request_id)
        started = perf_counter()
        try:
            response = await call_next(request)
            # Listings change on every write and detail reads bump view counters.
            response.headers["Cache-Control"] = "no-store"
            response.headers[REQUEST_ID_HEADER] = request_id
            _ACCESS_LOG.info(
                "%s %s status=%s duration_ms=%.2f request_id=%s",
                request.method,
                request.url.path,
                response.status_code,
                (perf_counter() - started) * 1000.0,
                request_id,
            )
            return response
        finally:
            _current_request_id.reset(token)

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

_LOG = logging.getLogger("blog_api.errors")


class ValidationFailed(HTTPException):
    """One or more request fields broke their rules.

    ``errors`` keeps one ``{"field", "message"}`` entry per failing field in
    the order the fields were checked.
    """

    def __init__(self, errors: list[dict[str, str]]):
        self.errors = list(errors)
        message = ", ".join(e["message"] for e in self.errors) or "Validation failed"
        super().__init__(status_code=400, detail=message)


class InvalidQuery(ValidationFailed):
    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__([{"field": field, "message": message}])


class NotFound(HTTPException):
    def __init__(self, detail: str):
        super().__init__(status_code=404, detail=detail)


def validation_payload(errors: list[dict[str, str]], request_id: str | None = None) -> dict[str, Any]:
    payload = {
        "code": 400,
        "success": False,
        "message": ", ".join(e["message"] for e in errors),
        "errors": errors,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    if request_id:
        payload["requestId"] = request_id
    return payload


def _request_validation_errors(exc: RequestValidationError) -> list[dict[str, str]]:
    errors: list[dict[str, str]] = []
    seen: set[str] = set()
    for item in exc.errors():
        loc = [str(part) for part in item.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(loc) or "request"
        # One message per field, the first one wins.
        if field in seen:
            continue
        seen.add(field)
        errors.append({"field": field, "message": f"{field}: {item.get('msg', 'invalid value')}"})
    return errors


def _request_id(request: Request) -> str | None:
    return getattr(request.state, "request_id", None)


def install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ValidationFailed)
    async def _validation_failed_handler(request: Request, exc: ValidationFailed):
        _LOG.debug("validation failed on %s %s: %s", request.method, request.url.path, exc.detail)
        return JSONResponse(status_code=400, content=validation_payload(exc.errors, _request_id(request)))

    @app.exception_handler(RequestValidationError)
    async def _request_validation_handler(request: Request, exc: RequestValidationError):
        errors = _request_validation_errors(exc)
        return JSONResponse(status_code=400, content=validation_payload(errors, _request_id(request)))

from __future__ import annotations

import logging

from blog_api.core.config import settings
from blog_api.core.request_tracking import RequestIdLogFilter

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s [%(request_id)s]: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_configured = False


def _parse_level(value: str | None) -> int:
    name = str(value or "").strip().upper()
    level = getattr(logging, name, None)
    return level if isinstance(level, int) else logging.INFO


def _attach_request_id_filter(handler: logging.Handler) -> None:
    if not any(isinstance(f, RequestIdLogFilter) for f in handler.filters):
        handler.addFilter(RequestIdLogFilter())


def configure_logging(level: str | None = None, *, force: bool = False) -> logging.Logger:
    """Set up root logging once per process and return the service logger.

    Root handlers get ``RequestIdLogFilter`` so records logged while serving a
    request carry its ``request_id``.
    """
    global _configured
    if not _configured or force:
        logging.basicConfig(
            level=_parse_level(level or settings.LOG_LEVEL),
            format=LOG_FORMAT,
            datefmt=LOG_DATE_FORMAT,
            force=force,
        )
        for handler in logging.getLogger().handlers:
            _attach_request_id_filter(handler)
        _configured = True
    return logging.getLogger("blog_api")

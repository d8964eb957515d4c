"""Structured logging for the site services.

Logs are JSON lines rendered by structlog on top of stdlib logging, so
``logging.getLogger(__name__)`` in library modules ends up in the same stream.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, Dict, Iterable, Optional
from uuid import uuid4

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
import structlog

REQUEST_ID_HEADER = "X-Request-ID"
TRACE_ID_HEADER = "X-Trace-ID"
# set on the response by the tenant routing middleware
_TENANT_ID_HEADER = "X-Tenant-ID"
_TENANT_SLUG_HEADER = "X-Tenant-Slug"


def configure_logging(service_name: str, level: int = logging.INFO) -> structlog.stdlib.BoundLogger:
    """Route structlog through stdlib logging and render every entry as JSON."""
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    return structlog.get_logger().bind(service=service_name)


def _request_context(request: Request) -> Dict[str, Any]:
    request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid4())
    return {
        "request_id": request_id,
        "trace_id": request.headers.get(TRACE_ID_HEADER) or request_id,
        "host": request.headers.get("host"),
        "path": request.url.path,
        "method": request.method,
    }


def _resolved_tenant(response: Response) -> Dict[str, Optional[str]]:
    return {
        "tenant_id": response.headers.get(_TENANT_ID_HEADER),
        "tenant_slug": response.headers.get(_TENANT_SLUG_HEADER),
    }


class RequestContextLogMiddleware(BaseHTTPMiddleware):
    """Outermost middleware: one ``request_completed`` entry per request.

    The tenant resolved further down the stack is read back from the response
    headers, since context bound by inner middlewares does not reach this task.
    Health checks are not logged.
    """

    def __init__(
        self,
        app,
        *,
        logger: Optional[structlog.stdlib.BoundLogger] = None,
        quiet_paths: Iterable[str] = ("/health", "/ready"),
    ) -> None:
        super().__init__(app)
        self._logger = logger or structlog.get_logger()
        self._quiet_paths = frozenset(quiet_paths)

    async def dispatch(self, request: Request, call_next) -> Response:
        context = _request_context(request)
        structlog.contextvars.bind_contextvars(**context)
        try:
            try:
                response = await call_next(request)
            except Exception:
                self._logger.exception("request_failed")
                raise

            tenant = _resolved_tenant(response)
            structlog.contextvars.bind_contextvars(**tenant)
            if context["path"] not in self._quiet_paths:
                self._logger.info("request_completed", status_code=response.status_code, **tenant)
            response.headers.setdefault(REQUEST_ID_HEADER, context["request_id"])
            return response
        finally:
            structlog.contextvars.clear_contextvars()

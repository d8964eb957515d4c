"""Hostname based tenant routing for public site requests."""

from __future__ import annotations

import logging
import re
from typing import FrozenSet, Iterable, Optional
from urllib.parse import quote

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from .config import DEFAULT_EXCLUDED_PREFIXES
from .tenant_cache import TenantResolutionCache

logger = logging.getLogger(__name__)

TENANT_ID_HEADER = "X-Tenant-ID"
TENANT_SLUG_HEADER = "X-Tenant-Slug"

# last path segment that looks like a file, e.g. /favicon.ico
_FILE_SEGMENT = re.compile(r"[\w-]+\.\w+$")


def is_excluded_path(path: str, excluded_prefixes: Iterable[str] = DEFAULT_EXCLUDED_PREFIXES) -> bool:
    for prefix in excluded_prefixes:
        if path == prefix or path.startswith(prefix.rstrip("/") + "/"):
            return True
    last_segment = path.rsplit("/", 1)[-1]
    return bool(_FILE_SEGMENT.fullmatch(last_segment))


def reserved_slugs(excluded_prefixes: Iterable[str] = DEFAULT_EXCLUDED_PREFIXES) -> FrozenSet[str]:
    """First path segments a tenant slug must not take: ``/health`` reserves ``health``."""
    reserved = set()
    for prefix in excluded_prefixes:
        segment = prefix.strip("/").split("/", 1)[0]
        if segment:
            reserved.add(segment.lower())
    return frozenset(reserved)


def tenant_path(slug: str, path: str) -> str:
    """Namespace a request path under the tenant slug: ``/about`` → ``/clinic/about``."""
    rewritten = f"/{slug}{path if path.startswith('/') else '/' + path}".rstrip("/")
    return rewritten or f"/{slug}"


class TenantRoutingMiddleware(BaseHTTPMiddleware):
    """Rewrite public requests to the tenant namespace matching their Host header.

    Misses pass through untouched; deciding what to do with them is left to the
    downstream routes.
    """

    def __init__(
        self,
        app,
        *,
        cache: TenantResolutionCache,
        excluded_prefixes: Optional[Iterable[str]] = None,
    ) -> None:
        super().__init__(app)
        self._cache = cache
        self._excluded = tuple(excluded_prefixes) if excluded_prefixes is not None else DEFAULT_EXCLUDED_PREFIXES

    async def dispatch(self, request: Request, call_next) -> Response:
        path = request.url.path
        host = request.headers.get("host")
        if not host or is_excluded_path(path, self._excluded):
            return await call_next(request)

        tenant = await self._cache.get(host)
        if tenant is None:
            return await call_next(request)

        rewritten = tenant_path(tenant.slug, path)
        request.scope["path"] = rewritten
        request.scope["raw_path"] = quote(rewritten).encode("ascii")
        structlog.contextvars.bind_contextvars(tenant_id=tenant.id, tenant_slug=tenant.slug)
        logger.debug("Routing %s%s to %s", host, path, rewritten)

        response = await call_next(request)
        response.headers[TENANT_ID_HEADER] = tenant.id
        response.headers[TENANT_SLUG_HEADER] = tenant.slug
        return response

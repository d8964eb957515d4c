"""In-process hostname → tenant cache used by the edge routing middleware.

The whole mapping is rebuilt from a full query of the tenant store whenever it
is stale and swapped in only after a successful rebuild, so readers never see a
half-built cache and a failing backend leaves the last good mapping in place.
Each worker process owns its own instance; there is no cross-process
invalidation.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Iterable, Optional

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 300
WWW_PREFIX = "www."

TenantLoader = Callable[[], Awaitable[Iterable[Any]]]


@dataclass(frozen=True)
class CachedTenant:
    slug: str
    id: str


def normalize_hostname(hostname: str) -> str:
    """Strip the ``:port`` suffix and lowercase a request host."""
    host = hostname.strip()
    if host.startswith("["):
        # IPv6 literal, e.g. [::1]:8000
        end = host.find("]")
        if end != -1:
            host = host[: end + 1]
    elif ":" in host:
        host = host.split(":", 1)[0]
    return host.lower()


def normalize_domain(domain: str) -> str:
    """Normalize a stored tenant domain to its bare form."""
    bare = normalize_hostname(domain)
    if bare.startswith(WWW_PREFIX):
        bare = bare[len(WWW_PREFIX):]
    return bare


class TenantResolutionCache:
    """Resolve request hostnames to tenants with periodic full refresh.

    Args:
        loader: async callable returning every tenant record; each record must
            expose ``id``, ``slug`` and ``domain`` (attributes or mapping keys).
        ttl_seconds: seconds after a successful refresh before the cache is
            considered stale.
        clock: monotonic time source, injectable for tests.
    """

    def __init__(
        self,
        loader: TenantLoader,
        *,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._loader = loader
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: Dict[str, CachedTenant] = {}
        self._last_refreshed_at: Optional[float] = None

    @property
    def ttl(self) -> int:
        return self._ttl

    @property
    def last_refreshed_at(self) -> Optional[float]:
        return self._last_refreshed_at

    def __len__(self) -> int:
        return len(self._entries)

    def snapshot(self) -> Dict[str, CachedTenant]:
        return dict(self._entries)

    def resolve(self, hostname: Optional[str]) -> Optional[CachedTenant]:
        """Look up a host in the current mapping. Never triggers a refresh."""
        if not hostname:
            return None
        return self._entries.get(normalize_hostname(hostname))

    def is_stale(self) -> bool:
        if not self._entries or self._last_refreshed_at is None:
            return True
        return self._clock() - self._last_refreshed_at > self._ttl

    def invalidate(self) -> None:
        """Force the next :meth:`refresh_if_due` to query the tenant store."""
        self._last_refreshed_at = None

    async def refresh(self) -> Optional[Dict[str, CachedTenant]]:
        """Rebuild the mapping from the tenant store.

        Returns the new mapping, or ``None`` when the store could not be read;
        in that case the previous mapping is kept.
        """
        try:
            records = await self._loader()
            entries = self._build_entries(records)
        except Exception:
            logger.exception("Tenant cache refresh failed; keeping %d cached hosts", len(self._entries))
            return None

        self._entries = entries
        self._last_refreshed_at = self._clock()
        logger.debug("Tenant cache refreshed with %d hosts", len(entries))
        return dict(entries)

    async def refresh_if_due(self) -> bool:
        if not self.is_stale():
            return False
        return await self.refresh() is not None

    async def get(self, hostname: Optional[str]) -> Optional[CachedTenant]:
        """Refresh when due, then resolve against the last good mapping."""
        await self.refresh_if_due()
        return self.resolve(hostname)

    @staticmethod
    def _build_entries(records: Iterable[Any]) -> Dict[str, CachedTenant]:
        entries: Dict[str, CachedTenant] = {}
        for record in records:
            domain = _field(record, "domain")
            if not domain or not str(domain).strip():
                continue
            bare = normalize_domain(str(domain))
            if not bare:
                continue
            entry = CachedTenant(slug=str(_field(record, "slug")), id=str(_field(record, "id")))
            entries[bare] = entry
            entries[f"{WWW_PREFIX}{bare}"] = entry
        return entries


def _field(record: Any, name: str) -> Any:
    if isinstance(record, dict):
        return record.get(name)
    return getattr(record, name, None)

"""Tenant lifecycle events published to a Redis Stream."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

import redis

logger = logging.getLogger(__name__)

TENANT_CREATED = "tenant.created"
TENANT_UPDATED = "tenant.updated"
TENANT_DEACTIVATED = "tenant.deactivated"


class EventPublisher:
    """Publish domain events to a Redis Stream.

    Publishing is best effort: a broken connection is logged and the caller
    carries on, tenant writes never fail because of it.
    """

    def __init__(
        self,
        redis_url: str,
        stream_name: str,
        *,
        maxlen: Optional[int] = 1000,
        client: Optional[redis.Redis] = None,
    ) -> None:
        self._stream_name = stream_name
        self._maxlen = maxlen
        self._client = client or redis.Redis.from_url(redis_url)

    @property
    def stream_name(self) -> str:
        return self._stream_name

    def publish(
        self,
        event_type: str,
        payload: Dict[str, Any],
        *,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> bool:
        """Send an event to the configured stream.

        Parameters
        ----------
        event_type:
            Canonical name, e.g. ``tenant.updated``.
        payload:
            Serialisable body (will be JSON dumped).
        metadata:
            Optional envelope metadata (correlation, actor, etc.).
        """

        event = {
            "event_type": event_type,
            "payload": json.dumps(payload, default=str),
        }
        if metadata:
            event["metadata"] = json.dumps(metadata, default=str)

        try:
            self._client.xadd(
                self._stream_name,
                event,
                maxlen=self._maxlen,
                approximate=bool(self._maxlen),
            )
        except Exception:
            logger.exception("Failed to publish event '%s' to stream '%s'", event_type, self._stream_name)
            return False
        return True


def create_event_publisher(redis_url: Optional[str], stream_name: str) -> Optional[EventPublisher]:
    """Build a publisher only when a Redis URL is configured."""
    if not isinstance(redis_url, str) or not redis_url.strip():
        return None
    return EventPublisher(redis_url, stream_name)


def tenant_event_payload(tenant) -> Dict[str, Any]:
    return {
        "tenant_id": str(tenant.id),
        "slug": tenant.slug,
        "domain": tenant.domain,
        "is_active": tenant.is_active,
    }

"""Shared utilities used across the site platform services."""

from .config import ServiceConfig, load_service_config
from .health import create_health_router
from .logging import RequestContextLogMiddleware, configure_logging
from .messaging import EventPublisher, create_event_publisher
from .routing import TenantRoutingMiddleware
from .startup import database_lifespan_factory
from .tenant_cache import CachedTenant, TenantResolutionCache

__all__ = [
    "ServiceConfig",
    "load_service_config",
    "create_health_router",
    "RequestContextLogMiddleware",
    "configure_logging",
    "EventPublisher",
    "create_event_publisher",
    "TenantRoutingMiddleware",
    "database_lifespan_factory",
    "CachedTenant",
    "TenantResolutionCache",
]

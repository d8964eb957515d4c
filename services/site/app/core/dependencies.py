"""Accessors for the objects built once at startup and kept on ``app.state``."""

from typing import Optional

from fastapi import Request

from app.blocks.registry import BlockRegistry
from app.blocks.versioning import VersionManager
from shared.messaging import EventPublisher
from shared.tenant_cache import TenantResolutionCache


def get_block_registry(request: Request) -> BlockRegistry:
    return request.app.state.block_registry


def get_version_manager(request: Request) -> VersionManager:
    return request.app.state.version_manager


def get_tenant_cache(request: Request) -> TenantResolutionCache:
    return request.app.state.tenant_cache


def get_event_publisher(request: Request) -> Optional[EventPublisher]:
    return getattr(request.app.state, "event_publisher", None)

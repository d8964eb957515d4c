"""Descriptors for page-builder blocks."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

BlockData = Dict[str, Any]
MigrationFunction = Callable[[BlockData], BlockData]


@dataclass(frozen=True)
class FieldDefinition:
    name: str
    type: str
    label: Optional[str] = None
    required: bool = False
    default_value: Any = None


@dataclass(frozen=True)
class VersionHistory:
    version: str
    changes: Tuple[str, ...]
    date: str
    breaking: bool = False


@dataclass(frozen=True)
class BlockDefinition:
    """Static description of one block type.

    ``migrations`` maps ``"<from>-><to>"`` keys to pure functions that turn a
    block's data from one schema version into the next.
    """

    slug: str
    label: str
    version: str
    fields: Tuple[FieldDefinition, ...]
    category: str = "other"
    description: str = ""
    required_feature: Optional[str] = None
    versions: Tuple[VersionHistory, ...] = ()
    migrations: Dict[str, MigrationFunction] = field(default_factory=dict)


@dataclass
class BlockValidation:
    is_valid: bool
    errors: List[Dict[str, str]]

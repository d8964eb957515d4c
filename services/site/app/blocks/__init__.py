from app.blocks.registry import BlockRegistry, UnknownBlockError, build_default_registry
from app.blocks.types import BlockDefinition, BlockValidation, FieldDefinition, VersionHistory
from app.blocks.versioning import MigrationGraph, VersionManager

__all__ = [
    "BlockRegistry",
    "UnknownBlockError",
    "build_default_registry",
    "BlockDefinition",
    "BlockValidation",
    "FieldDefinition",
    "VersionHistory",
    "MigrationGraph",
    "VersionManager",
]

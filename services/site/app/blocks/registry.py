"""Registry of the block types known to the page builder.

Built once at startup and handed to whatever needs it (the version manager,
the page validators, the blocks API). Once frozen it rejects registration.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Iterator, List, Optional

from app.blocks.definitions import DEFAULT_BLOCKS
from app.blocks.types import BlockData, BlockDefinition, BlockValidation, FieldDefinition, VersionHistory


class UnknownBlockError(KeyError):
    """Raised when a block type is not registered."""


class BlockRegistry:
    def __init__(self, blocks: Iterable[BlockDefinition] = ()) -> None:
        self._blocks: Dict[str, BlockDefinition] = {}
        self._frozen = False
        for block in blocks:
            self.register(block)

    def register(self, block: BlockDefinition) -> None:
        if self._frozen:
            raise RuntimeError("Block registry is frozen")
        if block.slug in self._blocks:
            raise ValueError(f"Block type '{block.slug}' already registered")
        self._blocks[block.slug] = block

    def freeze(self) -> "BlockRegistry":
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def __contains__(self, name: object) -> bool:
        return self.find(name) is not None

    def __iter__(self) -> Iterator[BlockDefinition]:
        return iter(self._blocks.values())

    def __len__(self) -> int:
        return len(self._blocks)

    def find(self, name: Any) -> Optional[BlockDefinition]:
        # blockType comes from stored JSON and may be any type
        if not isinstance(name, str):
            return None
        return self._blocks.get(name)

    def get(self, name: str) -> BlockDefinition:
        block = self.find(name)
        if block is None:
            raise UnknownBlockError(name)
        return block

    def names(self) -> List[str]:
        return list(self._blocks)

    def all_blocks(self) -> List[BlockDefinition]:
        return list(self._blocks.values())

    def by_category(self, category: str) -> List[BlockDefinition]:
        return [block for block in self._blocks.values() if block.category == category]

    def by_feature(self, feature: str) -> List[BlockDefinition]:
        return [block for block in self._blocks.values() if block.required_feature == feature]

    def requires_feature(self, name: str, feature: str) -> bool:
        return self.get(name).required_feature == feature

    def categories(self) -> List[str]:
        seen: List[str] = []
        for block in self._blocks.values():
            if block.category and block.category not in seen:
                seen.append(block.category)
        return seen

    def required_features(self, names: Iterable[str]) -> List[str]:
        features: List[str] = []
        for name in names:
            feature = self.get(name).required_feature
            if feature and feature not in features:
                features.append(feature)
        return features

    def get_field(self, name: str, field_name: str) -> Optional[FieldDefinition]:
        for block_field in self.get(name).fields:
            if block_field.name == field_name:
                return block_field
        return None

    def supports_field(self, name: str, field_name: str) -> bool:
        return self.get_field(name, field_name) is not None

    def version_history(self, name: str) -> List[VersionHistory]:
        return list(self.get(name).versions)

    def validate_block_data(self, name: str, data: BlockData) -> BlockValidation:
        """Check the version stamp and the required top-level fields of a block."""
        block = self.get(name)
        errors: List[Dict[str, str]] = []

        version = data.get("version")
        if not version:
            errors.append({"field": "version", "message": "Version is required"})
        elif not isinstance(version, str):
            errors.append({"field": "version", "message": "Version must be a string"})

        for block_field in block.fields:
            if block_field.required and not data.get(block_field.name):
                errors.append(
                    {
                        "field": block_field.name,
                        "message": f"{block_field.label or block_field.name} is required",
                    }
                )

        return BlockValidation(is_valid=not errors, errors=errors)

    def default_block_data(self, name: str) -> BlockData:
        block = self.get(name)
        data: BlockData = {"blockType": block.slug, "version": block.version}
        for block_field in block.fields:
            if block_field.default_value is None:
                continue
            value = block_field.default_value
            # numeric defaults are stored as strings by the editor
            if isinstance(value, (int, float)) and not isinstance(value, bool):
                value = str(value)
            data[block_field.name] = value
        return data

    def metadata(self, name: str) -> Dict[str, Any]:
        block = self.get(name)
        return {
            "name": block.slug,
            "label": block.label,
            "category": block.category or "other",
            "description": block.description,
            "required_feature": block.required_feature,
            "version": block.version,
            "fields": [
                {
                    "name": block_field.name,
                    "label": block_field.label or block_field.name,
                    "type": block_field.type,
                    "required": block_field.required,
                    "default_value": block_field.default_value,
                }
                for block_field in block.fields
            ],
        }


def build_default_registry() -> BlockRegistry:
    return BlockRegistry(DEFAULT_BLOCKS).freeze()

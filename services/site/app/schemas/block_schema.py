from typing import Any, List, Optional

from pydantic import BaseModel


class BlockFieldOut(BaseModel):
    name: str
    label: str
    type: str
    required: bool
    default_value: Any = None


class VersionHistoryOut(BaseModel):
    version: str
    changes: List[str]
    date: str
    breaking: bool = False


class BlockMetadataOut(BaseModel):
    name: str
    label: str
    category: str
    description: str
    required_feature: Optional[str] = None
    version: str
    fields: List[BlockFieldOut]


class BlockDetailOut(BlockMetadataOut):
    versions: List[VersionHistoryOut]

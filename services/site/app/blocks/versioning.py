"""Upgrade stored block data to the current schema version of its block type.

Each block type's ``"<from>-><to>"`` migrations form a directed graph whose
nodes are semantic versions. Upgrading walks forward from the stored version,
always stepping to the nearest known version above the current position, and
applies the edge for that step when one is registered. A step without an edge
is skipped rather than treated as an error.

Migration never raises: unknown block types and failing migration functions are
logged and the stored data is returned untouched.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from semver import Version

from app.blocks.registry import BlockRegistry
from app.blocks.types import BlockData, BlockDefinition, MigrationFunction

logger = logging.getLogger(__name__)

MIGRATION_KEY_SEPARATOR = "->"
FALLBACK_VERSION = Version(0, 0, 0)


@dataclass(frozen=True)
class MigrationStep:
    source: Version
    target: Version
    function: MigrationFunction


def parse_migration_key(key: str) -> Tuple[Version, Version]:
    """Split ``"1.0.0->1.5.0"`` into its two versions."""
    parts = key.split(MIGRATION_KEY_SEPARATOR)
    if len(parts) != 2:
        raise ValueError(f"Invalid migration key '{key}': expected '<from>{MIGRATION_KEY_SEPARATOR}<to>'")
    try:
        source, target = (Version.parse(part.strip()) for part in parts)
    except ValueError as exc:
        raise ValueError(f"Invalid migration key '{key}': {exc}") from exc
    if target <= source:
        raise ValueError(f"Invalid migration key '{key}': target must be newer than source")
    return source, target


def coerce_version(value: Any) -> Optional[Version]:
    """Parse a stored version stamp, or ``None`` when it is not valid semver."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        value = str(value)
    if not isinstance(value, str) or not Version.is_valid(value):
        return None
    return Version.parse(value)


class MigrationGraph:
    def __init__(self, migrations: Mapping[str, MigrationFunction]) -> None:
        self._edges: Dict[Version, Dict[Version, MigrationFunction]] = {}
        for key, function in migrations.items():
            source, target = parse_migration_key(key)
            self._edges.setdefault(source, {})[target] = function

    @property
    def sources(self) -> List[Version]:
        return sorted(self._edges)

    def edge(self, source: Version, target: Version) -> Optional[MigrationFunction]:
        return self._edges.get(source, {}).get(target)

    def find_path(self, start: Version, goal: Version) -> List[MigrationStep]:
        """Collect the migrations that lead from ``start`` towards ``goal``.

        Candidate stops are the registered source versions plus ``goal``. From
        each position the walk moves to the smallest candidate above it; a stop
        with no registered edge from the current position contributes nothing.
        """
        stops = sorted(set(self._edges) | {goal})
        steps: List[MigrationStep] = []
        current = start
        while current < goal:
            following = next((stop for stop in stops if stop > current), None)
            if following is None:
                break
            function = self.edge(current, following)
            if function is not None:
                steps.append(MigrationStep(source=current, target=following, function=function))
            else:
                logger.debug("No migration registered for %s->%s, skipping", current, following)
            current = following
        return steps


class VersionManager:
    """Migrate and validate block instances against a :class:`BlockRegistry`."""

    def __init__(self, registry: BlockRegistry) -> None:
        self._registry = registry
        self._graphs: Dict[str, MigrationGraph] = {
            block.slug: MigrationGraph(block.migrations) for block in registry
        }

    @property
    def registry(self) -> BlockRegistry:
        return self._registry

    def _graph_for(self, definition: BlockDefinition) -> MigrationGraph:
        graph = self._graphs.get(definition.slug)
        if graph is None:
            graph = self._graphs[definition.slug] = MigrationGraph(definition.migrations)
        return graph

    def find_migration_path(self, block_type: str, from_version: str, to_version: str) -> List[MigrationStep]:
        definition = self._registry.get(block_type)
        start = coerce_version(from_version) or FALLBACK_VERSION
        return self._graph_for(definition).find_path(start, Version.parse(to_version))

    def migrate_block(self, block: BlockData) -> BlockData:
        """Return ``block`` upgraded to its type's current version.

        The input is never modified. Unknown types, blocks that are already
        current (or newer) and blocks whose migration fails come back as the
        very same object.
        """
        block_type = block.get("blockType")
        definition = self._registry.find(block_type)
        if definition is None:
            logger.warning("Unknown block type: %s", block_type)
            return block

        latest = Version.parse(definition.version)
        stored = coerce_version(block.get("version"))
        if stored is None:
            logger.warning(
                "Block %s has missing or invalid version %r, migrating from %s",
                block_type,
                block.get("version"),
                FALLBACK_VERSION,
            )
            stored = FALLBACK_VERSION

        if stored >= latest:
            return block

        steps = self._graph_for(definition).find_path(stored, latest)
        migrated = copy.deepcopy(block)
        for step in steps:
            try:
                migrated = step.function(migrated)
                if not isinstance(migrated, dict):
                    raise TypeError(f"migration returned {type(migrated).__name__}, expected dict")
            except Exception:
                logger.exception("Migration %s->%s failed for %s", step.source, step.target, block_type)
                return block

        migrated["version"] = definition.version
        return migrated

    def migrate_layout(self, blocks: Optional[Iterable[Any]]) -> List[Any]:
        return [self.migrate_block(block) if isinstance(block, dict) else block for block in blocks or ()]

    def validate_block(self, block: BlockData) -> bool:
        if self._registry.find(block.get("blockType")) is None:
            return False
        version = block.get("version")
        return isinstance(version, str) and bool(version) and Version.is_valid(version)

"""Session orchestration across equipment, resource nodes, and tile generation."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .equipment import EquipmentRegistry
from .models import GeneratedContent, MapTile, ResourceNode, ToolAction, Vector3
from .resource_nodes import NODE_TEMPLATES, ResourceNodeStore
from .world.generator import WorldTileGenerator


@dataclass(slots=True)
class StrikeOutcome:
    """Result of swinging the equipped tool at the world."""

    action: ToolAction | None
    target: ResourceNode | None = None
    destroyed: bool = False
    reason: str | None = None


@dataclass(slots=True)
class ExploreResult:
    content: GeneratedContent
    nodes: list[ResourceNode] = field(default_factory=list)


class WorldSession:
    """Wires the three engine components for a single player's session."""

    def __init__(
        self,
        registry: EquipmentRegistry,
        nodes: ResourceNodeStore,
        generator: WorldTileGenerator,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        self.registry = registry
        self.nodes = nodes
        self.generator = generator
        self._logger = logger or logging.getLogger("grindworld.session")
        self._explored: dict[str, MapTile] = {}

    async def explore(self, x: int, z: int) -> ExploreResult:
        """Generate (or fetch) a tile and promote its harvestable objects to resource nodes.

        Nodes are created once per generated tile; a tile regenerated after the
        generator cache is cleared is promoted again.
        """
        content = await self.generator.generate_map_tile(x, z, self.generator.neighbour_biomes(x, z))
        tile = content.tile
        if self._explored.get(tile.id) is tile:
            return ExploreResult(content=content)

        self._explored[tile.id] = tile
        created: list[ResourceNode] = []
        for index, obj in enumerate(tile.objects):
            if obj.type.value not in NODE_TEMPLATES:
                continue
            created.append(self.nodes.create_resource_node(f"{tile.id}:{index}", obj.type.value, obj.position))

        self._logger.info("tile_explored", extra={"tile_id": tile.id, "node_count": len(created)})
        return ExploreResult(content=content, nodes=created)

    def strike(self, position: Vector3) -> StrikeOutcome:
        """Use the equipped tool on the closest reachable node it is effective against."""
        tool = self.registry.equipped_tool
        if tool is None:
            return StrikeOutcome(action=None, reason="no_tool")

        candidates = [
            node for node in self.nodes.get_nodes_in_range(position, tool.range) if node.type in tool.target_types
        ]
        if not candidates:
            return StrikeOutcome(action=None, reason="no_target")

        action = self.registry.use_tool()
        if action is None:
            return StrikeOutcome(action=None, reason="not_ready")

        target = min(candidates, key=lambda node: node.position.distance_to(position))
        destroyed = self.nodes.damage_node(target.id, action.amount)
        return StrikeOutcome(action=action, target=target, destroyed=destroyed)

    def attack(self) -> ToolAction | None:
        return self.registry.use_weapon()

"""Stateful destructible world objects with hit points and loot tables."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Any

from .adapters.inventory import InventorySink
from .adapters.rendering import NodeRenderer, NullRenderer
from .models import LootEntry, ResourceNode, Vector3


@dataclass(frozen=True, slots=True)
class NodeTemplate:
    hp: int
    drops: tuple[LootEntry, ...]


def _drops(*entries: tuple[str, int, float]) -> tuple[LootEntry, ...]:
    return tuple(LootEntry(item_id=item_id, quantity=quantity, chance=chance) for item_id, quantity, chance in entries)


NODE_TEMPLATES: dict[str, NodeTemplate] = {
    "tree": NodeTemplate(100, _drops(("wood_log", 3, 1.0), ("wood_log", 2, 0.8), ("leaves", 5, 0.6), ("berry", 1, 0.2))),
    "bush": NodeTemplate(25, _drops(("leaves", 2, 1.0), ("berry", 2, 0.8), ("wood_log", 1, 0.3))),
    "rock": NodeTemplate(150, _drops(("stone", 4, 1.0), ("stone", 2, 0.7), ("flint", 1, 0.4), ("iron_ore", 1, 0.1))),
    "ruins": NodeTemplate(80, _drops(("stone_brick", 2, 1.0), ("stone", 3, 0.8), ("iron_ore", 1, 0.3))),
    "chest": NodeTemplate(
        50, _drops(("iron_ore", 3, 0.8), ("stone_brick", 2, 0.6), ("wood_log", 5, 0.9), ("flint", 2, 0.4))
    ),
    "crate": NodeTemplate(30, _drops(("wood_plank", 2, 1.0), ("berry", 3, 0.7), ("flint", 1, 0.3))),
    "plant": NodeTemplate(15, _drops(("leaves", 3, 1.0), ("berry", 1, 0.6))),
    "mushroom": NodeTemplate(10, _drops(("berry", 2, 1.0), ("leaves", 1, 0.4))),
    "crystal": NodeTemplate(200, _drops(("iron_ore", 2, 1.0), ("stone", 3, 0.8), ("flint", 3, 0.6))),
    "log": NodeTemplate(60, _drops(("wood_log", 4, 1.0), ("wood_plank", 1, 0.5), ("berry", 1, 0.2))),
    "berry_bush": NodeTemplate(20, _drops(("berry", 4, 1.0), ("berry", 2, 0.8), ("leaves", 2, 0.6))),
}

# Unknown node types are seeded from this template.
FALLBACK_NODE_TYPE = "tree"

PARTICLE_COLORS: dict[str, str] = {
    "rock": "#696969",
    "ruins": "#696969",
    "crystal": "#696969",
    "bush": "#228B22",
    "plant": "#228B22",
    "berry_bush": "#228B22",
    "chest": "#D2B48C",
    "crate": "#D2B48C",
    "mushroom": "#DC143C",
}
DEFAULT_PARTICLE_COLOR = "#8B4513"


def template_for(node_type: str) -> NodeTemplate:
    return NODE_TEMPLATES.get(node_type, NODE_TEMPLATES[FALLBACK_NODE_TYPE])


class ResourceNodeStore:
    """Owns live resource nodes, applies damage, and resolves loot on destruction."""

    def __init__(
        self,
        inventory: InventorySink,
        *,
        renderer: NodeRenderer | None = None,
        rng: random.Random | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._inventory = inventory
        self._renderer = renderer or NullRenderer()
        self._rng = rng or random.Random()
        self._logger = logger or logging.getLogger("grindworld.resource_nodes")
        self._nodes: dict[str, ResourceNode] = {}

    def create_resource_node(
        self,
        node_id: str,
        node_type: str,
        position: Vector3,
        visual: Any = None,
    ) -> ResourceNode:
        """Create (or silently overwrite) the node ``node_id`` from its type template."""
        template = template_for(node_type)
        node = ResourceNode(
            id=node_id,
            type=node_type,
            max_hp=template.hp,
            current_hp=template.hp,
            position=position,
            drops=[LootEntry(entry.item_id, entry.quantity, entry.chance) for entry in template.drops],
            visual=visual,
        )
        self._nodes[node_id] = node
        return node

    def damage_node(self, node_id: str, amount: int) -> bool:
        """Apply damage; return ``True`` only when the node was destroyed by this hit."""
        node = self._nodes.get(node_id)
        if node is None:
            return False

        node.current_hp = max(0, node.current_hp - max(0, amount))
        self._logger.info(
            "node_damaged",
            extra={"node_id": node.id, "node_type": node.type, "damage": amount, "hp": node.current_hp},
        )

        if node.visual is not None:
            self._safe_render("flash_damage", node.visual)

        if node.current_hp <= 0:
            self._destroy(node)
            return True
        return False

    def _destroy(self, node: ResourceNode) -> None:
        for entry in node.drops:
            if self._rng.random() < entry.chance:
                self._inventory.add_item(entry.item_id, entry.quantity)
                self._logger.info(
                    "loot_dropped",
                    extra={"node_id": node.id, "item_id": entry.item_id, "quantity": entry.quantity},
                )

        if node.visual is not None:
            self._safe_render("destruction_burst", node.visual, PARTICLE_COLORS.get(node.type, DEFAULT_PARTICLE_COLOR))
            self._safe_render("detach", node.visual)

        self._nodes.pop(node.id, None)
        self._logger.info("node_destroyed", extra={"node_id": node.id, "node_type": node.type})

    def _safe_render(self, effect: str, *args: Any) -> None:
        try:
            getattr(self._renderer, effect)(*args)
        except Exception:  # noqa: BLE001 - visual feedback must not affect game state.
            self._logger.exception("render_effect_failed", extra={"effect": effect})

    def get_nodes_in_range(self, position: Vector3, radius: float) -> list[ResourceNode]:
        return [node for node in self._nodes.values() if node.position.distance_to(position) <= radius]

    def get_node(self, node_id: str) -> ResourceNode | None:
        return self._nodes.get(node_id)

    def get_all_nodes(self) -> list[ResourceNode]:
        return list(self._nodes.values())

    def remove_node(self, node_id: str, detach: bool = True) -> bool:
        node = self._nodes.pop(node_id, None)
        if node is None:
            return False
        if detach and node.visual is not None:
            self._safe_render("detach", node.visual)
        return True

    def clear(self) -> None:
        self._nodes.clear()

    def __len__(self) -> int:
        return len(self._nodes)

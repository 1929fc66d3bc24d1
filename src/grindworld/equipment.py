"""In-memory registry of tools and weapons with equip, cooldown and durability rules."""

from __future__ import annotations

import logging
import math
import time
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from pydantic import ValidationError

from .custom_items import CustomTool, CustomWeapon
from .models import EffectKind, EquipmentKind, Tool, ToolAction, ToolCategory

EquipmentListener = Callable[[Tool | None, Tool | None], None]

TOOL_EFFECTS: dict[ToolCategory, EffectKind] = {
    ToolCategory.AXE: EffectKind.HARVEST,
    ToolCategory.PICKAXE: EffectKind.MINE,
}

TOOL_ANIMATIONS: dict[ToolCategory, tuple[str, str]] = {
    ToolCategory.AXE: ("chop", "wood_chips"),
    ToolCategory.PICKAXE: ("mine", "rock_fragments"),
    ToolCategory.HOE: ("till", "soil"),
    ToolCategory.SHOVEL: ("dig", "dirt"),
    ToolCategory.FISHING_ROD: ("cast", "water_splash"),
}
DEFAULT_TOOL_ANIMATION = ("swing", "sparks")

WEAPON_ANIMATIONS: dict[ToolCategory, tuple[str, str]] = {
    ToolCategory.SWORD: ("slash", "slash_effect"),
    ToolCategory.DAGGER: ("stab", "blood_spatter"),
    ToolCategory.SPEAR: ("thrust", "impact_sparks"),
    ToolCategory.MACE: ("smash", "crushing_debris"),
    ToolCategory.HAMMER: ("smash", "crushing_debris"),
    ToolCategory.BOW: ("shoot", "arrow_trail"),
    ToolCategory.STAFF: ("cast", "magic_sparks"),
    ToolCategory.WAND: ("cast", "magic_sparks"),
}
DEFAULT_WEAPON_ANIMATION = ("attack", "combat_sparks")


def _monotonic_ms() -> float:
    return time.monotonic() * 1000


def default_tools() -> list[Tool]:
    return [
        Tool(
            id="iron_axe",
            name="Iron Axe",
            category=ToolCategory.AXE,
            damage=25,
            durability=100,
            max_durability=100,
            range=2.5,
            cooldown_ms=800,
            target_types=["tree", "bush"],
            attack_speed=1.2,
            kind=EquipmentKind.TOOL,
            description="A sturdy iron axe for chopping wood",
            icon="🪓",
            color="#8B4513",
        ),
        Tool(
            id="iron_pickaxe",
            name="Iron Pickaxe",
            category=ToolCategory.PICKAXE,
            damage=30,
            durability=100,
            max_durability=100,
            range=2.0,
            cooldown_ms=1000,
            target_types=["rock", "ruins"],
            attack_speed=1.0,
            kind=EquipmentKind.TOOL,
            description="A reliable pickaxe for mining stone and ore",
            icon="⛏️",
            color="#696969",
        ),
    ]


def _weapon(
    item_id: str,
    name: str,
    category: ToolCategory,
    damage: int,
    durability: int,
    range_: float,
    cooldown_ms: int,
    attack_speed: float,
    description: str,
    icon: str,
    color: str,
) -> Tool:
    return Tool(
        id=item_id,
        name=name,
        category=category,
        damage=damage,
        durability=durability,
        max_durability=durability,
        range=range_,
        cooldown_ms=cooldown_ms,
        target_types=["enemy"],
        attack_speed=attack_speed,
        kind=EquipmentKind.WEAPON,
        description=description,
        icon=icon,
        color=color,
    )


def default_weapons() -> list[Tool]:
    return [
        _weapon("iron_sword", "Iron Sword", ToolCategory.SWORD, 35, 120, 2.2, 600, 1.8,
                "A well-balanced iron sword for combat", "⚔️", "#C0C0C0"),
        _weapon("steel_dagger", "Steel Dagger", ToolCategory.DAGGER, 20, 80, 1.5, 400, 2.5,
                "A quick and nimble steel dagger", "🗡️", "#E6E6FA"),
        _weapon("war_spear", "War Spear", ToolCategory.SPEAR, 40, 100, 3.0, 800, 1.4,
                "A long-reaching spear with excellent range", "🔱", "#8B4513"),
        _weapon("iron_mace", "Iron Mace", ToolCategory.MACE, 45, 150, 1.8, 1000, 1.0,
                "A heavy mace that deals crushing damage", "🔨", "#696969"),
        _weapon("hunting_bow", "Hunting Bow", ToolCategory.BOW, 30, 90, 8.0, 1200, 1.2,
                "A ranged bow for distant combat", "🏹", "#8B4513"),
    ]


class EquipmentRegistry:
    """Holds available tools/weapons and the single equipped tool and weapon.

    Tool and weapon use share one last-action timestamp, so using either starts
    the cooldown of both. Unknown ids fail softly by returning ``False``.
    """

    def __init__(
        self,
        *,
        clock: Callable[[], float] | None = None,
        equip_defaults: bool = True,
        logger: logging.Logger | None = None,
    ) -> None:
        self._clock = clock or _monotonic_ms
        self._logger = logger or logging.getLogger("grindworld.equipment")

        self._tools: dict[str, Tool] = {tool.id: tool for tool in default_tools()}
        self._weapons: dict[str, Tool] = {weapon.id: weapon for weapon in default_weapons()}
        self._custom_tools: dict[str, CustomTool] = {}
        self._custom_weapons: dict[str, CustomWeapon] = {}
        self._equipped_tool: Tool | None = None
        self._equipped_weapon: Tool | None = None
        self._last_action_ms: float | None = None
        self._listeners: list[EquipmentListener] = []

        if equip_defaults:
            self.equip_tool("iron_axe")
            self.equip_weapon("iron_sword")

    @property
    def equipped_tool(self) -> Tool | None:
        return self._equipped_tool

    @property
    def equipped_weapon(self) -> Tool | None:
        return self._equipped_weapon

    def available_tools(self) -> list[Tool]:
        return list(self._tools.values())

    def available_weapons(self) -> list[Tool]:
        return list(self._weapons.values())

    def get_tool(self, tool_id: str) -> Tool | None:
        return self._tools.get(tool_id)

    def get_weapon(self, weapon_id: str) -> Tool | None:
        return self._weapons.get(weapon_id)

    def custom_tool_details(self, tool_id: str) -> CustomTool | None:
        return self._custom_tools.get(tool_id)

    def custom_weapon_details(self, weapon_id: str) -> CustomWeapon | None:
        return self._custom_weapons.get(weapon_id)

    def register_tools(self, tools: Iterable[Tool | CustomTool | Mapping[str, Any]]) -> int:
        """Upsert tools by id and return how many records were accepted.

        Mappings are validated as authored :class:`CustomTool` records; invalid
        ones are skipped with a warning.
        """
        accepted = 0
        for record in tools:
            if isinstance(record, Mapping):
                try:
                    record = CustomTool.model_validate(record)
                except ValidationError as exc:
                    self._logger.warning(
                        "custom_tool_rejected",
                        extra={"tool_id": record.get("id"), "errors": exc.error_count()},
                    )
                    continue
            if isinstance(record, CustomTool):
                self._custom_tools[record.id] = record
                tool = record.to_tool()
            elif isinstance(record, Tool):
                tool = record
            else:
                self._logger.warning("tool_record_rejected", extra={"record_type": type(record).__name__})
                continue
            self._upsert(self._tools, tool, equipped_kind=EquipmentKind.TOOL)
            accepted += 1
            self._logger.info("tool_registered", extra={"tool_id": tool.id, "targets": tool.target_types})

        self._notify()
        return accepted

    def register_weapons(self, weapons: Iterable[Tool | CustomWeapon | Mapping[str, Any]]) -> int:
        """Upsert weapons by id and return how many records were accepted."""
        accepted = 0
        for record in weapons:
            if isinstance(record, Mapping):
                try:
                    record = CustomWeapon.model_validate(record)
                except ValidationError as exc:
                    self._logger.warning(
                        "custom_weapon_rejected",
                        extra={"weapon_id": record.get("id"), "errors": exc.error_count()},
                    )
                    continue
            if isinstance(record, CustomWeapon):
                self._custom_weapons[record.id] = record
                weapon = record.to_tool()
            elif isinstance(record, Tool):
                weapon = record
            else:
                self._logger.warning("weapon_record_rejected", extra={"record_type": type(record).__name__})
                continue
            self._upsert(self._weapons, weapon, equipped_kind=EquipmentKind.WEAPON)
            accepted += 1
            self._logger.info("weapon_registered", extra={"weapon_id": weapon.id})

        self._notify()
        return accepted

    def _upsert(self, collection: dict[str, Tool], item: Tool, *, equipped_kind: EquipmentKind) -> None:
        collection[item.id] = item
        # Replacing the equipped record keeps it equipped with its worn durability.
        equipped = self._equipped_tool if equipped_kind is EquipmentKind.TOOL else self._equipped_weapon
        if equipped is None or equipped.id != item.id or equipped is item:
            return
        item.durability = min(item.max_durability, equipped.durability)
        if equipped_kind is EquipmentKind.TOOL:
            self._equipped_tool = item
        else:
            self._equipped_weapon = item

    def equip_tool(self, tool_id: str) -> bool:
        tool = self._tools.get(tool_id)
        if tool is None:
            return False
        self._equipped_tool = tool
        self._notify()
        return True

    def equip_weapon(self, weapon_id: str) -> bool:
        weapon = self._weapons.get(weapon_id)
        if weapon is None:
            return False
        self._equipped_weapon = weapon
        self._notify()
        return True

    def unequip_tool(self) -> None:
        self._equipped_tool = None
        self._notify()

    def unequip_weapon(self) -> None:
        self._equipped_weapon = None
        self._notify()

    def can_use_tool(self) -> bool:
        return self._ready(self._equipped_tool)

    def can_use_weapon(self) -> bool:
        return self._ready(self._equipped_weapon)

    def _ready(self, item: Tool | None) -> bool:
        if item is None or item.durability <= 0:
            return False
        if self._last_action_ms is None:
            return True
        return self._clock() - self._last_action_ms >= item.cooldown_ms

    def use_tool(self) -> ToolAction | None:
        tool = self._equipped_tool
        if tool is None or not self._ready(tool):
            return None

        self._consume(tool)
        animation, particles = TOOL_ANIMATIONS.get(tool.category, DEFAULT_TOOL_ANIMATION)
        action = ToolAction(
            item_id=tool.id,
            target_type=tool.target_types[0] if tool.target_types else "",
            effect=TOOL_EFFECTS.get(tool.category, EffectKind.DAMAGE),
            amount=tool.damage,
            animation=animation,
            particles=particles,
        )
        self._notify()
        return action

    def use_weapon(self) -> ToolAction | None:
        weapon = self._equipped_weapon
        if weapon is None or not self._ready(weapon):
            return None

        self._consume(weapon)
        animation, particles = WEAPON_ANIMATIONS.get(weapon.category, DEFAULT_WEAPON_ANIMATION)
        action = ToolAction(
            item_id=weapon.id,
            target_type="enemy",
            effect=EffectKind.ATTACK,
            amount=weapon.damage,
            animation=animation,
            particles=particles,
        )
        self._notify()
        return action

    def _consume(self, item: Tool) -> None:
        self._last_action_ms = self._clock()
        item.durability = max(0, item.durability - 1)
        if item.durability == 0:
            self._logger.info("equipment_broken", extra={"item_id": item.id, "kind": item.kind.value})

    def repair_tool(self, tool_id: str, amount: float = math.inf) -> bool:
        return self._repair(self._tools.get(tool_id), amount, self._equipped_tool)

    def repair_weapon(self, weapon_id: str, amount: float = math.inf) -> bool:
        return self._repair(self._weapons.get(weapon_id), amount, self._equipped_weapon)

    def _repair(self, item: Tool | None, amount: float, equipped: Tool | None) -> bool:
        if item is None:
            return False
        item.durability = int(max(0, min(item.max_durability, item.durability + amount)))
        if equipped is not None and equipped.id == item.id:
            self._notify()
        return True

    def subscribe(self, listener: EquipmentListener) -> Callable[[], None]:
        """Register ``listener`` and call it right away with the current equipment."""
        self._listeners.append(listener)
        self._safe_call(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            self._safe_call(listener)

    def _safe_call(self, listener: EquipmentListener) -> None:
        try:
            listener(self._equipped_tool, self._equipped_weapon)
        except Exception:  # noqa: BLE001 - listener failures never undo an applied change.
            self._logger.exception("equipment_listener_failed")

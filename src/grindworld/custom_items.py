"""Authored custom tools and weapons supplied by external game-authoring tooling."""

from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .models import EquipmentKind, Tool, ToolCategory

EFFECTIVE_AGAINST_TARGETS: dict[str, tuple[str, ...]] = {
    "wood": ("tree", "bush", "log"),
    "stone": ("rock", "ruins"),
    "ore": ("rock", "mineral"),
    "plant": ("plant", "flower", "bush"),
    "animal": ("enemy",),
    "metal": ("ore", "metal"),
    "soil": ("dirt", "clay"),
    "magical_plant": ("plant", "flower", "magical"),
    "herb": ("plant", "flower"),
    "artifact": ("ruins", "treasure"),
    "ruin": ("ruins", "statue"),
    "door": ("building", "chest"),
    "container": ("chest", "crate"),
}

CUSTOM_TOOL_RANGE = 2.0


class ItemAppearance(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    icon: str = ""
    primary_color: str | None = Field(default=None, alias="primaryColor")
    secondary_color: str | None = Field(default=None, alias="secondaryColor")


class CustomItemBase(BaseModel):
    """Fields shared by every authored item; unknown keys are retained."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str
    name: str
    description: str = ""
    scenario: str = ""
    appearance: ItemAppearance = Field(default_factory=ItemAppearance)
    properties: dict[str, Any] = Field(default_factory=dict)
    custom_attributes: dict[str, Any] = Field(default_factory=dict, alias="customAttributes")


class CombatStats(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    damage: int = Field(ge=0)
    critical_chance: float = Field(default=0.0, alias="criticalChance")
    critical_multiplier: float = Field(default=1.0, alias="criticalMultiplier")
    range: float = Field(gt=0)
    speed: float = Field(gt=0)
    durability: int = Field(ge=0)


class ToolStats(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    efficiency: float = Field(gt=0)
    durability: int = Field(ge=0)
    harvest_level: int = Field(default=1, alias="harvestLevel")


class CustomWeapon(CustomItemBase):
    weapon_type: ToolCategory = Field(alias="weaponType")
    combat_stats: CombatStats = Field(alias="combatStats")

    def to_tool(self) -> Tool:
        stats = self.combat_stats
        return Tool(
            id=self.id,
            name=self.name,
            category=self.weapon_type,
            damage=stats.damage,
            durability=stats.durability,
            max_durability=stats.durability,
            range=stats.range,
            cooldown_ms=math.floor(1000 / stats.speed),
            target_types=["enemy"],
            attack_speed=stats.speed,
            kind=EquipmentKind.WEAPON,
            description=self.description,
            icon=self.appearance.icon or "⚔️",
            color=self.appearance.primary_color or "#C0C0C0",
        )


class CustomTool(CustomItemBase):
    tool_type: ToolCategory = Field(alias="toolType")
    tool_stats: ToolStats = Field(alias="toolStats")
    effective_against: list[str] = Field(default_factory=list, alias="effectiveAgainst")

    def to_tool(self) -> Tool:
        stats = self.tool_stats
        return Tool(
            id=self.id,
            name=self.name,
            category=self.tool_type,
            damage=math.floor(10 + stats.efficiency * 10),
            durability=stats.durability,
            max_durability=stats.durability,
            range=CUSTOM_TOOL_RANGE,
            cooldown_ms=math.floor(1000 / (stats.efficiency * 0.8)),
            target_types=expand_effective_against(self.effective_against),
            attack_speed=stats.efficiency,
            kind=EquipmentKind.TOOL,
            description=self.description,
            icon=self.appearance.icon or "🔨",
            color=self.appearance.primary_color or "#8B4513",
        )


def expand_effective_against(categories: list[str]) -> list[str]:
    """Map authored material categories onto node target tags, first-seen order."""
    targets: list[str] = []
    for category in categories:
        for tag in EFFECTIVE_AGAINST_TARGETS.get(category, (category,)):
            if tag not in targets:
                targets.append(tag)
    return targets

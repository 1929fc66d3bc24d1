from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Biome(str, Enum):
    FOREST = "forest"
    GRASSLAND = "grassland"
    DESERT = "desert"
    MOUNTAINS = "mountains"
    LAKE = "lake"
    VILLAGE = "village"
    RUINS = "ruins"


class ObjectType(str, Enum):
    TREE = "tree"
    ROCK = "rock"
    BUILDING = "building"
    WATER = "water"
    HILL = "hill"
    FLOWER = "flower"
    BUSH = "bush"
    RUINS = "ruins"
    NPC = "npc"
    CHEST = "chest"
    CRATE = "crate"
    PLANT = "plant"
    MUSHROOM = "mushroom"
    CRYSTAL = "crystal"
    LOG = "log"
    BERRY_BUSH = "berry_bush"
    WELL = "well"
    CAMPFIRE = "campfire"
    STATUE = "statue"
    FENCE = "fence"
    BRIDGE = "bridge"
    CART = "cart"


class ScenarioTheme(str, Enum):
    NONE = "none"
    PASTORAL = "pastoral"
    ARCHAEOLOGICAL = "archaeological"
    SURVIVAL = "survival"
    FANTASY = "fantasy"
    NAUTICAL = "nautical"
    INDUSTRIAL = "industrial"
    APOCALYPTIC = "apocalyptic"


class ToolCategory(str, Enum):
    AXE = "axe"
    PICKAXE = "pickaxe"
    SHOVEL = "shovel"
    HOE = "hoe"
    FISHING_ROD = "fishing_rod"
    SWORD = "sword"
    DAGGER = "dagger"
    SPEAR = "spear"
    MACE = "mace"
    HAMMER = "hammer"
    BOW = "bow"
    STAFF = "staff"
    WAND = "wand"
    CUSTOM = "custom"


class EquipmentKind(str, Enum):
    TOOL = "tool"
    WEAPON = "weapon"


class EffectKind(str, Enum):
    DAMAGE = "damage"
    HARVEST = "harvest"
    MINE = "mine"
    DIG = "dig"
    ATTACK = "attack"


@dataclass(slots=True)
class Vector3:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def distance_to(self, other: Vector3) -> float:
        return math.dist((self.x, self.y, self.z), (other.x, other.y, other.z))

    def as_dict(self) -> dict[str, float]:
        return {"x": self.x, "y": self.y, "z": self.z}


@dataclass(slots=True)
class MapObject:
    type: ObjectType
    position: Vector3
    scale: Vector3 = field(default_factory=lambda: Vector3(1.0, 1.0, 1.0))
    rotation: Vector3 = field(default_factory=Vector3)
    color: str | None = None
    properties: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class MapTile:
    id: str
    x: int
    z: int
    biome: Biome
    objects: list[MapObject] = field(default_factory=list)
    generated: bool = True


@dataclass(slots=True)
class GeneratedContent:
    """A tile plus the human-readable framing produced alongside it."""

    tile: MapTile
    description: str
    theme: str


@dataclass(slots=True)
class NPCAppearance:
    body_color: str
    clothing_color: str
    scale: float


@dataclass(slots=True)
class NPCData:
    id: str
    name: str
    personality: str
    background: str
    occupation: str
    mood: str
    topics: list[str]
    appearance: NPCAppearance


@dataclass(slots=True)
class Tool:
    """Runtime record for a harvesting tool or a combat weapon.

    ``durability`` is the only field mutated during play; ``cooldown_ms`` is the
    minimum gap between two actions of the shared registry clock.
    """

    id: str
    name: str
    category: ToolCategory
    damage: int
    durability: int
    max_durability: int
    range: float
    cooldown_ms: int
    target_types: list[str]
    attack_speed: float
    kind: EquipmentKind
    description: str = ""
    icon: str = ""
    color: str = ""

    @property
    def broken(self) -> bool:
        return self.durability <= 0


@dataclass(slots=True)
class ToolAction:
    item_id: str
    target_type: str
    effect: EffectKind
    amount: int
    animation: str
    particles: str


@dataclass(slots=True)
class LootEntry:
    item_id: str
    quantity: int
    chance: float


@dataclass(slots=True)
class ResourceNode:
    id: str
    type: str
    max_hp: int
    current_hp: int
    position: Vector3
    drops: list[LootEntry] = field(default_factory=list)
    visual: Any = None

    @property
    def destroyed(self) -> bool:
        return self.current_hp <= 0


def tile_id(x: int, z: int) -> str:
    """Spatial identity shared by the tile cache and node ids."""
    return f"{x}_{z}"

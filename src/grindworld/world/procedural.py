"""Deterministic procedural tile generation used whenever the content service is unavailable."""

from __future__ import annotations

import math
import random
from collections.abc import Sequence

from grindworld.models import (
    Biome,
    GeneratedContent,
    MapObject,
    MapTile,
    NPCAppearance,
    NPCData,
    ObjectType,
    ScenarioTheme,
    Vector3,
    tile_id,
)

from .scenario import Scenario
from .themes import (
    CLOTHING_COLORS,
    DEFAULT_BACKGROUND,
    DEFAULT_NAMES,
    DEFAULT_OCCUPATIONS,
    DEFAULT_PERSONALITIES,
    DEFAULT_TOPICS,
    ENVIRONMENT_OBJECTS,
    GENERIC_DESCRIPTION,
    INTERACTIVE_OBJECTS,
    SKIN_TONES,
    STARTING_BIOMES,
    THEME_BIOMES,
    THEME_DESCRIPTIONS,
    THEME_INTERACTIVES,
    THEME_NPC_POOLS,
)

MIN_OBJECTS = 4
MAX_OBJECTS = 9
NPC_SPREAD = 15.0


def object_color(object_type: ObjectType, biome: Biome) -> str | None:
    if object_type is ObjectType.TREE:
        return "#8B4513" if biome is Biome.DESERT else "#228B22"
    return {
        ObjectType.ROCK: "#696969",
        ObjectType.CRYSTAL: "#9370DB",
        ObjectType.CHEST: "#8B4513",
        ObjectType.CRATE: "#D2B48C",
    }.get(object_type)


def parse_biomes(labels: Sequence[str | Biome]) -> list[Biome]:
    """Keep the recognisable biome labels, in order."""
    biomes: list[Biome] = []
    for label in labels:
        try:
            biomes.append(Biome(label))
        except ValueError:
            continue
    return biomes


class ProceduralTileGenerator:
    """Builds tiles from static tables and a (seedable) random source.

    Nothing in here performs I/O or raises for well-formed integer coordinates,
    which is what lets it back every failed generative request.
    """

    def __init__(
        self,
        *,
        rng: random.Random | None = None,
        tile_size: float = 25.0,
        npc_chance: float = 0.1,
        continuity_chance: float = 0.7,
    ) -> None:
        self._rng = rng or random.Random()
        self.tile_size = tile_size
        self.npc_chance = npc_chance
        self.continuity_chance = continuity_chance

    def choose_biome(self, nearby_biomes: Sequence[str | Biome], scenario: Scenario) -> Biome:
        nearby = parse_biomes(nearby_biomes)
        if nearby and self._rng.random() < self.continuity_chance:
            return self._rng.choice(nearby)
        return self._rng.choice(THEME_BIOMES[scenario.theme])

    def generate(
        self,
        x: int,
        z: int,
        nearby_biomes: Sequence[str | Biome] = (),
        scenario: Scenario | None = None,
    ) -> GeneratedContent:
        scenario = scenario or Scenario()
        biome = self.choose_biome(nearby_biomes, scenario)

        count = self._rng.randint(MIN_OBJECTS, MAX_OBJECTS)
        interactive_count = self._rng.randint(1, 2)
        interactive_pool = INTERACTIVE_OBJECTS[biome] + THEME_INTERACTIVES[scenario.theme]

        objects: list[MapObject] = []
        for index in range(count):
            pool = interactive_pool if index < interactive_count else ENVIRONMENT_OBJECTS[biome]
            objects.append(self._place_object(self._rng.choice(pool), x, z, biome))

        if self._rng.random() < self.npc_chance:
            objects.append(self._place_npc(x, z, biome, scenario))

        tile = MapTile(id=tile_id(x, z), x=x, z=z, biome=biome, objects=objects, generated=True)
        if scenario.active:
            description = THEME_DESCRIPTIONS[scenario.theme].format(biome=biome.value)
            theme = scenario.theme.value
        else:
            description = GENERIC_DESCRIPTION.format(biome=biome.value)
            theme = f"procedural-{biome.value}"
        return GeneratedContent(tile=tile, description=description, theme=theme)

    def _place_object(self, object_type: ObjectType, x: int, z: int, biome: Biome) -> MapObject:
        rng = self._rng
        return MapObject(
            type=object_type,
            position=Vector3(
                x * self.tile_size + (rng.random() - 0.5) * self.tile_size,
                0.0,
                z * self.tile_size + (rng.random() - 0.5) * self.tile_size,
            ),
            scale=Vector3(rng.uniform(0.8, 1.2), rng.uniform(0.8, 1.2), rng.uniform(0.8, 1.2)),
            rotation=Vector3(0.0, rng.random() * math.tau, 0.0),
            color=object_color(object_type, biome),
        )

    def _place_npc(self, x: int, z: int, biome: Biome, scenario: Scenario) -> MapObject:
        rng = self._rng
        npc = self.generate_npc(x, z, biome, scenario)
        return MapObject(
            type=ObjectType.NPC,
            position=Vector3(
                x * self.tile_size + (rng.random() - 0.5) * NPC_SPREAD,
                0.0,
                z * self.tile_size + (rng.random() - 0.5) * NPC_SPREAD,
            ),
            rotation=Vector3(0.0, rng.random() * math.tau, 0.0),
            properties={"npcData": npc},
        )

    def generate_npc(self, x: int, z: int, biome: Biome, scenario: Scenario) -> NPCData:
        rng = self._rng
        pool = THEME_NPC_POOLS.get(scenario.theme)
        if pool is None:
            name = rng.choice(DEFAULT_NAMES)
            personality = rng.choice(DEFAULT_PERSONALITIES)
            occupation = rng.choice(DEFAULT_OCCUPATIONS[biome])
            topics = list(DEFAULT_TOPICS[biome])
            template = DEFAULT_BACKGROUND
        else:
            name = rng.choice(pool.names)
            personality = rng.choice(pool.personalities)
            occupation = rng.choice(pool.occupations)
            topics = list(pool.topics)
            template = pool.background

        return NPCData(
            id=f"npc_{x}_{z}_{rng.getrandbits(32):08x}",
            name=name,
            personality=personality,
            background=template.format(occupation=occupation, biome=biome.value),
            occupation=occupation,
            mood="content" if rng.random() < 0.8 else "worried",
            topics=topics,
            appearance=NPCAppearance(
                body_color=rng.choice(SKIN_TONES),
                clothing_color=rng.choice(CLOTHING_COLORS),
                scale=rng.uniform(0.9, 1.1),
            ),
        )


def starting_biome(theme: ScenarioTheme) -> Biome:
    return STARTING_BIOMES[theme]

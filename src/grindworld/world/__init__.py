"""World tile generation: cache, content-service routing, and procedural fallback."""

from .generator import WorldTileGenerator
from .procedural import ProceduralTileGenerator, starting_biome
from .scenario import Scenario
from .themes import SCENARIO_PRESETS, ScenarioPreset, find_preset

__all__ = [
    "ProceduralTileGenerator",
    "SCENARIO_PRESETS",
    "Scenario",
    "ScenarioPreset",
    "WorldTileGenerator",
    "find_preset",
    "starting_biome",
]

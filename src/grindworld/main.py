"""CLI startup entrypoint for grindworld."""

from __future__ import annotations

import asyncio
import random
from collections import Counter

import typer
from rich import print

from grindworld.adapters import InMemoryInventory, OpenAIContentService
from grindworld.config import settings
from grindworld.equipment import EquipmentRegistry
from grindworld.resource_nodes import ResourceNodeStore
from grindworld.session import WorldSession
from grindworld.telemetry.logging import configure_logging
from grindworld.world import SCENARIO_PRESETS, ProceduralTileGenerator, WorldTileGenerator, find_preset, starting_biome

app = typer.Typer(help="grindworld world-content engine")


class _SteppingClock:
    """Millisecond clock the CLI advances by hand so cooldowns elapse instantly."""

    def __init__(self) -> None:
        self.now_ms = 0.0

    def __call__(self) -> float:
        return self.now_ms

    def advance(self, ms: float) -> None:
        self.now_ms += ms


def _build_rng(seed: int | None) -> random.Random:
    effective = seed if seed is not None else settings.random_seed
    return random.Random(effective)


def _build_generator(rng: random.Random, scenario_id: str | None = None) -> WorldTileGenerator:
    content_service = None
    if settings.content_service_api_key:
        content_service = OpenAIContentService(
            api_key=settings.content_service_api_key,
            base_url=settings.content_service_url,
            model=settings.content_service_model,
            temperature=settings.content_service_temperature,
            max_tokens=settings.content_service_max_tokens,
        )

    generator = WorldTileGenerator(
        content_service=content_service,
        procedural=ProceduralTileGenerator(
            rng=rng,
            tile_size=settings.tile_size,
            npc_chance=settings.npc_spawn_chance,
            continuity_chance=settings.biome_continuity_chance,
        ),
        timeout_seconds=settings.generation_timeout_seconds,
    )

    if scenario_id:
        preset = find_preset(scenario_id)
        if preset is None:
            raise typer.BadParameter(f"Unknown scenario: {scenario_id}")
        generator.set_scenario(preset.prompt, preset.theme)
    return generator


def _build_session(rng: random.Random, scenario_id: str | None = None, clock=None) -> tuple[WorldSession, InMemoryInventory]:
    inventory = InMemoryInventory()
    session = WorldSession(
        registry=EquipmentRegistry(clock=clock),
        nodes=ResourceNodeStore(inventory, rng=rng),
        generator=_build_generator(rng, scenario_id),
    )
    return session, inventory


@app.callback()
def main(log_level: str = typer.Option(None, help="Override GRINDWORLD_LOG_LEVEL")) -> None:
    configure_logging(log_level or settings.log_level)


@app.command()
def start() -> None:
    """Show runtime configuration."""
    print(
        {
            "app_name": settings.app_name,
            "content_service_enabled": bool(settings.content_service_api_key),
            "content_service_model": settings.content_service_model,
            "generation_timeout_seconds": settings.generation_timeout_seconds,
            "tile_size": settings.tile_size,
            "npc_spawn_chance": settings.npc_spawn_chance,
        }
    )


@app.command()
def scenarios() -> None:
    """List the predefined scenario presets."""
    for preset in SCENARIO_PRESETS:
        print(
            {
                "id": preset.id,
                "name": preset.name,
                "theme": preset.theme.value,
                "starting_biome": starting_biome(preset.theme).value,
            }
        )


@app.command("generate-tile")
def generate_tile(
    x: int = typer.Option(0, help="Tile grid X"),
    z: int = typer.Option(0, help="Tile grid Z"),
    scenario: str = typer.Option(None, help="Scenario preset id"),
    seed: int = typer.Option(None, help="Random seed for procedural generation"),
) -> None:
    generator = _build_generator(_build_rng(seed), scenario)
    content = asyncio.run(generator.generate_map_tile(x, z))
    print(
        {
            "tile_id": content.tile.id,
            "biome": content.tile.biome.value,
            "description": content.description,
            "theme": content.theme,
            "objects": [obj.type.value for obj in content.tile.objects],
        }
    )


@app.command()
def explore(
    radius: int = typer.Option(1, min=0, help="Tiles generated in each direction around the origin"),
    scenario: str = typer.Option(None, help="Scenario preset id"),
    seed: int = typer.Option(None, help="Random seed for procedural generation"),
) -> None:
    """Generate a square of tiles around the origin and summarize it."""
    session, _ = _build_session(_build_rng(seed), scenario)

    async def _run() -> tuple[Counter, int]:
        biomes: Counter = Counter()
        node_count = 0
        for x in range(-radius, radius + 1):
            for z in range(-radius, radius + 1):
                result = await session.explore(x, z)
                biomes[result.content.tile.biome.value] += 1
                node_count += len(result.nodes)
        return biomes, node_count

    biomes, node_count = asyncio.run(_run())
    print({"tiles": sum(biomes.values()), "biomes": dict(biomes), "resource_nodes": node_count})


@app.command()
def harvest(
    x: int = typer.Option(0, help="Tile grid X"),
    z: int = typer.Option(0, help="Tile grid Z"),
    swings: int = typer.Option(20, min=1, help="Maximum swings per node"),
    seed: int = typer.Option(None, help="Random seed"),
) -> None:
    """Explore one tile and chop/mine every node the starting tools can work."""
    clock = _SteppingClock()
    session, inventory = _build_session(_build_rng(seed), clock=clock)
    result = asyncio.run(session.explore(x, z))

    destroyed = 0
    for node in result.nodes:
        tool = next((t for t in session.registry.available_tools() if node.type in t.target_types), None)
        if tool is None:
            continue
        session.registry.equip_tool(tool.id)
        for _ in range(swings):
            clock.advance(tool.cooldown_ms)
            outcome = session.strike(node.position)
            if outcome.destroyed:
                destroyed += 1
                break
            if outcome.action is None:
                break

    print(
        {
            "tile_id": result.content.tile.id,
            "biome": result.content.tile.biome.value,
            "nodes": len(result.nodes),
            "destroyed": destroyed,
            "inventory": inventory.snapshot(),
        }
    )


if __name__ == "__main__":
    app()

from __future__ import annotations

import asyncio
import random

from grindworld.adapters import TileRequest
from grindworld.errors import ContentServiceError
from grindworld.models import Biome, MapTile, ObjectType, ScenarioTheme
from grindworld.world import ProceduralTileGenerator, WorldTileGenerator

VALID_PAYLOAD = {
    "biome": "lake",
    "objects": [
        {"type": "crate", "position": {"x": 1, "y": 0, "z": 2}},
        {
            "type": "tree",
            "position": {"x": 3, "y": 0, "z": 4},
            "scale": {"x": 2, "y": 2, "z": 2},
            "rotation": {"x": 0, "y": 1.5, "z": 0},
            "color": "#00FF00",
        },
    ],
    "description": "A misty lakeshore",
    "theme": "calm",
}


class ScriptedService:
    def __init__(self, payload=None, error: Exception | None = None, delay: float = 0.0) -> None:
        self.payload = payload if payload is not None else VALID_PAYLOAD
        self.error = error
        self.delay = delay
        self.requests: list[TileRequest] = []

    async def generate(self, request: TileRequest) -> dict:
        self.requests.append(request)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.payload


def _generator(service=None, seed: int = 0, **kwargs) -> WorldTileGenerator:
    return WorldTileGenerator(
        content_service=service,
        procedural=ProceduralTileGenerator(rng=random.Random(seed)),
        **kwargs,
    )


def test_content_service_tile_is_converted_and_cached() -> None:
    service = ScriptedService()
    generator = _generator(service)

    first = asyncio.run(generator.generate_map_tile(2, -1, ["forest"]))

    assert first.description == "A misty lakeshore"
    assert first.theme == "calm"
    tile = first.tile
    assert (tile.id, tile.biome, tile.generated) == ("2_-1", Biome.LAKE, True)
    crate, tree = tile.objects
    assert crate.type is ObjectType.CRATE
    assert (crate.scale.x, crate.scale.y, crate.scale.z) == (1.0, 1.0, 1.0)
    assert crate.rotation.y == 0.0
    assert tree.scale.x == 2.0 and tree.color == "#00FF00"

    request = service.requests[0]
    assert request.nearby_biomes == ["forest"]
    assert round(request.distance_from_origin, 3) == 2.236
    assert generator.get_tile_info(2, -1) is tile


def test_second_request_is_cache_hit_without_generation() -> None:
    service = ScriptedService()
    generator = _generator(service)

    async def _run():
        first = await generator.generate_map_tile(0, 0)
        second = await generator.generate_map_tile(0, 0)
        return first, second

    first, second = asyncio.run(_run())

    assert len(service.requests) == 1
    assert second.tile is first.tile
    assert second.description == "Previously generated tile"
    assert second.theme == "cached"


def test_fallback_without_content_service_is_cached() -> None:
    generator = _generator()

    async def _run():
        first = await generator.generate_map_tile(4, 4)
        second = await generator.generate_map_tile(4, 4)
        return first, second

    first, second = asyncio.run(_run())

    assert first.theme.startswith("procedural-")
    assert second.tile == first.tile
    assert generator.cached_tiles() == [first.tile]


def test_service_error_falls_back_to_procedural() -> None:
    service = ScriptedService(error=ContentServiceError("503"))
    content = asyncio.run(_generator(service).generate_map_tile(1, 1))

    assert len(service.requests) == 1
    assert content.theme.startswith("procedural-")
    assert 4 <= len(content.tile.objects) <= 10


def test_malformed_payloads_fall_back() -> None:
    bad_payloads = [
        {"biome": "forest", "objects": [], "description": "empty", "theme": "x"},
        {"biome": "forest", "objects": [{"type": "tree"}], "description": "no position", "theme": "x"},
        {"biome": "volcano", "objects": VALID_PAYLOAD["objects"], "description": "bad biome", "theme": "x"},
        {"objects": VALID_PAYLOAD["objects"]},
        ["not", "a", "dict"],
    ]
    for payload in bad_payloads:
        content = asyncio.run(_generator(ScriptedService(payload=payload)).generate_map_tile(0, 0))
        assert content.theme.startswith("procedural-")


def test_slow_service_times_out_into_fallback() -> None:
    service = ScriptedService(delay=1.0)
    generator = _generator(service, timeout_seconds=0.01)

    content = asyncio.run(generator.generate_map_tile(7, 7))

    assert content.theme.startswith("procedural-")
    assert generator.get_tile_info(7, 7) is content.tile


def test_concurrent_requests_for_same_coordinate_are_coalesced() -> None:
    service = ScriptedService(delay=0.05)
    generator = _generator(service)

    async def _run():
        pending = asyncio.gather(
            generator.generate_map_tile(3, 3),
            generator.generate_map_tile(3, 3),
            generator.generate_map_tile(5, 5),
        )
        await asyncio.sleep(0)
        in_flight = generator.is_generating(3, 3)
        results = await pending
        return in_flight, results

    in_flight, (first, second, other) = asyncio.run(_run())

    assert in_flight is True
    assert len(service.requests) == 2
    assert first.tile is second.tile
    assert other.tile.id == "5_5"
    assert generator.is_generating(3, 3) is False


def test_scenario_applies_forward_only() -> None:
    service = ScriptedService()
    generator = _generator(service)

    async def _run():
        before = await generator.generate_map_tile(0, 0)
        generator.set_scenario("Ancient ruins everywhere", "archaeological")
        again = await generator.generate_map_tile(0, 0)
        after = await generator.generate_map_tile(1, 0)
        return before, again, after

    before, again, after = asyncio.run(_run())

    assert again.tile is before.tile
    assert generator.scenario.theme is ScenarioTheme.ARCHAEOLOGICAL
    assert service.requests[0].scenario_theme is None
    assert service.requests[1].scenario_prompt == "Ancient ruins everywhere"
    assert service.requests[1].scenario_theme == "archaeological"
    assert len(service.requests) == 2


def test_unknown_theme_is_treated_as_none() -> None:
    generator = _generator()
    scenario = generator.set_scenario("whatever", "cyberpunk")

    assert scenario.theme is ScenarioTheme.NONE
    assert scenario.active is False


def test_fallback_theme_biases_biome() -> None:
    generator = _generator(seed=12)
    generator.set_scenario("Sail the islands", ScenarioTheme.NAUTICAL)

    async def _run():
        return [await generator.generate_map_tile(x, 100) for x in range(30)]

    contents = asyncio.run(_run())

    assert {content.tile.biome for content in contents} <= {Biome.LAKE, Biome.GRASSLAND, Biome.DESERT}
    assert all(content.theme == "nautical" for content in contents)


def test_add_to_cache_preloads_tile() -> None:
    service = ScriptedService()
    generator = _generator(service)
    preloaded = MapTile(id="9_9", x=9, z=9, biome=Biome.VILLAGE)
    generator.add_to_cache(preloaded)

    content = asyncio.run(generator.generate_map_tile(9, 9))

    assert content.tile is preloaded
    assert service.requests == []


def test_clear_cache_forces_regeneration() -> None:
    service = ScriptedService()
    generator = _generator(service)

    async def _run():
        await generator.generate_map_tile(0, 0)
        generator.clear_cache()
        assert generator.get_tile_info(0, 0) is None
        await generator.generate_map_tile(0, 0)

    asyncio.run(_run())

    assert len(service.requests) == 2


def test_malformed_coordinates_never_raise() -> None:
    generator = _generator()

    async def _run():
        return [
            await generator.generate_map_tile(2.7, -0.5),
            await generator.generate_map_tile("abc", None),
            await generator.generate_map_tile(float("nan"), float("inf")),
        ]

    floored, garbage, non_finite = asyncio.run(_run())

    assert floored.tile.id == "2_-1"
    assert garbage.tile.id == "0_0"
    assert non_finite.tile is garbage.tile


def test_neighbour_biomes_reads_cached_surroundings() -> None:
    generator = _generator()
    generator.add_to_cache(MapTile(id="0_1", x=0, z=1, biome=Biome.DESERT))
    generator.add_to_cache(MapTile(id="1_1", x=1, z=1, biome=Biome.RUINS))
    generator.add_to_cache(MapTile(id="5_5", x=5, z=5, biome=Biome.LAKE))

    assert sorted(b.value for b in generator.neighbour_biomes(0, 0)) == ["desert", "ruins"]


def test_boolean_coordinates_use_integer_tile_ids() -> None:
    generator = _generator()

    content = asyncio.run(generator.generate_map_tile(True, False))

    assert content.tile.id == "1_0"
    assert (content.tile.x, content.tile.z) == (1, 0)
    assert generator.get_tile_info(1, 0) is content.tile

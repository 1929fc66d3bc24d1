"""Tile cache and generation routing between the content service and procedural fallback."""

from __future__ import annotations

import asyncio
import logging
import math
from collections.abc import Sequence
from typing import Any

from grindworld.adapters.content_service import ContentService, TileRequest
from grindworld.models import Biome, GeneratedContent, MapTile, ScenarioTheme, tile_id

from .payload import content_from_payload
from .procedural import ProceduralTileGenerator
from .scenario import Scenario

CACHED_DESCRIPTION = "Previously generated tile"
CACHED_THEME = "cached"

NEIGHBOUR_OFFSETS = tuple((dx, dz) for dx in (-1, 0, 1) for dz in (-1, 0, 1) if (dx, dz) != (0, 0))


class WorldTileGenerator:
    """Produces map tiles keyed by grid coordinates, generating each one at most once.

    A coordinate moves from absent to generating to cached. Requests for a
    coordinate that is already generating await the same task. Any failure of
    the content service (error, timeout, malformed payload) is logged and the
    tile is produced procedurally instead, so generation never fails outward.
    """

    def __init__(
        self,
        *,
        content_service: ContentService | None = None,
        procedural: ProceduralTileGenerator | None = None,
        scenario: Scenario | None = None,
        timeout_seconds: float | None = 20.0,
        logger: logging.Logger | None = None,
    ) -> None:
        self._content_service = content_service
        self._procedural = procedural or ProceduralTileGenerator()
        self._scenario = scenario or Scenario()
        self._timeout_seconds = timeout_seconds
        self._logger = logger or logging.getLogger("grindworld.world")

        self._tiles: dict[str, MapTile] = {}
        self._in_flight: dict[str, asyncio.Task[GeneratedContent]] = {}
        self._epoch = 0

        if content_service is None:
            self._logger.warning("content_service_disabled", extra={"reason": "no credential configured"})

    @property
    def scenario(self) -> Scenario:
        return self._scenario

    @property
    def tile_size(self) -> float:
        return self._procedural.tile_size

    def set_scenario(self, prompt: str | None, theme: str | ScenarioTheme | None) -> Scenario:
        """Replace the scenario for all later generation; cached tiles are left untouched."""
        self._scenario = Scenario.from_values(prompt, theme)
        self._logger.info("scenario_set", extra={"theme": self._scenario.theme.value})
        return self._scenario

    async def generate_map_tile(
        self,
        x: Any,
        z: Any,
        nearby_biomes: Sequence[str | Biome] = (),
    ) -> GeneratedContent:
        x, z = _coerce_coordinate(x), _coerce_coordinate(z)
        key = tile_id(x, z)

        cached = self._tiles.get(key)
        if cached is not None:
            self._logger.debug("tile_cache_hit", extra={"tile_id": key})
            return GeneratedContent(tile=cached, description=CACHED_DESCRIPTION, theme=CACHED_THEME)

        task = self._in_flight.get(key)
        if task is None:
            task = asyncio.ensure_future(self._generate(x, z, list(nearby_biomes), self._scenario, self._epoch))
            self._in_flight[key] = task
            task.add_done_callback(lambda done, key=key: self._forget(key, done))
        else:
            self._logger.debug("tile_request_coalesced", extra={"tile_id": key})

        return await asyncio.shield(task)

    def _forget(self, key: str, task: asyncio.Task[GeneratedContent]) -> None:
        if self._in_flight.get(key) is task:
            del self._in_flight[key]

    async def _generate(
        self,
        x: int,
        z: int,
        nearby_biomes: list[str | Biome],
        scenario: Scenario,
        epoch: int,
    ) -> GeneratedContent:
        content: GeneratedContent | None = None
        if self._content_service is not None:
            content = await self._try_content_service(x, z, nearby_biomes, scenario)

        if content is None:
            content = self._procedural.generate(x, z, nearby_biomes, scenario)
            source = "procedural"
        else:
            source = "content_service"

        if epoch == self._epoch:
            self._tiles[content.tile.id] = content.tile
        self._logger.info(
            "tile_generated",
            extra={"tile_id": content.tile.id, "biome": content.tile.biome.value, "source": source},
        )
        return content

    async def _try_content_service(
        self,
        x: int,
        z: int,
        nearby_biomes: list[str | Biome],
        scenario: Scenario,
    ) -> GeneratedContent | None:
        request = TileRequest(
            x=x,
            z=z,
            distance_from_origin=math.hypot(x, z),
            tile_size=self.tile_size,
            nearby_biomes=[b.value if isinstance(b, Biome) else str(b) for b in nearby_biomes],
            scenario_prompt=scenario.prompt or None,
            scenario_theme=scenario.theme.value if scenario.active else None,
        )
        try:
            payload = await asyncio.wait_for(self._content_service.generate(request), timeout=self._timeout_seconds)
            return content_from_payload(x, z, payload)
        except asyncio.TimeoutError:
            self._logger.warning(
                "tile_generation_timeout",
                extra={"tile_id": tile_id(x, z), "timeout_seconds": self._timeout_seconds},
            )
        except Exception:  # noqa: BLE001 - every service failure routes to the fallback.
            self._logger.exception("tile_generation_failed", extra={"tile_id": tile_id(x, z)})
        return None

    def add_to_cache(self, tile: MapTile) -> None:
        self._tiles[tile.id] = tile

    def get_tile_info(self, x: Any, z: Any) -> MapTile | None:
        return self._tiles.get(tile_id(_coerce_coordinate(x), _coerce_coordinate(z)))

    def is_generating(self, x: int, z: int) -> bool:
        return tile_id(x, z) in self._in_flight

    def cached_tiles(self) -> list[MapTile]:
        return list(self._tiles.values())

    def neighbour_biomes(self, x: int, z: int) -> list[Biome]:
        """Biomes of the cached tiles surrounding ``(x, z)``."""
        biomes: list[Biome] = []
        for dx, dz in NEIGHBOUR_OFFSETS:
            tile = self._tiles.get(tile_id(x + dx, z + dz))
            if tile is not None:
                biomes.append(tile.biome)
        return biomes

    def clear_cache(self) -> None:
        self._tiles.clear()
        self._in_flight.clear()
        self._epoch += 1


def _coerce_coordinate(value: Any) -> int:
    """Floor numeric coordinates to grid integers; anything unusable maps to 0."""
    if isinstance(value, int):
        return int(value)
    try:
        return math.floor(float(value))
    except (TypeError, ValueError, OverflowError):
        logging.getLogger("grindworld.world").warning("malformed_coordinate", extra={"value": repr(value)})
        return 0

"""Generative content service boundary and its chat-completions implementation."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Protocol

import httpx

from grindworld.errors import ContentServiceError, ContentValidationError
from grindworld.models import Biome, ObjectType

SYSTEM_PROMPT = (
    "You are a creative game world generator. Generate diverse, interesting map tiles for a 3D "
    "walking game. Always respond with valid JSON matching the specified schema. Include interactive "
    "objects like chests, crates, plants, and other discoverable items that players can harvest or "
    "interact with."
)

_VECTOR_SCHEMA = {
    "type": "object",
    "properties": {"x": {"type": "number"}, "y": {"type": "number"}, "z": {"type": "number"}},
}

TILE_FUNCTION = {
    "name": "generate_map_tile",
    "description": "Generate a map tile with objects and biome information",
    "parameters": {
        "type": "object",
        "properties": {
            "biome": {
                "type": "string",
                "enum": [biome.value for biome in Biome],
                "description": "The biome type for this tile",
            },
            "objects": {
                "type": "array",
                "items": {
                    "type": "object",
                    "properties": {
                        "type": {"type": "string", "enum": [kind.value for kind in ObjectType]},
                        "position": _VECTOR_SCHEMA,
                        "scale": _VECTOR_SCHEMA,
                        "rotation": _VECTOR_SCHEMA,
                        "color": {"type": "string"},
                        "properties": {"type": "object"},
                    },
                    "required": ["type", "position", "scale", "rotation"],
                },
            },
            "description": {"type": "string", "description": "A brief description of this map tile"},
            "theme": {"type": "string", "description": "The overall theme or mood of this area"},
        },
        "required": ["biome", "objects", "description", "theme"],
    },
}


@dataclass(slots=True)
class TileRequest:
    """Everything the content service is told about a tile it should invent."""

    x: int
    z: int
    distance_from_origin: float
    tile_size: float
    nearby_biomes: list[str] = field(default_factory=list)
    scenario_prompt: str | None = None
    scenario_theme: str | None = None

    def bounds(self) -> tuple[float, float, float, float]:
        half = self.tile_size / 2
        return (
            self.x * self.tile_size - half,
            self.x * self.tile_size + half,
            self.z * self.tile_size - half,
            self.z * self.tile_size + half,
        )


class ContentService(Protocol):
    """Produces a raw ``{biome, objects, description, theme}`` payload for a tile."""

    async def generate(self, request: TileRequest) -> dict[str, Any]:
        """Return the decoded payload or raise on any failure."""


def build_prompt(request: TileRequest) -> str:
    min_x, max_x, min_z, max_z = request.bounds()
    lines = [
        f"Generate a creative and diverse map tile for coordinates ({request.x}, {request.z}).",
        f"Distance from origin: {request.distance_from_origin:.1f} units.",
    ]
    if request.nearby_biomes:
        lines.append(f"Nearby biomes: {', '.join(request.nearby_biomes)}")
    if request.scenario_prompt:
        lines.append(f"Scenario: {request.scenario_prompt}")
    if request.scenario_theme:
        lines.append(f"Theme: {request.scenario_theme}. Keep objects, NPCs and descriptions consistent with it.")
    lines.extend(
        [
            "",
            "Consider:",
            "- Include discoverable objects: chests (rare), crates (common), plants, mushrooms, crystals, "
            "fallen logs, berry bushes",
            "- Add scenic elements: wells, campfires, statues, fences, bridges, carts",
            "- Balance object density (4-10 objects per tile including interactive items)",
            "- Include 1-3 harvestable/interactive objects per tile for gameplay",
            "- Consider biome transitions and natural geography",
            "- Occasionally include NPCs in appropriate locations, with npcData in their properties",
            "",
            f"Position objects within tile bounds ({min_x} to {max_x}, {min_z} to {max_z})",
        ]
    )
    return "\n".join(lines)


class OpenAIContentService:
    """Calls an OpenAI-compatible chat completions endpoint with function calling."""

    def __init__(
        self,
        *,
        api_key: str,
        base_url: str = "https://api.openai.com/v1/chat/completions",
        model: str = "gpt-4o",
        temperature: float = 0.8,
        max_tokens: int = 1500,
        client: httpx.AsyncClient | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url
        self._model = model
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._client = client
        self._logger = logger or logging.getLogger("grindworld.content_service")

    def _body(self, request: TileRequest) -> dict[str, Any]:
        return {
            "model": self._model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": build_prompt(request)},
            ],
            "functions": [TILE_FUNCTION],
            "function_call": {"name": TILE_FUNCTION["name"]},
            "temperature": self._temperature,
            "max_tokens": self._max_tokens,
        }

    async def generate(self, request: TileRequest) -> dict[str, Any]:
        if not self._api_key:
            raise ContentServiceError("No content service credential configured")

        headers = {"Authorization": f"Bearer {self._api_key}", "Content-Type": "application/json"}
        try:
            if self._client is not None:
                response = await self._client.post(self._base_url, headers=headers, json=self._body(request))
            else:
                async with httpx.AsyncClient() as client:
                    response = await client.post(self._base_url, headers=headers, json=self._body(request))
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as exc:
            raise ContentServiceError(f"Content service request failed: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise ContentValidationError("Content service returned non-JSON body") from exc

        self._logger.debug("content_service_responded", extra={"x": request.x, "z": request.z})
        return self._extract_arguments(data)

    @staticmethod
    def _extract_arguments(data: Any) -> dict[str, Any]:
        try:
            function_call = data["choices"][0]["message"]["function_call"]
        except (KeyError, IndexError, TypeError) as exc:
            raise ContentValidationError("Response carries no function call") from exc

        if not isinstance(function_call, dict) or function_call.get("name") != TILE_FUNCTION["name"]:
            raise ContentValidationError("Invalid function call response")

        try:
            payload = json.loads(function_call.get("arguments") or "")
        except json.JSONDecodeError as exc:
            raise ContentValidationError("Function call arguments are not valid JSON") from exc

        if not isinstance(payload, dict):
            raise ContentValidationError("Function call arguments are not an object")
        return payload

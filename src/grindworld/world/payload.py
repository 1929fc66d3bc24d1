"""Validation of generative tile payloads into map tiles."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from grindworld.errors import ContentValidationError
from grindworld.models import Biome, GeneratedContent, MapObject, MapTile, ObjectType, Vector3, tile_id


class VectorPayload(BaseModel):
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def to_vector(self) -> Vector3:
        return Vector3(self.x, self.y, self.z)


class ObjectPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    type: ObjectType
    position: VectorPayload
    scale: VectorPayload | None = None
    rotation: VectorPayload | None = None
    color: str | None = None
    properties: dict[str, Any] | None = None

    def to_map_object(self) -> MapObject:
        return MapObject(
            type=self.type,
            position=self.position.to_vector(),
            scale=self.scale.to_vector() if self.scale else Vector3(1.0, 1.0, 1.0),
            rotation=self.rotation.to_vector() if self.rotation else Vector3(),
            color=self.color,
            properties=dict(self.properties or {}),
        )


class TilePayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    biome: Biome
    objects: list[ObjectPayload] = Field(min_length=1)
    description: str
    theme: str


def content_from_payload(x: int, z: int, payload: Any) -> GeneratedContent:
    """Convert a raw service payload 1:1 into generated content, or raise ``ContentValidationError``."""
    try:
        parsed = TilePayload.model_validate(payload)
    except ValidationError as exc:
        raise ContentValidationError(f"Malformed tile payload ({exc.error_count()} errors)") from exc

    tile = MapTile(
        id=tile_id(x, z),
        x=x,
        z=z,
        biome=parsed.biome,
        objects=[obj.to_map_object() for obj in parsed.objects],
        generated=True,
    )
    return GeneratedContent(tile=tile, description=parsed.description, theme=parsed.theme)

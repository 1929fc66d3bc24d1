"""Runtime configuration for grindworld."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-driven runtime settings."""

    model_config = SettingsConfigDict(env_prefix="GRINDWORLD_", env_file=".env", extra="ignore")

    app_name: str = "grindworld"
    log_level: str = "INFO"
    content_service_api_key: str = Field(
        default="",
        description="Credential for the generative content service; empty disables it.",
    )
    content_service_url: str = "https://api.openai.com/v1/chat/completions"
    content_service_model: str = "gpt-4o"
    content_service_temperature: float = 0.8
    content_service_max_tokens: int = 1500
    generation_timeout_seconds: float = Field(default=20.0, gt=0)
    tile_size: float = Field(default=25.0, gt=0)
    npc_spawn_chance: float = Field(default=0.1, ge=0.0, le=1.0)
    biome_continuity_chance: float = Field(default=0.7, ge=0.0, le=1.0)
    random_seed: int | None = None


settings = Settings()

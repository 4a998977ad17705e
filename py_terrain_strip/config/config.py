from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings pulled from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="TERRAIN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # API Configuration
    api_host: str = Field(default="0.0.0.0", description="API host")
    api_port: int = Field(default=8000, description="API port")
    debug: bool = Field(default=False, description="Enable debug mode")

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="json", description="Logging format (e.g., plain, json)")

    # Terrain Generation Configuration
    default_terrain_width: int = Field(default=100, description="Default terrain width in units")
    default_resolution: int = Field(default=2, description="Default samples per unit")
    max_terrain_width: int = Field(default=5000, description="Max allowed terrain width")
    max_resolution: int = Field(default=64, description="Max allowed samples per unit")
    default_preset: str = Field(default="default", description="Preset used when a request names none")


# Instantiate singleton settings object
settings = Settings()

"""
Terrain preset data model.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class TerrainMethodType(str, Enum):
    """Synthesis methods available to the heightmap generator."""

    ROCKY_MOUNTAINS = "rocky_mountains"
    ROLLING_HILLS = "rolling_hills"


class TerrainPreset(BaseModel):
    """
    Parameters for one heightmap generation.

    Value ranges are checked by the generator, which raises
    ``InvalidConfiguration`` rather than a pydantic validation error.
    """

    model_config = ConfigDict(frozen=True)

    terrain_type: TerrainMethodType = Field(
        default=TerrainMethodType.ROCKY_MOUNTAINS, description="Synthesis method"
    )
    roughness: float = Field(default=0.0, description="How rough the terrain will be")
    smoothing_factor: float = Field(
        default=2.0, description="Roughness divisor applied per subdivision level"
    )
    feature_count: int = Field(default=0, description="How many hills the terrain will have")
    absolute_min_height: float = Field(default=5.0, description="Lower bound of the height band")
    absolute_max_height: float = Field(default=75.0, description="Upper bound of the height band")

    @property
    def middle_height(self) -> float:
        """Centre of the configured height band."""
        return (self.absolute_min_height + self.absolute_max_height) / 2

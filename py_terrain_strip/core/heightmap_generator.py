"""
Heightmap generation module for terrain strips.

A heightmap is a 1D array of elevation samples. Generation always runs in
the same order: validate, draw the two endpoints, run the selected
synthesis method over the interior, then recentre the result on the
preset's height band. Given the same generator state the output is
identical, so a seed reproduces a terrain exactly.
"""

import math
import numbers
from typing import Optional

import numpy as np
import structlog

from ..utils.random import Seed, make_rng
from .exceptions import InvalidConfiguration
from .presets import TerrainPreset
from .synthesis import SynthesisMethod, get_synthesis_method

logger = structlog.get_logger()


def heightmap_length(terrain_width: int, resolution: int) -> int:
    """Number of samples for a strip ``terrain_width`` units wide."""
    return terrain_width * resolution + 1


def validate_dimensions(terrain_width: int, resolution: int) -> None:
    """
    Check the strip dimensions.

    Raises:
        InvalidConfiguration: If either dimension is not a positive integer
    """
    for name, value in (("terrain_width", terrain_width), ("resolution", resolution)):
        if isinstance(value, bool) or not isinstance(value, numbers.Integral):
            raise InvalidConfiguration(f"{name} must be an integer, got {value!r}")
        if value <= 0:
            raise InvalidConfiguration(f"{name} must be positive, got {value}")


def validate_preset(preset: TerrainPreset) -> SynthesisMethod:
    """
    Check the preset and build its synthesis method.

    Returns:
        Synthesis method ready to run

    Raises:
        InvalidConfiguration: If the height band is inverted, a value is not
            finite or method parameters are out of range
    """
    for name in ("absolute_min_height", "absolute_max_height", "roughness"):
        value = getattr(preset, name)
        if not math.isfinite(value):
            raise InvalidConfiguration(f"{name} must be finite, got {value}")

    if preset.absolute_min_height > preset.absolute_max_height:
        raise InvalidConfiguration(
            "absolute_min_height must not exceed absolute_max_height "
            f"({preset.absolute_min_height} > {preset.absolute_max_height})"
        )
    return get_synthesis_method(preset)


def normalize_heights(heights: np.ndarray, preset: TerrainPreset) -> np.ndarray:
    """
    Shift ``heights`` so their range is centred on the height band.

    Samples are not clamped; only the midpoint of their range moves. The
    running lowest/highest values start from the opposite band limits.
    A float64 array is shifted in place; anything else is converted first.

    Returns:
        The shifted float64 array
    """
    heights = np.asarray(heights, dtype=np.float64)
    lowest = min(preset.absolute_max_height, float(np.min(heights)))
    highest = max(preset.absolute_min_height, float(np.max(heights)))

    adjustment = preset.middle_height - (lowest + highest) / 2
    heights += adjustment
    return heights


class HeightmapGenerator:
    """
    Generates terrain heightmaps from presets.

    The generator owns one random source. Pass an explicit ``rng`` to share
    a stream between calls, or a ``seed`` to create one.
    """

    def __init__(
        self,
        rng: Optional[np.random.Generator] = None,
        seed: Optional[Seed] = None,
    ):
        """
        Initialize the heightmap generator.

        Args:
            rng: Optional numpy Generator used for every random draw
            seed: Optional seed used when ``rng`` is not given
        """
        self.seed = seed
        self.rng = rng if rng is not None else make_rng(seed)

    def generate(
        self, terrain_width: int, resolution: int, preset: TerrainPreset
    ) -> np.ndarray:
        """
        Generate a heightmap.

        Args:
            terrain_width: How many units wide the terrain will be
            resolution: How many samples per unit
            preset: Terrain parameters

        Returns:
            float64 array of ``terrain_width * resolution + 1`` heights

        Raises:
            InvalidConfiguration: If any parameter is out of range
        """
        try:
            validate_dimensions(terrain_width, resolution)
            method = validate_preset(preset)
        except InvalidConfiguration as e:
            logger.warning("Rejected terrain configuration", error=str(e))
            raise

        heights = np.zeros(heightmap_length(terrain_width, resolution), dtype=np.float64)
        heights[0] = self.rng.uniform(preset.absolute_min_height, preset.absolute_max_height)
        heights[-1] = self.rng.uniform(preset.absolute_min_height, preset.absolute_max_height)

        method.apply(heights, self.rng)
        normalize_heights(heights, preset)

        logger.debug(
            "Heightmap generated",
            terrain_type=preset.terrain_type.value,
            samples=len(heights),
            min_height=float(heights.min()),
            max_height=float(heights.max()),
        )
        return heights


def generate_heightmap(
    terrain_width: int,
    resolution: int,
    preset: TerrainPreset,
    rng: Optional[np.random.Generator] = None,
    seed: Optional[Seed] = None,
) -> np.ndarray:
    """Generate a heightmap with a one-off ``HeightmapGenerator``."""
    return HeightmapGenerator(rng=rng, seed=seed).generate(terrain_width, resolution, preset)

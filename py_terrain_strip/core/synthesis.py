"""
Heightmap synthesis methods.

Each method fills the interior of a heightmap whose two endpoints have
already been set. Methods are selected by ``TerrainMethodType`` through
``SYNTHESIS_METHODS``; every method carries only the preset fields it uses.
"""

import math
from dataclasses import dataclass
from typing import ClassVar, Dict, MutableSequence, Type, Union

import numpy as np
import structlog

from .exceptions import InvalidConfiguration
from .presets import TerrainMethodType, TerrainPreset

logger = structlog.get_logger()


def cosine_interpolate(
    start: Union[float, np.ndarray],
    end: Union[float, np.ndarray],
    percentage: Union[float, np.ndarray],
) -> Union[float, np.ndarray]:
    """Blend ``start`` into ``end`` with a cosine ease; works on arrays too."""
    eased = (1 - np.cos(percentage * math.pi)) / 2
    return start * (1 - eased) + end * eased


@dataclass(frozen=True)
class SynthesisMethod:
    """Base class for synthesis methods."""

    method_type: ClassVar[TerrainMethodType]

    @classmethod
    def from_preset(cls, preset: TerrainPreset) -> "SynthesisMethod":
        raise NotImplementedError

    def apply(self, heights: MutableSequence[float], rng: np.random.Generator) -> None:
        raise NotImplementedError


@dataclass(frozen=True)
class RockyMountains(SynthesisMethod):
    """
    Recursive midpoint displacement.

    The midpoint of every span is set to the average of the span's ends
    plus a random offset in ``[-roughness, roughness]``; the roughness is
    divided by ``smoothing_factor`` at each level of recursion. Which
    indices get written depends only on the heightmap length, each
    interior index exactly once.
    """

    method_type: ClassVar[TerrainMethodType] = TerrainMethodType.ROCKY_MOUNTAINS

    roughness: float
    smoothing_factor: float

    @classmethod
    def from_preset(cls, preset: TerrainPreset) -> "RockyMountains":
        if not math.isfinite(preset.smoothing_factor) or preset.smoothing_factor <= 0:
            raise InvalidConfiguration(
                f"smoothing_factor must be positive and finite, got {preset.smoothing_factor}"
            )
        if preset.smoothing_factor <= 1:
            logger.warning(
                "Roughness will not decay with depth",
                smoothing_factor=preset.smoothing_factor,
            )
        return cls(roughness=preset.roughness, smoothing_factor=preset.smoothing_factor)

    def apply(self, heights: MutableSequence[float], rng: np.random.Generator) -> None:
        self._subdivide(heights, 0, len(heights) - 1, self.roughness, rng)

    def _subdivide(
        self,
        heights: MutableSequence[float],
        start: int,
        end: int,
        roughness: float,
        rng: np.random.Generator,
    ) -> None:
        mid = (start + end) // 2
        if mid == start:
            return

        mid_height = (heights[start] + heights[end]) / 2
        heights[mid] = mid_height + rng.uniform(-roughness, roughness)

        roughness = roughness / self.smoothing_factor
        self._subdivide(heights, start, mid, roughness, rng)
        self._subdivide(heights, mid, end, roughness, rng)


@dataclass(frozen=True)
class RollingHills(SynthesisMethod):
    """
    Evenly spaced hills joined by cosine interpolation.

    ``feature_count`` control points are placed every
    ``(n - 1) // (feature_count + 1)`` samples and displaced around the
    average of the two endpoints. Every other interior sample is eased
    between the nearest control point at or before it and the next one.
    """

    method_type: ClassVar[TerrainMethodType] = TerrainMethodType.ROLLING_HILLS

    roughness: float
    feature_count: int

    @classmethod
    def from_preset(cls, preset: TerrainPreset) -> "RollingHills":
        if preset.feature_count < 0:
            raise InvalidConfiguration(
                f"feature_count must not be negative, got {preset.feature_count}"
            )
        return cls(roughness=preset.roughness, feature_count=preset.feature_count)

    def hill_locations(self, length: int) -> np.ndarray:
        """Control indices for a heightmap of ``length`` samples, endpoints included."""
        feature_count = min(self.feature_count, max(length - 2, 0))
        if feature_count != self.feature_count:
            logger.info(
                "Clamped feature count to available samples",
                requested=self.feature_count,
                used=feature_count,
            )

        distance = (length - 1) // (feature_count + 1)
        interior = distance * np.arange(1, feature_count + 1)
        return np.concatenate(([0], interior, [length - 1])).astype(np.int64)

    def apply(self, heights: MutableSequence[float], rng: np.random.Generator) -> None:
        length = len(heights)
        mid_height = (heights[0] + heights[length - 1]) / 2
        locations = self.hill_locations(length)

        for location in locations[1:-1]:
            heights[location] = mid_height + rng.uniform(-self.roughness, self.roughness)

        if length < 3:
            return

        # The left anchor of sample i is the last control index <= i
        positions = np.arange(1, length - 1)
        next_hill = np.searchsorted(locations, positions, side="right")
        left = locations[next_hill - 1]
        right = locations[next_hill]

        anchors = np.asarray([heights[k] for k in locations], dtype=np.float64)
        left_heights = anchors[next_hill - 1]
        right_heights = anchors[next_hill]

        values = cosine_interpolate(left_heights, right_heights, (positions - left) / (right - left))
        for position, value in zip(positions, values):
            heights[position] = value


SYNTHESIS_METHODS: Dict[TerrainMethodType, Type[SynthesisMethod]] = {
    method.method_type: method for method in (RockyMountains, RollingHills)
}


def get_synthesis_method(preset: TerrainPreset) -> SynthesisMethod:
    """
    Build the synthesis method named by ``preset.terrain_type``.

    Raises:
        InvalidConfiguration: If the method is unknown or its parameters are invalid
    """
    try:
        method = SYNTHESIS_METHODS[TerrainMethodType(preset.terrain_type)]
    except (KeyError, ValueError):
        raise InvalidConfiguration(f"Unknown terrain type: {preset.terrain_type!r}") from None
    return method.from_preset(preset)

"""Shared fixtures for terrain strip tests."""

import numpy as np
import pytest

from py_terrain_strip.core.presets import TerrainMethodType, TerrainPreset


@pytest.fixture
def rng():
    """Seeded generator so every test sees the same stream."""
    return np.random.default_rng(12345)


@pytest.fixture
def mountains_preset():
    return TerrainPreset(
        terrain_type=TerrainMethodType.ROCKY_MOUNTAINS,
        roughness=30.0,
        smoothing_factor=2.0,
        absolute_min_height=5.0,
        absolute_max_height=75.0,
    )


@pytest.fixture
def hills_preset():
    return TerrainPreset(
        terrain_type=TerrainMethodType.ROLLING_HILLS,
        roughness=15.0,
        feature_count=4,
        absolute_min_height=5.0,
        absolute_max_height=40.0,
    )

"""
Tests for the named preset catalogue.
"""

import numpy as np
import pytest
from pydantic import ValidationError

from py_terrain_strip.config import get_preset, list_presets, PRESETS
from py_terrain_strip.config.config import Settings
from py_terrain_strip.core.exceptions import InvalidConfiguration
from py_terrain_strip.core.heightmap_generator import generate_heightmap
from py_terrain_strip.core.presets import TerrainMethodType, TerrainPreset


class TestTerrainPresets:

    def test_list_presets(self):
        names = list_presets()
        assert "default" in names
        assert "rocky_mountains" in names
        assert "rolling_hills" in names
        assert len(names) == len(PRESETS)

    def test_default_matches_component_defaults(self):
        assert get_preset("default") == TerrainPreset()

    def test_unknown_preset(self):
        with pytest.raises(InvalidConfiguration, match="Available presets"):
            get_preset("volcano")

    @pytest.mark.parametrize("name", list(PRESETS))
    def test_every_preset_generates(self, name):
        preset = get_preset(name)
        heights = generate_heightmap(40, 2, preset, seed=name)

        assert len(heights) == 81
        assert np.all(np.isfinite(heights))
        assert (heights.min() + heights.max()) / 2 == pytest.approx(preset.middle_height)

    def test_presets_are_frozen(self):
        preset = get_preset("rolling_hills")
        assert preset.terrain_type == TerrainMethodType.ROLLING_HILLS
        with pytest.raises(ValidationError):
            preset.roughness = 1.0


class TestSettings:

    def test_defaults(self):
        settings = Settings(_env_file=None)
        assert settings.default_resolution == 2
        assert settings.default_preset in PRESETS

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("TERRAIN_DEFAULT_TERRAIN_WIDTH", "250")
        monkeypatch.setenv("TERRAIN_LOG_FORMAT", "plain")

        settings = Settings(_env_file=None)

        assert settings.default_terrain_width == 250
        assert settings.log_format == "plain"

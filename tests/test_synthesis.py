"""
Tests for the heightmap synthesis methods.
"""

import math
from collections import Counter

import numpy as np
import pytest
import structlog
from structlog.testing import capture_logs

from py_terrain_strip.core import synthesis
from py_terrain_strip.core.exceptions import InvalidConfiguration
from py_terrain_strip.core.presets import TerrainMethodType, TerrainPreset
from py_terrain_strip.core.synthesis import (
    SYNTHESIS_METHODS,
    RockyMountains,
    RollingHills,
    cosine_interpolate,
    get_synthesis_method,
)


class RecordingHeights(list):
    """List that counts how often each index is assigned."""

    def __init__(self, values):
        super().__init__(values)
        self.writes = Counter()

    def __setitem__(self, index, value):
        self.writes[index] += 1
        super().__setitem__(index, value)


def _math_cosine(start, end, percentage):
    eased = (1 - math.cos(percentage * math.pi)) / 2
    return start * (1 - eased) + end * eased


class TestCosineInterpolate:

    def test_endpoints(self):
        assert cosine_interpolate(3.0, 9.0, 0.0) == 3.0
        assert cosine_interpolate(3.0, 9.0, 1.0) == pytest.approx(9.0)

    def test_halfway(self):
        assert cosine_interpolate(0.0, 10.0, 0.5) == pytest.approx(5.0)

    def test_eases_in(self):
        """Cosine easing starts slower than a straight line."""
        assert cosine_interpolate(0.0, 10.0, 0.25) < 2.5


class TestDispatch:

    def test_every_method_type_registered(self):
        assert set(SYNTHESIS_METHODS) == set(TerrainMethodType)

    def test_preset_selects_method(self, mountains_preset, hills_preset):
        rocky = get_synthesis_method(mountains_preset)
        hills = get_synthesis_method(hills_preset)

        assert isinstance(rocky, RockyMountains)
        assert rocky.roughness == mountains_preset.roughness
        assert rocky.smoothing_factor == mountains_preset.smoothing_factor
        assert isinstance(hills, RollingHills)
        assert hills.feature_count == hills_preset.feature_count

    def test_string_terrain_type(self):
        preset = TerrainPreset(terrain_type="rolling_hills")
        assert isinstance(get_synthesis_method(preset), RollingHills)

    def test_unknown_terrain_type(self):
        preset = TerrainPreset.model_construct(terrain_type="volcano")

        with pytest.raises(InvalidConfiguration, match="volcano") as excinfo:
            get_synthesis_method(preset)

        assert excinfo.value.__cause__ is None
        assert excinfo.value.__suppress_context__


class TestRockyMountains:

    @pytest.mark.parametrize("length", list(range(2, 40)) + [65, 129, 201])
    def test_interior_written_exactly_once(self, length, rng):
        heights = RecordingHeights([0.0] * length)

        RockyMountains(roughness=10.0, smoothing_factor=2.0).apply(heights, rng)

        assert 0 not in heights.writes
        assert length - 1 not in heights.writes
        assert set(heights.writes) == set(range(1, length - 1))
        assert all(count == 1 for count in heights.writes.values())

    def test_zero_roughness_is_linear(self, rng):
        """Without displacement every midpoint is the average of its span."""
        heights = np.zeros(17)
        heights[0], heights[-1] = 0.0, 16.0

        RockyMountains(roughness=0.0, smoothing_factor=2.0).apply(heights, rng)

        np.testing.assert_allclose(heights, np.arange(17, dtype=float))

    def test_first_midpoint_displacement(self):
        heights = np.zeros(9)
        heights[0], heights[-1] = 10.0, 20.0

        RockyMountains(roughness=4.0, smoothing_factor=2.0).apply(heights, np.random.default_rng(5))

        offset = np.random.default_rng(5).uniform(-4.0, 4.0)
        assert heights[4] == pytest.approx(15.0 + offset)
        assert abs(heights[4] - 15.0) <= 4.0

    def test_roughness_decays(self):
        """Deeper midpoints stray less from their span average."""
        length = 1025
        heights = np.zeros(length)

        RockyMountains(roughness=100.0, smoothing_factor=2.0).apply(heights, np.random.default_rng(0))

        # Odd indices are the deepest level, displaced by at most 100 / 2**9
        odd = np.arange(1, length - 1, 2)
        deviation = np.abs(heights[odd] - (heights[odd - 1] + heights[odd + 1]) / 2)
        assert deviation.max() <= 100.0 / 2 ** 9 + 1e-9

    def test_weak_smoothing_accepted(self, monkeypatch):
        preset = TerrainPreset(smoothing_factor=0.5, roughness=1.0)

        with capture_logs() as logs:
            monkeypatch.setattr(synthesis, "logger", structlog.get_logger())
            method = RockyMountains.from_preset(preset)

        assert method.smoothing_factor == 0.5
        warnings = [log for log in logs if log["event"] == "Roughness will not decay with depth"]
        assert len(warnings) == 1
        assert warnings[0]["log_level"] == "warning"
        assert warnings[0]["smoothing_factor"] == 0.5

    def test_zero_smoothing_rejected(self):
        with pytest.raises(InvalidConfiguration):
            RockyMountains.from_preset(TerrainPreset(smoothing_factor=0.0))


class TestRollingHills:

    def test_no_features_is_pure_cosine(self):
        heights = np.zeros(11)
        heights[0], heights[-1] = 3.0, 9.0
        rng = np.random.default_rng(11)
        state = rng.bit_generator.state

        RollingHills(roughness=25.0, feature_count=0).apply(heights, rng)

        assert rng.bit_generator.state == state
        expected = [_math_cosine(3.0, 9.0, i / 10) for i in range(11)]
        np.testing.assert_allclose(heights, expected, rtol=1e-12)
        assert heights[0] == 3.0
        assert heights[-1] == 9.0

    def test_no_features_matches_vectorised_interpolation(self):
        heights = np.zeros(21)
        heights[0], heights[-1] = -4.0, 12.0

        RollingHills(roughness=5.0, feature_count=0).apply(heights, np.random.default_rng(0))

        positions = np.arange(1, 20)
        expected = cosine_interpolate(np.full(19, -4.0), np.full(19, 12.0), positions / 20)
        np.testing.assert_array_equal(heights[1:-1], expected)

    def test_hill_locations(self):
        method = RollingHills(roughness=1.0, feature_count=3)
        np.testing.assert_array_equal(method.hill_locations(11), [0, 2, 4, 6, 10])

    def test_hill_locations_clamped(self):
        method = RollingHills(roughness=1.0, feature_count=10)
        np.testing.assert_array_equal(method.hill_locations(5), [0, 1, 2, 3, 4])

    def test_hills_keep_their_heights(self):
        heights = np.zeros(21)
        heights[0], heights[-1] = 10.0, 30.0
        method = RollingHills(roughness=5.0, feature_count=3)

        method.apply(heights, np.random.default_rng(8))

        reference = np.random.default_rng(8)
        for location in method.hill_locations(21)[1:-1]:
            assert heights[location] == pytest.approx(20.0 + reference.uniform(-5.0, 5.0))
            assert abs(heights[location] - 20.0) <= 5.0

    def test_samples_between_anchors(self):
        """Cosine easing never overshoots the surrounding control points."""
        heights = np.zeros(101)
        heights[0], heights[-1] = 0.0, 50.0
        method = RollingHills(roughness=20.0, feature_count=5)

        method.apply(heights, np.random.default_rng(21))

        locations = method.hill_locations(101)
        for a, b in zip(locations[:-1], locations[1:]):
            low, high = sorted((heights[a], heights[b]))
            segment = heights[a:b + 1]
            assert segment.min() >= low - 1e-9
            assert segment.max() <= high + 1e-9

    def test_two_samples_untouched(self, rng):
        heights = np.array([1.0, 2.0])
        RollingHills(roughness=5.0, feature_count=3).apply(heights, rng)
        np.testing.assert_array_equal(heights, [1.0, 2.0])

    def test_negative_feature_count_rejected(self):
        preset = TerrainPreset(terrain_type=TerrainMethodType.ROLLING_HILLS, feature_count=-2)
        with pytest.raises(InvalidConfiguration):
            RollingHills.from_preset(preset)

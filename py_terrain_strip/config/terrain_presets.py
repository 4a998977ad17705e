"""
Named terrain presets.

Each preset is a plain parameter dictionary so the catalogue can be listed
or serialised without building models.
"""

from typing import Any, Dict, List

from ..core.exceptions import InvalidConfiguration
from ..core.presets import TerrainMethodType, TerrainPreset

PRESETS: Dict[str, Dict[str, Any]] = {
    # Component defaults: no displacement, halving per level, band 5-75
    "default": {
        "terrain_type": TerrainMethodType.ROCKY_MOUNTAINS,
        "roughness": 0.0,
        "smoothing_factor": 2.0,
        "feature_count": 0,
        "absolute_min_height": 5.0,
        "absolute_max_height": 75.0,
    },
    "rocky_mountains": {
        "terrain_type": TerrainMethodType.ROCKY_MOUNTAINS,
        "roughness": 40.0,
        "smoothing_factor": 2.0,
        "feature_count": 0,
        "absolute_min_height": 5.0,
        "absolute_max_height": 75.0,
    },
    "jagged_peaks": {
        "terrain_type": TerrainMethodType.ROCKY_MOUNTAINS,
        "roughness": 60.0,
        "smoothing_factor": 1.6,
        "feature_count": 0,
        "absolute_min_height": 10.0,
        "absolute_max_height": 90.0,
    },
    "rolling_hills": {
        "terrain_type": TerrainMethodType.ROLLING_HILLS,
        "roughness": 20.0,
        "smoothing_factor": 2.0,
        "feature_count": 6,
        "absolute_min_height": 5.0,
        "absolute_max_height": 40.0,
    },
    "gentle_plains": {
        "terrain_type": TerrainMethodType.ROLLING_HILLS,
        "roughness": 4.0,
        "smoothing_factor": 2.0,
        "feature_count": 3,
        "absolute_min_height": 5.0,
        "absolute_max_height": 20.0,
    },
    "flat": {
        "terrain_type": TerrainMethodType.ROLLING_HILLS,
        "roughness": 0.0,
        "smoothing_factor": 2.0,
        "feature_count": 0,
        "absolute_min_height": 10.0,
        "absolute_max_height": 10.0,
    },
}


def list_presets() -> List[str]:
    """Get the names of all available presets."""
    return list(PRESETS.keys())


def get_preset(name: str) -> TerrainPreset:
    """
    Get a preset by name.

    Raises:
        InvalidConfiguration: If no preset has that name
    """
    if name not in PRESETS:
        raise InvalidConfiguration(
            f"Unknown preset '{name}'. Available presets: {', '.join(list_presets())}"
        )
    return TerrainPreset(**PRESETS[name])

#!/usr/bin/env python3
"""
Simple demo script showing terrain strip generation.
"""

import logging
import sys
from pathlib import Path

import numpy as np
import structlog
from py_terrain_strip.config import get_preset, list_presets
from py_terrain_strip.core import HeightmapGenerator, build_terrain_mesh, create_collider_points
from py_terrain_strip.export import export_obj


def main():
    """Demonstrate terrain strip generation."""
    # Generator debug events stay hidden
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(logging.INFO))

    print("Terrain Strip Generation Demo")
    print("=" * 40)

    terrain_width, resolution = 100, 2
    output_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else None

    for preset_name in list_presets():
        print(f"\n{preset_name.upper()} Preset:")
        print("-" * 30)

        preset = get_preset(preset_name)
        heights = HeightmapGenerator(seed=f"{preset_name}_demo").generate(
            terrain_width, resolution, preset
        )
        mesh = build_terrain_mesh(heights, resolution, terrain_width)

        print(f"  Samples: {len(heights)}")
        print(f"  Vertices: {mesh.vertex_count}, triangles: {mesh.triangle_count}")
        print(f"  Height range: {heights.min():.1f}-{heights.max():.1f}")
        print(f"  Band: {preset.absolute_min_height}-{preset.absolute_max_height}")
        print(f"  Collider points: {len(create_collider_points(mesh))}")

        # Coarse profile, one column per 5 units
        profile = heights[:: resolution * 5]
        top = max(np.max(profile), 1.0)
        rows = 8
        for row in range(rows, 0, -1):
            line = "".join("#" if h >= top * row / rows else " " for h in profile)
            print(f"    |{line}")

        if output_dir is not None:
            path = export_obj(mesh, output_dir / f"{preset_name}.obj")
            print(f"  Written: {path}")


if __name__ == "__main__":
    main()

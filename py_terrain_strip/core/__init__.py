"""
Core terrain generation functionality.
"""

from .exceptions import InvalidConfiguration
from .presets import TerrainMethodType, TerrainPreset
from .synthesis import RockyMountains, RollingHills, SYNTHESIS_METHODS, cosine_interpolate
from .heightmap_generator import HeightmapGenerator, generate_heightmap, normalize_heights
from .mesh_builder import (
    TerrainMesh,
    build_terrain_mesh,
    create_collider_points,
    generate_terrain_mesh,
    triangulate,
)

__all__ = ['InvalidConfiguration', 'TerrainMethodType', 'TerrainPreset',
           'RockyMountains', 'RollingHills', 'SYNTHESIS_METHODS', 'cosine_interpolate',
           'HeightmapGenerator', 'generate_heightmap', 'normalize_heights',
           'TerrainMesh', 'build_terrain_mesh', 'create_collider_points',
           'generate_terrain_mesh', 'triangulate']

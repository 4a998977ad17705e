"""
Mesh construction for terrain strips.

A heightmap of ``n`` samples becomes a strip of ``2n`` vertices: for every
sample a top vertex at the sample's height and a ground vertex at zero,
interleaved top/ground. Consecutive pairs form quads, each split into two
triangles. Meshing is deterministic; only heightmap generation is random.
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np
import structlog

from ..utils.random import Seed
from .exceptions import InvalidConfiguration
from .heightmap_generator import generate_heightmap
from .presets import TerrainPreset

logger = structlog.get_logger()


def _read_only(array: np.ndarray) -> np.ndarray:
    array.setflags(write=False)
    return array


@dataclass(frozen=True)
class TerrainMesh:
    """Raw mesh buffers for a terrain strip."""

    vertices: np.ndarray
    uv: np.ndarray
    uv2: np.ndarray
    triangles: np.ndarray

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    @property
    def triangle_count(self) -> int:
        return len(self.triangles) // 3


def create_terrain_vertices(heights: np.ndarray, resolution: float) -> np.ndarray:
    """
    Create a top and a ground vertex for each sample.

    Args:
        heights: Heightmap samples
        resolution: Samples per unit, clamped to at least 1

    Returns:
        ``(2n, 3)`` array of ``(x, y, 0)`` positions
    """
    resolution = max(1, resolution)
    heights = np.asarray(heights, dtype=np.float64)
    x = np.arange(len(heights)) / resolution

    vertices = np.zeros((len(heights) * 2, 3), dtype=np.float64)
    vertices[0::2, 0] = x
    vertices[0::2, 1] = heights
    vertices[1::2, 0] = x
    return vertices


def generate_terrain_uv(heights: np.ndarray, terrain_width: float) -> np.ndarray:
    """
    World-scale UVs.

    U runs 0..1 across the strip; V of a top vertex is its height divided by
    the terrain width, V of a ground vertex is 0.
    """
    heights = np.asarray(heights, dtype=np.float64)
    tex_size = len(heights) - 1.0
    u = np.arange(len(heights)) / tex_size

    uv = np.zeros((len(heights) * 2, 2), dtype=np.float64)
    uv[0::2, 0] = u
    uv[0::2, 1] = heights / terrain_width
    uv[1::2, 0] = u
    return uv


def generate_terrain_uv2(heights: np.ndarray, resolution: float) -> np.ndarray:
    """
    Band UVs used for gradient shading.

    V is 1 along the top edge. At the ground it sits as far below 1 as the
    terrain is high relative to its width: a strip 100 units wide gives 1
    for height 0, 0 for height 100 and -1 for height 200. Values outside
    ``[0, 1]`` are kept; clamping is left to the shader.
    """
    resolution = max(1, resolution)
    heights = np.asarray(heights, dtype=np.float64)
    tex_size = len(heights) - 1.0
    u = np.arange(len(heights)) / tex_size

    uv = np.zeros((len(heights) * 2, 2), dtype=np.float64)
    uv[0::2, 0] = u
    uv[0::2, 1] = 1.0
    uv[1::2, 0] = u
    uv[1::2, 1] = ((heights * resolution) - tex_size) / -tex_size
    return uv


def triangulate(count: int) -> np.ndarray:
    """
    Index buffer for a strip of ``count`` interleaved vertices.

    Every group of four vertices ``i..i+3`` gives the triangles
    ``(i, i+3, i+1)`` and ``(i+3, i, i+2)``.

    Returns:
        int32 array of ``(count - 2) * 3`` indices, empty below 4 vertices
    """
    starts = np.arange(0, max(count - 3, 0), 2, dtype=np.int32)
    quads = np.stack(
        [starts, starts + 3, starts + 1, starts + 3, starts, starts + 2], axis=1
    )
    return quads.reshape(-1).astype(np.int32)


def build_terrain_mesh(
    heights: np.ndarray, resolution: int, terrain_width: Optional[float] = None
) -> TerrainMesh:
    """
    Build the mesh for a heightmap.

    Args:
        heights: Heightmap samples, at least two
        resolution: Samples per unit, clamped to at least 1
        terrain_width: Width used for UV scaling; defaults to ``(n - 1) / resolution``

    Returns:
        TerrainMesh with read-only buffers

    Raises:
        InvalidConfiguration: If the heightmap has fewer than two samples or
            terrain_width is not positive
    """
    heights = np.asarray(heights, dtype=np.float64)
    if heights.ndim != 1 or len(heights) < 2:
        raise InvalidConfiguration(
            f"Heightmap needs at least two samples, got shape {heights.shape}"
        )

    resolution = max(1, resolution)
    if terrain_width is None:
        terrain_width = (len(heights) - 1) / resolution
    elif not terrain_width > 0:
        raise InvalidConfiguration(f"terrain_width must be positive, got {terrain_width}")

    vertices = create_terrain_vertices(heights, resolution)
    mesh = TerrainMesh(
        vertices=_read_only(vertices),
        uv=_read_only(generate_terrain_uv(heights, terrain_width)),
        uv2=_read_only(generate_terrain_uv2(heights, resolution)),
        triangles=_read_only(triangulate(len(vertices))),
    )

    logger.debug(
        "Terrain mesh built",
        vertices=mesh.vertex_count,
        triangles=mesh.triangle_count,
    )
    return mesh


def create_collider_points(mesh: TerrainMesh) -> np.ndarray:
    """
    Outline of the terrain surface for a 2D physics layer.

    Returns:
        ``(n, 2)`` array with the ``(x, y)`` of every top vertex
    """
    return mesh.vertices[0::2, :2].copy()


def generate_terrain_mesh(
    terrain_width: int,
    resolution: int,
    preset: TerrainPreset,
    rng: Optional[np.random.Generator] = None,
    seed: Optional[Seed] = None,
) -> TerrainMesh:
    """
    Generate a heightmap and build its mesh in one call.

    Raises:
        InvalidConfiguration: If any parameter is out of range
    """
    heights = generate_heightmap(terrain_width, resolution, preset, rng=rng, seed=seed)
    return build_terrain_mesh(heights, resolution, terrain_width)

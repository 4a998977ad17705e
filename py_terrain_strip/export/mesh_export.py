"""
Mesh export.

Converts a ``TerrainMesh`` into JSON-friendly buffers or a Wavefront OBJ
file for tools that do not consume numpy arrays.
"""

from pathlib import Path
from typing import Any, Dict, Union

import structlog

from ..core.mesh_builder import TerrainMesh

logger = structlog.get_logger()


def mesh_to_dict(mesh: TerrainMesh) -> Dict[str, Any]:
    """Plain-list copy of the mesh buffers."""
    return {
        "vertex_count": mesh.vertex_count,
        "triangle_count": mesh.triangle_count,
        "vertices": mesh.vertices.tolist(),
        "uv": mesh.uv.tolist(),
        "uv2": mesh.uv2.tolist(),
        "triangles": mesh.triangles.tolist(),
    }


def export_obj(mesh: TerrainMesh, path: Union[str, Path], precision: int = 6) -> Path:
    """
    Write the mesh as a Wavefront OBJ file.

    Texture coordinates come from the first UV channel. OBJ indices are
    1-based and vertex/texture indices coincide.

    Args:
        mesh: Mesh to write
        path: Output file path; parent directories are created
        precision: Decimal places for coordinates

    Returns:
        Path of the written file
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        f.write(f"# terrain strip: {mesh.vertex_count} vertices, {mesh.triangle_count} triangles\n")
        for x, y, z in mesh.vertices:
            f.write(f"v {x:.{precision}f} {y:.{precision}f} {z:.{precision}f}\n")
        for u, v in mesh.uv:
            f.write(f"vt {u:.{precision}f} {v:.{precision}f}\n")
        for a, b, c in mesh.triangles.reshape(-1, 3) + 1:
            f.write(f"f {a}/{a} {b}/{b} {c}/{c}\n")

    logger.info("Mesh exported", path=str(path), vertices=mesh.vertex_count)
    return path

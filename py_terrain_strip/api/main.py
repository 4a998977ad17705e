"""FastAPI main application."""

import logging
import uuid
from typing import Any, Dict, List, Optional, Union

import structlog
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from .. import __version__
from ..config import settings, get_preset, list_presets
from ..core.exceptions import InvalidConfiguration
from ..core.heightmap_generator import HeightmapGenerator
from ..core.mesh_builder import build_terrain_mesh, create_collider_points
from ..core.presets import TerrainPreset
from ..export.mesh_export import mesh_to_dict

# Configure logging
logging.basicConfig(format="%(message)s", level=settings.log_level.upper())
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.JSONRenderer()
        if settings.log_format == "json"
        else structlog.dev.ConsoleRenderer(colors=False),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()

# Initialize FastAPI app
app = FastAPI(
    title="Terrain Strip API",
    description="Procedural 2D terrain strips as raw mesh buffers",
    version=__version__,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Request/Response models
class TerrainRequest(BaseModel):
    """Request to generate a terrain strip."""

    terrain_width: int = Field(
        settings.default_terrain_width,
        ge=1,
        le=settings.max_terrain_width,
        description="How many units wide the terrain will be",
    )
    resolution: int = Field(
        settings.default_resolution,
        ge=1,
        le=settings.max_resolution,
        description="How many points/vertices per unit",
    )
    preset_name: Optional[str] = Field(None, description="Named preset, ignored when preset is given")
    preset: Optional[TerrainPreset] = Field(None, description="Inline preset parameters")
    seed: Optional[Union[int, str]] = Field(None, description="Random seed for reproducible generation")


class MeshRequest(TerrainRequest):
    """Request to generate a terrain strip mesh."""

    include_collider: bool = Field(False, description="Also return the surface polyline")


class HeightmapResponse(BaseModel):
    """Generated heightmap."""

    seed: Union[int, str]
    terrain_width: int
    resolution: int
    preset: TerrainPreset
    heights: List[float]


class MeshResponse(HeightmapResponse):
    """Generated heightmap with its mesh buffers."""

    mesh: Dict[str, Any]
    collider_points: Optional[List[List[float]]] = None


def _resolve_preset(request: TerrainRequest) -> TerrainPreset:
    if request.preset is not None:
        return request.preset
    return get_preset(request.preset_name or settings.default_preset)


def _generate_heights(request: TerrainRequest):
    seed = request.seed if request.seed is not None else str(uuid.uuid4())[:8]
    try:
        preset = _resolve_preset(request)
        heights = HeightmapGenerator(seed=seed).generate(
            request.terrain_width, request.resolution, preset
        )
    except InvalidConfiguration as e:
        logger.warning("Terrain request rejected", error=str(e))
        raise HTTPException(status_code=400, detail=str(e))

    logger.info(
        "Terrain generated",
        seed=seed,
        terrain_type=preset.terrain_type.value,
        samples=len(heights),
    )
    return seed, preset, heights


# API endpoints
@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Terrain Strip API",
        "version": __version__,
        "status": "running",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/presets")
async def get_presets():
    """List the named presets and their parameters."""
    return [{"name": name, **get_preset(name).model_dump(mode="json")} for name in list_presets()]


@app.post("/terrain/heightmap", response_model=HeightmapResponse)
def generate_heightmap_endpoint(request: TerrainRequest):
    """Generate a heightmap."""
    seed, preset, heights = _generate_heights(request)
    return HeightmapResponse(
        seed=seed,
        terrain_width=request.terrain_width,
        resolution=request.resolution,
        preset=preset,
        heights=heights.tolist(),
    )


@app.post("/terrain/mesh", response_model=MeshResponse)
def generate_mesh_endpoint(request: MeshRequest):
    """Generate a heightmap and the mesh buffers for it."""
    seed, preset, heights = _generate_heights(request)
    mesh = build_terrain_mesh(heights, request.resolution, request.terrain_width)

    collider_points = None
    if request.include_collider:
        collider_points = create_collider_points(mesh).tolist()

    return MeshResponse(
        seed=seed,
        terrain_width=request.terrain_width,
        resolution=request.resolution,
        preset=preset,
        heights=heights.tolist(),
        mesh=mesh_to_dict(mesh),
        collider_points=collider_points,
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.api_host, port=settings.api_port)

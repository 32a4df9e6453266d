"""FastAPI main application."""

import logging
import threading
from typing import List, Optional, Tuple

import structlog
from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from .. import __version__
from ..config import settings
from ..core.buffers import GeometryBuffer
from ..core.network import GeodesicNetwork, NetworkConfig, generate_or_reuse_network
from ..core.patches import Patch, PatchStyle
from ..core.point_sampler import SamplingMode
from ..core.scene import SceneDescription, describe_scene

# Configure logging
logging.basicConfig(format="%(message)s", level=settings.log_level.upper())

structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.JSONRenderer()
        if settings.log_format == "json"
        else structlog.dev.ConsoleRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()

# Initialize FastAPI app
app = FastAPI(
    title="Geodesic Network API",
    description="Procedural geodesic network geometry for 3D sphere scenes",
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

# Last generated network, reused while the request parameters are unchanged
_network_cache: Optional[GeodesicNetwork] = None
_network_lock = threading.Lock()


# Response models
class BufferModel(BaseModel):
    """Flat vertex buffer."""

    primitive: str
    positions: List[float]
    colors: List[float]
    uvs: Optional[List[float]] = None
    normals: Optional[List[float]] = None


class PointModel(BaseModel):
    """Network point marker."""

    index: int
    position: Tuple[float, float, float]
    color: Tuple[float, float, float]
    neighbors: List[int]


class PatchModel(BaseModel):
    """Surface patch around one point."""

    center_index: int
    color: Tuple[float, float, float]
    geometry: BufferModel


class NetworkResponse(BaseModel):
    """Complete network geometry for the view layer."""

    radius: float
    seed: Optional[str] = None
    sampling_mode: str
    patch_style: str
    points: List[PointModel]
    edges: List[Tuple[int, int]]
    lines: BufferModel
    patches: List[PatchModel]
    rotation_step: float = Field(description="Radians per frame for every group")


def _buffer_model(buffer: GeometryBuffer) -> BufferModel:
    return BufferModel(**buffer.to_dict())


def _patch_model(patch: Patch) -> PatchModel:
    return PatchModel(
        center_index=patch.center_index,
        color=patch.color,
        geometry=_buffer_model(patch.geometry),
    )


def _network_response(network: GeodesicNetwork) -> NetworkResponse:
    return NetworkResponse(
        radius=network.config.radius,
        seed=network.seed,
        sampling_mode=network.config.sampling_mode.value,
        patch_style=network.config.patch_style.value,
        points=[
            PointModel(
                index=i,
                position=tuple(point.position.tolist()),
                color=point.color,
                neighbors=list(point.neighbor_indices),
            )
            for i, point in enumerate(network.points)
        ],
        edges=network.edges,
        lines=_buffer_model(network.lines),
        patches=[_patch_model(patch) for patch in network.patches],
        rotation_step=settings.rotation_step,
    )


def get_network(config: NetworkConfig, seed: Optional[str]) -> GeodesicNetwork:
    """Return the cached network for these parameters, regenerating on change."""
    global _network_cache
    with _network_lock:
        _network_cache = generate_or_reuse_network(_network_cache, config, seed)
        return _network_cache


def _network_config(radius, sampling_mode, patch_style, include_patches, curve_segments) -> NetworkConfig:
    return NetworkConfig.from_settings(
        settings,
        radius=radius,
        sampling_mode=sampling_mode,
        patch_style=patch_style,
        include_patches=include_patches,
        curve_segments=curve_segments,
    )


# Event handlers
@app.on_event("startup")
async def startup_event():
    logger.info("Starting Geodesic Network API", radius=settings.sphere_radius)


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Shutting down Geodesic Network API")


# API endpoints
@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Geodesic Network API",
        "version": __version__,
        "status": "running"
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/network", response_model=NetworkResponse)
def read_network(
    radius: float = Query(settings.sphere_radius, gt=0, le=100, description="Sphere radius"),
    seed: Optional[str] = Query(None, description="Seed for reproducible generation"),
    sampling_mode: SamplingMode = Query(SamplingMode.parse(settings.sampling_mode)),
    patch_style: PatchStyle = Query(PatchStyle.parse(settings.patch_style)),
    include_patches: bool = Query(True),
    curve_segments: int = Query(settings.curve_segments, ge=1, le=200),
):
    """Generate (or reuse) the network and return all of its buffers."""
    config = _network_config(radius, sampling_mode, patch_style, include_patches, curve_segments)
    network = get_network(config, seed)
    return _network_response(network)


@app.get("/network/patches/{index}", response_model=PatchModel)
def read_patch(
    index: int,
    radius: float = Query(settings.sphere_radius, gt=0, le=100),
    seed: Optional[str] = Query(None),
    sampling_mode: SamplingMode = Query(SamplingMode.parse(settings.sampling_mode)),
    patch_style: PatchStyle = Query(PatchStyle.parse(settings.patch_style)),
):
    """Return a single patch of the network."""
    config = _network_config(radius, sampling_mode, patch_style, True, settings.curve_segments)
    network = get_network(config, seed)
    if index < 0 or index >= len(network.patches):
        raise HTTPException(status_code=404, detail="Patch not found")
    return _patch_model(network.patches[index])


@app.get("/scene", response_model=SceneDescription)
def read_scene(radius: float = Query(settings.sphere_radius, gt=0, le=100)):
    """Render hints for the host scene."""
    return describe_scene(radius=radius, rotation_step=settings.rotation_step)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)

"""
Dungeon Generation Service
Main entry point for the Python dungeon chunk generation service.
"""

import logging
import os
import sys
from pathlib import Path

# Add server directory to path for imports
server_dir = Path(__file__).parent.parent.parent
sys.path.insert(0, str(server_dir))

from fastapi import FastAPI, HTTPException, Query
from fastapi import Path as PathParam
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field
from typing import Dict, List, Optional
import uvicorn

from internal.dungeon import config
from internal.dungeon import seeds
from internal.dungeon.dungeon import Dungeon
from internal.dungeon.graph import Direction
from internal.dungeon.rooms import CHUNK_SIZE_ROOT, Chunk

SERVICE_NAME = "dungeon-generation-service"
SERVICE_VERSION = "0.1.0"

# Chunk coordinates must fit the 32-bit halves of Position.hash()
COORD_MIN = -(2**31)
COORD_MAX = 2**31 - 1

# Load configuration
cfg = config.load_config()

logging.basicConfig(
    level=cfg.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Dungeon Generation Service",
    description="Service for generating deterministic, connected dungeon chunks",
    version=SERVICE_VERSION,
)

# CORS middleware (allow the game server to call this service)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class HealthResponse(BaseModel):
    """Health check response"""

    status: str
    service: str
    version: str


class GenerateChunkRequest(BaseModel):
    """Request to generate a dungeon chunk"""

    chunk_x: int = Field(..., ge=COORD_MIN, le=COORD_MAX, description="Chunk X coordinate")
    chunk_y: int = Field(..., ge=COORD_MIN, le=COORD_MAX, description="Chunk Y coordinate")
    world_seed: Optional[int] = Field(
        default=None, description="World seed (uses default if not provided)"
    )
    connect_probability: Optional[float] = Field(
        default=None, ge=0.0, le=1.0, description="Edge keep probability for the room grid"
    )


class RoomModel(BaseModel):
    """A single room of a chunk"""

    index: int
    x: int
    y: int
    stairs: str
    doors: Dict[str, str]


class ChunkMetadata(BaseModel):
    """Chunk metadata"""

    chunk_id: str
    chunk_x: int
    chunk_y: int
    world_seed: int
    chunk_seed: int
    size: int
    connect_probability: float


class GenerateChunkResponse(BaseModel):
    """Response from chunk generation"""

    success: bool
    chunk: ChunkMetadata
    rooms: List[RoomModel] = []
    edges: List[List[int]] = []
    message: Optional[str] = None


def _build_dungeon(
    chunk_x: int, chunk_y: int, world_seed: Optional[int], connect_probability: Optional[float]
) -> Dungeon:
    seed = world_seed if world_seed is not None else cfg.world_seed
    probability = (
        connect_probability if connect_probability is not None else cfg.connect_probability
    )
    return Dungeon(seed, probability, chunk_pos=seeds.Position(chunk_x, chunk_y))


def _serialize_rooms(chunk: Chunk) -> List[RoomModel]:
    rooms = []
    for index, room in enumerate(chunk.rooms):
        x, y = Chunk.coordinates(index)
        rooms.append(
            RoomModel(
                index=index,
                x=x,
                y=y,
                stairs=room.stairs.name.lower(),
                doors={d.name.lower(): room.door(d).name.lower() for d in Direction},
            )
        )
    return rooms


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint"""
    return HealthResponse(status="ok", service=SERVICE_NAME, version=SERVICE_VERSION)


@app.post("/api/v1/dungeons/chunks/generate", response_model=GenerateChunkResponse)
async def generate_chunk(request: GenerateChunkRequest):
    """
    Generate a dungeon chunk.

    The chunk is regenerated from scratch on every call; identical requests
    always return identical rooms.
    """
    try:
        dungeon = _build_dungeon(
            request.chunk_x, request.chunk_y, request.world_seed, request.connect_probability
        )
        chunk = dungeon.chunk

        return GenerateChunkResponse(
            success=True,
            chunk=ChunkMetadata(
                chunk_id=f"{request.chunk_x}_{request.chunk_y}",
                chunk_x=request.chunk_x,
                chunk_y=request.chunk_y,
                world_seed=dungeon.seed,
                chunk_seed=chunk.seed,
                size=CHUNK_SIZE_ROOT,
                connect_probability=dungeon.connect_probability,
            ),
            rooms=_serialize_rooms(chunk),
            edges=[[v, w] for v, w in chunk.graph.edges()],
            message="Chunk generated",
        )

    except Exception as e:
        logger.exception("Chunk generation failed for (%d, %d)", request.chunk_x, request.chunk_y)
        raise HTTPException(
            status_code=500, detail=f"Failed to generate chunk: {str(e)}"
        )


@app.get("/api/v1/dungeons/chunks/seed/{chunk_x}/{chunk_y}")
async def get_chunk_seed(
    chunk_x: int = PathParam(..., ge=COORD_MIN, le=COORD_MAX),
    chunk_y: int = PathParam(..., ge=COORD_MIN, le=COORD_MAX),
    world_seed: Optional[int] = None,
):
    """Get the seed for a specific chunk (useful for debugging)"""
    seed = world_seed if world_seed is not None else cfg.world_seed
    position = seeds.Position(chunk_x, chunk_y)

    return {
        "chunk_x": chunk_x,
        "chunk_y": chunk_y,
        "world_seed": seed,
        "position_hash": position.hash(),
        "chunk_seed": seeds.derive_seed(seed, position),
    }


@app.get("/api/v1/dungeons/chunks/{chunk_x}/{chunk_y}/preview", response_class=PlainTextResponse)
async def preview_chunk(
    chunk_x: int = PathParam(..., ge=COORD_MIN, le=COORD_MAX),
    chunk_y: int = PathParam(..., ge=COORD_MIN, le=COORD_MAX),
    world_seed: Optional[int] = None,
    connect_probability: Optional[float] = Query(None, ge=0.0, le=1.0),
):
    """Plain-text lattice view of a chunk's room connections"""
    try:
        dungeon = _build_dungeon(chunk_x, chunk_y, world_seed, connect_probability)
    except Exception as e:
        logger.exception("Chunk preview failed for (%d, %d)", chunk_x, chunk_y)
        raise HTTPException(
            status_code=500, detail=f"Failed to generate chunk: {str(e)}"
        )
    return dungeon.chunk.graph.format_grid()


if __name__ == "__main__":
    port = int(os.getenv("DUNGEON_SERVICE_PORT", "8082"))
    host = os.getenv("DUNGEON_SERVICE_HOST", "0.0.0.0")

    uvicorn.run(
        "main:app", host=host, port=port, reload=cfg.environment == "development"
    )

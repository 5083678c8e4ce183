"""
Dungeon state and chunk generation.

A dungeon keeps exactly one chunk of rooms resident. The chunk is a pure
function of the world seed, the chunk coordinate and the generation
parameters, so it is never stored: moving away and back replays it.
"""

import logging
import random
from typing import List, Optional, Sequence

from . import seeds
from .grid import random_connected_grid
from .rooms import (
    CHUNK_SIZE,
    CHUNK_SIZE_ROOT,
    DOOR_CDF,
    STAIR_CDF,
    Chunk,
    DoorState,
    Room,
    StairState,
    opposite_direction,
    random_state,
    validate_cdf,
)
from .seeds import Position

logger = logging.getLogger(__name__)

DEFAULT_CONNECT_PROBABILITY = 0.5


class Dungeon:
    """Owns the generator, the player's position and the resident chunk."""

    def __init__(
        self,
        seed: int,
        connect_probability: float = DEFAULT_CONNECT_PROBABILITY,
        stair_cdf: Sequence[float] = STAIR_CDF,
        door_cdf: Sequence[float] = DOOR_CDF,
        chunk_pos: Optional[Position] = None,
    ):
        """
        Initialize a dungeon and generate its first chunk.

        Args:
            seed: World seed (64-bit)
            connect_probability: Edge keep probability for the room grid
            stair_cdf: Cumulative distribution over StairState values
            door_cdf: Cumulative distribution over DoorState values
            chunk_pos: Initial chunk coordinate (defaults to the origin)

        Raises:
            ValueError: If a distribution is malformed or the probability is
                outside [0, 1]
        """
        if not 0.0 <= connect_probability <= 1.0:
            raise ValueError(
                f"Connect probability must be within [0, 1], got {connect_probability}"
            )
        validate_cdf(stair_cdf)
        validate_cdf(door_cdf)
        if len(stair_cdf) != len(StairState):
            raise ValueError(f"Stair distribution needs {len(StairState)} entries")
        if len(door_cdf) != len(DoorState):
            raise ValueError(f"Door distribution needs {len(DoorState)} entries")

        self.seed = seed & seeds.MASK_64
        self.state = seeds.seed_pair(self.seed)
        self.rng = seeds.seeded_random(*self.state)

        self.connect_probability = connect_probability
        self.stair_cdf = tuple(stair_cdf)
        self.door_cdf = tuple(door_cdf)

        center = CHUNK_SIZE_ROOT // 2
        self.room_pos = Position(center, center)
        self.chunk_pos = chunk_pos if chunk_pos is not None else Position(0, 0)
        self.level = 0

        self.chunk = Chunk()
        self.update_chunk()

    @property
    def current_room(self) -> Room:
        return self.chunk.room_at(self.room_pos.x, self.room_pos.y)

    def move_to(self, chunk_pos: Position) -> bool:
        """
        Make chunk_pos the active chunk.

        Returns:
            True if the chunk changed and was regenerated
        """
        chunk_pos = Position(*chunk_pos)
        if chunk_pos == self.chunk_pos:
            return False
        self.chunk_pos = chunk_pos
        self.update_chunk()
        return True

    def update_chunk(self) -> None:
        """Regenerate the resident chunk for the current chunk coordinate."""
        chunk_seed = seeds.derive_seed(self.seed, self.chunk_pos)
        self.state = seeds.seed_pair(chunk_seed)
        seeds.reseed(self.rng, *self.state)

        graph = random_connected_grid(self.rng, CHUNK_SIZE_ROOT, self.connect_probability)

        stairs: List[StairState] = [
            StairState(random_state(self.rng, self.stair_cdf)) for _ in range(CHUNK_SIZE)
        ]
        doors: List[List[DoorState]] = [[DoorState.NONE] * 4 for _ in range(CHUNK_SIZE)]

        for v, w in graph.edges():
            direction = graph.relative_grid_direction(v, w)
            state = DoorState(random_state(self.rng, self.door_cdf))
            doors[v][direction] = state
            doors[w][opposite_direction(direction)] = state

        # Refill the resident chunk object
        self.chunk.rooms = tuple(
            Room(stairs=stairs[index], doors=tuple(doors[index])) for index in range(CHUNK_SIZE)
        )
        self.chunk.seed = chunk_seed
        self.chunk.graph = graph

        logger.debug(
            "Generated chunk %s (seed=%#x, edges=%d)",
            tuple(self.chunk_pos), chunk_seed, sum(1 for _ in graph.edges()),
        )


def new_dungeon(seed: int) -> Dungeon:
    """Create a dungeon with default parameters positioned at the origin chunk."""
    return Dungeon(seed)

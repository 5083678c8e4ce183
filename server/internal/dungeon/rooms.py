"""
Room and chunk data structures.

A chunk is a CHUNK_SIZE_ROOT × CHUNK_SIZE_ROOT block of rooms indexed by
x + CHUNK_SIZE_ROOT * y, with (0, 0) at the top-left:

    0 1 2
    3 4 5
    6 7 8
"""

import bisect
import random
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional, Sequence, Tuple

from .graph import Direction, Graph

CHUNK_SIZE_ROOT = 3
CHUNK_SIZE = CHUNK_SIZE_ROOT * CHUNK_SIZE_ROOT

# Bytes per room in Chunk.to_bytes(): stairs + 4 doors
ROOM_RECORD_SIZE = 5


class DoorState(IntEnum):
    NONE = 0
    OPEN = 1
    CLOSED = 2
    STUCK = 3
    LOCKED = 4


class StairState(IntEnum):
    NONE = 0
    DOWN = 1
    UP = 2


# Cumulative distributions indexed by state value.
# Stairs are rare; most rooms have none.
STAIR_CDF: Tuple[float, ...] = (
    0.90,  # NONE
    0.95,  # DOWN
    1.00,  # UP
)

# Every graph edge gets a real door, so NONE has zero weight
DOOR_CDF: Tuple[float, ...] = (
    0.00,  # NONE
    0.60,  # OPEN
    0.85,  # CLOSED
    0.95,  # STUCK
    1.00,  # LOCKED
)


def opposite_direction(direction: int) -> Direction:
    """North <-> South, East <-> West."""
    return Direction((direction + 2) % 4)


def validate_cdf(cdf: Sequence[float]) -> None:
    """
    Check that a cumulative distribution can be sampled by random_state().

    Raises:
        ValueError: If the distribution is empty, decreasing, leaves [0, 1]
            or does not end at exactly 1.0
    """
    if not cdf:
        raise ValueError("Cumulative distribution must not be empty")
    previous = 0.0
    for index, threshold in enumerate(cdf):
        if threshold < previous:
            raise ValueError(
                f"Cumulative distribution decreases at index {index}: {list(cdf)}"
            )
        if threshold > 1.0:
            raise ValueError(
                f"Cumulative distribution exceeds 1.0 at index {index}: {list(cdf)}"
            )
        previous = threshold
    if cdf[-1] != 1.0:
        raise ValueError(f"Cumulative distribution must end at 1.0, got {cdf[-1]}")


def random_state(rng: random.Random, cdf: Sequence[float]) -> int:
    """
    Sample a categorical distribution.

    Args:
        rng: Generator to draw from (exactly one draw)
        cdf: Non-decreasing cumulative thresholds ending at 1.0

    Returns:
        Index of the first threshold strictly greater than the draw,
        or 0 if no threshold exceeds it
    """
    draw = rng.random()
    index = bisect.bisect_right(cdf, draw)
    if index >= len(cdf):
        return 0
    return index


@dataclass(frozen=True)
class Room:
    """Stairs and the four doors (indexed by Direction) of a single room."""

    stairs: StairState = StairState.NONE
    doors: Tuple[DoorState, DoorState, DoorState, DoorState] = (
        DoorState.NONE,
        DoorState.NONE,
        DoorState.NONE,
        DoorState.NONE,
    )

    def door(self, direction: Direction) -> DoorState:
        return self.doors[direction]

    def to_bytes(self) -> bytes:
        return bytes([self.stairs, *self.doors])


@dataclass
class Chunk:
    """
    The resident block of rooms plus the graph it was generated from.

    Only Dungeon.update_chunk() replaces these fields. rooms is a tuple of
    frozen Room values and graph is the generation record; treat it as read-only.
    """

    rooms: Tuple[Room, ...] = field(default_factory=lambda: tuple(Room() for _ in range(CHUNK_SIZE)))
    seed: int = 0
    graph: Optional[Graph] = None

    @staticmethod
    def index(x: int, y: int) -> int:
        return x + CHUNK_SIZE_ROOT * y

    @staticmethod
    def coordinates(index: int) -> Tuple[int, int]:
        y, x = divmod(index, CHUNK_SIZE_ROOT)
        return x, y

    def room_at(self, x: int, y: int) -> Room:
        return self.rooms[self.index(x, y)]

    def to_bytes(self) -> bytes:
        """Pack the rooms as stairs, N, E, S, W bytes per room."""
        return b"".join(room.to_bytes() for room in self.rooms)


validate_cdf(STAIR_CDF)
validate_cdf(DOOR_CDF)

"""
Pytest configuration and fixtures for dungeon integration tests.
"""

import os
import sys
from pathlib import Path

import pytest

# Add server directory to path for imports
server_dir = Path(__file__).parent.parent
sys.path.insert(0, str(server_dir))

from internal.dungeon.dungeon import Dungeon
from internal.dungeon.seeds import Position


@pytest.fixture(scope="session")
def world_seed():
    """World seed for integration tests (TEST_WORLD_SEED overrides)."""
    return int(os.getenv("TEST_WORLD_SEED", "12345"))


@pytest.fixture
def make_dungeon(world_seed):
    """Factory building independent dungeons positioned at a chunk."""

    def _make(x=0, y=0, seed=None, connect_probability=0.5):
        return Dungeon(
            world_seed if seed is None else seed,
            connect_probability,
            chunk_pos=Position(x, y),
        )

    return _make


@pytest.fixture
def chunk_walk():
    """A fixed tour of chunk coordinates, including negative ones."""
    return [
        Position(0, 0),
        Position(1, 0),
        Position(1, 1),
        Position(-1, 1),
        Position(-7, -3),
        Position(250, -4000),
        Position(0, 0),
    ]

"""
Integration tests for replaying dungeon chunks from their coordinates.
"""

import pytest
from internal.dungeon.rooms import CHUNK_SIZE, DoorState
from internal.dungeon.seeds import Position


def test_walk_replays_every_chunk(make_dungeon, chunk_walk):
    """Test chunks seen on a walk match freshly generated ones"""
    walker = make_dungeon()
    for position in chunk_walk:
        walker.move_to(position)
        fresh = make_dungeon(position.x, position.y)
        assert walker.chunk.to_bytes() == fresh.chunk.to_bytes()
        assert walker.chunk.seed == fresh.chunk.seed


def test_returning_restores_chunk(make_dungeon, chunk_walk):
    """Test coming back to the start chunk restores it exactly"""
    walker = make_dungeon()
    start = walker.chunk.to_bytes()
    for position in chunk_walk:
        walker.move_to(position)
    assert walker.chunk_pos == Position(0, 0)
    assert walker.chunk.to_bytes() == start


def test_world_seed_changes_layout(make_dungeon):
    """Test different world seeds give different dungeons"""
    layouts = {make_dungeon(2, 2, seed=seed).chunk.to_bytes() for seed in range(20)}
    assert len(layouts) > 1


@pytest.mark.parametrize("connect_probability", [0.0, 0.5, 1.0])
def test_every_room_has_a_door(make_dungeon, chunk_walk, connect_probability):
    """Test every room can be entered in a connected chunk"""
    walker = make_dungeon(connect_probability=connect_probability)
    for position in chunk_walk:
        walker.move_to(position)
        for index in range(CHUNK_SIZE):
            doors = walker.chunk.rooms[index].doors
            assert any(door != DoorState.NONE for door in doors)

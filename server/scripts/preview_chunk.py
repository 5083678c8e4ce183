#!/usr/bin/env python3
"""
Print a dungeon chunk: its room lattice followed by a table of rooms.

Usage:
    python scripts/preview_chunk.py SEED X Y [--probability P]
"""
import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from internal.dungeon.dungeon import DEFAULT_CONNECT_PROBABILITY, Dungeon
from internal.dungeon.graph import Direction
from internal.dungeon.rooms import Chunk
from internal.dungeon.seeds import Position


def parse_args(argv):
    parser = argparse.ArgumentParser(description="Preview a generated dungeon chunk")
    parser.add_argument("seed", type=int, help="World seed")
    parser.add_argument("x", type=int, help="Chunk X coordinate")
    parser.add_argument("y", type=int, help="Chunk Y coordinate")
    parser.add_argument(
        "--probability",
        type=float,
        default=DEFAULT_CONNECT_PROBABILITY,
        help="Edge keep probability (default: %(default)s)",
    )
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    try:
        dungeon = Dungeon(args.seed, args.probability, chunk_pos=Position(args.x, args.y))
    except ValueError as e:
        print(f"✗ {e}")
        return 1

    chunk = dungeon.chunk
    print(f"Chunk ({args.x}, {args.y})  seed={chunk.seed:#018x}")
    print(chunk.graph.format_grid())

    header = "room  x y  stairs  " + "  ".join(f"{d.name.lower():<7}" for d in Direction)
    print(header)
    for index, room in enumerate(chunk.rooms):
        x, y = Chunk.coordinates(index)
        doors = "  ".join(f"{room.door(d).name.lower():<7}" for d in Direction)
        print(f"{index:>4}  {x} {y}  {room.stairs.name.lower():<6}  {doors}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""
Seed generation utilities for deterministic dungeon generation.
"""

import random
from typing import NamedTuple, Tuple

MASK_32 = 0xFFFFFFFF
MASK_64 = 0xFFFFFFFFFFFFFFFF

# XORed into the second state word so the two words of a seed pair differ
DOMAIN_SEPARATION = 0x9E3779B97F4A7C15


class Position(NamedTuple):
    """Integer (x, y) coordinate in room or chunk space."""

    x: int
    y: int

    def hash(self) -> int:
        """
        Pack the coordinate into a 64-bit value.

        X occupies the high 32 bits and Y the low 32 bits. Coordinates outside
        the signed 32-bit range alias onto other coordinates.
        """
        return ((self.x & MASK_32) << 32) | (self.y & MASK_32)


def derive_seed(base_seed: int, position: Position) -> int:
    """
    Generate deterministic seed for a chunk.

    Args:
        base_seed: Global world seed
        position: Chunk coordinate

    Returns:
        64-bit chunk seed
    """
    return (position.hash() ^ base_seed) & MASK_64


def seed_pair(seed: int) -> Tuple[int, int]:
    """Expand a 64-bit seed into the two generator state words."""
    seed &= MASK_64
    return seed, (DOMAIN_SEPARATION ^ seed) & MASK_64


def pair_to_int(first: int, second: int) -> int:
    """Combine two 64-bit words into the 128-bit integer fed to random.seed()."""
    return ((first & MASK_64) << 64) | (second & MASK_64)


def seeded_random(first: int, second: int) -> random.Random:
    """
    Create deterministic random number generator from a two-word state.

    Args:
        first: First 64-bit state word
        second: Second 64-bit state word

    Returns:
        Seeded Random instance
    """
    return random.Random(pair_to_int(first, second))


def reseed(rng: random.Random, first: int, second: int) -> None:
    """Reset an existing generator to the sequence of the given two-word state."""
    rng.seed(pair_to_int(first, second))

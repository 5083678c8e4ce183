"""
Undirected adjacency-list graph utilities.

Vertices are integer ids 0..V-1. A graph can optionally be marked as a square
lattice (grid) which enables the direction helpers used by room generation.
"""

from collections import deque
from enum import IntEnum
from typing import Iterator, List, Optional, Tuple


class Direction(IntEnum):
    """Compass direction of a neighbouring lattice cell."""

    NORTH = 0
    EAST = 1
    SOUTH = 2
    WEST = 3


class Graph:
    """Undirected graph stored as one adjacency list per vertex."""

    def __init__(self, vertex_count: int, capacity_hint: int = 4):
        """
        Initialize an edgeless graph.

        Args:
            vertex_count: Number of vertices (fixed for the graph's lifetime)
            capacity_hint: Expected edges per vertex (kept for API compatibility,
                Python lists grow on demand)
        """
        self.adjacency: List[List[int]] = [[] for _ in range(vertex_count)]
        self.capacity_hint = capacity_hint

        # Grid metadata, only set for square lattices
        self.is_grid = False
        self.grid_size = 0

    def __len__(self) -> int:
        return len(self.adjacency)

    def connect(self, v: int, w: int) -> None:
        """Create an undirected edge from v to w."""
        self.adjacency[v].append(w)
        self.adjacency[w].append(v)

    def disconnect(self, v: int, w: int) -> None:
        """Remove an undirected edge from v to w. No-op if the edge does not exist."""
        if w in self.adjacency[v]:
            self.adjacency[v].remove(w)
        if v in self.adjacency[w]:
            self.adjacency[w].remove(v)

    def is_edge(self, v: int, w: int) -> bool:
        return w in self.adjacency[v]

    def degree(self, v: int) -> int:
        return len(self.adjacency[v])

    def edges(self) -> Iterator[Tuple[int, int]]:
        """Yield every undirected edge once as (v, w) with v < w."""
        for v, neighbours in enumerate(self.adjacency):
            for w in neighbours:
                if v < w:
                    yield v, w

    def bfs(self, root: int, target: int = -1) -> Tuple[List[int], bool]:
        """
        Breadth-first search for the target vertex.

        A target of -1 never matches a vertex, so the search visits every vertex
        reachable from root.

        Args:
            root: The starting vertex
            target: The vertex of interest

        Returns:
            Tuple of (visit history, True if target was found)
        """
        visited = [False] * len(self.adjacency)
        visited[root] = True
        history = [root]

        queue = deque([root])
        while queue:
            v = queue.popleft()
            if v == target:
                return history, True
            for w in self.adjacency[v]:
                if not visited[w]:
                    visited[w] = True
                    history.append(w)
                    queue.append(w)

        return history, False

    def is_connected(self) -> bool:
        """True if every vertex is reachable from vertex 0."""
        if not self.adjacency:
            return True
        history, _ = self.bfs(0)
        return len(history) == len(self.adjacency)

    def relative_grid_direction(self, v: int, w: int) -> Optional[Direction]:
        """
        Direction of w relative to v on the lattice.

        Returns:
            Direction of w as seen from v, or None if w is not a lattice neighbour
        """
        n = self.grid_size
        if n <= 0 or not (0 <= v < len(self.adjacency) and 0 <= w < len(self.adjacency)):
            return None

        delta = w - v
        if delta == -n:
            return Direction.NORTH
        if delta == n:
            return Direction.SOUTH
        # East/West must stay on the same row
        if delta == 1 and v // n == w // n:
            return Direction.EAST
        if delta == -1 and v // n == w // n:
            return Direction.WEST
        return None

    def is_valid_grid_connection(self, v: int, w: int) -> bool:
        return self.relative_grid_direction(v, w) is not None

    def format_grid(self) -> str:
        """
        Render the lattice as ASCII art.

        Vertices are drawn as 'o', horizontal edges as '-' and vertical
        edges as '|'. Returns an empty string for non-grid graphs.
        """
        if not self.is_grid:
            return ""

        n = self.grid_size
        lines = []
        for y in range(n):
            row = ["o"]
            for x in range(n - 1):
                idx = x + y * n
                row.append("-" if self.is_edge(idx, idx + 1) else " ")
                row.append("o")
            lines.append("  " + "".join(row))

            if y == n - 1:
                break
            links = []
            for x in range(n):
                idx = x + y * n
                links.append("|" if self.is_edge(idx, idx + n) else " ")
            lines.append(("  " + " ".join(links)).rstrip())

        return "\n".join(lines) + "\n"

    def __str__(self) -> str:
        return "\n".join(
            f"    {v}: {neighbours}" for v, neighbours in enumerate(self.adjacency)
        )

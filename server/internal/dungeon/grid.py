"""
Random connected grid generation.
Builds an n × n 4-connected lattice graph whose vertices always form a single
connected component.

Vertex layout for n = 4 (index = x + y * n):

    0-1-2-3
    | | | |
    4-5-6-7
    | | | |
    8-9-A-B
    | | | |
    C-D-E-F
"""

import logging
import random
from collections import deque
from typing import List

from .graph import Graph

logger = logging.getLogger(__name__)

# Maximum lattice degree (N, E, S, W)
MAX_GRID_DEGREE = 4


def lattice_neighbours(v: int, n: int) -> List[int]:
    """
    In-bounds lattice neighbours of v, in the order North, East, South, West.

    Corners have 2 neighbours, border cells 3 and interior cells 4.
    """
    row, col = divmod(v, n)
    neighbours = []
    if row > 0:
        neighbours.append(v - n)
    if col + 1 < n:
        neighbours.append(v + 1)
    if row + 1 < n:
        neighbours.append(v + n)
    if col > 0:
        neighbours.append(v - 1)
    return neighbours


def random_connected_grid(rng: random.Random, n: int, p: float) -> Graph:
    """
    Randomly generate a connected n × n grid.

    Every lattice edge is proposed from both of its endpoints with keep
    probability p, isolated vertices are then attached to a random neighbour,
    and finally the remaining components are merged through lattice-adjacent
    vertex pairs.

    Args:
        rng: Generator owned by the caller; all draws come from it
        n: Side length of the grid
        p: Edge keep probability (0.0 to 1.0)

    Returns:
        Connected Graph with n * n vertices and grid metadata set.
        For n < 2 an edgeless graph of n * n vertices is returned.
    """
    if n < 0:
        raise ValueError(f"Grid size must be non-negative, got {n}")
    if not 0.0 <= p <= 1.0:
        raise ValueError(f"Connect probability must be within [0, 1], got {p}")

    graph = Graph(n * n, MAX_GRID_DEGREE)
    if n < 2:
        return graph
    graph.is_grid = True
    graph.grid_size = n

    _sample_lattice_edges(graph, rng, p)
    _attach_isolated_vertices(graph, rng)
    merges = _merge_components(graph)

    logger.debug(
        "Generated %dx%d grid (p=%.3f): %d edges, %d component merges",
        n, n, p, sum(1 for _ in graph.edges()), merges,
    )
    return graph


def _sample_lattice_edges(graph: Graph, rng: random.Random, p: float) -> None:
    """Phase A: one draw per in-bounds neighbour of every vertex."""
    n = graph.grid_size
    for v in range(n * n):
        for w in lattice_neighbours(v, n):
            # The draw always happens so the sequence does not depend on prior edges
            if rng.random() < p and not graph.is_edge(v, w):
                graph.connect(v, w)


def _attach_isolated_vertices(graph: Graph, rng: random.Random) -> None:
    """Phase B: give every degree-0 vertex one random lattice neighbour."""
    n = graph.grid_size
    for v in range(n * n):
        if graph.degree(v) == 0:
            neighbours = lattice_neighbours(v, n)
            graph.connect(v, neighbours[rng.randrange(len(neighbours))])


def _find_components(graph: Graph) -> List[List[int]]:
    """Partition the vertices into connected components (BFS, lowest id first)."""
    vertex_count = len(graph)
    visited = [False] * vertex_count
    components = []
    queue = deque()

    for root in range(vertex_count):
        if visited[root]:
            continue
        visited[root] = True
        component = [root]
        queue.append(root)
        while queue:
            v = queue.popleft()
            for w in graph.adjacency[v]:
                if not visited[w]:
                    visited[w] = True
                    component.append(w)
                    queue.append(w)
        components.append(component)

    return components


def _merge_components(graph: Graph) -> int:
    """
    Phase C: join components until one remains.

    The first lattice-adjacent pair between the first component and any other
    component wins. Returns the number of merges performed.
    """
    components = _find_components(graph)
    merges = 0

    while len(components) > 1:
        other_index = _connect_first_component(graph, components)
        components[0].extend(components[other_index])
        del components[other_index]
        merges += 1

    return merges


def _connect_first_component(graph: Graph, components: List[List[int]]) -> int:
    """Connect components[0] to another component and return that component's index."""
    for v in components[0]:
        for index in range(1, len(components)):
            for w in components[index]:
                if graph.is_valid_grid_connection(v, w):
                    graph.connect(v, w)
                    return index

    # Unreachable for a full lattice: some boundary vertex always has an outside neighbour
    raise RuntimeError("No lattice-adjacent pair found between grid components")

from __future__ import annotations
import random
from typing import Any, List

from ..config import DensityConfig, validate_graph_params
from .graph import Graph, Neighbor


def generate_random_graph(
    n_vertices: int,
    density: float,
    weight_low: float,
    weight_high: float,
    rng: Any,
) -> Graph:
    """
    Erdős–Rényi style random graph on vertices 1..n_vertices.

    Every pair i < j is visited once (i outer, j inner). One rng.random() draw
    decides the pair: the edge is kept when the draw is <= density, and a
    second draw rng.uniform(weight_low, weight_high) gives its weight.
    The result may be disconnected.

    `rng` is anything exposing random() and uniform(); random.Random and
    numpy.random.Generator both work. It is the only source of randomness,
    so a seeded rng reproduces the same graph.
    """
    validate_graph_params(n_vertices, density, weight_low, weight_high)

    adj: List[List[Neighbor]] = [[] for _ in range(n_vertices + 1)]
    for i in range(1, n_vertices + 1):
        for j in range(i + 1, n_vertices + 1):
            if rng.random() <= density:
                w = float(rng.uniform(weight_low, weight_high))
                adj[i].append((j, w))
                adj[j].append((i, w))

    return Graph(n_vertices=n_vertices, adjacency=tuple(tuple(xs) for xs in adj))


def generate_for_config(n_vertices: int, dc: DensityConfig, seed: int) -> Graph:
    """Convenience wrapper: one graph for a density config from an integer seed."""
    rng = random.Random(seed)
    return generate_random_graph(n_vertices, dc.density, dc.weight_low, dc.weight_high, rng)

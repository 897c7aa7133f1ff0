from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Tuple

import networkx as nx

from ..errors import InvalidConfiguration

Edge = Tuple[int, int, float]
Neighbor = Tuple[int, float]


@dataclass(frozen=True)
class Graph:
    """
    Undirected weighted graph on vertices 1..n_vertices.

    adjacency[v] holds the (neighbor, weight) pairs of vertex v in insertion
    order; slot 0 is unused so vertices keep their 1-based labels.
    Every edge is stored in both endpoint lists.
    """
    n_vertices: int
    adjacency: Tuple[Tuple[Neighbor, ...], ...]

    @classmethod
    def from_edges(cls, n_vertices: int, edges: Iterable[Edge]) -> "Graph":
        if n_vertices < 1:
            raise InvalidConfiguration(f"n_vertices must be >= 1, got {n_vertices}")
        adj: List[List[Neighbor]] = [[] for _ in range(n_vertices + 1)]
        for u, v, w in edges:
            if not (1 <= u <= n_vertices and 1 <= v <= n_vertices):
                raise InvalidConfiguration(
                    f"edge ({u}, {v}) has an endpoint outside [1, {n_vertices}]"
                )
            adj[u].append((v, float(w)))
            adj[v].append((u, float(w)))
        return cls(n_vertices=n_vertices, adjacency=tuple(tuple(xs) for xs in adj))

    def neighbors(self, v: int) -> Tuple[Neighbor, ...]:
        return self.adjacency[v]

    def vertices(self) -> range:
        return range(1, self.n_vertices + 1)

    def edges(self) -> Iterator[Edge]:
        """Each undirected edge once, as (u, v, w) with u < v."""
        for u in self.vertices():
            for v, w in self.adjacency[u]:
                if u < v:
                    yield (u, v, w)

    def number_of_edges(self) -> int:
        return sum(1 for _ in self.edges())

    def edge_density(self) -> float:
        """Present edges over candidate pairs; 0.0 for a single vertex."""
        pairs = self.n_vertices * (self.n_vertices - 1) // 2
        if pairs == 0:
            return 0.0
        return self.number_of_edges() / pairs

    def to_networkx(self) -> nx.Graph:
        g = nx.Graph()
        g.add_nodes_from(self.vertices())
        for u, v, w in self.edges():
            g.add_edge(u, v, weight=w)
        return g

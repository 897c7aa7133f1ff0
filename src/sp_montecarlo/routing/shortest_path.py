from __future__ import annotations
import heapq
import math
from typing import Callable, Dict, Iterator, List, Optional, Tuple

from ..errors import InvalidConfiguration, NegativeWeightError, NoReachableVertices, PathLengthOverflow
from ..topology.graph import Graph

# --- Single-source shortest paths ---
# Lazy-deletion Dijkstra over a binary heap of (distance, vertex):
# improved distances are pushed as new entries and stale ones are
# dropped when popped, so no decrease-key is needed.
# ------------------------------------------------------

# Distance of a vertex the source cannot reach. A finite sum can still
# round up to inf, so dijkstra() refuses any path length that does.
UNREACHABLE = math.inf

RelaxHook = Callable[[int, float, float], None]


class DistanceTable:
    """
    Distances from one source to every vertex 1..n_vertices, produced by a
    single dijkstra() run. Also carries the run's work counters.
    """

    def __init__(self, source: int, n_vertices: int):
        self.source = source
        self.n_vertices = n_vertices
        self._dist: List[float] = [UNREACHABLE] * (n_vertices + 1)
        self.pops = 0
        self.stale_pops = 0
        self.relaxations = 0

    def __len__(self) -> int:
        return self.n_vertices

    def __getitem__(self, v: int) -> float:
        if not (1 <= v <= self.n_vertices):
            raise IndexError(f"vertex {v} outside [1, {self.n_vertices}]")
        return self._dist[v]

    def items(self) -> Iterator[Tuple[int, float]]:
        for v in range(1, self.n_vertices + 1):
            yield v, self._dist[v]

    def as_dict(self) -> Dict[int, float]:
        return dict(self.items())

    def is_reachable(self, v: int) -> bool:
        return self[v] != UNREACHABLE

    def reachable_vertices(self) -> List[int]:
        """Reachable vertices other than the source."""
        return [v for v, d in self.items() if v != self.source and d != UNREACHABLE]


def dijkstra(graph: Graph, source: int, on_relax: Optional[RelaxHook] = None) -> DistanceTable:
    """
    Shortest distances from `source` over a graph with non-negative weights.

    - A popped entry whose distance exceeds the recorded best is stale and
      skipped; otherwise it is final and its neighbors are relaxed.
    - Each strict improvement pushes a new (distance, vertex) entry.
    - on_relax(vertex, old, new) is called on every improvement, if given.

    Raises NegativeWeightError on the first negative or NaN weight scanned,
    and PathLengthOverflow when a vertex is reached only by paths whose
    length rounds up to infinity.
    """
    n = graph.n_vertices
    if not (1 <= source <= n):
        raise InvalidConfiguration(f"source must be in [1, {n}], got {source}")

    table = DistanceTable(source, n)
    dist = table._dist
    dist[source] = 0.0
    pq: List[Tuple[float, int]] = [(0.0, source)]
    overflowed: List[int] = []

    while pq:
        d, u = heapq.heappop(pq)
        table.pops += 1
        if d > dist[u]:
            table.stale_pops += 1
            continue

        for v, w in graph.neighbors(u):
            if not (w >= 0):
                raise NegativeWeightError(w, u, v)
            nd = d + w
            if nd == UNREACHABLE:
                overflowed.append(v)
                continue
            if nd < dist[v]:
                if on_relax is not None:
                    on_relax(v, dist[v], nd)
                dist[v] = nd
                table.relaxations += 1
                heapq.heappush(pq, (nd, v))

    # Only an error if no finite path was found instead.
    for v in overflowed:
        if dist[v] == UNREACHABLE:
            raise PathLengthOverflow(v, UNREACHABLE)
    return table


def average_distance(table: DistanceTable, n_vertices: Optional[int] = None) -> float:
    """
    Mean distance from the source to the vertices it reaches.

    The source and unreachable vertices are left out. Raises
    NoReachableVertices when nothing but the source is reachable.
    """
    if n_vertices is not None and n_vertices != table.n_vertices:
        raise InvalidConfiguration(
            f"n_vertices={n_vertices} does not match distance table size {table.n_vertices}"
        )
    finite = [d for v, d in table.items() if v != table.source and d != UNREACHABLE]
    if not finite:
        raise NoReachableVertices(table.source, table.n_vertices)
    # Scale before summing so n large finite distances cannot overflow.
    n = len(finite)
    return math.fsum(d / n for d in finite)

from __future__ import annotations
from typing import Optional

# --- Error taxonomy ---
# Configuration problems fail fast before any trial runs.
# Negative weights and overflowing path lengths are rejected by the
# shortest-path engine.
# An all-unreachable trial is reported explicitly instead of dividing by zero.
# ------------------------------------------------------


class SimulationError(Exception):
    """Base class for every error raised by sp_montecarlo."""


class InvalidConfiguration(SimulationError, ValueError):
    """Vertex count, density, weight range or run options are out of bounds."""


class NegativeWeightError(SimulationError, ValueError):
    def __init__(self, weight: float, u: Optional[int] = None, v: Optional[int] = None):
        self.weight = weight
        self.u = u
        self.v = v
        where = f" on edge ({u}, {v})" if u is not None else ""
        kind = "negative" if weight < 0 else "non-numeric"
        super().__init__(f"{kind} edge weight {weight!r}{where}")


class PathLengthOverflow(SimulationError, OverflowError):
    """A path length left the finite float range and would read as unreachable."""

    def __init__(self, vertex: int, length: float):
        self.vertex = vertex
        self.length = length
        super().__init__(f"path length to vertex {vertex} overflows ({length!r})")


class NoReachableVertices(SimulationError):
    """
    Every non-source vertex is unreachable, so the average shortest-path
    length of the trial is undefined.
    """

    def __init__(self, source: int, n_vertices: int):
        self.source = source
        self.n_vertices = n_vertices
        super().__init__(
            f"no vertex reachable from source {source} (n_vertices={n_vertices})"
        )

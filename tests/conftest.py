import matplotlib

matplotlib.use("Agg")

import pytest

from sp_montecarlo.topology.graph import Graph


@pytest.fixture
def triangle() -> Graph:
    # 1-2 is longer than the detour through 3.
    return Graph.from_edges(3, [(1, 2, 10.0), (1, 3, 1.0), (3, 2, 1.0)])


@pytest.fixture
def complete5() -> Graph:
    edges = [(i, j, 1.0) for i in range(1, 6) for j in range(i + 1, 6)]
    return Graph.from_edges(5, edges)

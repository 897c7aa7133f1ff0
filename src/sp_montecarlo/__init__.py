from .config import CANONICAL_CONFIGS, DensityConfig, ExperimentConfig
from .errors import (
    InvalidConfiguration,
    NegativeWeightError,
    NoReachableVertices,
    PathLengthOverflow,
    SimulationError,
)
from .topology import Graph, generate_random_graph
from .routing import UNREACHABLE, DistanceTable, average_distance, dijkstra
from .benchmark import run, run_experiment

__all__ = [
    "CANONICAL_CONFIGS",
    "DensityConfig",
    "ExperimentConfig",
    "InvalidConfiguration",
    "NegativeWeightError",
    "NoReachableVertices",
    "PathLengthOverflow",
    "SimulationError",
    "Graph",
    "generate_random_graph",
    "UNREACHABLE",
    "DistanceTable",
    "average_distance",
    "dijkstra",
    "run",
    "run_experiment",
]

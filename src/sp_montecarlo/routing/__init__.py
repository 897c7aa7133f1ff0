from .shortest_path import UNREACHABLE, DistanceTable, dijkstra, average_distance

__all__ = [
    "UNREACHABLE",
    "DistanceTable",
    "dijkstra",
    "average_distance",
]

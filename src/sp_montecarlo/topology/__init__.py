from .graph import Graph, Edge
from .generator import generate_random_graph, generate_for_config
from .stats import graph_summary, reachable_from

__all__ = [
    "Graph",
    "Edge",
    "generate_random_graph",
    "generate_for_config",
    "graph_summary",
    "reachable_from",
]

from __future__ import annotations
import networkx as nx

from .graph import Graph
# Summary statistics for generated graphs.
# Edge and degree counts come straight from the adjacency tuples;
# NetworkX answers the connectivity questions.


def graph_summary(graph: Graph, source: int = 1) -> dict:
    degrees = [len(graph.neighbors(v)) for v in graph.vertices()]
    components = list(nx.connected_components(graph.to_networkx()))
    source_component = next(c for c in components if source in c)

    return {
        "nodes": graph.n_vertices,
        "edges": graph.number_of_edges(),
        "edge_density": graph.edge_density(),
        "connected": len(components) == 1,
        "components": len(components),
        "largest_component_size": max(len(c) for c in components),
        "source_component_size": len(source_component),
        "isolated_vertices": sum(1 for d in degrees if d == 0),
        "degree_min": min(degrees),
        "degree_avg": float(sum(degrees) / len(degrees)),
        "degree_max": max(degrees),
    }


def reachable_from(graph: Graph, source: int) -> set:
    """Vertices connected to `source` (source included), ignoring weights."""
    return set(nx.node_connected_component(graph.to_networkx(), source))

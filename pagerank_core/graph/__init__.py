"""Graph representation, construction and edge-list parsing."""

from pagerank_core.graph.builder import (
    build_graph,
    build_graph_from_edge_list,
    build_graph_from_pairs,
)
from pagerank_core.graph.parser import (
    GraphParseError,
    build_adjacency_list,
    compute_out_degree,
    load_edge_list,
    parse_edge_list,
)
from pagerank_core.graph.types import EdgeList, Graph

__all__ = [
    "EdgeList",
    "Graph",
    "GraphParseError",
    "build_adjacency_list",
    "build_graph",
    "build_graph_from_edge_list",
    "build_graph_from_pairs",
    "compute_out_degree",
    "load_edge_list",
    "parse_edge_list",
]

"""PageRank scoring over directed multigraphs.

Two independent estimators share one graph representation:

- Power Iteration: deterministic, runs an exact number of synchronous steps
- Random Walk: Monte Carlo visit frequencies from seeded surfer walks

Hosts holding flat edge arrays call ``power_iteration`` / ``random_walk``,
which write into a caller-allocated buffer. Python callers can build a
Graph and use the engines directly.
"""

from pagerank_core.graph import Graph, build_graph, parse_edge_list
from pagerank_core.interface import InvalidInputError, power_iteration, random_walk
from pagerank_core.rank import (
    RankResult,
    normalize_scores,
    power_iteration_pagerank,
)
from pagerank_core.walk import random_walk_pagerank

__all__ = [
    "Graph",
    "InvalidInputError",
    "RankResult",
    "build_graph",
    "normalize_scores",
    "parse_edge_list",
    "power_iteration",
    "power_iteration_pagerank",
    "random_walk",
    "random_walk_pagerank",
]

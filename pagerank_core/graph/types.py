"""Graph data structures for PageRank computation."""

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class Graph:
    """Immutable directed multigraph over node ids 0..node_count-1.

    Keeps the edge list in input order alongside a CSR-style adjacency
    whose rows preserve edge insertion order. Duplicate edges are kept.
    """

    node_count: int
    edge_count: int
    edge_sources: np.ndarray  # int64, length edge_count, input order
    edge_targets: np.ndarray  # int64, length edge_count, input order
    out_degree: np.ndarray  # int64, length node_count
    indptr: np.ndarray  # int64, length node_count + 1
    indices: np.ndarray  # int64 targets grouped by source, insertion order

    def neighbors(self, node: int) -> np.ndarray:
        """Targets of ``node`` in edge insertion order."""
        return self.indices[self.indptr[node]:self.indptr[node + 1]]

    def dangling_nodes(self) -> np.ndarray:
        """Ids of nodes with no outgoing edges, ascending."""
        return np.flatnonzero(self.out_degree == 0)


@dataclass(frozen=True)
class EdgeList:
    """Parsed edge list with 0-based node ids."""

    node_count: int
    sources: np.ndarray  # int64
    targets: np.ndarray  # int64
    directed: bool = True
    was_one_based: bool = False  # ids were shifted down by one
    original_max_node_id: int = 0  # largest id as it appeared in the input

    @property
    def edge_count(self) -> int:
        return int(self.sources.shape[0])

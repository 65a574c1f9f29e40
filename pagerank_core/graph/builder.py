"""Graph construction from parallel edge arrays.

No range checking happens here: every source and target must already lie
in [0, node_count). The flat-array entry points in pagerank_core.interface
check that before calling in.
"""

import logging
from typing import Iterable

import numpy as np

from pagerank_core.graph.types import EdgeList, Graph

log = logging.getLogger(__name__)


def build_graph(
    node_count: int,
    edge_sources: np.ndarray | list[int],
    edge_targets: np.ndarray | list[int],
) -> Graph:
    """Build a Graph with out-degrees and insertion-ordered adjacency.

    Adjacency rows are formed with a stable sort on the source id, so the
    targets of each node keep the order in which their edges were given.

    Args:
        node_count: Number of nodes.
        edge_sources: Source id of each edge.
        edge_targets: Target id of each edge, parallel to edge_sources.

    Returns:
        The constructed Graph.
    """
    sources = np.ascontiguousarray(edge_sources, dtype=np.int64).reshape(-1)
    targets = np.ascontiguousarray(edge_targets, dtype=np.int64).reshape(-1)
    edge_count = int(sources.shape[0])

    out_degree = np.bincount(sources, minlength=node_count).astype(np.int64)

    indptr = np.zeros(node_count + 1, dtype=np.int64)
    np.cumsum(out_degree, out=indptr[1:])

    order = np.argsort(sources, kind="stable")
    indices = targets[order]

    log.debug(
        "Built graph: nodes=%d, edges=%d, dangling=%d",
        node_count,
        edge_count,
        int((out_degree == 0).sum()),
    )

    return Graph(
        node_count=node_count,
        edge_count=edge_count,
        edge_sources=sources,
        edge_targets=targets,
        out_degree=out_degree,
        indptr=indptr,
        indices=indices,
    )


def build_graph_from_pairs(
    node_count: int, pairs: Iterable[tuple[int, int]]
) -> Graph:
    """Build a Graph from an iterable of (source, target) pairs."""
    edges = np.array(list(pairs), dtype=np.int64).reshape(-1, 2)
    return build_graph(node_count, edges[:, 0], edges[:, 1])


def build_graph_from_edge_list(edge_list: EdgeList) -> Graph:
    """Build a Graph from parser output."""
    return build_graph(edge_list.node_count, edge_list.sources, edge_list.targets)

"""Exact PageRank by direct sparse solve, used as ground truth.

The dangling-corrected chain solved by Power Iteration satisfies

    x = alpha * S^T x + c * 1,   c = (alpha * sum(x[dangling]) + 1 - alpha) / n

where S is the row-stochastic transition matrix with zero rows for
dangling nodes. Since c is a scalar, x is proportional to the solution y
of (I - alpha * S^T) y = 1, and normalizing y gives x.
"""

import logging

import numpy as np
import scipy.sparse
import scipy.sparse.linalg

from pagerank_core.graph.types import Graph

log = logging.getLogger(__name__)


def transition_matrix_transpose(graph: Graph) -> scipy.sparse.csc_matrix:
    """S^T with S[j, i] = (#edges j -> i) / out_degree[j]."""
    n = graph.node_count
    src = graph.edge_sources
    weights = 1.0 / graph.out_degree[src].astype(np.float64)
    # coo -> csc sums duplicate entries, which is what a multigraph needs
    return scipy.sparse.coo_matrix(
        (weights, (graph.edge_targets, src)), shape=(n, n)
    ).tocsc()


def exact_pagerank(graph: Graph, alpha: float = 0.85) -> np.ndarray:
    """Stationary distribution of the PageRank chain on ``graph``.

    Args:
        graph: Graph with node_count > 0.
        alpha: Damping factor in (0, 1).

    Returns:
        float64 probability vector of length node_count.
    """
    n = graph.node_count
    system = (
        scipy.sparse.identity(n, format="csc", dtype=np.float64)
        - alpha * transition_matrix_transpose(graph)
    )
    y = scipy.sparse.linalg.spsolve(system, np.ones(n, dtype=np.float64))
    y = np.atleast_1d(np.asarray(y, dtype=np.float64))
    x = y / y.sum()
    log.debug("Exact PageRank solved: n=%d, max=%.6g", n, float(x.max()))
    return x

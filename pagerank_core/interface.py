"""Flat-array entry points for host applications.

Both functions take the graph as parallel source/target arrays and write
their scores into a caller-allocated float64 buffer of length node_count.
Preconditions are checked up front and reported as InvalidInputError
rather than producing out-of-bounds reads or division by zero.
"""

import logging
from typing import Any

import numpy as np

from pagerank_core.graph.builder import build_graph
from pagerank_core.rank.power_iteration import power_iteration_pagerank
from pagerank_core.rank.progress import ProgressCallback
from pagerank_core.reproducibility.seed import MAX_SEED
from pagerank_core.walk.monte_carlo import random_walk_pagerank

log = logging.getLogger(__name__)


class InvalidInputError(ValueError):
    """Raised when an entry point's preconditions are not met."""


def _as_edge_array(values: Any, edge_count: int, name: str) -> np.ndarray:
    arr = np.asarray(values, dtype=np.int64).reshape(-1)
    if arr.shape[0] != edge_count:
        raise InvalidInputError(
            f"{name} has {arr.shape[0]} entries, expected edge_count={edge_count}"
        )
    return arr


def _as_result_buffer(result: Any, node_count: int) -> np.ndarray:
    # Only buffer-protocol objects: anything else would be silently copied
    if isinstance(result, np.ndarray):
        out = result
    else:
        try:
            out = np.asarray(memoryview(result))
        except TypeError:
            raise InvalidInputError(
                f"result must support the buffer protocol, got {type(result).__name__}"
            ) from None
    if out.dtype != np.float64:
        raise InvalidInputError(f"result must be float64, got {out.dtype}")
    if out.ndim != 1 or out.shape[0] != node_count:
        raise InvalidInputError(
            f"result has shape {out.shape}, expected ({node_count},)"
        )
    if not out.flags.writeable:
        raise InvalidInputError("result buffer is read-only")
    return out


def _check_graph_args(
    node_count: int,
    edge_count: int,
    edge_sources: Any,
    edge_targets: Any,
    alpha: float,
) -> tuple[np.ndarray, np.ndarray]:
    if node_count <= 0:
        raise InvalidInputError(f"node_count must be positive, got {node_count}")
    if edge_count < 0:
        raise InvalidInputError(f"edge_count must be >= 0, got {edge_count}")
    if not 0.0 < alpha < 1.0:
        raise InvalidInputError(f"alpha must be in (0, 1), got {alpha}")

    sources = _as_edge_array(edge_sources, edge_count, "edge_sources")
    targets = _as_edge_array(edge_targets, edge_count, "edge_targets")

    for name, arr in (("edge_sources", sources), ("edge_targets", targets)):
        if arr.size and (arr.min() < 0 or arr.max() >= node_count):
            raise InvalidInputError(
                f"{name} contains ids outside [0, {node_count})"
            )
    return sources, targets


def power_iteration(
    node_count: int,
    edge_count: int,
    edge_sources: Any,
    edge_targets: Any,
    alpha: float,
    iterations: int,
    result: Any,
    report_progress: ProgressCallback | None = None,
) -> None:
    """Power Iteration PageRank written into ``result``.

    Args:
        node_count: Number of nodes (> 0).
        edge_count: Number of edges.
        edge_sources: Source id per edge, length edge_count.
        edge_targets: Target id per edge, length edge_count.
        alpha: Damping factor in (0, 1).
        iterations: Exact number of synchronous update steps (>= 0).
        result: Writable float64 buffer of length node_count.
        report_progress: Optional percent-done hook.

    Raises:
        InvalidInputError: If a precondition is violated.
    """
    sources, targets = _check_graph_args(
        node_count, edge_count, edge_sources, edge_targets, alpha
    )
    if iterations < 0:
        raise InvalidInputError(f"iterations must be >= 0, got {iterations}")
    out = _as_result_buffer(result, node_count)
    log.debug("power_iteration: inputs valid (nodes=%d, edges=%d)", node_count, edge_count)

    graph = build_graph(node_count, sources, targets)
    ranked = power_iteration_pagerank(graph, alpha, iterations, report_progress)
    out[:] = ranked.scores


def random_walk(
    node_count: int,
    edge_count: int,
    edge_sources: Any,
    edge_targets: Any,
    alpha: float,
    walks_per_node: int,
    result: Any,
    seed: int,
    report_progress: ProgressCallback | None = None,
) -> None:
    """Monte Carlo PageRank written into ``result``.

    Args:
        node_count: Number of nodes (> 0).
        edge_count: Number of edges.
        edge_sources: Source id per edge, length edge_count.
        edge_targets: Target id per edge, length edge_count.
        alpha: Continuation probability in (0, 1).
        walks_per_node: Walks started from every node (>= 0).
        result: Writable float64 buffer of length node_count.
        seed: Unsigned 32-bit seed; equal seeds give equal results.
        report_progress: Optional percent-done hook.

    Raises:
        InvalidInputError: If a precondition is violated.
    """
    sources, targets = _check_graph_args(
        node_count, edge_count, edge_sources, edge_targets, alpha
    )
    if walks_per_node < 0:
        raise InvalidInputError(
            f"walks_per_node must be >= 0, got {walks_per_node}"
        )
    if not 0 <= seed < MAX_SEED:
        raise InvalidInputError(f"seed must be in [0, 2**32), got {seed}")
    out = _as_result_buffer(result, node_count)
    log.debug("random_walk: inputs valid (nodes=%d, edges=%d)", node_count, edge_count)

    graph = build_graph(node_count, sources, targets)
    ranked = random_walk_pagerank(
        graph, alpha, walks_per_node, seed, report_progress
    )
    out[:] = ranked.scores

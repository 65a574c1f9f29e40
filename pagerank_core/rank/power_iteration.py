"""Power Iteration PageRank.

Synchronous fixed-point iteration of the random-surfer chain:

    new[i] = (1 - alpha) / n
           + alpha * sum(pr[d] for dangling d) / n
           + sum(alpha * pr[j] / out_degree[j] for each edge j -> i)

Every step reads only the previous vector. The loop always runs the
requested number of iterations; there is no convergence early exit.
"""

import logging
import time

import numpy as np

from pagerank_core.graph.types import Graph
from pagerank_core.rank.normalize import normalize_scores
from pagerank_core.rank.progress import (
    POWER_ITERATION_REPORT_EVERY,
    ProgressCallback,
    notify,
)
from pagerank_core.rank.types import POWER_ITERATION, RankResult

log = logging.getLogger(__name__)


def power_iteration_step(
    graph: Graph,
    pr: np.ndarray,
    alpha: float,
    dangling: np.ndarray | None = None,
    out: np.ndarray | None = None,
) -> np.ndarray:
    """Compute one synchronous update from ``pr`` without any rescaling.

    Args:
        graph: Graph to iterate on.
        pr: Current score vector (not modified).
        alpha: Damping factor.
        dangling: Precomputed dangling node ids; derived from graph if None.
        out: Optional buffer for the new vector (must not alias ``pr``).

    Returns:
        The new score vector.
    """
    n = graph.node_count
    if dangling is None:
        dangling = graph.dangling_nodes()
    if out is None:
        out = np.empty(n, dtype=np.float64)

    # Teleportation baseline
    out.fill((1.0 - alpha) / n)

    # Dangling mass spread uniformly
    dangling_sum = float(pr[dangling].sum())
    out += alpha * dangling_sum / n

    # Edge contributions, applied in input edge order
    src = graph.edge_sources
    contributions = alpha * pr[src] / graph.out_degree[src]
    np.add.at(out, graph.edge_targets, contributions)

    return out


def power_iteration_pagerank(
    graph: Graph,
    alpha: float = 0.85,
    iterations: int = 100,
    progress: ProgressCallback | None = None,
) -> RankResult:
    """Run exactly ``iterations`` Power Iteration steps.

    Args:
        graph: Graph with node_count > 0.
        alpha: Damping factor in (0, 1).
        iterations: Number of synchronous update steps (>= 0).
        progress: Optional hook called with percent done every 10 steps.

    Returns:
        RankResult holding the normalized score vector.
    """
    n = graph.node_count
    log.info(
        "Starting Power Iteration: nodes=%d, edges=%d, alpha=%s, iterations=%d",
        n, graph.edge_count, alpha, iterations,
    )
    t0 = time.monotonic()

    dangling = graph.dangling_nodes()
    if len(dangling) > 0:
        log.info("Found %d dangling nodes", len(dangling))

    pr = np.full(n, 1.0 / n, dtype=np.float64)
    new_pr = np.empty(n, dtype=np.float64)

    for it in range(iterations):
        power_iteration_step(graph, pr, alpha, dangling, out=new_pr)
        pr, new_pr = new_pr, pr

        if (it + 1) % POWER_ITERATION_REPORT_EVERY == 0:
            notify(progress, it + 1, iterations)

    normalize_scores(pr)

    elapsed_ms = 1000.0 * (time.monotonic() - t0)
    log.info(
        "Completed Power Iteration in %.1fms: sum=%.12g, max=%.6g, min=%.6g",
        elapsed_ms, float(pr.sum()), float(pr.max()), float(pr.min()),
    )

    return RankResult(
        scores=pr,
        algorithm=POWER_ITERATION,
        params={"alpha": alpha, "iterations": iterations},
        elapsed_ms=elapsed_ms,
    )

"""Monte Carlo PageRank via simulated random-surfer walks.

From every start node, walks_per_node walks are simulated. Each walk
records its start node, then keeps going while a uniform draw is below
alpha:

- at a dangling node it teleports to a uniformly random node, records
  that visit and ends
- otherwise it moves to a uniformly chosen entry of the node's adjacency
  row (duplicate edges weigh proportionally) and records the visit

Scores are visit counts divided by total visits. Walks advance in
lockstep batches of at most MAX_BATCH_WALKERS walkers using vectorized
operations on the CSR arrays. All randomness comes from a single
Generator seeded per call.
"""

import logging
import time
from typing import Iterator

import numpy as np

from pagerank_core.graph.types import Graph
from pagerank_core.rank.normalize import normalize_scores
from pagerank_core.rank.progress import ProgressCallback, notify, start_node_slices
from pagerank_core.rank.types import RANDOM_WALK, RankResult
from pagerank_core.reproducibility.seed import make_rng

log = logging.getLogger(__name__)

MAX_BATCH_WALKERS = 1 << 20  # walkers advanced together in one lockstep batch


def _count(nodes: np.ndarray, n: int) -> np.ndarray:
    return np.bincount(nodes, minlength=n).astype(np.uint64)


def simulate_walk_batch(
    graph: Graph,
    start_nodes: np.ndarray,
    alpha: float,
    rng: np.random.Generator,
    visits: np.ndarray,
) -> None:
    """Simulate one walk per entry of ``start_nodes``, adding into ``visits``.

    Args:
        graph: Graph to walk on.
        start_nodes: Start node of each walk.
        alpha: Continuation probability per step.
        rng: Random Generator for reproducibility.
        visits: uint64 visit counter of length node_count, updated in place.
    """
    n = graph.node_count
    indptr = graph.indptr
    indices = graph.indices
    out_degree = graph.out_degree

    current = np.asarray(start_nodes, dtype=np.int64)
    visits += _count(current, n)

    while current.size > 0:
        # Continue only while the draw is below alpha
        keep = rng.random(current.size) < alpha
        current = current[keep]
        if current.size == 0:
            break

        degrees = out_degree[current]
        dangling = degrees == 0
        live = ~dangling
        draws = rng.random(current.size)

        nxt = np.empty_like(current)

        # Dangling: uniform teleport, then the walk ends
        teleport = (draws[dangling] * n).astype(np.int64)
        nxt[dangling] = np.minimum(teleport, n - 1)

        # Otherwise: uniform pick from the adjacency row
        live_degrees = degrees[live]
        offsets = (draws[live] * live_degrees).astype(np.int64)
        offsets = np.minimum(offsets, live_degrees - 1)
        nxt[live] = indices[indptr[current[live]] + offsets]

        visits += _count(nxt, n)
        current = nxt[live]


def walk_batches(
    lo: int,
    hi: int,
    walks_per_node: int,
    max_walkers: int = MAX_BATCH_WALKERS,
) -> Iterator[np.ndarray]:
    """Start-node arrays for walks_per_node walks from each node in [lo, hi).

    Each array holds at most max_walkers entries, so lockstep memory stays
    bounded however large the slice or walks_per_node is. Batches follow
    node order, then walk order, which keeps draws deterministic per seed.
    """
    nodes_per_batch = max_walkers // walks_per_node
    if nodes_per_batch >= 1:
        for start in range(lo, hi, nodes_per_batch):
            stop = min(start + nodes_per_batch, hi)
            yield np.repeat(np.arange(start, stop, dtype=np.int64), walks_per_node)
        return

    # A single node needs more than one batch
    for node in range(lo, hi):
        for done in range(0, walks_per_node, max_walkers):
            size = min(max_walkers, walks_per_node - done)
            yield np.full(size, node, dtype=np.int64)


def count_visits(
    graph: Graph,
    alpha: float,
    walks_per_node: int,
    rng: np.random.Generator,
    progress: ProgressCallback | None = None,
    max_walkers: int = MAX_BATCH_WALKERS,
) -> np.ndarray:
    """Run every walk and return the per-node uint64 visit counts.

    Progress is reported once per start-node slice; inside a slice, walks
    advance in batches of at most ``max_walkers``.
    """
    n = graph.node_count
    visits = np.zeros(n, dtype=np.uint64)
    if walks_per_node <= 0:
        return visits

    for lo, hi in start_node_slices(n):
        for start_nodes in walk_batches(lo, hi, walks_per_node, max_walkers):
            simulate_walk_batch(graph, start_nodes, alpha, rng, visits)
        log.debug("Simulated walks for start nodes [%d, %d)", lo, hi)
        notify(progress, hi, n)

    return visits


def random_walk_pagerank(
    graph: Graph,
    alpha: float = 0.85,
    walks_per_node: int = 1000,
    seed: int = 0,
    progress: ProgressCallback | None = None,
) -> RankResult:
    """Estimate PageRank from node_count * walks_per_node simulated walks.

    Args:
        graph: Graph with node_count > 0.
        alpha: Continuation probability in (0, 1).
        walks_per_node: Walks started from every node (>= 0).
        seed: Seed for the per-call Generator.
        progress: Optional hook called with percent of start nodes done.

    Returns:
        RankResult with the visit-frequency distribution, or exactly the
        uniform distribution when no visits were recorded.
    """
    n = graph.node_count
    log.info(
        "Starting Random Walk: nodes=%d, edges=%d, alpha=%s, walks_per_node=%d, seed=%d",
        n, graph.edge_count, alpha, walks_per_node, seed,
    )
    t0 = time.monotonic()

    dangling_count = int((graph.out_degree == 0).sum())
    if dangling_count > 0:
        log.info("Found %d dangling nodes (no outgoing edges)", dangling_count)

    rng = make_rng(seed)
    visits = count_visits(graph, alpha, walks_per_node, rng, progress)
    total_visits = int(visits.sum())

    params = {"alpha": alpha, "walks_per_node": walks_per_node, "seed": seed}

    if total_visits == 0:
        log.warning("No visits recorded, falling back to uniform distribution")
        return RankResult(
            scores=np.full(n, 1.0 / n, dtype=np.float64),
            algorithm=RANDOM_WALK,
            params=params,
            elapsed_ms=1000.0 * (time.monotonic() - t0),
            total_visits=0,
        )

    scores = visits.astype(np.float64) / float(total_visits)
    normalize_scores(scores)

    elapsed_ms = 1000.0 * (time.monotonic() - t0)
    log.info(
        "Completed Random Walk in %.1fms: total_visits=%d, sum=%.12g, max=%.6g, min=%.6g",
        elapsed_ms, total_visits, float(scores.sum()),
        float(scores.max()), float(scores.min()),
    )

    return RankResult(
        scores=scores,
        algorithm=RANDOM_WALK,
        params=params,
        elapsed_ms=elapsed_ms,
        total_visits=total_visits,
    )

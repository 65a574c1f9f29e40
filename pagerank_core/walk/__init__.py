"""Monte Carlo PageRank estimation via simulated random walks."""

from pagerank_core.walk.monte_carlo import (
    MAX_BATCH_WALKERS,
    count_visits,
    random_walk_pagerank,
    simulate_walk_batch,
    walk_batches,
)

__all__ = [
    "MAX_BATCH_WALKERS",
    "count_visits",
    "random_walk_pagerank",
    "simulate_walk_batch",
    "walk_batches",
]

"""Config-driven dispatch to the PageRank engines."""

import logging

import numpy as np

from pagerank_core.config.experiment import RunConfig
from pagerank_core.evaluation.reference import exact_pagerank
from pagerank_core.graph.types import Graph
from pagerank_core.rank.power_iteration import power_iteration_pagerank
from pagerank_core.rank.progress import ProgressCallback
from pagerank_core.rank.types import POWER_ITERATION, RankResult
from pagerank_core.walk.monte_carlo import random_walk_pagerank

log = logging.getLogger(__name__)

GROUND_TRUTH_CHOICES = ("none", "exact", "power")


def run_algorithm(
    config: RunConfig,
    graph: Graph,
    progress: ProgressCallback | None = None,
) -> RankResult:
    """Run the engine selected by ``config.algorithm`` on ``graph``."""
    if config.algorithm == POWER_ITERATION:
        return power_iteration_pagerank(
            graph,
            alpha=config.power.alpha,
            iterations=config.power.iterations,
            progress=progress,
        )
    return random_walk_pagerank(
        graph,
        alpha=config.walk.alpha,
        walks_per_node=config.walk.walks_per_node,
        seed=config.seed,
        progress=progress,
    )


def compute_ground_truth(
    config: RunConfig, graph: Graph, method: str
) -> np.ndarray | None:
    """Reference vector to compare a run against.

    Args:
        config: Run configuration (its alpha is reused).
        graph: Graph the run was computed on.
        method: "exact" for a direct sparse solve, "power" for Power
            Iteration with the configured iteration count, "none" to skip.

    Returns:
        The reference scores, or None for "none".
    """
    if method not in GROUND_TRUTH_CHOICES:
        raise ValueError(
            f"ground truth method must be one of {GROUND_TRUTH_CHOICES}, got {method!r}"
        )
    if method == "none":
        return None
    log.info("Computing %s ground truth", method)
    if method == "exact":
        return exact_pagerank(graph, config.alpha)
    return power_iteration_pagerank(
        graph, alpha=config.alpha, iterations=config.power.iterations
    ).scores

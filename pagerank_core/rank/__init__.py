"""Power Iteration PageRank, shared normalization and result types."""

from pagerank_core.rank.normalize import SUM_TOLERANCE, normalize_scores
from pagerank_core.rank.power_iteration import (
    power_iteration_pagerank,
    power_iteration_step,
)
from pagerank_core.rank.progress import ProgressCallback
from pagerank_core.rank.types import (
    ALGORITHMS,
    POWER_ITERATION,
    RANDOM_WALK,
    RankResult,
)

__all__ = [
    "ALGORITHMS",
    "POWER_ITERATION",
    "ProgressCallback",
    "RANDOM_WALK",
    "RankResult",
    "SUM_TOLERANCE",
    "normalize_scores",
    "power_iteration_pagerank",
    "power_iteration_step",
]

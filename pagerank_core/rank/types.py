"""Result container shared by the PageRank engines."""

from dataclasses import dataclass, field
from typing import Any

import numpy as np

POWER_ITERATION = "power-iteration"
RANDOM_WALK = "random-walk"
ALGORITHMS = (POWER_ITERATION, RANDOM_WALK)


@dataclass(frozen=True)
class RankResult:
    """Scores from one engine run plus the parameters that produced them."""

    scores: np.ndarray  # float64, length node_count, sums to ~1
    algorithm: str  # POWER_ITERATION or RANDOM_WALK
    params: dict[str, Any] = field(default_factory=dict)
    elapsed_ms: float = 0.0
    total_visits: int | None = None  # random walk only

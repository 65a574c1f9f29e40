"""Frozen run configuration dataclasses with cross-field validation."""

from dataclasses import dataclass, field

from pagerank_core.rank.types import ALGORITHMS, POWER_ITERATION
from pagerank_core.reproducibility.seed import MAX_SEED


@dataclass(frozen=True, slots=True)
class PowerIterationConfig:
    """Power Iteration parameters."""

    alpha: float = 0.85  # damping factor
    iterations: int = 100  # exact number of update steps


@dataclass(frozen=True, slots=True)
class RandomWalkConfig:
    """Monte Carlo parameters."""

    alpha: float = 0.85  # continuation probability
    walks_per_node: int = 1000


@dataclass(frozen=True, slots=True)
class RunConfig:
    """Top-level configuration for one PageRank run.

    All fields are frozen and typed. Cross-parameter validation runs
    in __post_init__ to reject invalid configurations early.
    """

    algorithm: str = POWER_ITERATION
    power: PowerIterationConfig = field(default_factory=PowerIterationConfig)
    walk: RandomWalkConfig = field(default_factory=RandomWalkConfig)
    seed: int = 42
    dataset: str = ""  # edge list path or dataset label
    directed: bool = True
    top_n: int = 10
    description: str = ""
    tags: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.algorithm not in ALGORITHMS:
            raise ValueError(
                f"algorithm must be one of {ALGORITHMS}, got {self.algorithm!r}"
            )
        for name, alpha in (("power.alpha", self.power.alpha), ("walk.alpha", self.walk.alpha)):
            if not 0.0 < alpha < 1.0:
                raise ValueError(f"{name} must be in (0, 1), got {alpha}")
        if self.power.iterations < 0:
            raise ValueError(
                f"power.iterations must be >= 0, got {self.power.iterations}"
            )
        if self.walk.walks_per_node < 0:
            raise ValueError(
                f"walk.walks_per_node must be >= 0, got {self.walk.walks_per_node}"
            )
        if not 0 <= self.seed < MAX_SEED:
            raise ValueError(f"seed must be in [0, 2**32), got {self.seed}")
        if self.top_n < 0:
            raise ValueError(f"top_n must be >= 0, got {self.top_n}")

    @property
    def alpha(self) -> float:
        """Alpha of the selected algorithm."""
        if self.algorithm == POWER_ITERATION:
            return self.power.alpha
        return self.walk.alpha

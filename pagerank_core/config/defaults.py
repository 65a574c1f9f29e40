"""Default run parameters."""

from pagerank_core.config.experiment import RunConfig

# alpha=0.85, iterations=100, walks_per_node=1000, seed=42
DEFAULT_CONFIG = RunConfig()

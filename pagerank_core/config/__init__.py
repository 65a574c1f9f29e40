"""Run configuration system with frozen, hashable, serializable dataclasses."""

from pagerank_core.config.experiment import (
    PowerIterationConfig,
    RandomWalkConfig,
    RunConfig,
)
from pagerank_core.config.defaults import DEFAULT_CONFIG
from pagerank_core.config.hashing import (
    algorithm_config_hash,
    algorithm_hash_exclusions,
    config_hash,
    full_config_hash,
)
from pagerank_core.config.serialization import (
    config_from_dict,
    config_from_json,
    config_to_dict,
    config_to_json,
    load_config,
)

__all__ = [
    "PowerIterationConfig",
    "RandomWalkConfig",
    "RunConfig",
    "DEFAULT_CONFIG",
    "algorithm_config_hash",
    "algorithm_hash_exclusions",
    "config_hash",
    "full_config_hash",
    "config_from_dict",
    "config_from_json",
    "config_to_dict",
    "config_to_json",
    "load_config",
]

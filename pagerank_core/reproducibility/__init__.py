"""Reproducibility infrastructure: seeded generators and code provenance tracking."""

from pagerank_core.reproducibility.seed import (
    MAX_SEED,
    make_rng,
    random_seed,
    verify_seed_determinism,
)
from pagerank_core.reproducibility.git_hash import get_git_hash

__all__ = [
    "MAX_SEED",
    "make_rng",
    "random_seed",
    "verify_seed_determinism",
    "get_git_hash",
]

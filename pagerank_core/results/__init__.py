"""Result schema validation, writing, and run ID generation."""

from pagerank_core.results.schema import (
    claim_run_dir,
    load_result,
    load_scores,
    validate_result,
    write_result,
)
from pagerank_core.results.run_id import generate_run_id

__all__ = [
    "claim_run_dir",
    "validate_result",
    "write_result",
    "load_result",
    "load_scores",
    "generate_run_id",
]

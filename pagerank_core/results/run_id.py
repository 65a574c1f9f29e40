"""Run ID generation with scannable parameter slug format."""

from datetime import datetime, timezone

from pagerank_core.config.experiment import RunConfig
from pagerank_core.rank.types import POWER_ITERATION


def generate_run_id(config: RunConfig) -> str:
    """Generate a scannable run ID from config parameters.

    Format: {pi|rw}_a{alpha}_{i{iterations}|w{walks_per_node}}_s{seed}_{YYYYMMDD}_{HHMMSS}
    Example: pi_a0.85_i100_s42_20260224_143012
    """
    ts = datetime.now(timezone.utc)
    if config.algorithm == POWER_ITERATION:
        slug = f"pi_a{config.power.alpha}_i{config.power.iterations}"
    else:
        slug = f"rw_a{config.walk.alpha}_w{config.walk.walks_per_node}"
    return f"{slug}_s{config.seed}_{ts.strftime('%Y%m%d_%H%M%S')}"

"""Result schema validation and writing.

Uses a Python validation function (not jsonschema) to check required fields,
types, and top-node consistency before writing result.json files.
"""

import json
import logging
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import numpy as np

from pagerank_core.config.experiment import RunConfig
from pagerank_core.config.hashing import algorithm_config_hash, full_config_hash
from pagerank_core.evaluation.metrics import ErrorMetrics
from pagerank_core.evaluation.ranking import top_nodes
from pagerank_core.rank.types import ALGORITHMS, RankResult
from pagerank_core.reproducibility.git_hash import get_git_hash
from pagerank_core.results.run_id import generate_run_id

log = logging.getLogger(__name__)

SCHEMA_VERSION = "1.0"

REQUIRED_TOP_FIELDS = {
    "schema_version",
    "run_id",
    "timestamp",
    "algorithm",
    "dataset",
    "config",
    "metrics",
    "top_nodes",
}

REQUIRED_SCALARS = {"node_count", "score_sum", "elapsed_ms"}


def validate_result(result: dict[str, Any]) -> list[str]:
    """Validate a result dict against the project schema.

    Returns a list of error strings. An empty list means the result is valid.
    """
    errors: list[str] = []

    missing = REQUIRED_TOP_FIELDS - set(result.keys())
    if missing:
        errors.append(f"Missing required top-level fields: {sorted(missing)}")

    if "schema_version" in result and not isinstance(result["schema_version"], str):
        errors.append("schema_version must be a string")

    if "algorithm" in result and result["algorithm"] not in ALGORITHMS:
        errors.append(f"algorithm must be one of {list(ALGORITHMS)}")

    if "config" in result and not isinstance(result["config"], dict):
        errors.append("config must be a dict")

    if "timestamp" in result:
        ts = result["timestamp"]
        if not isinstance(ts, str):
            errors.append("timestamp must be a string")
        else:
            try:
                datetime.fromisoformat(ts)
            except ValueError:
                errors.append("timestamp must be in ISO 8601 format")

    if "metrics" in result:
        metrics = result["metrics"]
        if not isinstance(metrics, dict):
            errors.append("metrics must be a dict")
        elif not isinstance(metrics.get("scalars"), dict):
            errors.append("metrics.scalars is required")
        else:
            absent = REQUIRED_SCALARS - set(metrics["scalars"])
            if absent:
                errors.append(f"metrics.scalars missing fields: {sorted(absent)}")

            # Optional error block (present when compared to a ground truth)
            error = metrics.get("error")
            if error is not None:
                if not isinstance(error, dict):
                    errors.append("metrics.error must be a dict")
                else:
                    for field in ["l1", "l2", "max_relative", "qualified_nodes"]:
                        if field not in error:
                            errors.append(f"metrics.error missing field: {field}")

    if "top_nodes" in result:
        nodes = result["top_nodes"]
        if not isinstance(nodes, list):
            errors.append("top_nodes must be a list")
        else:
            for i, node in enumerate(nodes):
                if not isinstance(node, dict) or node.get("rank") != i + 1:
                    errors.append(f"top_nodes[{i}] must be a dict with rank {i + 1}")

    return errors


def claim_run_dir(results_dir: Path, run_id: str) -> tuple[str, Path]:
    """Create a fresh directory for ``run_id``, never reusing an existing one.

    When the id is taken (two runs of one config in the same second), a
    numeric suffix is appended: ``{run_id}_2``, ``{run_id}_3``, ...
    """
    results_dir.mkdir(parents=True, exist_ok=True)
    candidate = run_id
    suffix = 1
    while True:
        try:
            (results_dir / candidate).mkdir()
            return candidate, results_dir / candidate
        except FileExistsError:
            suffix += 1
            candidate = f"{run_id}_{suffix}"


def write_result(
    config: RunConfig,
    rank_result: RankResult,
    error_metrics: ErrorMetrics | None = None,
    metadata: dict[str, Any] | None = None,
    results_dir: str = "results",
) -> str:
    """Write result.json and scores.npy for one run.

    Creates results/{run_id}/ containing result.json (config, scalar
    metrics, top nodes, provenance) and scores.npy (the full vector).

    Args:
        config: The run configuration.
        rank_result: Scores and parameters from the engine.
        error_metrics: Optional comparison against a ground truth.
        metadata: Optional additional metadata to merge into the metadata block.
        results_dir: Base directory for result output.

    Returns:
        The run_id, with a numeric suffix if the generated id was taken.

    Raises:
        ValueError: If the assembled result fails validation.
    """
    run_id = generate_run_id(config)

    scores = rank_result.scores
    scalars: dict[str, Any] = {
        "node_count": int(scores.shape[0]),
        "score_sum": float(scores.sum()),
        "score_max": float(scores.max()),
        "score_min": float(scores.min()),
        "elapsed_ms": float(rank_result.elapsed_ms),
    }
    if rank_result.total_visits is not None:
        scalars["total_visits"] = int(rank_result.total_visits)

    metrics: dict[str, Any] = {"scalars": scalars}
    if error_metrics is not None:
        metrics["error"] = asdict(error_metrics)

    result = {
        "schema_version": SCHEMA_VERSION,
        "run_id": run_id,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "algorithm": rank_result.algorithm,
        "dataset": config.dataset,
        "description": config.description,
        "tags": list(config.tags),
        "config": asdict(config),
        "params": dict(rank_result.params),
        "metrics": metrics,
        "top_nodes": [asdict(node) for node in top_nodes(scores, config.top_n)],
        "metadata": {
            "code_hash": get_git_hash(),
            "config_hash": full_config_hash(config),
            "algorithm_config_hash": algorithm_config_hash(config),
            **(metadata or {}),
        },
    }

    errors = validate_result(result)
    if errors:
        raise ValueError(
            "Result validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        )

    # A taken id gets a numeric suffix
    run_id, out_dir = claim_run_dir(Path(results_dir), run_id)
    result["run_id"] = run_id

    with open(out_dir / "result.json", "w") as f:
        json.dump(result, f, indent=2)
    np.save(out_dir / "scores.npy", scores)

    log.info("Result written to %s", out_dir)
    return run_id


def load_result(result_path: str | Path) -> dict[str, Any]:
    """Load and validate a result.json file.

    Args:
        result_path: Path to the result.json file.

    Returns:
        The loaded and validated result dict.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the loaded result fails validation.
    """
    path = Path(result_path)
    with open(path) as f:
        result = json.load(f)

    errors = validate_result(result)
    if errors:
        raise ValueError(
            f"Result validation failed for {path}:\n"
            + "\n".join(f"  - {e}" for e in errors)
        )

    return result


def load_scores(run_dir: str | Path) -> np.ndarray:
    """Load the full score vector saved next to result.json."""
    return np.load(Path(run_dir) / "scores.npy")

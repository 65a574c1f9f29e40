"""Deterministic config hashing using SHA-256 over sorted JSON."""

import hashlib
import json
from dataclasses import asdict
from typing import Any

from pagerank_core.config.experiment import RunConfig
from pagerank_core.rank.types import POWER_ITERATION

PRESENTATION_FIELDS = ["description", "tags", "top_n"]  # never affect scores


def _remove_nested(d: dict[str, Any], field_path: str) -> None:
    """Remove a dotted-path key from a nested dict.

    Example: _remove_nested(d, "walk.alpha") removes d["walk"]["alpha"].
    """
    parts = field_path.split(".")
    current = d
    for part in parts[:-1]:
        if part not in current or not isinstance(current[part], dict):
            return
        current = current[part]
    current.pop(parts[-1], None)


def config_hash(config: Any, exclude_fields: list[str] | None = None) -> str:
    """Deterministic SHA-256 hash of a config object.

    Args:
        config: Any dataclass instance (or sub-config).
        exclude_fields: Optional list of dotted field paths to exclude.

    Returns:
        First 16 hex characters of the SHA-256 hash.
    """
    d = asdict(config)
    if exclude_fields:
        for field_path in exclude_fields:
            _remove_nested(d, field_path)
    serialized = json.dumps(
        d,
        sort_keys=True,
        ensure_ascii=True,
        separators=(",", ":"),
        indent=None,
    )
    return hashlib.sha256(serialized.encode("utf-8")).hexdigest()[:16]


def algorithm_hash_exclusions(config: RunConfig) -> list[str]:
    """Fields that cannot change the scores of ``config``'s algorithm."""
    if config.algorithm == POWER_ITERATION:
        return PRESENTATION_FIELDS + ["walk", "seed"]
    return PRESENTATION_FIELDS + ["power"]


def algorithm_config_hash(config: RunConfig) -> str:
    """Hash of only what changes the scores.

    Description, tags and top_n are presentation; the sub-config of the
    algorithm that was not selected is ignored, and the seed only counts
    for the random walk.
    """
    return config_hash(config, exclude_fields=algorithm_hash_exclusions(config))


def full_config_hash(config: RunConfig) -> str:
    """Hash of every field, presentation included."""
    return config_hash(config)

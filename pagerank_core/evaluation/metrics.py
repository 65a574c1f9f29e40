"""Error metrics comparing a PageRank vector against a ground truth.

L1 and L2 distances over all nodes, plus the maximum relative error over
"qualified" nodes whose ground-truth score exceeds the uniform 1/n.
"""

import logging
from dataclasses import dataclass

import numpy as np

log = logging.getLogger(__name__)

Vector = np.ndarray | list[float]


class VectorLengthMismatchError(ValueError):
    """Raised when compared vectors have different lengths."""

    def __init__(self, len1: int, len2: int) -> None:
        super().__init__(f"Vector length mismatch: {len1} vs {len2}")
        self.len1 = len1
        self.len2 = len2


@dataclass(frozen=True, slots=True)
class ErrorMetrics:
    """Error of one result against a ground truth."""

    l1: float
    l2: float
    max_relative: float
    qualified_nodes: int


def _pair(pr: Vector, gt: Vector) -> tuple[np.ndarray, np.ndarray]:
    pr = np.asarray(pr, dtype=np.float64)
    gt = np.asarray(gt, dtype=np.float64)
    if pr.shape[0] != gt.shape[0]:
        raise VectorLengthMismatchError(pr.shape[0], gt.shape[0])
    return pr, gt


def calculate_l1(pr: Vector, gt: Vector) -> float:
    """Sum of absolute differences."""
    pr, gt = _pair(pr, gt)
    return float(np.abs(pr - gt).sum())


def calculate_l2(pr: Vector, gt: Vector) -> float:
    """Euclidean distance."""
    pr, gt = _pair(pr, gt)
    return float(np.sqrt(np.square(pr - gt).sum()))


def calculate_max_relative(pr: Vector, gt: Vector, n: int) -> tuple[float, int]:
    """Maximum |pr - gt| / gt over nodes with gt > 1/n.

    Args:
        pr: Computed PageRank vector.
        gt: Ground-truth PageRank vector.
        n: Node count used for the 1/n threshold.

    Returns:
        (max_relative, qualified_nodes). max_relative is 0.0 when no node
        qualifies.
    """
    pr, gt = _pair(pr, gt)
    threshold = 1.0 / n
    qualified = gt > threshold
    qualified_nodes = int(qualified.sum())

    if qualified_nodes == 0:
        log.warning(
            "No nodes met threshold %.6g for max relative error (n=%d)",
            threshold,
            n,
        )
        return 0.0, 0

    rel = np.abs(pr[qualified] - gt[qualified]) / gt[qualified]
    return float(rel.max()), qualified_nodes


def calculate_error_metrics(pr: Vector, gt: Vector) -> ErrorMetrics:
    """All error metrics for ``pr`` against ``gt``."""
    pr, gt = _pair(pr, gt)
    max_relative, qualified_nodes = calculate_max_relative(pr, gt, pr.shape[0])
    metrics = ErrorMetrics(
        l1=calculate_l1(pr, gt),
        l2=calculate_l2(pr, gt),
        max_relative=max_relative,
        qualified_nodes=qualified_nodes,
    )
    log.info(
        "Error metrics: l1=%.3e, l2=%.3e, max_relative=%.4f (%d nodes)",
        metrics.l1, metrics.l2, metrics.max_relative, metrics.qualified_nodes,
    )
    return metrics


def format_error_metrics(metrics: ErrorMetrics) -> str:
    """One-line human readable summary."""
    return (
        f"L1: {metrics.l1:.3e}, L2: {metrics.l2:.3e}, "
        f"Max Relative: {metrics.max_relative * 100:.2f}% "
        f"({metrics.qualified_nodes} nodes)"
    )

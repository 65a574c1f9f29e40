"""Sum-correction shared by both PageRank engines."""

import logging

import numpy as np

log = logging.getLogger(__name__)

SUM_TOLERANCE = 1e-6


def normalize_scores(
    scores: np.ndarray, tol: float = SUM_TOLERANCE
) -> tuple[np.ndarray, bool]:
    """Rescale ``scores`` in place so they sum to 1 when drift exceeds ``tol``.

    Vectors already within ``tol`` of unit mass are left untouched, so the
    output of a well-behaved run is not perturbed by an extra division.

    Args:
        scores: float64 score vector, modified in place.
        tol: Allowed absolute deviation of the sum from 1.0.

    Returns:
        (scores, rescaled) where rescaled tells whether a division happened.
    """
    total = float(scores.sum())
    if abs(total - 1.0) > tol:
        log.warning("PageRank sum not 1.0: %.12g, normalizing", total)
        scores /= total
        return scores, True
    return scores, False

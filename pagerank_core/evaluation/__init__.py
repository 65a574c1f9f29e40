"""Evaluation against ground truth: exact solve, error metrics, top nodes."""

from pagerank_core.evaluation.metrics import (
    ErrorMetrics,
    VectorLengthMismatchError,
    calculate_error_metrics,
    calculate_l1,
    calculate_l2,
    calculate_max_relative,
    format_error_metrics,
)
from pagerank_core.evaluation.ranking import TopNode, top_nodes
from pagerank_core.evaluation.reference import (
    exact_pagerank,
    transition_matrix_transpose,
)

__all__ = [
    "ErrorMetrics",
    "TopNode",
    "VectorLengthMismatchError",
    "calculate_error_metrics",
    "calculate_l1",
    "calculate_l2",
    "calculate_max_relative",
    "exact_pagerank",
    "format_error_metrics",
    "top_nodes",
    "transition_matrix_transpose",
]

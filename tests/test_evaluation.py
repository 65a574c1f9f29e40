"""Tests for error metrics, top-N extraction and the exact reference solve."""

import typing

import numpy as np
import pytest

from pagerank_core.evaluation import (
    ErrorMetrics,
    VectorLengthMismatchError,
    calculate_error_metrics,
    calculate_l1,
    calculate_l2,
    calculate_max_relative,
    exact_pagerank,
    format_error_metrics,
    top_nodes,
    transition_matrix_transpose,
)
from pagerank_core.graph import build_graph


class TestL1L2:
    """Distance metrics over all nodes."""

    def test_l1(self) -> None:
        assert calculate_l1([0.3, 0.3, 0.4], [0.35, 0.25, 0.4]) == pytest.approx(0.1)

    def test_l2(self) -> None:
        assert calculate_l2([0.3, 0.4], [0.6, 0.4]) == pytest.approx(0.3)

    def test_identical_vectors(self) -> None:
        assert calculate_l1([0.2, 0.3, 0.5], [0.2, 0.3, 0.5]) == 0.0
        assert calculate_l2([0.25, 0.75], [0.25, 0.75]) == 0.0

    @pytest.mark.parametrize("fn", [calculate_l1, calculate_l2])
    def test_length_mismatch(self, fn) -> None:
        with pytest.raises(VectorLengthMismatchError, match="2 vs 3"):
            fn([0.5, 0.5], [0.33, 0.33, 0.34])


class TestMaxRelative:
    """Relative error over nodes with ground truth above 1/n."""

    def test_max_relative(self) -> None:
        # threshold 0.2: nodes 0 and 3 qualify, errors 0.25 and 0.2
        max_rel, qualified = calculate_max_relative(
            [0.3, 0.2, 0.2, 0.3], [0.4, 0.2, 0.15, 0.25], 5
        )
        assert max_rel == pytest.approx(0.25)
        assert qualified == 2

    def test_threshold_is_strict(self) -> None:
        # gt exactly 1/n does not qualify
        _, qualified = calculate_max_relative([0.3, 0.2, 0.2, 0.3], [0.4, 0.2, 0.15, 0.25], 4)
        assert qualified == 1

    def test_identical_vectors(self) -> None:
        max_rel, qualified = calculate_max_relative(
            [0.1, 0.2, 0.3, 0.4], [0.1, 0.2, 0.3, 0.4], 4
        )
        assert max_rel == 0.0
        assert qualified == 2

    def test_no_qualified_nodes(self) -> None:
        max_rel, qualified = calculate_max_relative([0.25] * 4, [0.25] * 4, 4)
        assert (max_rel, qualified) == (0.0, 0)

    def test_length_mismatch(self) -> None:
        with pytest.raises(VectorLengthMismatchError):
            calculate_max_relative([0.5, 0.5], [0.33, 0.33, 0.34], 3)

    def test_mismatch_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            calculate_max_relative([0.5], [0.5, 0.5], 2)


class TestErrorMetrics:
    """Combined metrics and formatting."""

    def test_all_metrics(self) -> None:
        metrics = calculate_error_metrics([0.3, 0.3, 0.4], [0.35, 0.25, 0.4])
        assert metrics.l1 == pytest.approx(0.1)
        assert metrics.l2 == pytest.approx(0.0707107, abs=1e-6)
        assert metrics.max_relative > 0
        assert metrics.qualified_nodes > 0

    def test_format(self) -> None:
        metrics = ErrorMetrics(l1=0.001234, l2=0.0005, max_relative=0.0321, qualified_nodes=7)
        assert format_error_metrics(metrics) == (
            "L1: 1.234e-03, L2: 5.000e-04, Max Relative: 3.21% (7 nodes)"
        )


class TestTopNodes:
    """Highest scores first, ties in id order."""

    def test_order_and_ranks(self) -> None:
        result = top_nodes([0.1, 0.4, 0.2, 0.3], count=3)
        assert [t.node_id for t in result] == [1, 3, 2]
        assert [t.rank for t in result] == [1, 2, 3]
        assert result[0].score == pytest.approx(0.4)

    def test_ties_keep_id_order(self) -> None:
        result = top_nodes([0.25, 0.25, 0.25, 0.25], count=4)
        assert [t.node_id for t in result] == [0, 1, 2, 3]

    def test_count_larger_than_nodes(self) -> None:
        assert len(top_nodes([0.5, 0.5], count=10)) == 2

    def test_zero_count(self) -> None:
        assert top_nodes([0.5, 0.5], count=0) == []


class TestExactPageRank:
    """Direct sparse solve."""

    def test_cycle_uniform(self) -> None:
        graph = build_graph(3, [0, 1, 2], [1, 2, 0])
        np.testing.assert_allclose(exact_pagerank(graph), [1 / 3] * 3, atol=1e-12)

    def test_single_node(self) -> None:
        np.testing.assert_allclose(exact_pagerank(build_graph(1, [], [])), [1.0])

    def test_star_hub(self) -> None:
        n, alpha = 5, 0.85
        graph = build_graph(n, list(range(1, n)), [0] * (n - 1))
        hub = (n - (n - 1) * (1 - alpha)) / (n + (n - 1) * alpha)
        assert exact_pagerank(graph, alpha)[0] == pytest.approx(hub, abs=1e-12)

    def test_transition_sums_duplicates(self) -> None:
        graph = build_graph(3, [0, 0, 0], [1, 1, 2])
        st = transition_matrix_transpose(graph).toarray()
        assert st[1, 0] == pytest.approx(2 / 3)
        assert st[2, 0] == pytest.approx(1 / 3)
        # Dangling columns are empty
        assert st[:, 1].sum() == 0.0


class TestAnnotations:
    """Vector parameters carry type hints."""

    @pytest.mark.parametrize(
        "fn", [calculate_l1, calculate_l2, calculate_max_relative, calculate_error_metrics]
    )
    def test_metric_vectors_annotated(self, fn) -> None:
        hints = typing.get_type_hints(fn)
        assert hints["pr"] == np.ndarray | list[float]
        assert hints["gt"] == np.ndarray | list[float]

    def test_top_nodes_scores_annotated(self) -> None:
        assert typing.get_type_hints(top_nodes)["scores"] == np.ndarray | list[float]

    def test_list_inputs_accepted(self) -> None:
        assert calculate_l1([0.5, 0.5], np.array([0.5, 0.5])) == 0.0
        assert top_nodes([0.2, 0.8], count=1)[0].node_id == 1

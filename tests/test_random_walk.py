"""Tests for Monte Carlo PageRank.

Covers normalization, same-seed reproducibility, the zero-visit uniform
fallback, dangling teleport-and-stop behavior, multigraph weighting,
agreement with the exact solve, and RNG isolation from global state.
"""

import numpy as np
import pytest

from pagerank_core.evaluation.reference import exact_pagerank
from pagerank_core.graph import build_graph, build_graph_from_pairs
from pagerank_core.graph.types import Graph
from pagerank_core.rank import RANDOM_WALK
from pagerank_core.rank.progress import start_node_slices
from pagerank_core.reproducibility import make_rng
from pagerank_core.walk import (
    MAX_BATCH_WALKERS,
    count_visits,
    random_walk_pagerank,
    simulate_walk_batch,
    walk_batches,
)
from pagerank_core.walk import monte_carlo


def _make_strongly_connected_graph() -> Graph:
    """Five-node cycle with chords; no dangling nodes."""
    pairs = [(0, 1), (1, 2), (2, 3), (3, 4), (4, 0), (0, 2), (3, 0), (1, 4)]
    return build_graph_from_pairs(5, pairs)


def _make_random_graph(n: int = 20, m: int = 60, seed: int = 3) -> Graph:
    rng = np.random.default_rng(seed)
    return build_graph(n, rng.integers(0, n - 2, size=m), rng.integers(0, n, size=m))


class TestDistributionInvariants:
    """Output is a probability distribution."""

    def test_sums_to_one(self) -> None:
        result = random_walk_pagerank(_make_random_graph(), 0.85, 50, seed=1)
        assert abs(result.scores.sum() - 1.0) <= 1e-6

    def test_non_negative(self) -> None:
        result = random_walk_pagerank(_make_random_graph(), 0.85, 50, seed=1)
        assert np.all(result.scores >= 0)

    def test_result_metadata(self) -> None:
        result = random_walk_pagerank(_make_random_graph(), 0.85, 10, seed=5)
        assert result.algorithm == RANDOM_WALK
        assert result.params == {"alpha": 0.85, "walks_per_node": 10, "seed": 5}
        # Every walk records at least its start node
        assert result.total_visits >= 20 * 10


class TestReproducibility:
    """Same seed and inputs give identical output."""

    def test_same_seed_identical(self) -> None:
        graph = _make_random_graph()
        r1 = random_walk_pagerank(graph, 0.85, 100, seed=42)
        r2 = random_walk_pagerank(graph, 0.85, 100, seed=42)
        np.testing.assert_array_equal(r1.scores, r2.scores)
        assert r1.total_visits == r2.total_visits

    def test_different_seed_differs(self) -> None:
        graph = _make_random_graph()
        r1 = random_walk_pagerank(graph, 0.85, 100, seed=1)
        r2 = random_walk_pagerank(graph, 0.85, 100, seed=2)
        assert not np.array_equal(r1.scores, r2.scores)

    def test_independent_of_global_numpy_state(self) -> None:
        graph = _make_random_graph()
        np.random.seed(0)
        r1 = random_walk_pagerank(graph, 0.85, 50, seed=9)
        np.random.seed(12345)
        r2 = random_walk_pagerank(graph, 0.85, 50, seed=9)
        np.testing.assert_array_equal(r1.scores, r2.scores)

    def test_does_not_touch_global_numpy_state(self) -> None:
        np.random.seed(7)
        expected = np.random.random(5)
        np.random.seed(7)
        random_walk_pagerank(_make_random_graph(), 0.85, 50, seed=9)
        np.testing.assert_array_equal(np.random.random(5), expected)


class TestDegenerateCases:
    """Uniform fallback and trivial graphs."""

    def test_zero_walks_is_exactly_uniform(self) -> None:
        graph = _make_random_graph()
        result = random_walk_pagerank(graph, 0.85, 0, seed=1)
        np.testing.assert_array_equal(
            result.scores, np.full(graph.node_count, 1.0 / graph.node_count)
        )
        assert result.total_visits == 0

    @pytest.mark.parametrize("walks", [1, 10, 500])
    def test_single_isolated_node(self, walks: int) -> None:
        graph = build_graph(1, [], [])
        result = random_walk_pagerank(graph, 0.85, walks, seed=3)
        np.testing.assert_array_equal(result.scores, [1.0])

    def test_tiny_alpha_visits_only_start_nodes(self) -> None:
        graph = _make_strongly_connected_graph()
        result = random_walk_pagerank(graph, 1e-12, 40, seed=0)
        assert result.total_visits == 5 * 40
        np.testing.assert_array_equal(result.scores, np.full(5, 0.2))


class TestWalkMechanics:
    """Step rules: neighbor choice, teleport at dangling nodes."""

    def test_visits_follow_edges(self) -> None:
        # Chain 0 -> 1 -> 2 with 2 dangling: starting from 0, a walk can
        # only reach 1 before any teleport
        graph = build_graph(3, [0, 1], [1, 2])
        visits = np.zeros(3, dtype=np.uint64)
        simulate_walk_batch(graph, np.zeros(1, dtype=np.int64), 0.999999, make_rng(0), visits)
        assert visits[0] >= 1
        assert visits.sum() >= 3

    def test_dangling_teleport_ends_walk(self) -> None:
        # Single dangling node walks: start visit plus at most one teleport
        graph = build_graph(4, [], [])
        visits = np.zeros(4, dtype=np.uint64)
        starts = np.zeros(1000, dtype=np.int64)
        simulate_walk_batch(graph, starts, 0.999999, make_rng(1), visits)
        assert int(visits.sum()) <= 2000
        # With alpha ~ 1 nearly every walk teleports once
        assert int(visits.sum()) > 1900

    def test_visit_counter_dtype(self) -> None:
        visits = count_visits(_make_random_graph(), 0.85, 5, make_rng(0))
        assert visits.dtype == np.uint64

    def test_duplicate_edges_weigh_more(self) -> None:
        graph = build_graph(3, [0, 0, 0, 1, 2], [1, 1, 2, 0, 0])
        scores = random_walk_pagerank(graph, 0.85, 2000, seed=4).scores
        assert scores[1] > scores[2]

    def test_star_hub_highest(self) -> None:
        graph = build_graph_from_pairs(6, [(leaf, 0) for leaf in range(1, 6)])
        scores = random_walk_pagerank(graph, 0.85, 500, seed=11).scores
        assert np.all(scores[0] > scores[1:])

    def test_approximates_exact_without_dangling(self) -> None:
        graph = _make_strongly_connected_graph()
        scores = random_walk_pagerank(graph, 0.85, 4000, seed=2024).scores
        np.testing.assert_allclose(scores, exact_pagerank(graph, 0.85), atol=0.02)


class TestProgress:
    """Progress hook fires once per start-node slice."""

    def test_reports_per_slice(self) -> None:
        graph = _make_random_graph(n=25)
        reports: list[int] = []
        random_walk_pagerank(graph, 0.85, 3, seed=0, progress=reports.append)
        assert len(reports) == len(start_node_slices(25))
        assert reports == sorted(reports)
        assert reports[-1] == 100

    def test_ten_slices_for_round_counts(self) -> None:
        reports: list[int] = []
        random_walk_pagerank(
            _make_random_graph(n=20), 0.85, 2, seed=0, progress=reports.append
        )
        assert reports == [10, 20, 30, 40, 50, 60, 70, 80, 90, 100]

    def test_hook_does_not_change_result(self) -> None:
        graph = _make_random_graph()
        with_hook = random_walk_pagerank(
            graph, 0.85, 30, seed=8, progress=lambda p: "ignored"
        ).scores
        without_hook = random_walk_pagerank(graph, 0.85, 30, seed=8).scores
        np.testing.assert_array_equal(with_hook, without_hook)


class TestBatchCap:
    """Lockstep batches never exceed the walker cap."""

    def test_default_cap(self) -> None:
        assert MAX_BATCH_WALKERS == 1 << 20

    @pytest.mark.parametrize("walks", [1, 3, 7, 25])
    def test_batches_cover_every_walk(self, walks: int) -> None:
        batches = list(walk_batches(4, 14, walks, max_walkers=10))
        assert all(0 < len(b) <= 10 for b in batches)
        starts = np.concatenate(batches)
        np.testing.assert_array_equal(starts, np.repeat(np.arange(4, 14), walks))

    def test_count_visits_respects_cap(self, monkeypatch) -> None:
        sizes: list[int] = []
        original = monte_carlo.simulate_walk_batch

        def recording(graph, start_nodes, alpha, rng, visits):
            sizes.append(len(start_nodes))
            original(graph, start_nodes, alpha, rng, visits)

        monkeypatch.setattr(monte_carlo, "simulate_walk_batch", recording)
        graph = _make_random_graph(n=20)
        count_visits(graph, 0.85, 50, make_rng(0), max_walkers=64)
        assert max(sizes) <= 64
        assert sum(sizes) == 20 * 50

    def test_progress_still_per_slice(self) -> None:
        reports: list[int] = []
        count_visits(
            _make_random_graph(n=20), 0.85, 30, make_rng(0),
            progress=reports.append, max_walkers=7,
        )
        assert reports == [10, 20, 30, 40, 50, 60, 70, 80, 90, 100]

    def test_capped_runs_are_reproducible(self) -> None:
        graph = _make_random_graph()
        v1 = count_visits(graph, 0.85, 40, make_rng(5), max_walkers=16)
        v2 = count_visits(graph, 0.85, 40, make_rng(5), max_walkers=16)
        np.testing.assert_array_equal(v1, v2)
        assert int(v1.sum()) >= 20 * 40

#!/usr/bin/env python3
"""Entry point for running a PageRank computation on an edge list file.

Chains the pipeline stages into a single command:
edge list parsing -> graph construction -> PageRank -> optional ground
truth comparison -> result writing.

Usage:
    python run_pagerank.py --edges graph.txt
    python run_pagerank.py --edges graph.txt --config config.json
    python run_pagerank.py --edges graph.txt --algorithm random-walk --seed 7
    python run_pagerank.py --edges graph.txt --algorithm random-walk --random-seed
    python run_pagerank.py --edges graph.txt --no-header
    python run_pagerank.py --edges graph.txt --ground-truth exact --verbose
"""

import argparse
import logging
import sys
import time
from contextlib import contextmanager
from dataclasses import replace
from pathlib import Path
from typing import Generator

from pagerank_core.config import DEFAULT_CONFIG, RunConfig, full_config_hash, load_config
from pagerank_core.rank.types import ALGORITHMS
from pagerank_core.pipeline import GROUND_TRUTH_CHOICES
from pagerank_core.reproducibility import random_seed

log = logging.getLogger(__name__)


@contextmanager
def stage_timer(name: str) -> Generator[None, None, None]:
    """Context manager that prints stage banners with elapsed time."""
    print(f"\n=== {name} ===")
    log.info("Starting: %s", name)
    t0 = time.monotonic()
    yield
    elapsed = time.monotonic() - t0
    print(f"... done in {elapsed:.1f}s")
    log.info("Completed: %s in %.1fs", name, elapsed)


def print_progress(progress: int) -> None:
    print(f"  {progress:3d}%", flush=True)


def run_pipeline(
    config: RunConfig,
    ground_truth: str = "none",
    results_dir: str | None = "results",
    header: bool | None = None,
) -> str | None:
    """Execute the full PageRank pipeline.

    Args:
        config: Run configuration; config.dataset is the edge list path.
        ground_truth: One of "none", "exact", "power".
        results_dir: Base directory for results output, or None to skip
            writing.
        header: Whether the edge list starts with a header line; None
            detects it.

    Returns:
        The run ID if results were written, else None.
    """
    from pagerank_core.evaluation import (
        calculate_error_metrics,
        format_error_metrics,
        top_nodes,
    )
    from pagerank_core.graph import build_graph_from_edge_list, load_edge_list
    from pagerank_core.pipeline import compute_ground_truth, run_algorithm
    from pagerank_core.results import write_result

    pipeline_start = time.monotonic()

    # ── Stage 1: Edge List ─────────────────────────────────────────
    with stage_timer("Edge List Parsing"):
        edge_list = load_edge_list(
            config.dataset, directed=config.directed, header=header
        )
        log.info(
            "Edge list: %d nodes, %d edges",
            edge_list.node_count, edge_list.edge_count,
        )

    # ── Stage 2: Graph Construction ────────────────────────────────
    with stage_timer("Graph Construction"):
        graph = build_graph_from_edge_list(edge_list)
        log.info(
            "Graph: nodes=%d, edges=%d, dangling=%d",
            graph.node_count, graph.edge_count, len(graph.dangling_nodes()),
        )

    # ── Stage 3: PageRank ──────────────────────────────────────────
    with stage_timer(f"PageRank ({config.algorithm})"):
        rank_result = run_algorithm(config, graph, progress=print_progress)

    # ── Stage 4: Ground Truth Comparison ───────────────────────────
    error_metrics = None
    if ground_truth != "none":
        with stage_timer(f"Ground Truth ({ground_truth})"):
            reference = compute_ground_truth(config, graph, ground_truth)
            error_metrics = calculate_error_metrics(rank_result.scores, reference)
            print(f"  {format_error_metrics(error_metrics)}")

    # ── Stage 5: Results ───────────────────────────────────────────
    run_id = None
    if results_dir is not None:
        with stage_timer("Write Results"):
            run_id = write_result(
                config,
                rank_result,
                error_metrics=error_metrics,
                metadata={"was_one_based": edge_list.was_one_based},
                results_dir=results_dir,
            )

    # ── Final Summary ──────────────────────────────────────────────
    total_elapsed = time.monotonic() - pipeline_start
    print(f"\n{'=' * 60}")
    print(f"Pipeline complete in {total_elapsed:.1f}s")
    print(f"  Algorithm: {rank_result.algorithm}")
    print(f"  Compute:   {rank_result.elapsed_ms:.1f}ms")
    print(f"  Top {config.top_n} nodes:")
    offset = 1 if edge_list.was_one_based else 0
    for node in top_nodes(rank_result.scores, config.top_n):
        print(f"    {node.rank:3d}. node {node.node_id + offset}: {node.score:.6e}")
    if run_id is not None:
        print(f"  Output:    {Path(results_dir) / run_id}")
    print(f"{'=' * 60}")

    return run_id


def build_config(args: argparse.Namespace) -> RunConfig:
    """Config file (or defaults) with command-line overrides applied."""
    config = load_config(args.config) if args.config else DEFAULT_CONFIG

    overrides: dict = {"dataset": args.edges}
    if args.algorithm is not None:
        overrides["algorithm"] = args.algorithm
    if args.seed is not None:
        overrides["seed"] = args.seed
    elif args.random_seed:
        overrides["seed"] = random_seed()
    if args.undirected:
        overrides["directed"] = False
    if args.top is not None:
        overrides["top_n"] = args.top
    if args.alpha is not None:
        overrides["power"] = replace(config.power, alpha=args.alpha)
        overrides["walk"] = replace(config.walk, alpha=args.alpha)
    if args.iterations is not None:
        overrides["power"] = replace(
            overrides.get("power", config.power), iterations=args.iterations
        )
    if args.walks_per_node is not None:
        overrides["walk"] = replace(
            overrides.get("walk", config.walk), walks_per_node=args.walks_per_node
        )
    return replace(config, **overrides)


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Compute PageRank scores for an edge list"
    )
    parser.add_argument("--edges", type=str, required=True, help="Path to edge list file")
    parser.add_argument("--config", type=str, help="Path to run config JSON file")
    parser.add_argument("--algorithm", choices=ALGORITHMS, help="Override the configured algorithm")
    parser.add_argument("--alpha", type=float, help="Damping factor for both algorithms")
    parser.add_argument("--iterations", type=int, help="Power Iteration step count")
    parser.add_argument("--walks-per-node", type=int, help="Random Walk walks per start node")
    seed_group = parser.add_mutually_exclusive_group()
    seed_group.add_argument("--seed", type=int, help="Random Walk seed")
    seed_group.add_argument(
        "--random-seed",
        action="store_true",
        help="Draw a fresh Random Walk seed (printed for reruns)",
    )
    parser.add_argument("--undirected", action="store_true", help="Treat every edge as bidirectional")
    parser.add_argument(
        "--no-header",
        action="store_true",
        help="Read the first data line as an edge, never as a header",
    )
    parser.add_argument("--top", type=int, help="Number of top nodes to report")
    parser.add_argument(
        "--ground-truth",
        choices=GROUND_TRUTH_CHOICES,
        default="none",
        help="Compare against an exact solve or Power Iteration",
    )
    parser.add_argument("--results-dir", type=str, default="results", help="Base output directory")
    parser.add_argument("--no-write", action="store_true", help="Do not write result files")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show the resolved config without computing",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable DEBUG-level logging",
    )
    args = parser.parse_args()

    # Configure logging
    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not Path(args.edges).exists():
        print(f"Error: edge list not found: {args.edges}", file=sys.stderr)
        sys.exit(1)
    if args.config and not Path(args.config).exists():
        print(f"Error: config file not found: {args.config}", file=sys.stderr)
        sys.exit(1)

    try:
        config = build_config(args)
    except ValueError as exc:
        print(f"Error: invalid configuration: {exc}", file=sys.stderr)
        sys.exit(1)

    print(f"Config hash: {full_config_hash(config)}")
    print(f"Dataset:     {config.dataset} ({'directed' if config.directed else 'undirected'})")
    print(f"Algorithm:   {config.algorithm}")
    print(f"Power:       alpha={config.power.alpha}, iterations={config.power.iterations}")
    print(f"Walk:        alpha={config.walk.alpha}, walks_per_node={config.walk.walks_per_node}")
    print(f"Seed:        {config.seed}")

    if args.dry_run:
        print("\n[dry-run] Config resolved successfully. Exiting.")
        return

    try:
        run_pipeline(
            config,
            ground_truth=args.ground_truth,
            results_dir=None if args.no_write else args.results_dir,
            header=False if args.no_header else None,
        )
    except Exception:
        log.exception("Pipeline failed")
        sys.exit(1)


if __name__ == "__main__":
    main()

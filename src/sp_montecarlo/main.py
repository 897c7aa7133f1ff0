from __future__ import annotations
import argparse
import sys
from pathlib import Path
from typing import List, Optional

from sp_montecarlo.benchmark.artifacts import export_experiment_artifacts, print_experiment_summary
from sp_montecarlo.benchmark.runner import run_experiment, trial_seed
from sp_montecarlo.config import (
    CANONICAL_CONFIGS,
    DensityConfig,
    ExperimentConfig,
    ON_UNREACHABLE_POLICIES,
    ON_UNREACHABLE_SKIP,
    validate_experiment,
)
from sp_montecarlo.errors import NoReachableVertices, SimulationError
from sp_montecarlo.routing.shortest_path import average_distance, dijkstra
from sp_montecarlo.topology.generator import generate_for_config
from sp_montecarlo.topology.stats import graph_summary, reachable_from


def parse_density_config(text: str) -> DensityConfig:
    """Parse 'DENSITY,LOW,HIGH', e.g. '0.2,1,10'."""
    parts = text.split(",")
    if len(parts) != 3:
        raise argparse.ArgumentTypeError(f"expected DENSITY,LOW,HIGH, got {text!r}")
    try:
        density, low, high = (float(p) for p in parts)
    except ValueError:
        raise argparse.ArgumentTypeError(f"non-numeric value in {text!r}") from None
    return DensityConfig(density=density, weight_low=low, weight_high=high)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="sp-montecarlo",
        description="Monte Carlo estimate of the average shortest path length in random weighted graphs.",
    )
    parser.add_argument("--vertices", type=int, default=50, help="Number of vertices per graph")
    parser.add_argument("--trials", type=int, default=10_000, help="Number of trials per configuration")
    parser.add_argument(
        "--config",
        dest="configs",
        type=parse_density_config,
        action="append",
        metavar="DENSITY,LOW,HIGH",
        help="Edge density and weight range; repeatable (default: 0.2,1,10 and 0.4,1,10)",
    )
    parser.add_argument("--source", type=int, default=1, help="Source vertex (1-based)")
    parser.add_argument("--seed", type=int, default=42, help="Master random seed for reproducibility")
    parser.add_argument("--workers", type=int, default=1, help="Worker processes for the trials")
    parser.add_argument(
        "--on-unreachable",
        choices=ON_UNREACHABLE_POLICIES,
        default=ON_UNREACHABLE_SKIP,
        help="What to do with a trial whose source reaches no other vertex",
    )
    parser.add_argument("--outdir", type=Path, default=None, help="Write CSV and plot artifacts here")
    parser.add_argument("--no-plots", action="store_true", help="Skip plots when writing artifacts")
    parser.add_argument(
        "--sample",
        action="store_true",
        help="Generate one graph per configuration, print its summary and distances, and exit",
    )
    return parser.parse_args(argv)


def print_sample(cfg: ExperimentConfig) -> None:
    for ci, dc in enumerate(cfg.configs):
        g = generate_for_config(cfg.n_vertices, dc, trial_seed(cfg.seed, ci, 0))
        summary = graph_summary(g, source=cfg.source)

        print(f"=== Sample graph: {dc.label} ===")
        for k, v in summary.items():
            print(f"{k}: {v}")

        table = dijkstra(g, cfg.source)
        print(f"\nDistances from vertex {cfg.source}:")
        for v, d in table.items():
            print(f"  {v:4d}: {d:.4f}")

        connected = reachable_from(g, cfg.source) - {cfg.source}
        reached = set(table.reachable_vertices())
        status = "ok" if connected == reached else "MISMATCH"
        print(f"reachable vertices: {len(reached)} (connected component: {len(connected)}, {status})")
        try:
            print(f"average distance: {average_distance(table):.4f}\n")
        except NoReachableVertices as e:
            print(f"average distance: undefined ({e})\n")


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    cfg = ExperimentConfig(
        n_vertices=args.vertices,
        trials=args.trials,
        configs=tuple(args.configs) if args.configs else CANONICAL_CONFIGS,
        source=args.source,
        seed=args.seed,
        workers=args.workers,
        on_unreachable=args.on_unreachable,
    )

    try:
        if args.sample:
            validate_experiment(cfg)
            print_sample(cfg)
            return

        result = run_experiment(cfg)
    except SimulationError as e:
        print(f"error: {e}", file=sys.stderr)
        raise SystemExit(2)

    print_experiment_summary(result)
    if args.outdir is not None:
        outdir = export_experiment_artifacts(result, outdir=args.outdir, plots=not args.no_plots)
        print(f"\nWrote artifacts to {outdir}")


if __name__ == "__main__":
    main()

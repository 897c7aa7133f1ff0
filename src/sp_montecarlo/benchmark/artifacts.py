from __future__ import annotations

import csv
from dataclasses import asdict
from datetime import datetime
from pathlib import Path
from typing import Dict, List

import matplotlib.pyplot as plt
import pandas as pd

from ..config import ON_UNREACHABLE_ZERO
from .runner import ExperimentResult, STATUS_OK

TrialRow = Dict[str, float | int | str]

TRIAL_FIELDS = ["config", "density", "weight_low", "weight_high", "trial", "seed",
                "avg_distance", "reachable", "n_edges", "status"]
SUMMARY_FIELDS = ["config", "density", "weight_low", "weight_high", "trials", "contributing",
                  "skipped", "mean", "std", "stderr", "min", "max",
                  "mean_reachable", "mean_edge_density"]


def _fmt(x: float | None) -> str:
    return "undefined" if x is None else f"{x:.6f}"


def print_experiment_summary(result: ExperimentResult) -> None:
    cfg = result.config
    print("**Monte Carlo Simulation for Average Shortest Paths in Graphs**")
    print(f"vertices={cfg.n_vertices} trials={cfg.trials} source={cfg.source} seed={cfg.seed}")
    for dc, s in result.summaries.items():
        print(
            f"Average Shortest Path for a Graph with {dc.density * 100:.0f}% Density "
            f"and edge weights between {dc.weight_low:g} to {dc.weight_high:g} is: {_fmt(s.mean)}"
        )

    for dc, s in result.summaries.items():
        if s.skipped:
            print(
                f"[WARN] {dc.label}: {s.skipped} of {s.trials} trial(s) reached no vertex "
                f"and were left out of the mean."
            )
        elif cfg.on_unreachable == ON_UNREACHABLE_ZERO:
            zeros = sum(1 for r in result.records[dc] if r.status != STATUS_OK)
            if zeros:
                print(f"[WARN] {dc.label}: {zeros} trial(s) reached no vertex and were counted as 0.0.")


def trial_rows(result: ExperimentResult) -> List[TrialRow]:
    rows: List[TrialRow] = []
    for dc, records in result.records.items():
        for r in records:
            rows.append(
                {
                    "config": dc.label,
                    "density": dc.density,
                    "weight_low": dc.weight_low,
                    "weight_high": dc.weight_high,
                    "trial": r.trial,
                    "seed": r.seed,
                    "avg_distance": "" if r.avg_distance is None else r.avg_distance,
                    "reachable": r.reachable,
                    "n_edges": r.n_edges,
                    "status": r.status,
                }
            )
    return rows


def summary_rows(result: ExperimentResult) -> List[TrialRow]:
    rows: List[TrialRow] = []
    for dc, s in result.summaries.items():
        row = asdict(s)
        row.pop("config")
        row.update({"config": dc.label, "density": dc.density,
                    "weight_low": dc.weight_low, "weight_high": dc.weight_high})
        rows.append({k: ("" if row[k] is None else row[k]) for k in SUMMARY_FIELDS})
    return rows


def _write_csv(path: Path, rows: List[TrialRow], fieldnames: List[str]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        writer.writerows(rows)


def _savefig(fig: "plt.Figure", outpath: Path) -> None:
    outpath.parent.mkdir(parents=True, exist_ok=True)
    fig.tight_layout()
    fig.savefig(outpath.with_suffix(".png"), dpi=300)
    fig.savefig(outpath.with_suffix(".pdf"))
    plt.close(fig)


def _plot_avg_distance_hist(df: "pd.DataFrame", labels: List[str], outpath: Path) -> None:
    d = df[df["status"] == STATUS_OK]
    fig = plt.figure(figsize=(10, 5.5))
    ax = fig.add_subplot(111)
    for label in labels:
        vals = d.loc[d["config"] == label, "avg_distance"].astype(float).to_numpy()
        if len(vals):
            ax.hist(vals, bins=50, alpha=0.5, label=label)
    ax.set_xlabel("Average shortest path length (per trial)")
    ax.set_ylabel("Trials")
    ax.set_title("Distribution of per-trial average shortest path length")
    ax.grid(True, alpha=0.3)
    ax.legend()
    _savefig(fig, outpath)


def _plot_mean_by_config(summary: "pd.DataFrame", outpath: Path) -> None:
    d = summary[pd.to_numeric(summary["mean"], errors="coerce").notna()]
    fig = plt.figure(figsize=(8, 5.5))
    ax = fig.add_subplot(111)
    x = list(range(len(d)))
    ax.bar(x, d["mean"].astype(float), yerr=d["std"].astype(float), capsize=4)
    ax.set_xticks(x)
    ax.set_xticklabels(d["config"], rotation=20, ha="right")
    ax.set_ylabel("Mean average shortest path length")
    ax.set_title("Mean average shortest path length by configuration (mean +/- std)")
    ax.grid(True, axis="y", alpha=0.3)
    _savefig(fig, outpath)


def export_experiment_artifacts(
    result: ExperimentResult,
    outdir: Path | None = None,
    plots: bool = True,
) -> Path:
    if outdir is None:
        stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        outdir = Path("results") / f"montecarlo_{stamp}"
    outdir.mkdir(parents=True, exist_ok=True)

    # Exact run configuration for reproducibility.
    cfg = result.config
    with (outdir / "config.txt").open("w") as f:
        f.write(f"n_vertices={cfg.n_vertices}\n")
        f.write(f"trials={cfg.trials}\n")
        f.write(f"source={cfg.source}\n")
        f.write(f"seed={cfg.seed}\n")
        f.write(f"workers={cfg.workers}\n")
        f.write(f"on_unreachable={cfg.on_unreachable}\n")
        for dc in cfg.configs:
            f.write(f"config={dc.density},{dc.weight_low},{dc.weight_high}\n")

    t_rows = trial_rows(result)
    s_rows = summary_rows(result)
    _write_csv(outdir / "trials.csv", t_rows, TRIAL_FIELDS)
    _write_csv(outdir / "summary.csv", s_rows, SUMMARY_FIELDS)

    if plots:
        plots_dir = outdir / "plots"
        labels = [dc.label for dc in cfg.configs]
        _plot_avg_distance_hist(pd.DataFrame(t_rows, columns=TRIAL_FIELDS), labels,
                                plots_dir / "avg_distance_hist")
        _plot_mean_by_config(pd.DataFrame(s_rows, columns=SUMMARY_FIELDS),
                             plots_dir / "mean_by_config")

    return outdir

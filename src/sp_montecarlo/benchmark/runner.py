from __future__ import annotations
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass
import math
import random
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

import numpy as np

from ..config import (
    DensityConfig,
    ExperimentConfig,
    ON_UNREACHABLE_ABORT,
    ON_UNREACHABLE_SKIP,
    ON_UNREACHABLE_ZERO,
    validate_experiment,
)
from ..errors import NoReachableVertices
from ..routing.shortest_path import average_distance, dijkstra
from ..topology.generator import generate_random_graph

STATUS_OK = "ok"
STATUS_NO_REACHABLE = "no_reachable"

ConfigLike = Union[DensityConfig, Tuple[float, float, float]]


@dataclass(frozen=True)
class TrialRecord:
    config_index: int
    trial: int
    seed: int
    avg_distance: Optional[float]  # None when the trial is left out of the mean
    reachable: int                 # non-source vertices reached
    n_edges: int
    status: str


@dataclass(frozen=True)
class ConfigSummary:
    config: DensityConfig
    trials: int
    contributing: int
    skipped: int
    mean: Optional[float]  # None when no trial contributed
    std: float
    stderr: float
    min: Optional[float]
    max: Optional[float]
    mean_reachable: float
    mean_edge_density: float


@dataclass(frozen=True)
class ExperimentResult:
    config: ExperimentConfig
    records: Dict[DensityConfig, List[TrialRecord]]
    summaries: Dict[DensityConfig, ConfigSummary]

    def means(self) -> Dict[DensityConfig, Optional[float]]:
        return {dc: s.mean for dc, s in self.summaries.items()}


def trial_seed(base_seed: int, config_index: int, trial: int) -> int:
    """
    Seed for one (configuration, trial) cell. Depends only on its inputs, so
    results do not change with the number of workers or the trial order.
    """
    ss = np.random.SeedSequence([base_seed, config_index, trial])
    return int(ss.generate_state(1, dtype=np.uint64)[0])


def run_trial(
    n_vertices: int,
    dc: DensityConfig,
    source: int,
    seed: int,
    config_index: int = 0,
    trial: int = 0,
    on_unreachable: str = ON_UNREACHABLE_SKIP,
) -> TrialRecord:
    rng = random.Random(seed)
    g = generate_random_graph(n_vertices, dc.density, dc.weight_low, dc.weight_high, rng)
    table = dijkstra(g, source)

    status = STATUS_OK
    try:
        avg: Optional[float] = average_distance(table, n_vertices)
    except NoReachableVertices:
        if on_unreachable == ON_UNREACHABLE_ABORT:
            raise
        status = STATUS_NO_REACHABLE
        avg = 0.0 if on_unreachable == ON_UNREACHABLE_ZERO else None

    return TrialRecord(
        config_index=config_index,
        trial=trial,
        seed=seed,
        avg_distance=avg,
        reachable=len(table.reachable_vertices()),
        n_edges=g.number_of_edges(),
        status=status,
    )


def _run_block(cfg: ExperimentConfig, config_index: int, start: int, stop: int) -> List[TrialRecord]:
    dc = cfg.configs[config_index]
    return [
        run_trial(
            cfg.n_vertices,
            dc,
            cfg.source,
            trial_seed(cfg.seed, config_index, t),
            config_index=config_index,
            trial=t,
            on_unreachable=cfg.on_unreachable,
        )
        for t in range(start, stop)
    ]


def _split(trials: int, parts: int) -> List[Tuple[int, int]]:
    parts = max(1, min(parts, trials))
    size, extra = divmod(trials, parts)
    out: List[Tuple[int, int]] = []
    start = 0
    for i in range(parts):
        stop = start + size + (1 if i < extra else 0)
        out.append((start, stop))
        start = stop
    return out


def summarize_config(dc: DensityConfig, records: Sequence[TrialRecord], n_vertices: int) -> ConfigSummary:
    values = [r.avg_distance for r in records if r.avg_distance is not None]
    n = len(values)
    # Both statistics work on scaled values so large weights cannot overflow.
    mean = math.fsum(v / n for v in values) if n else None
    scale = max(values, default=0.0) or 1.0
    std = float(np.std(np.asarray(values) / scale)) * scale if n else 0.0
    pairs = n_vertices * (n_vertices - 1) // 2
    return ConfigSummary(
        config=dc,
        trials=len(records),
        contributing=n,
        skipped=len(records) - n,
        mean=mean,
        std=std,
        stderr=std / math.sqrt(n) if n else 0.0,
        min=min(values) if n else None,
        max=max(values) if n else None,
        mean_reachable=float(np.mean([r.reachable for r in records])) if records else 0.0,
        mean_edge_density=(
            float(np.mean([r.n_edges for r in records])) / pairs if records and pairs else 0.0
        ),
    )


def run_experiment(cfg: ExperimentConfig) -> ExperimentResult:
    """
    Run cfg.trials independent trials for every density configuration.

    Each (configuration, trial) cell gets a fresh graph and distance table
    from its own seeded RNG. With workers > 1 contiguous trial blocks run in
    a process pool and are stitched back together in trial order.
    """
    validate_experiment(cfg)

    blocks = [
        (ci, start, stop)
        for ci in range(len(cfg.configs))
        for start, stop in _split(cfg.trials, cfg.workers)
    ]
    if cfg.workers == 1:
        outputs = [_run_block(cfg, ci, start, stop) for ci, start, stop in blocks]
    else:
        with ProcessPoolExecutor(max_workers=cfg.workers) as pool:
            futures = [pool.submit(_run_block, cfg, ci, start, stop) for ci, start, stop in blocks]
            outputs = [f.result() for f in futures]

    records: Dict[DensityConfig, List[TrialRecord]] = {dc: [] for dc in cfg.configs}
    for (ci, _, _), rows in zip(blocks, outputs):
        records[cfg.configs[ci]].extend(rows)

    summaries = {
        dc: summarize_config(dc, rows, cfg.n_vertices) for dc, rows in records.items()
    }
    return ExperimentResult(config=cfg, records=records, summaries=summaries)


def as_density_configs(configs: Iterable[ConfigLike]) -> Tuple[DensityConfig, ...]:
    out = []
    for c in configs:
        if isinstance(c, DensityConfig):
            out.append(c)
        else:
            density, low, high = c
            out.append(DensityConfig(density=float(density), weight_low=float(low), weight_high=float(high)))
    return tuple(out)


def run(
    trials: int,
    n_vertices: int,
    configs: Iterable[ConfigLike],
    source: int = 1,
    seed: int = 42,
    workers: int = 1,
    on_unreachable: str = ON_UNREACHABLE_SKIP,
) -> Dict[DensityConfig, Optional[float]]:
    """Mean average-path-length per configuration, in the order supplied."""
    cfg = ExperimentConfig(
        n_vertices=n_vertices,
        trials=trials,
        configs=as_density_configs(configs),
        source=source,
        seed=seed,
        workers=workers,
        on_unreachable=on_unreachable,
    )
    return run_experiment(cfg).means()

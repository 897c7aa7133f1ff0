from __future__ import annotations
from dataclasses import dataclass
import math
from typing import Tuple

from .errors import InvalidConfiguration, NegativeWeightError

# What to do with a trial whose source reaches no other vertex.
ON_UNREACHABLE_SKIP = "skip"    # record it, leave it out of the mean
ON_UNREACHABLE_ZERO = "zero"    # count it as an average of 0.0
ON_UNREACHABLE_ABORT = "abort"  # re-raise NoReachableVertices
ON_UNREACHABLE_POLICIES = (ON_UNREACHABLE_SKIP, ON_UNREACHABLE_ZERO, ON_UNREACHABLE_ABORT)


@dataclass(frozen=True)
class DensityConfig:
    density: float = 0.20   # probability that a candidate edge is present
    weight_low: float = 1.0
    weight_high: float = 10.0

    @property
    def label(self) -> str:
        return f"density={self.density:.2f} weights=[{self.weight_low:g}, {self.weight_high:g}]"


CANONICAL_CONFIGS: Tuple[DensityConfig, ...] = (
    DensityConfig(density=0.20, weight_low=1.0, weight_high=10.0),
    DensityConfig(density=0.40, weight_low=1.0, weight_high=10.0),
)


@dataclass(frozen=True)
class ExperimentConfig:
    n_vertices: int = 50
    trials: int = 10_000
    configs: Tuple[DensityConfig, ...] = CANONICAL_CONFIGS
    source: int = 1
    seed: int = 42          # master seed; per-trial seeds are derived from it
    workers: int = 1        # >1 runs trial blocks in a process pool
    on_unreachable: str = ON_UNREACHABLE_SKIP


def validate_graph_params(n_vertices: int, density: float, weight_low: float, weight_high: float) -> None:
    if n_vertices < 1:
        raise InvalidConfiguration(f"n_vertices must be >= 1, got {n_vertices}")
    if not (0.0 <= density <= 1.0):
        raise InvalidConfiguration(f"density must be in [0,1], got {density}")
    if not (math.isfinite(weight_low) and math.isfinite(weight_high)):
        raise InvalidConfiguration(
            f"weight bounds must be finite numbers, got [{weight_low}, {weight_high}]"
        )
    if weight_low > weight_high:
        raise InvalidConfiguration(
            f"weight_low must be <= weight_high, got [{weight_low}, {weight_high}]"
        )
    # Longest simple path has n_vertices - 1 edges; its length must stay a float.
    if not math.isfinite((n_vertices - 1) * weight_high):
        raise InvalidConfiguration(
            f"weight_high={weight_high} overflows a path of {n_vertices - 1} edges"
        )


def validate_experiment(cfg: ExperimentConfig) -> None:
    """
    Check everything a run needs before the first trial starts.
    Raises InvalidConfiguration, or NegativeWeightError when a weight range
    would let negative edges reach the shortest-path engine.
    """
    if cfg.trials < 1:
        raise InvalidConfiguration(f"trials must be >= 1, got {cfg.trials}")
    if cfg.seed < 0:
        raise InvalidConfiguration(f"seed must be >= 0, got {cfg.seed}")
    if cfg.workers < 1:
        raise InvalidConfiguration(f"workers must be >= 1, got {cfg.workers}")
    if cfg.on_unreachable not in ON_UNREACHABLE_POLICIES:
        raise InvalidConfiguration(
            f"on_unreachable must be one of {ON_UNREACHABLE_POLICIES}, got {cfg.on_unreachable!r}"
        )
    if not cfg.configs:
        raise InvalidConfiguration("at least one density configuration is required")
    if len(set(cfg.configs)) != len(cfg.configs):
        raise InvalidConfiguration("density configurations must be unique")
    if cfg.n_vertices < 1:
        raise InvalidConfiguration(f"n_vertices must be >= 1, got {cfg.n_vertices}")
    if not (1 <= cfg.source <= cfg.n_vertices):
        raise InvalidConfiguration(f"source must be in [1, {cfg.n_vertices}], got {cfg.source}")

    for dc in cfg.configs:
        validate_graph_params(cfg.n_vertices, dc.density, dc.weight_low, dc.weight_high)
        if dc.weight_low < 0:
            raise NegativeWeightError(dc.weight_low)

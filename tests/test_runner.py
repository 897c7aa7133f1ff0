import math

import pytest

from sp_montecarlo.benchmark.runner import (
    STATUS_NO_REACHABLE,
    STATUS_OK,
    run,
    run_experiment,
    run_trial,
    trial_seed,
)
from sp_montecarlo.config import CANONICAL_CONFIGS, DensityConfig, ExperimentConfig
from sp_montecarlo.errors import InvalidConfiguration, NegativeWeightError, NoReachableVertices

SPARSE = DensityConfig(density=0.20, weight_low=1.0, weight_high=10.0)
DENSE = DensityConfig(density=0.40, weight_low=1.0, weight_high=10.0)
EMPTY = DensityConfig(density=0.0, weight_low=1.0, weight_high=10.0)


def test_canonical_scenario_denser_is_shorter():
    means = run(trials=300, n_vertices=50, configs=CANONICAL_CONFIGS, seed=42)
    assert list(means) == list(CANONICAL_CONFIGS)
    m20, m40 = means[SPARSE], means[DENSE]
    assert math.isfinite(m20) and m20 > 0
    assert math.isfinite(m40) and m40 > 0
    assert m40 < m20


def test_run_accepts_plain_tuples():
    means = run(trials=5, n_vertices=20, configs=[(0.4, 1.0, 10.0), (0.2, 1.0, 10.0)])
    assert list(means) == [DENSE, SPARSE]


def test_same_seed_same_result():
    cfg = ExperimentConfig(n_vertices=30, trials=20, seed=7)
    assert run_experiment(cfg).means() == run_experiment(cfg).means()


def test_different_seed_different_result():
    a = run_experiment(ExperimentConfig(n_vertices=30, trials=20, seed=1)).means()
    b = run_experiment(ExperimentConfig(n_vertices=30, trials=20, seed=2)).means()
    assert a != b


def test_worker_count_does_not_change_results():
    serial = run_experiment(ExperimentConfig(n_vertices=20, trials=12, seed=3, workers=1))
    parallel = run_experiment(ExperimentConfig(n_vertices=20, trials=12, seed=3, workers=3))
    assert serial.records == parallel.records
    assert serial.means() == parallel.means()


def test_records_cover_every_trial_in_order():
    result = run_experiment(ExperimentConfig(n_vertices=15, trials=9, seed=0, workers=2))
    for ci, dc in enumerate(result.config.configs):
        rows = result.records[dc]
        assert [r.trial for r in rows] == list(range(9))
        assert all(r.config_index == ci for r in rows)


def test_configurations_use_independent_graphs():
    result = run_experiment(ExperimentConfig(n_vertices=15, trials=4, seed=0))
    seeds_a = [r.seed for r in result.records[SPARSE]]
    seeds_b = [r.seed for r in result.records[DENSE]]
    assert not set(seeds_a) & set(seeds_b)


def test_summary_fields():
    result = run_experiment(ExperimentConfig(n_vertices=40, trials=50, configs=(DENSE,), seed=5))
    s = result.summaries[DENSE]
    values = [r.avg_distance for r in result.records[DENSE]]
    assert s.trials == 50
    assert s.contributing == 50
    assert s.skipped == 0
    assert s.mean == pytest.approx(sum(values) / 50)
    assert s.min == min(values) and s.max == max(values)
    assert s.std > 0
    assert s.stderr == pytest.approx(s.std / math.sqrt(50))
    assert s.mean_reachable == pytest.approx(39.0)
    assert s.mean_edge_density == pytest.approx(0.4, abs=0.05)


def test_skip_policy_leaves_out_unreachable_trials():
    cfg = ExperimentConfig(n_vertices=50, trials=3, configs=(EMPTY,), on_unreachable="skip")
    s = run_experiment(cfg).summaries[EMPTY]
    assert s.mean is None
    assert s.skipped == 3
    assert s.contributing == 0


def test_zero_policy_counts_unreachable_as_zero():
    cfg = ExperimentConfig(n_vertices=50, trials=3, configs=(EMPTY,), on_unreachable="zero")
    result = run_experiment(cfg)
    s = result.summaries[EMPTY]
    assert s.mean == 0.0
    assert s.contributing == 3
    assert all(r.status == STATUS_NO_REACHABLE for r in result.records[EMPTY])


def test_abort_policy_raises():
    cfg = ExperimentConfig(n_vertices=50, trials=3, configs=(EMPTY,), on_unreachable="abort")
    with pytest.raises(NoReachableVertices):
        run_experiment(cfg)


def test_skip_policy_mean_over_contributing_trials():
    dc = DensityConfig(density=0.3, weight_low=1.0, weight_high=2.0)
    result = run_experiment(ExperimentConfig(n_vertices=3, trials=40, configs=(dc,), seed=11))
    rows = result.records[dc]
    s = result.summaries[dc]
    ok = [r.avg_distance for r in rows if r.status == STATUS_OK]
    assert 0 < s.skipped < 40
    assert s.contributing == len(ok)
    assert s.mean == pytest.approx(math.fsum(ok) / len(ok))


def test_run_trial_record():
    rec = run_trial(30, DENSE, source=1, seed=99, config_index=1, trial=4)
    assert rec == run_trial(30, DENSE, source=1, seed=99, config_index=1, trial=4)
    assert rec.config_index == 1 and rec.trial == 4 and rec.seed == 99
    assert rec.status == STATUS_OK
    assert rec.avg_distance > 0
    assert 0 < rec.reachable <= 29
    assert rec.n_edges > 0


def test_trial_seed_is_stable_and_distinct():
    assert trial_seed(42, 0, 0) == trial_seed(42, 0, 0)
    seeds = {trial_seed(42, c, t) for c in range(3) for t in range(100)}
    assert len(seeds) == 300


def test_nonzero_source():
    result = run_experiment(ExperimentConfig(n_vertices=20, trials=5, source=20, configs=(DENSE,)))
    assert result.summaries[DENSE].mean > 0


@pytest.mark.parametrize(
    "kwargs",
    [
        dict(n_vertices=0),
        dict(trials=0),
        dict(workers=0),
        dict(seed=-1),
        dict(source=0),
        dict(source=51),
        dict(on_unreachable="ignore"),
        dict(configs=()),
        dict(configs=(SPARSE, SPARSE)),
        dict(configs=(DensityConfig(density=1.5),)),
        dict(configs=(DensityConfig(density=-0.5),)),
        dict(configs=(DensityConfig(weight_low=5.0, weight_high=1.0),)),
    ],
)
def test_invalid_configuration_fails_fast(kwargs):
    with pytest.raises(InvalidConfiguration):
        run_experiment(ExperimentConfig(**kwargs))


def test_negative_weight_range_fails_fast():
    cfg = ExperimentConfig(configs=(DensityConfig(weight_low=-1.0, weight_high=1.0),))
    with pytest.raises(NegativeWeightError):
        run_experiment(cfg)


@pytest.mark.parametrize(
    "dc",
    [
        DensityConfig(density=1.0, weight_low=float("nan"), weight_high=1.0),
        DensityConfig(density=1.0, weight_low=1.0, weight_high=math.inf),
        DensityConfig(density=0.3, weight_low=1e308, weight_high=1.7e308),
    ],
)
def test_unrepresentable_weight_range_fails_fast(dc):
    cfg = ExperimentConfig(n_vertices=10, trials=20, configs=(dc,))
    with pytest.raises(InvalidConfiguration):
        run_experiment(cfg)


def test_large_weight_range_that_fits_is_accepted():
    # 9 edges of 1e307 is still finite.
    dc = DensityConfig(1.0, 1e306, 1e307)
    result = run_experiment(ExperimentConfig(n_vertices=10, trials=5, configs=(dc,)))
    assert math.isfinite(result.means()[dc])
    assert math.isfinite(result.summaries[dc].std)

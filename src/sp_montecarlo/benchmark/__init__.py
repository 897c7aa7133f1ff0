from .runner import (
    ConfigSummary,
    ExperimentResult,
    TrialRecord,
    run,
    run_experiment,
    run_trial,
    summarize_config,
    trial_seed,
)
from .artifacts import export_experiment_artifacts, print_experiment_summary

__all__ = [
    "ConfigSummary",
    "ExperimentResult",
    "TrialRecord",
    "run",
    "run_experiment",
    "run_trial",
    "summarize_config",
    "trial_seed",
    "export_experiment_artifacts",
    "print_experiment_summary",
]

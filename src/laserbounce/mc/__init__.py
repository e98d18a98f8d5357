from .trial_types import Outcome, TrialRecord
from .sampler import Sampler, seed_from_wall_clock, wall_clock_seed
from .trials import TrialSet, generate_trials
from .kernels_cpu import classify_trial, count_outcomes, trace_trial

__all__ = [
    "Outcome", "TrialRecord",
    "Sampler", "seed_from_wall_clock", "wall_clock_seed",
    "TrialSet", "generate_trials",
    "classify_trial", "count_outcomes", "trace_trial",
]

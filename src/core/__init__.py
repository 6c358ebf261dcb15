"""Core module - Round engine and game rules"""

from . import prediction_catalog, validators, win_evaluator
from .activity_feed import ActivityFeed
from .outcome_generator import OutcomeGenerator
from .random_source import (
    PseudoRandomSource,
    RandomSource,
    SequenceRandomSource,
    SystemRandomSource,
    default_random_source,
)
from .round_engine import EngineEvents, RoundEngine
from .round_reducer import Transition, reduce
from .scheduler import Scheduler, SimulatedScheduler, TkScheduler
from .win_evaluator import RoundOutcome, evaluate, summarize, total_multiplier

__all__ = [
    "ActivityFeed",
    "EngineEvents",
    "OutcomeGenerator",
    "PseudoRandomSource",
    "RandomSource",
    "RoundEngine",
    "RoundOutcome",
    "Scheduler",
    "SequenceRandomSource",
    "SimulatedScheduler",
    "SystemRandomSource",
    "TkScheduler",
    "Transition",
    "default_random_source",
    "evaluate",
    "prediction_catalog",
    "reduce",
    "summarize",
    "total_multiplier",
    "validators",
    "win_evaluator",
]

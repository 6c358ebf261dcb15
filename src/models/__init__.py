"""
Data models for the Numbers Game round engine
"""

from .activity import BettingActivity
from .enums import (
    GameMode,
    GamePhase,
    PredictionCategory,
    RejectReason,
    ResultColor,
    SizeBet,
)
from .game_state import GameSettings, GameSnapshot, GameState, Round
from .intents import (
    ClearBets,
    ConfirmBets,
    IntentResult,
    PhaseTimeout,
    PlaceBet,
    SetDuration,
    Tick,
    UpdateSettings,
)
from .prediction import BetKind, Prediction, replace_in_category
from .round_result import ALLOWED_DURATIONS, BIG_THRESHOLD, RoundResult

__all__ = [
    "GameMode",
    "GamePhase",
    "PredictionCategory",
    "RejectReason",
    "ResultColor",
    "SizeBet",
    "BetKind",
    "Prediction",
    "replace_in_category",
    "ALLOWED_DURATIONS",
    "BIG_THRESHOLD",
    "RoundResult",
    "Round",
    "GameSettings",
    "GameState",
    "GameSnapshot",
    # Intents
    "PlaceBet",
    "ClearBets",
    "ConfirmBets",
    "SetDuration",
    "UpdateSettings",
    "Tick",
    "PhaseTimeout",
    "IntentResult",
    # Cosmetic feed
    "BettingActivity",
]

"""
Round and GameState data models

GameState is a single immutable value. The round engine is its only owner and
replaces it wholesale on every transition (see core.round_reducer).
"""

from dataclasses import dataclass, field
from decimal import Decimal

from .enums import GameMode, GamePhase
from .prediction import Prediction
from .round_result import RoundResult


@dataclass(frozen=True)
class Round:
    """
    One betting -> resolving -> showing-result cycle

    Attributes:
        round_number: Sequence number, increases by one per round
        duration: Round length in seconds
        time_remaining: Seconds left on the betting countdown
        phase: Current phase
        elapsed_ms: Milliseconds accumulated toward the next countdown step
    """

    round_number: int
    duration: int
    time_remaining: int
    phase: GamePhase = GamePhase.BETTING
    elapsed_ms: int = 0

    def __post_init__(self):
        if not 0 <= self.time_remaining <= self.duration:
            raise ValueError(
                f"time_remaining {self.time_remaining} outside [0, {self.duration}]"
            )

    @classmethod
    def fresh(cls, round_number: int, duration: int) -> "Round":
        """Create a round entering the betting phase with a full countdown"""
        return cls(round_number=round_number, duration=duration, time_remaining=duration)


@dataclass(frozen=True)
class GameSettings:
    """Cosmetic toggles; no effect on round logic"""

    sound_enabled: bool = True
    animations_enabled: bool = True
    mode: GameMode = GameMode.DEMO


@dataclass(frozen=True)
class GameState:
    """
    Aggregate game state

    Attributes:
        round: Current round
        active_predictions: Bets being edited (mutable only while betting)
        locked_predictions: Frozen snapshot taken when betting closes
        last_result: Most recent resolved result
        history: Resolved results, most recent first, capped
        selected_duration: Duration the next round will use
        settings: Cosmetic toggles
    """

    round: Round
    active_predictions: tuple[Prediction, ...] = ()
    locked_predictions: tuple[Prediction, ...] = ()
    last_result: RoundResult | None = None
    history: tuple[RoundResult, ...] = ()
    selected_duration: int = 10
    settings: GameSettings = field(default_factory=GameSettings)

    @classmethod
    def initial(cls, duration: int) -> "GameState":
        """State at machine start: round 1 betting with a full countdown"""
        return cls(round=Round.fresh(1, duration), selected_duration=duration)

    @property
    def phase(self) -> GamePhase:
        return self.round.phase


@dataclass(frozen=True)
class GameSnapshot:
    """
    Read-only view handed to the presentation layer

    Winners are recomputed from the locked predictions while a result is shown.
    """

    round_number: int
    phase: GamePhase
    time_remaining: int
    duration: int
    selected_duration: int
    active_predictions: tuple[Prediction, ...]
    locked_predictions: tuple[Prediction, ...]
    last_result: RoundResult | None
    history: tuple[RoundResult, ...]
    settings: GameSettings
    winners: tuple[Prediction, ...] = ()
    total_multiplier: Decimal = Decimal("0")
    is_urgent: bool = False
    is_critical: bool = False

    @property
    def progress(self) -> float:
        """Fraction of the countdown remaining (1.0 = full, 0.0 = expired)"""
        if self.duration <= 0:
            return 0.0
        return self.time_remaining / self.duration

    def to_dict(self) -> dict:
        """Convert to a JSON-friendly dictionary"""
        return {
            "round_number": self.round_number,
            "phase": self.phase.value,
            "time_remaining": self.time_remaining,
            "duration": self.duration,
            "selected_duration": self.selected_duration,
            "active_predictions": [p.to_dict() for p in self.active_predictions],
            "locked_predictions": [p.to_dict() for p in self.locked_predictions],
            "last_result": self.last_result.model_dump(mode="json") if self.last_result else None,
            "history": [r.model_dump(mode="json") for r in self.history],
            "winners": [p.to_dict() for p in self.winners],
            "total_multiplier": float(self.total_multiplier),
            "settings": {
                "sound_enabled": self.settings.sound_enabled,
                "animations_enabled": self.settings.animations_enabled,
                "mode": self.settings.mode.value,
            },
        }

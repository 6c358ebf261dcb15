"""
Intent models

Intents are the only way state changes. Player intents come from the
presentation layer; Tick and PhaseTimeout come from the scheduler.
"""

from dataclasses import dataclass, field
from typing import Any

from .enums import GamePhase, RejectReason
from .round_result import RoundResult


@dataclass(frozen=True)
class PlaceBet:
    """Add a prediction, replacing any bet in the same category"""

    kind: Any


@dataclass(frozen=True)
class ClearBets:
    """Drop all active predictions"""


@dataclass(frozen=True)
class ConfirmBets:
    """Lock in the active predictions before the countdown expires"""


@dataclass(frozen=True)
class SetDuration:
    """Select the round length (seconds)"""

    duration: int


@dataclass(frozen=True)
class UpdateSettings:
    """Change cosmetic settings"""

    changes: dict = field(default_factory=dict)


@dataclass(frozen=True)
class Tick:
    """Wall-clock time elapsed since the previous tick"""

    elapsed_ms: int


@dataclass(frozen=True)
class PhaseTimeout:
    """
    Dwell expiry for a phase

    round_number pins the timeout to the round that scheduled it. A resolving
    timeout carries the drawn result.
    """

    phase: GamePhase
    round_number: int
    result: RoundResult | None = None


@dataclass(frozen=True)
class IntentResult:
    """Outcome of dispatching an intent"""

    accepted: bool
    reason: RejectReason | None = None
    message: str | None = None

    @classmethod
    def ok(cls) -> "IntentResult":
        return cls(accepted=True)

    @classmethod
    def rejected(cls, reason: RejectReason, message: str) -> "IntentResult":
        return cls(accepted=False, reason=reason, message=message)

    def __bool__(self) -> bool:
        return self.accepted

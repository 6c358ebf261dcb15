"""
Enumerations for round phases, bet kinds and intent outcomes
"""

from enum import Enum


class GamePhase(str, Enum):
    """Round phase states"""

    BETTING = "betting"
    RESOLVING = "resolving"
    SHOWING_RESULT = "showing-result"

    @classmethod
    def accepts_bets(cls, phase: str) -> bool:
        """Check if predictions may be edited in this phase.

        Only BETTING is editable; RESOLVING and SHOWING_RESULT hold the
        locked snapshot for the rest of the round.
        """
        return phase == cls.BETTING


class PredictionCategory(str, Enum):
    """Bet class; predictions are mutually exclusive within a category"""

    SIZE = "size"
    COLOR = "color"
    NUMBER = "number"


class SizeBet(str, Enum):
    """Size predictions (big = 5-9, small = 0-4)"""

    BIG = "big"
    SMALL = "small"


class ResultColor(str, Enum):
    """Colors a round can resolve to"""

    RED = "red"
    GREEN = "green"
    BLUE = "blue"


class GameMode(str, Enum):
    """Badge shown by the presentation layer (no effect on rounds)"""

    DEMO = "demo"
    LIVE = "live"


class RejectReason(str, Enum):
    """Why an intent was refused"""

    BETTING_CLOSED = "betting_closed"
    NO_ACTIVE_BETS = "no_active_bets"
    TIME_EXPIRED = "time_expired"
    INVALID_BET = "invalid_bet"
    INVALID_DURATION = "invalid_duration"

"""
Intent validation functions

Each validator inspects the current GameState and returns an IntentResult:
IntentResult.ok() when the intent may proceed, otherwise a rejection carrying
the RejectReason and a player-facing message. Validators never mutate state
and never raise for a refused intent.
"""

from config import config
from models import GamePhase, GameState, IntentResult, RejectReason


def validate_betting_open(state: GameState, action: str = "BET") -> IntentResult:
    """
    Validate that the betting window is open

    Betting is open only in the BETTING phase with time left on the clock;
    the zero-time check guards against a race with the final timer tick.
    """
    if not GamePhase.accepts_bets(state.round.phase):
        return IntentResult.rejected(
            RejectReason.BETTING_CLOSED,
            f"{action} not allowed: betting is closed for this round ({state.round.phase.value})",
        )

    if state.round.time_remaining <= 0:
        return IntentResult.rejected(
            RejectReason.BETTING_CLOSED,
            f"{action} not allowed: betting is closed for this round",
        )

    return IntentResult.ok()


def validate_place_bet(state: GameState) -> IntentResult:
    """Validate adding or replacing a prediction"""
    return validate_betting_open(state, "BET")


def validate_clear(state: GameState) -> IntentResult:
    """Validate clearing active predictions (betting phase only)"""
    if not GamePhase.accepts_bets(state.round.phase):
        return IntentResult.rejected(
            RejectReason.BETTING_CLOSED,
            f"CLEAR not allowed in {state.round.phase.value} phase",
        )
    return IntentResult.ok()


def validate_confirm(state: GameState) -> IntentResult:
    """
    Validate locking in the active predictions

    Checked in order: phase, empty selection, zero-time boundary.
    """
    if not GamePhase.accepts_bets(state.round.phase):
        return IntentResult.rejected(
            RejectReason.BETTING_CLOSED,
            f"CONFIRM not allowed: betting is closed ({state.round.phase.value})",
        )

    if not state.active_predictions:
        return IntentResult.rejected(
            RejectReason.NO_ACTIVE_BETS,
            "Select at least one prediction",
        )

    if state.round.time_remaining <= 0:
        return IntentResult.rejected(RejectReason.TIME_EXPIRED, "Time is up!")

    return IntentResult.ok()


def validate_duration(duration) -> IntentResult:
    """Validate a round length against the allowed set"""
    allowed = config.allowed_durations
    if isinstance(duration, bool) or not isinstance(duration, int) or duration not in allowed:
        return IntentResult.rejected(
            RejectReason.INVALID_DURATION,
            f"Round duration must be one of {allowed} seconds, got {duration!r}",
        )
    return IntentResult.ok()

"""
Round Reducer - pure state transitions

State Machine:
    BETTING → RESOLVING → SHOWING_RESULT → BETTING (next round)

reduce(state, intent) is the only place GameState changes. It is pure: the
same state and intent always yield the same Transition, no clock or random
source is consulted. Scheduler inputs (Tick, PhaseTimeout) go through the
same function as player intents; the drawn result arrives inside the
resolving PhaseTimeout.
"""

import logging
from dataclasses import dataclass, replace

from config import config
from models import (
    ClearBets,
    ConfirmBets,
    GameMode,
    GamePhase,
    GameState,
    IntentResult,
    PhaseTimeout,
    PlaceBet,
    RejectReason,
    Round,
    SetDuration,
    Tick,
    UpdateSettings,
    replace_in_category,
)

from . import validators
from .prediction_catalog import make_prediction

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Transition:
    """New state plus the verdict on the intent that produced it"""

    state: GameState
    result: IntentResult

    @property
    def changed(self) -> bool:
        return self.result.accepted


def _unchanged(state: GameState, result: IntentResult) -> Transition:
    return Transition(state, result)


def _ignored(state: GameState, message: str) -> Transition:
    return Transition(state, IntentResult(accepted=False, message=message))


# ========== Player intents ==========


def _place_bet(state: GameState, intent: PlaceBet) -> Transition:
    verdict = validators.validate_place_bet(state)
    if not verdict:
        return _unchanged(state, verdict)

    try:
        prediction = make_prediction(intent.kind)
    except ValueError as e:
        return _unchanged(state, IntentResult.rejected(RejectReason.INVALID_BET, str(e)))

    active = replace_in_category(state.active_predictions, prediction)
    return Transition(replace(state, active_predictions=active), IntentResult.ok())


def _clear_bets(state: GameState, intent: ClearBets) -> Transition:
    verdict = validators.validate_clear(state)
    if not verdict:
        return _unchanged(state, verdict)
    return Transition(replace(state, active_predictions=()), IntentResult.ok())


def _confirm_bets(state: GameState, intent: ConfirmBets) -> Transition:
    verdict = validators.validate_confirm(state)
    if not verdict:
        return _unchanged(state, verdict)
    return Transition(
        replace(state, locked_predictions=state.active_predictions), IntentResult.ok()
    )


def _set_duration(state: GameState, intent: SetDuration) -> Transition:
    verdict = validators.validate_duration(intent.duration)
    if not verdict:
        return _unchanged(state, verdict)

    new_state = replace(state, selected_duration=intent.duration)
    # Restart the clock only while betting; otherwise the next round picks it up
    if state.round.phase == GamePhase.BETTING:
        new_round = replace(
            state.round,
            duration=intent.duration,
            time_remaining=intent.duration,
            elapsed_ms=0,
        )
        new_state = replace(new_state, round=new_round)
    return Transition(new_state, IntentResult.ok())


def _update_settings(state: GameState, intent: UpdateSettings) -> Transition:
    changes = dict(intent.changes)
    if "mode" in changes:
        changes["mode"] = GameMode(changes["mode"])
    try:
        settings = replace(state.settings, **changes)
    except TypeError as e:
        raise ValueError(f"Unknown setting in {sorted(intent.changes)}: {e}") from e
    return Transition(replace(state, settings=settings), IntentResult.ok())


# ========== Clock inputs ==========


def _close_betting(state: GameState) -> GameState:
    """Lock the active predictions and move to RESOLVING"""
    new_round = replace(
        state.round, phase=GamePhase.RESOLVING, time_remaining=0, elapsed_ms=0
    )
    return replace(state, round=new_round, locked_predictions=state.active_predictions)


def _tick(state: GameState, intent: Tick) -> Transition:
    rnd = state.round
    if rnd.phase != GamePhase.BETTING:
        return _ignored(state, f"tick ignored in {rnd.phase.value} phase")
    if intent.elapsed_ms <= 0:
        return _ignored(state, "non-positive tick")

    tick_ms = config.get("game_rules", "tick_interval_ms", 1000)
    steps, carry = divmod(rnd.elapsed_ms + intent.elapsed_ms, tick_ms)
    remaining = max(rnd.time_remaining - steps, 0)

    if remaining == 0:
        return Transition(_close_betting(state), IntentResult.ok())

    new_round = replace(rnd, time_remaining=remaining, elapsed_ms=carry)
    return Transition(replace(state, round=new_round), IntentResult.ok())


def _resolve(state: GameState, intent: PhaseTimeout) -> GameState:
    if intent.result is None:
        raise ValueError("Resolving timeout requires a drawn result")
    history_size = config.get("game_rules", "history_size", 10)
    history = ((intent.result,) + state.history)[:history_size]
    new_round = replace(state.round, phase=GamePhase.SHOWING_RESULT)
    return replace(state, round=new_round, last_result=intent.result, history=history)


def _start_next_round(state: GameState) -> GameState:
    new_round = Round.fresh(state.round.round_number + 1, state.selected_duration)
    return replace(state, round=new_round, active_predictions=(), locked_predictions=())


def _phase_timeout(state: GameState, intent: PhaseTimeout) -> Transition:
    rnd = state.round
    if intent.round_number != rnd.round_number or intent.phase != rnd.phase:
        return _ignored(
            state,
            f"stale timeout {intent.phase.value}#{intent.round_number} "
            f"(now {rnd.phase.value}#{rnd.round_number})",
        )

    if rnd.phase == GamePhase.BETTING:
        new_state = _close_betting(state)
    elif rnd.phase == GamePhase.RESOLVING:
        new_state = _resolve(state, intent)
    else:
        new_state = _start_next_round(state)
    return Transition(new_state, IntentResult.ok())


_HANDLERS = {
    PlaceBet: _place_bet,
    ClearBets: _clear_bets,
    ConfirmBets: _confirm_bets,
    SetDuration: _set_duration,
    UpdateSettings: _update_settings,
    Tick: _tick,
    PhaseTimeout: _phase_timeout,
}


def reduce(state: GameState, intent) -> Transition:
    """
    Apply an intent to a state

    Args:
        state: Current immutable state
        intent: Player intent or clock input (see models.intents)

    Returns:
        Transition with the next state (the same object when nothing changed)

    Raises:
        TypeError: If intent is not a known intent type
    """
    handler = _HANDLERS.get(type(intent))
    if handler is None:
        raise TypeError(f"Unknown intent: {intent!r}")
    return handler(state, intent)

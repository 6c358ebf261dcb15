"""
Tests for the pure round reducer

State Machine:
    BETTING → RESOLVING → SHOWING_RESULT → BETTING (next round)
"""

import pytest
from dataclasses import replace

from core.round_reducer import reduce
from models import (
    ClearBets,
    ConfirmBets,
    GameMode,
    GamePhase,
    PhaseTimeout,
    PlaceBet,
    PredictionCategory,
    RejectReason,
    ResultColor,
    RoundResult,
    SetDuration,
    SizeBet,
    Tick,
    UpdateSettings,
)


def drawn(number=7, color=ResultColor.RED, duration=10):
    return RoundResult(number=number, color=color, timestamp=0, duration=duration)


def play_round(state, result):
    """Drive one round from betting to the next round's betting"""
    state = reduce(state, PhaseTimeout(GamePhase.BETTING, state.round.round_number)).state
    state = reduce(
        state, PhaseTimeout(GamePhase.RESOLVING, state.round.round_number, result)
    ).state
    return reduce(state, PhaseTimeout(GamePhase.SHOWING_RESULT, state.round.round_number)).state


def play_round_from_resolving(state):
    state = reduce(state, PhaseTimeout(GamePhase.RESOLVING, state.round.round_number, drawn())).state
    return reduce(state, PhaseTimeout(GamePhase.SHOWING_RESULT, state.round.round_number)).state


class TestPlaceBet:

    def test_adds_prediction(self, betting_state):
        transition = reduce(betting_state, PlaceBet("big"))
        assert transition.result.accepted
        assert [p.kind for p in transition.state.active_predictions] == [SizeBet.BIG]

    def test_same_category_replaces(self, betting_state):
        state = reduce(betting_state, PlaceBet("big")).state
        state = reduce(state, PlaceBet("red")).state
        state = reduce(state, PlaceBet("small")).state

        kinds = [p.kind for p in state.active_predictions]
        assert kinds == [ResultColor.RED, SizeBet.SMALL]

    def test_at_most_one_per_category(self, betting_state):
        state = betting_state
        for kind in ["big", 3, "red", "small", 7, "blue", "green", 0]:
            state = reduce(state, PlaceBet(kind)).state

        categories = [p.category for p in state.active_predictions]
        assert sorted(categories) == sorted(set(categories))
        assert len(categories) == 3

    def test_zero_time_rejected_without_change(self, expired_state):
        transition = reduce(expired_state, PlaceBet("big"))
        assert transition.result.reason == RejectReason.BETTING_CLOSED
        assert transition.state is expired_state

    def test_unknown_kind_rejected(self, betting_state):
        transition = reduce(betting_state, PlaceBet("purple"))
        assert transition.result.reason == RejectReason.INVALID_BET
        assert transition.state is betting_state

    def test_rejected_while_resolving(self, betting_state):
        resolving = reduce(betting_state, PhaseTimeout(GamePhase.BETTING, 1)).state
        transition = reduce(resolving, PlaceBet(5))
        assert transition.result.reason == RejectReason.BETTING_CLOSED


class TestClearAndConfirm:

    def test_clear(self, betting_state):
        state = reduce(betting_state, PlaceBet("big")).state
        state = reduce(state, ClearBets()).state
        assert state.active_predictions == ()

    def test_confirm_locks_active(self, betting_state):
        state = reduce(betting_state, PlaceBet("big")).state
        transition = reduce(state, ConfirmBets())
        assert transition.result.accepted
        assert transition.state.locked_predictions == state.active_predictions
        # still betting, active remains editable
        assert transition.state.phase == GamePhase.BETTING

    def test_confirm_empty(self, betting_state):
        assert reduce(betting_state, ConfirmBets()).result.reason == RejectReason.NO_ACTIVE_BETS


class TestSetDuration:

    def test_restarts_clock_while_betting(self, betting_state):
        state = reduce(betting_state, Tick(6000)).state
        assert state.round.time_remaining == 4

        state = reduce(state, SetDuration(20)).state
        assert state.round.duration == 20
        assert state.round.time_remaining == 20
        assert state.selected_duration == 20

    def test_deferred_outside_betting(self, betting_state):
        resolving = reduce(betting_state, PhaseTimeout(GamePhase.BETTING, 1)).state
        state = reduce(resolving, SetDuration(15)).state

        assert state.selected_duration == 15
        assert state.round.duration == 10

        state = play_round_from_resolving(state)
        assert state.round.duration == 15
        assert state.round.time_remaining == 15

    def test_invalid_duration(self, betting_state):
        transition = reduce(betting_state, SetDuration(12))
        assert transition.result.reason == RejectReason.INVALID_DURATION
        assert transition.state is betting_state


class TestTick:

    def test_counts_down_whole_seconds(self, betting_state):
        state = reduce(betting_state, Tick(1000)).state
        assert state.round.time_remaining == 9

    def test_carries_sub_second_remainder(self, betting_state):
        state = reduce(betting_state, Tick(600)).state
        assert state.round.time_remaining == 10
        state = reduce(state, Tick(600)).state
        assert state.round.time_remaining == 9
        assert state.round.elapsed_ms == 200

    def test_reaching_zero_closes_betting(self, betting_state):
        state = reduce(betting_state, PlaceBet("red")).state
        state = reduce(state, Tick(10_000)).state

        assert state.phase == GamePhase.RESOLVING
        assert state.round.time_remaining == 0
        assert state.locked_predictions == state.active_predictions

    def test_large_tick_never_goes_negative(self, betting_state):
        state = reduce(betting_state, Tick(60_000)).state
        assert state.round.time_remaining == 0

    def test_ignored_outside_betting(self, betting_state):
        resolving = reduce(betting_state, PhaseTimeout(GamePhase.BETTING, 1)).state
        transition = reduce(resolving, Tick(1000))
        assert not transition.result.accepted
        assert transition.result.reason is None
        assert transition.state is resolving


class TestPhaseTimeout:

    def test_full_cycle(self, betting_state):
        state = reduce(betting_state, PlaceBet("big")).state
        state = reduce(state, PhaseTimeout(GamePhase.BETTING, 1)).state
        assert state.phase == GamePhase.RESOLVING

        state = reduce(state, PhaseTimeout(GamePhase.RESOLVING, 1, drawn())).state
        assert state.phase == GamePhase.SHOWING_RESULT
        assert state.last_result == drawn()
        assert state.locked_predictions[0].kind == SizeBet.BIG

        state = reduce(state, PhaseTimeout(GamePhase.SHOWING_RESULT, 1)).state
        assert state.phase == GamePhase.BETTING
        assert state.round.round_number == 2
        assert state.round.time_remaining == 10
        assert state.active_predictions == ()
        assert state.locked_predictions == ()

    @pytest.mark.parametrize("timeout", [
        PhaseTimeout(GamePhase.RESOLVING, 1),
        PhaseTimeout(GamePhase.BETTING, 2),
        PhaseTimeout(GamePhase.SHOWING_RESULT, 1),
    ])
    def test_stale_timeouts_ignored(self, betting_state, timeout):
        transition = reduce(betting_state, timeout)
        assert not transition.result.accepted
        assert transition.state is betting_state

    def test_resolving_requires_result(self, betting_state):
        resolving = reduce(betting_state, PhaseTimeout(GamePhase.BETTING, 1)).state
        with pytest.raises(ValueError):
            reduce(resolving, PhaseTimeout(GamePhase.RESOLVING, 1))

    def test_history_keeps_ten_most_recent(self, betting_state):
        state = betting_state
        results = [drawn(number=i % 10) for i in range(11)]
        for result in results:
            state = play_round(state, result)

        assert len(state.history) == 10
        assert state.history == tuple(reversed(results[1:]))
        assert state.history[0] == results[-1]

    def test_history_size_from_config(self, betting_state):
        from config import config

        config.set("game_rules", "history_size", 3)
        state = betting_state
        for i in range(5):
            state = play_round(state, drawn(number=i))
        assert [r.number for r in state.history] == [4, 3, 2]


class TestUpdateSettings:

    def test_toggles(self, betting_state):
        state = reduce(betting_state, UpdateSettings({"sound_enabled": False})).state
        assert state.settings.sound_enabled is False
        assert state.settings.animations_enabled is True

    def test_mode_from_string(self, betting_state):
        state = reduce(betting_state, UpdateSettings({"mode": "live"})).state
        assert state.settings.mode == GameMode.LIVE

    def test_unknown_setting(self, betting_state):
        with pytest.raises(ValueError):
            reduce(betting_state, UpdateSettings({"volume": 3}))


class TestReduce:

    def test_unknown_intent(self, betting_state):
        with pytest.raises(TypeError):
            reduce(betting_state, object())

    def test_pure(self, betting_state):
        first = reduce(betting_state, PlaceBet("big"))
        second = reduce(betting_state, PlaceBet("big"))
        assert first == second
        assert betting_state.active_predictions == ()
        assert first.state.active_predictions[0].category == PredictionCategory.SIZE

"""
Round Engine - owner of the single GameState

State Machine:
    BETTING ──(countdown hits 0)──► RESOLVING ──(1.5s dwell)──► SHOWING_RESULT
       ▲                                                              │
       └──────────────────────(3s dwell, new round)───────────────────┘

The engine holds the only GameState, feeds every player intent and timer
firing through core.round_reducer.reduce(), re-arms the scheduler for the
phase it lands in, and tells observers what changed. The presentation layer
receives snapshots and calls the intent methods; it never touches state.
"""

import logging
from collections import defaultdict
from collections.abc import Callable
from decimal import Decimal
from enum import Enum
from typing import Any

from config import config
from models import (
    ClearBets,
    ConfirmBets,
    GamePhase,
    GameSnapshot,
    GameState,
    IntentResult,
    PhaseTimeout,
    PlaceBet,
    SetDuration,
    Tick,
    UpdateSettings,
)

from .outcome_generator import OutcomeGenerator
from .round_reducer import reduce
from .scheduler import Scheduler
from .win_evaluator import summarize

logger = logging.getLogger(__name__)


class EngineEvents(Enum):
    """Notifications emitted by the round engine"""

    STATE_CHANGED = "state_changed"
    PHASE_CHANGED = "phase_changed"
    TIMER_TICK = "timer_tick"
    PREDICTIONS_CHANGED = "predictions_changed"
    ROUND_STARTED = "round_started"
    ROUND_RESOLVED = "round_resolved"
    DURATION_CHANGED = "duration_changed"
    SETTINGS_CHANGED = "settings_changed"
    INTENT_REJECTED = "intent_rejected"


class RoundEngine:
    """
    Continuously cycling round loop.

    Usage:
        engine = RoundEngine(SimulatedScheduler())
        engine.subscribe(EngineEvents.STATE_CHANGED, render)
        engine.start()
        engine.place_bet("big")
        engine.place_bet("red")
    """

    def __init__(
        self,
        scheduler: Scheduler,
        generator: OutcomeGenerator | None = None,
        initial_duration: int | None = None,
    ):
        duration = initial_duration or config.get("game_rules", "default_duration", 10)
        if duration not in config.allowed_durations:
            raise ValueError(
                f"initial duration must be one of {config.allowed_durations}, got {duration}"
            )

        self._scheduler = scheduler
        self._generator = generator or OutcomeGenerator()
        self._state = GameState.initial(duration)
        self._running = False

        # Pending timer handles; at most one of each at a time
        self._tick_handle: Any = None
        self._timeout_handle: Any = None
        self._last_tick_at: int | None = None

        self._observers: dict[EngineEvents, list[Callable]] = defaultdict(list)

        logger.info(f"RoundEngine initialized (duration={duration}s)")

    # ========== State Access ==========

    @property
    def state(self) -> GameState:
        """Current immutable state (read-only)"""
        return self._state

    @property
    def is_running(self) -> bool:
        return self._running

    def snapshot(self) -> GameSnapshot:
        """Build the read-only view handed to the presentation layer"""
        state = self._state
        rnd = state.round
        winners: tuple = ()
        total = Decimal("0")
        if rnd.phase == GamePhase.SHOWING_RESULT and state.last_result is not None:
            outcome = summarize(state.last_result, state.locked_predictions)
            winners = outcome.winners
            total = outcome.total_multiplier

        betting = rnd.phase == GamePhase.BETTING
        return GameSnapshot(
            round_number=rnd.round_number,
            phase=rnd.phase,
            time_remaining=rnd.time_remaining,
            duration=rnd.duration,
            selected_duration=state.selected_duration,
            active_predictions=state.active_predictions,
            locked_predictions=state.locked_predictions,
            last_result=state.last_result,
            history=state.history,
            settings=state.settings,
            winners=winners,
            total_multiplier=total,
            is_urgent=betting and rnd.time_remaining <= config.get("ui", "urgent_seconds", 5),
            is_critical=betting and rnd.time_remaining <= config.get("ui", "critical_seconds", 3),
        )

    # ========== Lifecycle ==========

    def start(self) -> None:
        """Begin cycling rounds from the current state"""
        if self._running:
            logger.debug("start called but engine already running")
            return
        self._running = True
        self._arm_timers()
        logger.info(
            f"Round {self._state.round.round_number} started "
            f"({self._state.round.duration}s betting window)"
        )
        self._emit(EngineEvents.ROUND_STARTED, self.snapshot())
        self._emit(EngineEvents.STATE_CHANGED, self.snapshot())

    def stop(self) -> None:
        """Stop cycling and cancel every pending timer"""
        if not self._running:
            return
        self._running = False
        self._cancel_timers()
        logger.info("RoundEngine stopped")

    # ========== Player Intents ==========

    def place_bet(self, kind) -> IntentResult:
        """Add a prediction, replacing any bet in the same category"""
        return self._dispatch(PlaceBet(kind))

    def clear_bets(self) -> IntentResult:
        """Drop all active predictions (betting only)"""
        return self._dispatch(ClearBets())

    def confirm_bets(self) -> IntentResult:
        """Lock in the active predictions ahead of the countdown"""
        return self._dispatch(ConfirmBets())

    def set_duration(self, duration: int) -> IntentResult:
        """Select the round length; restarts the clock if betting"""
        return self._dispatch(SetDuration(duration))

    def update_settings(self, **changes) -> IntentResult:
        """Change cosmetic settings (sound_enabled, animations_enabled, mode)"""
        return self._dispatch(UpdateSettings(changes))

    # ========== Clock Inputs ==========

    def on_tick(self, elapsed_ms: int) -> IntentResult:
        """Advance the betting countdown by elapsed_ms"""
        return self._dispatch(Tick(elapsed_ms))

    def on_timeout(self, phase: GamePhase) -> IntentResult:
        """
        Expire the dwell of a phase

        The result is drawn here, only when the timeout is current, so the
        reducer stays pure and stale timeouts consume no entropy.
        """
        rnd = self._state.round
        result = None
        if phase == GamePhase.RESOLVING and rnd.phase == GamePhase.RESOLVING:
            result = self._generator.generate(rnd.duration)
        return self._dispatch(PhaseTimeout(phase, rnd.round_number, result))

    # ========== Dispatch ==========

    def _dispatch(self, intent) -> IntentResult:
        old_state = self._state
        transition = reduce(old_state, intent)
        result = transition.result

        if not result.accepted:
            if result.reason is not None:
                logger.info(f"Intent rejected ({result.reason.value}): {result.message}")
                self._emit(EngineEvents.INTENT_REJECTED, result)
            else:
                logger.debug(f"Intent ignored: {result.message}")
            return result

        new_state = transition.state
        if new_state is old_state:
            return result

        self._state = new_state
        self._sync_timers(old_state, new_state, intent)
        self._notify_changes(old_state, new_state)
        return result

    # ========== Timers ==========

    def _sync_timers(self, old: GameState, new: GameState, intent) -> None:
        if not self._running:
            return
        phase_changed = (
            old.round.phase != new.round.phase
            or old.round.round_number != new.round.round_number
        )
        clock_restarted = (
            isinstance(intent, SetDuration) and new.round.phase == GamePhase.BETTING
        )
        if phase_changed or clock_restarted:
            self._cancel_timers()
            self._arm_timers()

    def _arm_timers(self) -> None:
        phase = self._state.round.phase
        if phase == GamePhase.BETTING:
            self._arm_tick()
        elif phase == GamePhase.RESOLVING:
            self._timeout_handle = self._scheduler.call_later(
                config.get("game_rules", "resolving_dwell_ms", 1500),
                self._fire_timeout,
            )
        else:
            self._timeout_handle = self._scheduler.call_later(
                config.get("game_rules", "result_dwell_ms", 3000),
                self._fire_timeout,
            )

    def _arm_tick(self) -> None:
        self._last_tick_at = self._scheduler.now_ms()
        self._tick_handle = self._scheduler.call_later(
            config.get("game_rules", "tick_interval_ms", 1000), self._fire_tick
        )

    def _cancel_timers(self) -> None:
        if self._tick_handle is not None:
            self._scheduler.cancel(self._tick_handle)
            self._tick_handle = None
        if self._timeout_handle is not None:
            self._scheduler.cancel(self._timeout_handle)
            self._timeout_handle = None
        self._last_tick_at = None

    def _fire_tick(self) -> None:
        self._tick_handle = None
        if not self._running:
            return
        now = self._scheduler.now_ms()
        elapsed = now - self._last_tick_at if self._last_tick_at is not None else 0
        self.on_tick(elapsed)
        # Still counting down: re-arm (a phase change has armed its own timer)
        if (
            self._running
            and self._tick_handle is None
            and self._state.round.phase == GamePhase.BETTING
        ):
            self._arm_tick()

    def _fire_timeout(self) -> None:
        self._timeout_handle = None
        if not self._running:
            return
        self.on_timeout(self._state.round.phase)

    # ========== Observer Pattern ==========

    def subscribe(self, event: EngineEvents, callback: Callable) -> None:
        """Subscribe to engine notifications"""
        if callback not in self._observers[event]:
            self._observers[event].append(callback)
            logger.debug(f"Subscribed to {event.value}")

    def unsubscribe(self, event: EngineEvents, callback: Callable) -> None:
        """Unsubscribe from engine notifications"""
        if callback in self._observers[event]:
            self._observers[event].remove(callback)
            logger.debug(f"Unsubscribed from {event.value}")

    def _emit(self, event: EngineEvents, data: Any = None) -> None:
        """Emit an event to all subscribers; observer errors never reach the round loop"""
        for callback in list(self._observers[event]):
            try:
                callback(data)
            except Exception as e:
                logger.error(f"Observer callback error for {event.value}: {e}", exc_info=True)

    def _notify_changes(self, old: GameState, new: GameState) -> None:
        """
        Detect and notify about state changes

        Every event gets a fresh snapshot: an observer may dispatch intents
        from inside a notification, and later observers must see the result.
        """
        old_round, new_round = old.round, new.round

        if old_round.round_number != new_round.round_number:
            logger.info(
                f"Round {new_round.round_number} started ({new_round.duration}s betting window)"
            )
            self._emit(EngineEvents.ROUND_STARTED, self.snapshot())

        if old_round.phase != new_round.phase:
            logger.info(f"Round phase: {old_round.phase.value} -> {new_round.phase.value}")
            self._emit(EngineEvents.PHASE_CHANGED, self.snapshot())

            if new_round.phase == GamePhase.RESOLVING:
                logger.info(f"Betting closed with {len(new.locked_predictions)} locked prediction(s)")

            if new_round.phase == GamePhase.SHOWING_RESULT and new.last_result is not None:
                outcome = summarize(new.last_result, new.locked_predictions)
                logger.info(
                    f"Round {new_round.round_number} result: {new.last_result.describe()} - "
                    f"{len(outcome.winners)}/{len(outcome.predictions)} winning, "
                    f"{outcome.total_multiplier}x"
                )
                self._emit(EngineEvents.ROUND_RESOLVED, outcome)

        if old_round.time_remaining != new_round.time_remaining:
            self._emit(EngineEvents.TIMER_TICK, self.snapshot())

        if (
            old.active_predictions != new.active_predictions
            or old.locked_predictions != new.locked_predictions
        ):
            self._emit(EngineEvents.PREDICTIONS_CHANGED, self.snapshot())

        if old.selected_duration != new.selected_duration or old_round.duration != new_round.duration:
            logger.info(f"Round duration changed to {new.selected_duration}s")
            self._emit(EngineEvents.DURATION_CHANGED, self.snapshot())

        if old.settings != new.settings:
            self._emit(EngineEvents.SETTINGS_CHANGED, self.snapshot())

        self._emit(EngineEvents.STATE_CHANGED, self.snapshot())

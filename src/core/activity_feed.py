"""
Betting Activity Feed (cosmetic)

Generates fake "other player" bets at random 1-4 s intervals while betting is
open, keeps the newest few, and clears itself when a new round starts. It
runs on its own timer and only listens to engine notifications; the round
engine never reads it, so it cannot delay or gate a phase.
"""

import logging
import random
import uuid
from collections import deque
from collections.abc import Callable

from config import config
from models import BettingActivity, GamePhase, GameSnapshot

from .round_engine import EngineEvents, RoundEngine
from .scheduler import Scheduler

logger = logging.getLogger(__name__)

PLAYER_NAMES = (
    "CryptoKing", "LuckyStar", "BetMaster", "GamePro", "WinnerX", "PredictorA1",
    "BullsEye", "ColorWiz", "NumberCruncher", "FortuneSeeker", "BigBettor", "SmallFish",
    "RedRanger", "GreenGuru", "BlueBlast", "MegaWin", "QuickBet", "SafePlay",
)

BET_LABELS = ("Big", "Small", "Red", "Green", "Blue", "Number 7", "Number 3", "Number 9")


class ActivityFeed:
    """
    Capped, discardable list of fake bets

    Usage:
        feed = ActivityFeed(scheduler)
        feed.attach(engine)
        feed.on_change = lambda entries: render(entries)
    """

    def __init__(self, scheduler: Scheduler, rng: random.Random | None = None):
        self._scheduler = scheduler
        self._rng = rng or random.Random()
        self._entries: deque[BettingActivity] = deque(maxlen=config.get("feed", "max_entries", 5))
        self._handle = None
        self._betting_open = False
        self._engine: RoundEngine | None = None

        self.on_change: Callable[[list[BettingActivity]], None] | None = None

    @property
    def entries(self) -> list[BettingActivity]:
        """Newest first"""
        return list(self._entries)

    @property
    def is_generating(self) -> bool:
        return self._handle is not None

    def attach(self, engine: RoundEngine) -> None:
        """Follow an engine's phases (read-only)"""
        self._engine = engine
        engine.subscribe(EngineEvents.STATE_CHANGED, self._on_state_changed)
        engine.subscribe(EngineEvents.ROUND_STARTED, self._on_round_started)
        self._on_state_changed(engine.snapshot())

    def detach(self) -> None:
        """Stop following the engine and cancel the pending timer"""
        if self._engine is not None:
            self._engine.unsubscribe(EngineEvents.STATE_CHANGED, self._on_state_changed)
            self._engine.unsubscribe(EngineEvents.ROUND_STARTED, self._on_round_started)
            self._engine = None
        self._stop_timer()
        self._betting_open = False

    def generate(self) -> BettingActivity:
        """Create one fake bet"""
        return BettingActivity(
            activity_id=uuid.uuid4().hex,
            player_name=self._rng.choice(PLAYER_NAMES),
            bet_label=self._rng.choice(BET_LABELS),
            amount=self._rng.randint(
                config.get("feed", "min_amount", 10), config.get("feed", "max_amount", 1010)
            ),
            timestamp=self._scheduler.now_ms(),
        )

    def clear(self) -> None:
        if self._entries:
            self._entries.clear()
            self._notify()

    # ========== Engine notifications ==========

    def _on_round_started(self, snapshot: GameSnapshot) -> None:
        self.clear()

    def _on_state_changed(self, snapshot: GameSnapshot) -> None:
        open_now = snapshot.phase == GamePhase.BETTING and snapshot.time_remaining > 0
        if open_now and not self._betting_open:
            self._betting_open = True
            self._schedule_next()
        elif not open_now and self._betting_open:
            self._betting_open = False
            self._stop_timer()

    # ========== Timer ==========

    def _next_delay(self) -> int:
        return self._rng.randint(
            config.get("feed", "min_interval_ms", 1000),
            config.get("feed", "max_interval_ms", 4000),
        )

    def _schedule_next(self) -> None:
        self._stop_timer()
        self._handle = self._scheduler.call_later(self._next_delay(), self._fire)

    def _stop_timer(self) -> None:
        if self._handle is not None:
            self._scheduler.cancel(self._handle)
            self._handle = None

    def _fire(self) -> None:
        self._handle = None
        if not self._betting_open:
            return
        activity = self.generate()
        self._entries.appendleft(activity)
        logger.debug(f"Activity: {activity.player_name} bet {activity.bet_label} ${activity.amount}")
        self._notify()
        self._schedule_next()

    def _notify(self) -> None:
        if self.on_change:
            try:
                self.on_change(self.entries)
            except Exception as e:
                logger.error(f"Activity feed callback error: {e}", exc_info=True)

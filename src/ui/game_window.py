"""
GameWindow - Tk presentation of the round engine

Renders GameSnapshot values and forwards button presses as engine intents.
Holds no game state of its own beyond the last snapshot it drew.

Layout:
- Header: mode badge, round number, duration selector (10s / 15s / 20s)
- Timer: countdown, phase, progress bar (urgent <= 5s, critical <= 3s)
- Result: last drawn number and color, winners while the result is shown
- Bets: Big / Small, Red / Green / Blue, numbers 0-9, Confirm, Clear
- History: last 10 results, most recent first
- Live activity feed and settings toggles
"""

import logging
import tkinter as tk
from typing import Any

import ttkbootstrap as ttk

from core.activity_feed import ActivityFeed
from core.prediction_catalog import all_kinds, lookup
from core.round_engine import EngineEvents, RoundEngine
from core.win_evaluator import RoundOutcome
from models import (
    BettingActivity,
    GameMode,
    GamePhase,
    GameSnapshot,
    IntentResult,
    PredictionCategory,
    ResultColor,
    SizeBet,
)

from .widgets.toast_notification import ToastNotification

logger = logging.getLogger(__name__)

PHASE_TEXT = {
    GamePhase.BETTING: "PLACE YOUR BETS",
    GamePhase.RESOLVING: "DRAWING...",
    GamePhase.SHOWING_RESULT: "RESULT",
}

COLOR_STYLES = {
    ResultColor.RED: "danger",
    ResultColor.GREEN: "success",
    ResultColor.BLUE: "primary",
}


def kind_label(kind) -> str:
    if isinstance(kind, (SizeBet, ResultColor)):
        return kind.value.capitalize()
    return str(kind)


class GameWindow:
    """Main game frame"""

    def __init__(
        self,
        root: tk.Misc,
        engine: RoundEngine,
        config: Any,
        feed: ActivityFeed | None = None,
    ):
        self.root = root
        self.engine = engine
        self.config = config
        self.feed = feed
        self.font_family = config.UI["font_family"]
        self.toasts = ToastNotification(
            root, duration=config.UI["toast_duration_ms"], font_family=self.font_family
        )

        self.duration_buttons: dict[int, ttk.Button] = {}
        self.bet_buttons: dict[Any, ttk.Button] = {}
        self.history_labels: list[ttk.Label] = []
        self.last_snapshot: GameSnapshot | None = None
        self._announced_duration = engine.state.selected_duration

        self.frame = ttk.Frame(root, padding=15)
        self.frame.pack(fill="both", expand=True)

        self._build_header()
        self._build_timer()
        self._build_result()
        self._build_bets()
        self._build_history()
        self._build_feed_and_settings()

        engine.subscribe(EngineEvents.STATE_CHANGED, self.render)
        engine.subscribe(EngineEvents.INTENT_REJECTED, self._on_rejected)
        engine.subscribe(EngineEvents.ROUND_RESOLVED, self._on_resolved)
        engine.subscribe(EngineEvents.DURATION_CHANGED, self._on_duration_changed)
        if feed is not None:
            feed.on_change = self.render_feed

        self.render(engine.snapshot())
        logger.debug("GameWindow built")

    # ========== Layout ==========

    def _build_header(self):
        header = ttk.Frame(self.frame)
        header.pack(fill="x", pady=(0, 10))

        self.mode_label = ttk.Label(
            header, text="", font=(self.font_family, 11, "bold"), bootstyle="warning"
        )
        self.mode_label.pack(side="left")

        self.round_label = ttk.Label(header, text="", font=(self.font_family, 11))
        self.round_label.pack(side="left", padx=15)

        selector = ttk.Frame(header)
        selector.pack(side="right")
        for duration in self.config.allowed_durations:
            button = ttk.Button(
                selector,
                text=f"{duration}s",
                width=5,
                command=lambda d=duration: self.engine.set_duration(d),
            )
            button.pack(side="left", padx=2)
            self.duration_buttons[duration] = button

    def _build_timer(self):
        timer = ttk.Frame(self.frame)
        timer.pack(fill="x", pady=5)

        self.time_label = ttk.Label(timer, text="", font=(self.font_family, 40, "bold"))
        self.time_label.pack()
        self.phase_label = ttk.Label(timer, text="", font=(self.font_family, 12, "bold"))
        self.phase_label.pack()

        self.progress_var = tk.DoubleVar(value=100.0)
        self.progress_bar = ttk.Progressbar(
            timer, variable=self.progress_var, maximum=100, bootstyle="success"
        )
        self.progress_bar.pack(fill="x", pady=5)

    def _build_result(self):
        result = ttk.Labelframe(self.frame, text=" Last Result ", padding=10)
        result.pack(fill="x", pady=5)

        self.result_label = ttk.Label(result, text="-", font=(self.font_family, 22, "bold"))
        self.result_label.pack(side="left")
        self.winners_label = ttk.Label(result, text="", font=(self.font_family, 11))
        self.winners_label.pack(side="left", padx=20)

    def _build_bets(self):
        bets = ttk.Labelframe(self.frame, text=" Predictions ", padding=10)
        bets.pack(fill="x", pady=5)

        rows = {
            PredictionCategory.SIZE: ttk.Frame(bets),
            PredictionCategory.COLOR: ttk.Frame(bets),
            PredictionCategory.NUMBER: ttk.Frame(bets),
        }
        for row in rows.values():
            row.pack(fill="x", pady=2)

        for kind in all_kinds():
            entry = lookup(kind)
            text = f"{kind_label(kind)}  {entry.multiplier}x" if not isinstance(kind, int) else str(kind)
            button = ttk.Button(
                rows[entry.category],
                text=text,
                width=8 if isinstance(kind, int) else 12,
                bootstyle=COLOR_STYLES.get(kind, "secondary"),
                command=lambda k=kind: self.engine.place_bet(k),
            )
            button.pack(side="left", padx=2)
            self.bet_buttons[kind] = button

        actions = ttk.Frame(bets)
        actions.pack(fill="x", pady=(8, 0))
        self.confirm_button = ttk.Button(
            actions, text="Place Predictions", bootstyle="success", command=self.confirm_bets
        )
        self.confirm_button.pack(side="left")
        self.clear_button = ttk.Button(
            actions, text="Clear", bootstyle="outline-secondary", command=self.engine.clear_bets
        )
        self.clear_button.pack(side="left", padx=5)

        self.active_label = ttk.Label(bets, text="")
        self.active_label.pack(anchor="w", pady=(8, 0))
        self.locked_label = ttk.Label(bets, text="", bootstyle="info")
        self.locked_label.pack(anchor="w")

    def _build_history(self):
        history = ttk.Labelframe(self.frame, text=" History ", padding=10)
        history.pack(fill="x", pady=5)
        for _ in range(self.config.get("game_rules", "history_size", 10)):
            label = ttk.Label(
                history, text="", width=4, anchor="center", font=(self.font_family, 11, "bold")
            )
            label.pack(side="left", padx=2)
            self.history_labels.append(label)

    def _build_feed_and_settings(self):
        bottom = ttk.Frame(self.frame)
        bottom.pack(fill="both", expand=True, pady=5)

        feed_frame = ttk.Labelframe(bottom, text=" Live Betting Activity ", padding=10)
        feed_frame.pack(side="left", fill="both", expand=True)
        self.feed_list = tk.Listbox(feed_frame, height=5, activestyle="none")
        self.feed_list.pack(fill="both", expand=True)

        settings = ttk.Labelframe(bottom, text=" Settings ", padding=10)
        settings.pack(side="right", fill="y", padx=(10, 0))
        self.sound_var = tk.BooleanVar(value=True)
        self.animations_var = tk.BooleanVar(value=True)
        self.live_mode_var = tk.BooleanVar(value=False)
        ttk.Checkbutton(
            settings, text="Sound", variable=self.sound_var, bootstyle="round-toggle",
            command=lambda: self.engine.update_settings(sound_enabled=self.sound_var.get()),
        ).pack(anchor="w")
        ttk.Checkbutton(
            settings, text="Animations", variable=self.animations_var, bootstyle="round-toggle",
            command=lambda: self.engine.update_settings(animations_enabled=self.animations_var.get()),
        ).pack(anchor="w")
        ttk.Checkbutton(
            settings, text="Live mode", variable=self.live_mode_var, bootstyle="round-toggle",
            command=lambda: self.engine.update_settings(
                mode=GameMode.LIVE if self.live_mode_var.get() else GameMode.DEMO
            ),
        ).pack(anchor="w")

    # ========== Rendering ==========

    def render(self, snapshot: GameSnapshot) -> None:
        """Redraw everything from a snapshot"""
        self.last_snapshot = snapshot
        betting = snapshot.phase == GamePhase.BETTING

        mode = snapshot.settings.mode
        self.mode_label.configure(text="LIVE CASINO" if mode == GameMode.LIVE else "DEMO MODE")
        self.round_label.configure(text=f"Round #{snapshot.round_number}  -  {snapshot.duration}s")
        for duration, button in self.duration_buttons.items():
            selected = duration == snapshot.selected_duration
            button.configure(bootstyle="warning" if selected else "outline-warning")

        self.time_label.configure(text=f"{snapshot.time_remaining}s" if betting else "--")
        self.phase_label.configure(text=PHASE_TEXT[snapshot.phase])
        self.progress_var.set(snapshot.progress * 100)
        if snapshot.is_critical:
            style = "danger"
        elif snapshot.is_urgent:
            style = "warning"
        else:
            style = "success"
        self.progress_bar.configure(bootstyle=style)
        self.time_label.configure(bootstyle=style if betting else "secondary")

        if snapshot.last_result is not None:
            result = snapshot.last_result
            self.result_label.configure(
                text=result.describe(), bootstyle=COLOR_STYLES[result.color]
            )
        if snapshot.phase == GamePhase.SHOWING_RESULT and snapshot.locked_predictions:
            if snapshot.winners:
                names = ", ".join(p.label for p in snapshot.winners)
                self.winners_label.configure(text=f"Won: {names} ({snapshot.total_multiplier}x)")
            else:
                self.winners_label.configure(text="No winning predictions")
        else:
            self.winners_label.configure(text="")

        state = "normal" if betting and snapshot.time_remaining > 0 else "disabled"
        for button in self.bet_buttons.values():
            button.configure(state=state)
        self.confirm_button.configure(state=state)
        self.clear_button.configure(state="normal" if betting else "disabled")

        active = ", ".join(p.label for p in snapshot.active_predictions) or "none"
        self.active_label.configure(text=f"Selected: {active}")
        locked = ", ".join(f"{p.label} {p.multiplier}x" for p in snapshot.locked_predictions)
        self.locked_label.configure(text=f"Locked: {locked}" if locked else "")

        for i, label in enumerate(self.history_labels):
            if i < len(snapshot.history):
                entry = snapshot.history[i]
                label.configure(text=str(entry.number), bootstyle=f"inverse-{COLOR_STYLES[entry.color]}")
            else:
                label.configure(text="", bootstyle="default")

    def render_feed(self, entries: list[BettingActivity]) -> None:
        self.feed_list.delete(0, tk.END)
        for activity in entries:
            self.feed_list.insert(
                tk.END, f"{activity.player_name}  bet ${activity.amount} on {activity.bet_label}"
            )

    # ========== Notifications ==========

    def confirm_bets(self) -> IntentResult:
        """Lock in the selection; rejections are toasted by _on_rejected"""
        result = self.engine.confirm_bets()
        if result.accepted:
            self.toasts.show_placed(len(self.engine.state.locked_predictions))
        return result

    def _on_rejected(self, result: IntentResult) -> None:
        self.toasts.show_rejection(result)

    def _on_resolved(self, outcome: RoundOutcome) -> None:
        self.toasts.show_outcome(outcome)
        if outcome.won and self.engine.state.settings.sound_enabled:
            self.root.bell()

    def _on_duration_changed(self, snapshot: GameSnapshot) -> None:
        # Also fires when the next round picks up a pending selection
        if snapshot.selected_duration != self._announced_duration:
            self._announced_duration = snapshot.selected_duration
            self.toasts.show_duration(snapshot.selected_duration)

    def destroy(self) -> None:
        self.engine.unsubscribe(EngineEvents.STATE_CHANGED, self.render)
        self.engine.unsubscribe(EngineEvents.INTENT_REJECTED, self._on_rejected)
        self.engine.unsubscribe(EngineEvents.ROUND_RESOLVED, self._on_resolved)
        self.engine.unsubscribe(EngineEvents.DURATION_CHANGED, self._on_duration_changed)
        if self.feed is not None:
            self.feed.on_change = None
        self.frame.destroy()

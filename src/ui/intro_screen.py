"""
Intro Screen - loading splash shown before the first round

Progress climbs on a timer (fast at first, slowing near the end) through three
status lines. Skip jumps straight to the game; every pending timer of the
intro is cancelled so nothing fires after it is gone.
"""

import logging
import tkinter as tk
from collections.abc import Callable

import ttkbootstrap as ttk

from config import config
from core.scheduler import Scheduler

logger = logging.getLogger(__name__)

STATUS_STEPS = (
    (20, "Loading Game Engine...", "Game Engine Loaded"),
    (50, "Initializing Assets...", "Assets Initialized"),
    (80, "Establishing Connection...", "Connection Established"),
)


def progress_increment(progress: float) -> float:
    """How far one step moves the bar at a given progress (percent)"""
    if progress < 30:
        return 2.0
    if progress < 70:
        return 1.5
    if progress < 95:
        return 0.8
    return 0.3


class IntroProgress:
    """
    Timer-driven progress model, independent of any widget

    Usage:
        intro = IntroProgress(scheduler, on_done=show_game)
        intro.start()
        intro.skip()   # cancels the pending step and finishes now
    """

    def __init__(
        self,
        scheduler: Scheduler,
        on_done: Callable[[], None],
        step_ms: int | None = None,
    ):
        self._scheduler = scheduler
        self._on_done = on_done
        self._step_ms = step_ms or config.get("ui", "intro_step_ms", 50)
        self._handle = None
        self.progress = 0.0
        self.finished = False
        self.skipped = False
        self.on_progress: Callable[[float], None] | None = None

    @property
    def is_pending(self) -> bool:
        return self._handle is not None

    def start(self) -> None:
        if self.finished or self._handle is not None:
            return
        self._handle = self._scheduler.call_later(self._step_ms, self._step)

    def _step(self) -> None:
        self._handle = None
        if self.finished:
            return
        self.progress = min(100.0, self.progress + progress_increment(self.progress))
        if self.on_progress:
            self.on_progress(self.progress)
        if self.progress >= 100.0:
            self._finish()
        else:
            self._handle = self._scheduler.call_later(self._step_ms, self._step)

    def skip(self) -> None:
        """Leave the intro early"""
        if self.finished:
            return
        self.skipped = True
        logger.info(f"Intro skipped at {self.progress:.0f}%")
        self._finish()

    def cancel(self) -> None:
        if self._handle is not None:
            self._scheduler.cancel(self._handle)
            self._handle = None

    def _finish(self) -> None:
        self.cancel()
        self.finished = True
        self._on_done()


class IntroScreen:
    """Splash frame rendering an IntroProgress"""

    def __init__(self, root: tk.Misc, scheduler: Scheduler, on_done: Callable[[], None]):
        self.root = root
        self._on_done = on_done
        self.frame = ttk.Frame(root, padding=40)
        self.frame.pack(fill="both", expand=True)

        ttk.Label(
            self.frame, text="NUMBERS GAME", font=(config.UI["font_family"], 28, "bold"),
            bootstyle="warning",
        ).pack(pady=(40, 20))

        self.progress_var = tk.DoubleVar(value=0.0)
        ttk.Progressbar(
            self.frame, variable=self.progress_var, maximum=100, length=360,
            bootstyle="warning-striped",
        ).pack(pady=10)

        self.percent_label = ttk.Label(self.frame, text="0% Complete")
        self.percent_label.pack()

        self.status_labels = []
        for _, pending, _ in STATUS_STEPS:
            label = ttk.Label(self.frame, text=f"  {pending}", bootstyle="secondary")
            label.pack(anchor="center")
            self.status_labels.append(label)

        ttk.Button(
            self.frame, text="Skip Intro", command=self.skip, bootstyle="outline-secondary"
        ).pack(pady=20)

        self.model = IntroProgress(scheduler, on_done=self._finish)
        self.model.on_progress = self._render

    def start(self) -> None:
        self.model.start()

    def skip(self) -> None:
        self.model.skip()

    def _render(self, progress: float) -> None:
        self.progress_var.set(progress)
        self.percent_label.configure(text=f"{progress:.0f}% Complete")
        for label, (threshold, pending, done) in zip(self.status_labels, STATUS_STEPS):
            if progress > threshold:
                label.configure(text=f"✓ {done}", bootstyle="info")
            else:
                label.configure(text=f"  {pending}")

    def _finish(self) -> None:
        self.frame.destroy()
        self._on_done()

"""
Toast Notification Widget
Displays temporary pop-up messages for round outcomes and rejected intents
"""

import logging
import tkinter as tk

from core.win_evaluator import RoundOutcome
from models import IntentResult

logger = logging.getLogger(__name__)

COLORS = {
    'info': ('#3b82f6', '#ffffff'),
    'warning': ('#f59e0b', '#000000'),
    'error': ('#ef4444', '#ffffff'),
    'success': ('#10b981', '#000000'),
    'winner': ('#fbbf24', '#000000'),
}


class ToastNotification:
    """Toast notification system for temporary messages"""

    def __init__(
        self, parent, duration: int = 2500, max_toasts: int = 3, font_family: str = "Arial"
    ):
        self.parent = parent
        self.font_family = font_family
        self.duration = duration
        self.max_toasts = max_toasts
        self.active_toasts = []

    def show(self, message: str, msg_type: str = "info", duration: int | None = None):
        """
        Show a toast notification

        Args:
            message: Message to display
            msg_type: Type of message (info, warning, error, success, winner)
            duration: Duration in milliseconds (defaults to the widget setting)
        """
        while len(self.active_toasts) >= self.max_toasts:
            self._dismiss(self.active_toasts[0])

        toast = tk.Toplevel(self.parent)
        toast.withdraw()
        toast.overrideredirect(True)

        bg_color, fg_color = COLORS.get(msg_type, COLORS['info'])
        label = tk.Label(
            toast,
            text=message,
            bg=bg_color,
            fg=fg_color,
            font=(self.font_family, 11, 'bold'),
            padx=20,
            pady=10
        )
        label.pack()

        toast.update_idletasks()
        x = self.parent.winfo_x() + (self.parent.winfo_width() - toast.winfo_width()) // 2
        y = self.parent.winfo_y() + 50 + len(self.active_toasts) * 60
        toast.geometry(f"+{x}+{y}")
        toast.deiconify()

        self.active_toasts.append(toast)
        toast.after(duration or self.duration, lambda: self._dismiss(toast))

        log_methods = {
            'warning': logger.warning,
            'error': logger.warning,
        }
        log_methods.get(msg_type, logger.info)(f"Toast: {message}")

    def show_rejection(self, result: IntentResult):
        """Show why an intent was refused"""
        if result.message:
            self.show(result.message, "error")

    def show_placed(self, count: int):
        plural = "s" if count > 1 else ""
        self.show(f"{count} prediction{plural} placed!", "success")

    def show_duration(self, duration: int):
        self.show(f"Round duration changed to {duration} seconds!", "success")

    def show_outcome(self, outcome: RoundOutcome):
        """Show the win / try-again message for a resolved round"""
        message = outcome.message()
        if message is None:
            return
        self.show(message, "winner" if outcome.won else "error")

    def _dismiss(self, toast):
        if toast in self.active_toasts:
            self.active_toasts.remove(toast)
        try:
            toast.destroy()
        except tk.TclError:
            pass

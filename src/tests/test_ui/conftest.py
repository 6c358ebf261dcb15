"""UI test configuration.

Widget tests require a real Tk display. In headless environments (CI/sandboxes),
Tk initialization fails with `TclError: couldn't connect to display`.

Tests that take the `tk_root` fixture are skipped in that case rather than
erroring during fixture setup; widget-free tests (IntroProgress) always run.
"""

from __future__ import annotations

import tkinter as tk

import pytest


@pytest.fixture
def tk_root():
    """Create and clean up a hidden Tk root window"""
    try:
        root = tk.Tk()
    except tk.TclError:
        pytest.skip("Tk display not available (headless environment)")
    root.withdraw()
    yield root
    try:
        root.destroy()
    except tk.TclError:
        pass  # Window already destroyed

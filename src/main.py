"""
Main Entry Point for the Numbers Game
Runs the Tk game window, or a headless simulation on a logical clock
"""

__version__ = "1.0.0"

import argparse
import logging
import random
import sys
import tkinter as tk

import ttkbootstrap as ttk

from config import ConfigError, config
from core.activity_feed import ActivityFeed
from core.outcome_generator import OutcomeGenerator
from core.prediction_catalog import all_kinds, lookup
from core.random_source import default_random_source
from core.round_engine import EngineEvents, RoundEngine
from core.scheduler import SimulatedScheduler, TkScheduler
from core.win_evaluator import RoundOutcome
from models import GameSnapshot
from services.logger import cleanup_logging, setup_logging
from ui.game_window import GameWindow
from ui.intro_screen import IntroScreen

logger = logging.getLogger(__name__)


class Application:
    """
    Main application controller
    Coordinates all components and manages lifecycle
    """

    def __init__(self, duration: int | None = None, skip_intro: bool = False):
        """
        Initialize application

        Args:
            duration: Betting window of the first round (seconds)
            skip_intro: Go straight to the game without the loading screen
        """
        self.duration = duration
        self.skip_intro = skip_intro
        self.root: tk.Tk | None = None
        self.engine: RoundEngine | None = None
        self.feed: ActivityFeed | None = None
        self.game_window: GameWindow | None = None
        self.intro: IntroScreen | None = None
        self._shut_down = False

        self.logger = logging.getLogger(__name__)
        self.logger.info("=" * 60)
        self.logger.info("Numbers Game - Starting Application")
        self.logger.info("=" * 60)

        self.config = config
        self.root = ttk.Window(themename=config.UI["theme"])
        self.logger.info(f"Using theme: {config.UI['theme']}")
        self.scheduler = TkScheduler(self.root)

        self._configure_root()
        self.logger.info("Application initialized successfully")

    def _configure_root(self):
        """Configure the root tkinter window"""
        self.root.title("Numbers Game")
        self.root.geometry(f"{config.UI['window_width']}x{config.UI['window_height']}")
        self.root.minsize(640, 560)
        self.root.protocol("WM_DELETE_WINDOW", self.shutdown)

    def run(self):
        """Run the application"""
        if self.skip_intro:
            self._start_game()
        else:
            self.intro = IntroScreen(self.root, self.scheduler, on_done=self._start_game)
            self.intro.start()

        self.logger.info("Starting UI main loop")
        self.root.mainloop()

    def _start_game(self):
        """Build the engine and window once the intro is gone"""
        self.intro = None
        self.engine = RoundEngine(self.scheduler, initial_duration=self.duration)
        self.feed = ActivityFeed(self.scheduler)
        self.game_window = GameWindow(self.root, self.engine, self.config, feed=self.feed)
        self.feed.attach(self.engine)
        self.engine.start()

    def shutdown(self):
        """Clean shutdown of application"""
        if self._shut_down:
            return
        self._shut_down = True
        self.logger.info("Shutting down application...")

        try:
            if self.intro is not None:
                self.intro.model.cancel()
            if self.feed is not None:
                self.feed.detach()
            if self.engine is not None:
                self.engine.stop()
                self.logger.info(
                    f"Final round: #{self.engine.state.round.round_number}, "
                    f"{len(self.engine.state.history)} result(s) in history"
                )
            if self.root:
                self.root.quit()
                self.root.destroy()
        except tk.TclError as e:
            self.logger.error(f"Error during shutdown: {e}")
        finally:
            self.logger.info("Application shutdown complete")


def _random_bets(bettor: random.Random) -> list:
    """At most one kind per category, each category taken with even odds"""
    by_category: dict = {}
    for kind in all_kinds():
        by_category.setdefault(lookup(kind).category, []).append(kind)
    return [bettor.choice(kinds) for kinds in by_category.values() if bettor.random() < 0.5]


def run_headless(rounds: int, duration: int | None = None, seed: int | None = None) -> dict:
    """
    Play rounds on a simulated clock with random bets

    Args:
        rounds: Number of rounds to resolve
        duration: Betting window (seconds)
        seed: Makes both bets and results reproducible

    Returns:
        Summary of the session
    """
    scheduler = SimulatedScheduler()
    generator = OutcomeGenerator(default_random_source(seed), now_ms=scheduler.now_ms)
    engine = RoundEngine(scheduler, generator, initial_duration=duration)
    bettor = random.Random(seed)
    outcomes: list[RoundOutcome] = []

    def place_random_bets(snapshot: GameSnapshot):
        for kind in _random_bets(bettor):
            engine.place_bet(kind)
        if engine.state.active_predictions:
            engine.confirm_bets()

    def record(outcome: RoundOutcome):
        outcomes.append(outcome)
        message = outcome.message() or "no predictions"
        logger.info(f"Round {len(outcomes)}/{rounds}: {outcome.result.describe()} - {message}")

    engine.subscribe(EngineEvents.ROUND_STARTED, place_random_bets)
    engine.subscribe(EngineEvents.ROUND_RESOLVED, record)

    engine.start()
    tick_ms = config.get("game_rules", "tick_interval_ms", 1000)
    while len(outcomes) < rounds:
        scheduler.advance(tick_ms)
    engine.stop()

    summary = {
        "rounds": len(outcomes),
        "rounds_won": sum(1 for o in outcomes if o.won),
        "rounds_bet": sum(1 for o in outcomes if o.predictions),
        "total_multiplier": str(sum((o.total_multiplier for o in outcomes), start=0)),
        "simulated_ms": scheduler.now_ms(),
        "history": [r.describe() for r in engine.state.history],
    }
    logger.info(f"Headless session complete: {summary}")
    return summary


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Numbers Game - timed prediction rounds",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                                  # Play in a window
  %(prog)s --duration 20 --skip-intro       # 20s rounds, no loading screen
  %(prog)s --headless --rounds 50 --seed 7  # Reproducible simulated session
        """,
    )
    parser.add_argument(
        "--duration",
        type=int,
        choices=config.allowed_durations,
        help="Betting window of each round in seconds",
    )
    parser.add_argument("--skip-intro", action="store_true", help="Skip the loading screen")
    parser.add_argument(
        "--headless", action="store_true", help="Run rounds on a simulated clock without a window"
    )
    parser.add_argument("--rounds", type=int, default=10, help="Rounds to play in headless mode")
    parser.add_argument("--seed", type=int, help="Seed for reproducible headless sessions")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="Console log level",
    )
    parser.add_argument("--config", metavar="FILE", help="JSON settings file to load")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point"""
    args = build_parser().parse_args(argv)

    if args.rounds < 1:
        print("--rounds must be at least 1", file=sys.stderr)
        return 2

    try:
        if args.config:
            config.load_from_file(args.config)
        overrides = {}
        if args.log_level:
            overrides = {"log_level": args.log_level, "console_level": args.log_level}
        setup_logging(overrides)
        config.set_logger(logging.getLogger("config"))
        config.validate()
        logger.info("Configuration validated successfully")
        logger.debug(f"Active configuration: {config.to_dict()}")
    except ConfigError as e:
        logging.critical(f"Configuration validation failed: {e}")
        print(f"Invalid configuration:\n\n{e}", file=sys.stderr)
        cleanup_logging()
        return 1

    if args.headless:
        try:
            run_headless(args.rounds, args.duration, args.seed)
        finally:
            cleanup_logging()
        return 0

    app = None
    try:
        app = Application(duration=args.duration, skip_intro=args.skip_intro)
        app.run()
    except KeyboardInterrupt:
        print("\nInterrupted by user")
    except Exception as e:
        logging.critical(f"Unhandled exception: {e}", exc_info=True)
        return 1
    finally:
        if app is not None:
            app.shutdown()
        cleanup_logging()
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""
Shared test fixtures for pytest
"""

import pytest

from config import config
from core import OutcomeGenerator, RoundEngine, SequenceRandomSource, SimulatedScheduler
from core.prediction_catalog import make_prediction
from models import GameState, ResultColor, Round, RoundResult
from services import cleanup_logging, setup_logging


@pytest.fixture(autouse=True)
def setup_test_logging(tmp_path):
    """Setup logging for all tests (log files go to a temp dir)"""
    setup_logging({"log_dir": str(tmp_path / "logs")})
    yield
    cleanup_logging()


@pytest.fixture(autouse=True)
def reset_custom_settings():
    """Undo config.set() calls made by a test"""
    saved = {k: dict(v) for k, v in config._custom_settings.items()}
    yield
    config._custom_settings = saved


@pytest.fixture
def scheduler():
    """Logical clock starting at 0 ms"""
    return SimulatedScheduler()


@pytest.fixture
def sequence_source():
    """Draws 7 then red (index 0) on every round"""
    return SequenceRandomSource([7, 0])


@pytest.fixture
def generator(sequence_source, scheduler):
    """Deterministic OutcomeGenerator on the simulated clock"""
    return OutcomeGenerator(sequence_source, now_ms=scheduler.now_ms)


@pytest.fixture
def engine(scheduler, generator):
    """RoundEngine with a 10s round, not yet started"""
    return RoundEngine(scheduler, generator, initial_duration=10)


@pytest.fixture
def running_engine(engine):
    """RoundEngine already started at t=0"""
    engine.start()
    yield engine
    engine.stop()


@pytest.fixture
def betting_state():
    """Round 1 betting with the full 10s countdown"""
    return GameState.initial(10)


@pytest.fixture
def expired_state():
    """Betting phase with zero time remaining (last-tick boundary)"""
    return GameState(round=Round(round_number=1, duration=10, time_remaining=0))


@pytest.fixture
def sample_result():
    """Result 7 red from a 10s round"""
    return RoundResult(number=7, color=ResultColor.RED, timestamp=1_700_000_000_000, duration=10)


@pytest.fixture
def big_and_red():
    """Locked predictions big + red"""
    return (make_prediction("big"), make_prediction("red"))

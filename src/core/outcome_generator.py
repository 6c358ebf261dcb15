"""
Random Outcome Generator

Draws a round result: a number uniform in [0, 9] and a color uniform over
red/green/blue, each from its own draw so the two are independent.
"""

import logging
import time
from collections.abc import Callable

from models import ResultColor, RoundResult

from .random_source import RandomSource, default_random_source

logger = logging.getLogger(__name__)

COLORS = tuple(ResultColor)


def _wall_clock_ms() -> int:
    return int(time.time() * 1000)


class OutcomeGenerator:
    """
    Produces RoundResult values from an injectable RandomSource

    Usage:
        generator = OutcomeGenerator()
        result = generator.generate(duration=10)
    """

    def __init__(
        self,
        source: RandomSource | None = None,
        now_ms: Callable[[], int] | None = None,
    ):
        self.source = source or default_random_source()
        self._now_ms = now_ms or _wall_clock_ms
        logger.info(f"OutcomeGenerator using {self.source.name} random source")

    def generate(self, duration: int) -> RoundResult:
        """
        Draw the result for a round

        Args:
            duration: Length of the round being resolved (seconds)

        Returns:
            Immutable RoundResult
        """
        number = self.source.randbelow(10)
        color = COLORS[self.source.randbelow(len(COLORS))]
        result = RoundResult(
            number=number,
            color=color,
            timestamp=self._now_ms(),
            duration=duration,
        )
        logger.debug(f"Generated result: {result.describe()}")
        return result

"""
Win Evaluator

Pure functions deciding which locked predictions won a round and what they pay.
"""

from dataclasses import dataclass
from decimal import Decimal

from models import Prediction, PredictionCategory, RoundResult, SizeBet


@dataclass(frozen=True)
class RoundOutcome:
    """Result of a round together with the predictions it paid"""

    result: RoundResult
    predictions: tuple[Prediction, ...]
    winners: tuple[Prediction, ...]
    total_multiplier: Decimal

    @property
    def won(self) -> bool:
        return bool(self.winners)

    def message(self) -> str | None:
        """Player-facing summary, None when nothing was bet"""
        if self.winners:
            count = len(self.winners)
            plural = "s" if count > 1 else ""
            return (
                f"WINNER! {count} correct prediction{plural} - "
                f"{self.total_multiplier:.1f}x multiplier"
            )
        if self.predictions:
            return "Try again next round!"
        return None


def is_winner(result: RoundResult, prediction: Prediction) -> bool:
    """Check a single prediction against a result"""
    if prediction.category == PredictionCategory.SIZE:
        return result.is_big if prediction.kind == SizeBet.BIG else not result.is_big
    if prediction.category == PredictionCategory.COLOR:
        return prediction.kind == result.color
    return prediction.kind == result.number


def evaluate(result: RoundResult, predictions) -> tuple[Prediction, ...]:
    """
    Return the winning predictions, in input order

    Args:
        result: Resolved round result
        predictions: Locked predictions (at most one per category)
    """
    return tuple(p for p in predictions if is_winner(result, p))


def total_multiplier(winners) -> Decimal:
    """Sum of the multipliers of winning predictions"""
    return sum((p.multiplier for p in winners), Decimal("0"))


def summarize(result: RoundResult, predictions) -> RoundOutcome:
    """Evaluate predictions and bundle the payout"""
    predictions = tuple(predictions)
    winners = evaluate(result, predictions)
    return RoundOutcome(
        result=result,
        predictions=predictions,
        winners=winners,
        total_multiplier=total_multiplier(winners),
    )

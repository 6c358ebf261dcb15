"""
Prediction data model
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Union

from .enums import PredictionCategory, ResultColor, SizeBet

# A bet kind is a size, a color, or an exact number 0-9
BetKind = Union[SizeBet, ResultColor, int]


@dataclass(frozen=True)
class Prediction:
    """
    A single bet selected by the player

    Attributes:
        kind: What was predicted (size, color or exact number)
        category: Bet class derived from kind
        multiplier: Payout factor applied when the prediction wins
    """

    kind: BetKind
    category: PredictionCategory
    multiplier: Decimal

    @property
    def label(self) -> str:
        """Human readable label ("Big", "Red", "Number 7")"""
        if self.category == PredictionCategory.NUMBER:
            return f"Number {self.kind}"
        return self.kind.value.capitalize()

    def to_dict(self, preserve_precision: bool = False) -> dict:
        """Convert to dictionary

        Args:
            preserve_precision: If True, keep the multiplier as a string
        """
        kind = self.kind if self.category == PredictionCategory.NUMBER else self.kind.value
        return {
            "kind": kind,
            "category": self.category.value,
            "multiplier": str(self.multiplier) if preserve_precision else float(self.multiplier),
        }


def replace_in_category(
    predictions: tuple[Prediction, ...], prediction: Prediction
) -> tuple[Prediction, ...]:
    """Return predictions with any bet of the same category swapped for the new one.

    Keeps at most one prediction per category; the new bet goes to the end.
    """
    kept = tuple(p for p in predictions if p.category != prediction.category)
    return kept + (prediction,)


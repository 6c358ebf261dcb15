"""
Prediction Catalog

Static table mapping bet kinds to their category and payout multiplier:

    big, small          -> size    1.9x
    red, green, blue    -> color   2.8x
    0 .. 9              -> number  9.0x
"""

from dataclasses import dataclass
from decimal import Decimal

from config import config
from models import BetKind, Prediction, PredictionCategory, ResultColor, SizeBet

NUMBER_KINDS = tuple(range(10))


@dataclass(frozen=True)
class CatalogEntry:
    """Category and multiplier for one bet kind"""

    category: PredictionCategory
    multiplier: Decimal


def _multiplier(key: str) -> Decimal:
    return Decimal(str(config.get("game_rules", key)))


def normalize_kind(raw) -> BetKind:
    """
    Map user input onto the bet-kind domain

    Accepts enum members, their string values in any case ("Big", "RED"),
    and integers or digit strings 0-9.

    Raises:
        ValueError: If raw is not a known bet kind
    """
    if isinstance(raw, (SizeBet, ResultColor)):
        return raw
    if isinstance(raw, bool):
        raise ValueError(f"Unknown bet kind: {raw!r}")
    if isinstance(raw, int):
        if raw in NUMBER_KINDS:
            return raw
        raise ValueError(f"Number bet must be 0-9, got {raw}")
    if isinstance(raw, str):
        text = raw.strip().lower()
        if text.isdigit():
            return normalize_kind(int(text))
        for enum_cls in (SizeBet, ResultColor):
            try:
                return enum_cls(text)
            except ValueError:
                continue
    raise ValueError(f"Unknown bet kind: {raw!r}")


def lookup(kind: BetKind) -> CatalogEntry:
    """Return category and multiplier for a normalized bet kind"""
    if isinstance(kind, SizeBet):
        return CatalogEntry(PredictionCategory.SIZE, _multiplier("size_multiplier"))
    if isinstance(kind, ResultColor):
        return CatalogEntry(PredictionCategory.COLOR, _multiplier("color_multiplier"))
    return CatalogEntry(PredictionCategory.NUMBER, _multiplier("number_multiplier"))


def make_prediction(raw) -> Prediction:
    """Build a Prediction from raw input (see normalize_kind for accepted forms)"""
    kind = normalize_kind(raw)
    entry = lookup(kind)
    return Prediction(kind=kind, category=entry.category, multiplier=entry.multiplier)


def all_kinds() -> tuple[BetKind, ...]:
    """Every bet kind in display order: sizes, colors, numbers"""
    return tuple(SizeBet) + tuple(ResultColor) + NUMBER_KINDS

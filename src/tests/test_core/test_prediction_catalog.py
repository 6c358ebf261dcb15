"""
Tests for the prediction catalog
"""

import pytest
from decimal import Decimal

from core.prediction_catalog import all_kinds, lookup, make_prediction, normalize_kind
from models import PredictionCategory, ResultColor, SizeBet


class TestLookup:
    """Category and multiplier per bet kind"""

    @pytest.mark.parametrize("kind", [SizeBet.BIG, SizeBet.SMALL])
    def test_size_kinds(self, kind):
        entry = lookup(kind)
        assert entry.category == PredictionCategory.SIZE
        assert entry.multiplier == Decimal("1.9")

    @pytest.mark.parametrize("kind", list(ResultColor))
    def test_color_kinds(self, kind):
        entry = lookup(kind)
        assert entry.category == PredictionCategory.COLOR
        assert entry.multiplier == Decimal("2.8")

    @pytest.mark.parametrize("kind", range(10))
    def test_number_kinds(self, kind):
        entry = lookup(kind)
        assert entry.category == PredictionCategory.NUMBER
        assert entry.multiplier == Decimal("9.0")

    def test_all_kinds_covers_domain(self):
        kinds = all_kinds()
        assert len(kinds) == 15
        assert kinds[:2] == (SizeBet.BIG, SizeBet.SMALL)
        assert kinds[-10:] == tuple(range(10))


class TestNormalizeKind:
    """User input mapped onto the bet-kind domain"""

    @pytest.mark.parametrize("raw,expected", [
        ("big", SizeBet.BIG),
        ("Small", SizeBet.SMALL),
        ("RED", ResultColor.RED),
        (" green ", ResultColor.GREEN),
        ("7", 7),
        (0, 0),
        (ResultColor.BLUE, ResultColor.BLUE),
    ])
    def test_accepted_forms(self, raw, expected):
        assert normalize_kind(raw) == expected

    @pytest.mark.parametrize("raw", [10, -1, "purple", "", "12", True, None, 3.5])
    def test_rejected_forms(self, raw):
        with pytest.raises(ValueError):
            normalize_kind(raw)


class TestMakePrediction:
    """Prediction construction"""

    def test_number_prediction(self):
        prediction = make_prediction("7")
        assert prediction.kind == 7
        assert prediction.category == PredictionCategory.NUMBER
        assert prediction.label == "Number 7"

    def test_color_prediction_label(self):
        assert make_prediction("blue").label == "Blue"

    def test_multiplier_follows_config(self):
        from config import config

        config.set("game_rules", "color_multiplier", Decimal("3.0"))
        assert make_prediction("red").multiplier == Decimal("3.0")

"""
Tests for the win evaluator
"""

import pytest
from decimal import Decimal

from core.prediction_catalog import make_prediction
from core.win_evaluator import evaluate, is_winner, summarize, total_multiplier
from models import ResultColor, RoundResult


def result(number, color="red"):
    return RoundResult(number=number, color=ResultColor(color), timestamp=0, duration=10)


class TestIsWinner:

    @pytest.mark.parametrize("number,big_wins", [(0, False), (4, False), (5, True), (9, True)])
    def test_size_boundary(self, number, big_wins):
        assert is_winner(result(number), make_prediction("big")) is big_wins
        assert is_winner(result(number), make_prediction("small")) is not big_wins

    def test_color_match(self):
        assert is_winner(result(3, "green"), make_prediction("green"))
        assert not is_winner(result(3, "green"), make_prediction("blue"))

    def test_number_match(self):
        assert is_winner(result(3), make_prediction(3))
        assert not is_winner(result(3), make_prediction(4))


class TestEvaluate:

    def test_big_and_red_on_seven_red(self, sample_result, big_and_red):
        winners = evaluate(sample_result, big_and_red)
        assert winners == big_and_red
        assert total_multiplier(winners) == Decimal("4.7")

    def test_small_on_eight_has_no_winners(self):
        assert evaluate(result(8), [make_prediction("small")]) == ()

    def test_winners_keep_input_order(self):
        predictions = [make_prediction(7), make_prediction("blue"), make_prediction("big")]
        winners = evaluate(result(7, "blue"), predictions)
        assert [p.label for p in winners] == ["Number 7", "Blue", "Big"]

    def test_deterministic(self, sample_result, big_and_red):
        assert evaluate(sample_result, big_and_red) == evaluate(sample_result, big_and_red)

    def test_empty_predictions(self, sample_result):
        assert evaluate(sample_result, ()) == ()
        assert total_multiplier(()) == Decimal("0")


class TestSummarize:

    def test_winner_message(self, sample_result, big_and_red):
        outcome = summarize(sample_result, big_and_red)
        assert outcome.won
        assert outcome.message() == "WINNER! 2 correct predictions - 4.7x multiplier"

    def test_single_winner_message(self, sample_result):
        outcome = summarize(sample_result, [make_prediction(7)])
        assert outcome.message() == "WINNER! 1 correct prediction - 9.0x multiplier"

    def test_try_again_message(self):
        outcome = summarize(result(8), [make_prediction("small")])
        assert not outcome.won
        assert outcome.message() == "Try again next round!"

    def test_no_message_without_predictions(self, sample_result):
        assert summarize(sample_result, []).message() is None

"""
Tests for OutcomeGenerator
"""

import pytest
from collections import Counter

from core.outcome_generator import OutcomeGenerator
from core.random_source import PseudoRandomSource, SequenceRandomSource
from models import ResultColor


class TestGenerate:

    def test_number_then_color(self):
        generator = OutcomeGenerator(SequenceRandomSource([7, 2]), now_ms=lambda: 1000)
        result = generator.generate(15)

        assert result.number == 7
        assert result.color == ResultColor.BLUE
        assert result.timestamp == 1000
        assert result.duration == 15

    def test_draw_ranges(self):
        source = SequenceRandomSource([4, 1])
        OutcomeGenerator(source, now_ms=lambda: 0).generate(10)
        assert source.calls == [10, 3]

    def test_invalid_duration_rejected(self):
        generator = OutcomeGenerator(SequenceRandomSource([0]), now_ms=lambda: 0)
        with pytest.raises(ValueError):
            generator.generate(12)

    def test_default_source_used(self):
        result = OutcomeGenerator().generate(10)
        assert 0 <= result.number <= 9
        assert result.color in set(ResultColor)
        assert result.timestamp > 0

    def test_number_and_color_uniform(self):
        """Numbers ~10% each, colors ~33% each"""
        generator = OutcomeGenerator(PseudoRandomSource(99), now_ms=lambda: 0)
        results = [generator.generate(10) for _ in range(15000)]

        numbers = Counter(r.number for r in results)
        colors = Counter(r.color for r in results)
        for value in range(10):
            assert 1200 < numbers[value] < 1800
        for color in ResultColor:
            assert 4500 < colors[color] < 5500

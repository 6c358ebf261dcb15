"""
Tests for random sources
"""

import pytest
from collections import Counter
from unittest.mock import patch

from core.random_source import (
    PseudoRandomSource,
    SequenceRandomSource,
    SystemRandomSource,
    default_random_source,
    os_entropy_available,
)


class TestSystemRandomSource:

    def test_range(self):
        source = SystemRandomSource()
        draws = [source.randbelow(10) for _ in range(500)]
        assert all(0 <= d < 10 for d in draws)

    def test_rejects_non_positive(self):
        with pytest.raises(ValueError):
            SystemRandomSource().randbelow(0)


class TestPseudoRandomSource:

    def test_seed_is_reproducible(self):
        a = PseudoRandomSource(42)
        b = PseudoRandomSource(42)
        assert [a.randbelow(10) for _ in range(50)] == [b.randbelow(10) for _ in range(50)]

    def test_rejects_non_positive(self):
        with pytest.raises(ValueError):
            PseudoRandomSource(1).randbelow(-3)

    def test_roughly_uniform(self):
        """Each of 10 values lands near 10% over many draws"""
        source = PseudoRandomSource(1234)
        counts = Counter(source.randbelow(10) for _ in range(20000))
        assert set(counts) == set(range(10))
        for value in range(10):
            assert 1700 < counts[value] < 2300


class TestSequenceRandomSource:

    def test_replays_and_cycles(self):
        source = SequenceRandomSource([3, 1])
        assert [source.randbelow(10) for _ in range(4)] == [3, 1, 3, 1]

    def test_reduces_modulo_n(self):
        source = SequenceRandomSource([7])
        assert source.randbelow(3) == 1

    def test_records_ranges(self):
        source = SequenceRandomSource([0])
        source.randbelow(10)
        source.randbelow(3)
        assert source.calls == [10, 3]

    def test_empty_sequence_rejected(self):
        with pytest.raises(ValueError):
            SequenceRandomSource([])


class TestDefaultRandomSource:

    def test_prefers_system_source(self):
        assert isinstance(default_random_source(), SystemRandomSource)

    def test_seed_gives_pseudo_source(self):
        assert isinstance(default_random_source(seed=5), PseudoRandomSource)

    def test_falls_back_without_entropy(self):
        with patch("core.random_source.os.urandom", side_effect=NotImplementedError):
            assert os_entropy_available() is False
            assert isinstance(default_random_source(), PseudoRandomSource)

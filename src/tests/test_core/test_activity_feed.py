"""
Tests for the cosmetic betting activity feed
"""

import random

import pytest
from unittest.mock import Mock

from config import config
from core.activity_feed import BET_LABELS, PLAYER_NAMES, ActivityFeed
from models import GamePhase


@pytest.fixture
def feed(scheduler):
    return ActivityFeed(scheduler, rng=random.Random(3))


@pytest.fixture
def attached_feed(feed, running_engine):
    feed.attach(running_engine)
    yield feed
    feed.detach()


class TestGenerate:

    def test_fields(self, feed):
        activity = feed.generate()
        assert activity.player_name in PLAYER_NAMES
        assert activity.bet_label in BET_LABELS
        assert 10 <= activity.amount <= 1010
        assert activity.activity_id


class TestFollowsRounds:

    def test_generates_while_betting(self, attached_feed, scheduler):
        assert attached_feed.is_generating
        scheduler.advance(9000)
        assert 2 <= len(attached_feed.entries) <= 5

    def test_stops_when_betting_closes(self, attached_feed, scheduler):
        scheduler.advance(10_000)
        assert not attached_feed.is_generating
        count = len(attached_feed.entries)
        scheduler.advance(4000)
        assert len(attached_feed.entries) == count

    def test_cleared_on_new_round(self, attached_feed, scheduler, running_engine):
        scheduler.advance(9000)
        assert attached_feed.entries

        scheduler.advance(5500)
        assert running_engine.state.round.round_number == 2
        assert attached_feed.entries == []
        assert attached_feed.is_generating

    def test_capped_newest_first(self, attached_feed, scheduler):
        config.set("feed", "min_interval_ms", 500)
        config.set("feed", "max_interval_ms", 500)
        scheduler.advance(9500)

        entries = attached_feed.entries
        assert len(entries) == 5
        timestamps = [e.timestamp for e in entries]
        assert timestamps == sorted(timestamps, reverse=True)

    def test_on_change_callback(self, attached_feed, scheduler):
        on_change = Mock()
        attached_feed.on_change = on_change
        scheduler.advance(4000)
        assert on_change.call_count >= 1
        assert on_change.call_args[0][0] == attached_feed.entries


class TestIndependence:

    def test_does_not_shift_round_timing(self, attached_feed, scheduler, running_engine):
        scheduler.advance(10_000)
        assert running_engine.state.phase == GamePhase.RESOLVING
        scheduler.advance(4500)
        assert running_engine.state.round.round_number == 2

    def test_failing_callback_is_contained(self, attached_feed, scheduler, running_engine):
        attached_feed.on_change = Mock(side_effect=RuntimeError("render failed"))
        scheduler.advance(14_500)
        assert running_engine.state.round.round_number == 2

    def test_detach_cancels_timer(self, feed, running_engine, scheduler):
        feed.attach(running_engine)
        feed.detach()
        assert not feed.is_generating
        scheduler.advance(9000)
        assert feed.entries == []

"""
Betting activity data model (cosmetic feed entry)
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class BettingActivity:
    """
    A fake bet by another player, shown for atmosphere only

    Attributes:
        activity_id: Unique entry id
        player_name: Display name
        bet_label: What was bet on ("Big", "Number 7", ...)
        amount: Whole-dollar stake
        timestamp: Creation time on the scheduler clock (ms)
    """

    activity_id: str
    player_name: str
    bet_label: str
    amount: int
    timestamp: int

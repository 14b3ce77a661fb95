"""
Bots - Automated players for simulation and balancing.
"""

from .policy import (
    BotPolicy,
    BotDecision,
    RandomPolicy,
    FirstLegalPolicy,
    GreedyPolicy,
    POLICIES,
    create_policy,
)
from .runner import GameSummary, run_bot_game

__all__ = [
    "BotPolicy",
    "BotDecision",
    "RandomPolicy",
    "FirstLegalPolicy",
    "GreedyPolicy",
    "POLICIES",
    "create_policy",
    "GameSummary",
    "run_bot_game",
]

"""
Configuration - Game rule constants and environment settings.

Rules are a frozen dataclass so a reducer can be built with different
tuning (tests, simulations) without touching module globals.
"""

from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
import os

# Environment configuration
EVODECK_ENV = os.getenv("EVODECK_ENV", "development")
EVODECK_DATA_DIR = os.getenv("EVODECK_DATA_DIR", None)
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")

DECKS_FILENAME = "decks.json"
HIGH_SCORE_FILENAME = "high_score.json"


@dataclass(frozen=True)
class GameRules:
    """
    Tunable rule constants.

    Defaults match the shipped game: 5-card hand, 3 card uses per turn,
    a first target of 10 that grows by half (rounded up) every stage,
    and 3 evolution picks from 3 candidates after each cleared stage.
    """
    hand_size: int = 5
    max_uses_per_turn: int = 3
    initial_target_score: int = 10
    target_growth: float = 1.5
    evolution_choices: int = 3
    evolution_selections: int = 3
    deck_size: int = 20
    default_max_level: int = 2


DEFAULT_RULES = GameRules()


def data_file(filename: str, data_dir: str | Path | None = None) -> Path | None:
    """
    Path for a persisted file, or None when no data directory is configured.

    Stores treat None as "keep everything in memory".
    """
    base = data_dir if data_dir is not None else EVODECK_DATA_DIR
    if not base:
        return None
    return Path(base).expanduser() / filename

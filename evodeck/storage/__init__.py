"""
Storage - Persistence collaborators.

The engine only needs two things from storage: the selected deck
configuration and the high score. Both stores fall back to defaults
instead of failing when their files are missing or unreadable.
"""

from pathlib import Path

from ..config import DECKS_FILENAME, HIGH_SCORE_FILENAME, data_file
from .deck_store import DeckStore, DeckValidationError, StoredDeck, StoredDeckCard
from .high_score import HighScoreStore


def open_stores(data_dir: str | Path | None = None) -> tuple[DeckStore, HighScoreStore]:
    """Deck and high score stores under a data directory (in memory when unset)."""
    return (
        DeckStore(path=data_file(DECKS_FILENAME, data_dir)),
        HighScoreStore(path=data_file(HIGH_SCORE_FILENAME, data_dir)),
    )


__all__ = [
    "DeckStore",
    "DeckValidationError",
    "StoredDeck",
    "StoredDeckCard",
    "HighScoreStore",
    "open_stores",
]

"""
Built-in decks.

The starter deck is what a fresh install gets (twice, so there is one
deck to keep and one to edit).
"""

from ..catalog.deck_config import DeckConfiguration

STARTER_DECK = DeckConfiguration.from_counts(
    "Beginner Deck",
    [
        ("score_1", 8),
        ("score_2", 4),
        ("new_score_3", 2),
        ("new_draw_low", 2),
        ("combo_x2", 2),
        ("combo_ignore", 1),
        ("new_max_use_add", 1),
    ],
)

DEFAULT_DECK_COPIES = 2


def default_decks() -> list[DeckConfiguration]:
    """Decks written to a fresh or unreadable deck store."""
    return [STARTER_DECK] * DEFAULT_DECK_COPIES

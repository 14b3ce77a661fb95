"""
Built-in content - the standard card set and starter deck.
"""

from .cards import ALL_CARDS, get_all_card_definitions, create_standard_catalog
from .decks import STARTER_DECK, default_decks

__all__ = [
    "ALL_CARDS",
    "get_all_card_definitions",
    "create_standard_catalog",
    "STARTER_DECK",
    "default_decks",
]

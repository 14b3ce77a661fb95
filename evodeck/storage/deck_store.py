"""
Deck Store - The player's saved deck list.

The store:
- Keeps an ordered list of named decks and which one is selected
- Stores them as JSON: [{"name": ..., "cards": [{"id": ..., "count": ...}]}]
- Falls back to the built-in decks when the file is missing or unreadable
- Enforces the deck size when a deck is saved (the engine itself does not)

With no path the store lives in memory only.
"""

from __future__ import annotations
from pathlib import Path
import json
import logging

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from ..catalog.card_catalog import CardCatalog
from ..catalog.deck_config import DeckConfiguration, DeckEntry
from ..catalog.validation import validate_deck_configuration
from ..config import DEFAULT_RULES
from ..content import create_standard_catalog, default_decks, STARTER_DECK

logger = logging.getLogger(__name__)


class DeckValidationError(Exception):
    """Raised when a deck edit breaks the deck rules."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__("; ".join(errors))


class StoredDeckCard(BaseModel):
    """One card line of a stored deck."""
    id: str
    count: int = Field(ge=0)


class StoredDeck(BaseModel):
    """A stored deck record."""
    name: str = ""
    cards: list[StoredDeckCard] = Field(default_factory=list)

    def to_configuration(self) -> DeckConfiguration:
        return DeckConfiguration(
            name=self.name,
            entries=tuple(DeckEntry(c.id, c.count) for c in self.cards if c.count > 0),
        )


_DECK_LIST = TypeAdapter(list[StoredDeck])
CORRUPT_SUFFIX = ".corrupt"


class DeckStore:
    """
    File-backed deck list.

    Usage:
        store = DeckStore(path="~/.evodeck/decks.json")
        config = store.get_selected_deck_configuration()
        store.save_deck(0, "Combo", [("combo_x2", 4), ("score_1", 16)])
    """

    def __init__(
        self,
        path: str | Path | None = None,
        catalog: CardCatalog | None = None,
        deck_size: int = DEFAULT_RULES.deck_size,
    ):
        self.path = Path(path).expanduser() if path is not None else None
        self.catalog = catalog or create_standard_catalog()
        self.deck_size = deck_size
        self.selected_index = 0
        self._decks: list[DeckConfiguration] = []
        self.load()

    # =========================================================================
    # Load / save
    # =========================================================================

    def load(self) -> list[DeckConfiguration]:
        """
        Load decks from disk.

        A missing, corrupt or empty file is replaced by the built-in decks.
        A corrupt file is moved aside first so its contents are kept.
        """
        decks = self._read()
        if decks:
            self._decks = decks
        else:
            self._decks = default_decks()
            # never overwrite a file that could not be moved aside
            if self.path is None or not self.path.exists():
                self.save()
        if not 0 <= self.selected_index < len(self._decks):
            self.selected_index = 0
        return self.list_decks()

    def _read(self) -> list[DeckConfiguration]:
        if self.path is None or not self.path.exists():
            return []
        try:
            records = _DECK_LIST.validate_json(self.path.read_bytes())
        except (OSError, ValidationError) as e:
            logger.warning("Ignoring unreadable deck file %s: %s", self.path, e)
            self._set_aside()
            return []
        return [record.to_configuration() for record in records]

    def _set_aside(self):
        backup = self.path.with_name(self.path.name + CORRUPT_SUFFIX)
        try:
            self.path.replace(backup)
        except OSError as e:
            logger.warning("Could not move %s aside: %s", self.path, e)
            return
        logger.warning("Moved unreadable deck file to %s", backup)

    def save(self):
        """Write decks to disk (no-op for in-memory stores)."""
        if self.path is None:
            return
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(
                json.dumps([d.to_dict() for d in self._decks], ensure_ascii=False, indent=2),
                encoding="utf-8",
            )
        except OSError as e:
            logger.warning("Could not save decks to %s: %s", self.path, e)

    # =========================================================================
    # Access
    # =========================================================================

    def list_decks(self) -> list[DeckConfiguration]:
        return list(self._decks)

    def get_deck(self, index: int) -> DeckConfiguration:
        self._check_index(index)
        return self._decks[index]

    def select(self, index: int):
        self._check_index(index)
        self.selected_index = index

    def get_selected_deck_configuration(self) -> DeckConfiguration:
        """The deck a new game starts with."""
        if not self._decks:
            return STARTER_DECK
        return self._decks[self.selected_index]

    # =========================================================================
    # Editing
    # =========================================================================

    def create_deck(self, name: str | None = None) -> int:
        """Add a copy of the starter deck. Returns its index."""
        deck = DeckConfiguration(
            name=name or f"New Deck {len(self._decks) + 1}",
            entries=STARTER_DECK.entries,
        )
        self._decks.append(deck)
        self.save()
        return len(self._decks) - 1

    def copy_deck(self, index: int) -> int:
        """Duplicate a deck. Returns the new index."""
        source = self.get_deck(index)
        self._decks.append(DeckConfiguration(name=f"{source.name} (copy)", entries=source.entries))
        self.save()
        return len(self._decks) - 1

    def delete_deck(self, index: int):
        """Delete a deck. At least one deck always remains."""
        self._check_index(index)
        if len(self._decks) <= 1:
            raise DeckValidationError(["At least one deck is required"])
        del self._decks[index]
        if self.selected_index == index:
            self.selected_index = 0
        elif self.selected_index > index:
            self.selected_index -= 1
        self.save()

    def save_deck(self, index: int, name: str, cards: list[tuple[str, int]]) -> DeckConfiguration:
        """
        Replace a deck's name and contents.

        Zero counts are dropped; the total must equal the deck size and
        every card must exist.
        """
        self._check_index(index)
        deck = DeckConfiguration(
            name=name.strip() or f"Untitled Deck {index + 1}",
            entries=tuple(DeckEntry(card_id, count) for card_id, count in cards if count != 0),
        )
        result = validate_deck_configuration(deck, self.catalog, expected_size=self.deck_size)
        if not result.valid:
            raise DeckValidationError(result.errors)
        self._decks[index] = deck
        self.save()
        return deck

    def _check_index(self, index: int):
        if not 0 <= index < len(self._decks):
            raise DeckValidationError([f"No deck at index {index}"])

"""
Deck configurations - which cards, and how many of each, make up a deck.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class DeckEntry:
    """A (definition id, count) pair."""
    card_id: str
    count: int


@dataclass(frozen=True)
class DeckConfiguration:
    """
    An ordered list of deck entries with a display name.

    The engine accepts any total; deck size policy belongs to the editor.
    """
    name: str
    entries: tuple[DeckEntry, ...] = field(default_factory=tuple)

    @property
    def total_cards(self) -> int:
        return sum(entry.count for entry in self.entries)

    def count_of(self, card_id: str) -> int:
        return sum(e.count for e in self.entries if e.card_id == card_id)

    def to_dict(self) -> dict[str, Any]:
        """Stored shape: {"name": ..., "cards": [{"id": ..., "count": ...}]}."""
        return {
            "name": self.name,
            "cards": [{"id": e.card_id, "count": e.count} for e in self.entries],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DeckConfiguration:
        return cls(
            name=data.get("name", ""),
            entries=tuple(
                DeckEntry(card_id=c["id"], count=int(c["count"]))
                for c in data.get("cards", [])
            ),
        )

    @classmethod
    def from_counts(cls, name: str, counts: list[tuple[str, int]]) -> DeckConfiguration:
        return cls(name=name, entries=tuple(DeckEntry(i, c) for i, c in counts))

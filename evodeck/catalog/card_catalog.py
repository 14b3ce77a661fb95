"""
Card Catalog - Static registry of card definitions.

Definitions are immutable and owned by the catalog. Runtime card
instances refer back to them by id only.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator

from .effect_dsl import EffectSpec, ResolvedEffect

DEFAULT_MAX_LEVEL = 2


class UnknownCardDefinition(LookupError):
    """Raised when a card id is not in the catalog."""

    def __init__(self, card_id: str):
        self.card_id = card_id
        super().__init__(f"Unknown card definition: {card_id!r}")


class CardCategory(Enum):
    """Display category of a card. Never drives behavior."""
    SCORE = "Score"
    BUFF = "Buff"
    COST = "Cost"
    DRAW = "Draw"
    UTILITY = "Utility"


@dataclass(frozen=True)
class CardDefinition:
    """
    A card as described by the catalog.

    max_level of None means the catalog default (2).
    base_level is the level fresh instances start at.
    """
    id: str
    name: str
    category: CardCategory
    effects: tuple[EffectSpec, ...]
    max_level: int | None = None
    base_level: int = 0


class CardCatalog:
    """
    Stateless lookup over a fixed set of card definitions.

    Usage:
        catalog = CardCatalog(definitions)
        definition = catalog.definition("score_1")
        top = catalog.max_level(definition)
    """

    def __init__(
        self,
        definitions: Iterable[CardDefinition],
        default_max_level: int = DEFAULT_MAX_LEVEL,
    ):
        self._definitions: dict[str, CardDefinition] = {}
        self._order: list[CardDefinition] = []
        for definition in definitions:
            self._order.append(definition)
            self._definitions.setdefault(definition.id, definition)
        self.default_max_level = default_max_level

    def definition(self, card_id: str) -> CardDefinition:
        """Get a definition by id. Raises UnknownCardDefinition if absent."""
        try:
            return self._definitions[card_id]
        except KeyError:
            raise UnknownCardDefinition(card_id) from None

    def get(self, card_id: str) -> CardDefinition | None:
        """Get a definition by id, or None."""
        return self._definitions.get(card_id)

    def max_level(self, definition: CardDefinition) -> int:
        """Highest valid level for a definition."""
        if definition.max_level is None:
            return self.default_max_level
        return definition.max_level

    def clamp_level(self, definition: CardDefinition, level: int) -> int:
        return min(max(level, 0), self.max_level(definition))

    def value_at(self, effect: EffectSpec, definition: CardDefinition, level: int) -> float:
        """Magnitude of one of a definition's effects at a level."""
        return effect.value_at(self.clamp_level(definition, level))

    def ids(self) -> list[str]:
        return [d.id for d in self._order]

    @property
    def definitions(self) -> list[CardDefinition]:
        """All definitions in registration order (duplicates included)."""
        return list(self._order)

    def __contains__(self, card_id: object) -> bool:
        return card_id in self._definitions

    def __iter__(self) -> Iterator[CardDefinition]:
        return iter(self._definitions.values())

    def __len__(self) -> int:
        return len(self._definitions)


# ============================================================================
# Text rendering (for collaborators that display cards)
# ============================================================================

def format_value(value: float) -> str:
    """Render a magnitude without a trailing .0 for whole numbers."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"


def render_description(effect: ResolvedEffect) -> str:
    """Substitute the resolved value into the effect's template."""
    template = effect.description_template or f"{effect.kind.value} {{value}}"
    return template.replace("{value}", format_value(effect.value))


def render_card_text(resolved: Iterable[ResolvedEffect]) -> str:
    """Join the rendered descriptions of a card's resolved effects."""
    text = " / ".join(render_description(effect) for effect in resolved)
    return text or "No effect"

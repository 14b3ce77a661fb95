"""
Effect DSL - Leveled card effects.

A card is an ordered list of effect specs. Each spec carries one magnitude
per level; the engine looks up the magnitude for a card instance's level
and applies the effects left to right.

Key design decisions:
- Effect kinds form a closed enum; an unknown kind is a configuration error
- Magnitudes are plain numbers, never expressions
- Description templates are kept for collaborators that render card text,
  the engine itself only works with resolved numbers
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum


class EffectKind(Enum):
    """Types of card effects."""
    # Scoring
    SCORE = "Score"
    SCORE_MULTIPLIER = "ScoreMultiplier"

    # Card movement
    DRAW = "Draw"
    RETRIEVE_FROM_DISCARD = "RetrieveFromDiscard"
    SHUFFLE_DISCARD_INTO_DECK = "ShuffleDiscardIntoDeck"
    DISCARD_FROM_HAND = "DiscardFromHand"
    PURGE_SELF = "PurgeSelf"  # Removes the played card from the run

    # Use accounting
    COST_IGNORE = "CostIgnore"
    ADJUST_USES_REMAINING = "AdjustUsesRemaining"


# Kinds that still do something when their magnitude is 0.
# Everything else at 0 is a no-op and is dropped from resolution.
ZERO_MEANINGFUL_KINDS = frozenset({
    EffectKind.PURGE_SELF,
    EffectKind.RETRIEVE_FROM_DISCARD,
    EffectKind.SHUFFLE_DISCARD_INTO_DECK,
    EffectKind.ADJUST_USES_REMAINING,
    EffectKind.DISCARD_FROM_HAND,
})

# Kinds whose magnitude is scaled by the pending score multiplier.
MULTIPLIED_KINDS = frozenset({
    EffectKind.SCORE,
    EffectKind.DRAW,
    EffectKind.COST_IGNORE,
    EffectKind.PURGE_SELF,
    EffectKind.ADJUST_USES_REMAINING,
    EffectKind.RETRIEVE_FROM_DISCARD,
    EffectKind.DISCARD_FROM_HAND,
})


@dataclass(frozen=True)
class EffectSpec:
    """
    One effect of a card definition.

    values_by_level[i] is the magnitude at level i. Lookups past the end
    of the table clamp to the last entry.
    """
    kind: EffectKind
    values_by_level: tuple[float, ...]
    description_template: str = ""

    def value_at(self, level: int) -> float:
        """Magnitude at a level, clamped into the table."""
        if not self.values_by_level:
            return 0
        index = min(max(level, 0), len(self.values_by_level) - 1)
        return self.values_by_level[index]


@dataclass(frozen=True)
class ResolvedEffect:
    """An effect with its magnitude looked up for a concrete level."""
    kind: EffectKind
    value: float
    description_template: str = ""


def parse_effect_kind(tag: str) -> EffectKind:
    """
    Parse an effect tag ("Score", "CostIgnore", ...).

    Accepts the enum value or the enum name. Raises ValueError for
    anything else so a typo in card data fails loudly.
    """
    try:
        return EffectKind(tag)
    except ValueError:
        pass
    try:
        return EffectKind[tag.upper()]
    except KeyError:
        raise ValueError(f"Unknown effect kind: {tag!r}") from None


# ============================================================================
# Factory functions for common effects
# ============================================================================

def score(*values: float) -> EffectSpec:
    """Create a score effect."""
    return EffectSpec(EffectKind.SCORE, tuple(values), "Gain {value} points")


def draw(*values: float) -> EffectSpec:
    """Create a draw effect."""
    return EffectSpec(EffectKind.DRAW, tuple(values), "Draw {value} card(s)")


def multiplier(*values: float) -> EffectSpec:
    """Create a score multiplier effect."""
    return EffectSpec(
        EffectKind.SCORE_MULTIPLIER,
        tuple(values),
        "Multiply the next card's effects by {value}",
    )


def cost_ignore(*values: float) -> EffectSpec:
    """Create a cost-ignore effect."""
    return EffectSpec(
        EffectKind.COST_IGNORE,
        tuple(values),
        "The next {value} card(s) do not count toward uses",
    )


def purge_self(*values: float) -> EffectSpec:
    """Create a purge effect - the card leaves the run and scores its value."""
    return EffectSpec(
        EffectKind.PURGE_SELF,
        tuple(values),
        "Gain {value} points and remove this card permanently",
    )


def adjust_uses(*values: float) -> EffectSpec:
    """Create an effect that refunds card uses this turn."""
    return EffectSpec(
        EffectKind.ADJUST_USES_REMAINING,
        tuple(values),
        "Recover {value} card use(s) this turn",
    )


def retrieve_from_discard(*values: float) -> EffectSpec:
    """Create an effect returning random discards to hand."""
    return EffectSpec(
        EffectKind.RETRIEVE_FROM_DISCARD,
        tuple(values),
        "Return {value} random card(s) from the discard pile to hand",
    )


def shuffle_discard_into_deck(*values: float) -> EffectSpec:
    """Create an effect that reshuffles the discard pile into the deck."""
    return EffectSpec(
        EffectKind.SHUFFLE_DISCARD_INTO_DECK,
        tuple(values) or (1,),
        "Shuffle the discard pile into the deck",
    )


def discard_from_hand(*values: float) -> EffectSpec:
    """Create an effect discarding random cards from hand."""
    return EffectSpec(
        EffectKind.DISCARD_FROM_HAND,
        tuple(values),
        "Discard {value} random card(s) from hand",
    )

"""
Standard Cards - The built-in card set.

Card structure:
- Category (Score, Buff, Cost, Draw, Utility), display only
- Effects, applied left to right, one magnitude per level
- Max level (defaults to 2, i.e. three levels: Lv.1 to Lv.3 on screen)
"""

from ..catalog.card_catalog import CardCatalog, CardCategory, CardDefinition
from ..catalog.effect_dsl import (
    adjust_uses,
    cost_ignore,
    discard_from_hand,
    draw,
    multiplier,
    purge_self,
    retrieve_from_discard,
    score,
    shuffle_discard_into_deck,
)
from ..config import DEFAULT_RULES, GameRules


# ============================================================================
# Scoring cards
# ============================================================================

BASIC_POINTS = CardDefinition(
    id="score_1",
    name="Basic Points",
    category=CardCategory.SCORE,
    effects=(score(2, 4, 6),),
)

ACCELERATING_POINTS = CardDefinition(
    id="score_2",
    name="Accelerating Points",
    category=CardCategory.SCORE,
    effects=(
        score(4, 6, 8),
        draw(0, 1, 1),  # No draw until the first evolution
    ),
)

FOCUS_POINTS = CardDefinition(
    id="new_score_3",
    name="Focus Points",
    category=CardCategory.SCORE,
    effects=(purge_self(5, 10, 15),),
)

JACKPOT = CardDefinition(
    id="jackpot",
    name="Jackpot",
    category=CardCategory.SCORE,
    effects=(score(1, 3, 6, 12),),
    max_level=3,
)


# ============================================================================
# Combo cards
# ============================================================================

DOUBLER = CardDefinition(
    id="combo_x2",
    name="Doubler",
    category=CardCategory.BUFF,
    effects=(multiplier(2, 3, 4),),
)

QUICK = CardDefinition(
    id="combo_ignore",
    name="Quick",
    category=CardCategory.COST,
    effects=(cost_ignore(1, 2, 3),),
)


# ============================================================================
# Deck manipulation cards
# ============================================================================

SURVEY = CardDefinition(
    id="new_draw_low",
    name="Survey",
    category=CardCategory.DRAW,
    effects=(
        score(1, 2, 3),
        draw(2, 2, 3),
        discard_from_hand(1, 1, 0),
    ),
)

MOBILITY = CardDefinition(
    id="new_max_use_add",
    name="Mobility",
    category=CardCategory.UTILITY,
    effects=(
        adjust_uses(1, 2, 2),
        draw(1, 1, 2),
    ),
)

SALVAGE = CardDefinition(
    id="salvage",
    name="Salvage",
    category=CardCategory.UTILITY,
    effects=(retrieve_from_discard(1, 2, 3),),
)

RECYCLE = CardDefinition(
    id="recycle",
    name="Recycle",
    category=CardCategory.DRAW,
    effects=(
        shuffle_discard_into_deck(1),
        draw(0, 1, 2),
    ),
)


ALL_CARDS: tuple[CardDefinition, ...] = (
    BASIC_POINTS,
    ACCELERATING_POINTS,
    FOCUS_POINTS,
    JACKPOT,
    DOUBLER,
    QUICK,
    SURVEY,
    MOBILITY,
    SALVAGE,
    RECYCLE,
)


def get_all_card_definitions() -> list[CardDefinition]:
    """Get all built-in card definitions."""
    return list(ALL_CARDS)


def create_standard_catalog(rules: GameRules = DEFAULT_RULES) -> CardCatalog:
    """Catalog of the built-in card set. Cards without a max level use the rules' default."""
    return CardCatalog(ALL_CARDS, default_max_level=rules.default_max_level)

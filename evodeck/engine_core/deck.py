"""
Deck Lifecycle - Building card instances and moving them between piles.

- build_master_list: deck configuration -> fresh card instances
- rebuild_for_stage: every live instance back into a shuffled draw pile
- draw_cards: draw pile -> hand, refilling from the discard pile
"""

from __future__ import annotations
import logging
import uuid

from ..catalog.card_catalog import CardCatalog
from ..catalog.deck_config import DeckConfiguration
from .state import CardInstance, RoundState

logger = logging.getLogger(__name__)


def new_instance_id() -> str:
    return uuid.uuid4().hex


def build_master_list(catalog: CardCatalog, config: DeckConfiguration) -> list[CardInstance]:
    """
    Create count fresh instances for every entry of a configuration.

    Instances start at their definition's base level. Unknown ids raise
    UnknownCardDefinition; nothing is skipped.
    """
    instances: list[CardInstance] = []
    for entry in config.entries:
        definition = catalog.definition(entry.card_id)
        level = catalog.clamp_level(definition, definition.base_level)
        for _ in range(entry.count):
            instances.append(
                CardInstance(
                    instance_id=new_instance_id(),
                    definition_id=definition.id,
                    level=level,
                )
            )
    logger.debug("Built %d card instances from deck %r", len(instances), config.name)
    return instances


def rebuild_for_stage(state: RoundState):
    """
    Reset the piles for a new stage.

    Hand and discard empty, every instance of the master list in the draw
    pile in a fresh shuffled order.
    """
    state.hand = []
    state.discard_pile = []
    state.in_resolution = None
    state.draw_pile = list(state.master_card_list)
    state.rng.shuffle(state.draw_pile)


def shuffle_discard_into_draw(state: RoundState) -> int:
    """Move the whole discard pile into the draw pile and shuffle. Returns cards moved."""
    moved = len(state.discard_pile)
    if moved:
        state.draw_pile.extend(state.discard_pile)
        state.discard_pile = []
    state.rng.shuffle(state.draw_pile)
    return moved


def draw_cards(state: RoundState, count: int) -> list[CardInstance]:
    """
    Draw up to count cards into the hand.

    Draws from the end of the draw pile. An empty draw pile is refilled
    from the shuffled discard pile; when both are empty drawing stops
    early and fewer cards are returned.
    """
    drawn: list[CardInstance] = []
    for _ in range(max(count, 0)):
        if not state.draw_pile:
            if not state.discard_pile:
                logger.debug("Draw stopped: draw and discard piles are empty")
                break
            moved = shuffle_discard_into_draw(state)
            logger.debug("Reshuffled %d discarded cards into the draw pile", moved)
        card = state.draw_pile.pop()
        state.hand.append(card)
        drawn.append(card)
    return drawn


def move_random(
    state: RoundState,
    source: list[CardInstance],
    target: list[CardInstance],
    count: int,
) -> list[CardInstance]:
    """Move up to count uniformly random cards from source to target."""
    count = min(max(count, 0), len(source))
    if count == 0:
        return []
    chosen = state.rng.sample(source, count)
    for card in chosen:
        source.remove(card)
        target.append(card)
    return chosen


def purge_instance(state: RoundState, card: CardInstance):
    """Remove an instance from the run for good."""
    state.master_card_list = [
        c for c in state.master_card_list if c.instance_id != card.instance_id
    ]
    state.purged.append(card)

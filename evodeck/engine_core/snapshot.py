"""
Round snapshots - read-only views of the state for collaborators.

A snapshot is detached from the live state: renderers can hold on to
it without seeing later mutations.
"""

from __future__ import annotations
from dataclasses import dataclass

from ..catalog.card_catalog import CardCatalog, render_card_text
from ..catalog.effect_dsl import ResolvedEffect
from .effect_resolver import resolve_effects
from .state import CardInstance, EvolutionCandidate, GamePhase, RoundState


@dataclass(frozen=True)
class CardView:
    """A card as shown to the player."""
    instance_id: str
    definition_id: str
    name: str
    category: str
    level: int
    max_level: int
    effects: tuple[ResolvedEffect, ...]
    text: str


@dataclass(frozen=True)
class RoundSnapshot:
    """Everything a renderer needs to draw the table."""
    game_id: str
    phase: GamePhase
    stage: int
    score: int
    target_score: int
    high_score: int
    hand: tuple[CardView, ...]
    draw_count: int
    discard_count: int
    deck_size: int
    uses_this_turn: int
    max_uses_per_turn: int
    uses_remaining: int
    pending_score_multiplier: float
    pending_cost_ignore_count: int
    turn_number: int
    evolution_active: bool
    evolution_remaining: int
    evolution_candidates: tuple[EvolutionCandidate, ...]

    @property
    def is_game_over(self) -> bool:
        return self.phase == GamePhase.GAME_OVER


def card_view(catalog: CardCatalog, instance: CardInstance) -> CardView:
    definition = catalog.definition(instance.definition_id)
    effects = tuple(resolve_effects(catalog, definition, instance.level))
    return CardView(
        instance_id=instance.instance_id,
        definition_id=instance.definition_id,
        name=definition.name,
        category=definition.category.value,
        level=instance.level,
        max_level=catalog.max_level(definition),
        effects=effects,
        text=render_card_text(effects),
    )


def take_snapshot(state: RoundState, catalog: CardCatalog) -> RoundSnapshot:
    """Build a read-only snapshot of the state."""
    return RoundSnapshot(
        game_id=state.game_id,
        phase=state.phase,
        stage=state.stage,
        score=state.score,
        target_score=state.target_score,
        high_score=state.high_score,
        hand=tuple(card_view(catalog, card) for card in state.hand),
        draw_count=len(state.draw_pile),
        discard_count=len(state.discard_pile),
        deck_size=len(state.master_card_list),
        uses_this_turn=state.uses_this_turn,
        max_uses_per_turn=state.max_uses_per_turn,
        uses_remaining=state.uses_remaining,
        pending_score_multiplier=state.pending_score_multiplier,
        pending_cost_ignore_count=state.pending_cost_ignore_count,
        turn_number=state.turn_number,
        evolution_active=state.evolution.active,
        evolution_remaining=state.evolution.remaining_selections,
        evolution_candidates=tuple(state.evolution.candidates),
    )

"""
Effect Resolver - Turns a card instance into applied effects.

This module handles:
- Looking up each effect's magnitude for the instance's level
- Dropping effects that are no-ops at their magnitude
- Threading the pending score multiplier through one card's effects
- Applying each effect kind to the round state

Resolution of one card is a single left-to-right pass with no pauses.
Random picks (retrieve, discard) use the round state's Random.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable
import logging
import math

from ..catalog.card_catalog import CardCatalog, CardDefinition
from ..catalog.effect_dsl import (
    EffectKind,
    ResolvedEffect,
    MULTIPLIED_KINDS,
    ZERO_MEANINGFUL_KINDS,
)
from .action import AppliedEffect
from .deck import draw_cards, move_random, purge_instance, shuffle_discard_into_draw
from .state import CardInstance, RoundState

logger = logging.getLogger(__name__)


class ConfigurationError(Exception):
    """Raised when the engine is wired up inconsistently."""


def resolve_effects(
    catalog: CardCatalog,
    definition: CardDefinition,
    level: int,
) -> list[ResolvedEffect]:
    """
    Ordered effects of a definition at a level.

    The level is clamped to [0, max_level] and each value table to its
    last entry. Zero-valued effects are dropped unless their kind still
    means something at zero (purge, retrieve, shuffle, adjust, discard).
    """
    resolved = []
    for effect in definition.effects:
        value = catalog.value_at(effect, definition, level)
        if value == 0 and effect.kind not in ZERO_MEANINGFUL_KINDS:
            continue
        resolved.append(
            ResolvedEffect(
                kind=effect.kind,
                value=value,
                description_template=effect.description_template,
            )
        )
    return resolved


def resolve_instance(catalog: CardCatalog, instance: CardInstance) -> list[ResolvedEffect]:
    """Resolved effects of an instance at its current level."""
    return resolve_effects(catalog, catalog.definition(instance.definition_id), instance.level)


def apply_multiplier(value: float, multiplier: float) -> int:
    """value * multiplier rounded half up, never below 0."""
    return max(int(math.floor(value * multiplier + 0.5)), 0)


@dataclass
class EffectOutcome:
    """
    What resolving one card did.

    returns_to_discard is False only when the card purged itself.
    """
    returns_to_discard: bool = True
    applied: list[AppliedEffect] = field(default_factory=list)
    multiplier_consumed: bool = False

    @property
    def purged(self) -> bool:
        return not self.returns_to_discard


EffectHandler = Callable[[RoundState, CardInstance, float, EffectOutcome], None]


class EffectResolver:
    """
    Applies a card's effects to the round state.

    Every EffectKind must have a handler; a missing one is reported when
    the resolver is built rather than skipped at play time.
    """

    def __init__(self, catalog: CardCatalog):
        self.catalog = catalog
        self._handlers: dict[EffectKind, EffectHandler] = {
            EffectKind.SCORE: self._apply_score,
            EffectKind.DRAW: self._apply_draw,
            EffectKind.SCORE_MULTIPLIER: self._apply_score_multiplier,
            EffectKind.COST_IGNORE: self._apply_cost_ignore,
            EffectKind.PURGE_SELF: self._apply_purge_self,
            EffectKind.ADJUST_USES_REMAINING: self._apply_adjust_uses,
            EffectKind.RETRIEVE_FROM_DISCARD: self._apply_retrieve,
            EffectKind.SHUFFLE_DISCARD_INTO_DECK: self._apply_shuffle_discard,
            EffectKind.DISCARD_FROM_HAND: self._apply_discard_from_hand,
        }
        missing = [kind.value for kind in EffectKind if kind not in self._handlers]
        if missing:
            raise ConfigurationError(f"No effect handler for: {', '.join(missing)}")

    def resolve(self, instance: CardInstance, level: int | None = None) -> list[ResolvedEffect]:
        """Resolved effects for an instance, at its own level unless one is given."""
        definition = self.catalog.definition(instance.definition_id)
        return resolve_effects(
            self.catalog, definition, instance.level if level is None else level
        )

    def apply_effects(self, state: RoundState, instance: CardInstance) -> EffectOutcome:
        """
        Apply every effect of a played card, left to right.

        The pending multiplier is captured once and reset to 1 before the
        first effect. If the card applies no multiplied effect, the captured
        multiplier goes back into the pending value so chained multiplier
        cards compose.
        """
        outcome = EffectOutcome()
        current_multiplier = state.pending_score_multiplier
        state.pending_score_multiplier = 1

        for effect in self.resolve(instance):
            if effect.kind in MULTIPLIED_KINDS:
                value = apply_multiplier(effect.value, current_multiplier)
                outcome.multiplier_consumed = True
            else:
                value = effect.value

            self._handlers[effect.kind](state, instance, value, outcome)
            outcome.applied.append(
                AppliedEffect(
                    kind=effect.kind,
                    base_value=effect.value,
                    applied_value=value,
                    source_instance_id=instance.instance_id,
                )
            )
            logger.debug(
                "Applied %s %s (base %s, x%s) from %s",
                effect.kind.value, value, effect.value, current_multiplier,
                instance.definition_id,
            )

        if not outcome.multiplier_consumed:
            state.pending_score_multiplier *= current_multiplier

        return outcome

    # =========================================================================
    # Effect handlers
    # =========================================================================

    def _apply_score(self, state: RoundState, instance: CardInstance, value: float, outcome: EffectOutcome):
        state.score += int(value)

    def _apply_draw(self, state: RoundState, instance: CardInstance, value: float, outcome: EffectOutcome):
        draw_cards(state, int(value))

    def _apply_score_multiplier(self, state: RoundState, instance: CardInstance, value: float, outcome: EffectOutcome):
        state.pending_score_multiplier *= value

    def _apply_cost_ignore(self, state: RoundState, instance: CardInstance, value: float, outcome: EffectOutcome):
        state.pending_cost_ignore_count += int(value)

    def _apply_purge_self(self, state: RoundState, instance: CardInstance, value: float, outcome: EffectOutcome):
        """Score the value and take the card out of the run."""
        state.score += int(value)
        if outcome.returns_to_discard:
            purge_instance(state, instance)
            outcome.returns_to_discard = False
            logger.info("Purged %s (%s)", instance.definition_id, instance.instance_id)

    def _apply_adjust_uses(self, state: RoundState, instance: CardInstance, value: float, outcome: EffectOutcome):
        state.uses_this_turn = max(state.uses_this_turn - int(value), 0)

    def _apply_retrieve(self, state: RoundState, instance: CardInstance, value: float, outcome: EffectOutcome):
        move_random(state, state.discard_pile, state.hand, int(value))

    def _apply_shuffle_discard(self, state: RoundState, instance: CardInstance, value: float, outcome: EffectOutcome):
        shuffle_discard_into_draw(state)

    def _apply_discard_from_hand(self, state: RoundState, instance: CardInstance, value: float, outcome: EffectOutcome):
        move_random(state, state.hand, state.discard_pile, int(value))

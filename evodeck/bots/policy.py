"""
Bot Policy - Interface for bot decision-making.

A BotPolicy takes a round state and the legal actions and returns a
decision. Card effects never ask for input, so an action is the only
thing a bot decides.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any
import random

from ..catalog.card_catalog import CardCatalog
from ..catalog.effect_dsl import EffectKind
from ..engine_core.action import Action, ActionType
from ..engine_core.effect_resolver import resolve_instance
from ..engine_core.state import CardInstance, RoundState


@dataclass
class BotDecision:
    """
    A decision made by a bot.

    Contains:
    - The action to take
    - Explanation (for UI/debugging)
    - Confidence in the decision
    """
    action: Action
    explanation: str = ""
    confidence: float = 1.0

    # Evaluation details (for debugging)
    evaluated_actions: int = 0
    best_score: float = 0.0
    evaluation_details: dict[str, Any] = field(default_factory=dict)


class BotPolicy(ABC):
    """
    Abstract base class for bot policies.

    A policy defines how a bot selects actions.
    """

    @abstractmethod
    def select_action(
        self,
        state: RoundState,
        catalog: CardCatalog,
        legal_actions: list[Action],
    ) -> BotDecision:
        """
        Select an action from the legal actions.

        Args:
            state: Current round state
            catalog: Card catalog
            legal_actions: List of legal actions to choose from

        Returns:
            BotDecision with the selected action
        """
        pass

    def get_name(self) -> str:
        """Get the bot's name/identifier."""
        return self.__class__.__name__


class RandomPolicy(BotPolicy):
    """
    Random policy - selects actions uniformly at random.

    Used for:
    - Testing
    - Baseline comparison
    """

    def __init__(self, seed: int | None = None):
        self.rng = random.Random(seed)

    def select_action(
        self,
        state: RoundState,
        catalog: CardCatalog,
        legal_actions: list[Action],
    ) -> BotDecision:
        if not legal_actions:
            raise ValueError("No legal actions available")

        action = self.rng.choice(legal_actions)
        return BotDecision(
            action=action,
            explanation="Selected randomly",
            confidence=1.0 / len(legal_actions),
            evaluated_actions=len(legal_actions),
        )


class FirstLegalPolicy(BotPolicy):
    """
    Always picks the first legal action.

    Useful for deterministic testing: it plays the leftmost card
    until the turn ends on its own.
    """

    def select_action(
        self,
        state: RoundState,
        catalog: CardCatalog,
        legal_actions: list[Action],
    ) -> BotDecision:
        if not legal_actions:
            raise ValueError("No legal actions available")

        return BotDecision(
            action=legal_actions[0],
            explanation="First legal action",
            evaluated_actions=len(legal_actions),
        )


SCORING_KINDS = {EffectKind.SCORE, EffectKind.PURGE_SELF}


class GreedyPolicy(BotPolicy):
    """
    One-step heuristic player.

    - Plays a multiplier first when a scoring card is left to benefit
    - Plays cost-ignore cards next so later plays are free
    - Otherwise plays the card with the highest immediate score
    - Evolves the lowest-level candidate
    """

    def select_action(
        self,
        state: RoundState,
        catalog: CardCatalog,
        legal_actions: list[Action],
    ) -> BotDecision:
        if not legal_actions:
            raise ValueError("No legal actions available")

        evolutions = [a for a in legal_actions if a.action_type == ActionType.SELECT_EVOLUTION]
        if evolutions:
            return self._select_evolution(state, evolutions, len(legal_actions))

        plays = [a for a in legal_actions if a.action_type == ActionType.PLAY_CARD]
        if not plays:
            return BotDecision(
                action=legal_actions[0],
                explanation="Nothing to play",
                evaluated_actions=len(legal_actions),
            )

        scored = [
            (self.evaluate_card(state, catalog, state.hand[a.payload.hand_index]), a)
            for a in plays
        ]
        best_score, best = max(scored, key=lambda pair: pair[0])
        return BotDecision(
            action=best,
            explanation=f"Play {state.hand[best.payload.hand_index].definition_id}",
            evaluated_actions=len(legal_actions),
            best_score=best_score,
            evaluation_details={
                state.hand[a.payload.hand_index].instance_id: value for value, a in scored
            },
        )

    def evaluate_card(self, state: RoundState, catalog: CardCatalog, card: CardInstance) -> float:
        """Heuristic value of playing a card now."""
        effects = resolve_instance(catalog, card)
        kinds = {effect.kind for effect in effects}

        if EffectKind.SCORE_MULTIPLIER in kinds and self._has_other_scorer(state, catalog, card):
            return 1000 + sum(e.value for e in effects if e.kind == EffectKind.SCORE_MULTIPLIER)
        if EffectKind.COST_IGNORE in kinds:
            return 500 + sum(e.value for e in effects if e.kind == EffectKind.COST_IGNORE)

        value = 0.0
        for effect in effects:
            if effect.kind in SCORING_KINDS:
                value += effect.value * state.pending_score_multiplier
            elif effect.kind in {EffectKind.DRAW, EffectKind.RETRIEVE_FROM_DISCARD}:
                value += effect.value * 0.5
            elif effect.kind == EffectKind.ADJUST_USES_REMAINING:
                value += effect.value
        return value

    def _has_other_scorer(self, state: RoundState, catalog: CardCatalog, card: CardInstance) -> bool:
        for other in state.hand:
            if other is card:
                continue
            if any(e.kind in SCORING_KINDS for e in resolve_instance(catalog, other)):
                return True
        return False

    def _select_evolution(self, state: RoundState, evolutions: list[Action], evaluated: int) -> BotDecision:
        levels = {c.definition_id: c.level for c in state.evolution.candidates}
        best = min(evolutions, key=lambda a: levels.get(a.payload.definition_id, 0))
        return BotDecision(
            action=best,
            explanation=f"Evolve {best.payload.definition_id}",
            evaluated_actions=evaluated,
        )


POLICIES: dict[str, type[BotPolicy]] = {
    "greedy": GreedyPolicy,
    "random": RandomPolicy,
    "first": FirstLegalPolicy,
}


def create_policy(name: str, seed: int | None = None) -> BotPolicy:
    """Build a policy by name."""
    if name not in POLICIES:
        raise ValueError(f"Unknown policy {name!r}; choose from {', '.join(POLICIES)}")
    if name == "random":
        return RandomPolicy(seed)
    return POLICIES[name]()

"""
Reducer - Applies actions to the round state.

The reducer is the single point of state mutation.
All player-driven changes go through apply().

Design principles:
- Validates before applying; a rejected action leaves the state untouched
- Returns ActionResult with success/failure, events and applied effects
- Delegates card effects to EffectResolver and upgrades to EvolutionEngine
- Turn and stage transitions (auto-advance, stage clear, game over) are
  run here, right after the action that triggers them
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging
import math
import random
import uuid

from ..catalog.card_catalog import CardCatalog
from ..catalog.deck_config import DeckConfiguration
from ..config import DEFAULT_RULES, GameRules
from .action import Action, ActionResult, ActionType, ErrorCode, GameEvent
from .deck import build_master_list, draw_cards, rebuild_for_stage
from .effect_resolver import EffectResolver
from .evolution import EvolutionEngine
from .state import GamePhase, RoundState

logger = logging.getLogger(__name__)


@dataclass
class Reducer:
    """
    Reducer applies actions to round state.

    Stateless - all state is in RoundState.
    The catalog and rules drive validation and effects.
    """
    catalog: CardCatalog
    rules: GameRules = DEFAULT_RULES
    resolver: EffectResolver = field(init=False)
    evolution: EvolutionEngine = field(init=False)

    def __post_init__(self):
        self.resolver = EffectResolver(self.catalog)
        self.evolution = EvolutionEngine(self.catalog, self.rules)

    # =========================================================================
    # Game start
    # =========================================================================

    def new_game(
        self,
        config: DeckConfiguration,
        high_score: int = 0,
        seed: int | None = None,
        game_id: str | None = None,
    ) -> tuple[RoundState, ActionResult]:
        """
        Start a run from a deck configuration.

        Raises UnknownCardDefinition if the configuration names a card the
        catalog does not have.
        """
        state = RoundState(
            game_id=game_id or str(uuid.uuid4()),
            deck_name=config.name,
            master_card_list=build_master_list(self.catalog, config),
            target_score=self.rules.initial_target_score,
            stage=1,
            high_score=high_score,
            max_uses_per_turn=self.rules.max_uses_per_turn,
            random_seed=seed,
            rng=random.Random(seed),
        )
        result = ActionResult.success_with_state(state)
        result.emit(
            GameEvent.GAME_STARTED,
            f"Started with {config.name or 'unnamed deck'} ({len(state.master_card_list)} cards)",
        )
        self.start_stage(state, result, initial=True)
        return state, result

    # =========================================================================
    # Action dispatch
    # =========================================================================

    def apply(self, state: RoundState, action: Action) -> ActionResult:
        """
        Apply an action to the round state.

        Returns ActionResult; on failure nothing was changed.
        """
        rejection = self._validate_action(state, action)
        if rejection:
            error, code = rejection
            logger.debug("Rejected %s: %s", action.action_type.value, error)
            return ActionResult.failure(error, error_code=code)

        handler = self._get_handler(action.action_type)
        if not handler:
            return ActionResult.failure(
                f"No handler for action type: {action.action_type}",
                error_code=ErrorCode.NO_HANDLER,
            )

        result = handler(state, action)
        if result.success:
            state.action_history.append(action)
        return result

    def _validate_action(self, state: RoundState, action: Action) -> tuple[str, str] | None:
        """
        Check that an action is legal in the current state.

        Returns (error message, error code) if invalid, None if valid.
        """
        if state.phase == GamePhase.GAME_OVER:
            return "Game is over - no actions allowed", ErrorCode.INVALID_PHASE

        if action.action_type in {ActionType.PLAY_CARD, ActionType.END_TURN}:
            if state.phase != GamePhase.AWAITING_PLAY or state.evolution.active:
                return "Cards cannot be played right now", ErrorCode.INVALID_PHASE

        if action.action_type == ActionType.PLAY_CARD:
            index = action.payload.hand_index
            if index is None or not 0 <= index < len(state.hand):
                return f"No card at hand index {index}", ErrorCode.INVALID_HAND_INDEX
            if (
                state.pending_cost_ignore_count <= 0
                and state.uses_this_turn >= state.max_uses_per_turn
            ):
                return "No card uses remaining this turn", ErrorCode.NO_USES_REMAINING

        if action.action_type == ActionType.SELECT_EVOLUTION:
            if state.phase != GamePhase.EVOLUTION or not state.evolution.active:
                return "Not in the evolution phase", ErrorCode.INVALID_PHASE
            if state.evolution.remaining_selections <= 0:
                return "No evolution selections remaining", ErrorCode.INVALID_PHASE
            definition_id = action.payload.definition_id
            if definition_id is None or state.evolution.candidate_for(definition_id) is None:
                return f"{definition_id!r} is not a current candidate", ErrorCode.INVALID_CANDIDATE

        return None

    def _get_handler(self, action_type: ActionType):
        """Get the handler function for an action type."""
        handlers = {
            ActionType.PLAY_CARD: self._handle_play_card,
            ActionType.END_TURN: self._handle_end_turn,
            ActionType.SELECT_EVOLUTION: self._handle_select_evolution,
        }
        return handlers.get(action_type)

    # =========================================================================
    # Action handlers
    # =========================================================================

    def _handle_play_card(self, state: RoundState, action: Action) -> ActionResult:
        """Play a card: pay for it, resolve it, then run turn/stage checks."""
        result = ActionResult.success_with_state(state)

        if state.pending_cost_ignore_count > 0:
            state.pending_cost_ignore_count -= 1
        else:
            state.uses_this_turn += 1

        card = state.hand.pop(action.payload.hand_index)
        definition = self.catalog.definition(card.definition_id)
        state.in_resolution = card
        outcome = self.resolver.apply_effects(state, card)
        state.in_resolution = None

        if outcome.returns_to_discard:
            state.discard_pile.append(card)
        else:
            result.emit(GameEvent.CARD_PURGED, f"{definition.name} was removed from the deck")

        result.effects_applied = outcome.applied
        result.emit(GameEvent.CARD_PLAYED, f"Played {definition.name} (Lv.{card.level + 1})")
        result.emit(GameEvent.HAND_CHANGED)

        if self._piles_exhausted(state) and state.score < state.target_score:
            self._game_over(state, result)
        elif state.score >= state.target_score:
            self._clear_stage(state, result)
        elif not state.hand or (
            state.pending_cost_ignore_count == 0
            and state.uses_this_turn >= state.max_uses_per_turn
        ):
            self.end_turn(state, result)

        return result

    def _handle_end_turn(self, state: RoundState, action: Action) -> ActionResult:
        """Handle a manual end of turn."""
        result = ActionResult.success_with_state(state)
        self.end_turn(state, result)
        return result

    def _handle_select_evolution(self, state: RoundState, action: Action) -> ActionResult:
        """Level up one instance of the chosen definition."""
        definition_id = action.payload.definition_id
        evolved = self.evolution.evolve(state, definition_id)
        if evolved is None:
            return ActionResult.failure(
                f"No upgradable instance of {definition_id!r}",
                error_code=ErrorCode.INVALID_CANDIDATE,
            )

        result = ActionResult.success_with_state(state)
        state.evolution.remaining_selections -= 1
        name = self.catalog.definition(definition_id).name
        result.emit(GameEvent.EVOLUTION_APPLIED, f"{name} evolved to Lv.{evolved.level + 1}")

        if state.evolution.remaining_selections > 0 and self.evolution.refresh(state):
            return result

        state.evolution.clear()
        self._advance_stage(state, result)
        return result

    # =========================================================================
    # Transitions
    # =========================================================================

    def start_stage(self, state: RoundState, result: ActionResult, initial: bool = False):
        """
        Begin a stage: reset score, raise the target (after stage 1),
        rebuild piles from the master list and deal the first hand.
        """
        state.phase = GamePhase.STAGE_TRANSITION
        if not initial:
            state.stage += 1
            state.target_score = math.ceil(state.target_score * self.rules.target_growth)
        state.score = 0
        state.pending_score_multiplier = 1
        state.pending_cost_ignore_count = 0
        state.evolution.clear()
        rebuild_for_stage(state)

        result.emit(
            GameEvent.STAGE_STARTED,
            f"Stage {state.stage} started (target {state.target_score})",
        )
        logger.info("Stage %d started, target %d", state.stage, state.target_score)

        self.start_turn(state, result)
        if not state.hand and state.score < state.target_score:
            self._game_over(state, result)

    def start_turn(self, state: RoundState, result: ActionResult):
        """Reset uses and top the hand up to the hand size. The hand is kept."""
        state.turn_number += 1
        state.uses_this_turn = 0
        state.phase = GamePhase.AWAITING_PLAY

        shortfall = self.rules.hand_size - len(state.hand)
        drawn = draw_cards(state, shortfall) if shortfall > 0 else []

        result.emit(GameEvent.TURN_STARTED, f"Turn {state.turn_number} started")
        if drawn:
            result.emit(GameEvent.HAND_CHANGED)

    def end_turn(self, state: RoundState, result: ActionResult):
        """End the turn: clear the stage if the target is met, else start the next turn."""
        if state.score >= state.target_score:
            self._clear_stage(state, result)
            return

        self.start_turn(state, result)
        if not state.hand and state.score < state.target_score:
            self._game_over(state, result)

    def _clear_stage(self, state: RoundState, result: ActionResult):
        result.emit(
            GameEvent.STAGE_CLEARED,
            f"Stage {state.stage} cleared with {state.score} points",
        )
        logger.info("Stage %d cleared with %d points", state.stage, state.score)

        if self.evolution.begin(state):
            result.emit(GameEvent.EVOLUTION_STARTED)
        else:
            result.emit(GameEvent.EVOLUTION_SKIPPED, "Every card is at max level")
            self._advance_stage(state, result)

    def _advance_stage(self, state: RoundState, result: ActionResult):
        self._record_high_score(state, result)
        self.start_stage(state, result)

    def _game_over(self, state: RoundState, result: ActionResult):
        state.phase = GamePhase.GAME_OVER
        state.evolution.clear()
        self._record_high_score(state, result)
        result.emit(
            GameEvent.GAME_OVER,
            f"Game over at stage {state.stage} with {state.score} points",
        )
        logger.info("Game over at stage %d, score %d", state.stage, state.score)

    def _record_high_score(self, state: RoundState, result: ActionResult):
        if state.score > state.high_score:
            state.high_score = state.score
            result.emit(GameEvent.HIGH_SCORE_UPDATED, f"New high score: {state.score}")

    @staticmethod
    def _piles_exhausted(state: RoundState) -> bool:
        return not state.hand and not state.draw_pile and not state.discard_pile


def apply_action(
    catalog: CardCatalog,
    state: RoundState,
    action: Action,
    rules: GameRules = DEFAULT_RULES,
) -> ActionResult:
    """
    Convenience function to apply an action.

    Creates a Reducer and applies the action.
    """
    reducer = Reducer(catalog=catalog, rules=rules)
    return reducer.apply(state, action)

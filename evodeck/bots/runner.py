"""
Bot runner - Plays whole games with a policy.

Runs are bounded: the game has no natural end while any card
survives, so a run stops at a stage limit or an action limit.
"""

from __future__ import annotations
from dataclasses import dataclass
import logging

from ..catalog.deck_config import DeckConfiguration
from ..engine_core.action_generator import legal_actions
from ..engine_core.reducer import Reducer
from .policy import BotPolicy

logger = logging.getLogger(__name__)


@dataclass
class GameSummary:
    """Outcome of a bot run."""
    policy: str
    stage_reached: int
    stages_cleared: int
    final_score: int
    high_score: int
    actions_taken: int
    turns: int
    cards_purged: int
    game_over: bool


def run_bot_game(
    reducer: Reducer,
    policy: BotPolicy,
    config: DeckConfiguration,
    seed: int | None = None,
    max_stages: int = 10,
    max_actions: int = 5000,
) -> GameSummary:
    """
    Play one game until game over, max_stages cleared, or max_actions taken.

    Raises RuntimeError if the engine rejects an action the generator
    listed as legal.
    """
    state, _ = reducer.new_game(config, seed=seed)
    actions_taken = 0

    while not state.is_over and state.stage <= max_stages and actions_taken < max_actions:
        actions = legal_actions(state)
        if not actions:
            break
        decision = policy.select_action(state, reducer.catalog, actions)
        result = reducer.apply(state, decision.action)
        if not result.success:
            raise RuntimeError(
                f"{policy.get_name()} chose a rejected action: {result.error} ({result.error_code})"
            )
        actions_taken += 1

    summary = GameSummary(
        policy=policy.get_name(),
        stage_reached=state.stage,
        stages_cleared=state.stage - 1,
        final_score=state.score,
        high_score=state.high_score,
        actions_taken=actions_taken,
        turns=state.turn_number,
        cards_purged=len(state.purged),
        game_over=state.is_over,
    )
    logger.debug("Bot run finished: %s", summary)
    return summary

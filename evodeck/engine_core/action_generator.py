"""
Action Generator - Lists the actions that are legal right now.

Used by bots and by collaborators that want to enable/disable controls.
Every action returned here is accepted by the reducer.
"""

from __future__ import annotations

from .action import Action
from .state import GamePhase, RoundState


def can_play_card(state: RoundState) -> bool:
    """Whether a card may be played (a use or a cost-ignore token is available)."""
    if state.phase != GamePhase.AWAITING_PLAY or state.evolution.active:
        return False
    if not state.hand:
        return False
    return (
        state.pending_cost_ignore_count > 0
        or state.uses_this_turn < state.max_uses_per_turn
    )


def legal_actions(state: RoundState) -> list[Action]:
    """
    Generate all legal actions for the current state.

    - Awaiting play: one PLAY_CARD per hand card (if a play is affordable)
      and END_TURN
    - Evolution: one SELECT_EVOLUTION per candidate
    - Anything else: nothing
    """
    if state.phase == GamePhase.AWAITING_PLAY and not state.evolution.active:
        actions = []
        if can_play_card(state):
            actions.extend(Action.play_card(i) for i in range(len(state.hand)))
        actions.append(Action.end_turn())
        return actions

    if state.phase == GamePhase.EVOLUTION and state.evolution.remaining_selections > 0:
        return [
            Action.select_evolution(candidate.definition_id)
            for candidate in state.evolution.candidates
        ]

    return []

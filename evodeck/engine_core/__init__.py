"""
Engine Core - Round state management and effect resolution.

The engine is the runtime that:
1. Builds card instances from a deck configuration
2. Manages RoundState (piles, score, uses, phases)
3. Generates legal actions
4. Applies actions via the reducer
5. Resolves card effects and evolution picks
"""

from .state import CardInstance, EvolutionCandidate, EvolutionPhase, GamePhase, RoundState
from .action import Action, ActionType, ActionPayload, ActionResult, AppliedEffect, ErrorCode, GameEvent
from .deck import build_master_list, rebuild_for_stage, draw_cards
from .effect_resolver import (
    EffectResolver,
    EffectOutcome,
    ConfigurationError,
    resolve_effects,
    resolve_instance,
)
from .evolution import EvolutionEngine
from .reducer import Reducer, apply_action
from .action_generator import legal_actions, can_play_card
from .snapshot import CardView, RoundSnapshot, take_snapshot

__all__ = [
    "CardInstance",
    "EvolutionCandidate",
    "EvolutionPhase",
    "GamePhase",
    "RoundState",
    "Action",
    "ActionType",
    "ActionPayload",
    "ActionResult",
    "AppliedEffect",
    "ErrorCode",
    "GameEvent",
    "build_master_list",
    "rebuild_for_stage",
    "draw_cards",
    "EffectResolver",
    "EffectOutcome",
    "ConfigurationError",
    "resolve_effects",
    "resolve_instance",
    "EvolutionEngine",
    "Reducer",
    "apply_action",
    "legal_actions",
    "can_play_card",
    "CardView",
    "RoundSnapshot",
    "take_snapshot",
]

"""
Action System - Actions, payloads, results and notifications.

Actions represent what the player can do:
1. Play a card from hand
2. End the turn early
3. Pick an evolution candidate

All state changes flow through actions.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..catalog.effect_dsl import EffectKind


class ActionType(Enum):
    """Types of actions in the system."""
    PLAY_CARD = "play_card"
    END_TURN = "end_turn"
    SELECT_EVOLUTION = "select_evolution"


class GameEvent(Enum):
    """
    Notifications emitted by the engine.

    Collaborators (renderers, sound, persistence) react to these
    instead of polling every field of the state.
    """
    GAME_STARTED = "game_started"
    STAGE_STARTED = "stage_started"
    TURN_STARTED = "turn_started"
    HAND_CHANGED = "hand_changed"
    CARD_PLAYED = "card_played"
    CARD_PURGED = "card_purged"
    STAGE_CLEARED = "stage_cleared"
    EVOLUTION_STARTED = "evolution_started"
    EVOLUTION_APPLIED = "evolution_applied"
    EVOLUTION_SKIPPED = "evolution_skipped"
    HIGH_SCORE_UPDATED = "high_score_updated"
    GAME_OVER = "game_over"


class ErrorCode:
    """Error codes for rejected actions. Rejections never change state."""
    INVALID_PHASE = "INVALID_PHASE"
    INVALID_HAND_INDEX = "INVALID_HAND_INDEX"
    NO_USES_REMAINING = "NO_USES_REMAINING"
    INVALID_CANDIDATE = "INVALID_CANDIDATE"
    NO_HANDLER = "NO_HANDLER"


@dataclass
class ActionPayload:
    """
    Payload for an action - contains the action parameters.

    Different action types use different fields.
    """
    hand_index: int | None = None
    definition_id: str | None = None


@dataclass
class Action:
    """
    A complete action to be applied to the round state.

    Actions are validated before application and applied atomically
    by the reducer.
    """
    action_type: ActionType
    payload: ActionPayload = field(default_factory=ActionPayload)

    @classmethod
    def play_card(cls, hand_index: int) -> Action:
        """Factory for play card action."""
        return cls(
            action_type=ActionType.PLAY_CARD,
            payload=ActionPayload(hand_index=hand_index),
        )

    @classmethod
    def end_turn(cls) -> Action:
        """Factory for end turn action."""
        return cls(action_type=ActionType.END_TURN)

    @classmethod
    def select_evolution(cls, definition_id: str) -> Action:
        """Factory for evolution choice."""
        return cls(
            action_type=ActionType.SELECT_EVOLUTION,
            payload=ActionPayload(definition_id=definition_id),
        )


@dataclass(frozen=True)
class AppliedEffect:
    """
    An effect as it was applied.

    base_value is the level's magnitude, applied_value is after the
    pending multiplier (equal to base_value for unmultiplied kinds).
    """
    kind: EffectKind
    base_value: float
    applied_value: float
    source_instance_id: str


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Contains:
    - Whether the action was accepted
    - The state (mutated in place on success, untouched on failure)
    - Errors (if rejected)
    - Events and applied effects (for UI updates)
    """
    success: bool
    new_state: Any | None = None  # RoundState
    error: str | None = None
    error_code: str | None = None

    # For UI/presentation
    state_changes: list[str] = field(default_factory=list)  # Human-readable changes
    events: list[GameEvent] = field(default_factory=list)
    effects_applied: list[AppliedEffect] = field(default_factory=list)

    def emit(self, event: GameEvent, change: str | None = None):
        """Record an event (once) and an optional human-readable change."""
        if event not in self.events:
            self.events.append(event)
        if change:
            self.state_changes.append(change)

    @classmethod
    def failure(cls, error: str, error_code: str | None = None) -> ActionResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def success_with_state(
        cls,
        state: Any,
        changes: list[str] | None = None,
        events: list[GameEvent] | None = None,
    ) -> ActionResult:
        """Create a success result with the state."""
        return cls(
            success=True,
            new_state=state,
            state_changes=changes or [],
            events=events or [],
        )

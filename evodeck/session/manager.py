"""
Session Manager - Creates and manages game sessions.

LIFECYCLE:
1. Player picks a deck (or the store's selected deck is used)
2. Player starts a session -> a fresh RoundState owned by the session
3. During the game:
   - Player plays cards, ends turns, picks evolutions
   - Every action goes through the session's reducer
   - Listeners are told about each result
4. Game over -> session stays readable until ended
5. Returning to the title ends the session and discards its state

PERSISTENCE RULES:
- Round state is in-memory only, never persisted
- The high score is saved whenever the engine reports a new one
- Deck configurations come from the deck store
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable
import logging
import time
import uuid

from ..catalog.deck_config import DeckConfiguration
from ..engine_core.action import Action, ActionResult, GameEvent
from ..engine_core.reducer import Reducer
from ..engine_core.snapshot import RoundSnapshot, take_snapshot
from ..engine_core.state import RoundState
from ..storage.deck_store import DeckStore
from ..storage.high_score import HighScoreStore

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """State of a game session."""
    ACTIVE = "active"  # Game in progress
    GAME_OVER = "game_over"  # Run finished
    ABANDONED = "abandoned"  # Player returned to the title


SessionListener = Callable[["Session", ActionResult], None]


@dataclass
class Session:
    """
    A game session.

    Contains:
    - The reducer (catalog + rules)
    - The canonical round state
    - Session metadata

    The session is the only writer of its state.
    """
    session_id: str
    reducer: Reducer
    state: RoundState
    created_at: float

    status: SessionState = SessionState.ACTIVE
    high_score_store: HighScoreStore | None = None
    last_result: ActionResult | None = None
    listeners: list[SessionListener] = field(default_factory=list)

    @property
    def deck_name(self) -> str:
        return self.state.deck_name

    def is_active(self) -> bool:
        """Check if session is still active."""
        return self.status == SessionState.ACTIVE

    def subscribe(self, listener: SessionListener):
        """Call listener(session, result) after every action."""
        self.listeners.append(listener)

    def snapshot(self) -> RoundSnapshot:
        return take_snapshot(self.state, self.reducer.catalog)

    # =========================================================================
    # Player operations
    # =========================================================================

    def play_card(self, hand_index: int) -> ActionResult:
        return self.apply(Action.play_card(hand_index))

    def end_turn(self) -> ActionResult:
        return self.apply(Action.end_turn())

    def select_evolution(self, definition_id: str) -> ActionResult:
        return self.apply(Action.select_evolution(definition_id))

    def apply(self, action: Action) -> ActionResult:
        """Apply an action through the reducer and notify listeners."""
        result = self.reducer.apply(self.state, action)
        self.record(result)
        return result

    def record(self, result: ActionResult):
        """Handle the side effects of a result."""
        self.last_result = result
        if result.success:
            if GameEvent.HIGH_SCORE_UPDATED in result.events and self.high_score_store:
                self.high_score_store.save(self.state.high_score)
            if self.state.is_over and self.status == SessionState.ACTIVE:
                self.status = SessionState.GAME_OVER
        for listener in list(self.listeners):
            listener(self, result)


class SessionManager:
    """
    Manages game sessions.

    Responsibilities:
    - Start sessions from a deck configuration
    - Track active sessions
    - Clean up finished sessions
    """

    def __init__(
        self,
        reducer: Reducer,
        deck_store: DeckStore | None = None,
        high_score_store: HighScoreStore | None = None,
    ):
        self.reducer = reducer
        self.deck_store = deck_store or DeckStore(catalog=reducer.catalog)
        self.high_score_store = high_score_store or HighScoreStore()
        self._sessions: dict[str, Session] = {}

    def create_session(
        self,
        deck_config: DeckConfiguration | None = None,
        seed: int | None = None,
    ) -> Session:
        """
        Start a new game.

        Args:
            deck_config: Deck to play; defaults to the store's selected deck
            seed: Optional seed for a reproducible shuffle

        Returns:
            New Session with the first hand dealt

        Raises:
            UnknownCardDefinition if the deck names a missing card
        """
        config = deck_config or self.deck_store.get_selected_deck_configuration()
        session_id = str(uuid.uuid4())
        state, result = self.reducer.new_game(
            config,
            high_score=self.high_score_store.load(),
            seed=seed,
            game_id=session_id,
        )

        session = Session(
            session_id=session_id,
            reducer=self.reducer,
            state=state,
            created_at=time.time(),
            high_score_store=self.high_score_store,
        )
        session.record(result)

        self._sessions[session_id] = session
        logger.info("Session %s started with deck %r", session_id, config.name)
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def end_session(self, session_id: str, reason: str = "completed"):
        """
        End a session and drop its state.

        Called when the player returns to the title or the
        session is stale.
        """
        session = self._sessions.pop(session_id, None)
        if session:
            if session.status == SessionState.ACTIVE:
                session.status = SessionState.ABANDONED
            session.listeners.clear()
            logger.info("Session %s ended (%s)", session_id, reason)

    def list_active_sessions(self) -> list[str]:
        """List IDs of active sessions."""
        return [
            sid for sid, session in self._sessions.items()
            if session.is_active()
        ]

    def cleanup_stale_sessions(self, max_age_seconds: int = 3600) -> int:
        """
        Remove finished sessions older than max_age.

        Returns the number of sessions removed.
        """
        current_time = time.time()
        to_remove = [
            session_id
            for session_id, session in self._sessions.items()
            if current_time - session.created_at > max_age_seconds and not session.is_active()
        ]

        for session_id in to_remove:
            self.end_session(session_id, reason="stale")
        return len(to_remove)

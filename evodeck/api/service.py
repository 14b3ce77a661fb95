"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to session calls
2. Owns the catalog, stores and session manager
3. Formats snapshots and results for renderers

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..catalog.card_catalog import CardCatalog, CardDefinition, render_card_text, render_description
from ..catalog.deck_config import DeckConfiguration
from ..catalog.effect_dsl import ResolvedEffect
from ..config import DEFAULT_RULES, EVODECK_DATA_DIR, GameRules
from ..content import create_standard_catalog
from ..engine_core.action import ActionResult
from ..engine_core.effect_resolver import resolve_effects
from ..engine_core.reducer import Reducer
from ..engine_core.snapshot import CardView, RoundSnapshot
from ..session import Session, SessionManager
from ..storage import DeckStore, HighScoreStore, open_stores
from .schemas import (
    AppliedEffectInfo,
    CardDefinitionInfo,
    CardInfo,
    CardLevelInfo,
    CardListResponse,
    CreateDeckRequest,
    CreateGameRequest,
    DeckCardInfo,
    DeckInfo,
    DeckListResponse,
    EffectInfo,
    EndGameResponse,
    ErrorCode,
    ErrorResponse,
    EvolutionCandidateInfo,
    EvolveRequest,
    GameResponse,
    PhaseName,
    PlayCardRequest,
    RoundStateInfo,
    SaveDeckRequest,
)


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService()

        # Start a game with the selected deck
        game = service.start_game(CreateGameRequest())

        # Play the leftmost card
        game = service.play_card(game.game_id, PlayCardRequest(hand_index=0))
    """
    catalog: Optional[CardCatalog] = None
    rules: GameRules = DEFAULT_RULES
    deck_store: Optional[DeckStore] = None
    high_score_store: Optional[HighScoreStore] = None
    session_manager: Optional[SessionManager] = None

    def __post_init__(self):
        self.catalog = self.catalog or create_standard_catalog(self.rules)
        if self.deck_store is None or self.high_score_store is None:
            deck_store, high_score_store = open_stores(EVODECK_DATA_DIR)
            self.deck_store = self.deck_store or deck_store
            self.high_score_store = self.high_score_store or high_score_store
        self.session_manager = self.session_manager or SessionManager(
            reducer=Reducer(catalog=self.catalog, rules=self.rules),
            deck_store=self.deck_store,
            high_score_store=self.high_score_store,
        )

    @classmethod
    def with_data_dir(cls, data_dir: str | Path | None) -> APIService:
        """Service whose stores live under data_dir (EVODECK_DATA_DIR when None)."""
        deck_store, high_score_store = open_stores(data_dir)
        return cls(deck_store=deck_store, high_score_store=high_score_store)

    # =========================================================================
    # Cards
    # =========================================================================

    def list_cards(self) -> CardListResponse:
        cards = [self._definition_info(definition) for definition in self.catalog]
        return CardListResponse(cards=cards, count=len(cards))

    # =========================================================================
    # Decks
    # =========================================================================

    def list_decks(self) -> DeckListResponse:
        selected = self.deck_store.selected_index
        return DeckListResponse(
            decks=[
                _deck_info(index, deck, index == selected)
                for index, deck in enumerate(self.deck_store.list_decks())
            ],
            selected_index=selected,
        )

    def select_deck(self, index: int) -> DeckListResponse:
        """Raises DeckValidationError for a bad index."""
        self.deck_store.select(index)
        return self.list_decks()

    def create_deck(self, request: CreateDeckRequest) -> DeckInfo:
        """Add a deck holding the starter cards."""
        index = self.deck_store.create_deck(request.name)
        return self._deck_at(index)

    def copy_deck(self, index: int) -> DeckInfo:
        """Raises DeckValidationError for a bad index."""
        return self._deck_at(self.deck_store.copy_deck(index))

    def delete_deck(self, index: int) -> DeckListResponse:
        """
        Delete a deck.

        Raises DeckValidationError for a bad index or when it is the last deck.
        """
        self.deck_store.delete_deck(index)
        return self.list_decks()

    def save_deck(self, index: int, request: SaveDeckRequest) -> DeckInfo:
        """Raises DeckValidationError when the deck breaks the rules."""
        deck = self.deck_store.save_deck(
            index,
            request.name,
            [(card.id, card.count) for card in request.cards],
        )
        return _deck_info(index, deck, index == self.deck_store.selected_index)

    def _deck_at(self, index: int) -> DeckInfo:
        return _deck_info(index, self.deck_store.get_deck(index), index == self.deck_store.selected_index)

    # =========================================================================
    # Games
    # =========================================================================

    def start_game(self, request: CreateGameRequest) -> GameResponse:
        """
        Start a new game.

        Raises DeckValidationError for a bad deck index and
        UnknownCardDefinition for a deck naming a missing card.
        """
        config = None
        if request.deck_index is not None:
            config = self.deck_store.get_deck(request.deck_index)
        session = self.session_manager.create_session(deck_config=config, seed=request.seed)
        return self._game_response(session, session.last_result)

    def get_game(self, game_id: str) -> GameResponse | ErrorResponse:
        session = self.session_manager.get_session(game_id)
        if not session:
            return _game_not_found(game_id)
        return self._game_response(session)

    def play_card(self, game_id: str, request: PlayCardRequest) -> GameResponse | ErrorResponse:
        session = self.session_manager.get_session(game_id)
        if not session:
            return _game_not_found(game_id)
        return self._game_response(session, session.play_card(request.hand_index))

    def end_turn(self, game_id: str) -> GameResponse | ErrorResponse:
        session = self.session_manager.get_session(game_id)
        if not session:
            return _game_not_found(game_id)
        return self._game_response(session, session.end_turn())

    def select_evolution(self, game_id: str, request: EvolveRequest) -> GameResponse | ErrorResponse:
        session = self.session_manager.get_session(game_id)
        if not session:
            return _game_not_found(game_id)
        return self._game_response(session, session.select_evolution(request.definition_id))

    def end_game(self, game_id: str) -> EndGameResponse:
        """Return to the title: the round state is discarded."""
        success = self.session_manager.get_session(game_id) is not None
        self.session_manager.end_session(game_id, reason="user_ended")
        return EndGameResponse(success=success, game_id=game_id)

    def list_games(self) -> list[str]:
        return self.session_manager.list_active_sessions()

    # =========================================================================
    # Conversion helpers
    # =========================================================================

    def _game_response(self, session: Session, result: ActionResult | None = None) -> GameResponse:
        response = GameResponse(
            game_id=session.session_id,
            state=_state_info(session.snapshot()),
        )
        if result is None:
            return response
        if not result.success:
            response.accepted = False
            response.error = result.error
            response.error_code = result.error_code
            return response
        response.events = [event.value for event in result.events]
        response.state_changes = list(result.state_changes)
        response.effects_applied = [
            AppliedEffectInfo(
                kind=applied.kind.value,
                base_value=applied.base_value,
                applied_value=applied.applied_value,
                source_instance_id=applied.source_instance_id,
            )
            for applied in result.effects_applied
        ]
        return response

    def _definition_info(self, definition: CardDefinition) -> CardDefinitionInfo:
        max_level = self.catalog.max_level(definition)
        levels = []
        for level in range(max_level + 1):
            effects = resolve_effects(self.catalog, definition, level)
            levels.append(
                CardLevelInfo(
                    level=level,
                    text=render_card_text(effects),
                    effects=[_effect_info(e) for e in effects],
                )
            )
        return CardDefinitionInfo(
            id=definition.id,
            name=definition.name,
            category=definition.category.value,
            max_level=max_level,
            levels=levels,
        )


def _game_not_found(game_id: str) -> ErrorResponse:
    return ErrorResponse(
        error=f"Game {game_id} not found",
        error_code=ErrorCode.GAME_NOT_FOUND,
    )


def _effect_info(effect: ResolvedEffect) -> EffectInfo:
    return EffectInfo(
        kind=effect.kind.value,
        value=effect.value,
        description=render_description(effect),
    )


def _card_info(card: CardView) -> CardInfo:
    return CardInfo(
        instance_id=card.instance_id,
        definition_id=card.definition_id,
        name=card.name,
        category=card.category,
        level=card.level,
        max_level=card.max_level,
        text=card.text,
        effects=[_effect_info(e) for e in card.effects],
    )


def _deck_info(index: int, deck: DeckConfiguration, selected: bool) -> DeckInfo:
    return DeckInfo(
        index=index,
        name=deck.name,
        cards=[DeckCardInfo(id=entry.card_id, count=entry.count) for entry in deck.entries],
        total_cards=deck.total_cards,
        selected=selected,
    )


def _state_info(snapshot: RoundSnapshot) -> RoundStateInfo:
    return RoundStateInfo(
        game_id=snapshot.game_id,
        phase=PhaseName(snapshot.phase.value),
        stage=snapshot.stage,
        score=snapshot.score,
        target_score=snapshot.target_score,
        high_score=snapshot.high_score,
        hand=[_card_info(card) for card in snapshot.hand],
        draw_count=snapshot.draw_count,
        discard_count=snapshot.discard_count,
        deck_size=snapshot.deck_size,
        uses_this_turn=snapshot.uses_this_turn,
        max_uses_per_turn=snapshot.max_uses_per_turn,
        uses_remaining=snapshot.uses_remaining,
        pending_score_multiplier=snapshot.pending_score_multiplier,
        pending_cost_ignore_count=snapshot.pending_cost_ignore_count,
        turn_number=snapshot.turn_number,
        evolution_active=snapshot.evolution_active,
        evolution_remaining=snapshot.evolution_remaining,
        evolution_candidates=[
            EvolutionCandidateInfo.model_validate(candidate)
            for candidate in snapshot.evolution_candidates
        ],
    )

"""
FastAPI Application - REST API for a rendering client.

Endpoints:
    GET    /api/v1/health                  Health check
    GET    /api/v1/cards                   Card catalog with per-level text
    GET    /api/v1/decks                   Saved decks
    POST   /api/v1/decks                   Create a deck with the starter cards
    POST   /api/v1/decks/{index}/copy      Copy a deck
    DELETE /api/v1/decks/{index}           Delete a deck (one always remains)
    POST   /api/v1/decks/{index}/select    Select the deck new games use
    PUT    /api/v1/decks/{index}           Save a deck from the editor
    POST   /api/v1/games                   Start a new game
    GET    /api/v1/games                   List active games
    GET    /api/v1/games/{id}              Get the round state
    DELETE /api/v1/games/{id}              Return to title (discard the game)
    POST   /api/v1/games/{id}/play         Play a card from hand
    POST   /api/v1/games/{id}/end-turn     End the turn early
    POST   /api/v1/games/{id}/evolve       Pick an evolution candidate

Every game response carries the snapshot plus the events and effects
of the action that produced it. Rejected actions come back with
accepted=false and an error_code instead of an HTTP error.
"""

from typing import Union

from ..config import ALLOWED_ORIGINS
from .. import __version__


def create_app(service=None):
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    try:
        from fastapi import FastAPI
        from fastapi.middleware.cors import CORSMiddleware
        from fastapi.responses import JSONResponse
    except ImportError:
        raise ImportError(
            "FastAPI not installed. Install with: pip install fastapi uvicorn"
        )

    from ..catalog.card_catalog import UnknownCardDefinition
    from ..storage import DeckValidationError
    from .service import APIService
    from .schemas import (
        # Request models
        CreateGameRequest,
        CreateDeckRequest,
        PlayCardRequest,
        EvolveRequest,
        SaveDeckRequest,
        # Response models
        CardListResponse,
        DeckListResponse,
        DeckInfo,
        GameResponse,
        EndGameResponse,
        ErrorResponse,
        HealthResponse,
        # Enums
        ErrorCode,
    )

    app = FastAPI(
        title="Evodeck API",
        description="""
Single-player deck-building card game engine.

## Game Flow

1. `POST /games` deals the first hand of stage 1
2. `POST /games/{id}/play` plays cards until the score reaches the target
3. After a stage clear the phase is `evolution`: call `POST /games/{id}/evolve`
   with one of `state.evolution_candidates` until the next stage starts
4. The run ends only when no cards are left to play

## Error Codes

| Code | Description |
|------|-------------|
| `GAME_NOT_FOUND` | Game does not exist or has ended |
| `INVALID_DECK` | Deck edit or deck index rejected |
| `UNKNOWN_CARD` | Deck names a card the catalog does not have |
        """,
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_service = service or APIService()

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: list[str] | None = None,
    ) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(
                error=message,
                error_code=error_code,
                details=details,
            ).model_dump(mode="json"),
        )

    def game_or_error(response) -> Union[GameResponse, JSONResponse]:
        if isinstance(response, ErrorResponse):
            return make_error_response(response.error_code, response.error, status_code=404)
        return response

    # =========================================================================
    # Cards and decks
    # =========================================================================

    @app.get(
        "/api/v1/cards",
        response_model=CardListResponse,
        tags=["Cards"],
        summary="List the card catalog",
    )
    async def list_cards() -> CardListResponse:
        """Every card with its effects and text at each level."""
        return api_service.list_cards()

    @app.get(
        "/api/v1/decks",
        response_model=DeckListResponse,
        tags=["Decks"],
        summary="List saved decks",
    )
    async def list_decks() -> DeckListResponse:
        return api_service.list_decks()

    @app.post(
        "/api/v1/decks/{index}/select",
        response_model=DeckListResponse,
        responses={400: {"model": ErrorResponse}},
        tags=["Decks"],
        summary="Select the deck new games start with",
    )
    async def select_deck(index: int) -> Union[DeckListResponse, JSONResponse]:
        try:
            return api_service.select_deck(index)
        except DeckValidationError as e:
            return make_error_response(ErrorCode.INVALID_DECK, str(e), details=e.errors)

    @app.post(
        "/api/v1/decks",
        response_model=DeckInfo,
        tags=["Decks"],
        summary="Create a deck",
    )
    async def create_deck(body: CreateDeckRequest | None = None) -> DeckInfo:
        """Append a new deck holding the starter cards."""
        return api_service.create_deck(body or CreateDeckRequest())

    @app.post(
        "/api/v1/decks/{index}/copy",
        response_model=DeckInfo,
        responses={400: {"model": ErrorResponse}},
        tags=["Decks"],
        summary="Copy a deck",
    )
    async def copy_deck(index: int) -> Union[DeckInfo, JSONResponse]:
        try:
            return api_service.copy_deck(index)
        except DeckValidationError as e:
            return make_error_response(ErrorCode.INVALID_DECK, str(e), details=e.errors)

    @app.delete(
        "/api/v1/decks/{index}",
        response_model=DeckListResponse,
        responses={400: {"model": ErrorResponse, "description": "Bad index or last deck"}},
        tags=["Decks"],
        summary="Delete a deck",
    )
    async def delete_deck(index: int) -> Union[DeckListResponse, JSONResponse]:
        """At least one deck always remains."""
        try:
            return api_service.delete_deck(index)
        except DeckValidationError as e:
            return make_error_response(ErrorCode.INVALID_DECK, str(e), details=e.errors)

    @app.put(
        "/api/v1/decks/{index}",
        response_model=DeckInfo,
        responses={400: {"model": ErrorResponse, "description": "Deck breaks the deck rules"}},
        tags=["Decks"],
        summary="Save a deck",
    )
    async def save_deck(index: int, body: SaveDeckRequest) -> Union[DeckInfo, JSONResponse]:
        """
        Replace a deck's name and cards.

        The total must equal the deck size and every id must exist.
        """
        try:
            return api_service.save_deck(index, body)
        except DeckValidationError as e:
            return make_error_response(ErrorCode.INVALID_DECK, str(e), details=e.errors)

    # =========================================================================
    # Game endpoints
    # =========================================================================

    @app.post(
        "/api/v1/games",
        response_model=GameResponse,
        responses={400: {"model": ErrorResponse}},
        tags=["Games"],
        summary="Start a new game",
    )
    async def start_game(body: CreateGameRequest | None = None) -> Union[GameResponse, JSONResponse]:
        """Start stage 1 with the selected deck (or `deck_index`)."""
        try:
            return api_service.start_game(body or CreateGameRequest())
        except DeckValidationError as e:
            return make_error_response(ErrorCode.INVALID_DECK, str(e), details=e.errors)
        except UnknownCardDefinition as e:
            return make_error_response(ErrorCode.UNKNOWN_CARD, f"Unknown card: {e.card_id}")

    @app.get(
        "/api/v1/games",
        tags=["Games"],
        summary="List active games",
    )
    async def list_games() -> dict:
        games = api_service.list_games()
        return {"games": games, "count": len(games)}

    @app.get(
        "/api/v1/games/{game_id}",
        response_model=GameResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Games"],
        summary="Get the round state",
    )
    async def get_game(game_id: str) -> Union[GameResponse, JSONResponse]:
        return game_or_error(api_service.get_game(game_id))

    @app.delete(
        "/api/v1/games/{game_id}",
        response_model=EndGameResponse,
        tags=["Games"],
        summary="Return to the title screen",
    )
    async def end_game(game_id: str) -> EndGameResponse:
        """Discard the game's round state."""
        return api_service.end_game(game_id)

    @app.post(
        "/api/v1/games/{game_id}/play",
        response_model=GameResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Games"],
        summary="Play a card from hand",
    )
    async def play_card(game_id: str, body: PlayCardRequest) -> Union[GameResponse, JSONResponse]:
        """
        Play the card at `hand_index`.

        Blocked plays return `accepted=false` with an `error_code`.
        """
        return game_or_error(api_service.play_card(game_id, body))

    @app.post(
        "/api/v1/games/{game_id}/end-turn",
        response_model=GameResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Games"],
        summary="End the turn",
    )
    async def end_turn(game_id: str) -> Union[GameResponse, JSONResponse]:
        return game_or_error(api_service.end_turn(game_id))

    @app.post(
        "/api/v1/games/{game_id}/evolve",
        response_model=GameResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Games"],
        summary="Pick an evolution candidate",
    )
    async def evolve(game_id: str, body: EvolveRequest) -> Union[GameResponse, JSONResponse]:
        """Level up one instance of the chosen card."""
        return game_or_error(api_service.select_evolution(game_id, body))

    # =========================================================================
    # Health Check
    # =========================================================================

    @app.get(
        "/api/v1/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        """Health check endpoint for load balancers."""
        return HealthResponse(
            status="healthy",
            service="evodeck",
            version=__version__,
        )

    @app.get("/", tags=["System"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "Evodeck API",
            "version": __version__,
            "docs": "/api/docs",
            "health": "/api/v1/health",
        }

    return app


# For running directly: uvicorn evodeck.api.app:app
app = create_app()

"""
API Module - Renderer interface.

Exposes the engine via REST API. A client:
1. Lists cards and edits decks
2. Starts a game
3. Plays cards, ends turns and picks evolutions
4. Reads snapshots and events from each response

Round state lives in server memory for the life of a game.
"""

from .schemas import (
    # Requests
    CreateGameRequest,
    PlayCardRequest,
    EvolveRequest,
    SaveDeckRequest,
    CreateDeckRequest,
    # Responses
    CardListResponse,
    DeckListResponse,
    DeckInfo,
    GameResponse,
    EndGameResponse,
    ErrorResponse,
    HealthResponse,
    # Shared
    CardInfo,
    RoundStateInfo,
    ErrorCode,
)
from .service import APIService
from .app import create_app

__all__ = [
    # Requests
    "CreateGameRequest",
    "PlayCardRequest",
    "EvolveRequest",
    "SaveDeckRequest",
    "CreateDeckRequest",
    # Responses
    "CardListResponse",
    "DeckListResponse",
    "DeckInfo",
    "GameResponse",
    "EndGameResponse",
    "ErrorResponse",
    "HealthResponse",
    # Shared
    "CardInfo",
    "RoundStateInfo",
    "ErrorCode",
    # Service
    "APIService",
    "create_app",
]

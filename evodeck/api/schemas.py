"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the contract between a renderer and the engine.

Error Codes:
- GAME_NOT_FOUND: Game does not exist or has been ended
- INVALID_DECK: Deck edit or deck index rejected
- UNKNOWN_CARD: Deck names a card the catalog does not have

Rejected plays (wrong phase, bad index, no uses left) are not errors:
the game response comes back with accepted=false and an error_code.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class PhaseName(str, Enum):
    """Round phases."""
    AWAITING_PLAY = "awaiting_play"
    EVOLUTION = "evolution"
    STAGE_TRANSITION = "stage_transition"
    GAME_OVER = "game_over"


class ErrorCode(str, Enum):
    """Structured error codes."""
    GAME_NOT_FOUND = "GAME_NOT_FOUND"
    INVALID_DECK = "INVALID_DECK"
    UNKNOWN_CARD = "UNKNOWN_CARD"
    VALIDATION_ERROR = "VALIDATION_ERROR"


# =============================================================================
# Cards
# =============================================================================

class EffectInfo(BaseModel):
    """An effect resolved at a level."""
    kind: str = Field(description="Score, ScoreMultiplier, Draw, ...")
    value: float
    description: str


class CardInfo(BaseModel):
    """A card instance as shown in hand."""
    instance_id: str
    definition_id: str
    name: str
    category: str
    level: int = Field(description="0-based level")
    max_level: int
    text: str
    effects: list[EffectInfo] = Field(default_factory=list)


class CardLevelInfo(BaseModel):
    """What a card does at one level."""
    level: int
    text: str
    effects: list[EffectInfo] = Field(default_factory=list)


class CardDefinitionInfo(BaseModel):
    """A catalog entry."""
    id: str
    name: str
    category: str
    max_level: int
    levels: list[CardLevelInfo] = Field(default_factory=list)


class CardListResponse(BaseModel):
    """The card catalog."""
    cards: list[CardDefinitionInfo]
    count: int


# =============================================================================
# Decks
# =============================================================================

class DeckCardInfo(BaseModel):
    """One card line of a deck."""
    id: str
    count: int = Field(ge=0)

    model_config = {"from_attributes": True}


class DeckInfo(BaseModel):
    """A saved deck."""
    index: int
    name: str
    cards: list[DeckCardInfo]
    total_cards: int
    selected: bool = False


class DeckListResponse(BaseModel):
    """All saved decks."""
    decks: list[DeckInfo]
    selected_index: int


class CreateDeckRequest(BaseModel):
    """New deck, filled with the starter cards."""
    name: Optional[str] = Field(None, description="Defaults to \"New Deck N\"")


class SaveDeckRequest(BaseModel):
    """Deck editor save."""
    name: str = Field("", description="Blank names get a default")
    cards: list[DeckCardInfo] = Field(..., description="Zero counts are dropped")


# =============================================================================
# Games
# =============================================================================

class CreateGameRequest(BaseModel):
    """Start a new game."""
    deck_index: Optional[int] = Field(None, description="Deck to play; defaults to the selected deck")
    seed: Optional[int] = Field(None, description="Seed for reproducible games")


class PlayCardRequest(BaseModel):
    """Play the card at a hand position."""
    hand_index: int


class EvolveRequest(BaseModel):
    """Pick an evolution candidate."""
    definition_id: str


class EvolutionCandidateInfo(BaseModel):
    """An upgrade option."""
    definition_id: str
    name: str
    level: int
    max_level: int

    model_config = {"from_attributes": True}


class AppliedEffectInfo(BaseModel):
    """An effect as it was applied."""
    kind: str
    base_value: float
    applied_value: float
    source_instance_id: str


class RoundStateInfo(BaseModel):
    """Read-only view of a round."""
    game_id: str
    phase: PhaseName
    stage: int
    score: int
    target_score: int
    high_score: int
    hand: list[CardInfo]
    draw_count: int
    discard_count: int
    deck_size: int
    uses_this_turn: int
    max_uses_per_turn: int
    uses_remaining: int
    pending_score_multiplier: float
    pending_cost_ignore_count: int
    turn_number: int
    evolution_active: bool
    evolution_remaining: int
    evolution_candidates: list[EvolutionCandidateInfo] = Field(default_factory=list)


class GameResponse(BaseModel):
    """State of a game after an operation."""
    game_id: str
    accepted: bool = True
    error: Optional[str] = None
    error_code: Optional[str] = Field(None, description="Why an action was rejected")
    state: RoundStateInfo
    events: list[str] = Field(default_factory=list)
    state_changes: list[str] = Field(default_factory=list)
    effects_applied: list[AppliedEffectInfo] = Field(default_factory=list)


class EndGameResponse(BaseModel):
    """Response from ending a game."""
    success: bool
    game_id: str


# =============================================================================
# System
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[list[str]] = Field(None, description="Individual problems")
    api_version: str = Field("v1", description="API version")


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str

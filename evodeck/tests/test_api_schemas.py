"""
Tests for API Pydantic schemas.

Validates that:
- Request models reject malformed input
- Error codes serialize as plain strings
- Engine objects convert through from_attributes
"""

import pytest
from pydantic import ValidationError


class TestPydanticSchemas:
    """Tests for Pydantic schema validation."""

    def test_error_response_schema(self):
        """ErrorResponse carries a string error code and the API version."""
        from evodeck.api.schemas import ErrorCode, ErrorResponse

        response = ErrorResponse(
            error="Deck rejected",
            error_code=ErrorCode.INVALID_DECK,
            details=["Deck has 19 cards, expected exactly 20"],
        )

        data = response.model_dump(mode="json")
        assert data["error_code"] == "INVALID_DECK"
        assert data["api_version"] == "v1"
        assert data["details"] == ["Deck has 19 cards, expected exactly 20"]

    def test_error_codes_are_strings(self):
        """Error codes compare equal to their wire values."""
        from evodeck.api.schemas import ErrorCode

        assert ErrorCode.GAME_NOT_FOUND == "GAME_NOT_FOUND"
        assert {code.value for code in ErrorCode} == {
            "GAME_NOT_FOUND", "INVALID_DECK", "UNKNOWN_CARD", "VALIDATION_ERROR",
        }

    def test_deck_card_count_non_negative(self):
        """Negative card counts are rejected."""
        from evodeck.api.schemas import DeckCardInfo

        with pytest.raises(ValidationError):
            DeckCardInfo(id="score_1", count=-1)

    def test_save_deck_request_requires_cards(self):
        """A save request must list cards; the name may be blank."""
        from evodeck.api.schemas import SaveDeckRequest

        with pytest.raises(ValidationError):
            SaveDeckRequest(name="Empty")
        assert SaveDeckRequest(cards=[]).name == ""

    def test_create_game_request_defaults(self):
        """Deck index and seed are optional."""
        from evodeck.api.schemas import CreateGameRequest

        request = CreateGameRequest()
        assert request.deck_index is None
        assert request.seed is None

    def test_play_card_request_requires_index(self):
        """The hand index must be an integer."""
        from evodeck.api.schemas import PlayCardRequest

        with pytest.raises(ValidationError):
            PlayCardRequest(hand_index="left")

    def test_phase_name_matches_engine(self):
        """Every engine phase has an API name."""
        from evodeck.api.schemas import PhaseName
        from evodeck.engine_core.state import GamePhase

        assert {phase.value for phase in GamePhase} == {name.value for name in PhaseName}


class TestFromAttributes:
    """Tests for building schemas from engine objects."""

    def test_evolution_candidate(self):
        """Candidates convert directly."""
        from evodeck.api.schemas import EvolutionCandidateInfo
        from evodeck.engine_core.state import EvolutionCandidate

        candidate = EvolutionCandidate(definition_id="score_1", name="Basic Points", level=0, max_level=2)
        info = EvolutionCandidateInfo.model_validate(candidate)

        assert info.definition_id == "score_1"
        assert info.max_level == 2

    def test_deck_card(self):
        """Deck entries convert when the field names line up."""
        from evodeck.api.schemas import DeckCardInfo

        class Line:
            id = "combo_x2"
            count = 4

        info = DeckCardInfo.model_validate(Line())
        assert info.model_dump() == {"id": "combo_x2", "count": 4}


class TestGameResponse:
    """Tests for the game response envelope."""

    def test_defaults_to_accepted(self):
        """A response is accepted with empty event lists unless told otherwise."""
        from evodeck.api.schemas import GameResponse, PhaseName, RoundStateInfo

        state = RoundStateInfo(
            game_id="g1",
            phase=PhaseName.AWAITING_PLAY,
            stage=1,
            score=0,
            target_score=10,
            high_score=0,
            hand=[],
            draw_count=15,
            discard_count=0,
            deck_size=20,
            uses_this_turn=0,
            max_uses_per_turn=3,
            uses_remaining=3,
            pending_score_multiplier=1.0,
            pending_cost_ignore_count=0,
            turn_number=1,
            evolution_active=False,
            evolution_remaining=0,
        )
        response = GameResponse(game_id="g1", state=state)

        data = response.model_dump(mode="json")
        assert data["accepted"] is True
        assert data["error_code"] is None
        assert data["events"] == []
        assert data["state"]["phase"] == "awaiting_play"
        assert data["state"]["evolution_candidates"] == []

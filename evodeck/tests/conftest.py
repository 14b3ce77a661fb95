"""
Pytest fixtures for Evodeck tests.
"""

import random

import pytest

from ..catalog.card_catalog import CardCatalog, CardCategory, CardDefinition
from ..catalog.effect_dsl import cost_ignore, draw, multiplier, purge_self, score
from ..config import GameRules
from ..content import create_standard_catalog
from ..engine_core.reducer import Reducer
from ..engine_core.state import CardInstance, GamePhase, RoundState
from ..storage import DeckStore, HighScoreStore


# Small cards with one obvious effect each, for exact arithmetic
TEST_CARDS = (
    CardDefinition("mult3", "Triple", CardCategory.BUFF, (multiplier(3),)),
    CardDefinition("mult2", "Double", CardCategory.BUFF, (multiplier(2),)),
    CardDefinition("score5", "Five", CardCategory.SCORE, (score(5),)),
    CardDefinition("score8", "Eight", CardCategory.SCORE, (score(8),)),
    CardDefinition("ignore2", "Free Two", CardCategory.COST, (cost_ignore(2),)),
    CardDefinition("purge", "Burn", CardCategory.SCORE, (purge_self(5, 10, 15),)),
    CardDefinition("purge_zero", "Fizzle", CardCategory.SCORE, (purge_self(0, 5),)),
    CardDefinition("zero_score", "Late Bloomer", CardCategory.SCORE, (score(0, 4),)),
    CardDefinition("drawer", "Draw Two", CardCategory.DRAW, (draw(2),)),
    CardDefinition("capped", "Capped", CardCategory.SCORE, (score(1, 2),), max_level=1),
)


@pytest.fixture
def test_catalog() -> CardCatalog:
    """Catalog of single-effect test cards."""
    return CardCatalog(TEST_CARDS)


@pytest.fixture
def standard_catalog() -> CardCatalog:
    """The built-in card set."""
    return create_standard_catalog()


@pytest.fixture
def reducer(test_catalog) -> Reducer:
    """Reducer over the test catalog."""
    return Reducer(catalog=test_catalog)


@pytest.fixture
def standard_reducer(standard_catalog) -> Reducer:
    """Reducer over the built-in card set."""
    return Reducer(catalog=standard_catalog)


@pytest.fixture
def low_target_rules() -> GameRules:
    """Rules with a first target of 20."""
    return GameRules(initial_target_score=20)


@pytest.fixture
def make_state():
    """
    Factory for a round state with chosen piles.

    Usage:
        state = make_state(hand=["score5", "mult3"], draw=["score8"], levels={"purge": 1})

    Every card becomes a fresh instance in the master list; the state
    starts in AWAITING_PLAY with a seeded Random.
    """
    counter = {"n": 0}

    def _instances(ids, levels):
        cards = []
        for definition_id in ids:
            counter["n"] += 1
            cards.append(
                CardInstance(
                    instance_id=f"{definition_id}_{counter['n']}",
                    definition_id=definition_id,
                    level=levels.get(definition_id, 0),
                )
            )
        return cards

    def _make(hand=(), draw=(), discard=(), target_score=100, levels=None, seed=7):
        levels = levels or {}
        hand_cards = _instances(hand, levels)
        draw_cards = _instances(draw, levels)
        discard_cards = _instances(discard, levels)
        return RoundState(
            game_id="test_game",
            deck_name="Test Deck",
            master_card_list=hand_cards + draw_cards + discard_cards,
            draw_pile=draw_cards,
            discard_pile=discard_cards,
            hand=hand_cards,
            target_score=target_score,
            phase=GamePhase.AWAITING_PLAY,
            turn_number=1,
            random_seed=seed,
            rng=random.Random(seed),
        )

    return _make


@pytest.fixture
def deck_store(standard_catalog) -> DeckStore:
    """In-memory deck store with the default decks."""
    return DeckStore(catalog=standard_catalog)


@pytest.fixture
def high_score_store(tmp_path) -> HighScoreStore:
    """High score store backed by a temp file."""
    return HighScoreStore(path=tmp_path / "high_score.json")

"""
Tests for bot action selection and bot runs.

Tests:
- Bots only select legal actions
- Greedy heuristics
- Whole-game runs stay consistent
"""

import pytest

from ..bots import (
    BotDecision,
    BotPolicy,
    FirstLegalPolicy,
    GreedyPolicy,
    RandomPolicy,
    create_policy,
    run_bot_game,
)
from ..content import STARTER_DECK
from ..engine_core.action import Action, ActionType
from ..engine_core.action_generator import can_play_card, legal_actions
from ..engine_core.evolution import EvolutionEngine
from ..config import GameRules


class TestLegalActions:
    """Tests for the action generator."""

    def test_play_actions_per_hand_card(self, make_state):
        """One play per hand card plus end turn."""
        state = make_state(hand=["score5", "score8", "mult3"])
        actions = legal_actions(state)

        plays = [a for a in actions if a.action_type == ActionType.PLAY_CARD]
        assert [a.payload.hand_index for a in plays] == [0, 1, 2]
        assert actions[-1] == Action.end_turn()

    def test_no_plays_without_uses(self, make_state):
        """Only end turn is legal when no use or token is left."""
        state = make_state(hand=["score5"])
        state.uses_this_turn = 3

        assert not can_play_card(state)
        assert legal_actions(state) == [Action.end_turn()]

    def test_game_over_has_no_actions(self, reducer, make_state):
        """Nothing is legal after game over."""
        state = make_state(hand=["purge"], target_score=10)
        reducer.apply(state, Action.play_card(0))
        assert legal_actions(state) == []


class TestBotActionLegality:
    """Tests that bots only select legal actions."""

    @pytest.mark.parametrize("policy", [RandomPolicy(seed=42), FirstLegalPolicy(), GreedyPolicy()])
    def test_bot_selects_legal_action(self, policy, test_catalog, make_state):
        """Decisions come from the legal action list."""
        state = make_state(hand=["score5", "mult3", "ignore2"])
        legal = legal_actions(state)

        for _ in range(5):
            decision = policy.select_action(state, test_catalog, legal)
            assert decision.action in legal

    def test_empty_action_list(self, test_catalog, make_state):
        """Bots refuse to choose from nothing."""
        state = make_state()
        with pytest.raises(ValueError):
            RandomPolicy(seed=1).select_action(state, test_catalog, [])

    def test_policy_names(self):
        """Policies are created by name."""
        assert isinstance(create_policy("greedy"), GreedyPolicy)
        assert isinstance(create_policy("random", seed=3), RandomPolicy)
        assert isinstance(create_policy("first"), FirstLegalPolicy)
        assert create_policy("first").get_name() == "FirstLegalPolicy"
        with pytest.raises(ValueError):
            create_policy("clever")


class TestGreedyPolicy:
    """Tests for the greedy heuristics."""

    def test_multiplier_before_score(self, test_catalog, make_state):
        """A multiplier is played first when a scorer can use it."""
        state = make_state(hand=["score8", "mult3", "score5"])
        decision = GreedyPolicy().select_action(state, test_catalog, legal_actions(state))
        assert decision.action == Action.play_card(1)

    def test_highest_score_without_multiplier(self, test_catalog, make_state):
        """Without combos the biggest score wins."""
        state = make_state(hand=["score5", "score8"])
        decision = GreedyPolicy().select_action(state, test_catalog, legal_actions(state))
        assert decision.action == Action.play_card(1)

    def test_cost_ignore_before_score(self, test_catalog, make_state):
        """Free plays are set up before scoring."""
        state = make_state(hand=["score8", "ignore2"])
        decision = GreedyPolicy().select_action(state, test_catalog, legal_actions(state))
        assert decision.action == Action.play_card(1)

    def test_evolves_lowest_candidate(self, test_catalog, make_state):
        """The lowest-level candidate is picked."""
        state = make_state(draw=["score5", "score8"], levels={"score8": 1})
        EvolutionEngine(test_catalog, GameRules()).begin(state)

        decision = GreedyPolicy().select_action(state, test_catalog, legal_actions(state))
        assert decision.action == Action.select_evolution("score5")


class TestBotRuns:
    """Tests for whole-game bot runs."""

    @pytest.mark.parametrize("policy_name", ["greedy", "random", "first"])
    def test_run_completes(self, standard_reducer, policy_name):
        """Every policy runs to a bound without a rejected action."""
        summary = run_bot_game(
            standard_reducer,
            create_policy(policy_name, seed=9),
            STARTER_DECK,
            seed=9,
            max_stages=3,
            max_actions=400,
        )

        assert summary.actions_taken <= 400
        assert summary.stage_reached >= 1
        assert summary.high_score >= 0

    def test_greedy_clears_first_stage(self, standard_reducer):
        """The greedy bot beats the first target with the starter deck."""
        summary = run_bot_game(standard_reducer, GreedyPolicy(), STARTER_DECK, seed=1, max_stages=2)

        assert summary.stages_cleared >= 1
        assert summary.high_score >= 10
        assert summary.policy == "GreedyPolicy"

    def test_seeded_runs_repeat(self, standard_reducer):
        """Same seed, same policy, same outcome."""
        first = run_bot_game(standard_reducer, FirstLegalPolicy(), STARTER_DECK, seed=5, max_stages=2)
        second = run_bot_game(standard_reducer, FirstLegalPolicy(), STARTER_DECK, seed=5, max_stages=2)
        assert first == second

    def test_custom_policy(self, standard_reducer):
        """Any BotPolicy subclass can drive a run."""

        class EndTurnFirst(BotPolicy):
            def select_action(self, state, catalog, legal_actions):
                return BotDecision(action=legal_actions[-1])

        summary = run_bot_game(standard_reducer, EndTurnFirst(), STARTER_DECK, seed=2, max_actions=20)
        assert summary.actions_taken == 20
        assert summary.stage_reached == 1

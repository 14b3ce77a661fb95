"""
Evolution Engine - Post-stage-clear card upgrades.

After a stage is cleared the player picks definitions to upgrade. Each
pick raises exactly one instance (the lowest-level one) by one level;
other instances of the same definition are untouched.
"""

from __future__ import annotations
import logging

from ..catalog.card_catalog import CardCatalog
from ..config import GameRules
from .state import CardInstance, EvolutionCandidate, GamePhase, RoundState

logger = logging.getLogger(__name__)


class EvolutionEngine:
    """
    Candidate selection and level-up for the evolution phase.

    Usage:
        engine = EvolutionEngine(catalog, rules)
        if engine.begin(state):
            ...  # player picks from state.evolution.candidates
            engine.evolve(state, candidate.definition_id)
    """

    def __init__(self, catalog: CardCatalog, rules: GameRules):
        self.catalog = catalog
        self.rules = rules

    def is_upgradable(self, instance: CardInstance) -> bool:
        definition = self.catalog.definition(instance.definition_id)
        return instance.level < self.catalog.max_level(definition)

    def eligible_definition_ids(self, state: RoundState) -> list[str]:
        """Definition ids with at least one instance below max level, in master list order."""
        eligible: list[str] = []
        for instance in state.master_card_list:
            if instance.definition_id in eligible:
                continue
            if self.is_upgradable(instance):
                eligible.append(instance.definition_id)
        return eligible

    def build_candidates(self, state: RoundState) -> list[EvolutionCandidate]:
        """
        One candidate per eligible definition, shuffled, first N kept.

        A candidate carries the lowest current level among its
        definition's instances.
        """
        candidates = []
        for definition_id in self.eligible_definition_ids(state):
            definition = self.catalog.definition(definition_id)
            lowest = min(instance.level for instance in state.instances_of(definition_id))
            candidates.append(
                EvolutionCandidate(
                    definition_id=definition_id,
                    name=definition.name,
                    level=lowest,
                    max_level=self.catalog.max_level(definition),
                )
            )
        state.rng.shuffle(candidates)
        return candidates[: self.rules.evolution_choices]

    def begin(self, state: RoundState) -> bool:
        """
        Enter the evolution phase.

        Returns False (and leaves the phase inactive) when every card is
        already at max level.
        """
        candidates = self.build_candidates(state)
        if not candidates:
            state.evolution.clear()
            logger.info("Stage %d cleared with every card at max level", state.stage)
            return False

        state.evolution.active = True
        state.evolution.remaining_selections = self.rules.evolution_selections
        state.evolution.candidates = candidates
        state.phase = GamePhase.EVOLUTION
        logger.info(
            "Evolution phase: %d selection(s) from %s",
            state.evolution.remaining_selections,
            [c.definition_id for c in candidates],
        )
        return True

    def pick_instance(self, state: RoundState, definition_id: str) -> CardInstance | None:
        """Lowest-level upgradable instance of a definition (first one on ties)."""
        target: CardInstance | None = None
        for instance in state.instances_of(definition_id):
            if not self.is_upgradable(instance):
                continue
            if target is None or instance.level < target.level:
                target = instance
        return target

    def evolve(self, state: RoundState, definition_id: str) -> CardInstance | None:
        """Raise one instance of a definition by one level. Returns it, or None."""
        target = self.pick_instance(state, definition_id)
        if target is None:
            return None
        target.level += 1
        logger.info(
            "Evolved %s (%s) to level %d",
            definition_id, target.instance_id, target.level,
        )
        return target

    def refresh(self, state: RoundState) -> bool:
        """Regenerate candidates mid-phase. False when nothing is upgradable anymore."""
        candidates = self.build_candidates(state)
        state.evolution.candidates = candidates
        return bool(candidates)

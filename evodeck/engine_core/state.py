"""
Round State - The mutable state of one game session.

Design principles:
- One owner: the reducer (through a session) is the only writer
- Piles hold references to the instances in master_card_list, never copies
- draw_pile + discard_pile + hand (+ the card in resolution) always
  partition master_card_list
- Randomness goes through the state's own seeded Random
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any
from enum import Enum
import random


class GamePhase(Enum):
    """High-level phases of a run."""
    AWAITING_PLAY = "awaiting_play"
    EVOLUTION = "evolution"
    STAGE_TRANSITION = "stage_transition"
    GAME_OVER = "game_over"


@dataclass
class CardInstance:
    """
    A card in the run.

    Note: This is a runtime instance, not the definition.
    The definition lives in the CardCatalog. Instances of the same
    definition level up independently.
    """
    instance_id: str
    definition_id: str  # References CardDefinition.id in the catalog
    level: int = 0

    def __hash__(self):
        return hash(self.instance_id)

    def __eq__(self, other):
        if not isinstance(other, CardInstance):
            return False
        return self.instance_id == other.instance_id


@dataclass(frozen=True)
class EvolutionCandidate:
    """
    One upgrade option offered after a stage clear.

    Stands for a definition, not an instance; level is the lowest
    current level among that definition's instances.
    """
    definition_id: str
    name: str
    level: int
    max_level: int


@dataclass
class EvolutionPhase:
    """Post-stage-clear upgrade selection."""
    active: bool = False
    remaining_selections: int = 0
    candidates: list[EvolutionCandidate] = field(default_factory=list)

    def candidate_for(self, definition_id: str) -> EvolutionCandidate | None:
        for candidate in self.candidates:
            if candidate.definition_id == definition_id:
                return candidate
        return None

    def clear(self):
        self.active = False
        self.remaining_selections = 0
        self.candidates = []


@dataclass
class RoundState:
    """
    Complete state of a run at a point in time.

    This is the canonical state that the reducer operates on.
    """
    game_id: str
    deck_name: str = ""

    # Cards
    master_card_list: list[CardInstance] = field(default_factory=list)
    draw_pile: list[CardInstance] = field(default_factory=list)
    discard_pile: list[CardInstance] = field(default_factory=list)
    hand: list[CardInstance] = field(default_factory=list)
    in_resolution: CardInstance | None = None
    purged: list[CardInstance] = field(default_factory=list)

    # Scoring
    score: int = 0
    target_score: int = 0
    stage: int = 1
    high_score: int = 0

    # Turn accounting
    turn_number: int = 0
    uses_this_turn: int = 0
    max_uses_per_turn: int = 3
    pending_score_multiplier: float = 1
    pending_cost_ignore_count: int = 0

    # Phases
    phase: GamePhase = GamePhase.STAGE_TRANSITION
    evolution: EvolutionPhase = field(default_factory=EvolutionPhase)

    # Random seed for determinism
    random_seed: int | None = None
    rng: random.Random = field(default_factory=random.Random)

    # History (for replay, logging)
    action_history: list[Any] = field(default_factory=list)

    @property
    def uses_remaining(self) -> int:
        return max(self.max_uses_per_turn - self.uses_this_turn, 0)

    @property
    def is_over(self) -> bool:
        return self.phase == GamePhase.GAME_OVER

    def pile_count(self) -> int:
        """Cards across draw, discard, hand and resolution."""
        count = len(self.draw_pile) + len(self.discard_pile) + len(self.hand)
        if self.in_resolution is not None:
            count += 1
        return count

    def all_pile_cards(self) -> list[CardInstance]:
        cards = self.draw_pile + self.discard_pile + self.hand
        if self.in_resolution is not None:
            cards.append(self.in_resolution)
        return cards

    def instances_of(self, definition_id: str) -> list[CardInstance]:
        """All live instances of a definition, in master list order."""
        return [c for c in self.master_card_list if c.definition_id == definition_id]

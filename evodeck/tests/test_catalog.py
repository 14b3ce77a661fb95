"""
Tests for the card catalog, effect DSL and validation.

Tests:
- Definition lookup and level bounds
- Effect tag parsing
- Card text rendering
- Catalog and deck validation
"""

import pytest

from ..catalog import (
    CardCatalog,
    CardCategory,
    CardDefinition,
    CatalogValidationError,
    DeckConfiguration,
    EffectKind,
    EffectSpec,
    UnknownCardDefinition,
    parse_effect_kind,
    render_card_text,
    validate_catalog,
    validate_deck_configuration,
)
from ..catalog.effect_dsl import score, shuffle_discard_into_deck
from ..config import GameRules
from ..content import ALL_CARDS, STARTER_DECK, create_standard_catalog, default_decks
from ..engine_core.effect_resolver import resolve_effects


class TestCardCatalog:
    """Tests for definition lookup."""

    def test_lookup_by_id(self, standard_catalog):
        """Definitions are found by id."""
        definition = standard_catalog.definition("score_1")
        assert definition.name == "Basic Points"
        assert definition.category == CardCategory.SCORE

    def test_unknown_id_raises(self, standard_catalog):
        """Unknown ids raise instead of returning a placeholder."""
        with pytest.raises(UnknownCardDefinition) as exc_info:
            standard_catalog.definition("nope")
        assert exc_info.value.card_id == "nope"
        assert standard_catalog.get("nope") is None

    def test_default_max_level(self, standard_catalog):
        """Cards without an explicit max level get the default of 2."""
        assert standard_catalog.max_level(standard_catalog.definition("score_1")) == 2
        assert standard_catalog.max_level(standard_catalog.definition("jackpot")) == 3

    def test_default_max_level_from_rules(self):
        """The rules' default max level applies to cards that do not set one."""
        catalog = create_standard_catalog(GameRules(default_max_level=1))
        basic = catalog.definition("score_1")

        assert catalog.max_level(basic) == 1
        assert catalog.clamp_level(basic, 5) == 1
        assert catalog.max_level(catalog.definition("jackpot")) == 3

    def test_clamp_level(self, test_catalog):
        """Levels are clamped into [0, max_level]."""
        capped = test_catalog.definition("capped")
        assert test_catalog.clamp_level(capped, -3) == 0
        assert test_catalog.clamp_level(capped, 1) == 1
        assert test_catalog.clamp_level(capped, 9) == 1

    def test_value_table_clamps_to_last_entry(self):
        """Lookups past the table reuse the last value."""
        effect = EffectSpec(EffectKind.SCORE, (2, 4))
        assert effect.value_at(0) == 2
        assert effect.value_at(5) == 4

    def test_membership_and_iteration(self, standard_catalog):
        """Catalog supports `in`, len() and iteration."""
        assert "combo_x2" in standard_catalog
        assert len(standard_catalog) == len(ALL_CARDS)
        assert [d.id for d in standard_catalog] == standard_catalog.ids()


class TestEffectKinds:
    """Tests for effect tag parsing."""

    def test_parse_value_and_name(self):
        """Both the tag and the enum name are accepted."""
        assert parse_effect_kind("CostIgnore") == EffectKind.COST_IGNORE
        assert parse_effect_kind("purge_self") == EffectKind.PURGE_SELF

    def test_unknown_tag_fails(self):
        """A typo in card data fails loudly."""
        with pytest.raises(ValueError):
            parse_effect_kind("ScoreTwice")

    def test_shuffle_defaults_to_one_value(self):
        """Shuffle effects have no magnitude to speak of."""
        assert shuffle_discard_into_deck().values_by_level == (1,)


class TestCardText:
    """Tests for rendered card text."""

    def test_text_per_level(self, standard_catalog):
        """Text reflects the resolved values of the level."""
        definition = standard_catalog.definition("score_1")
        assert render_card_text(resolve_effects(standard_catalog, definition, 0)) == "Gain 2 points"
        assert render_card_text(resolve_effects(standard_catalog, definition, 2)) == "Gain 6 points"

    def test_multi_effect_text_is_joined(self, standard_catalog):
        """Effects are listed in order."""
        definition = standard_catalog.definition("score_2")
        text = render_card_text(resolve_effects(standard_catalog, definition, 1))
        assert text == "Gain 6 points / Draw 1 card(s)"

    def test_suppressed_effects_are_not_rendered(self, standard_catalog):
        """A zero draw does not show up in the text."""
        definition = standard_catalog.definition("score_2")
        assert "Draw" not in render_card_text(resolve_effects(standard_catalog, definition, 0))

    def test_no_effects(self):
        """An empty resolution renders a placeholder."""
        assert render_card_text([]) == "No effect"


class TestCatalogValidation:
    """Tests for catalog validation."""

    def test_standard_catalog_is_valid(self, standard_catalog):
        """Built-in content validates."""
        result = validate_catalog(standard_catalog)
        assert result.valid, result.errors

    def test_duplicate_ids(self):
        """Duplicate ids are errors."""
        card = CardDefinition("dup", "Dup", CardCategory.SCORE, (score(1),))
        result = validate_catalog(CardCatalog([card, card]))
        assert not result.valid
        assert any("Duplicate" in e for e in result.errors)

    def test_negative_values(self):
        """Negative magnitudes are errors."""
        card = CardDefinition("neg", "Neg", CardCategory.SCORE, (score(-1),))
        result = validate_catalog(CardCatalog([card]))
        assert not result.valid

    def test_base_level_out_of_range(self):
        """Starting above max level is an error."""
        card = CardDefinition("hi", "High", CardCategory.SCORE, (score(1, 2, 3),), base_level=5)
        assert not validate_catalog(CardCatalog([card])).valid

    def test_short_table_is_a_warning(self):
        """Short value tables are allowed but flagged."""
        card = CardDefinition("short", "Short", CardCategory.SCORE, (score(1),))
        result = validate_catalog(CardCatalog([card]))
        assert result.valid
        assert result.warnings

    def test_raise_on_error(self):
        """raise_on_error turns errors into an exception."""
        card = CardDefinition("", "", CardCategory.SCORE, ())
        with pytest.raises(CatalogValidationError):
            validate_catalog(CardCatalog([card]), raise_on_error=True)


class TestDeckValidation:
    """Tests for deck configuration validation."""

    def test_starter_deck_is_valid(self, standard_catalog):
        """The starter deck has exactly 20 known cards."""
        assert STARTER_DECK.total_cards == 20
        result = validate_deck_configuration(STARTER_DECK, standard_catalog, expected_size=20)
        assert result.valid, result.errors

    def test_default_decks(self):
        """A fresh install gets two copies of the starter deck."""
        decks = default_decks()
        assert len(decks) == 2
        assert all(deck == STARTER_DECK for deck in decks)

    def test_unknown_card(self, standard_catalog):
        """Unknown ids are errors."""
        deck = DeckConfiguration.from_counts("Bad", [("score_1", 19), ("ghost", 1)])
        result = validate_deck_configuration(deck, standard_catalog, expected_size=20)
        assert not result.valid
        assert any("ghost" in e for e in result.errors)

    def test_size_only_checked_when_asked(self, standard_catalog):
        """The engine plays any size; the editor enforces 20."""
        deck = DeckConfiguration.from_counts("Small", [("score_1", 3)])
        assert validate_deck_configuration(deck, standard_catalog).valid
        assert not validate_deck_configuration(deck, standard_catalog, expected_size=20).valid

    def test_round_trip_dict_shape(self):
        """Stored shape uses id/count records."""
        data = STARTER_DECK.to_dict()
        assert data["name"] == "Beginner Deck"
        assert data["cards"][0] == {"id": "score_1", "count": 8}
        assert DeckConfiguration.from_dict(data) == STARTER_DECK

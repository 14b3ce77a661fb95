"""
Tests for the persistence collaborators.

Tests:
- Deck store fallback, editing rules and file format
- High score store fallback
"""

import json

import pytest

from ..content import STARTER_DECK
from ..storage import DeckStore, DeckValidationError, HighScoreStore, open_stores


VALID_CARDS = [("score_1", 10), ("score_2", 6), ("combo_x2", 4)]


class TestDeckStoreLoading:
    """Tests for loading decks."""

    def test_missing_file_uses_defaults(self, tmp_path, standard_catalog):
        """A fresh install gets two starter decks, written to disk."""
        path = tmp_path / "decks.json"
        store = DeckStore(path=path, catalog=standard_catalog)

        assert len(store.list_decks()) == 2
        assert store.get_selected_deck_configuration() == STARTER_DECK
        assert path.exists()

    def test_corrupt_file_uses_defaults(self, tmp_path, standard_catalog):
        """Unreadable data falls back instead of failing."""
        path = tmp_path / "decks.json"
        path.write_text("{not json", encoding="utf-8")

        store = DeckStore(path=path, catalog=standard_catalog)
        assert len(store.list_decks()) == 2

    def test_invalid_utf8_uses_defaults(self, tmp_path, standard_catalog):
        """Bytes that are not UTF-8 count as corrupt data."""
        path = tmp_path / "decks.json"
        path.write_bytes(b"\xff\xfe\x80 not utf8")

        store = DeckStore(path=path, catalog=standard_catalog)
        assert store.get_selected_deck_configuration() == STARTER_DECK

    def test_corrupt_file_is_moved_aside(self, tmp_path, standard_catalog):
        """The unreadable file is kept next to the fresh defaults."""
        path = tmp_path / "decks.json"
        path.write_text("{not json", encoding="utf-8")

        DeckStore(path=path, catalog=standard_catalog)

        assert (tmp_path / "decks.json.corrupt").read_text(encoding="utf-8") == "{not json"
        assert len(json.loads(path.read_text(encoding="utf-8"))) == 2

    def test_wrong_shape_uses_defaults(self, tmp_path, standard_catalog):
        """Records that do not match the schema are ignored."""
        path = tmp_path / "decks.json"
        path.write_text(json.dumps([{"name": "x", "cards": [{"id": "score_1", "count": -1}]}]))

        store = DeckStore(path=path, catalog=standard_catalog)
        assert store.list_decks()[0] == STARTER_DECK

    def test_reads_saved_decks(self, tmp_path, standard_catalog):
        """Stored decks are loaded in order."""
        path = tmp_path / "decks.json"
        path.write_text(json.dumps([
            {"name": "Mine", "cards": [{"id": "score_1", "count": 20}]},
        ]))

        store = DeckStore(path=path, catalog=standard_catalog)
        decks = store.list_decks()
        assert len(decks) == 1
        assert decks[0].name == "Mine"
        assert decks[0].count_of("score_1") == 20

    def test_in_memory_store(self, deck_store):
        """No path means nothing touches the disk."""
        assert deck_store.path is None
        assert len(deck_store.list_decks()) == 2


class TestDeckStoreEditing:
    """Tests for deck editing rules."""

    def test_save_valid_deck(self, tmp_path, standard_catalog):
        """A 20-card deck of known cards saves and persists."""
        path = tmp_path / "decks.json"
        store = DeckStore(path=path, catalog=standard_catalog)

        deck = store.save_deck(1, "Aggro", VALID_CARDS)

        assert deck.total_cards == 20
        assert DeckStore(path=path, catalog=standard_catalog).list_decks()[1].name == "Aggro"

    def test_wrong_size_rejected(self, deck_store):
        """Totals other than 20 are rejected."""
        with pytest.raises(DeckValidationError) as exc_info:
            deck_store.save_deck(0, "Short", [("score_1", 19)])
        assert any("expected exactly 20" in e for e in exc_info.value.errors)
        assert deck_store.get_deck(0) == STARTER_DECK

    def test_unknown_card_rejected(self, deck_store):
        """Unknown ids are rejected."""
        with pytest.raises(DeckValidationError):
            deck_store.save_deck(0, "Ghost", [("score_1", 19), ("ghost", 1)])

    def test_zero_counts_dropped(self, deck_store):
        """Zero-count lines are not stored."""
        deck = deck_store.save_deck(0, "Trim", VALID_CARDS + [("combo_ignore", 0)])
        assert deck.count_of("combo_ignore") == 0
        assert len(deck.entries) == 3

    def test_blank_name_gets_default(self, deck_store):
        """Blank names are replaced."""
        deck = deck_store.save_deck(1, "   ", VALID_CARDS)
        assert deck.name == "Untitled Deck 2"

    def test_create_and_copy(self, deck_store):
        """New decks start from the starter list; copies keep contents."""
        deck_store.save_deck(0, "Aggro", VALID_CARDS)

        created = deck_store.create_deck()
        copied = deck_store.copy_deck(0)

        assert deck_store.get_deck(created).entries == STARTER_DECK.entries
        assert deck_store.get_deck(copied).name == "Aggro (copy)"
        assert deck_store.get_deck(copied).entries == deck_store.get_deck(0).entries

    def test_last_deck_cannot_be_deleted(self, deck_store):
        """At least one deck always remains."""
        deck_store.delete_deck(1)
        with pytest.raises(DeckValidationError):
            deck_store.delete_deck(0)
        assert len(deck_store.list_decks()) == 1

    def test_delete_moves_selection(self, deck_store):
        """Deleting before the selected deck keeps the same deck selected."""
        deck_store.create_deck("Third")
        deck_store.select(2)

        deck_store.delete_deck(0)

        assert deck_store.selected_index == 1
        assert deck_store.get_selected_deck_configuration().name == "Third"

    def test_select_bad_index(self, deck_store):
        """Selecting a missing deck is rejected."""
        with pytest.raises(DeckValidationError):
            deck_store.select(9)


class TestHighScoreStore:
    """Tests for the high score store."""

    def test_missing_file_is_zero(self, high_score_store):
        """No file reads as 0."""
        assert high_score_store.load() == 0

    def test_save_and_load(self, tmp_path):
        """Saved scores survive a new store."""
        path = tmp_path / "high_score.json"
        HighScoreStore(path=path).save(123)
        assert HighScoreStore(path=path).load() == 123

    @pytest.mark.parametrize("content", ["", "garbage", "-5", "[1]"])
    def test_corrupt_file_is_zero(self, tmp_path, content):
        """Corrupt or negative data reads as 0."""
        path = tmp_path / "high_score.json"
        path.write_text(content, encoding="utf-8")
        assert HighScoreStore(path=path).load() == 0

    def test_invalid_utf8_is_zero(self, tmp_path):
        """Bytes that are not UTF-8 read as 0."""
        path = tmp_path / "high_score.json"
        path.write_bytes(b"\xff\x80")
        assert HighScoreStore(path=path).load() == 0

    def test_in_memory(self):
        """Without a path the value lives in memory."""
        store = HighScoreStore()
        store.save(7)
        assert store.load() == 7


class TestOpenStores:
    """Tests for the data directory helper."""

    def test_stores_under_data_dir(self, tmp_path):
        """Both stores live in the data directory."""
        deck_store, high_score_store = open_stores(tmp_path)
        assert deck_store.path == tmp_path / "decks.json"
        assert high_score_store.path == tmp_path / "high_score.json"

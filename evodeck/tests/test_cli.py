"""
Tests for the command-line interface.
"""

import json

import pytest

from ..cli import main


class TestCLI:
    """Tests for CLI commands."""

    def test_no_command_prints_help(self, capsys):
        """Running without a command shows usage and exits non-zero."""
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 1
        assert "usage" in capsys.readouterr().out

    def test_cards(self, capsys):
        """Every card is listed with its text per level."""
        main(["cards"])
        out = capsys.readouterr().out

        assert "Basic Points [score_1]" in out
        assert "Lv.1: Gain 2 points" in out
        assert "Lv.3: Gain 6 points" in out

    def test_cards_single_level(self, capsys):
        """--level limits the output to one level, clamped per card."""
        main(["cards", "--level", "9"])
        out = capsys.readouterr().out

        assert "Lv.3: Gain 6 points" in out
        assert "Lv.1: Gain 2 points" not in out

    def test_simulate(self, capsys):
        """Bot games run and are summarized."""
        main(["simulate", "--games", "2", "--seed", "1", "--max-stages", "2"])
        out = capsys.readouterr().out

        assert "Game 1:" in out
        assert "Game 2:" in out
        assert "Policy: GreedyPolicy" in out

    def test_validate_defaults(self, tmp_path, capsys):
        """A fresh data directory validates cleanly."""
        main(["validate", "--data-dir", str(tmp_path)])
        out = capsys.readouterr().out

        assert "Catalog: OK" in out
        assert "Deck 0 (Beginner Deck): OK" in out

    def test_validate_bad_deck(self, tmp_path, capsys):
        """An invalid saved deck fails validation."""
        (tmp_path / "decks.json").write_text(json.dumps([
            {"name": "Short", "cards": [{"id": "score_1", "count": 5}]},
        ]))

        with pytest.raises(SystemExit) as exc_info:
            main(["validate", "--data-dir", str(tmp_path)])

        assert exc_info.value.code == 1
        assert "Deck 0 (Short): INVALID" in capsys.readouterr().out

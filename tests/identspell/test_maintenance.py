"""
Tests for Word List Maintenance
===============================
"""

import pytest

from identspell.cancellation import CancellationToken
from identspell.config import IdentSpellConfig
from identspell.config_logging import ConfigurationError, OperationCanceledError
from identspell.data import SpellingData
from identspell.fixlist import FixList
from identspell.maintenance import (
    MaintenancePaths,
    process_word_lists,
    save_new_values,
    validate_fix_list,
)
from identspell.wordlist import WordList


@pytest.fixture
def paths(tmp_path) -> MaintenancePaths:
    """Baseline, pending fix list and pending word list with some content."""
    (tmp_path / "fixes.fixlist").write_text("teh=the\n", encoding="utf-8")
    (tmp_path / "fixes.tmp").write_text("adn=and\n", encoding="utf-8")
    (tmp_path / "custom.tmp").write_text("oldword\n", encoding="utf-8")
    return MaintenancePaths(
        tmp_path / "fixes.fixlist",
        tmp_path / "fixes.tmp",
        tmp_path / "custom.tmp",
    )


@pytest.fixture
def spelling_data() -> SpellingData:
    return SpellingData(
        WordList(["hello", "receiving", "word", "and", "the"]),
        FixList.load_text("teh=the\n"),
    )


class CountdownToken(CancellationToken):
    """Reports cancellation after a fixed number of polls."""

    def __init__(self, polls: int):
        super().__init__()
        self.polls = polls

    @property
    def is_cancellation_requested(self) -> bool:
        if self.polls <= 0:
            return True
        self.polls -= 1
        return False


NEW_VALUES = ["ehllo", "wrod", "recieveing", "zzqx", "hello", "teh"]


class TestSaveNewValues:
    """Tests for save_new_values."""

    def test_writes_pending_files(self, spelling_data, paths):
        """Fixes go to the pending fix list, the rest to the pending word list."""
        result = save_new_values(spelling_data, NEW_VALUES, paths)

        assert paths.new_fix_list_path.read_text(encoding="utf-8") == (
            "adn=and\nehllo=hello\nrecieveing=receiving\nwrod=word\n")
        assert paths.new_word_list_path.read_text(encoding="utf-8") == "oldword\nzzqx\n"
        assert result.fix_list.keys() == ["adn", "ehllo", "recieveing", "wrod"]
        assert sorted(result.unresolved.values) == ["oldword", "zzqx"]

    def test_baseline_fixes_are_not_repeated(self, spelling_data, paths):
        """Fixes already in the baseline file are dropped from the pending file."""
        save_new_values(spelling_data, [], paths)

        assert "teh=" not in paths.new_fix_list_path.read_text(encoding="utf-8")

    def test_missing_pending_files(self, spelling_data, tmp_path):
        """A first run creates both pending files."""
        paths = MaintenancePaths(
            tmp_path / "fixes.fixlist",
            tmp_path / "fixes.tmp",
            tmp_path / "custom.tmp",
        )

        save_new_values(spelling_data, ["wrod", "zzqx"], paths)

        assert paths.new_fix_list_path.read_text(encoding="utf-8") == "teh=the\nwrod=word\n"
        assert paths.new_word_list_path.read_text(encoding="utf-8") == "zzqx\n"

    def test_canceled_run_writes_nothing(self, spelling_data, paths):
        token = CancellationToken()
        token.cancel()

        with pytest.raises(OperationCanceledError):
            save_new_values(spelling_data, NEW_VALUES, paths, token)

        assert paths.new_fix_list_path.read_text(encoding="utf-8") == "adn=and\n"
        assert paths.new_word_list_path.read_text(encoding="utf-8") == "oldword\n"

    def test_canceled_fuzzy_search_writes_nothing(self, spelling_data, tmp_path):
        """Matches from an interrupted search are not saved."""
        paths = MaintenancePaths(
            tmp_path / "fixes.fixlist",
            tmp_path / "fixes.tmp",
            tmp_path / "custom.tmp",
        )
        token = CountdownToken(3)

        with pytest.raises(OperationCanceledError):
            save_new_values(spelling_data, ["recieveing"], paths, token)

        assert not paths.new_fix_list_path.exists()
        assert not paths.new_word_list_path.exists()


class TestValidation:
    """Tests for fix list checks and word list processing."""

    def test_validate_fix_list(self):
        fix_list = FixList.load_text("teh=the\nhello=hallo\nadn=and one\n")
        word_list = WordList(["the", "hello", "and"])

        problems = validate_fix_list(fix_list, word_list)

        assert problems == [
            "'hello' is a dictionary word but has fixes",
            "fix 'hallo' of 'hello': 'hallo' is not a dictionary word",
            "fix 'and one' of 'adn': 'one' is not a dictionary word",
        ]

    def test_process_word_lists(self, tmp_path):
        """Word lists are normalized and the fix list re-saved."""
        words = tmp_path / "identspell.spelling.wordlist"
        words.write_text("The\nalpha\nTHE\n", encoding="utf-8")
        fixes = tmp_path / "identspell.spelling.fixlist"
        fixes.write_text("Teh=The\nteh=the\n", encoding="utf-8")

        problems = process_word_lists([words], fixes)

        assert problems == []
        assert words.read_text(encoding="utf-8") == "alpha\nthe\n"
        assert fixes.read_text(encoding="utf-8") == "teh=the\n"


class TestMaintenancePaths:
    """Tests for MaintenancePaths.from_config."""

    def test_missing_paths(self):
        with pytest.raises(ConfigurationError) as exc_info:
            MaintenancePaths.from_config(IdentSpellConfig())

        assert exc_info.value.details['missing'] == [
            'fix_list_path', 'new_fix_list_path', 'new_word_list_path']

    def test_configured_paths(self, tmp_path):
        config = IdentSpellConfig()
        config.data.fix_list_path = str(tmp_path / "a.fixlist")
        config.data.new_fix_list_path = str(tmp_path / "b.tmp")
        config.data.new_word_list_path = str(tmp_path / "c.tmp")

        paths = MaintenancePaths.from_config(config)

        assert paths.new_word_list_path == tmp_path / "c.tmp"

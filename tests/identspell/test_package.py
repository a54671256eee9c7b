"""
Tests for the package accessors.
"""

from identspell import get_analyzer, load_spelling_data
from identspell.config import IdentSpellConfig
from identspell.data import SpellingData
from identspell.wordlist import WordList


class TestAccessors:
    """Tests for load_spelling_data and get_analyzer."""

    def test_load_spelling_data_is_not_cached(self, tmp_path):
        (tmp_path / "identspell.spelling.wordlist").write_text("hello\n", encoding="utf-8")
        config = IdentSpellConfig()
        config.data.data_directory = str(tmp_path)

        first = load_spelling_data(config)
        second = load_spelling_data(config)

        assert first is not second
        assert first.word_list.contains("hello")

    def test_no_data_directory(self):
        assert len(load_spelling_data(IdentSpellConfig()).word_list) == 0

    def test_analyzer_uses_given_data(self):
        data = SpellingData(WordList(["hello"]))
        config = IdentSpellConfig()
        config.analysis.include_local = False

        analyzer = get_analyzer(data, config)

        assert analyzer.spelling_data is data
        assert analyzer.options.include_local is False

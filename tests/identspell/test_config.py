"""
Tests for identspell Configuration
==================================
"""

import json

import pytest

from identspell import config
from identspell.analysis import SpellingAnalysisOptions
from identspell.config import IdentSpellConfig, load_config, reset_config
from identspell.config_logging import ConfigurationError
from identspell.fix_provider import SynthesisOptions
from identspell.segmenter import SplitMode


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Global configuration backed by a private config file."""
    path = tmp_path / "identspell_config.json"
    monkeypatch.setenv("IDENTSPELL_CONFIG_FILE", str(path))
    reset_config()
    yield path
    reset_config()


class TestLoadConfig:
    """Tests for load_config."""

    def test_defaults(self, tmp_path):
        cfg = load_config(tmp_path / "missing.json")

        assert cfg.analysis.min_word_length == 3
        assert cfg.analysis.split_mode == "case_and_hyphen"
        assert cfg.synthesis.fuzzy_min_length == 8
        assert cfg.data.fix_list_path is None

    def test_file_values(self, tmp_path):
        path = tmp_path / "cfg.json"
        path.write_text(json.dumps({
            "analysis": {"include_local": False, "unknown_key": 1},
            "synthesis": {"max_suggestions": 4},
            "nonsense_section": {"a": 1},
        }), encoding="utf-8")

        cfg = load_config(path)

        assert cfg.analysis.include_local is False
        assert cfg.synthesis.max_suggestions == 4
        assert not hasattr(cfg.analysis, "unknown_key")

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        path = tmp_path / "cfg.json"
        path.write_text(json.dumps({"analysis": {"min_word_length": 5}}), encoding="utf-8")
        monkeypatch.setenv("IDENTSPELL_MIN_WORD_LENGTH", "4")
        monkeypatch.setenv("IDENTSPELL_INCLUDE_COMMENTS", "no")

        cfg = load_config(path)

        assert cfg.analysis.min_word_length == 4
        assert cfg.analysis.include_comments is False

    def test_invalid_env_value_is_ignored(self, tmp_path, monkeypatch):
        monkeypatch.setenv("IDENTSPELL_FUZZY_MAX_DISTANCE", "far")

        cfg = load_config(tmp_path / "missing.json")

        assert cfg.synthesis.fuzzy_max_distance == 3

    def test_broken_file_falls_back_to_defaults(self, tmp_path):
        path = tmp_path / "cfg.json"
        path.write_text("{not json", encoding="utf-8")

        assert load_config(path).analysis.min_word_length == 3

    def test_invalid_split_mode(self, tmp_path):
        path = tmp_path / "cfg.json"
        path.write_text(json.dumps({"analysis": {"split_mode": "words"}}), encoding="utf-8")

        with pytest.raises(ConfigurationError) as exc_info:
            load_config(path)

        assert exc_info.value.details['key'] == 'analysis.split_mode'


class TestGlobalConfig:
    """Tests for get/set/save on the global configuration."""

    def test_get_and_set(self, isolated_config):
        assert config.get('analysis.min_word_length') == 3
        assert config.get('analysis.missing', 'fallback') == 'fallback'

        config.set('analysis.min_word_length', 5)

        assert config.get('analysis.min_word_length') == 5

    @pytest.mark.parametrize("key", ["analysis", "bogus.key", "analysis.bogus"])
    def test_set_rejects_unknown_keys(self, isolated_config, key):
        with pytest.raises(ConfigurationError):
            config.set(key, 1)

    def test_save_and_reload(self, isolated_config):
        config.set('synthesis.max_suggestions', 2)
        config.save_config(isolated_config)

        assert load_config(isolated_config).synthesis.max_suggestions == 2


class TestOptionsFromConfig:
    """Tests for converting configuration into explicit options."""

    def test_analysis_options(self):
        cfg = IdentSpellConfig()
        cfg.analysis.split_mode = "hyphen"
        cfg.analysis.include_local = False

        options = SpellingAnalysisOptions.from_config(cfg)

        assert options.split_mode == SplitMode.HYPHEN
        assert options.include_local is False

    def test_synthesis_options(self):
        cfg = IdentSpellConfig()
        cfg.synthesis.fuzzy_min_length = 6

        assert SynthesisOptions.from_config(cfg).fuzzy_min_length == 6

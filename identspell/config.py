"""
identspell Configuration Module
===============================
Centralized configuration for analysis, fix synthesis, data files and logging.

Configuration can be set via:
1. Environment variables (IDENTSPELL_MIN_WORD_LENGTH=4)
2. Config file (identspell_config.json, or IDENTSPELL_CONFIG_FILE)
3. Direct API calls (config.set('analysis.include_local', False))

Analysis code never reads this module directly; callers convert it into
``SpellingAnalysisOptions`` and pass that along explicitly.
"""

import os
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional
from dataclasses import dataclass, field, asdict

from .config_logging import ConfigurationError

__version__ = "1.0.0"

logger = logging.getLogger(__name__)

# Default configuration path
CONFIG_FILE = Path.cwd() / "identspell_config.json"

SPLIT_MODES = ('none', 'case', 'hyphen', 'case_and_hyphen')


@dataclass
class AnalysisConfig:
    """Token analysis configuration."""
    min_word_length: int = 3
    include_local: bool = True
    include_generated_code: bool = False
    include_comments: bool = True
    split_mode: str = "case_and_hyphen"  # none, case, hyphen, case_and_hyphen
    culture: str = "en-US"


@dataclass
class SynthesisConfig:
    """Fix synthesis configuration."""
    fuzzy_min_length: int = 8
    fuzzy_distance_ratio: float = 0.25  # Edit distance bound per character
    fuzzy_max_distance: int = 3
    max_suggestions: int = 9


@dataclass
class DataConfig:
    """Word list / fix list file locations."""
    data_directory: Optional[str] = None
    file_prefix: str = "identspell.spelling"
    fix_list_path: Optional[str] = None
    new_fix_list_path: Optional[str] = None
    new_word_list_path: Optional[str] = None


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "INFO"
    format: str = "text"  # text or json
    to_console: bool = True
    to_file: bool = False
    log_dir: str = "logs"


@dataclass
class IdentSpellConfig:
    """Master identspell configuration."""
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
    synthesis: SynthesisConfig = field(default_factory=SynthesisConfig)
    data: DataConfig = field(default_factory=DataConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def validate(self):
        """Raise ConfigurationError for values the engine cannot work with."""
        if self.analysis.min_word_length < 1:
            raise ConfigurationError(
                f"min_word_length must be positive: {self.analysis.min_word_length}",
                key='analysis.min_word_length')
        if self.analysis.split_mode not in SPLIT_MODES:
            raise ConfigurationError(
                f"Unknown split mode: {self.analysis.split_mode}",
                key='analysis.split_mode')
        if self.synthesis.fuzzy_min_length < 1:
            raise ConfigurationError(
                f"fuzzy_min_length must be positive: {self.synthesis.fuzzy_min_length}",
                key='synthesis.fuzzy_min_length')
        if self.synthesis.fuzzy_max_distance < 1:
            raise ConfigurationError(
                f"fuzzy_max_distance must be positive: {self.synthesis.fuzzy_max_distance}",
                key='synthesis.fuzzy_max_distance')
        if self.synthesis.max_suggestions < 1:
            raise ConfigurationError(
                f"max_suggestions must be positive: {self.synthesis.max_suggestions}",
                key='synthesis.max_suggestions')


# Global configuration instance
_config: Optional[IdentSpellConfig] = None


def get_config() -> IdentSpellConfig:
    """Get the global identspell configuration."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config():
    """Reset the global configuration (for testing)."""
    global _config
    _config = None


def load_config(path: Optional[Path] = None, validate: bool = True) -> IdentSpellConfig:
    """Load configuration from file and environment."""
    config = IdentSpellConfig()

    path = Path(path or os.environ.get('IDENTSPELL_CONFIG_FILE') or CONFIG_FILE)
    if path.exists():
        try:
            with open(path, 'r', encoding='utf-8') as f:
                file_config = json.load(f)
            _apply_dict_to_config(config, file_config)
        except (json.JSONDecodeError, IOError) as e:
            logger.warning(f"[identspell config] Could not load config file {path}: {e}")

    _apply_env_to_config(config)

    if validate:
        config.validate()
    return config


def get_logging_config() -> LoggingConfig:
    """
    Logging section only. The other sections are not validated here; bad
    values in them are reported by get_config().
    """
    if _config is not None:
        return _config.logging
    return load_config(validate=False).logging


def _apply_dict_to_config(config: IdentSpellConfig, data: Dict[str, Any]):
    """Apply dictionary values to config object."""
    for section_name, section_data in data.items():
        if hasattr(config, section_name) and isinstance(section_data, dict):
            section = getattr(config, section_name)
            for key, value in section_data.items():
                if hasattr(section, key):
                    setattr(section, key, value)


def _apply_env_to_config(config: IdentSpellConfig):
    """Apply environment variables to config."""
    env_mappings = {
        'IDENTSPELL_MIN_WORD_LENGTH': ('analysis', 'min_word_length', int),
        'IDENTSPELL_INCLUDE_LOCAL': ('analysis', 'include_local', _parse_bool),
        'IDENTSPELL_INCLUDE_GENERATED_CODE': ('analysis', 'include_generated_code', _parse_bool),
        'IDENTSPELL_INCLUDE_COMMENTS': ('analysis', 'include_comments', _parse_bool),
        'IDENTSPELL_SPLIT_MODE': ('analysis', 'split_mode', str),
        'IDENTSPELL_CULTURE': ('analysis', 'culture', str),
        'IDENTSPELL_FUZZY_MIN_LENGTH': ('synthesis', 'fuzzy_min_length', int),
        'IDENTSPELL_FUZZY_DISTANCE_RATIO': ('synthesis', 'fuzzy_distance_ratio', float),
        'IDENTSPELL_FUZZY_MAX_DISTANCE': ('synthesis', 'fuzzy_max_distance', int),
        'IDENTSPELL_MAX_SUGGESTIONS': ('synthesis', 'max_suggestions', int),
        'IDENTSPELL_DATA_DIRECTORY': ('data', 'data_directory', str),
        'IDENTSPELL_FILE_PREFIX': ('data', 'file_prefix', str),
        'IDENTSPELL_FIX_LIST': ('data', 'fix_list_path', str),
        'IDENTSPELL_NEW_FIX_LIST': ('data', 'new_fix_list_path', str),
        'IDENTSPELL_NEW_WORD_LIST': ('data', 'new_word_list_path', str),
        'IDENTSPELL_LOG_LEVEL': ('logging', 'level', str),
        'IDENTSPELL_LOG_FORMAT': ('logging', 'format', str),
        'IDENTSPELL_LOG_TO_FILE': ('logging', 'to_file', _parse_bool),
        'IDENTSPELL_LOG_DIR': ('logging', 'log_dir', str),
    }

    for env_var, (section, key, converter) in env_mappings.items():
        value = os.environ.get(env_var)
        if value is not None:
            try:
                section_obj = getattr(config, section)
                setattr(section_obj, key, converter(value))
            except (ValueError, AttributeError) as e:
                logger.warning(f"[identspell config] Invalid env var {env_var}={value}: {e}")


def _parse_bool(value: str) -> bool:
    """Parse boolean from string."""
    return value.lower() in ('true', '1', 'yes', 'on')


def get(key: str, default: Any = None) -> Any:
    """
    Get a configuration value by dot-notation key.

    Example: get('analysis.min_word_length') -> 3
    """
    obj = get_config()
    for part in key.split('.'):
        if hasattr(obj, part):
            obj = getattr(obj, part)
        else:
            return default

    return obj


def set(key: str, value: Any):
    """
    Set a configuration value by dot-notation key.

    Example: set('analysis.include_local', False)
    """
    config = get_config()
    parts = key.split('.')

    if len(parts) != 2:
        raise ConfigurationError(f"Key must be in format 'section.key': {key}", key=key)

    section_name, attr_name = parts

    if not hasattr(config, section_name):
        raise ConfigurationError(f"Unknown config section: {section_name}", key=key)

    section = getattr(config, section_name)
    if not hasattr(section, attr_name):
        raise ConfigurationError(f"Unknown config key: {attr_name}", key=key)

    setattr(section, attr_name, value)


def save_config(path: Optional[Path] = None):
    """Save current configuration to file."""
    config = get_config()
    path = Path(path or CONFIG_FILE)

    with open(path, 'w', encoding='utf-8') as f:
        json.dump(asdict(config), f, indent=2)

"""
identspell
==========
Spelling analysis and correction engine for identifiers and comments.

Features:
- Identifier and prose segmentation (camelCase, acronyms, hyphens, URLs)
- Dictionary, ignore list and fix list data with set algebra
- Placeholder word filter (abc, xxxx, aabbcc)
- Fix synthesis: transpositions, bounded Damerau-Levenshtein search

Requires: pip install symspellpy
"""

__version__ = "1.0.0"

# Lazy imports
_spelling_data = None


def load_spelling_data(config=None):
    """Load SpellingData from the configured data directory."""
    from .config import get_config
    from .data import SpellingData

    config = config or get_config()
    if not config.data.data_directory:
        return SpellingData.empty()
    return SpellingData.load_from_directory(config.data.data_directory, config.data.file_prefix)


def get_spelling_data():
    """
    Get the SpellingData loaded from configuration (lazy loaded).

    Convenience cache for a single process. The engine never reads it:
    analysis and synthesis take their SpellingData as an argument, and
    load_spelling_data() returns a fresh, uncached instance.
    """
    global _spelling_data
    if _spelling_data is None:
        _spelling_data = load_spelling_data()
    return _spelling_data


def get_analyzer(spelling_data=None, config=None):
    """Create a SpellingAnalyzer configured from the global configuration."""
    from .analysis import SpellingAnalyzer, SpellingAnalysisOptions
    from .fix_provider import SynthesisOptions

    return SpellingAnalyzer(
        spelling_data if spelling_data is not None else get_spelling_data(),
        SpellingAnalysisOptions.from_config(config),
        SynthesisOptions.from_config(config),
    )


def get_status() -> dict:
    """Get engine status."""
    status = {
        'version': __version__,
        'available': False,
        'words': 0,
        'ignored': 0,
        'fixes': 0,
    }

    try:
        import symspellpy  # noqa: F401
        data = get_spelling_data()
        status.update(
            available=True,
            words=len(data.word_list),
            ignored=len(data.ignore_list),
            fixes=len(data.fix_list),
        )
    except ImportError as e:
        status['error'] = f"symspellpy not installed: {e}"

    return status

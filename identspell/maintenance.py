"""
Word List Maintenance
=====================
Offline, single-writer workflow that grows the fix list and collects new
dictionary candidates after an analysis run.

Typical cycle:
1. Analysis flags unknown words.
2. ``save_new_values`` synthesizes fixes for them. Fixes are merged into the
   pending fix list (minus fixes already in the baseline fix list). Words
   without a candidate go to the pending word list for review.
3. A reviewer moves pending entries into the real lists, and
   ``process_word_lists`` normalizes them and checks the fix list against
   the dictionary.

Nothing here may run while another process reads or writes the same files.
"""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Union

from .cancellation import CancellationToken, ensure_token
from .config_logging import get_logger, ConfigurationError, OperationCanceledError
from .data import SpellingData
from .fix_provider import SynthesisOptions, SynthesisResult, synthesize_fixes
from .fixlist import FixList
from .wordlist import WordList, CASE_SENSITIVE, save_words

__version__ = "1.0.0"

logger = get_logger(__name__)

PathLike = Union[str, Path]

_SPACES_REGEX = re.compile(r" +")


@dataclass(frozen=True)
class MaintenancePaths:
    """Files touched by ``save_new_values``."""
    fix_list_path: Path
    new_fix_list_path: Path
    new_word_list_path: Path

    @classmethod
    def from_config(cls, config=None) -> 'MaintenancePaths':
        if config is None:
            from .config import get_config
            config = get_config()
        data = config.data

        missing = [name for name in ('fix_list_path', 'new_fix_list_path', 'new_word_list_path')
                   if not getattr(data, name)]
        if missing:
            raise ConfigurationError(
                f"Maintenance paths not configured: {', '.join(missing)}",
                key='data', missing=missing)

        return cls(
            Path(data.fix_list_path),
            Path(data.new_fix_list_path),
            Path(data.new_word_list_path),
        )


def save_new_values(
    spelling_data: SpellingData,
    new_values: Iterable[str],
    paths: MaintenancePaths,
    cancellation_token: Optional[CancellationToken] = None,
    options: Optional[SynthesisOptions] = None
) -> SynthesisResult:
    """
    Record fixes and review candidates for words flagged by analysis.

    Returns the saved pending fix list and the words left for review.
    A canceled run raises OperationCanceledError and writes nothing.
    """
    token = ensure_token(cancellation_token)
    options = options or SynthesisOptions()

    with logger.log_operation("save_new_values", new_fix_list=str(paths.new_fix_list_path)):
        fixes = spelling_data.fix_list

        if paths.new_fix_list_path.exists():
            fixes = fixes.merge(FixList.load(paths.new_fix_list_path))

        fixes = fixes.except_baseline(FixList.load(paths.fix_list_path))

        values = WordList(new_values, CASE_SENSITIVE)
        if paths.new_word_list_path.exists():
            values = values.add_values(WordList.load(paths.new_word_list_path, CASE_SENSITIVE))

        candidates = [
            value for value in values
            if not spelling_data.fix_list.contains(value)
            and not spelling_data.word_list.contains(value)
        ]

        result = synthesize_fixes(candidates, spelling_data, token, options)
        if result.canceled:
            raise OperationCanceledError("Fix synthesis was canceled", stage='save_new_values')

        fixes = fixes.merge(result.fix_list).normalized()

        save_words(paths.new_word_list_path, result.unresolved, CASE_SENSITIVE)

        if len(fixes) > 0:
            fixes.save(paths.new_fix_list_path)

        logger.info(
            f"Pending fix list has {len(fixes)} entries, "
            f"{len(result.unresolved)} words await review"
        )

    return SynthesisResult(fix_list=fixes, unresolved=result.unresolved)


def validate_fix_list(fix_list: FixList, word_list: WordList) -> List[str]:
    """
    Consistency problems between a fix list and the dictionary: keys that
    are dictionary words, and fixes containing words that are not.
    """
    problems = []

    for key, fixes in fix_list.items():
        if word_list.contains(key):
            problems.append(f"'{key}' is a dictionary word but has fixes")

        for fix in sorted(fixes, key=lambda f: f.value):
            for part in _SPACES_REGEX.split(fix.value):
                if part and not word_list.contains(part):
                    problems.append(f"fix '{fix.value}' of '{key}': '{part}' is not a dictionary word")

    for problem in problems:
        logger.warning(problem)

    return problems


def process_word_lists(
    word_list_paths: Iterable[PathLike],
    fix_list_path: PathLike
) -> List[str]:
    """
    Normalize every word list file, then check and re-save the fix list.

    Returns the problems reported by ``validate_fix_list``.
    """
    word_list_paths = [Path(p) for p in word_list_paths]

    with logger.log_operation("process_word_lists", files=len(word_list_paths)):
        for path in word_list_paths:
            WordList.normalize(path)

        dictionary = WordList.load_files(word_list_paths)

        fix_list = FixList.load(fix_list_path)
        problems = validate_fix_list(fix_list, dictionary)

        if len(fix_list) > 0:
            fix_list.normalized().save(fix_list_path)

    return problems

"""
Spelling Data
=============
The dictionary, ignore list and fix list bundled into one read-only lookup
surface. An instance is passed explicitly to every analysis call and is safe
to share between threads; the ``add_*`` methods return a new instance.
"""

import re
from pathlib import Path
from typing import Iterable, Optional, Union

from .config_logging import get_logger
from .fixlist import FixList, SpellingFix, SpellingFixKind
from .wordlist import WordList, CASE_SENSITIVE, DEFAULT_COMPARER

__version__ = "1.0.0"

logger = get_logger(__name__)

PathLike = Union[str, Path]

WORD_LIST_EXTENSION = ".wordlist"
IGNORE_LIST_EXTENSION = ".ignorelist"
FIX_LIST_EXTENSION = ".fixlist"


class SpellingData:
    """Dictionary + ignore list + fix list."""

    def __init__(
        self,
        word_list: Optional[WordList] = None,
        fix_list: Optional[FixList] = None,
        ignore_list: Optional[WordList] = None
    ):
        self.word_list = word_list if word_list is not None else WordList((), DEFAULT_COMPARER)
        self.fix_list = fix_list if fix_list is not None else FixList()
        self.ignore_list = ignore_list if ignore_list is not None else WordList((), CASE_SENSITIVE)

    @classmethod
    def empty(cls) -> 'SpellingData':
        return cls()

    @classmethod
    def load_files(
        cls,
        word_list_paths: Iterable[PathLike] = (),
        fix_list_paths: Iterable[PathLike] = (),
        ignore_list_paths: Iterable[PathLike] = ()
    ) -> 'SpellingData':
        return cls(
            WordList.load_files(word_list_paths, DEFAULT_COMPARER),
            FixList.load_files(fix_list_paths),
            WordList.load_files(ignore_list_paths, CASE_SENSITIVE),
        )

    @classmethod
    def load_from_directory(
        cls,
        directory: PathLike,
        prefix: str = "identspell.spelling"
    ) -> 'SpellingData':
        """
        Load every ``<prefix>[.*].wordlist``, ``.ignorelist`` and ``.fixlist``
        file found below ``directory``.
        """
        directory = Path(directory)
        name_regex = re.compile(r'\A' + re.escape(prefix) + r'(\.|\Z)', re.IGNORECASE)

        word_lists, fix_lists, ignore_lists = [], [], []

        if directory.is_dir():
            for path in sorted(directory.rglob('*')):
                if not path.is_file() or not name_regex.match(path.stem):
                    continue
                extension = path.suffix.lower()
                if extension == WORD_LIST_EXTENSION:
                    word_lists.append(path)
                elif extension == IGNORE_LIST_EXTENSION:
                    ignore_lists.append(path)
                elif extension == FIX_LIST_EXTENSION:
                    fix_lists.append(path)
        else:
            logger.warning(f"Spelling data directory not found: {directory}")

        logger.debug(
            f"Spelling data in {directory}: {len(word_lists)} word lists, "
            f"{len(ignore_lists)} ignore lists, {len(fix_lists)} fix lists"
        )
        return cls.load_files(word_lists, fix_lists, ignore_lists)

    def is_known(self, value: str) -> bool:
        """True if the value is ignored or is a dictionary word."""
        return self.ignore_list.contains(value) or self.word_list.contains(value)

    def add_word(self, value: str) -> 'SpellingData':
        return self.add_words([value])

    def add_words(self, values: Iterable[str]) -> 'SpellingData':
        return SpellingData(self.word_list.add_values(values), self.fix_list, self.ignore_list)

    def add_fix(self, error: str, fix: SpellingFix) -> 'SpellingData':
        return SpellingData(self.word_list, self.fix_list.add(error, fix), self.ignore_list)

    def add_user_fix(self, error: str, value: str) -> 'SpellingData':
        return self.add_fix(error, SpellingFix(value, SpellingFixKind.USER))

    def add_ignored_value(self, value: str) -> 'SpellingData':
        return self.add_ignored_values([value])

    def add_ignored_values(self, values: Iterable[str]) -> 'SpellingData':
        return SpellingData(self.word_list, self.fix_list, self.ignore_list.add_values(values))

    def __repr__(self):
        return (f"SpellingData(words={len(self.word_list)}, "
                f"ignored={len(self.ignore_list)}, fixes={len(self.fix_list)})")

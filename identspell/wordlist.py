"""
Word List Store
===============
Persisted, comparer-aware word sets.

A word list file is UTF-8 text with one word per line. On load every line is
trimmed and blank lines and ``#`` comment lines are dropped. On save words are
trimmed, lower-cased, deduplicated and sorted ordinally.

Set algebra (``except_values``, ``intersect``, ``add_values``) always honors
the comparer of the list it is called on.
"""

from pathlib import Path
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Union

from .config_logging import get_logger, WordListError

__version__ = "1.0.0"

logger = get_logger(__name__)

PathLike = Union[str, Path]


class WordComparer:
    """Equality rule for words, expressed as a key function."""

    def __init__(self, name: str, key: Callable[[str], str]):
        self.name = name
        self.key = key

    def equals(self, x: str, y: str) -> bool:
        return self.key(x) == self.key(y)

    def __repr__(self):
        return f"WordComparer({self.name!r})"


IGNORE_CASE = WordComparer('ignore_case', str.casefold)
CASE_SENSITIVE = WordComparer('case_sensitive', lambda value: value)

DEFAULT_COMPARER = IGNORE_CASE

PREFIXES = (
    "an", "ante", "anti", "auto", "circum", "co", "com", "con", "contra",
    "contro", "de", "dis", "en", "ex", "extra", "hetero", "homeo", "homo",
    "hyper", "il", "im", "in", "inter", "intra", "intro", "ir", "macro",
    "micro", "mono", "non", "omni", "post", "pre", "pro", "sub", "sym", "syn",
    "tele", "trans", "tri", "un", "uni", "up",
)

# Generated words this short are too ambiguous to add to a dictionary
MIN_GENERATED_LENGTH = 4


def read_words(lines: Iterable[str]) -> Iterator[str]:
    """Trim lines and drop blank and comment lines."""
    for line in lines:
        word = line.strip()
        if word and not word.startswith('#'):
            yield word


class WordList:
    """
    Immutable set of words with an optional backing file.

    No two entries are equal under the list's comparer; the first spelling
    seen for a word is the one kept.
    """

    def __init__(
        self,
        values: Iterable[str] = (),
        comparer: Optional[WordComparer] = None,
        path: Optional[PathLike] = None
    ):
        self.comparer = comparer or DEFAULT_COMPARER
        self.path = Path(path) if path is not None else None

        items: Dict[str, str] = {}
        key = self.comparer.key
        for value in read_words(values):
            items.setdefault(key(value), value)
        self._items = items

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    @classmethod
    def load(cls, path: PathLike, comparer: Optional[WordComparer] = None) -> 'WordList':
        """
        Load a word list file.

        A missing file yields an empty list rather than an error.
        """
        path = Path(path)

        if not path.exists():
            logger.warning(f"Word list not found, using empty list: {path}")
            return cls((), comparer, path)

        if not path.is_file():
            raise WordListError(f"Word list path is not a file: {path}", path=str(path))

        with open(path, 'r', encoding='utf-8') as f:
            word_list = cls(f, comparer, path)

        logger.debug(f"Loaded {len(word_list)} words from {path}")
        return word_list

    load_file = load

    @classmethod
    def load_files(
        cls,
        paths: Iterable[PathLike],
        comparer: Optional[WordComparer] = None
    ) -> 'WordList':
        """Load and union several word list files."""
        values: List[str] = []
        for path in paths:
            values.extend(cls.load(path, comparer).values)

        return cls(values, comparer)

    @classmethod
    def load_text(cls, text: str, comparer: Optional[WordComparer] = None) -> 'WordList':
        """Build a word list from newline-separated text."""
        return cls(text.splitlines(), comparer)

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    @property
    def values(self) -> List[str]:
        return list(self._items.values())

    def contains(self, value: str) -> bool:
        return self.comparer.key(value) in self._items

    def __contains__(self, value) -> bool:
        return isinstance(value, str) and self.contains(value)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[str]:
        return iter(self._items.values())

    def __eq__(self, other) -> bool:
        if not isinstance(other, WordList):
            return NotImplemented
        return self.comparer is other.comparer and self._items.keys() == other._items.keys()

    def __hash__(self) -> int:
        return hash((self.comparer.name, frozenset(self._items)))

    def __repr__(self):
        return f"WordList(count={len(self)}, path={self.path!s})"

    # -------------------------------------------------------------------------
    # Set algebra
    # -------------------------------------------------------------------------

    def with_values(self, values: Iterable[str]) -> 'WordList':
        """New list with the same path and comparer."""
        return WordList(values, self.comparer, self.path)

    def except_values(self, word_list: 'WordList', *additional: 'WordList') -> 'WordList':
        """Words of this list that are in none of the given lists."""
        key = self.comparer.key
        excluded = set()
        for other in (word_list,) + additional:
            excluded.update(key(value) for value in other)

        return self.with_values(
            value for k, value in self._items.items() if k not in excluded
        )

    def intersect(self, word_list: 'WordList', *additional: 'WordList') -> 'WordList':
        """Words of this list that are present in every given list."""
        key = self.comparer.key
        keys = set(self._items)
        for other in (word_list,) + additional:
            keys.intersection_update(key(value) for value in other)

        return self.with_values(
            value for k, value in self._items.items() if k in keys
        )

    def add_values(self, *others: Union['WordList', Iterable[str]]) -> 'WordList':
        """Union of this list and the given lists (or plain iterables of words)."""
        values = self.values
        for other in others:
            values.extend(other)

        return self.with_values(values)

    # -------------------------------------------------------------------------
    # Morphology
    # -------------------------------------------------------------------------

    def generate_prefixes(self) -> 'WordList':
        """Prefix every word of length >= 3 with each known prefix morpheme."""
        values = []
        for value in self:
            if len(value) < 3:
                continue
            for prefix in PREFIXES:
                values.append(prefix + value)

        return self.with_values(v for v in values if len(v) >= MIN_GENERATED_LENGTH)

    def generate_suffixes(self) -> 'WordList':
        """Plural forms of every word of length >= 3."""
        values = []
        for value in self:
            if len(value) < 3:
                continue
            values.extend(pluralize(value))

        return self.with_values(v for v in values if len(v) >= MIN_GENERATED_LENGTH)

    # -------------------------------------------------------------------------
    # Saving
    # -------------------------------------------------------------------------

    def save(self, path: Optional[PathLike] = None, append: bool = False):
        """Save to ``path`` or, by default, to the file the list came from."""
        path = path or self.path
        if path is None:
            raise WordListError("Word list has no backing file to save to")

        save_words(path, self, self.comparer, append=append)

    def save_and_load(self) -> 'WordList':
        self.save()
        return WordList.load(self.path, self.comparer)

    @classmethod
    def normalize(cls, path: PathLike, comparer: Optional[WordComparer] = None):
        """Rewrite a word list file in its canonical form."""
        cls.load(path, comparer).save(path)


def pluralize(value: str) -> List[str]:
    """Candidate plural forms of a word, most specific first."""
    forms = []

    if value.endswith(('ch', 'sh', 'x', 'o')):
        forms.append(value + "es")
    elif value.endswith('us'):
        forms.append(value[:-2] + "i")
        forms.append(value + "es")
    elif value.endswith('is'):
        forms.append(value[:-2] + "es")
    elif value.endswith(('s', 'z')):
        forms.append(value + "es")
        forms.append(value + value[-1] + "es")
    elif value.endswith('y'):
        forms.append(value[:-1] + "ies")
    elif value.endswith('on'):
        forms.append(value[:-2] + "a")
    elif value.endswith('fe'):
        forms.append(value[:-2] + "ves")
    elif value.endswith('f'):
        forms.append(value[:-1] + "ves")

    forms.append(value + "s")
    return forms


def save_words(
    path: PathLike,
    values: Iterable[str],
    comparer: Optional[WordComparer] = None,
    append: bool = False
):
    """
    Write words one per line: trimmed, lower-cased, deduplicated, sorted.

    In append mode the words are added after the existing content.
    """
    comparer = comparer or DEFAULT_COMPARER
    path = Path(path)

    unique: Dict[str, str] = {}
    for value in read_words(values):
        value = value.lower()
        unique.setdefault(comparer.key(value), value)

    lines = sorted(unique.values())

    prefix = ""
    if append and path.exists() and path.stat().st_size > 0:
        with open(path, 'rb') as f:
            f.seek(-1, 2)
            if f.read(1) != b"\n":
                prefix = "\n"

    with open(path, 'a' if append else 'w', encoding='utf-8', newline='\n') as f:
        if lines:
            f.write(prefix + "\n".join(lines) + "\n")

    logger.debug(f"Saved {len(lines)} words to {path}")

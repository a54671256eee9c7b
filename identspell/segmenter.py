"""
Segmenter
=========
Splits identifiers and prose into candidate words.

Identifier boundaries:
1. any run of non-letter characters (never emitted itself);
2. between an uppercase letter and a following uppercase+lowercase pair
   (``XMLParser`` -> ``XML``, ``Parser``);
3. between a lowercase letter and a following uppercase letter
   (``fooBar`` -> ``foo``, ``Bar``).

Prose is scanned in two stages: URLs are skipped, words of two or more
letters are extracted, and each word is then split according to a
``SplitMode``.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterator, List, Optional, Tuple

from .base import TokenKind

__version__ = "1.0.0"


@dataclass(frozen=True)
class SplitItem:
    """A word produced by segmentation."""
    value: str
    index: int   # offset into the segmented text
    number: int  # 1-based position among the items

    @property
    def length(self) -> int:
        return len(self.value)

    @property
    def end_index(self) -> int:
        return self.index + len(self.value)


class SplitMode(Enum):
    """How words extracted from prose are split further."""
    NONE = "none"
    CASE = "case"
    HYPHEN = "hyphen"
    CASE_AND_HYPHEN = "case_and_hyphen"

    @property
    def splits_case(self) -> bool:
        return self in (SplitMode.CASE, SplitMode.CASE_AND_HYPHEN)

    @property
    def splits_hyphen(self) -> bool:
        return self in (SplitMode.HYPHEN, SplitMode.CASE_AND_HYPHEN)


# Words in comments: 2+ letters, optional hyphenated parts, then either a
# possessive 's (not part of the word), an attached contraction or an
# apostrophe that ends the word before a non-letter word character.
WORD_IN_TEXT_REGEX = re.compile(
    r"""
    \b
    [^\W\d_]{2,}
    (?:-[^\W\d_]{2,})*
    [^\W\d_]*
    (?:
        (?='s\b)
      | '(?:d|ll|m|re|t|ve)\b
      | '(?![^\W\d_])\b
      | \b
    )
    """,
    re.VERBOSE)

URL_REGEX = re.compile(r"\bhttps?://\S+(?=\s|\Z)", re.IGNORECASE)

SHORT_IDENTIFIER_REGEX = re.compile(r"\A[a-z]{1,3}[0-9]*\Z")

SPECIAL_WORD_SUFFIXES = ("s", "ed", "ify", "'d")


def is_case_boundary(value: str, index: int) -> bool:
    """True if a word boundary lies just before ``value[index]``."""
    if index <= 0 or index >= len(value):
        return False

    prev, ch = value[index - 1], value[index]

    if prev.islower() and ch.isupper():
        return True

    return (prev.isupper()
            and ch.isupper()
            and index + 1 < len(value)
            and value[index + 1].islower())


def _split(
    value: str,
    is_separator: Callable[[str], bool],
    split_case: bool
) -> List[SplitItem]:
    items: List[SplitItem] = []
    start = -1

    def flush(end: int):
        if start >= 0 and end > start:
            items.append(SplitItem(value[start:end], start, len(items) + 1))

    for i, ch in enumerate(value):
        if is_separator(ch):
            flush(i)
            start = -1
        elif start < 0:
            start = i
        elif split_case and is_case_boundary(value, i):
            flush(i)
            start = i

    flush(len(value))
    return items


def _is_not_letter(ch: str) -> bool:
    return not ch.isalpha()


def _is_hyphen(ch: str) -> bool:
    return ch == '-'


def _never(ch: str) -> bool:
    return False


def split_identifier(value: str) -> List[SplitItem]:
    """Split identifier text on non-letters and case transitions."""
    return _split(value, _is_not_letter, True)


def split_word(value: str, mode: SplitMode) -> List[SplitItem]:
    """Split a word extracted from prose according to ``mode``."""
    return _split(
        value,
        _is_hyphen if mode.splits_hyphen else _never,
        mode.splits_case)


def match_special_word(value: str) -> Optional[Tuple[int, str]]:
    """
    Recognize acronym-like words that must not be case-split.

    ``NaN`` is checked as a whole; ``IDs``, ``GACed``, ``JSONify`` and
    ``AND'd`` are checked as their leading capitals. Returns
    ``(index, word)`` or None.
    """
    if (len(value) == 3
            and value[0].isupper()
            and value[1].islower()
            and value[2].isupper()):
        return 0, value

    count = 0
    while count < len(value) and value[count].isupper():
        count += 1

    if count >= 2 and value[count:] in SPECIAL_WORD_SUFFIXES:
        return 0, value[:count]

    return None


def iter_text_ranges(text: str) -> Iterator[Tuple[int, int]]:
    """(start, end) ranges of ``text`` outside of URLs."""
    prev_end = 0
    for match in URL_REGEX.finditer(text):
        yield prev_end, match.start()
        prev_end = match.end()
    yield prev_end, len(text)


def iter_text_words(text: str) -> Iterator[Tuple[int, str]]:
    """(index, word) for each word of ``text``, skipping URLs."""
    for start, end in iter_text_ranges(text):
        for match in WORD_IN_TEXT_REGEX.finditer(text, start, end):
            yield match.start(), match.group()


def split_text(
    text: str,
    mode: SplitMode = SplitMode.HYPHEN,
    min_word_length: int = 2
) -> List[SplitItem]:
    """
    Segment prose into words.

    Words shorter than ``min_word_length`` are dropped before splitting;
    when ``mode`` is not NONE, special words keep only their leading
    capitals.
    """
    items: List[SplitItem] = []

    for index, word in iter_text_words(text):
        if len(word) < min_word_length:
            continue

        if mode == SplitMode.NONE:
            parts = [(0, word)]
        else:
            special = match_special_word(word)
            if special is not None:
                parts = [special]
            else:
                parts = [(item.index, item.value) for item in split_word(word, mode)]

        for offset, value in parts:
            items.append(SplitItem(value, index + offset, len(items) + 1))

    return items


def is_short_identifier(value: str) -> bool:
    """Identifiers of two characters or fewer, or short lowercase names like ``i`` or ``x1``."""
    return len(value) <= 2 or SHORT_IDENTIFIER_REGEX.match(value) is not None


def get_prefix_length(value: str, kind: TokenKind) -> int:
    """Length of a ``T``/``I`` prefix that carries no meaning (``TKey``, ``IList``)."""
    if len(value) > 1 and value[1].isupper():
        if kind == TokenKind.TYPE_PARAMETER and value[0] == 'T':
            return 1
        if kind == TokenKind.INTERFACE and value[0] == 'I':
            return 1
    return 0

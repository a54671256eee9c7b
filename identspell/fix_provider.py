"""
Fix Synthesizer
===============
Proposes corrections for misspelled words.

Strategies:
- Swap: one adjacent transposition that yields a dictionary word.
- Fuzzy: dictionary words within a bounded Damerau-Levenshtein (optimal
  string alignment) distance, computed with symspellpy's ``EditDistance``.
  Only tried for words of ``fuzzy_min_length`` or more when no swap match
  exists.
- Split: two dictionary words glued together (``foobar`` -> ``fooBar``),
  or a ``T``/``I`` prefix that lost its capital (``Tvalue`` -> ``TValue``).
- Endings: common suffix slips (``cacheing``, ``collapsable``).

``synthesize_fixes`` is the offline batch entry point; ``get_fixes`` ranks
suggestions for a single diagnostic.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Iterable, Optional, Tuple

from symspellpy.editdistance import DistanceAlgorithm, EditDistance

from .base import SpellingDiagnostic
from .cancellation import CancellationToken, ensure_token
from .config_logging import get_logger
from .data import SpellingData
from .fixlist import FixList, SpellingFix, SpellingFixKind
from .text_utility import TextCasing, get_text_casing, set_text_casing
from .wordlist import WordList

__version__ = "1.0.0"

logger = get_logger(__name__)

# Suggestion order for a diagnostic
KIND_RANK = {
    SpellingFixKind.USER: 0,
    SpellingFixKind.PREDEFINED: 1,
    SpellingFixKind.SPLIT: 2,
    SpellingFixKind.SWAP: 3,
    SpellingFixKind.FUZZY: 4,
    SpellingFixKind.NONE: 5,
}


@dataclass(frozen=True)
class SynthesisOptions:
    """Tunable parameters of fix synthesis."""
    fuzzy_min_length: int = 8
    fuzzy_distance_ratio: float = 0.25
    fuzzy_max_distance: int = 3
    max_suggestions: int = 9

    @classmethod
    def from_config(cls, config=None) -> 'SynthesisOptions':
        if config is None:
            from .config import get_config
            config = get_config()
        section = config.synthesis
        return cls(
            fuzzy_min_length=section.fuzzy_min_length,
            fuzzy_distance_ratio=section.fuzzy_distance_ratio,
            fuzzy_max_distance=section.fuzzy_max_distance,
            max_suggestions=section.max_suggestions,
        )

    def distance_bound(self, length: int) -> int:
        """
        Maximum edit distance allowed for a word of ``length`` characters:
        ``length * fuzzy_distance_ratio`` rounded half up, at least 1 and at
        most ``fuzzy_max_distance``.
        """
        bound = int(length * self.fuzzy_distance_ratio + 0.5)
        return max(1, min(self.fuzzy_max_distance, bound))


DEFAULT_OPTIONS = SynthesisOptions()


@dataclass
class SynthesisResult:
    """Output of a batch synthesis run."""
    fix_list: FixList = field(default_factory=FixList)
    unresolved: WordList = field(default_factory=WordList)
    canceled: bool = False

    def to_dict(self) -> Dict[str, object]:
        return {
            'fixes': {key: sorted(f.value for f in fixes) for key, fixes in self.fix_list.items()},
            'unresolved': sorted(self.unresolved.values),
            'canceled': self.canceled,
        }


# =============================================================================
# Strategies
# =============================================================================

def swap_matches(value: str, spelling_data: SpellingData) -> List[str]:
    """Dictionary words that differ from ``value`` by one adjacent transposition."""
    matches: List[str] = []
    seen = set()

    for i in range(len(value) - 1):
        first, second = value[i], value[i + 1]
        if first == second:
            continue

        candidate = value[:i] + second + first + value[i + 2:]
        key = candidate.lower()
        if key not in seen and spelling_data.word_list.contains(candidate):
            seen.add(key)
            matches.append(candidate)

    return matches


def fuzzy_matches(
    value: str,
    spelling_data: SpellingData,
    cancellation_token: Optional[CancellationToken] = None,
    options: SynthesisOptions = DEFAULT_OPTIONS,
    max_distance: Optional[int] = None
) -> List[str]:
    """
    Dictionary words within the edit-distance bound of ``value``, closest first.

    The cancellation token is checked before each candidate; a canceled
    search returns the matches found so far.
    """
    length = len(value)
    if length <= 3:
        return []

    token = ensure_token(cancellation_token)
    bound = max_distance if max_distance is not None else options.distance_bound(length)
    comparer = EditDistance(DistanceAlgorithm.DAMERAU_OSA)
    target = value.lower()

    found: List[Tuple[int, str]] = []

    for candidate in spelling_data.word_list:
        if token.is_cancellation_requested:
            logger.debug(f"Fuzzy search for '{value}' canceled with {len(found)} matches")
            break

        if abs(len(candidate) - length) > bound:
            continue

        candidate_lower = candidate.lower()
        if candidate_lower == target:
            continue

        distance = comparer.compare(target, candidate_lower, bound)
        if distance >= 0:
            found.append((distance, candidate))

    found.sort(key=lambda item: (item[0], item[1].lower()))
    return [candidate for _, candidate in found]


def split_indexes(
    value: str,
    spelling_data: SpellingData,
    cancellation_token: Optional[CancellationToken] = None
) -> List[int]:
    """Indexes at which ``value`` splits into known words."""
    token = ensure_token(cancellation_token)
    word_list = spelling_data.word_list
    length = len(value)
    indexes: List[int] = []

    # Tvalue > TValue, Ienumerable > IEnumerable
    if (length >= 4
            and value[0] in ('I', 'T')
            and get_text_casing(value) == TextCasing.FIRST_UPPER
            and word_list.contains(value[1:])):
        indexes.append(1)

    if length < 6:
        return indexes

    # foobar > foo bar; both parts at least three letters
    for i in range(3, length - 2):
        token.throw_if_cancellation_requested()
        if word_list.contains(value[:i]) and word_list.contains(value[i:]):
            indexes.append(i)

    return indexes


def heuristic_fixes(value: str, spelling_data: SpellingData) -> List[str]:
    """Corrections for common suffix slips and doubled letter pairs."""
    candidates: List[str] = []

    if value.endswith('ed'):
        candidates.append(value[:-3] if value.endswith('tted') else value[:-2])
    elif value.endswith('ial'):
        candidates.append(value[:-3])
    elif value.endswith('ical'):
        candidates.append(value[:-2])
    elif value.endswith('den') and not value.endswith('dden'):
        # hiden > hidden
        candidates.append(value[:-2] + 'd' + value[-2:])
    elif value.endswith('eing'):
        # cacheing > caching
        candidates.append(value[:-4] + value[-3:])
    elif value.endswith('eable'):
        # customizeable > customizable
        candidates.append(value[:-5] + value[-4:])
    elif value.endswith('able'):
        # collapsable > collapsible
        candidates.append(value[:-4] + 'i' + value[-3:])
    elif value.endswith('eability'):
        # serializeability > serializability
        candidates.append(value[:-8] + value[-7:])
    elif value.endswith('ability'):
        # compatability > compatibility
        candidates.append(value[:-7] + 'i' + value[-6:])

    # readonlyly > readonly, sensititive > sensitive
    for i in range(len(value) - 3):
        first, second = value[i], value[i + 1]
        if first != second and value[i + 2] == first and value[i + 3] == second:
            candidates.append(value[:i] + value[i + 2:])

    fixes: List[str] = []
    for candidate in candidates:
        if (candidate
                and candidate not in fixes
                and spelling_data.word_list.contains(candidate)
                and not spelling_data.ignore_list.contains(candidate)):
            fixes.append(candidate)

    return fixes


# =============================================================================
# Suggestions for one diagnostic
# =============================================================================

def _split_fix_value(diagnostic: SpellingDiagnostic, index: int) -> str:
    value = diagnostic.value
    head, tail = value[:index], value[index:]

    if index == 1 and head in ('I', 'T'):
        return head + tail[0].upper() + tail[1:]

    if diagnostic.is_symbol:
        if diagnostic.casing == TextCasing.UPPER:
            return f"{head}_{tail}"
        return head + tail[0].upper() + tail[1:].lower()

    return f"{head} {tail}"


def get_fixes(
    diagnostic: SpellingDiagnostic,
    spelling_data: SpellingData,
    options: SynthesisOptions = DEFAULT_OPTIONS,
    cancellation_token: Optional[CancellationToken] = None
) -> List[SpellingFix]:
    """
    Ranked, applicable corrections for a diagnostic.

    Fix-list entries come first, then split, swap and fuzzy candidates.
    Casing is transferred from the flagged word.
    """
    token = ensure_token(cancellation_token)
    value = diagnostic.value
    casing = diagnostic.casing

    candidates: List[SpellingFix] = []

    def add(fix_value: str, kind: SpellingFixKind, keep_casing: bool = False):
        if not keep_casing and casing != TextCasing.MIXED:
            fix_value = set_text_casing(fix_value, casing)
        candidates.append(SpellingFix(fix_value, kind))

    for fix in sorted(spelling_data.fix_list.get_fixes(value),
                      key=lambda f: (KIND_RANK[f.kind], f.value)):
        add(fix.value, fix.kind)

    for index in split_indexes(value, spelling_data, token):
        add(_split_fix_value(diagnostic, index), SpellingFixKind.SPLIT, keep_casing=True)

    swaps = swap_matches(diagnostic.value_lower, spelling_data)
    for match in swaps:
        add(match, SpellingFixKind.SWAP)

    for match in heuristic_fixes(diagnostic.value_lower, spelling_data):
        add(match, SpellingFixKind.FUZZY)

    if not swaps and len(value) >= options.fuzzy_min_length:
        for match in fuzzy_matches(value, spelling_data, token, options):
            add(match, SpellingFixKind.FUZZY)

    fixes: List[SpellingFix] = []
    seen = set()
    for fix in sorted(candidates, key=lambda f: KIND_RANK[f.kind]):
        key = fix.value.lower()
        if key in seen or key == diagnostic.value_lower:
            continue
        if not diagnostic.is_applicable_fix(fix):
            continue
        seen.add(key)
        fixes.append(fix)
        if len(fixes) >= options.max_suggestions:
            break

    return fixes


# =============================================================================
# Batch synthesis
# =============================================================================

def synthesize_fixes(
    words: Iterable[str],
    spelling_data: SpellingData,
    cancellation_token: Optional[CancellationToken] = None,
    options: SynthesisOptions = DEFAULT_OPTIONS
) -> SynthesisResult:
    """
    Build fix list entries for words already confirmed misspelled.

    Swap matches are recorded as SWAP; fuzzy matches, tried only when there
    is no swap match and the word is long enough, are recorded as FUZZY.
    Words with no candidate end up in ``unresolved`` for human review.
    """
    token = ensure_token(cancellation_token)
    result = SynthesisResult()
    pairs: List[Tuple[str, List[SpellingFix]]] = []
    unresolved: List[str] = []

    for word in sorted(dict.fromkeys(w.strip().lower() for w in words if w.strip())):
        if token.is_cancellation_requested:
            result.canceled = True
            break

        fixes = [SpellingFix(match.lower(), SpellingFixKind.SWAP)
                 for match in swap_matches(word, spelling_data)]

        if not fixes and len(word) >= options.fuzzy_min_length:
            fixes = [SpellingFix(match.lower(), SpellingFixKind.FUZZY)
                     for match in fuzzy_matches(word, spelling_data, token, options)]

            if token.is_cancellation_requested:
                # Search was cut short; its matches are incomplete
                result.canceled = True
                break

        if fixes:
            pairs.append((word, fixes))
        else:
            unresolved.append(word)

    result.fix_list = FixList(dict(pairs))
    result.unresolved = WordList(unresolved)

    logger.info(
        f"Synthesized fixes for {len(result.fix_list)} words, "
        f"{len(result.unresolved)} left for review"
    )
    return result

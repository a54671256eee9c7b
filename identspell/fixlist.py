"""
Fix List Store
==============
Persisted mapping from a misspelled word to its accepted corrections.

File format: UTF-8 text, one ``word=fix`` pair per line, split at the first
``=``. The format is strict: a non-blank line without ``=`` (or with an empty
side) fails the whole load with ``FixListFormatError``.

Keys are compared case-insensitively. Each key maps to a set of
``SpellingFix`` values, so the same (value, kind) pair is never stored twice.
"""

from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path
from typing import Dict, FrozenSet, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

from .config_logging import get_logger, FixListFormatError
from .wordlist import DEFAULT_COMPARER

__version__ = "1.0.0"

logger = get_logger(__name__)

PathLike = Union[str, Path]

DELIMITER = "="


class SpellingFixKind(IntEnum):
    """Where a correction came from."""
    NONE = 0
    PREDEFINED = 1
    SWAP = 2
    FUZZY = 3
    SPLIT = 4
    USER = 5


@dataclass(frozen=True)
class SpellingFix:
    """A proposed correction and the kind of match that produced it."""
    value: str
    kind: SpellingFixKind = SpellingFixKind.NONE

    def with_value(self, value: str) -> 'SpellingFix':
        return SpellingFix(value, self.kind)

    def to_dict(self) -> Dict[str, str]:
        return {'value': self.value, 'kind': self.kind.name.lower()}


class FixList:
    """Immutable mapping of misspelled word -> set of SpellingFix."""

    def __init__(
        self,
        items: Optional[Mapping[str, Iterable[SpellingFix]]] = None,
        path: Optional[PathLike] = None
    ):
        self.path = Path(path) if path is not None else None
        self._items: Dict[str, Tuple[str, FrozenSet[SpellingFix]]] = {}

        for key, fixes in (items or {}).items():
            self._add(key, fixes)

    def _add(self, key: str, fixes: Iterable[SpellingFix]):
        k = DEFAULT_COMPARER.key(key)
        fixes = frozenset(fixes)
        if k in self._items:
            original_key, existing = self._items[k]
            self._items[k] = (original_key, existing | fixes)
        elif fixes:
            self._items[k] = (key, fixes)

    @classmethod
    def _from_pairs(cls, pairs: Iterable[Tuple[str, Iterable[SpellingFix]]],
                    path: Optional[PathLike] = None) -> 'FixList':
        fix_list = cls(path=path)
        for key, fixes in pairs:
            fix_list._add(key, fixes)
        return fix_list

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    @classmethod
    def load(cls, path: PathLike) -> 'FixList':
        """
        Load a fix list file.

        A missing file yields an empty fix list; a malformed line raises
        FixListFormatError.
        """
        path = Path(path)

        if not path.exists():
            logger.warning(f"Fix list not found, using empty list: {path}")
            return cls(path=path)

        with open(path, 'r', encoding='utf-8') as f:
            fix_list = cls.parse(f, path)

        logger.debug(f"Loaded {len(fix_list)} fix list entries from {path}")
        return fix_list

    load_file = load

    @classmethod
    def load_files(cls, paths: Iterable[PathLike]) -> 'FixList':
        """Load several fix list files and merge them."""
        fix_list = cls()
        for path in paths:
            fix_list = fix_list.merge(cls.load(path))
        return fix_list

    @classmethod
    def parse(cls, lines: Iterable[str], path: Optional[PathLike] = None) -> 'FixList':
        """Parse ``word=fix`` lines; fixes get the PREDEFINED kind."""
        pairs = []
        for line_number, line in enumerate(lines, 1):
            line = line.strip()
            if not line:
                continue

            index = line.find(DELIMITER)
            if index < 0:
                raise FixListFormatError(
                    f"{path or '<text>'}({line_number}): expected 'word=fix', got {line!r}",
                    path=str(path) if path else None,
                    line_number=line_number)

            key = line[:index].strip()
            value = line[index + 1:].strip()
            if not key or not value:
                raise FixListFormatError(
                    f"{path or '<text>'}({line_number}): empty word or fix in {line!r}",
                    path=str(path) if path else None,
                    line_number=line_number)

            pairs.append((key, [SpellingFix(value, SpellingFixKind.PREDEFINED)]))

        return cls._from_pairs(pairs, path)

    @classmethod
    def load_text(cls, text: str) -> 'FixList':
        return cls.parse(text.splitlines())

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def contains(self, key: str) -> bool:
        return DEFAULT_COMPARER.key(key) in self._items

    def __contains__(self, key) -> bool:
        return isinstance(key, str) and self.contains(key)

    def get_fixes(self, key: str) -> FrozenSet[SpellingFix]:
        """Fixes recorded for ``key``; empty when there are none."""
        entry = self._items.get(DEFAULT_COMPARER.key(key))
        return entry[1] if entry else frozenset()

    def try_get(self, key: str) -> Optional[FrozenSet[SpellingFix]]:
        entry = self._items.get(DEFAULT_COMPARER.key(key))
        return entry[1] if entry else None

    def keys(self) -> List[str]:
        return [key for key, _ in self._items.values()]

    def items(self) -> Iterator[Tuple[str, FrozenSet[SpellingFix]]]:
        return iter(self._items.values())

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __eq__(self, other) -> bool:
        if not isinstance(other, FixList):
            return NotImplemented
        return ({k: v for k, (_, v) in self._items.items()}
                == {k: v for k, (_, v) in other._items.items()})

    def __repr__(self):
        return f"FixList(count={len(self)}, path={self.path!s})"

    # -------------------------------------------------------------------------
    # Updates (copy-on-write)
    # -------------------------------------------------------------------------

    def add(self, key: str, fix: Union[SpellingFix, Iterable[SpellingFix]]) -> 'FixList':
        fixes = [fix] if isinstance(fix, SpellingFix) else list(fix)
        return FixList._from_pairs(list(self.items()) + [(key, fixes)], self.path)

    def merge(self, *others: 'FixList') -> 'FixList':
        """Union of fixes per key."""
        pairs = list(self.items())
        for other in others:
            pairs.extend(other.items())
        return FixList._from_pairs(pairs, self.path)

    def except_baseline(self, baseline: 'FixList') -> 'FixList':
        """
        Remove fixes already recorded in ``baseline``.

        Fix values are compared case-insensitively and the kind is ignored.
        Keys left without fixes are dropped.
        """
        key = DEFAULT_COMPARER.key
        pairs = []
        for word, fixes in self.items():
            retracted = {key(fix.value) for fix in baseline.get_fixes(word)}
            remaining = [fix for fix in fixes if key(fix.value) not in retracted]
            if remaining:
                pairs.append((word, remaining))
        return FixList._from_pairs(pairs, self.path)

    def normalized(self) -> 'FixList':
        """Lower-case keys and values; fixes that then collide collapse into one."""
        pairs = []
        for word, fixes in self.items():
            seen = {}
            for fix in sorted(fixes, key=lambda f: (f.kind, f.value)):
                seen.setdefault(fix.value.lower(), fix.with_value(fix.value.lower()))
            pairs.append((word.lower(), seen.values()))
        return FixList._from_pairs(pairs, self.path)

    # -------------------------------------------------------------------------
    # Saving
    # -------------------------------------------------------------------------

    def to_lines(self) -> List[str]:
        """``word=fix`` lines sorted by key, then by fix."""
        lines = []
        for word, fixes in sorted(self.items(), key=lambda item: item[0]):
            for value in sorted({fix.value for fix in fixes}):
                lines.append(f"{word}{DELIMITER}{value}")
        return lines

    def save(self, path: Optional[PathLike] = None):
        path = path or self.path
        if path is None:
            raise ValueError("Fix list has no backing file to save to")

        lines = self.to_lines()
        with open(path, 'w', encoding='utf-8', newline='\n') as f:
            if lines:
                f.write("\n".join(lines) + "\n")

        logger.debug(f"Saved {len(lines)} fix list lines to {path}")

    def save_and_load(self) -> 'FixList':
        self.save()
        return FixList.load(self.path)

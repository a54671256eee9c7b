"""
identspell Base Types
=====================
Tokens handed to the engine and the diagnostics it returns.

The engine never edits source text: a ``SpellingDiagnostic`` describes a
flagged word, where it is, and which fixes are known for it.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Dict, Tuple, Any, Optional, Union

from .fixlist import SpellingFix
from .text_utility import TextCasing, get_text_casing, replace_range

__version__ = "1.0.0"


@dataclass(frozen=True)
class TextSpan:
    """
    Location of a piece of text.

    ``start``/``length`` are character offsets in the file; ``line`` and
    ``column`` are the 0-based position of ``start``.
    """
    path: Optional[str] = None
    start: int = 0
    length: int = 0
    line: int = 0
    column: int = 0

    @property
    def end(self) -> int:
        return self.start + self.length

    def sub_span(self, text: str, index: int, length: int) -> 'TextSpan':
        """Span of ``text[index:index + length]`` where ``text`` starts at this span."""
        before = text[:index]
        newlines = before.count('\n')
        if newlines:
            column = index - (before.rfind('\n') + 1)
        else:
            column = self.column + index
        return TextSpan(self.path, self.start + index, length, self.line + newlines, column)


class TokenKind(Enum):
    """What kind of source text a token is."""
    IDENTIFIER = "identifier"
    LOCAL_IDENTIFIER = "local_identifier"
    TYPE_PARAMETER = "type_parameter"
    INTERFACE = "interface"
    COMMENT = "comment"
    DOCUMENTATION = "documentation"
    CODE_TEXT = "code_text"

    @property
    def is_identifier(self) -> bool:
        return self in _IDENTIFIER_KINDS


_IDENTIFIER_KINDS = frozenset({
    TokenKind.IDENTIFIER,
    TokenKind.LOCAL_IDENTIFIER,
    TokenKind.TYPE_PARAMETER,
    TokenKind.INTERFACE,
})


@dataclass(frozen=True)
class Token:
    """A candidate token supplied by the source walker."""
    text: str
    kind: TokenKind
    span: TextSpan = field(default_factory=TextSpan)


@dataclass(frozen=True)
class SpellingDiagnostic:
    """A flagged word inside a token."""
    value: str
    containing_value: str
    span: TextSpan
    index: int
    identifier: Optional[Token] = None
    fixes: Tuple[SpellingFix, ...] = ()

    @property
    def is_symbol(self) -> bool:
        return self.identifier is not None

    @property
    def is_contained(self) -> bool:
        return self.value != self.containing_value

    @property
    def value_lower(self) -> str:
        return self.value.lower()

    @property
    def casing(self) -> TextCasing:
        return get_text_casing(self.value)

    @property
    def end_index(self) -> int:
        return self.index + len(self.value)

    def apply_fix(self, fix: Union[str, SpellingFix]) -> str:
        """The containing value with the flagged word replaced by ``fix``."""
        fix = fix.value if isinstance(fix, SpellingFix) else fix
        return replace_range(self.containing_value, fix, self.index, len(self.value))

    def is_applicable_fix(self, fix: Union[str, SpellingFix]) -> bool:
        """
        Whether ``fix`` can be applied where the word occurs.

        Identifier fixes must leave a valid identifier; text fixes must stay
        on one line.
        """
        value = fix.value if isinstance(fix, SpellingFix) else fix
        if not value:
            return False
        if self.is_symbol:
            return self.apply_fix(value).isidentifier()
        return '\n' not in value and '\r' not in value

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format for reports."""
        return {
            'value': self.value,
            'containing_value': self.containing_value,
            'path': self.span.path,
            'start': self.span.start,
            'length': self.span.length,
            'line': self.span.line + 1,
            'column': self.span.column + 1,
            'index': self.index,
            'is_symbol': self.is_symbol,
            'fixes': [f.to_dict() for f in self.fixes],
        }


def diagnostic_sort_key(diagnostic: SpellingDiagnostic) -> Tuple[str, int]:
    """Order by file path (ignoring case), then by position."""
    return ((diagnostic.span.path or "").lower(), diagnostic.span.start)


@dataclass
class SpellingAnalysisResult:
    """Diagnostics collected for one unit of source text."""
    diagnostics: List[SpellingDiagnostic] = field(default_factory=list)
    processing_time_ms: float = 0.0
    token_count: int = 0

    def add(self, diagnostic: SpellingDiagnostic):
        self.diagnostics.append(diagnostic)

    def extend(self, diagnostics):
        self.diagnostics.extend(diagnostics)

    def sorted_diagnostics(self) -> List[SpellingDiagnostic]:
        return sorted(self.diagnostics, key=diagnostic_sort_key)

    @property
    def values(self) -> List[str]:
        """Distinct flagged words in order of first appearance."""
        return list(dict.fromkeys(d.value for d in self.diagnostics))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format."""
        return {
            'diagnostics': [d.to_dict() for d in self.sorted_diagnostics()],
            'processing_time_ms': self.processing_time_ms,
            'token_count': self.token_count,
            'diagnostic_count': len(self.diagnostics),
        }

"""
Spelling Analysis
=================
Engine entry points used by source walkers.

A walker hands over each candidate token (text, kind, span); the engine
segments it, filters placeholder words, looks the remaining words up in the
spelling data and returns one ``SpellingDiagnostic`` per unknown word.
Fix-list entries for a word are attached to its diagnostic as suggestions;
they never suppress it.

All functions are pure with respect to their inputs, so one ``SpellingData``
may be shared by any number of threads. Cancellation raises
``OperationCanceledError``; diagnostics of the interrupted token are lost.
"""

import re
import time
from dataclasses import dataclass
from pathlib import PurePath
from typing import List, Iterable, Optional

from .base import (
    SpellingAnalysisResult,
    SpellingDiagnostic,
    TextSpan,
    Token,
    TokenKind,
)
from .cancellation import CancellationToken, ensure_token
from .config_logging import get_logger
from .data import SpellingData
from .fix_provider import SynthesisOptions, get_fixes
from .fixlist import SpellingFix
from .nonsense import is_allowed_nonsensical_word
from .segmenter import (
    SplitItem,
    SplitMode,
    get_prefix_length,
    is_short_identifier,
    match_special_word,
    split_identifier,
    split_text,
)
from .text_utility import TextCasing, get_text_casing, set_text_casing

__version__ = "1.0.0"

logger = get_logger(__name__)

GENERATED_FILE_REGEX = re.compile(
    r"""
    (?:
        \.(?:g|g\.i|generated|designer)\.[^.]+
      | _pb2(?:_grpc)?\.py
    )\Z
    """,
    re.IGNORECASE | re.VERBOSE)

AUTO_GENERATED_REGEX = re.compile(r"\A\W*<auto-generated", re.IGNORECASE)


@dataclass(frozen=True)
class SpellingAnalysisOptions:
    """Options passed explicitly to every analysis call."""
    min_word_length: int = 3
    include_local: bool = True
    include_generated_code: bool = False
    include_comments: bool = True
    split_mode: SplitMode = SplitMode.CASE_AND_HYPHEN
    culture: str = "en-US"

    @classmethod
    def from_config(cls, config=None) -> 'SpellingAnalysisOptions':
        if config is None:
            from .config import get_config
            config = get_config()
        section = config.analysis
        return cls(
            min_word_length=section.min_word_length,
            include_local=section.include_local,
            include_generated_code=section.include_generated_code,
            include_comments=section.include_comments,
            split_mode=SplitMode(section.split_mode),
            culture=section.culture,
        )


DEFAULT_OPTIONS = SpellingAnalysisOptions()


def is_generated_code_path(path: Optional[str]) -> bool:
    """Files produced by code generators (``*.g.cs``, ``*_pb2.py``, ...)."""
    if not path:
        return False
    return GENERATED_FILE_REGEX.search(PurePath(path).name) is not None


def analyze_token(
    text: str,
    kind: TokenKind,
    span: Optional[TextSpan] = None,
    spelling_data: Optional[SpellingData] = None,
    options: SpellingAnalysisOptions = DEFAULT_OPTIONS,
    cancellation_token: Optional[CancellationToken] = None
) -> List[SpellingDiagnostic]:
    """Diagnostics for one token supplied by a source walker."""
    token = ensure_token(cancellation_token)
    token.throw_if_cancellation_requested()

    span = span or TextSpan(length=len(text))
    spelling_data = spelling_data or SpellingData.empty()

    if not options.include_generated_code and is_generated_code_path(span.path):
        return []

    if kind.is_identifier:
        if kind == TokenKind.LOCAL_IDENTIFIER and not options.include_local:
            return []
        return analyze_identifier(Token(text, kind, span), spelling_data, options, token)

    if not options.include_comments:
        return []

    if not options.include_generated_code and AUTO_GENERATED_REGEX.match(text):
        return []

    # Prose is only split on hyphens; code-like text also on case
    mode = options.split_mode if kind == TokenKind.CODE_TEXT else SplitMode.HYPHEN

    return analyze_text(text, span, spelling_data, options, mode, token)


def analyze_identifier(
    identifier: Token,
    spelling_data: SpellingData,
    options: SpellingAnalysisOptions = DEFAULT_OPTIONS,
    cancellation_token: Optional[CancellationToken] = None
) -> List[SpellingDiagnostic]:
    """Diagnostics for the words of an identifier."""
    token = ensure_token(cancellation_token)
    value = identifier.text

    if is_short_identifier(value) or len(value) < options.min_word_length:
        return []

    prefix_length = get_prefix_length(value, identifier.kind)

    if prefix_length > 0 and spelling_data.is_known(value):
        return []

    rest = value[prefix_length:]

    special = match_special_word(rest)
    if special is not None:
        index, word = special
        items = [SplitItem(word, index, 1)]
    else:
        items = split_identifier(rest)

        if len(items) > 1 and spelling_data.is_known(rest):
            return []

    diagnostics = []
    for item in items:
        token.throw_if_cancellation_requested()
        index = prefix_length + item.index
        diagnostic = _analyze_value(
            item.value,
            value,
            identifier.span.sub_span(value, index, item.length),
            index,
            identifier,
            spelling_data,
            options)
        if diagnostic is not None:
            diagnostics.append(diagnostic)

    return diagnostics


def analyze_text(
    text: str,
    span: TextSpan,
    spelling_data: SpellingData,
    options: SpellingAnalysisOptions = DEFAULT_OPTIONS,
    split_mode: SplitMode = SplitMode.HYPHEN,
    cancellation_token: Optional[CancellationToken] = None
) -> List[SpellingDiagnostic]:
    """Diagnostics for the words of comment or documentation text."""
    token = ensure_token(cancellation_token)

    diagnostics = []
    for item in split_text(text, split_mode, options.min_word_length):
        token.throw_if_cancellation_requested()
        diagnostic = _analyze_value(
            item.value,
            text,
            span.sub_span(text, item.index, item.length),
            item.index,
            None,
            spelling_data,
            options)
        if diagnostic is not None:
            diagnostics.append(diagnostic)

    return diagnostics


def _analyze_value(
    value: str,
    containing_value: str,
    span: TextSpan,
    index: int,
    identifier: Optional[Token],
    spelling_data: SpellingData,
    options: SpellingAnalysisOptions
) -> Optional[SpellingDiagnostic]:
    if len(value) < options.min_word_length:
        return None

    if is_allowed_nonsensical_word(value):
        return None

    if spelling_data.ignore_list.contains(value):
        return None

    if spelling_data.word_list.contains(value):
        return None

    return SpellingDiagnostic(
        value=value,
        containing_value=containing_value,
        span=span,
        index=index,
        identifier=identifier,
        fixes=_known_fixes(value, spelling_data),
    )


def _known_fixes(value: str, spelling_data: SpellingData) -> tuple:
    fixes = spelling_data.fix_list.get_fixes(value)
    if not fixes:
        return ()

    casing = get_text_casing(value)
    if casing != TextCasing.MIXED:
        fixes = {fix.with_value(set_text_casing(fix.value, casing)) for fix in fixes}

    return tuple(sorted(fixes, key=lambda f: (f.kind, f.value)))


class SpellingAnalyzer:
    """
    Analyzes batches of tokens against one SpellingData.

    Convenience wrapper around ``analyze_token`` that also times the run
    and ranks suggestions for the diagnostics it produces.
    """

    def __init__(
        self,
        spelling_data: SpellingData,
        options: Optional[SpellingAnalysisOptions] = None,
        synthesis_options: Optional[SynthesisOptions] = None
    ):
        self.spelling_data = spelling_data
        self.options = options or DEFAULT_OPTIONS
        self.synthesis_options = synthesis_options or SynthesisOptions()

    def analyze(
        self,
        tokens: Iterable[Token],
        cancellation_token: Optional[CancellationToken] = None
    ) -> SpellingAnalysisResult:
        start_time = time.time()
        result = SpellingAnalysisResult()

        for token in tokens:
            result.extend(analyze_token(
                token.text,
                token.kind,
                token.span,
                self.spelling_data,
                self.options,
                cancellation_token))
            result.token_count += 1

        result.processing_time_ms = (time.time() - start_time) * 1000
        logger.debug(
            f"Analyzed {result.token_count} tokens, "
            f"{len(result.diagnostics)} diagnostics in {result.processing_time_ms:.1f} ms"
        )
        return result

    def suggest(
        self,
        diagnostic: SpellingDiagnostic,
        cancellation_token: Optional[CancellationToken] = None
    ) -> List[SpellingFix]:
        """Ranked corrections for a diagnostic."""
        return get_fixes(diagnostic, self.spelling_data, self.synthesis_options, cancellation_token)

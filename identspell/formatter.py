"""
Renders diagnostics as ``<path>(<line>,<col>): Fix spelling of '<value>'``
with 1-based line and column.
"""

from pathlib import Path
from typing import Iterable, Iterator, Optional, Union

from .base import SpellingDiagnostic, diagnostic_sort_key

MESSAGE_FORMAT = "Fix spelling of '{value}'"


def format_message(diagnostic: SpellingDiagnostic) -> str:
    return MESSAGE_FORMAT.format(value=diagnostic.value)


def format_path(path: Optional[str], base_directory: Optional[Union[str, Path]] = None) -> str:
    """``path`` relative to ``base_directory`` when it lies below it."""
    if not path:
        return ""
    if base_directory:
        resolved = Path(path).resolve()
        base = Path(base_directory).resolve()
        if resolved.is_relative_to(base):
            return str(resolved.relative_to(base))
    return path


def format_spelling_error(
    diagnostic: SpellingDiagnostic,
    base_directory: Optional[Union[str, Path]] = None
) -> str:
    span = diagnostic.span
    return (f"{format_path(span.path, base_directory)}"
            f"({span.line + 1},{span.column + 1}): {format_message(diagnostic)}")


def format_diagnostics(
    diagnostics: Iterable[SpellingDiagnostic],
    base_directory: Optional[Union[str, Path]] = None
) -> Iterator[str]:
    """One formatted line per diagnostic, ordered by path and position."""
    for diagnostic in sorted(diagnostics, key=diagnostic_sort_key):
        yield format_spelling_error(diagnostic, base_directory)
